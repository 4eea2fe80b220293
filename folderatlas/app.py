from __future__ import annotations

import os
import sys
from typing import Optional, List

from PySide6.QtCore import Qt, QThread, Signal
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QPushButton,
    QLabel, QFileDialog, QLineEdit, QProgressBar, QMessageBox, QTabWidget,
    QTableWidget, QTableWidgetItem, QHeaderView, QAbstractItemView, QSpinBox,
    QComboBox, QMenu
)

from .models import DepthPolicy, FolderRecord, ScanReport, MODE_STRUCTURAL, MODE_DISPLAY
from .scanner import scan_report, validate_root, InvalidRootError
from .report import indented_path
from .utils import format_bytes, reveal_in_file_manager
from .drives import list_drives, disk_usage_for

APP_NAME = "FolderAtlas"

# -------------------- Style --------------------
DARK_QSS = r"""
* { font-family: "Segoe UI"; font-size: 12px; }

QMainWindow {
    background: qlineargradient(x1:0, y1:0, x2:1, y2:1,
        stop:0 #0b0e14, stop:0.6 #0f1220, stop:1 #0b1020);
}

QWidget { color: #dbe6ff; }

QLineEdit, QTableWidget, QSpinBox, QComboBox {
    background: #121826;
    border: 1px solid #25314a;
    border-radius: 10px;
    padding: 6px 8px;
    selection-background-color: rgba(47, 107, 255, 0.40);
    selection-color: #ffffff;
}

QPushButton {
    background: #16203a;
    border: 1px solid #2a3a5a;
    border-radius: 12px;
    padding: 8px 12px;
    color: #e7efff;
}
QPushButton:hover { background: #1a2a4c; border-color: #3a5aa8; }
QPushButton:disabled { background: #141a28; color: #6a7894; border-color: #1d2433; }

QProgressBar {
    background: #0e1320;
    border: 1px solid #26334d;
    border-radius: 10px;
    text-align: center;
    height: 18px;
}
QProgressBar::chunk {
    background: qlineargradient(x1:0,y1:0,x2:1,y2:0, stop:0 #2f6bff, stop:1 #38d1c5);
    border-radius: 10px;
}

QTabWidget::pane { border: 1px solid #26334d; border-radius: 16px; }
QTabBar::tab {
    background: #101624;
    border: 1px solid #26334d;
    border-bottom: none;
    padding: 8px 14px;
    border-top-left-radius: 12px;
    border-top-right-radius: 12px;
    margin-right: 4px;
    color: #bcd0ff;
}
QTabBar::tab:selected { background: #121a2d; color: #ffffff; border-color: #3a5aa8; }

QHeaderView::section {
    background: #0e1320;
    color: #9fb6ea;
    padding: 7px 8px;
    border: none;
    border-right: 1px solid #1e2a40;
}
"""


# -------------------- Worker thread --------------------
class ScanThread(QThread):
    done = Signal(object)  # ScanReport
    error = Signal(str)

    def __init__(self, path: str, policy: DepthPolicy, follow_symlinks: bool = False):
        super().__init__()
        self.path = path
        self.policy = policy
        self.follow_symlinks = follow_symlinks

    def run(self):
        try:
            res = scan_report(self.path, self.policy, follow_symlinks=self.follow_symlinks)
            self.done.emit(res)
        except Exception as e:
            self.error.emit(str(e))


# -------------------- Main window --------------------
class MainWindow(QMainWindow):
    def __init__(self, initial_path: Optional[str] = None):
        super().__init__()
        self.setWindowTitle(f"{APP_NAME} — размеры папок")
        self.resize(1100, 760)

        self.scan_thread: Optional[ScanThread] = None
        self.current: Optional[ScanReport] = None

        central = QWidget()
        self.setCentralWidget(central)
        root = QVBoxLayout(central)
        root.setContentsMargins(12, 12, 12, 12)
        root.setSpacing(10)

        # ---------- Top controls
        title = QLabel(APP_NAME)
        tf = QFont(); tf.setPointSize(16); tf.setBold(True)
        title.setFont(tf)
        root.addWidget(title)

        src_row = QHBoxLayout()
        self.path_edit = QLineEdit(initial_path or "")
        self.path_edit.setPlaceholderText("Папка для анализа…")
        btn_folder = QPushButton("📁 Папка…")
        self.btn_scan = QPushButton("▶ Анализ")
        src_row.addWidget(self.path_edit, 1)
        src_row.addWidget(btn_folder)
        src_row.addWidget(self.btn_scan)
        root.addLayout(src_row)

        opt_row = QHBoxLayout()
        opt_row.addWidget(QLabel("Глубина:"))
        self.depth_spin = QSpinBox()
        self.depth_spin.setRange(-1, 64)
        self.depth_spin.setValue(-1)
        self.depth_spin.setSpecialValueText("без ограничения")
        opt_row.addWidget(self.depth_spin)
        opt_row.addSpacing(12)
        opt_row.addWidget(QLabel("Режим:"))
        self.mode_combo = QComboBox()
        self.mode_combo.addItem("обход до глубины", MODE_STRUCTURAL)
        self.mode_combo.addItem("полный обход, показ до глубины", MODE_DISPLAY)
        opt_row.addWidget(self.mode_combo)
        opt_row.addStretch(1)
        root.addLayout(opt_row)

        prog_row = QHBoxLayout()
        self.progress = QProgressBar()
        self.progress.setRange(0, 1)
        self.progress.setValue(0)
        self.summary = QLabel("Готово.")
        self.summary.setStyleSheet("QLabel{color:#b7c3dd;}")
        prog_row.addWidget(self.progress, 1)
        prog_row.addWidget(self.summary)
        root.addLayout(prog_row)

        # ---------- Tabs
        self.tabs = QTabWidget()
        root.addWidget(self.tabs, 1)

        self.table = QTableWidget(0, 3)
        self.table.setHorizontalHeaderLabels(["Глубина", "Папка", "Размер"])
        self._init_table(self.table)
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeToContents)
        self.table.horizontalHeader().setSectionResizeMode(1, QHeaderView.Stretch)
        self.table.horizontalHeader().setSectionResizeMode(2, QHeaderView.ResizeToContents)
        self.table.setContextMenuPolicy(Qt.CustomContextMenu)
        self.table.customContextMenuRequested.connect(self._table_menu)
        self.tabs.addTab(self.table, "Отчёт")

        self.drive_table = QTableWidget(0, 5)
        self.drive_table.setHorizontalHeaderLabels(["Диск", "Всего", "Занято", "Свободно", "%"])
        self._init_table(self.drive_table, no_select=True)
        self.drive_table.horizontalHeader().setSectionResizeMode(0, QHeaderView.Stretch)
        self.tabs.addTab(self.drive_table, "Диски")

        btn_folder.clicked.connect(self.pick_folder)
        self.btn_scan.clicked.connect(self.start_scan)
        self.depth_spin.valueChanged.connect(self.on_depth_changed)

        self.refresh_drive_table()
        self.statusBar().showMessage("Выбери папку и нажми «Анализ».")

    def _init_table(self, t: QTableWidget, no_select: bool = False):
        t.verticalHeader().setVisible(False)
        t.setShowGrid(False)
        t.setAlternatingRowColors(True)
        t.setEditTriggers(QAbstractItemView.NoEditTriggers)
        t.setSelectionBehavior(QAbstractItemView.SelectRows)
        t.setVerticalScrollMode(QAbstractItemView.ScrollPerPixel)
        if no_select:
            t.setSelectionMode(QAbstractItemView.NoSelection)
        else:
            t.setSelectionMode(QAbstractItemView.SingleSelection)

    def _policy(self) -> DepthPolicy:
        return DepthPolicy(limit=self.depth_spin.value(), mode=self.mode_combo.currentData())

    # ---------- Source selection
    def pick_folder(self):
        path = QFileDialog.getExistingDirectory(self, "Выбор папки", self.path_edit.text() or os.path.expanduser("~"))
        if path:
            self.path_edit.setText(path)

    # ---------- Scan
    def start_scan(self):
        if self.scan_thread and self.scan_thread.isRunning():
            return
        path = self.path_edit.text().strip()
        try:
            validate_root(path)
        except InvalidRootError as e:
            QMessageBox.warning(self, "Папка", str(e))
            return

        self.table.setRowCount(0)
        self.current = None
        self.progress.setRange(0, 0)  # без процентов: только индикатор занятости
        self.summary.setText("Сканирование…")
        self.btn_scan.setEnabled(False)

        self.scan_thread = ScanThread(path, self._policy())
        self.scan_thread.done.connect(self.on_scan_done)
        self.scan_thread.error.connect(self.on_scan_error)
        self.scan_thread.start()
        self.statusBar().showMessage("Сканирование запущено…")

    def on_scan_done(self, report: ScanReport):
        self.btn_scan.setEnabled(True)
        self.progress.setRange(0, 1)
        self.progress.setValue(1)
        self.current = report

        self.summary.setText(f"Готово. Размер: {format_bytes(report.root_size)}")
        msg = f"Папок: {len(report.records)} | Время: {report.elapsed_sec:.1f} сек"
        if report.stats.skipped:
            msg += f" | Пропущено (нет доступа/ошибки): {report.stats.skipped}"
        usage = disk_usage_for(report.root)
        if usage and usage["total"]:
            msg += f" | Доля диска: {report.root_size * 100.0 / usage['total']:.1f}%"
        self.statusBar().showMessage(msg)
        self.populate_table(report, report.visible())

    def on_scan_error(self, msg: str):
        self.btn_scan.setEnabled(True)
        self.progress.setRange(0, 1)
        self.progress.setValue(0)
        QMessageBox.critical(self, "Ошибка сканирования", msg)
        self.statusBar().showMessage("Ошибка.")

    def on_depth_changed(self, value: int):
        rep = self.current
        if rep is None:
            return
        if rep.can_drill(value):
            # в режиме полного обхода пересканировать не нужно
            self.populate_table(rep, rep.visible(value))
            self.statusBar().showMessage(f"Показано папок: {len(rep.visible(value))}")
        else:
            self.statusBar().showMessage("Для большей глубины нужно повторное сканирование.")

    def populate_table(self, report: ScanReport, records: List[FolderRecord]):
        self.table.setUpdatesEnabled(False)
        self.table.setRowCount(0)
        rows = [FolderRecord(0, report.root, report.root_size)] + list(records)
        self.table.setRowCount(len(rows))
        for r, rec in enumerate(rows):
            d_item = QTableWidgetItem(str(rec.depth))
            p_item = QTableWidgetItem(indented_path(rec))
            p_item.setData(Qt.UserRole, rec.path)
            p_item.setToolTip(rec.path)
            s_item = QTableWidgetItem(format_bytes(rec.size))
            s_item.setTextAlignment(Qt.AlignRight | Qt.AlignVCenter)
            self.table.setItem(r, 0, d_item)
            self.table.setItem(r, 1, p_item)
            self.table.setItem(r, 2, s_item)
        self.table.setUpdatesEnabled(True)

    def _table_menu(self, pos):
        item = self.table.itemAt(pos)
        if not item:
            return
        pitem = self.table.item(item.row(), 1)
        path = pitem.data(Qt.UserRole) if pitem else None
        if not path:
            return
        m = QMenu(self.table)
        a_open = m.addAction("Открыть в файловом менеджере")
        a_copy = m.addAction("Копировать путь")
        act = m.exec(self.table.viewport().mapToGlobal(pos))
        if act == a_open:
            if not reveal_in_file_manager(path):
                QMessageBox.warning(self, "Открыть", "Не удалось открыть путь в файловом менеджере.")
        elif act == a_copy:
            QApplication.clipboard().setText(path)
            self.statusBar().showMessage("Скопировано в буфер обмена")

    # ---------- Drives
    def refresh_drive_table(self):
        drives = list_drives()
        self.drive_table.setRowCount(0)
        for d in drives:
            r = self.drive_table.rowCount()
            self.drive_table.insertRow(r)
            self.drive_table.setItem(r, 0, QTableWidgetItem(d["mountpoint"]))
            self.drive_table.setItem(r, 1, QTableWidgetItem(format_bytes(d["total"])))
            self.drive_table.setItem(r, 2, QTableWidgetItem(format_bytes(d["used"])))
            self.drive_table.setItem(r, 3, QTableWidgetItem(format_bytes(d["free"])))

            bar = QProgressBar()
            bar.setRange(0, 100)
            bar.setValue(int(d["percent"]))
            bar.setFormat(f'{d["percent"]:.0f}%')
            bar.setFixedHeight(16)
            self.drive_table.setCellWidget(r, 4, bar)


def run(initial_path: Optional[str] = None) -> int:
    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setStyleSheet(DARK_QSS)
    w = MainWindow(initial_path)
    w.show()
    return app.exec()
