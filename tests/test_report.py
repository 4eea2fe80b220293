from __future__ import annotations

from folderatlas.models import DepthPolicy, FolderRecord, MODE_DISPLAY, ScanReport, ScanStats
from folderatlas.report import (
    MAX_PATH_COLUMN,
    TITLE,
    render_drives,
    render_report,
    render_table,
    usage_footer,
)


def test_render_table_layout():
    out = render_table("r", 3500, [FolderRecord(1, "r/b", 2560)]).splitlines()
    assert out[0] == "Depth  | Folder Path| " + "      Size"
    assert out[1] == "-" * 28
    assert out[2] == "0      | r    |    3.42 KB"
    assert out[3] == "1      |   r/b|    2.50 KB"


def test_render_table_indents_by_depth():
    records = [FolderRecord(1, "root/b", 10), FolderRecord(2, "root/b/c", 5)]
    rows = render_table("root", 15, records).splitlines()[3:]
    assert rows[0].split("| ")[1].startswith("  root/b")
    assert rows[1].split("| ")[1].startswith("    root/b/c")


def test_path_column_is_capped():
    long_path = "p" * 300
    lines = render_table("r", 0, [FolderRecord(1, long_path, 1)]).splitlines()
    assert len(lines[1]) == 10 + MAX_PATH_COLUMN + 13


def test_render_report_respects_display_limit():
    rep = ScanReport(
        root="r",
        root_size=3500,
        records=[FolderRecord(1, "r/b", 2500), FolderRecord(2, "r/b/c", 500), FolderRecord(1, "r/a", 1000)],
        policy=DepthPolicy(limit=1, mode=MODE_DISPLAY),
        stats=ScanStats(),
    )
    text = render_report(rep)
    assert TITLE in text
    assert "r/b/c" not in text
    assert "r/b/c" in render_report(rep, limit=-1)


def test_usage_footer():
    usage = {"mountpoint": "/", "total": 4096, "used": 2048, "free": 2048, "percent": 50.0}
    line = usage_footer(usage, 1024)
    assert line.startswith("Filesystem /: 2.00 KB used of 4.00 KB (50%)")
    assert line.endswith("25.0% of the disk")
    assert usage_footer(None, 10) is None


def test_render_drives():
    drives = [{"mountpoint": "/data", "fstype": "ext4", "total": 2048, "used": 1024,
               "free": 1024, "percent": 50.0}]
    lines = render_drives(drives).splitlines()
    assert lines[0].startswith("Mountpoint")
    assert lines[1].startswith("/data")
    assert lines[1].endswith("50%")
