from __future__ import annotations
from typing import List, Optional, Sequence

from .models import FolderRecord, ScanReport
from .utils import clamp, format_bytes

TITLE = "Folder Size Report (sorted by size within folders):"
MAX_PATH_COLUMN = 120
INDENT = 2

def indented_path(rec: FolderRecord) -> str:
    return " " * (rec.depth * INDENT) + rec.path

def path_column_width(root: str, records: Sequence[FolderRecord]) -> int:
    longest = max([len(root)] + [len(indented_path(r)) for r in records])
    return clamp(longest, 0, MAX_PATH_COLUMN)

def _row(depth, path: str, size: int, width: int) -> str:
    return f"{depth:<7}| {path:<{width}}| {format_bytes(size):>10}"

def render_table(root: str, root_size: int, records: Sequence[FolderRecord]) -> str:
    """Depth | Folder Path | Size table, root row first."""
    width = path_column_width(root, records)
    lines = [
        f"{'Depth':<7}| {'Folder Path':<{width}}| {'Size':>10}",
        "-" * (10 + width + 13),
        _row(0, root, root_size, width),
    ]
    for rec in records:
        lines.append(_row(rec.depth, indented_path(rec), rec.size, width))
    return "\n".join(lines)

def render_report(report: ScanReport, limit: Optional[int] = None) -> str:
    lines: List[str] = ["", TITLE, ""]
    lines.append(render_table(report.root, report.root_size, report.visible(limit)))
    return "\n".join(lines)

def usage_footer(usage: Optional[dict], root_size: int) -> Optional[str]:
    if not usage or not usage.get("total"):
        return None
    share = root_size * 100.0 / usage["total"]
    return (f"Filesystem {usage['mountpoint']}: {format_bytes(usage['used'])} used of "
            f"{format_bytes(usage['total'])} ({usage['percent']:.0f}%), "
            f"scanned folder is {share:.1f}% of the disk")

def render_drives(drives: Sequence[dict]) -> str:
    width = max([len("Mountpoint")] + [len(d["mountpoint"]) for d in drives])
    lines = [f"{'Mountpoint':<{width}}  {'Total':>10}  {'Used':>10}  {'Free':>10}  {'Use%':>5}"]
    for d in drives:
        lines.append(f"{d['mountpoint']:<{width}}  {format_bytes(d['total']):>10}  "
                     f"{format_bytes(d['used']):>10}  {format_bytes(d['free']):>10}  "
                     f"{d['percent']:>4.0f}%")
    return "\n".join(lines)
