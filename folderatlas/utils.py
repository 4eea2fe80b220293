from __future__ import annotations
import os
import subprocess
import sys
from typing import Tuple

from .models import UNLIMITED

# (порог, единица): делим на 1024, пока значение не меньше порога и есть следующая единица
SIZE_UNITS: Tuple[Tuple[int, str], ...] = (
    (1024, "B"),
    (1024, "KB"),
    (1024, "MB"),
    (1024, "GB"),
    (1024, "TB"),
)

def format_bytes(num: int) -> str:
    if num < 0:
        return str(num)
    x = float(num)
    last = len(SIZE_UNITS) - 1
    for i, (threshold, unit) in enumerate(SIZE_UNITS):
        if x < threshold or i == last:
            return f"{x:.2f} {unit}"
        x /= threshold
    return f"{x:.2f} {SIZE_UNITS[last][1]}"

def parse_depth(text: str) -> int:
    """Parse a depth answer; anything at or below -1 means unlimited."""
    value = int(str(text).strip())
    return UNLIMITED if value <= UNLIMITED else value

def clamp(v, lo, hi):
    return lo if v < lo else hi if v > hi else v

def reveal_in_file_manager(path: str) -> bool:
    """Open the folder in the system file manager. Returns True if a launch was attempted."""
    if not path:
        return False
    ap = os.path.abspath(path)
    try:
        if sys.platform.startswith("win"):
            os.startfile(ap)
        elif sys.platform == "darwin":
            subprocess.Popen(["open", ap])
        else:
            subprocess.Popen(["xdg-open", ap])
    except OSError:
        return False
    return True
