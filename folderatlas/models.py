from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Set

UNLIMITED = -1

MODE_STRUCTURAL = "structural"  # recursion stops at the limit
MODE_DISPLAY = "display"        # full walk, limit applied when presenting
MODES = (MODE_STRUCTURAL, MODE_DISPLAY)

@dataclass(frozen=True)
class FolderRecord:
    depth: int
    path: str
    size: int

@dataclass(frozen=True)
class DepthPolicy:
    """How far a scan descends (structural) or how much of it is shown (display).

    A limit of -1 or below is unlimited. A limit of 0 still lists the root's
    own children but never goes below them.
    """
    limit: int = UNLIMITED
    mode: str = MODE_STRUCTURAL

    def __post_init__(self):
        if self.mode not in MODES:
            raise ValueError(f"unknown depth mode: {self.mode!r}")

    @property
    def unlimited(self) -> bool:
        return self.limit <= UNLIMITED

    def descends_past(self, depth: int) -> bool:
        if self.mode == MODE_DISPLAY:
            return True
        return self.unlimited or depth < self.limit

    def shows(self, depth: int, limit: Optional[int] = None) -> bool:
        lim = self.limit if limit is None else limit
        if lim <= UNLIMITED:
            return True
        return depth <= max(lim, 1)

    def with_limit(self, limit: int) -> "DepthPolicy":
        return DepthPolicy(limit=limit, mode=self.mode)

@dataclass
class ScanStats:
    entries: int = 0      # directory entries inspected
    dirs_listed: int = 0  # successful directory listings
    permission_denied: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    _seen: Set[str] = field(default_factory=set, repr=False, compare=False)

    def note_skip(self, path: str, exc: OSError):
        # один и тот же каталог встречается при подсчёте каждого предка
        if path in self._seen:
            return
        self._seen.add(path)
        if isinstance(exc, PermissionError):
            self.permission_denied.append(path)
        else:
            self.errors.append(path)

    @property
    def skipped(self) -> int:
        return len(self.permission_denied) + len(self.errors)

@dataclass
class ScanReport:
    root: str
    root_size: int
    records: List[FolderRecord]
    policy: DepthPolicy
    stats: ScanStats
    elapsed_sec: float = 0.0

    def visible(self, limit: Optional[int] = None) -> List[FolderRecord]:
        # Только фильтрация: файловую систему здесь не трогаем.
        return [r for r in self.records if self.policy.shows(r.depth, limit)]

    def can_drill(self, limit: int) -> bool:
        """True when `limit` can be served from these records without a rescan."""
        if self.policy.mode == MODE_DISPLAY or self.policy.unlimited:
            return True
        if limit <= UNLIMITED:
            return False
        return max(limit, 1) <= max(self.policy.limit, 1)
