from __future__ import annotations
import logging
import os
import stat as statmod
import time
from typing import Iterator, List, Optional

from .models import DepthPolicy, FolderRecord, ScanReport, ScanStats

logger = logging.getLogger(__name__)


class InvalidRootError(ValueError):
    """The scan root is missing or is not a directory."""


def _skip(stats: Optional[ScanStats], path: str, exc: OSError):
    if isinstance(exc, PermissionError):
        logger.debug("permission denied, skipping %s", path)
    else:
        logger.debug("skipping %s: %s", path, exc)
    if stats is not None:
        stats.note_skip(path, exc)


def _list_entries(path: str, stats: Optional[ScanStats]) -> List[os.DirEntry]:
    # Ошибка чтения каталога = пустой каталог, наверх не пробрасываем.
    try:
        with os.scandir(path) as it:
            entries = list(it)
    except OSError as e:
        _skip(stats, path, e)
        return []
    if stats is not None:
        stats.dirs_listed += 1
        stats.entries += len(entries)
    return entries


def aggregate_size(path: str,
                   stats: Optional[ScanStats] = None,
                   follow_symlinks: bool = False) -> int:
    """Total bytes of the regular files under `path` (or of `path` itself if it is a file).

    Unreadable entries count as zero and never abort the walk. The starting
    path is always followed, even when it is a symlink.
    """
    try:
        st = os.stat(path)
    except OSError as e:
        _skip(stats, path, e)
        return 0
    if statmod.S_ISREG(st.st_mode):
        return int(st.st_size)
    if not statmod.S_ISDIR(st.st_mode):
        return 0

    total = 0
    pending = [path]
    while pending:
        for entry in _list_entries(pending.pop(), stats):
            try:
                if not follow_symlinks and entry.is_symlink():
                    continue
                st = entry.stat(follow_symlinks=follow_symlinks)
            except OSError as e:
                _skip(stats, entry.path, e)
                continue

            mode = st.st_mode
            if statmod.S_ISDIR(mode):
                pending.append(entry.path)
            elif statmod.S_ISREG(mode):
                total += int(st.st_size)
    return total


def child_directories(path: str,
                      stats: Optional[ScanStats] = None,
                      follow_symlinks: bool = False) -> List[str]:
    """Immediate subdirectories of `path`, in entry-name order."""
    out: List[str] = []
    for entry in sorted(_list_entries(path, stats), key=lambda e: e.name):
        try:
            if entry.is_dir(follow_symlinks=follow_symlinks):
                out.append(entry.path)
        except OSError as e:
            _skip(stats, entry.path, e)
    return out


def _sorted_children(path: str, depth: int,
                     stats: Optional[ScanStats],
                     follow_symlinks: bool) -> List[FolderRecord]:
    children = [
        FolderRecord(depth=depth, path=p, size=aggregate_size(p, stats, follow_symlinks))
        for p in child_directories(path, stats, follow_symlinks)
    ]
    # list.sort стабильна и с reverse=True: равные размеры остаются в порядке имён
    children.sort(key=lambda r: r.size, reverse=True)
    return children


def collect_sorted_folders(path: str,
                           depth: int,
                           policy: DepthPolicy,
                           out: List[FolderRecord],
                           stats: Optional[ScanStats] = None,
                           follow_symlinks: bool = False) -> None:
    """Append the folders below `path` to `out` in pre-order, largest sibling first.

    `depth` is the depth given to the children of `path` (1 for the scan root).
    Every emitted size is a full subtree sum; `policy` only decides whether the
    walk goes below a folder. Uses an explicit stack instead of recursion.
    """
    stack: List[Iterator[FolderRecord]] = [
        iter(_sorted_children(path, depth, stats, follow_symlinks))
    ]
    while stack:
        rec = next(stack[-1], None)
        if rec is None:
            stack.pop()
            continue
        out.append(rec)
        if policy.descends_past(rec.depth):
            stack.append(iter(_sorted_children(rec.path, rec.depth + 1, stats, follow_symlinks)))


def collect(path: str,
            policy: Optional[DepthPolicy] = None,
            stats: Optional[ScanStats] = None,
            follow_symlinks: bool = False) -> List[FolderRecord]:
    out: List[FolderRecord] = []
    collect_sorted_folders(path, 1, policy or DepthPolicy(), out, stats, follow_symlinks)
    return out


def validate_root(path: str) -> str:
    if not path or not os.path.isdir(path):
        raise InvalidRootError(f"Invalid directory: {path}")
    return path


def scan_report(path: str,
                policy: Optional[DepthPolicy] = None,
                follow_symlinks: bool = False) -> ScanReport:
    policy = policy or DepthPolicy()
    root = validate_root(path)

    t0 = time.time()
    stats = ScanStats()
    root_size = aggregate_size(root, stats, follow_symlinks)
    records = collect(root, policy, stats, follow_symlinks)
    elapsed = time.time() - t0

    logger.info("scanned %s: %d folders, %d skipped entries, %.1f sec",
                root, len(records), stats.skipped, elapsed)
    return ScanReport(
        root=root,
        root_size=root_size,
        records=records,
        policy=policy,
        stats=stats,
        elapsed_sec=elapsed,
    )
