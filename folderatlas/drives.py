from __future__ import annotations
import logging
import os
from typing import Dict, List, Optional

import psutil

logger = logging.getLogger(__name__)

def _usage(mountpoint: str, fstype: str = "") -> Optional[Dict]:
    try:
        u = psutil.disk_usage(mountpoint)
    except OSError as e:
        logger.debug("disk_usage failed for %s: %s", mountpoint, e)
        return None
    return {
        "mountpoint": mountpoint,
        "fstype": fstype,
        "total": int(u.total),
        "used": int(u.used),
        "free": int(u.free),
        "percent": float(u.percent),
    }

def list_drives() -> List[Dict]:
    drives = []
    seen = set()
    for p in psutil.disk_partitions(all=False):
        if not p.mountpoint:
            continue
        mp = os.path.abspath(p.mountpoint)
        if mp in seen:
            continue
        seen.add(mp)
        d = _usage(mp, p.fstype)
        if d is not None:
            drives.append(d)
    drives.sort(key=lambda d: d["mountpoint"].lower())
    return drives

def _mountpoint_of(path: str) -> str:
    # самая длинная точка монтирования, которая является префиксом пути
    ap = os.path.abspath(path)
    best = ""
    for p in psutil.disk_partitions(all=True):
        mp = os.path.abspath(p.mountpoint) if p.mountpoint else ""
        if not mp:
            continue
        inside = ap == mp or ap.startswith(mp.rstrip("\\/") + os.sep)
        if inside and len(mp) > len(best):
            best = mp
    return best or ap

def disk_usage_for(path: str) -> Optional[Dict]:
    """Usage of the filesystem holding `path`, or None if psutil cannot tell."""
    if not path:
        return None
    try:
        mp = _mountpoint_of(path)
    except OSError as e:
        logger.debug("cannot list partitions: %s", e)
        mp = os.path.abspath(path)
    return _usage(mp)
