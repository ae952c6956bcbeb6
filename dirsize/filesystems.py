from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional
import psutil


@dataclass
class FilesystemInfo:
    mountpoint: str
    fstype: str
    total: int
    used: int
    free: int
    percent: float


def _mountpoints() -> list:
    parts = []
    seen = set()
    for p in psutil.disk_partitions(all=True):
        mp = p.mountpoint
        if not mp:
            continue
        mp_norm = os.path.abspath(mp)
        if mp_norm in seen:
            continue
        seen.add(mp_norm)
        parts.append(p)
    return parts


def _is_under(path: str, mountpoint: str) -> bool:
    if mountpoint == os.sep:
        return True
    return path == mountpoint or path.startswith(mountpoint.rstrip(os.sep) + os.sep)


def filesystem_for_path(path: str) -> Optional[FilesystemInfo]:
    """Capacity of the filesystem holding ``path`` (the longest matching mount)."""
    ap = os.path.realpath(path)
    best = None
    for p in _mountpoints():
        mp = os.path.abspath(p.mountpoint)
        if _is_under(ap, mp) and (best is None or len(mp) > len(os.path.abspath(best.mountpoint))):
            best = p
    if best is None:
        return None
    try:
        u = psutil.disk_usage(ap if os.path.exists(ap) else best.mountpoint)
    except OSError:
        return None
    return FilesystemInfo(
        mountpoint=os.path.abspath(best.mountpoint),
        fstype=best.fstype,
        total=int(u.total),
        used=int(u.used),
        free=int(u.free),
        percent=float(u.percent),
    )
