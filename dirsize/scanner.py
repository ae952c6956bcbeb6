from __future__ import annotations
import logging
import os
import stat as statmod
from typing import List

from .errors import UsageError
from .models import CountedPath

logger = logging.getLogger(__name__)


def _scan_one(dir_path: str, pending: List[str]) -> int:
    """Sum the non-directory entries of one directory, queueing subdirectories."""
    total = 0
    try:
        it = os.scandir(dir_path)
    except FileNotFoundError:
        # removed while we were scanning
        return 0
    except OSError as exc:
        raise UsageError.from_oserror("opendir", dir_path, exc) from exc

    with it:
        while True:
            try:
                entry = next(it)
            except StopIteration:
                break
            except OSError as exc:
                raise UsageError.from_oserror("readdir", dir_path, exc) from exc

            try:
                st = entry.stat(follow_symlinks=False)
            except FileNotFoundError:
                continue
            except OSError as exc:
                raise UsageError.from_oserror("lstat", entry.path, exc) from exc

            if statmod.S_ISDIR(st.st_mode):
                pending.append(entry.path)
            else:
                total += st.st_size
    return total


def dir_usage(dir_path: str) -> int:
    """Apparent size in bytes of everything below ``dir_path``.

    Symlinks are counted as links and never followed. A directory that does
    not exist (or vanishes mid-walk) contributes nothing; any other failure
    raises :class:`UsageError` and no partial total is returned.
    """
    total = 0
    pending = [dir_path]
    while pending:
        total += _scan_one(pending.pop(), pending)
    return total


def file_usage(path: str) -> int:
    try:
        st = os.lstat(path)
    except FileNotFoundError:
        return 0
    except OSError as exc:
        raise UsageError.from_oserror("lstat", path, exc) from exc
    return st.st_size


def path_usage(counted: CountedPath) -> int:
    if counted.is_file:
        nbytes = file_usage(counted.path)
    else:
        nbytes = dir_usage(counted.path)
    logger.debug("%s (%s): %d bytes", counted.path, "file" if counted.is_file else "dir", nbytes)
    return nbytes
