from __future__ import annotations
import logging
from typing import Iterator, List

from .models import CountedPath

logger = logging.getLogger(__name__)


def _covers(existing: str, path: str, strict: bool) -> bool:
    # Without strict, any string prefix counts ("/mail" covers "/mailarchive").
    if not path.startswith(existing):
        return False
    if not strict:
        return True
    return len(path) == len(existing) or existing.endswith("/") or path[len(existing)] == "/"


def _contains(path: str, existing: str, strict: bool) -> bool:
    if not existing.startswith(path) or len(existing) <= len(path):
        return False
    # strict mirrors _covers: a trailing "/" on the candidate is a boundary too
    return existing[len(path)] == "/" or (strict and path.endswith("/"))


class PathSet:
    """Roots to measure, none of them equal to or nested inside another.

    ``strict_prefix_boundary`` makes the "already counted" check require a
    path separator after the matched prefix, like the subsumption check does.
    """

    def __init__(self, strict_prefix_boundary: bool = False):
        self.strict_prefix_boundary = strict_prefix_boundary
        self._paths: List[CountedPath] = []

    def add(self, path: str, is_file: bool = False) -> bool:
        dropped: List[int] = []
        for i, cp in enumerate(self._paths):
            if _covers(cp.path, path, self.strict_prefix_boundary):
                logger.debug("%s already counted under %s", path, cp.path)
                return False
            if _contains(path, cp.path, self.strict_prefix_boundary):
                dropped.append(i)

        for i in reversed(dropped):
            logger.debug("%s replaces nested %s", path, self._paths[i].path)
            del self._paths[i]

        self._paths.append(CountedPath(path=path, is_file=is_file))
        return True

    def paths(self) -> List[CountedPath]:
        return list(self._paths)

    def __iter__(self) -> Iterator[CountedPath]:
        return iter(list(self._paths))

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, path: object) -> bool:
        return any(cp.path == path for cp in self._paths)
