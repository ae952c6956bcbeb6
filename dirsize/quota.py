from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .errors import BackendConfigError
from .models import QuotaUsageResult
from .namespaces import (
    Namespace,
    is_mailbox_file_storage,
    namespace_inbox_path,
    namespace_root_path,
)
from .pathset import PathSet
from .scanner import path_usage

logger = logging.getLogger(__name__)

VisibilityCb = Callable[["QuotaRoot", Namespace], bool]


def is_namespace_visible(root: "QuotaRoot", ns: Namespace) -> bool:
    if root.ns_prefix is None:
        return True
    return ns.prefix == root.ns_prefix


@dataclass
class QuotaRoot:
    name: str = ""
    backend_name: str = ""
    namespaces: List[Namespace] = field(default_factory=list)
    ns_prefix: Optional[str] = None
    auto_updating: bool = False
    # read by the enforcing framework, not by the usage scan
    no_enforcing: bool = False
    hidden: bool = False
    ignore_unlimited: bool = False
    strict_prefix_boundary: bool = False
    visibility: VisibilityCb = is_namespace_visible

    def is_visible(self, ns: Namespace) -> bool:
        return self.visibility(self, ns)


_ROOT_FLAGS = {
    "noenforcing": "no_enforcing",
    "hidden": "hidden",
    "ignoreunlimited": "ignore_unlimited",
    "strict": "strict_prefix_boundary",
}


def parse_root_args(root: QuotaRoot, args: Optional[str]) -> None:
    """Apply the generic quota root parameters shared by every backend.

    Nothing on ``root`` changes unless every parameter is valid.
    """
    updates: Dict[str, object] = {}
    for token in (args or "").split():
        if token in _ROOT_FLAGS:
            updates[_ROOT_FLAGS[token]] = True
        elif token.startswith("ns="):
            updates["ns_prefix"] = token[len("ns="):]
        else:
            raise BackendConfigError(
                f"Unknown parameter for backend {root.backend_name}: {token}")
    for attr, value in updates.items():
        setattr(root, attr, value)


def collect_count_paths(root: QuotaRoot) -> PathSet:
    paths = PathSet(strict_prefix_boundary=root.strict_prefix_boundary)
    for ns in root.namespaces:
        if not root.is_visible(ns):
            continue

        is_file = is_mailbox_file_storage(ns)
        path = namespace_root_path(ns)
        if path is not None:
            paths.add(path, is_file=False)

        # INBOX may live outside the namespace root
        path = namespace_inbox_path(ns)
        if path is not None:
            paths.add(path, is_file=is_file)
    return paths


def get_quota_root_usage(root: QuotaRoot) -> int:
    """Total bytes used by every visible namespace of ``root``.

    Raises :class:`~dirsize.errors.UsageError` on the first fatal failure.
    """
    usage = QuotaUsageResult()
    for counted in collect_count_paths(root):
        usage.add(path_usage(counted))
    logger.debug("quota root %r uses %d bytes", root.name, usage.value)
    return usage.value
