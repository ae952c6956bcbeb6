"""Quota backend contract and the dirsize backend.

A backend is created per quota root through :data:`registry`, initialized
once with its argument string, and then asked for resource values. The
dirsize backend keeps no usage counters: each ``get_resource`` call walks
the mail directories again.
"""
from __future__ import annotations
import logging
import threading
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence

from .config import DirsizeSettings, get_settings
from .errors import BackendStateError, UnknownBackendError, UsageError
from .models import (
    QUOTA_NAME_STORAGE_BYTES,
    QUOTA_NAME_STORAGE_KILOBYTES,
    QUOTA_UNKNOWN_RESOURCE_ERROR_STRING,
    QuotaGetResult,
    ResourceValue,
)
from .namespaces import Namespace
from .quota import QuotaRoot, get_quota_root_usage, parse_root_args

logger = logging.getLogger(__name__)


class BackendState(Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    MEASURING = "measuring"
    DEINITIALIZED = "deinitialized"


class QuotaBackend(ABC):
    name: str = ""

    def __init__(self):
        self.root: Optional[QuotaRoot] = None
        self.state = BackendState.UNINITIALIZED
        self._lock = threading.Lock()
        self._in_flight = 0

    def allocate(self, namespaces: Sequence[Namespace] = (), name: str = "") -> QuotaRoot:
        self.root = QuotaRoot(name=name, backend_name=self.name, namespaces=list(namespaces))
        return self.root

    @abstractmethod
    def initialize(self, args: Optional[str] = None) -> None: ...

    def deinitialize(self) -> None:
        self.root = None
        self.state = BackendState.DEINITIALIZED

    @abstractmethod
    def get_resources(self) -> List[str]: ...

    @abstractmethod
    def get_resource(self, name: str) -> ResourceValue: ...

    @abstractmethod
    def update(self, transaction: object) -> None: ...

    def _require_ready(self) -> QuotaRoot:
        # queries may overlap; only a backend that is not set up is refused
        if self.state not in (BackendState.READY, BackendState.MEASURING) or self.root is None:
            raise BackendStateError(f"backend {self.name} is {self.state.value}, not ready")
        return self.root


class DirsizeBackend(QuotaBackend):
    """Quota usage computed by summing the sizes of all mailbox files."""

    name = "dirsize"

    def __init__(self, settings: Optional[DirsizeSettings] = None):
        super().__init__()
        self.settings = settings

    def initialize(self, args: Optional[str] = None) -> None:
        if self.state is not BackendState.UNINITIALIZED:
            raise BackendStateError(f"backend {self.name} already {self.state.value}")
        root = self.root if self.root is not None else self.allocate()
        settings = self.settings or get_settings()
        parse_root_args(root, args)
        root.auto_updating = True
        root.strict_prefix_boundary = root.strict_prefix_boundary or settings.strict_prefix_boundary
        self.state = BackendState.READY
        logger.info("quota root %r initialized with backend %s", root.name, self.name)

    def deinitialize(self) -> None:
        if self.root is not None:
            logger.info("quota root %r deinitialized", self.root.name)
        super().deinitialize()

    def get_resources(self) -> List[str]:
        return [QUOTA_NAME_STORAGE_KILOBYTES]

    def get_resource(self, name: str) -> ResourceValue:
        root = self._require_ready()
        if name.lower() != QUOTA_NAME_STORAGE_BYTES.lower():
            return ResourceValue(QuotaGetResult.UNKNOWN_RESOURCE,
                                 error=QUOTA_UNKNOWN_RESOURCE_ERROR_STRING)

        self._begin_measuring()
        try:
            value = get_quota_root_usage(root)
        except UsageError as exc:
            logger.warning("quota root %r: %s", root.name, exc)
            return ResourceValue(QuotaGetResult.INTERNAL_ERROR, error=str(exc))
        finally:
            self._end_measuring()
        return ResourceValue(QuotaGetResult.LIMITED, value=value)

    def _begin_measuring(self) -> None:
        with self._lock:
            self._in_flight += 1
            self.state = BackendState.MEASURING

    def _end_measuring(self) -> None:
        with self._lock:
            self._in_flight -= 1
            if self._in_flight == 0 and self.state is BackendState.MEASURING:
                self.state = BackendState.READY

    def update(self, transaction: object) -> None:
        # usage is recomputed on every query, nothing to record
        self._require_ready()


BackendFactory = Callable[[], QuotaBackend]


class BackendRegistry:
    def __init__(self):
        self._factories: Dict[str, BackendFactory] = {}

    def register(self, name: str, factory: BackendFactory) -> None:
        key = name.lower()
        if key in self._factories:
            raise ValueError(f"quota backend {name} already registered")
        self._factories[key] = factory

    def names(self) -> List[str]:
        return sorted(self._factories)

    def create(self, name: str) -> QuotaBackend:
        try:
            factory = self._factories[name.lower()]
        except KeyError:
            raise UnknownBackendError(f"Unknown quota backend: {name}") from None
        return factory()

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._factories


registry = BackendRegistry()
registry.register(DirsizeBackend.name, DirsizeBackend)
