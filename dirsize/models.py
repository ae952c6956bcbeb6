from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Resource identifiers understood by the quota framework.
QUOTA_NAME_STORAGE_KILOBYTES = "storage"
QUOTA_NAME_STORAGE_BYTES = "storage-bytes"
QUOTA_NAME_MESSAGES = "message-count"

QUOTA_UNKNOWN_RESOURCE_ERROR_STRING = "Unknown quota resource"


class PathType(Enum):
    DIR = "dir"
    MAILBOX = "mailbox"


@dataclass(frozen=True)
class CountedPath:
    path: str
    is_file: bool = False


@dataclass
class QuotaUsageResult:
    value: int = 0

    def add(self, nbytes: int):
        self.value += nbytes


class QuotaGetResult(Enum):
    LIMITED = "limited"
    UNKNOWN_RESOURCE = "unknown_resource"
    INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True)
class ResourceValue:
    result: QuotaGetResult
    value: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.result is QuotaGetResult.LIMITED
