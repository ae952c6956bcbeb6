from __future__ import annotations
import os


class DirsizeError(Exception):
    pass


class UsageError(DirsizeError):
    """A filesystem call failed while measuring usage.

    Carries the failing operation, the path and the OS error number; the
    message is only rendered when the error is turned into text.
    """

    def __init__(self, operation: str, path: str, errno: int):
        super().__init__(operation, path, errno)
        self.operation = operation
        self.path = path
        self.errno = errno

    @property
    def reason(self) -> str:
        return os.strerror(self.errno) if self.errno else "Unknown error"

    def __str__(self) -> str:
        return f"{self.operation}({self.path}) failed: {self.reason}"

    @classmethod
    def from_oserror(cls, operation: str, path: str, exc: OSError) -> "UsageError":
        return cls(operation, path, exc.errno or 0)


class BackendConfigError(DirsizeError):
    pass


class BackendStateError(DirsizeError):
    pass


class UnknownBackendError(DirsizeError):
    pass
