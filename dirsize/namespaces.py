"""Mail namespace collaborators consumed by the quota scan.

The quota core never inspects namespaces itself: it asks whether the
storage keeps each mailbox in a single file and where the namespace root
and its INBOX live. Anything that satisfies the protocols below can be
passed in; :class:`LocalNamespace` covers plain on-disk layouts.
"""
from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import Optional, Protocol

from .models import PathType

INBOX = "INBOX"


class MailStorage(Protocol):
    def is_mailbox_file(self) -> bool: ...


class MailboxList(Protocol):
    def get_root_path(self, path_type: PathType) -> Optional[str]: ...

    def get_path(self, name: str, path_type: PathType) -> Optional[str]: ...


class Namespace(Protocol):
    prefix: str
    storage: MailStorage
    list: MailboxList


@dataclass(frozen=True)
class LocalStorage:
    mailbox_file: bool = False

    def is_mailbox_file(self) -> bool:
        return self.mailbox_file


@dataclass(frozen=True)
class LocalMailboxList:
    root_dir: Optional[str]
    inbox_path: Optional[str] = None

    def get_root_path(self, path_type: PathType) -> Optional[str]:
        if path_type is not PathType.DIR:
            return None
        return self.root_dir

    def get_path(self, name: str, path_type: PathType) -> Optional[str]:
        if path_type is not PathType.MAILBOX:
            return None
        if name == INBOX and self.inbox_path is not None:
            return self.inbox_path
        if self.root_dir is None:
            return None
        return os.path.join(self.root_dir, name)


@dataclass
class LocalNamespace:
    prefix: str
    storage: LocalStorage = field(default_factory=LocalStorage)
    list: LocalMailboxList = field(default_factory=lambda: LocalMailboxList(None))

    @classmethod
    def create(cls, prefix: str, root_dir: Optional[str],
               inbox_path: Optional[str] = None,
               mailbox_file: bool = False) -> "LocalNamespace":
        return cls(prefix=prefix,
                   storage=LocalStorage(mailbox_file=mailbox_file),
                   list=LocalMailboxList(root_dir=root_dir, inbox_path=inbox_path))


def is_mailbox_file_storage(ns: Namespace) -> bool:
    return bool(ns.storage.is_mailbox_file())


def namespace_root_path(ns: Namespace) -> Optional[str]:
    return ns.list.get_root_path(PathType.DIR)


def namespace_inbox_path(ns: Namespace) -> Optional[str]:
    return ns.list.get_path(INBOX, PathType.MAILBOX)
