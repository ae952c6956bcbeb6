from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional

from .backend import registry
from .config import get_settings
from .errors import BackendConfigError
from .filesystems import filesystem_for_path
from .models import QUOTA_NAME_STORAGE_BYTES
from .namespaces import LocalNamespace
from .utils import bytes_to_kilobytes, format_bytes

EXIT_OK = 0
EXIT_INTERNAL_ERROR = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dirsize",
        description="Measure the storage used by mail directories, counting nested roots once.",
    )
    parser.add_argument("roots", nargs="*", metavar="ROOT",
                        help="namespace root directory (one namespace per root)")
    parser.add_argument("--inbox", metavar="PATH",
                        help="INBOX location of the first namespace, if outside its root")
    parser.add_argument("--mbox", action="store_true",
                        help="mailboxes are single files (INBOX is measured as a file)")
    parser.add_argument("--args", dest="backend_args", default=None, metavar="STRING",
                        help="backend arguments, e.g. 'ns=ns0 strict'")
    units = parser.add_mutually_exclusive_group()
    units.add_argument("-k", "--kilobytes", action="store_true",
                       help="print kilobytes (rounded up)")
    units.add_argument("-H", "--human", action="store_true",
                       help="print a human readable size")
    parser.add_argument("--show-fs", action="store_true",
                        help="also print the capacity of each root's filesystem")
    parser.add_argument("--log-level", default=None,
                        help="logging level (default from DIRSIZE_LOG_LEVEL)")
    return parser


def _namespaces(opts: argparse.Namespace) -> List[LocalNamespace]:
    namespaces = []
    for i, root in enumerate(opts.roots):
        inbox = opts.inbox if i == 0 else None
        namespaces.append(LocalNamespace.create(f"ns{i}", root, inbox_path=inbox,
                                                mailbox_file=opts.mbox))
    if not namespaces and opts.inbox:
        namespaces.append(LocalNamespace.create("ns0", None, inbox_path=opts.inbox,
                                                mailbox_file=opts.mbox))
    return namespaces


def _format(value: int, opts: argparse.Namespace) -> str:
    if opts.kilobytes:
        return str(bytes_to_kilobytes(value))
    if opts.human:
        return format_bytes(value)
    return str(value)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    opts = parser.parse_args(argv)
    settings = get_settings()
    logging.basicConfig(level=(opts.log_level or settings.log_level).upper(),
                        format="%(levelname)s %(name)s: %(message)s")

    namespaces = _namespaces(opts)
    if not namespaces:
        parser.print_usage(sys.stderr)
        print("dirsize: no ROOT or --inbox given", file=sys.stderr)
        return EXIT_USAGE

    backend = registry.create("dirsize")
    backend.allocate(namespaces, name="cli")
    try:
        backend.initialize(opts.backend_args if opts.backend_args is not None else settings.default_args)
    except BackendConfigError as exc:
        print(f"dirsize: {exc}", file=sys.stderr)
        return EXIT_USAGE

    try:
        res = backend.get_resource(QUOTA_NAME_STORAGE_BYTES)
    finally:
        backend.deinitialize()

    if not res.ok:
        print(f"dirsize: {res.error}", file=sys.stderr)
        return EXIT_INTERNAL_ERROR

    print(_format(res.value, opts))
    if opts.show_fs:
        for root in opts.roots:
            fs = filesystem_for_path(root)
            if fs is None:
                print(f"{root}\t-")
                continue
            print(f"{root}\t{fs.mountpoint}\t{fs.fstype}\t"
                  f"{format_bytes(fs.used)} / {format_bytes(fs.total)} ({fs.percent:.1f}%)")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
