"""
Shared fixtures: small mail directory trees built under tmp_path.
"""

import os

import pytest

from dirsize.config import DirsizeSettings


def write_file(path, size):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as f:
        f.write(b"x" * size)
    return str(path)


@pytest.fixture
def mail_tree(tmp_path):
    """
    Layout (sizes in bytes):

        mail/
          INBOX/cur/1        100
          INBOX/new/2        200
          Sent/cur/3          50
          .subscriptions       7
    """
    root = tmp_path / "mail"
    write_file(root / "INBOX" / "cur" / "1", 100)
    write_file(root / "INBOX" / "new" / "2", 200)
    write_file(root / "Sent" / "cur" / "3", 50)
    write_file(root / ".subscriptions", 7)
    return root


@pytest.fixture
def settings():
    return DirsizeSettings(strict_prefix_boundary=False, log_level="DEBUG", default_args="")
