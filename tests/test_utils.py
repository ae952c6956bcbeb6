"""Tests for size formatting, errors, settings and filesystem lookup."""

import errno
import os

import pytest

from dirsize.config import DirsizeSettings
from dirsize.errors import UsageError
from dirsize.filesystems import filesystem_for_path
from dirsize.utils import bytes_to_kilobytes, format_bytes


@pytest.mark.parametrize("num, expected", [
    (0, "0 B"),
    (1023, "1023 B"),
    (1024, "1.00 KB"),
    (1536, "1.50 KB"),
    (5 * 1024 ** 3, "5.00 GB"),
    (-1, "-1"),
])
def test_format_bytes(num, expected):
    assert format_bytes(num) == expected


@pytest.mark.parametrize("num, expected", [(0, 0), (1, 1), (1024, 1), (1025, 2), (357, 1)])
def test_bytes_to_kilobytes(num, expected):
    assert bytes_to_kilobytes(num) == expected


def test_usage_error_message():
    err = UsageError("opendir", "/var/mail/alice", errno.EACCES)
    assert str(err) == "opendir(/var/mail/alice) failed: " + os.strerror(errno.EACCES)
    assert err.reason == os.strerror(errno.EACCES)


def test_usage_error_from_oserror():
    exc = OSError(errno.EMFILE, "Too many open files")
    err = UsageError.from_oserror("opendir", "/x", exc)
    assert err.errno == errno.EMFILE
    assert err.path == "/x"


def test_usage_error_without_errno():
    assert str(UsageError("lstat", "/x", 0)) == "lstat(/x) failed: Unknown error"


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("DIRSIZE_STRICT_PREFIX_BOUNDARY", "true")
    monkeypatch.setenv("DIRSIZE_LOG_LEVEL", "debug")
    monkeypatch.setenv("DIRSIZE_DEFAULT_ARGS", "hidden")
    s = DirsizeSettings(_env_file=None)
    assert s.strict_prefix_boundary is True
    assert s.log_level == "debug"
    assert s.default_args == "hidden"


def test_settings_defaults(monkeypatch):
    for var in ("DIRSIZE_STRICT_PREFIX_BOUNDARY", "DIRSIZE_LOG_LEVEL", "DIRSIZE_DEFAULT_ARGS"):
        monkeypatch.delenv(var, raising=False)
    s = DirsizeSettings(_env_file=None)
    assert s.strict_prefix_boundary is False
    assert s.log_level == "WARNING"
    assert s.default_args == ""


def test_filesystem_for_path(tmp_path):
    fs = filesystem_for_path(str(tmp_path))
    if fs is None:
        pytest.skip("no mount information available")
    assert os.path.realpath(str(tmp_path)).startswith(fs.mountpoint)
    assert fs.total >= fs.used
