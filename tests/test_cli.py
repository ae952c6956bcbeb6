"""Tests for the dirsize command line."""

import errno
import os

import pytest

from dirsize import cli, scanner
from dirsize.filesystems import FilesystemInfo

from conftest import write_file


@pytest.fixture(autouse=True)
def _settings(settings, monkeypatch):
    monkeypatch.setattr(cli, "get_settings", lambda: settings)


def test_total_bytes(mail_tree, capsys):
    assert cli.main([str(mail_tree)]) == cli.EXIT_OK
    assert capsys.readouterr().out.strip() == "357"


def test_kilobytes(mail_tree, capsys):
    assert cli.main([str(mail_tree), "-k"]) == cli.EXIT_OK
    assert capsys.readouterr().out.strip() == "1"


def test_human(mail_tree, capsys):
    assert cli.main([str(mail_tree), "--human"]) == cli.EXIT_OK
    assert capsys.readouterr().out.strip() == "357 B"


def test_nested_roots_counted_once(mail_tree, capsys):
    assert cli.main([str(mail_tree / "INBOX"), str(mail_tree)]) == cli.EXIT_OK
    assert capsys.readouterr().out.strip() == "357"


def test_mbox_inbox(mail_tree, tmp_path, capsys):
    spool = write_file(tmp_path / "spool" / "alice", 643)
    assert cli.main([str(mail_tree), "--inbox", spool, "--mbox"]) == cli.EXIT_OK
    assert capsys.readouterr().out.strip() == "1000"


def test_inbox_only(tmp_path, capsys):
    spool = write_file(tmp_path / "spool" / "alice", 10)
    assert cli.main(["--inbox", spool, "--mbox"]) == cli.EXIT_OK
    assert capsys.readouterr().out.strip() == "10"


def test_namespace_filter(mail_tree, tmp_path, capsys):
    other = tmp_path / "other"
    write_file(other / "x", 5)
    assert cli.main([str(mail_tree), str(other), "--args", "ns=ns1"]) == cli.EXIT_OK
    assert capsys.readouterr().out.strip() == "5"


def test_no_roots(capsys):
    assert cli.main([]) == cli.EXIT_USAGE
    assert "no ROOT" in capsys.readouterr().err


def test_bad_backend_args(mail_tree, capsys):
    assert cli.main([str(mail_tree), "--args", "bogus"]) == cli.EXIT_USAGE
    assert "Unknown parameter for backend dirsize: bogus" in capsys.readouterr().err


def test_scan_error(mail_tree, capsys, monkeypatch):
    denied = str(mail_tree / "Sent")
    real_scandir = os.scandir

    def fake_scandir(path):
        if path == denied:
            raise PermissionError(errno.EACCES, "Permission denied", path)
        return real_scandir(path)

    monkeypatch.setattr(scanner.os, "scandir", fake_scandir)
    assert cli.main([str(mail_tree)]) == cli.EXIT_INTERNAL_ERROR
    captured = capsys.readouterr()
    assert captured.out == ""
    assert f"opendir({denied}) failed: {os.strerror(errno.EACCES)}" in captured.err


def test_show_fs(mail_tree, capsys, monkeypatch):
    info = FilesystemInfo(mountpoint="/", fstype="ext4", total=2048, used=1024, free=1024, percent=50.0)
    monkeypatch.setattr(cli, "filesystem_for_path", lambda path: info)
    assert cli.main([str(mail_tree), "--show-fs"]) == cli.EXIT_OK
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "357"
    assert lines[1] == f"{mail_tree}\t/\text4\t1.00 KB / 2.00 KB (50.0%)"
