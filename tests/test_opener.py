"""Tests for opening links with the configured opener."""

import subprocess
from unittest.mock import patch

import pytest

from ate.errors import OpenLinkFailed
from ate.opener import LinkOpener, open_uri


def completed(returncode, stdout=b"", stderr=b""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


def test_missing_opener():
    with pytest.raises(OpenLinkFailed) as info:
        LinkOpener(None)("http://a.b")
    assert str(info.value) == "ATE_OPENER must be defined to open links"


def test_runs_opener_with_uri():
    with patch("ate.opener.subprocess.run", return_value=completed(0)) as mock_run:
        LinkOpener("xdg-open")("http://a.b")
    args, kwargs = mock_run.call_args
    assert args[0] == ["xdg-open", "http://a.b"]
    assert kwargs["capture_output"] is True


def test_non_zero_exit_fails_with_stderr():
    with patch("ate.opener.subprocess.run", return_value=completed(3, stderr=b"no such file\n")):
        with pytest.raises(OpenLinkFailed) as info:
            LinkOpener("opener")("file:///x")
    assert str(info.value) == "ATE_OPENER opener failed with code=3 stderr=no such file"


def test_killed_by_signal_is_success():
    with patch("ate.opener.subprocess.run", return_value=completed(-15)):
        LinkOpener("opener")("http://a.b")


def test_opener_that_cannot_start():
    with patch("ate.opener.subprocess.run", side_effect=FileNotFoundError(2, "No such file")):
        with pytest.raises(OpenLinkFailed) as info:
            LinkOpener("missing-opener")("http://a.b")
    assert "missing-opener" in str(info.value)


def test_real_process(tmp_path):
    script = tmp_path / "opener"
    script.write_text("#!/bin/sh\necho \"$1\" > \"$(dirname \"$0\")/opened\"\n")
    script.chmod(0o755)
    LinkOpener(str(script))("http://a.b/c")
    assert (tmp_path / "opened").read_text() == "http://a.b/c\n"


def test_open_uri_function():
    with patch("ate.opener.subprocess.run", return_value=completed(0)) as mock_run:
        open_uri("http://a.b", "open")
    assert mock_run.call_args.args[0] == ["open", "http://a.b"]
