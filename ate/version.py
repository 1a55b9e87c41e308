"""Version string for ``ate --version``.

The package version comes from the installed distribution. The commit is
looked up, in order, in a live git checkout, in ``_build_info.py``
written by the build hook, and in the PEP 610 ``direct_url.json`` of a
VCS install.
"""

from __future__ import annotations

import importlib.metadata
import json
import subprocess
from pathlib import Path
from typing import NamedTuple, Optional

DISTRIBUTION = "ate"


class BuildInfo(NamedTuple):
    commit: Optional[str]
    date: Optional[str]
    dirty: bool


def _git(args: list[str], cwd: Path) -> Optional[str]:
    try:
        out = subprocess.check_output(["git", *args], cwd=str(cwd), stderr=subprocess.DEVNULL)
    except (subprocess.CalledProcessError, OSError):
        return None
    return out.decode().strip() or None


def _from_git_checkout() -> Optional[BuildInfo]:
    root = _git(["rev-parse", "--show-toplevel"], Path(__file__).resolve().parent)
    if not root:
        return None
    cwd = Path(root)
    commit = _git(["rev-parse", "HEAD"], cwd)
    if not commit:
        return None
    date = _git(["show", "-s", "--format=%cI", "HEAD"], cwd)
    dirty = bool(_git(["status", "--porcelain", "--untracked-files=no"], cwd))
    return BuildInfo(commit=commit, date=date, dirty=dirty)


def _from_build_hook() -> Optional[BuildInfo]:
    try:
        from . import _build_info  # type: ignore
    except ImportError:
        return None
    commit = getattr(_build_info, "COMMIT", None)
    date = getattr(_build_info, "DATE", None)
    if not (commit or date):
        return None
    return BuildInfo(commit=commit, date=date, dirty=False)


def _from_direct_url() -> Optional[BuildInfo]:
    try:
        text = importlib.metadata.distribution(DISTRIBUTION).read_text("direct_url.json")
    except importlib.metadata.PackageNotFoundError:
        return None
    if not text:
        return None
    try:
        commit = (json.loads(text).get("vcs_info") or {}).get("commit_id")
    except (ValueError, AttributeError):
        return None
    return BuildInfo(commit=commit, date=None, dirty=False) if commit else None


def get_build_info() -> BuildInfo:
    for getter in (_from_git_checkout, _from_build_hook, _from_direct_url):
        info = getter()
        if info is not None:
            return info
    return BuildInfo(commit=None, date=None, dirty=False)


def get_package_version() -> str:
    try:
        return importlib.metadata.version(DISTRIBUTION)
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def get_version_string() -> str:
    info = get_build_info()
    version = f"ate {get_package_version()}"
    if info.commit is None and info.date is None:
        return version
    commit = info.commit[:7] if info.commit else "unknown"
    dirty = "-dirty" if info.dirty else ""
    return f"{version} ({commit}{dirty} {info.date or 'unknown'})"
