"""Version string for the welcome banner and ``--version``.

The release number comes from the installed distribution; the commit is
taken from the build hook's ``_build_info`` module when present, or from a
live git checkout when running from source.
"""

from __future__ import annotations

import functools
import importlib.metadata
import subprocess
from pathlib import Path
from typing import NamedTuple, Optional

from . import __version__


class BuildInfo(NamedTuple):
    release: str
    commit: Optional[str]
    dirty: bool


def _run_git(args: list[str], cwd: Path) -> Optional[str]:
    try:
        out = subprocess.check_output(["git", *args], cwd=str(cwd), stderr=subprocess.DEVNULL)
        return out.decode().strip() or None
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        return None


def _release() -> str:
    try:
        return importlib.metadata.version("minivim")
    except importlib.metadata.PackageNotFoundError:
        return __version__


def _embedded_commit() -> Optional[str]:
    try:
        from . import _build_info  # type: ignore
    except ImportError:
        return None
    return getattr(_build_info, "COMMIT", None)


def _checkout_commit() -> tuple[Optional[str], bool]:
    here = Path(__file__).resolve().parent
    if _run_git(["rev-parse", "--show-toplevel"], cwd=here) is None:
        return None, False
    commit = _run_git(["rev-parse", "HEAD"], cwd=here)
    dirty = bool(_run_git(["status", "--porcelain"], cwd=here))
    return commit, dirty


@functools.lru_cache(maxsize=None)
def get_build_info() -> BuildInfo:
    commit, dirty = _checkout_commit()
    if commit is None:
        commit, dirty = _embedded_commit(), False
    return BuildInfo(release=_release(), commit=commit, dirty=dirty)


def get_version_string() -> str:
    """e.g. ``0.1.0 (3f2a9c1-dirty)``, or just the release without a commit."""
    info = get_build_info()
    if not info.commit:
        return info.release
    suffix = "-dirty" if info.dirty else ""
    return f"{info.release} ({info.commit[:7]}{suffix})"
