"""Installed package version, used as the default line stamp."""

from __future__ import annotations

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("corelog")
except PackageNotFoundError:
    __version__ = "0.0.0"
