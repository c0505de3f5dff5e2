# edid_inspect/__init__.py
"""
edid_inspect
============

Pure-Python EDID inspector: decodes the base block and the CEA-861 extension
of a display's identification data into a nested, human-readable report.
"""
from __future__ import annotations

from importlib.metadata import version as _pkg_version

__all__ = ["__version__"]

try:
    # Read version dynamically from installed package metadata
    __version__: str = _pkg_version("edid-inspect")
except Exception:  # pragma: no cover - fallback for development environments
    __version__ = "0.0.0-dev"
