"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
jsonapi-connect, a product of Garudex Labs

Version information for jsonapi-connect.

Installed distributions report their metadata version; a source checkout
falls back to the VERSION file at the repository root.
"""

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION_NAME = "jsonapi-connect"


def get_version() -> str:
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        version_file = Path(__file__).parent.parent / "VERSION"
        if version_file.exists():
            return version_file.read_text().strip()
        return "unknown"


__version__ = get_version()
