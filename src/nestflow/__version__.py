"""Version information for Nestflow.

The version is read from the installed package metadata to keep
pyproject.toml the single source of truth.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("nestflow")
except PackageNotFoundError:
    # Package not installed, fallback for development
    __version__ = "0.0.0-dev"
