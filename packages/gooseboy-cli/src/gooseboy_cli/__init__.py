"""gooseboy-cli: command line interface for building and packing crates."""

from __future__ import annotations

__version__ = "1.0.0"

__all__ = ["__version__"]
