"""Top-level package for the command-line expense tracker.

Exposes the package version for runtime checks and the help banner.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
