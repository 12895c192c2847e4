"""depclosure: Dependency-closure validation for published package builds."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
