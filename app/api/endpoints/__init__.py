"""API endpoints package."""

from . import health
from . import estimate
from . import export

__all__ = ["health", "estimate", "export"]
