"""Services for project estimation system."""

from .estimator import create_estimate

__all__ = [
    "create_estimate",
]
