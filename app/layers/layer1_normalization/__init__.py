"""Layer 1: Input Normalization - raw request body to NormalizedInput."""

from .normalizer import Normalizer, normalize_input

__all__ = ["Normalizer", "normalize_input"]
