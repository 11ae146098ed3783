"""Query-result normalization and the model-aware builder."""

from .builder import Builder
from .normalizer import ResultNormalizer, classify

__all__ = ["Builder", "ResultNormalizer", "classify"]
