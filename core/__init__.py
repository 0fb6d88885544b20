"""Core module for code complexity analysis."""

from .models import AnalysisReport, ComplexityEstimate
from .estimator import classify
from .highlighter import highlight

__all__ = [
    "AnalysisReport",
    "ComplexityEstimate",
    "classify",
    "highlight",
]
