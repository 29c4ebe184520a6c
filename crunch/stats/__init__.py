"""
Numerical routines for the analysis pipeline.

All functions accept a :class:`~crunch.schema.NumericSeries` or any iterable of
numbers and return immutable report objects; no parsing logic is included.

Modules:
    descriptive:
        Count, mean, extrema, median and standard deviation (population by
        default) of a single series.

    regression:
        Ordinary least-squares straight-line fit between two series, with
        standard errors and a slope p-value.
"""

from .descriptive import DEFAULT_DDOF, compute_stats
from .regression import EPSILON, fit_linear

__all__ = [
    "DEFAULT_DDOF",
    "EPSILON",
    "compute_stats",
    "fit_linear",
]
