"""Parsers for cycle time input."""

from .cell_normalizer import (
    normalize_count,
    normalize_cycle_time,
    normalize_matrix,
    resize_matrix,
    resize_names,
)
from .matrix_parser import CapabilityMatrixParser

__all__ = [
    "CapabilityMatrixParser",
    "normalize_count",
    "normalize_cycle_time",
    "normalize_matrix",
    "resize_matrix",
    "resize_names",
]
