"""Data models for line planning."""

from .capability_matrix import CapabilityMatrix
from .assignment import Assignment

__all__ = [
    "CapabilityMatrix",
    "Assignment",
]
