"""
Excel exporters for line plans.

This module provides a formatted Excel export of the planned assignment,
machine workload and operation shares.
"""

from .excel_templates import export_line_plan

__all__ = [
    'export_line_plan',
]
