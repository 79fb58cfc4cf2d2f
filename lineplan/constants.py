"""Centralized constants for line planning.

This module contains the default planning window and the labels used when
machines or operations have no display name. Centralizing these values keeps
the solver, the parsers and the exporters consistent.
"""

# ============================================================================
# PLANNING WINDOW
# ============================================================================

#: Default planning period (seconds)
#: One planning cycle; every operation must produce the same unit count in it
DEFAULT_PERIOD_SECONDS = 900


# ============================================================================
# DISPLAY CONSTANTS
# ============================================================================

#: Decimal places used for workload and share percentages in reports
DISPLAY_DECIMALS = 1

#: Label prefix for machines without a name ("TM 1", "TM 2", ...)
DEFAULT_MACHINE_LABEL = "TM"

#: Label prefix for operations without a name ("Operation 1", ...)
DEFAULT_OPERATION_LABEL = "Operation"
