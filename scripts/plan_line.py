"""
Command-line utility to plan maximum balanced output for a production line.

Usage:
    python scripts/plan_line.py matrix_file [output_file.xlsx]

Examples:
    # Print the plan for a cycle time table
    python scripts/plan_line.py "Line A.xlsx"

    # Plan with a 1800s period and export the result
    python scripts/plan_line.py "Line A.xlsx" "Line A Plan.xlsx" --period 1800

    # Plan from a CSV table
    python scripts/plan_line.py data/line_a.csv

Exit codes:
    0 - planned
    1 - input could not be read or is invalid (e.g. operation with no capable TM)
    2 - allocation could not place the computed line output
"""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from lineplan.exporters import export_line_plan
from lineplan.parsers import CapabilityMatrixParser
from lineplan.production import SearchBound, plan_line
from lineplan.validation import PlanningShortfallError


def main(argv=None):
    """Main entry point for the line planner CLI."""
    parser = argparse.ArgumentParser(
        description="Plan maximum balanced output from a machine/operation cycle time table",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python scripts/plan_line.py "Line A.xlsx"
    python scripts/plan_line.py "Line A.xlsx" "Line A Plan.xlsx" --period 1800
    python scripts/plan_line.py data/line_a.csv --pooled-bound
        """,
    )

    parser.add_argument(
        "matrix_file",
        type=str,
        help="Path to cycle time table (.xlsx, .xlsm or .csv)",
    )

    parser.add_argument(
        "output_file",
        type=str,
        nargs="?",
        help="Path for Excel plan export (optional, no export if not specified)",
    )

    parser.add_argument(
        "--period",
        type=float,
        default=None,
        help="Planning period in seconds (default: Settings sheet or 900)",
    )

    parser.add_argument(
        "--sheet",
        type=str,
        default="CycleTimes",
        help="Sheet name holding the cycle time table (default: CycleTimes)",
    )

    parser.add_argument(
        "--pooled-bound",
        action="store_true",
        help="Search up to the pooled capacity of each operation instead of its fastest TM",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    bound = SearchBound.POOLED_CAPACITY if args.pooled_bound else SearchBound.FASTEST_MACHINE

    try:
        matrix = CapabilityMatrixParser(
            args.matrix_file,
            sheet_name=args.sheet,
            period_seconds=args.period,
        ).parse()
    except (FileNotFoundError, ValueError, ValidationError) as e:
        print(f"❌ Error: Could not read cycle time table: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"📊 {matrix}")

    try:
        result = plan_line(matrix, bound=bound)
    except PlanningShortfallError as e:
        print(f"\n❌ Planning failed:\n{e}", file=sys.stderr)
        return 2

    if not result.is_planned:
        print("❌ Invalid input:", file=sys.stderr)
        for line in result.summary_lines():
            print(f"   - {line}", file=sys.stderr)
        return 1

    for issue in result.warnings:
        print(f"⚠️  Warning: {issue.description}", file=sys.stderr)

    for line in result.summary_lines():
        print(line)

    if args.output_file:
        output_path = export_line_plan(result, args.output_file)
        print(f"\n✅ Plan exported to: {output_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
