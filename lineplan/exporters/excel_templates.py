"""
Excel export templates for line plans.

This module provides a formatted Excel export of a planned line:
1. Assignment - units per machine and operation
2. Workload - busy time, workload and idle time per machine
3. Operation Share - each machine's share of every operation
4. Metadata - planning information

All sheets share the same header style, filters and column widths.
"""

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Border, Side, Alignment
from openpyxl.chart import BarChart, Reference
from openpyxl.utils import get_column_letter
from datetime import datetime
from typing import Dict, Any, List
import logging

from lineplan.production.planner import PlanResult

logger = logging.getLogger(__name__)

# Color constants (matching design system)
HEADER_COLOR = "1E88E5"
ALT_ROW_COLOR = "F5F5F5"
HIGH_UTIL_COLOR = "C8E6C9"  # Green
LOW_UTIL_COLOR = "FFF9C4"  # Yellow

# Workload sheet number formats by column name
WORKLOAD_NUMBER_FORMATS = {
    'Units': '#,##0',
    'Busy Time (s)': '0.0',
    'Workload %': '0.0',
    'Idle Time (s)': '0.0',
}


def create_header_style() -> Dict[str, Any]:
    """Create header row style (blue background, white text, bold)."""
    return {
        'font': Font(name='Calibri', size=11, bold=True, color='FFFFFF'),
        'fill': PatternFill(start_color=HEADER_COLOR, end_color=HEADER_COLOR, fill_type='solid'),
        'alignment': Alignment(horizontal='center', vertical='center', wrap_text=True),
        'border': Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )
    }


def write_headers(worksheet, headers: List[str], row: int = 1):
    """Write a styled header row."""
    style = create_header_style()
    for col_idx, header in enumerate(headers, 1):
        cell = worksheet.cell(row=row, column=col_idx)
        cell.value = header
        cell.font = style['font']
        cell.fill = style['fill']
        cell.alignment = style['alignment']
        cell.border = style['border']


def apply_alternating_rows(worksheet, start_row: int, end_row: int, start_col: int = 1, end_col: int = 10):
    """Apply alternating row colors (white / light gray)."""
    for row_idx in range(start_row, end_row + 1):
        if (row_idx - start_row) % 2 == 1:  # Alternate rows
            for col_idx in range(start_col, end_col + 1):
                cell = worksheet.cell(row=row_idx, column=col_idx)
                cell.fill = PatternFill(start_color=ALT_ROW_COLOR, end_color=ALT_ROW_COLOR, fill_type='solid')


def add_filters(worksheet, end_column: int, header_row: int = 1):
    """Add Excel filters to header row."""
    end_col_letter = get_column_letter(end_column)
    worksheet.auto_filter.ref = f"A{header_row}:{end_col_letter}{header_row}"


def add_total_row(worksheet, row: int, columns_to_sum: List[int], label_col: int = 1, label: str = "TOTAL"):
    """Add totals row with SUM formulas."""
    label_cell = worksheet.cell(row=row, column=label_col)
    label_cell.value = label
    label_cell.font = Font(name='Calibri', size=10, bold=True)
    label_cell.fill = PatternFill(start_color=ALT_ROW_COLOR, end_color=ALT_ROW_COLOR, fill_type='solid')

    # Header is row 1, data starts at row 2
    for col in columns_to_sum:
        cell = worksheet.cell(row=row, column=col)
        col_letter = get_column_letter(col)
        cell.value = f"=SUM({col_letter}2:{col_letter}{row - 1})"
        cell.font = Font(name='Calibri', size=10, bold=True)
        cell.fill = PatternFill(start_color=ALT_ROW_COLOR, end_color=ALT_ROW_COLOR, fill_type='solid')
        cell.number_format = '#,##0'


def auto_fit_columns(worksheet, max_width: int = 50):
    """Auto-fit column widths based on content."""
    for column in worksheet.columns:
        column_letter = get_column_letter(column[0].column)
        max_length = max(
            (len(str(cell.value)) for cell in column if cell.value is not None),
            default=0,
        )
        worksheet.column_dimensions[column_letter].width = min(max_length + 2, max_width)


def export_line_plan(plan_result: PlanResult, output_path: str) -> str:
    """
    Export a line plan to a formatted Excel file.

    Creates 4 sheets:
    1. Assignment - Units per machine (rows) and operation (columns)
    2. Workload - Busy time, workload % and idle time per machine
    3. Operation Share - Share % of each operation's units per machine
    4. Metadata - Planning information

    Args:
        plan_result: Planned result from ``plan_line``
        output_path: Path to save Excel file

    Returns:
        Path to created file

    Raises:
        ValueError: If the result has no plan (invalid input)
    """
    if not plan_result.is_planned:
        raise ValueError(
            f"Cannot export a line plan with status '{plan_result.status.value}': "
            + "; ".join(issue.description for issue in plan_result.errors)
        )

    matrix = plan_result.matrix
    assignment = plan_result.assignment
    workload = plan_result.workload
    operation_names = [matrix.operation_name(j) for j in range(matrix.operation_count)]

    wb = Workbook()
    wb.remove(wb.active)  # Remove default sheet

    # Sheet 1: Assignment
    ws1 = wb.create_sheet("Assignment")
    headers = ['Machine'] + operation_names + ['Total Units']
    write_headers(ws1, headers)

    machine_totals = assignment.machine_totals()
    for machine in range(matrix.machine_count):
        row_idx = machine + 2
        ws1.cell(row=row_idx, column=1).value = matrix.machine_name(machine)
        for operation in range(matrix.operation_count):
            cell = ws1.cell(row=row_idx, column=operation + 2)
            cell.value = assignment.quantity(machine, operation)
            cell.number_format = '#,##0'
        cell = ws1.cell(row=row_idx, column=len(headers))
        cell.value = machine_totals[machine]
        cell.number_format = '#,##0'

    apply_alternating_rows(ws1, 2, matrix.machine_count + 1, 1, len(headers))
    add_total_row(
        ws1,
        matrix.machine_count + 2,
        list(range(2, len(headers) + 1)),
        label="TOTAL",
    )
    add_filters(ws1, len(headers))
    ws1.freeze_panes = 'B2'
    auto_fit_columns(ws1)

    # Sheet 2: Workload
    ws2 = wb.create_sheet("Workload")
    df_workload = workload.machine_summary()
    workload_headers = list(df_workload.columns)
    write_headers(ws2, workload_headers)

    busiest = workload.busiest_machine
    for row_idx, row in enumerate(df_workload.itertuples(index=False), 2):
        machine = row_idx - 2

        # Busiest machine green, idle machines yellow
        row_color = None
        if machine == busiest:
            row_color = HIGH_UTIL_COLOR
        elif workload.used_time[machine] == 0:
            row_color = LOW_UTIL_COLOR

        for col_idx, (header, value) in enumerate(zip(workload_headers, row), 1):
            cell = ws2.cell(row=row_idx, column=col_idx)
            cell.value = value
            if row_color:
                cell.fill = PatternFill(start_color=row_color, end_color=row_color, fill_type='solid')
            if header in WORKLOAD_NUMBER_FORMATS:
                cell.number_format = WORKLOAD_NUMBER_FORMATS[header]

    if len(df_workload) > 0:
        chart = BarChart()
        chart.type = "bar"
        chart.title = "Workload by Machine"
        chart.y_axis.title = "Workload %"
        workload_col = workload_headers.index('Workload %') + 1
        data = Reference(ws2, min_col=workload_col, min_row=1, max_row=len(df_workload) + 1)
        categories = Reference(ws2, min_col=1, min_row=2, max_row=len(df_workload) + 1)
        chart.add_data(data, titles_from_data=True)
        chart.set_categories(categories)
        ws2.add_chart(chart, f"{get_column_letter(len(workload_headers) + 2)}2")

    add_filters(ws2, len(workload_headers))
    ws2.freeze_panes = 'A2'
    auto_fit_columns(ws2)

    # Sheet 3: Operation Share
    ws3 = wb.create_sheet("Operation Share")
    share_headers = ['Machine'] + operation_names
    write_headers(ws3, share_headers)

    for machine in range(matrix.machine_count):
        row_idx = machine + 2
        ws3.cell(row=row_idx, column=1).value = matrix.machine_name(machine)
        for operation in range(matrix.operation_count):
            cell = ws3.cell(row=row_idx, column=operation + 2)
            cell.value = workload.display_share(machine, operation)
            cell.number_format = '0.0'

    units_row = matrix.machine_count + 2
    label_cell = ws3.cell(row=units_row, column=1)
    label_cell.value = "Total Units"
    label_cell.font = Font(name='Calibri', size=10, bold=True)
    for operation, total in enumerate(workload.operation_totals):
        cell = ws3.cell(row=units_row, column=operation + 2)
        cell.value = total
        cell.number_format = '#,##0'
        cell.font = Font(name='Calibri', size=10, bold=True)

    apply_alternating_rows(ws3, 2, matrix.machine_count + 1, 1, len(share_headers))
    ws3.freeze_panes = 'B2'
    auto_fit_columns(ws3)

    # Sheet 4: Metadata
    ws4 = wb.create_sheet("Metadata")

    busiest_name = matrix.machine_name(busiest) if busiest is not None else 'None'
    metadata = [
        ['Export Information', ''],
        ['Export Date & Time', datetime.now().strftime('%Y-%m-%d %H:%M:%S')],
        ['', ''],
        ['Planning Period', ''],
        ['Period (seconds)', matrix.period_seconds],
        ['Machines', matrix.machine_count],
        ['Operations', matrix.operation_count],
        ['', ''],
        ['Line Output', ''],
        ['Max Units per Period', plan_result.max_units],
        ['Busiest Machine', busiest_name],
        ['Busiest Machine Time (s)', workload.max_used_time],
        ['', ''],
        ['Validation', ''],
        ['Status', plan_result.status.value.upper()],
        ['Warnings', len(plan_result.warnings)],
    ]

    for row_idx, (label, value) in enumerate(metadata, 1):
        ws4.cell(row=row_idx, column=1).value = label
        ws4.cell(row=row_idx, column=2).value = value

        # Bold section headers
        if value == '' and label != '':
            ws4.cell(row=row_idx, column=1).font = Font(name='Calibri', size=12, bold=True)

    ws4.cell(row=10, column=2).number_format = '#,##0'
    ws4.column_dimensions['A'].width = 30
    ws4.column_dimensions['B'].width = 30

    # Save workbook
    wb.save(output_path)
    logger.info(f"Exported line plan to {output_path}")
    return output_path
