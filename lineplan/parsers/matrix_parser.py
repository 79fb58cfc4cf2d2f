"""Parser for cycle time tables in Excel (.xlsx/.xlsm) or CSV files."""

from pathlib import Path
from typing import List, Optional
import logging

import pandas as pd
from openpyxl import load_workbook

from lineplan.constants import DEFAULT_PERIOD_SECONDS
from lineplan.models.capability_matrix import CapabilityMatrix
from .cell_normalizer import normalize_matrix

logger = logging.getLogger(__name__)


class CapabilityMatrixParser:
    """
    Parser for cycle time tables.

    Expected file format:
    - Sheet 'CycleTimes' (or a CSV file): first column holds the machine
      names, the header row holds the operation names, and each cell is the
      cycle time in seconds (blank or 0 = machine cannot perform the operation)
    - Sheet 'Settings' (optional): columns [parameter, value]; the
      'period_seconds' row overrides the default planning period

    Example sheet:

        TM   | Cut | Sew | Pack
        TM 1 | 30  | 15  |
        TM 2 |     | 15  | 35
    """

    EXCEL_SUFFIXES = [".xlsx", ".xlsm"]
    CSV_SUFFIXES = [".csv"]

    def __init__(
        self,
        file_path: Path | str,
        sheet_name: str = "CycleTimes",
        period_seconds: Optional[float] = None,
    ):
        """
        Initialize parser with a cycle time file path.

        Args:
            file_path: Path to the Excel or CSV file
            sheet_name: Sheet holding the cycle time table (Excel only)
            period_seconds: Planning period; overrides the Settings sheet if given

        Raises:
            FileNotFoundError: If file does not exist
            ValueError: If file is not .xlsx, .xlsm or .csv
        """
        self.file_path = Path(file_path)
        if not self.file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")
        if self.file_path.suffix.lower() not in self.EXCEL_SUFFIXES + self.CSV_SUFFIXES:
            raise ValueError(f"File must be .xlsx, .xlsm or .csv: {file_path}")

        self.sheet_name = sheet_name
        self.period_seconds = period_seconds

    @property
    def is_excel(self) -> bool:
        return self.file_path.suffix.lower() in self.EXCEL_SUFFIXES

    def sheet_names(self) -> List[str]:
        """Sheet names of the Excel file (empty for CSV)."""
        if not self.is_excel:
            return []
        wb = load_workbook(self.file_path, read_only=True)
        try:
            return list(wb.sheetnames)
        finally:
            wb.close()

    def read_table(self) -> pd.DataFrame:
        """
        Read the raw cycle time table.

        Returns:
            DataFrame with machine names in the first column

        Raises:
            ValueError: If the sheet is missing or has no operation columns
        """
        if self.is_excel:
            sheet_names = self.sheet_names()
            if self.sheet_name not in sheet_names:
                raise ValueError(
                    f"The Excel file '{self.file_path.name}' does not contain a "
                    f"'{self.sheet_name}' sheet. Available sheets: {', '.join(sheet_names)}"
                )
            df = pd.read_excel(
                self.file_path,
                sheet_name=self.sheet_name,
                engine="openpyxl"
            )
        else:
            df = pd.read_csv(self.file_path)

        if len(df.columns) < 2:
            raise ValueError(
                f"Cycle time table in '{self.file_path.name}' needs a machine column "
                f"followed by at least one operation column"
            )

        # Drop rows that are entirely blank (trailing spreadsheet rows)
        return df.dropna(how="all").reset_index(drop=True)

    def parse_period(self, sheet_name: str = "Settings") -> float:
        """
        Determine the planning period.

        An explicit period passed to the parser wins; otherwise the
        'period_seconds' row of the Settings sheet is used if present,
        else the default period.

        Args:
            sheet_name: Name of the sheet containing planning settings

        Returns:
            Planning period in seconds

        Raises:
            ValueError: If the Settings sheet is malformed
        """
        if self.period_seconds is not None:
            return float(self.period_seconds)
        if not self.is_excel:
            return float(DEFAULT_PERIOD_SECONDS)

        if sheet_name not in self.sheet_names():
            return float(DEFAULT_PERIOD_SECONDS)

        df = pd.read_excel(
            self.file_path,
            sheet_name=sheet_name,
            engine="openpyxl"
        )

        # Validate required columns
        required_cols = {"parameter", "value"}
        if not required_cols.issubset(df.columns):
            missing = required_cols - set(df.columns)
            raise ValueError(f"Missing required columns: {missing}")

        settings = {}
        for _, row in df.iterrows():
            if pd.notna(row["parameter"]):
                settings[str(row["parameter"]).strip()] = row["value"]

        if "period_seconds" in settings and pd.notna(settings["period_seconds"]):
            return float(settings["period_seconds"])
        return float(DEFAULT_PERIOD_SECONDS)

    def parse(self) -> CapabilityMatrix:
        """
        Parse the file into a capability matrix.

        Returns:
            CapabilityMatrix with normalized cycle times and display names

        Raises:
            ValueError: If the table or settings are malformed
        """
        df = self.read_table()
        machine_column = df.columns[0]
        operation_columns = list(df.columns[1:])

        operation_names = [
            "" if str(col).startswith("Unnamed:") else str(col)
            for col in operation_columns
        ]
        machine_names = df[machine_column].tolist()
        rows = df[operation_columns].values.tolist()

        matrix = normalize_matrix(
            rows,
            period_seconds=self.parse_period(),
            operation_names=operation_names,
            machine_names=machine_names,
        )
        logger.info(f"Parsed {matrix} from {self.file_path.name}")
        return matrix
