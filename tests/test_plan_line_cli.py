"""Tests for the plan_line command-line utility."""

import importlib.util
from pathlib import Path

import pytest
from openpyxl import load_workbook

SCRIPT_PATH = Path(__file__).parent.parent / "scripts" / "plan_line.py"


@pytest.fixture(scope="module")
def plan_line_cli():
    """Load scripts/plan_line.py as a module."""
    spec = importlib.util.spec_from_file_location("plan_line_cli", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def line_csv(tmp_path):
    """Three-operation line table as CSV."""
    path = tmp_path / "line.csv"
    path.write_text("TM,Op A,Op B,Op C\nTM 1,30,15,0\nTM 2,0,15,35\n")
    return path


class TestPlanLineCli:
    """Tests for main() exit codes and output."""

    def test_plan_printed(self, plan_line_cli, line_csv, capsys):
        """Test a valid table prints the plan and exits 0."""
        assert plan_line_cli.main([str(line_csv)]) == 0

        out = capsys.readouterr().out
        assert "Line output 22 units per 900s." in out
        assert "TM 1 (100.0%): Op A 22 pcs · 100.0%, Op B 15 pcs · 68.2%" in out
        assert "TM 2 (98.9%): Op B 7 pcs · 31.8%, Op C 22 pcs · 100.0%" in out

    def test_period_option(self, plan_line_cli, line_csv, capsys):
        """Test --period changes the planning window."""
        assert plan_line_cli.main([str(line_csv), "--period", "1800"]) == 0
        assert "units per 1800s." in capsys.readouterr().out

    def test_export(self, plan_line_cli, line_csv, tmp_path, capsys):
        """Test the optional output file receives the Excel plan."""
        output_path = tmp_path / "plan.xlsx"
        assert plan_line_cli.main([str(line_csv), str(output_path)]) == 0

        assert output_path.exists()
        assert load_workbook(output_path)["Metadata"]["B10"].value == 22
        assert "Plan exported to" in capsys.readouterr().out

    def test_unreachable_operation(self, plan_line_cli, tmp_path, capsys):
        """Test invalid input exits 1 with the issue description."""
        path = tmp_path / "bad.csv"
        path.write_text("TM,Op A,Op B\nTM 1,30,0\nTM 2,20,0\n")

        assert plan_line_cli.main([str(path)]) == 1
        assert "Operation 2 has no capable TM" in capsys.readouterr().err

    def test_missing_file(self, plan_line_cli, tmp_path, capsys):
        """Test unreadable input exits 1."""
        assert plan_line_cli.main([str(tmp_path / "missing.csv")]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_shortfall(self, plan_line_cli, tmp_path, capsys):
        """Test a planning shortfall exits 2."""
        path = tmp_path / "short.csv"
        path.write_text("TM,Op A,Op B\nTM 1,5,0\nTM 2,6,3\n")

        assert plan_line_cli.main([str(path), "--period", "10"]) == 2
        assert "Allocation could not place 2 units" in capsys.readouterr().err

    def test_pooled_bound(self, plan_line_cli, tmp_path, capsys):
        """Test --pooled-bound searches up to pooled capacity."""
        path = tmp_path / "pooled.csv"
        path.write_text("TM,X,Y,Z\nTM 1,20,30,1\nTM 2,0,30,0\n")

        assert plan_line_cli.main([str(path), "--period", "100", "--pooled-bound"]) == 0
        assert "Line output 3 units per 100s." in capsys.readouterr().out
