# Shared pytest fixtures
import logging
from pathlib import Path

import pytest
from openpyxl import Workbook

from exceldiff.engine import Worksheet
from exceldiff.registry import register_all_components


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """The CLI reconfigures the root logger; put the original handlers back."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def _registered_components():
    register_all_components()


@pytest.fixture()
def temp_workdir(monkeypatch, tmp_path: Path) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("EXCELDIFF_CONFIG", raising=False)
    return tmp_path


def make_xlsx(path: Path, sheets: dict) -> Path:
    """Write a workbook with one sheet per dict entry (rows of native values)."""
    wb = Workbook()
    wb.remove(wb.active)
    for title, rows in sheets.items():
        ws = wb.create_sheet(title)
        for row in rows:
            ws.append(list(row))
    wb.save(path)
    return path


@pytest.fixture()
def xlsx_factory(tmp_path: Path):
    def _make(name: str, sheets: dict) -> Path:
        return make_xlsx(tmp_path / name, sheets)
    return _make


@pytest.fixture()
def report_sheets():
    """Baseline and updated versions of a small exported report."""
    left = Worksheet.from_values([
        ["Name", "Qty", "Note"],
        ["Apple", 3, "fresh"],
        ["Pear", 5, "ripe"],
        ["Plum", 1, "sour"],
    ])
    right = Worksheet.from_values([
        ["Name", "Qty", "Note"],
        ["Apple", 3, "fresh"],
        ["Pear", 7, "ripe"],
    ])
    return left, right
