import json
from pathlib import Path

import pytest
from click.testing import CliRunner
from openpyxl import load_workbook

from exceldiff import __version__
from exceldiff.cli import cli
from exceldiff.core import get_settings
from exceldiff.registry import registry

REPORT_V1 = [
    ["Name", "Qty", "Note"],
    ["Apple", 3, "fresh"],
    ["Pear", 5, "ripe"],
    ["Plum", 1, "sour"],
]
REPORT_V2 = [
    ["Name", "Qty", "Note"],
    ["Apple", 3, "fresh "],
    ["Pear", 7, "ripe"],
]


@pytest.fixture()
def runner():
    return CliRunner()


@pytest.fixture()
def reports(temp_workdir, xlsx_factory):
    old = xlsx_factory("old.xlsx", {"Report": REPORT_V1, "Other": [["x"]]})
    new = xlsx_factory("new.xlsx", {"Report": REPORT_V2})
    return old, new


def test_version(runner):
    result = runner.invoke(cli, ['--version'])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_diff_writes_workbook(runner, reports, temp_workdir):
    old, new = reports

    result = runner.invoke(cli, ['diff', str(old), str(new)])

    assert result.exit_code == 0, result.output
    assert "Reading first sheet from" in result.output
    assert "'Report'" in result.output
    assert "Identical rows: 1" in result.output
    assert "Modified rows:  2" in result.output
    assert "Removed rows:   1" in result.output
    assert "Added rows:     0" in result.output

    output = temp_workdir / "diff_output.xlsx"
    assert f"Done! Diff written to {Path('diff_output.xlsx')}" in result.output
    ws = load_workbook(output)["Diff"]
    assert ws.max_row == 4
    assert ws["B3"].value == "5 → 7"


def test_ignore_whitespace(runner, reports):
    old, new = reports

    result = runner.invoke(cli, ['diff', str(old), str(new), '--ignore-whitespace'])

    assert result.exit_code == 0, result.output
    assert "Ignoring whitespace differences" in result.output
    assert "Identical rows: 2" in result.output
    assert "Modified rows:  1" in result.output


def test_diff_only_with_header(runner, reports, temp_workdir):
    old, new = reports

    result = runner.invoke(cli, [
        'diff', str(old), str(new), '-o', 'changes.xlsx', '--diff-only', '--ignore-whitespace',
    ])

    assert result.exit_code == 0, result.output
    assert "(3 rows)" in result.output

    ws = load_workbook(temp_workdir / "changes.xlsx").active
    assert [c.value for c in ws[1]] == ["Name", "Qty", "Note"]
    assert ws["A2"].value == "Pear"
    assert ws["A3"].value == "Plum"


def test_diff_only_without_header(runner, reports, temp_workdir):
    old, new = reports

    result = runner.invoke(cli, [
        'diff', str(old), str(new), '-o', 'changes.xlsx',
        '--diff-only', '--no-header', '--ignore-whitespace',
    ])

    assert result.exit_code == 0, result.output
    assert "(2 rows)" in result.output
    assert load_workbook(temp_workdir / "changes.xlsx").active["A1"].value == "Pear"


def test_no_header_without_diff_only_keeps_all_rows(runner, reports, temp_workdir):
    old, new = reports

    result = runner.invoke(cli, ['diff', str(old), str(new), '--no-header'])

    assert result.exit_code == 0, result.output
    assert load_workbook(temp_workdir / "diff_output.xlsx").active.max_row == 4


def test_named_sheets(runner, reports, temp_workdir):
    old, new = reports

    result = runner.invoke(cli, [
        'diff', str(old), str(new), '--sheet1', 'Other', '--sheet2', 'Report', '-o', 'out.xlsx',
    ])

    assert result.exit_code == 0, result.output
    assert "Reading first sheet from" in result.output
    assert str(old) not in result.output.split("Reading first sheet from")[1].splitlines()[0]
    assert "Modified rows:  1" in result.output
    assert "Added rows:     2" in result.output


def test_unknown_sheet(runner, reports, temp_workdir):
    old, new = reports

    result = runner.invoke(cli, ['diff', str(old), str(new), '--sheet1', 'Missing'])

    assert result.exit_code == 1
    assert "Error: Sheet 'Missing' not found" in result.output
    assert not (temp_workdir / "diff_output.xlsx").exists()


def test_json_output_by_extension(runner, reports, temp_workdir):
    old, new = reports

    result = runner.invoke(cli, ['diff', str(old), str(new), '-o', 'diff.json'])

    assert result.exit_code == 0, result.output
    data = json.loads((temp_workdir / "diff.json").read_text(encoding='utf-8'))
    assert data['summary']['removed'] == 1
    assert len(data['rows']) == 4


def test_format_option_overrides_extension(runner, reports, temp_workdir):
    old, new = reports

    result = runner.invoke(cli, ['diff', str(old), str(new), '-o', 'diff.out', '--format', 'json'])

    assert result.exit_code == 0, result.output
    data = json.loads((temp_workdir / "diff.out").read_text(encoding='utf-8'))
    assert data['ignore_whitespace'] is False


def test_csv_inputs(runner, temp_workdir):
    (temp_workdir / "a.csv").write_text("id,name\n1,Ann\n2,Bob\n", encoding='utf-8')
    (temp_workdir / "b.csv").write_text("id,name\n1,Ann\n2,Rob\n3,Cid\n", encoding='utf-8')

    result = runner.invoke(cli, ['diff', 'a.csv', 'b.csv', '-o', 'diff.json'])

    assert result.exit_code == 0, result.output
    assert "'a'" in result.output
    data = json.loads((temp_workdir / "diff.json").read_text(encoding='utf-8'))
    assert [row['kind'] for row in data['rows']] == ['unchanged', 'unchanged', 'modified', 'added']
    assert data['rows'][2]['changes'] == [{'column': 1, 'old': 'Bob', 'new': 'Rob'}]


def test_mixed_formats(runner, temp_workdir, xlsx_factory):
    xlsx_factory("a.xlsx", {"Sheet": [["id", "name"], [1, "Ann"]]})
    (temp_workdir / "b.csv").write_text("id,name\n1,Ann\n", encoding='utf-8')

    result = runner.invoke(cli, ['diff', 'a.xlsx', 'b.csv'])

    assert result.exit_code == 0, result.output
    assert "Identical rows: 2" in result.output


def test_profile(runner, reports, temp_workdir):
    old, new = reports
    profile = temp_workdir / "profile.yaml"
    profile.write_text(
        "writer:\n"
        "  implementation: openpyxl\n"
        "  config:\n"
        "    sheet_title: Changes\n"
        "options:\n"
        "  ignore_whitespace: true\n"
        "  diff_only: true\n",
        encoding='utf-8',
    )

    result = runner.invoke(cli, ['diff', str(old), str(new), '--config', str(profile)])

    assert result.exit_code == 0, result.output
    assert "(3 rows)" in result.output
    ws = load_workbook(temp_workdir / "diff_output.xlsx")["Changes"]
    assert ws.max_row == 3


def test_invalid_profile(runner, reports, temp_workdir):
    old, new = reports
    profile = temp_workdir / "profile.yaml"
    profile.write_text("options:\n  colour: true\n", encoding='utf-8')

    result = runner.invoke(cli, ['diff', str(old), str(new), '--config', str(profile)])

    assert result.exit_code == 1
    assert "Unknown options" in result.output


def test_unknown_reader(runner, reports):
    old, new = reports

    result = runner.invoke(cli, ['diff', str(old), str(new), '--reader', 'ods'])

    assert result.exit_code == 1
    assert "Unknown reader implementation 'ods'" in result.output


def test_reader_that_cannot_handle_file(runner, reports):
    old, new = reports

    result = runner.invoke(cli, ['diff', str(old), str(new), '--reader', 'csv'])

    assert result.exit_code == 1
    assert "not a supported file for reader 'csv'" in result.output


def test_unsupported_extension(runner, temp_workdir):
    (temp_workdir / "a.ods").write_bytes(b"")
    (temp_workdir / "b.ods").write_bytes(b"")

    result = runner.invoke(cli, ['diff', 'a.ods', 'b.ods'])

    assert result.exit_code == 1
    assert "not a supported file" in result.output


def test_missing_input_is_usage_error(runner, temp_workdir):
    result = runner.invoke(cli, ['diff', 'missing.xlsx', 'other.xlsx'])

    assert result.exit_code == 2


def test_corrupt_workbook(runner, reports, temp_workdir):
    old, _ = reports
    broken = temp_workdir / "broken.xlsx"
    broken.write_bytes(b"garbage")

    result = runner.invoke(cli, ['diff', str(old), str(broken)])

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_unexpected_error(runner, reports, monkeypatch):
    old, new = reports

    def boom(*args, **kwargs):
        raise RuntimeError("engine exploded")

    monkeypatch.setattr("exceldiff.cli.diff_command.diff", boom)

    result = runner.invoke(cli, ['diff', str(old), str(new)])

    assert result.exit_code == 3
    assert "Unexpected error: engine exploded" in result.output


def test_sheets(runner, reports):
    old, _ = reports

    result = runner.invoke(cli, ['sheets', str(old)])

    assert result.exit_code == 0
    assert result.output.splitlines() == ["  1. Report", "  2. Other"]


def test_sheets_csv(runner, temp_workdir):
    (temp_workdir / "data.csv").write_text("a,b\n", encoding='utf-8')

    result = runner.invoke(cli, ['sheets', 'data.csv'])

    assert result.exit_code == 0
    assert result.output.strip() == "1. data"


def test_sheets_unsupported(runner, temp_workdir):
    (temp_workdir / "book.ods").write_bytes(b"")

    result = runner.invoke(cli, ['sheets', 'book.ods'])

    assert result.exit_code == 1
    assert "Error:" in result.output


@pytest.fixture()
def invalid_log_level(monkeypatch):
    monkeypatch.setenv('EXCELDIFF_LOG_LEVEL', 'verbose')
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_diff_invalid_log_level(runner, reports, invalid_log_level):
    old, new = reports

    result = runner.invoke(cli, ['diff', str(old), str(new), '-o', 'diff.json'])

    assert result.exit_code == 1
    assert result.output.startswith("Error:")
    assert "LOG_LEVEL" in result.output


def test_sheets_invalid_log_level(runner, reports, invalid_log_level):
    old, _ = reports

    result = runner.invoke(cli, ['sheets', str(old)])

    assert result.exit_code == 1
    assert result.output.startswith("Error:")


def test_format_contradicting_extension(runner, reports, temp_workdir):
    old, new = reports

    result = runner.invoke(cli, ['diff', str(old), str(new), '-o', 'diff.json', '--format', 'xlsx'])

    assert result.exit_code == 1
    assert "Error: --format xlsx does not match output file diff.json" in result.output
    assert not (temp_workdir / "diff.json").exists()


def test_sheets_unexpected_error(runner, reports, monkeypatch):
    old, _ = reports

    def boom(*args, **kwargs):
        raise RuntimeError("registry exploded")

    monkeypatch.setattr(registry, 'find_reader', boom)

    result = runner.invoke(cli, ['sheets', str(old)])

    assert result.exit_code == 3
    assert "Unexpected error: registry exploded" in result.output
