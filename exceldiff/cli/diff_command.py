"""
Diff Command - Compare two worksheets

Reads one sheet from each file, compares them by row position and writes a
colour-coded result.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from exceldiff.core import ExcelDiffConfig, get_settings, load_config
from exceldiff.engine import DiffResult, diff, filter_differences
from exceldiff.interfaces import ExcelDiffError, ReaderInterface, UnsupportedFormatError
from exceldiff.registry import registry
from exceldiff.utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)

FORMAT_WRITERS = {
    'xlsx': 'openpyxl',
    'json': 'json',
}

SUFFIX_FORMATS = {
    '.xlsx': 'xlsx',
    '.xlsm': 'xlsx',
    '.json': 'json',
}


def select_reader(
    source: Path,
    reader_name: Optional[str],
    profile: ExcelDiffConfig,
) -> ReaderInterface:
    """
    Pick the reader for one file.

    Precedence: --reader, then the profile's reader, then the first
    registered reader that accepts the file extension.
    """
    reader_config = profile.reader.config if profile.reader else {}
    if reader_name is None and profile.reader is not None:
        reader_name = profile.reader.implementation

    if reader_name is None:
        return registry.find_reader(source, reader_config)

    reader = registry.create_reader(reader_name, reader_config)
    if not reader.can_handle(source):
        raise UnsupportedFormatError(f"{source} is not a supported file for reader '{reader_name}'")
    return reader


def select_writer_name(output: Path, output_format: Optional[str], profile: ExcelDiffConfig) -> str:
    """
    Writer from --format, else .json suffix, else the profile's writer.

    Raises:
        ValueError: If --format contradicts a known output suffix
    """
    if output_format:
        output_format = output_format.lower()
        implied = SUFFIX_FORMATS.get(output.suffix.lower())
        if implied is not None and implied != output_format:
            raise ValueError(
                f"--format {output_format} does not match output file {output.name}"
            )
        return FORMAT_WRITERS[output_format]
    if output.suffix.lower() == '.json':
        return 'json'
    return profile.writer.implementation


def print_summary(result: DiffResult) -> None:
    summary = result.summary()
    click.echo("\nDiff Summary:")
    click.echo(f"  Identical rows: {summary.unchanged}")
    click.echo(f"  Modified rows:  {summary.modified}")
    click.echo(f"  Removed rows:   {summary.removed}")
    click.echo(f"  Added rows:     {summary.added}")


@click.command('diff')
@click.argument('file1', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('file2', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    '--output', '-o',
    type=click.Path(dir_okay=False, path_type=Path),
    help='Output file path (default: diff_output.xlsx)'
)
@click.option('--sheet1', help='Sheet name in first file (default: first sheet)')
@click.option('--sheet2', help='Sheet name in second file (default: first sheet)')
@click.option(
    '--diff-only',
    is_flag=True,
    help='Only output rows with differences (exclude identical rows)'
)
@click.option(
    '--no-header',
    is_flag=True,
    help='Do not include header row when using --diff-only'
)
@click.option(
    '--ignore-whitespace',
    is_flag=True,
    help='Ignore whitespace differences (trim and collapse whitespace in text values)'
)
@click.option(
    '--format', 'output_format',
    type=click.Choice(sorted(FORMAT_WRITERS), case_sensitive=False),
    help='Output format; must agree with a .xlsx/.json output extension (default: from extension)'
)
@click.option('--reader', 'reader_name', help='Reader implementation (default: by file extension)')
@click.option(
    '--config', 'config_file',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Comparison profile (YAML)'
)
def diff_command(
    file1,
    file2,
    output,
    sheet1,
    sheet2,
    diff_only,
    no_header,
    ignore_whitespace,
    output_format,
    reader_name,
    config_file
):
    """
    Compare two worksheets and highlight differences.

    FILE1: Path to the first file (baseline)
    FILE2: Path to the second file (comparison)

    Rows are compared by position. Changed cells are shown as
    "old → new" in red, removed rows in yellow and added rows in orange.

    \b
    Examples:
      # Compare the first sheets of two workbooks
      exceldiff diff old.xlsx new.xlsx -o changes.xlsx

      # Only differences, ignoring whitespace
      exceldiff diff old.xlsx new.xlsx --diff-only --ignore-whitespace

      # Compare named sheets, write JSON
      exceldiff diff a.xlsx b.xlsx --sheet1 Data --sheet2 Data -o diff.json
    """
    try:
        settings = get_settings()
        setup_logging(
            log_level=settings.LOG_LEVEL,
            log_dir=settings.LOG_DIR,
            component='exceldiff-diff-command'
        )

        profile = load_config(config_file)

        # Flags can only switch options on; absent flags keep the profile value
        ignore_whitespace = ignore_whitespace or profile.options.ignore_whitespace
        diff_only = diff_only or profile.options.diff_only
        include_header = diff_only and profile.options.include_header and not no_header

        output = output or settings.DEFAULT_OUTPUT
        writer_name = select_writer_name(output, output_format, profile)

        reader1 = select_reader(file1, reader_name, profile)
        reader2 = select_reader(file2, reader_name, profile)

        for path, reader, sheet in ((file1, reader1, sheet1), (file2, reader2, sheet2)):
            if sheet is None:
                sheets = reader.list_sheet_names(path)
                if sheets:
                    click.echo(f"Reading first sheet from {path}: '{sheets[0]}'")

        click.echo(f"\nReading {file1}...")
        left = reader1.load(file1, sheet1)
        click.echo(f"  Loaded {len(left)} rows")

        click.echo(f"Reading {file2}...")
        right = reader2.load(file2, sheet2)
        click.echo(f"  Loaded {len(right)} rows")

        click.echo("\nComparing worksheets...")
        if ignore_whitespace:
            click.echo("  Ignoring whitespace differences")
        result = diff(left, right, ignore_whitespace=ignore_whitespace)

        print_summary(result)

        if diff_only:
            result = filter_differences(result, left, include_header=include_header)

        writer_config = profile.writer.config if writer_name == profile.writer.implementation else {}
        writer = registry.create_writer(writer_name, writer_config)

        click.echo(f"\nWriting diff to {output}...")
        write_result = writer.write(result, output)

    except (ExcelDiffError, ValidationError, ValueError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Diff failed: {e}")
        click.echo(f"\nUnexpected error: {e}", err=True)
        sys.exit(3)

    if diff_only:
        click.echo(f"\nDone! Diff written to {output} ({write_result.rows_written} rows)")
    else:
        click.echo(f"\nDone! Diff written to {output}")

    sys.exit(0)
