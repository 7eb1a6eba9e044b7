"""
Sheets Command - List the sheets of a file
"""

import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from exceldiff.core import get_settings
from exceldiff.interfaces import ExcelDiffError
from exceldiff.registry import registry
from exceldiff.utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)


@click.command('sheets')
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--reader', 'reader_name', help='Reader implementation (default: by file extension)')
def sheets_command(file, reader_name):
    """
    List sheet names of a file, in workbook order.

    FILE: Path to a workbook or delimited text file
    """
    try:
        settings = get_settings()
        setup_logging(
            log_level=settings.LOG_LEVEL,
            log_dir=settings.LOG_DIR,
            component='exceldiff-sheets-command'
        )

        if reader_name:
            reader = registry.create_reader(reader_name, {})
        else:
            reader = registry.find_reader(file)
        names = reader.list_sheet_names(file)
    except (ExcelDiffError, ValidationError, ValueError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Listing sheets failed: {e}")
        click.echo(f"\nUnexpected error: {e}", err=True)
        sys.exit(3)

    for index, name in enumerate(names, start=1):
        click.echo(f"{index:>3}. {name}")
