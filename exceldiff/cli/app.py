"""
Excel Diff - command line group
"""

import click

from exceldiff import __version__
from exceldiff.registry import register_all_components

from .diff_command import diff_command
from .sheets_command import sheets_command


@click.group()
@click.version_option(version=__version__, prog_name='Excel Diff')
def cli():
    """
    Excel Diff - Compare two worksheets and highlight differences

    \b
    Commands:
      diff   - Compare two worksheets and write a colour-coded result
      sheets - List the sheets of a file

    \b
    Examples:
      # Compare two versions of a report
      exceldiff diff old.xlsx new.xlsx -o changes.xlsx

      # See which sheets a workbook has
      exceldiff sheets report.xlsx
    """
    # Register all components before running any command
    register_all_components()


cli.add_command(diff_command)
cli.add_command(sheets_command)


def main():
    cli()
