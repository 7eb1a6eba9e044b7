"""Excel Diff - CLI commands"""

from .app import cli, main

__all__ = ['cli', 'main']
