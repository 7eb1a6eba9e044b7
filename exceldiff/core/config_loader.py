"""
Excel Diff - Configuration Loader

Loads and validates YAML comparison profiles.

YAML STRUCTURE (every section is optional):

    reader:
      implementation: csv
      config:
        delimiter: ";"
    writer:
      implementation: openpyxl
      config:
        sheet_title: Changes
    options:
      ignore_whitespace: true
      diff_only: true
      include_header: true
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

from .config import ComparisonOptions, ComponentConfig, ExcelDiffConfig

OPTION_KEYS = ('ignore_whitespace', 'diff_only', 'include_header')


def _parse_component(data: dict, section: str) -> Optional[ComponentConfig]:
    raw = data.get(section)
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValueError(f"Section '{section}' must be a mapping")
    if 'implementation' not in raw:
        raise ValueError(f"Invalid config structure: missing '{section}.implementation'")

    config = raw.get('config') or {}
    if not isinstance(config, dict):
        raise ValueError(f"'{section}.config' must be a mapping")

    return ComponentConfig(implementation=str(raw['implementation']), config=config)


def _parse_options(data: dict) -> ComparisonOptions:
    raw = data.get('options') or {}
    if not isinstance(raw, dict):
        raise ValueError("Section 'options' must be a mapping")

    unknown = set(raw) - set(OPTION_KEYS)
    if unknown:
        raise ValueError(f"Unknown options: {sorted(unknown)}")

    for key, value in raw.items():
        if not isinstance(value, bool):
            raise ValueError(f"Option '{key}' must be true or false")

    return ComparisonOptions(**raw)


def load_config(config_path: Optional[Path] = None) -> ExcelDiffConfig:
    """
    Load a comparison profile from a YAML file.

    Args:
        config_path: Path to YAML file. If None, uses $EXCELDIFF_CONFIG,
                     or returns the default profile when that is unset.

    Returns:
        ExcelDiffConfig object

    Raises:
        FileNotFoundError: If config file not found
        ValueError: If config is invalid
    """
    # Load .env file if it exists
    load_dotenv()

    if config_path is None:
        env_config = os.getenv('EXCELDIFF_CONFIG')
        if not env_config:
            return ExcelDiffConfig()
        config_path = Path(env_config)

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a mapping: {config_path}")

    config = ExcelDiffConfig(
        reader=_parse_component(data, 'reader'),
        options=_parse_options(data),
    )
    writer = _parse_component(data, 'writer')
    if writer is not None:
        config.writer = writer

    return config
