import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from exceldiff.core import Settings, get_settings
from exceldiff.utils.logging_setup import ColourFormatter, setup_logging


@pytest.fixture(autouse=True)
def _fresh_settings(temp_workdir):
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch):
    for name in ('EXCELDIFF_LOG_LEVEL', 'EXCELDIFF_LOG_DIR', 'EXCELDIFF_DEFAULT_OUTPUT'):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()

    assert settings.LOG_LEVEL == 'INFO'
    assert settings.LOG_DIR is None
    assert settings.DEFAULT_OUTPUT == Path('diff_output.xlsx')


def test_environment_overrides(monkeypatch, tmp_path: Path):
    monkeypatch.setenv('EXCELDIFF_LOG_LEVEL', 'debug')
    monkeypatch.setenv('EXCELDIFF_LOG_DIR', str(tmp_path / 'logs'))

    settings = get_settings()

    assert settings.LOG_LEVEL == 'DEBUG'
    assert settings.LOG_DIR == tmp_path / 'logs'
    assert get_settings() is settings


def test_invalid_log_level(monkeypatch):
    monkeypatch.setenv('EXCELDIFF_LOG_LEVEL', 'LOUD')

    with pytest.raises(ValidationError):
        Settings()


def test_console_logging_level():
    logger = setup_logging('WARNING')

    assert logger is logging.getLogger()
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1


def test_file_logging(tmp_path: Path):
    log_dir = tmp_path / 'logs'

    logger = setup_logging('WARNING', log_dir=log_dir, component='unit')
    logging.getLogger('exceldiff.test').debug('detail line')
    for handler in logger.handlers:
        handler.flush()

    assert logger.level == logging.DEBUG
    log_files = list(log_dir.glob('unit_*.log'))
    assert len(log_files) == 1
    assert 'detail line' in log_files[0].read_text(encoding='utf-8')

    for handler in logger.handlers:
        handler.close()


def test_colour_formatter_leaves_record_untouched():
    record = logging.LogRecord('x', logging.ERROR, __file__, 1, 'boom', None, None)

    text = ColourFormatter('%(levelname)s %(message)s').format(record)

    assert '\033[31m' in text
    assert record.levelname == 'ERROR'
