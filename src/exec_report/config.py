"""Runtime settings and logger setup for report generation."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

DEFAULT_REPORT_VERSION = 'v1'
DEFAULT_FILE_EXTENSION = 'pdf'

LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'


def _parse_level(value: Optional[str], default: int = logging.INFO) -> int:
    if not value:
        return default
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else default


@dataclass(frozen=True)
class ReportSettings:
    font_dir: Optional[str] = None
    default_report_version: str = DEFAULT_REPORT_VERSION
    file_extension: str = DEFAULT_FILE_EXTENSION
    log_level: int = logging.INFO

    @classmethod
    def from_env(cls, environ=None) -> 'ReportSettings':
        env = os.environ if environ is None else environ
        return cls(
            font_dir=(env.get('EXEC_REPORT_FONT_DIR') or '').strip() or None,
            default_report_version=(env.get('EXEC_REPORT_VERSION') or '').strip() or DEFAULT_REPORT_VERSION,
            log_level=_parse_level(env.get('EXEC_REPORT_LOG_LEVEL')),
        )


@dataclass(frozen=True)
class LoggerConfig:
    name: str = 'exec_report'
    level: int = logging.INFO
    max_bytes: int = 2_000_000
    backup_count: int = 5
    encoding: str = 'utf-8'
    console: bool = False
    log_file: Optional[str] = None


def _same_file(handler: logging.Handler, path: str) -> bool:
    base = getattr(handler, 'baseFilename', None)
    if not base:
        return False
    return os.path.normcase(os.path.abspath(base)) == os.path.normcase(os.path.abspath(path))


def configure_logging(config: LoggerConfig) -> logging.Logger:
    """Attach console and/or rotating file handlers to the package logger.

    Calling it again with the same config does not duplicate handlers.
    """
    logger = logging.getLogger(config.name)
    logger.setLevel(int(config.level))

    if config.log_file:
        Path(os.path.dirname(os.path.abspath(config.log_file))).mkdir(parents=True, exist_ok=True)
        if not any(_same_file(h, config.log_file) for h in logger.handlers):
            handler = RotatingFileHandler(
                config.log_file,
                maxBytes=int(config.max_bytes),
                backupCount=int(config.backup_count),
                encoding=config.encoding,
            )
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(handler)

    wants_console = bool(config.console or str(os.environ.get('EXEC_REPORT_LOG_STDOUT', '')).strip() == '1')
    has_console = any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, RotatingFileHandler)
        for h in logger.handlers
    )
    if wants_console and not has_console:
        stream = logging.StreamHandler(stream=sys.stderr)
        stream.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(stream)

    return logger
