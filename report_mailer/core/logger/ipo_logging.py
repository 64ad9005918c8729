# Path: report_mailer/core/logger/ipo_logging.py
"""
IPO-Aware Logging for report_mailer

A report run is split into three layers, each with its own logger
namespace and (optionally) its own log file:

    input.*    definition loader, data source adapters, CLI
    process.*  casting, query execution, section assembly
    output.*   formatters, charts, delivery

full_activity.log receives all three.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


LOG_FORMAT = '[%(asctime)s] [%(levelname)s] %(name)s - %(message)s'
CONSOLE_FORMAT = '[%(levelname)s] %(name)s - %(message)s'
DATE_FORMAT = '%Y-%m-%dT%H:%M:%S%z'

LAYERS = ('input', 'process', 'output')


class IPOFilter(logging.Filter):
    """Pass only records whose logger belongs to one layer."""

    def __init__(self, layer: str):
        super().__init__()
        self.layer = layer

    def filter(self, record: logging.LogRecord) -> bool:
        return record.name.split('.', 1)[0] == self.layer


def _file_handler(path: Path, layer: Optional[str] = None) -> logging.Handler:
    handler = logging.FileHandler(path, encoding='utf-8')
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    if layer is not None:
        handler.addFilter(IPOFilter(layer))
    return handler


def setup_ipo_logging(
    log_dir: Optional[Path] = None,
    log_level: str = 'INFO',
    console_output: bool = True,
) -> None:
    """
    Configure the root logger for a report run.

    Previous root handlers are removed. The console handler writes to
    stderr, keeping stdout free for a printed report. When log_dir is
    given it receives input_activity.log, process_activity.log,
    output_activity.log and full_activity.log.

    Args:
        log_dir: Directory for log files (None disables file logs)
        log_level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console_output: Also log to stderr

    Example:
        setup_ipo_logging(log_level='DEBUG')
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        root.addHandler(_file_handler(log_dir / 'full_activity.log'))
        for layer in LAYERS:
            root.addHandler(_file_handler(log_dir / f'{layer}_activity.log', layer))

    if console_output:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(level)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        root.addHandler(console)


def get_input_logger(name: str) -> logging.Logger:
    """Logger for the input layer (e.g. 'definition_loader', 'sqlite')."""
    return logging.getLogger(f'input.{name}')


def get_process_logger(name: str) -> logging.Logger:
    """Logger for the process layer (e.g. 'query_executor')."""
    return logging.getLogger(f'process.{name}')


def get_output_logger(name: str) -> logging.Logger:
    """Logger for the output layer (e.g. 'charts', 'smtp')."""
    return logging.getLogger(f'output.{name}')


__all__ = [
    'IPOFilter',
    'setup_ipo_logging',
    'get_input_logger',
    'get_process_logger',
    'get_output_logger',
]
