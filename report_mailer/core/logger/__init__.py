# Path: report_mailer/core/logger/__init__.py
"""
report_mailer Logger Package

IPO-aware logging for report runs.

Provides separate log streams for:
- INPUT layer (definition loader, data sources)
- PROCESS layer (casting, execution, assembly)
- OUTPUT layer (rendering, delivery)

and diagnostic sinks that pipeline components report through.
"""

from .ipo_logging import (
    setup_ipo_logging,
    get_input_logger,
    get_process_logger,
    get_output_logger,
)
from .diagnostics import (
    DiagnosticSink,
    LoggingSink,
    RecordingSink,
)

__all__ = [
    'setup_ipo_logging',
    'get_input_logger',
    'get_process_logger',
    'get_output_logger',
    'DiagnosticSink',
    'LoggingSink',
    'RecordingSink',
]
