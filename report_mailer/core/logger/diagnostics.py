# Path: report_mailer/core/logger/diagnostics.py
"""
Diagnostic Sinks

Pipeline components report what they do through a DiagnosticSink
instead of a global logger, so a run can be observed (or silenced)
in isolation.

    LoggingSink   - forwards events to an IPO layer logger
    RecordingSink - keeps events in memory (tests, dry runs)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Protocol, Tuple

from .ipo_logging import get_input_logger, get_output_logger, get_process_logger


# Event name prefix -> IPO layer
_EVENT_LAYERS = {
    'source': 'input',
    'definition': 'input',
    'query': 'process',
    'assembly': 'process',
    'render': 'output',
    'delivery': 'output',
}

_LAYER_LOGGERS = {
    'input': get_input_logger,
    'process': get_process_logger,
    'output': get_output_logger,
}


class DiagnosticSink(Protocol):
    """Receives typed pipeline events."""

    def emit(self, event: str, level: int = logging.INFO, **fields: Any) -> None:
        """
        Record one event.

        Args:
            event: Dotted event name (e.g., 'query.finished')
            level: logging level of the event
            **fields: Structured event data
        """
        ...


def format_event(event: str, fields: Dict[str, Any]) -> str:
    """Render an event as 'event key=value ...' (keys sorted)."""
    if not fields:
        return event
    pairs = ' '.join(f"{key}={fields[key]!r}" for key in sorted(fields))
    return f"{event} {pairs}"


class LoggingSink:
    """
    Sink that writes events to the IPO layer loggers.

    The layer is chosen from the event prefix: 'source.*' goes to
    input.pipeline, 'query.*' to process.pipeline, and so on.
    """

    def __init__(self, name: str = 'pipeline'):
        self.name = name

    def emit(self, event: str, level: int = logging.INFO, **fields: Any) -> None:
        prefix = event.split('.', 1)[0]
        layer = _EVENT_LAYERS.get(prefix, 'process')
        logger = _LAYER_LOGGERS[layer](self.name)
        logger.log(level, format_event(event, fields))


@dataclass
class RecordingSink:
    """Sink that keeps every event in memory."""

    events: List[Tuple[str, int, Dict[str, Any]]] = field(default_factory=list)

    def emit(self, event: str, level: int = logging.INFO, **fields: Any) -> None:
        self.events.append((event, level, dict(fields)))

    def names(self) -> List[str]:
        """Event names in emission order."""
        return [name for name, _, _ in self.events]

    def of(self, event: str) -> List[Dict[str, Any]]:
        """Fields of every event with the given name."""
        return [data for name, _, data in self.events if name == event]


__all__ = [
    'DiagnosticSink',
    'LoggingSink',
    'RecordingSink',
    'format_event',
]
