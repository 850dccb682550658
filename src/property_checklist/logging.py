"""Structured logging for the engine and its CLI.

Events go to stderr so stdout stays free for the evaluation JSON. The engine
binds per-evaluation context (reference date, premium state) through
``structlog.contextvars``, so every scorer event logged during one evaluation
carries it without the scorers knowing about it.
"""

import logging
import sys
from collections.abc import Iterator, MutableMapping
from contextlib import contextmanager
from enum import Enum
from typing import Any

import structlog
from structlog.typing import FilteringBoundLogger

# Floats in events are scores, ratios and growth rates; more digits are noise.
_FLOAT_PRECISION = 4


def _plain_values(
    _logger: Any, _method: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Log code-set members by value and trim float noise."""
    for key, value in event_dict.items():
        if isinstance(value, Enum):
            event_dict[key] = value.value
        elif isinstance(value, float):
            event_dict[key] = round(value, _FLOAT_PRECISION)
    return event_dict


def configure_logging(*, json_output: bool = False, level: int = logging.INFO) -> None:
    """Configure structlog.

    Args:
        json_output: One JSON object per line instead of the console format.
        level: Minimum level to emit.
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _plain_values,
    ]
    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


@contextmanager
def evaluation_context(**context: Any) -> Iterator[None]:
    """Attach ``context`` to every event logged inside the block."""
    with structlog.contextvars.bound_contextvars(**context):
        yield


def get_logger(name: str) -> FilteringBoundLogger:
    logger: FilteringBoundLogger = structlog.get_logger(name)
    return logger
