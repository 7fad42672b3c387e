# colorizer/shared/logging_config.py
import sys
import logging
from typing import Optional

import structlog
from opentelemetry import trace
from colorizer.shared.config import LogFormat, settings

def add_open_telemetry_spans(_, __, event_dict):
    """
    Processor to inject the current TraceID and SpanID into the log entry.
    Links storage warnings to the save/load span that produced them.
    """
    span = trace.get_current_span()
    if not span.is_recording():
        event_dict["trace_id"] = None
        event_dict["span_id"] = None
        return event_dict

    ctx = span.get_span_context()
    event_dict["trace_id"] = format(ctx.trace_id, "032x")
    event_dict["span_id"] = format(ctx.span_id, "016x")
    return event_dict

def build_processors(log_format: LogFormat = settings.LOG_FORMAT) -> list:
    """
    Returns the structlog processor chain, ending with the renderer
    selected by `log_format`.
    """
    processors = [
        structlog.contextvars.merge_contextvars,
        add_open_telemetry_spans,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == LogFormat.JSON:
        # Production: Machine-readable JSON
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Development: Human-readable colored console output
        processors.append(structlog.dev.ConsoleRenderer())
    return processors

def configure_logging(log_format: Optional[LogFormat] = None, log_level: Optional[str] = None):
    """
    Configures structlog and the standard logging library to emit
    structured JSON logs (Production) or colored text logs (Development).
    """
    log_format = log_format or settings.LOG_FORMAT
    log_level = (log_level or settings.LOG_LEVEL).upper()

    structlog.configure(
        processors=build_processors(log_format),
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(log_level)),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Host applications often log through the stdlib; keep both on stdout.
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )
