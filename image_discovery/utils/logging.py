"""structlog configuration for the API server and the CLI.

Every event carries ``service``, ``level`` and an ISO ``timestamp``.
Output is JSON when ``APP_ENV=production`` (or ``json_output=True``) and
a console rendering otherwise; colours only when the stream is a TTY.
JSON events serialize tracebacks into an ``exception`` string.

Standard-library records (uvicorn, httpx, openai) are routed through the
same processors and stream.  The HTTP client libraries log every request
at INFO, so they are held at WARNING unless the application itself runs
at a stricter level.
"""

import logging
import os
import sys
from typing import IO

import structlog

SERVICE_NAME = "image-discovery"

# Libraries whose INFO output is one line per provider call.
_NOISY_LOGGERS: tuple[str, ...] = ("httpx", "httpcore", "openai")


def _add_service(
    _logger: object, _method: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        _add_service,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _select_renderers(use_json: bool, output: IO[str]) -> list[structlog.types.Processor]:
    if use_json:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    colors = hasattr(output, "isatty") and output.isatty()
    return [structlog.dev.ConsoleRenderer(colors=colors)]


def _route_stdlib(
    processors: list[structlog.types.Processor],
    renderers: list[structlog.types.Processor],
    output: IO[str],
    level: int,
) -> None:
    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *processors,
            *renderers,
        ],
    )
    handler = logging.StreamHandler(output)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = False,
    stream: IO[str] | None = None,
) -> structlog.BoundLogger:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR.
        json_output: Force JSON even outside production.
        stream: Destination for all records.  Defaults to stdout; the CLI
                passes stderr so stdout carries only the result.

    Returns:
        A configured structlog BoundLogger.
    """
    use_json = json_output or os.environ.get("APP_ENV", "development") == "production"
    output = stream or sys.stdout
    level = logging.getLevelName(log_level.upper())

    processors = _shared_processors()
    renderers = _select_renderers(use_json, output)

    structlog.configure(
        processors=[*processors, *renderers],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=True,
    )
    _route_stdlib(processors, renderers, output, level)

    return structlog.get_logger()


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a logger tagged with ``logger_name``, configuring defaults on first use."""
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(logger_name=name)
