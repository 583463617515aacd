import logging
import sys

import structlog

PACKAGE_LOGGER = "hyprland_ipc"
_HANDLER_NAME = "hyprland_ipc.stderr"


def get_library_logger(name: str) -> structlog.BoundLogger:
    """Logger for library modules, backed by the stdlib logger ``name``.

    Output is governed by the host's ``logging`` setup, so nothing is printed
    until a handler is configured for the ``hyprland_ipc`` logger tree.
    """
    return structlog.wrap_logger(logging.getLogger(name))


def configure_logging(level: str = "WARNING") -> None:
    """Configure structured logging for the CLI. Library code only logs at debug."""
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if sys.stderr.isatty() else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    # Route library loggers to stderr; replace the handler from a previous call.
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in [h for h in package_logger.handlers if h.get_name() == _HANDLER_NAME]:
        package_logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(numeric_level)


def get_logger(instance: str | None = None, **kwargs: object) -> structlog.BoundLogger:
    """Get a structured logger, optionally bound to an instance signature."""
    log = structlog.get_logger()
    if instance:
        log = log.bind(instance=instance)
    if kwargs:
        log = log.bind(**kwargs)
    return log
