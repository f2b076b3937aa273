"""Default structlog output for library use."""

import logging
import sys

import structlog


def _stderr_logger_factory(*args) -> structlog.PrintLogger:
    # Looked up per logger so a replaced sys.stderr is honoured
    return structlog.PrintLogger(sys.stderr)


def configure_default_logging() -> None:
    """Send kvconfig diagnostics to stderr unless structlog is configured.

    Applications that call ``structlog.configure`` themselves, or
    ``kvconfig.main.setup_logging``, keep their own setup. Only warnings and
    errors are printed by default.
    """
    if structlog.is_configured():
        return

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=_stderr_logger_factory,
    )
