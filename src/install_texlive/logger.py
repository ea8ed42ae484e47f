"""
Structured logging for the action.

Output goes to stdout as plain console lines, which is what the Actions log
viewer shows. The level comes from ``advanced.log_level`` in the config;
``RUNNER_DEBUG`` maps to DEBUG there.
"""

import structlog

# TRACE sits below DEBUG for subprocess chatter
LOG_LEVELS = {
    "INFO": 20,
    "DEBUG": 10,
    "TRACE": 5,
}

_configured_level: int | None = None


def configure_logging(level: str) -> None:
    """Configure structlog for the given level name, once per level."""
    global _configured_level

    log_level = LOG_LEVELS.get(level, LOG_LEVELS["INFO"])
    if log_level == _configured_level:
        return

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        # Loggers must not cache their wrapper, a reload may change the level
        cache_logger_on_first_use=False,
    )
    _configured_level = log_level


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger, configuring structlog from the current config first."""
    from install_texlive.config import get_config

    configure_logging(get_config().advanced.log_level)
    return structlog.get_logger(name)
