import logging
import os
import sys
from typing import Any, Literal

import structlog

LogFormat = Literal["json", "plain", "auto"]

CI_ENV_VARS = ("CI", "CONTINUOUS_INTEGRATION", "GITHUB_ACTIONS", "JENKINS_URL")


def _stderr_wants_json() -> bool:
    """
    Whether `unistring` should write its stderr events as JSON under "auto".

    A person at a terminal reads the console form; a CI job or a shell
    redirect (`unistring split ... 2> events.log`) gets one JSON object per line.
    """
    if any(os.environ.get(var) for var in CI_ENV_VARS):
        return True
    # stderr piped or captured
    return not sys.stderr.isatty()


def setup_logging(format_type: LogFormat = "auto", level: str = "WARNING") -> None:
    """
    Configure the structlog events the `unistring` CLI emits.

    Events go to stderr so command results on stdout can be piped as-is.

    Args:
        format_type: "json" for JSON output, "plain" for human-readable,
                "auto" for JSON under CI or a redirected stderr.
        level: Minimum level name that is emitted (e.g. "INFO").
    """
    use_json = format_type == "json" or (format_type == "auto" and _stderr_wants_json())

    if use_json:
        processors: list[Any] = [
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        # Loggers rebind to the current stderr on every setup_logging() call
        cache_logger_on_first_use=False,
    )


log = structlog.get_logger()
