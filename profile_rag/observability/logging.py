"""
structlog setup for profile-rag.

Logs go to stderr so CLI output on stdout (search results, stats JSON,
assembled context) stays machine-readable. The renderer follows
LOG_FORMAT, or the environment when LOG_FORMAT is "auto": JSON in
production, colored console otherwise.

Every service operation runs inside identity_context(), so each log line
it emits carries the username and platform it was working on.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from structlog.types import Processor

from profile_rag.config.settings import Settings, get_settings

# Libraries that log every HTTP round trip to the Chroma server at INFO
QUIET_LOGGERS = ("chromadb", "httpx", "httpcore", "urllib3")


def _render_chain(settings: Settings) -> list[Processor]:
    use_json = settings.log_format == "json" or (
        settings.log_format == "auto" and settings.is_production
    )
    if use_json:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def setup_logging(settings: Settings | None = None) -> None:
    """
    Configure structlog and the stdlib logging bridge.

    Called once at CLI startup, before any logger is used.

    Usage:
        setup_logging()
        logger = structlog.get_logger(__name__)
        logger.info("Stored profile data", username="jane", documents=5)
    """
    settings = settings or get_settings()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        *_render_chain(settings),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, settings.log_level),
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


@contextmanager
def identity_context(username: str, platform: str) -> Iterator[None]:
    """Bind username and platform to every log line emitted inside the block."""
    with structlog.contextvars.bound_contextvars(username=username, platform=platform):
        yield
