import logging

import structlog


def configure_logging(level: int | str | None = None) -> None:
    """Configure structlog/standard logging bridge.

    The library never calls this itself; applications opt in. When ``level``
    is omitted, ``GCSM_LOG_LEVEL`` is used.
    """

    if level is None:
        from gcsecretmanager.config.settings import get_settings

        level = get_settings().log_level.upper()

    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            timestamper,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(level=level, format="%(message)s")

