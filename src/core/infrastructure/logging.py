"""Logging setup.

- loguru：调试与运行日志（logger.bind(service=...)）
- structlog：业务事件，本地为彩色控制台输出，其余环境输出 JSON
"""

import logging
import sys
from pathlib import Path
from typing import Any

import structlog
from loguru import logger

from src.core.config import settings

_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[service]}</cyan> | <cyan>{name}:{line}</cyan> - <level>{message}</level>"
)
_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[service]} | {name}:{line} - {message}"


def setup_logging() -> None:
    level = logging.getLevelNamesMapping()[settings.LOG_LEVEL]
    local = settings.ENVIRONMENT == "local"

    logger.remove()
    logger.configure(extra={"service": "-"})
    logger.add(sys.stderr, level=settings.LOG_LEVEL, format=_CONSOLE_FORMAT, colorize=local)
    if settings.LOG_DIR and not local:
        logger.add(
            Path(settings.LOG_DIR) / "catalog_{time:YYYY-MM-DD}.log",
            level=settings.LOG_LEVEL,
            format=_FILE_FORMAT,
            rotation="00:00",
            retention="14 days",
        )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=True) if local else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
    logger.info(f"Logging ready (level={settings.LOG_LEVEL}, environment={settings.ENVIRONMENT})")


class BusinessEvents:
    """结构化业务事件。事件名即日志消息，字段用于检索。"""

    _log = structlog.get_logger("business.events")

    @classmethod
    def _emit(cls, event: str, domain: str, *, debug: bool = False, **fields: Any) -> None:
        log = cls._log.debug if debug else cls._log.info
        log(event, event_type=domain, **fields)

    # listing
    @classmethod
    def navigation_committed(cls, sequence: int, query: str, **extra: Any) -> None:
        cls._emit("navigation_committed", "listing", sequence=sequence, query=query, **extra)

    @classmethod
    def page_settled(cls, sequence: int, page: int, total: int, **extra: Any) -> None:
        cls._emit("page_settled", "listing", sequence=sequence, page=page, total=total, **extra)

    @classmethod
    def stale_page_discarded(
        cls, sequence: int | None, latest_sequence: int, **extra: Any
    ) -> None:
        cls._emit(
            "stale_page_discarded",
            "listing",
            debug=True,
            sequence=sequence,
            latest_sequence=latest_sequence,
            **extra,
        )

    # catalog
    @classmethod
    def catalog_page_served(
        cls, filter_slug: str, sort_by: str, page: int, total: int, **extra: Any
    ) -> None:
        cls._emit(
            "catalog_page_served",
            "catalog",
            filter=filter_slug,
            sort_by=sort_by,
            page=page,
            total=total,
            **extra,
        )

    @classmethod
    def tone_model_deleted(cls, model_id: str, profile_id: str, **extra: Any) -> None:
        cls._emit("tone_model_deleted", "catalog", model_id=model_id, profile_id=profile_id, **extra)
