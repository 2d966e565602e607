# paint_queue/logging.py
import logging
import sys
from decimal import Decimal
from typing import Any

import orjson
import structlog
from structlog.stdlib import BoundLogger


def _resolve_level(level_name: str) -> int:
    resolved = logging.getLevelName((level_name or "").upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def _default(value: Any) -> Any:
    # psycopg hands back Decimal for NUMERIC columns
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, BaseException):
        return f"{type(value).__name__}: {value}"
    return str(value)


def _orjson_dumps(obj: Any, **_: Any) -> str:
    # datetimes from order rows serialise natively as ISO 8601
    return orjson.dumps(obj, default=_default, option=orjson.OPT_NON_STR_KEYS | orjson.OPT_UTC_Z).decode()


def configure_logging(level_name: str) -> None:
    level = _resolve_level(level_name)

    logging.basicConfig(level=level, format="%(message)s", stream=sys.stdout)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(serializer=_orjson_dumps),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(*args: Any, **kwargs: Any) -> BoundLogger:
    return structlog.get_logger(*args, **kwargs)
