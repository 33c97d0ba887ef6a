import logging
import sys
from contextvars import ContextVar, Token
from typing import Any, Final
from collections.abc import Mapping, MutableMapping
from logging import LoggerAdapter, LogRecord
from typing_extensions import override
from fastapi import Request

_LOG_FORMAT: Final[str] = (
    "%(asctime)s %(levelname)s %(name)s :: %(message)s %(context)s[req=%(request_id)s]"
)

# set per request by CorrelationIdMiddleware; read by loggers created without a request
_request_id: ContextVar[str] = ContextVar("request_id", default="-")

# extra keys rendered into %(context)s when present on a record
CONTEXT_KEYS: Final[tuple[str, ...]] = ("author_id", "book_id", "code", "status_code")


class RequestLogFilter(logging.Filter):
    """
    Ensures every record has request_id and context keys.
    """

    @override
    def filter(self, record: LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = "-"
        record.context = "".join(
            f"{key}={getattr(record, key)} " for key in CONTEXT_KEYS if hasattr(record, key)
        )
        return True


class RequestContextAdapter(LoggerAdapter):  # type: ignore[type-arg]
    """
    Merges per-call `extra` into the adapter's request context
    (the stock adapter replaces it). Without a request, the id bound by
    the middleware for the current context is used.
    """

    @override
    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {
            "request_id": _request_id.get(),
            **(self.extra or {}),
            **kwargs.get("extra", {}),
        }
        return msg, kwargs


def bind_request_id(request_id: str) -> Token[str]:
    """Make `request_id` the current request id for this context."""
    return _request_id.set(request_id)


def reset_request_id(token: Token[str]) -> None:
    _request_id.reset(token)


def setup_logging(level: int | str = logging.INFO) -> None:
    """
    Configure root/uvicorn loggers (request_id + book/author context).
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.addFilter(RequestLogFilter())
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    root.addHandler(handler)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        lg = logging.getLogger(name)
        lg.handlers.clear()
        lg.setLevel(level)
        lg.addHandler(handler)
        lg.propagate = False


def get_logger(
    name: str,
    request: Request | None = None
) -> LoggerAdapter[logging.Logger]:
    """
    Attach request context (request_id); call-site `extra` is kept.
    Module-level loggers pick up the id bound for the current request.
    Usage: logger = get_logger(__name__, request)
    """
    extra: Mapping[str, str] = {}
    if request is not None:
        extra["request_id"] = getattr(request.state, "correlation_id", "-")
    return RequestContextAdapter(logging.getLogger(name), extra)
