from __future__ import annotations

import contextvars
import json
import logging
import os
import time
import uuid
from datetime import datetime, timezone
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

ROOT_LOGGER = "claimdesk"
REQUEST_ID_HEADER = "x-request-id"

# Log enrichment only. Authorization never reads these; the request's
# RequestOrgContext is passed explicitly to the services.
_request_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
_user_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "user_id", default=None
)
_org_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "organization_id", default=None
)

_CONTEXT_FIELDS: tuple[tuple[str, contextvars.ContextVar[str | None]], ...] = (
    ("request_id", _request_id_var),
    ("user_id", _user_id_var),
    ("organization_id", _org_id_var),
)

_configured = False


class JsonFormatter(logging.Formatter):
    """One JSON object per line: ts, level, logger, message, event and its fields."""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict[str, Any] = {
            "ts": ts.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        event = getattr(record, "event", None)
        if event:
            payload["event"] = event
        fields = getattr(record, "fields", None)
        if isinstance(fields, dict):
            payload.update((k, v) for k, v in fields.items() if v is not None)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=True)


def configure_logging() -> None:
    global _configured  # noqa: PLW0603
    if _configured:
        return
    level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
    if not isinstance(level, int):
        level = logging.INFO
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)
    root.handlers = [handler]
    root.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)


def set_request_context(*, request_id: str) -> list[contextvars.Token]:
    """Start a fresh logging context; returns tokens for ``reset_request_context``."""
    return [
        var.set(request_id if var is _request_id_var else None) for _, var in _CONTEXT_FIELDS
    ]


def reset_request_context(tokens: list[contextvars.Token]) -> None:
    for (_, var), token in zip(_CONTEXT_FIELDS, tokens):
        var.reset(token)


def set_user_context(user_id: str | None) -> None:
    _user_id_var.set(user_id)


def set_org_context(organization_id: str | None) -> None:
    _org_id_var.set(organization_id)


def _merge_fields(fields: dict[str, Any]) -> dict[str, Any]:
    payload = {name: var.get() for name, var in _CONTEXT_FIELDS if var.get()}
    payload.update((k, v) for k, v in fields.items() if v is not None)
    return payload


def log_event(
    logger: logging.Logger, event: str, *, level: int = logging.INFO, **fields: Any
) -> None:
    logger.log(level, event, extra={"event": event, "fields": _merge_fields(fields)})


def log_exception(logger: logging.Logger, event: str, **fields: Any) -> None:
    logger.exception(event, extra={"event": event, "fields": _merge_fields(fields)})


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tags every log line of a request with its id and logs the outcome."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        tokens = set_request_context(request_id=request_id)
        logger = get_logger(__name__)
        start = time.monotonic()
        try:
            response = await call_next(request)
        except Exception:
            log_exception(
                logger,
                "http.request.error",
                method=request.method,
                path=request.url.path,
                duration_ms=_elapsed_ms(start),
            )
            raise
        else:
            response.headers[REQUEST_ID_HEADER] = request_id
            log_event(
                logger,
                "http.request",
                level=logging.WARNING if response.status_code >= 500 else logging.INFO,
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=_elapsed_ms(start),
            )
            return response
        finally:
            reset_request_context(tokens)


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
