"""Structured logging for forwarded calls and absorbed parameter decode problems."""

import logging
import uuid
from typing import Optional

logger = logging.getLogger(__name__)


def _ensure_trace_id(extra: dict) -> str:
    trace_id = extra.get("trace_id")
    if not trace_id:
        trace_id = str(uuid.uuid4())[:8]
        extra["trace_id"] = trace_id
    return trace_id


def _format(event: str, extra: dict) -> str:
    return event + " " + " ".join(f"{k}={v}" for k, v in sorted(extra.items()))


def log_forward(
    url: str,
    outcome: str,
    status_code: Optional[int] = None,
    duration_ms: Optional[float] = None,
    error: Optional[str] = None,
    trace_id: Optional[str] = None,
    extra: Optional[dict] = None,
) -> None:
    """Log one forwarded GET. outcome: ok, remote_error, transport_error, read_error. Failures log at WARNING."""
    extra = extra or {}
    if trace_id:
        extra["trace_id"] = trace_id
    _ensure_trace_id(extra)
    extra["url"] = url
    extra["outcome"] = outcome
    if status_code is not None:
        extra["status_code"] = status_code
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 2)
    if error:
        extra["error"] = repr(error)
    level = logging.INFO if outcome == "ok" else logging.WARNING
    logger.log(level, _format("forward", extra))


def log_decode_error(
    operation: str,
    error: str,
    trace_id: Optional[str] = None,
    extra: Optional[dict] = None,
) -> None:
    """Log a parameter decode problem that the handler absorbed (defaults used)."""
    extra = extra or {}
    if trace_id:
        extra["trace_id"] = trace_id
    _ensure_trace_id(extra)
    extra["operation"] = operation
    extra["error"] = repr(error)
    logger.warning(_format("decode_params", extra))
