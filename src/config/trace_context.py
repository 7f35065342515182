"""Per-call trace context for the Reactive Resume MCP server.

Every tool invocation runs inside ``trace_context()``; the trace id is attached
to every loguru record and forwarded upstream as the ``X-Trace-ID`` header so a
single tool call can be followed through the Reactive Resume access logs.

Usage:
    from src.config.trace_context import trace_context

    with trace_context() as tid:
        logger.info("Listing resumes")  # record carries trace_id=tid
"""

import contextvars
import uuid
from contextlib import contextmanager
from typing import Generator, Optional

from loguru import logger

# Works with asyncio tasks as well as threads
_trace_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "trace_id", default=""
)

# HTTP header name for propagating trace_id to the upstream API
TRACE_ID_HEADER = "X-Trace-ID"


def get_trace_id() -> str:
    """Return the current trace_id, or "no-trace" outside a traced call."""
    return _trace_id_var.get() or "no-trace"


@contextmanager
def trace_context(trace_id: Optional[str] = None) -> Generator[str, None, None]:
    """Scope a trace_id to a block, restoring the previous value on exit."""
    tid = trace_id or uuid.uuid4().hex
    token = _trace_id_var.set(tid)
    try:
        yield tid
    finally:
        _trace_id_var.reset(token)


def _inject_trace_id(record: dict) -> None:
    """Loguru patcher that injects trace_id from context into every log record."""
    record["extra"]["trace_id"] = get_trace_id()


def configure_trace_logging() -> None:
    """Make loguru include trace_id in all records. Call once at start-up."""
    logger.configure(patcher=_inject_trace_id)


def inject_trace_id_to_headers(headers: Optional[dict] = None) -> dict:
    """Add current trace_id to a headers dict for an outgoing request."""
    headers = headers or {}
    headers[TRACE_ID_HEADER] = get_trace_id()
    return headers
