"""Helpers shared by every MCP tool module."""

import json
from contextlib import contextmanager
from typing import Annotated, Any, Generator

from fastmcp.exceptions import ToolError
from loguru import logger
from pydantic import Field

from src.config.trace_context import trace_context

ResumeId = Annotated[str, Field(min_length=1, description="The resume ID")]
UrlString = Annotated[str, Field(pattern=r"^https?://[^\s/$.?#][^\s]*$")]
EmailAddress = Annotated[str, Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")]


@contextmanager
def tool_call(tool_name: str, failure: str) -> Generator[str, None, None]:
    """
    Run a tool body in its own trace and turn any failure into a ToolError.

    FastMCP reports a ToolError as an error-flagged result whose text is the
    message, so nothing escapes the tool boundary.

    Args:
        tool_name: Tool name, for the logs
        failure: Prefix for the error text, e.g. "Failed to list resumes"
    """
    with trace_context() as trace_id:
        logger.info(f"Tool call started: {tool_name}")
        try:
            yield trace_id
        except ToolError:
            raise
        except Exception as e:
            logger.error(f"Tool call failed: {tool_name}: {type(e).__name__}: {e}")
            raise ToolError(f"{failure}: {e}") from e
        logger.info(f"Tool call completed: {tool_name}")


def to_json_text(payload: Any) -> str:
    """Pretty-print a JSON payload; plain strings are returned unchanged."""
    if isinstance(payload, str):
        return payload
    return json.dumps(payload, indent=2, ensure_ascii=False)
