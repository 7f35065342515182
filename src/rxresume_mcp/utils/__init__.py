"""Reactive Resume MCP utilities for logging and identifiers."""

from .identifiers import generate_item_id, slugify_title
from .logging_config import (
    configure_mcp_logging,
    log_mcp_server_startup,
    log_mcp_tool_registration,
)

__all__ = [
    "configure_mcp_logging",
    "generate_item_id",
    "log_mcp_server_startup",
    "log_mcp_tool_registration",
    "slugify_title",
]
