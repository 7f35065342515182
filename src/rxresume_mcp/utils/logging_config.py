"""Logging configuration for the Reactive Resume MCP server."""

import os
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from src.config.trace_context import configure_trace_logging, trace_context


def configure_mcp_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    server_id: Optional[str] = None,
) -> None:
    """
    Configure loguru for the MCP server.

    Console output goes to stderr only: stdout carries the stdio transport.
    Every record includes the trace_id of the tool call that produced it.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (optional)
        server_id: Unique server identifier (defaults to PID)
    """
    logger.remove()
    configure_trace_logging()

    log_level = log_level or os.getenv("RXRESUME_MCP_LOG_LEVEL", "INFO")
    log_file = log_file or os.getenv("RXRESUME_MCP_LOG_FILE")
    server_id = server_id or f"mcp-{os.getpid()}"

    console_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<magenta>rxresume-mcp</magenta> | "
        f"<yellow>{server_id}</yellow> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "trace_id={extra[trace_id]} - <level>{message}</level>"
    )

    logger.add(
        sys.stderr,
        format=console_format,
        level=log_level,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_format = (
            "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
            "{level: <8} | "
            "rxresume-mcp | "
            f"{server_id} | "
            "{name}:{function}:{line} | "
            "trace_id={extra[trace_id]} | "
            "{message}"
        )

        logger.add(
            log_file,
            format=file_format,
            level=log_level,
            rotation="10 MB",
            retention="7 days",
            compression="gz",
            backtrace=True,
            diagnose=False,
            enqueue=True,
        )

    with trace_context("startup"):
        destination = f"file: {log_file}" if log_file else "console only"
        logger.info(f"MCP logging configured - {destination}, level: {log_level}")


def log_mcp_server_startup(server_info: dict) -> None:
    """
    Log MCP server startup information.

    Args:
        server_info: Server configuration and info
    """
    with trace_context("startup"):
        logger.info(
            f"Reactive Resume MCP server starting "
            f"(version={server_info.get('version', 'unknown')}, "
            f"transport={server_info.get('transport', 'stdio')}, "
            f"base_url={server_info.get('base_url')}, "
            f"api_version={server_info.get('api_version')})"
        )


def log_mcp_tool_registration(tool_names: list) -> None:
    """Log the names of the tools registered on the server."""
    with trace_context("registration"):
        logger.info(f"MCP tools registered: {len(tool_names)} ({', '.join(tool_names)})")
