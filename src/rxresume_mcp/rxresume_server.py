"""
Reactive Resume MCP Server - Main entry point
Exposes Reactive Resume editing tools over the MCP stdio transport
"""

import argparse
import asyncio
import sys
from typing import Optional

from dotenv import load_dotenv
from fastmcp import FastMCP
from loguru import logger

from src.config.config_loader import AppConfig, load_config
from src.config.trace_context import trace_context
from src.rxresume_mcp.services.client_holder import RxResumeClientHolder
from src.rxresume_mcp.tools import register_all_tools
from src.rxresume_mcp.utils.logging_config import (
    configure_mcp_logging,
    log_mcp_server_startup,
    log_mcp_tool_registration,
)


def create_server(
    config: Optional[AppConfig] = None,
    holder: Optional[RxResumeClientHolder] = None,
) -> FastMCP:
    """Build a FastMCP server with every Reactive Resume tool registered."""
    config = config or load_config()
    holder = holder or RxResumeClientHolder(config.rxresume)

    mcp = FastMCP(config.mcp_server.name)
    tool_names = register_all_tools(mcp, holder)
    log_mcp_tool_registration(tool_names)
    return mcp


async def prepare_session(holder: RxResumeClientHolder) -> None:
    """
    Start-up checks run once before serving.

    Verifies the base URL answers its health check (when enabled) and opens a
    legacy session when email/password are configured without an API key.
    Any failure propagates; the caller exits the process.
    """
    config = holder.config
    client = holder.client

    if config.verify_on_startup:
        health = await client.health_check()
        logger.info(f"Reactive Resume reachable at {client.base_url}: {health}")

    if config.api_key:
        logger.info("Using API key authentication from configuration")
    elif config.email and config.password:
        result = await client.login(config.email, config.password)
        logger.info(f"Logged in as {result.get('user', {}).get('email')}")


def main(argv: Optional[list] = None) -> None:
    load_dotenv()
    config = load_config()

    parser = argparse.ArgumentParser(description="Reactive Resume MCP Server")
    parser.add_argument("--http", action="store_true", help="Run as HTTP server")
    parser.add_argument("--host", default=config.mcp_server.host, help="HTTP server host")
    parser.add_argument(
        "--port", type=int, default=config.mcp_server.port, help="HTTP server port"
    )
    args = parser.parse_args(argv)

    configure_mcp_logging(config.observability.log_level, config.observability.log_file)
    log_mcp_server_startup(
        {
            "version": config.mcp_server.version,
            "transport": "http" if args.http else "stdio",
            "base_url": config.rxresume.base_url,
            "api_version": config.rxresume.api_version,
        }
    )

    holder = RxResumeClientHolder(config.rxresume)
    with trace_context("startup"):
        try:
            asyncio.run(prepare_session(holder))
        except Exception as e:
            logger.critical(f"Start-up failed: {type(e).__name__}: {e}")
            sys.exit(1)

    mcp = create_server(config, holder)
    if args.http:
        mcp.run(transport="http", host=args.host, port=args.port)
    else:
        mcp.run()


if __name__ == "__main__":
    main()
