"""
MCP Server Entry Point for the Universal Database Server
Run with: python server.py
"""

import argparse
import asyncio
import logging
import sys
from typing import Any, Optional

from mcp import types
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server

from config import ServerConfig, create_env_file
from container import ServiceContainer
from database import DatabaseBackend, create_backend
from dispatcher import ToolDispatcher
from generators import FakerGenerator
from safety import SafetyPolicy
from tools import get_tool_catalog
from utils.query_log import QueryLogger

__version__ = "3.0.0"

SERVER_NAME = "pro-universal-db-mcp"

# Logs go to stderr; stdout carries the protocol
logging.basicConfig(level=logging.INFO, stream=sys.stderr)
logger = logging.getLogger(__name__)

# Initialize server
app = Server(SERVER_NAME)
dispatcher: Optional[ToolDispatcher] = None


@app.list_tools()
async def handle_list_tools() -> list[types.Tool]:
    """List the twelve database tools"""
    return get_tool_catalog()


@app.call_tool(validate_input=False)
async def handle_call_tool(name: str, arguments: dict[str, Any]) -> types.CallToolResult:
    """
    Route a tool call through the dispatcher.

    Argument checking is left to the handlers so that every failure comes
    back in the same "Error: ..." envelope.
    """
    if dispatcher is None:
        return types.CallToolResult(
            content=[types.TextContent(type="text", text="Error: Server not initialized")],
            isError=True,
        )
    return await dispatcher.handle(name, arguments)


def build_dispatcher(config: ServerConfig, db: DatabaseBackend) -> ToolDispatcher:
    """Wire the services and policy for a connected backend"""
    services = ServiceContainer(
        db,
        generator=FakerGenerator(config.generator),
        query_log=QueryLogger(config.query_log_dir, engine=db.engine.value),
    )
    return ToolDispatcher(services, SafetyPolicy(read_only=config.safe_mode))


async def main():
    """Main entry point for MCP server"""
    global dispatcher

    config = ServerConfig.from_environment()
    logging.getLogger().setLevel(config.log_level)

    db = create_backend(config.database)
    try:
        await db.connect()
        dispatcher = build_dispatcher(config, db)

        logger.info(f"Universal DB MCP server ({config.database.engine.value}) starting...")
        logger.info(f"Connected to database: {config.database.display_target}")
        if config.safe_mode:
            logger.info("🔒 SAFE_MODE enabled: mutating tools are disabled")

        async with stdio_server() as (read_stream, write_stream):
            await app.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name=SERVER_NAME,
                    server_version=__version__,
                    capabilities=app.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={}
                    )
                )
            )
    except Exception as e:
        logger.error(f"Failed to run MCP server: {e}", exc_info=True)
        raise
    finally:
        await db.disconnect()
        dispatcher = None


def cli_entry():
    """Entry point for console script - wraps async main()"""
    parser = argparse.ArgumentParser(description="Universal Database MCP Server")
    parser.add_argument('--version', '-v', action='store_true', help='Show version')
    parser.add_argument('--init-env', metavar='PATH', nargs='?', const='.env',
                        help='Write a template .env file (default: .env) and exit')

    args = parser.parse_args()

    if args.version:
        print(f"{SERVER_NAME} version {__version__}")
        sys.exit(0)

    if args.init_env:
        create_env_file(args.init_env)
        sys.exit(0)

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
    except Exception:
        sys.exit(1)


if __name__ == "__main__":
    cli_entry()
