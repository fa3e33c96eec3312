"""
MCP server creation and process lifecycle management.
"""

import asyncio
import atexit
from collections.abc import Callable
import logging
import os
import signal
import sys

from fastmcp import FastMCP

from tempreg.config import LOG_LEVEL, SERVER_NAME
from tempreg.registry import get_registry
from tempreg.tools.temp_tools import register_temp_tools

# Track cleanup handlers
cleanup_handlers: list[Callable] = []

# Flag to track whether we're already in shutdown process
_shutting_down = False


def add_cleanup_handler(handler: Callable) -> None:
    """Register a function to be called during cleanup.

    Args:
        handler: Function to call during cleanup
    """
    cleanup_handlers.append(handler)


def run_cleanup_handlers() -> None:
    """Run all registered cleanup handlers once.

    Each handler runs even if an earlier one failed. Later calls are no-ops.
    """
    global _shutting_down

    if _shutting_down:
        return

    _shutting_down = True
    logger.info("Running cleanup handlers...")

    for handler in cleanup_handlers:
        name = getattr(handler, "__name__", repr(handler))
        try:
            handler()
            logger.info(f"Cleanup handler {name} completed successfully")
        except Exception as e:
            logger.error(f"Error in cleanup handler {name}: {str(e)}", exc_info=True)


def cleanup_temp_paths() -> None:
    """Remove every path in the process-wide temp registry."""
    failed = get_registry().run_cleanup()
    if failed:
        logger.warning(f"{len(failed)} temporary paths could not be removed")


def register_signal_handlers() -> None:
    """Run cleanup and exit on SIGINT and SIGTERM."""

    def handle_exit_signal(signum: int, frame) -> None:
        logger.info(f"Received signal {signum}, initiating shutdown...")
        run_cleanup_handlers()
        # sys.exit rather than os._exit so atexit hooks still run
        sys.exit(0)

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            signal.signal(sig, handle_exit_signal)
            logger.info(f"Registered handler for signal {sig}")
        except (ValueError, AttributeError) as e:
            # Not on the main thread, or signal missing on this platform
            logger.error(f"Could not register handler for signal {sig}: {str(e)}")


def create_server() -> FastMCP:
    """Create and configure the TempReg MCP server.

    Installs the temp registry exit hook up front, so the process entry
    point owns the cleanup lifecycle rather than the first registration.

    Returns:
        FastMCP: Configured MCP server instance
    """
    logger.info("Initializing TempReg MCP server")

    mcp = FastMCP(SERVER_NAME)

    logger.info("Registering tools...")
    register_temp_tools(mcp)

    registry = get_registry()
    registry.initialize()

    register_signal_handlers()
    atexit.register(run_cleanup_handlers)
    add_cleanup_handler(cleanup_temp_paths)

    logger.info(f"Server initialization complete (pid {os.getpid()})")
    return mcp


def setup_logging() -> None:
    """Configure root logging from TEMPREG_LOG_LEVEL.

    Uses basicConfig, so only the first call takes effect.
    """
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))


setup_logging()
logger = logging.getLogger(__name__)


async def main() -> None:
    """Start the server and run cleanup when it stops."""
    try:
        logger.info("Starting TempReg MCP server")
        server = create_server()
        await server.run_async()
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, graceful shutdown initiated")
    except Exception as e:
        logger.error(f"Server error: {e}", exc_info=True)
    finally:
        run_cleanup_handlers()


def run() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
