"""
Command-line entry point of the Dev Studio MCP server.

Loads `.env`, configures logging and runs the server on the configured transport.
"""

import logging
import os

from dotenv import load_dotenv

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging() -> None:
    """
    Configures root logging from LOG_LEVEL. With the stdio transport stdout
    carries the protocol, so log records go to stderr (the logging default).
    """
    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=log_level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)


def run_server() -> None:
    load_dotenv()
    configure_logging()

    # The server module reads configuration at import time, so it is imported after load_dotenv.
    from .server import mcp_app, server_config

    logger = logging.getLogger(__name__)
    logger.info("--- Dev Studio MCP Server ---")
    logger.info(
        "Project storage: %s (template=%s, autosave delay=%ss)",
        server_config.STORAGE_PATH or "in-memory",
        server_config.DEFAULT_TEMPLATE,
        server_config.AUTOSAVE_DELAY_SECONDS,
    )
    if server_config.MCP_TRANSPORT == "stdio":
        logger.info("Serving over stdio")
    else:
        logger.info(
            "Serving %s on %s:%s",
            server_config.MCP_TRANSPORT,
            server_config.MCP_HOST,
            server_config.MCP_PORT,
        )

    mcp_app.run(transport=server_config.MCP_TRANSPORT)


if __name__ == "__main__":
    run_server()
