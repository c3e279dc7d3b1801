"""Logging configuration using loguru.

stdout carries the MCP protocol stream, so every sink writes to stderr or a file.
"""

import sys
from pathlib import Path
from typing import Any

from loguru import logger

from docker_mcp_server.config import ServerConfig


def setup_logger(config: ServerConfig, log_file: Path | None = None) -> None:
    """Configure loguru logger with project settings.

    Supports both human-readable (default) and JSON structured logging.

    Args:
        config: Server configuration
        log_file: Optional path to log file (defaults to ``config.log_file``)

    """
    # Remove default handler
    logger.remove()

    log_file = log_file or config.log_file

    if config.json_logging:
        logger.add(
            sys.stderr,
            level=config.log_level,
            serialize=True,  # JSON output
            backtrace=True,
            diagnose=False,
        )

        if log_file:
            logger.add(
                log_file,
                level=config.log_level,
                serialize=True,
                rotation="10 MB",
                retention="7 days",
                compression="zip",
                backtrace=True,
                diagnose=False,
            )
    else:
        logger.add(
            sys.stderr,
            format=config.log_format,
            level=config.log_level,
            colorize=True,
            backtrace=True,
            diagnose=config.debug_mode,
        )

        if log_file:
            logger.add(
                log_file,
                format=config.log_format,
                level=config.log_level,
                rotation="10 MB",
                retention="7 days",
                compression="zip",
                backtrace=True,
                diagnose=config.debug_mode,
            )

    logger.info(f"Logger initialized with level: {config.log_level}")
    logger.info(f"JSON logging: {'enabled' if config.json_logging else 'disabled'}")
    if log_file:
        logger.info(f"Logging to file: {log_file}")


def get_logger(name: str | None = None) -> Any:  # noqa: ARG001
    """Get a logger instance.

    Args:
        name: Optional module name (for compatibility, not used by loguru)

    Returns:
        Loguru logger instance

    """
    return logger
