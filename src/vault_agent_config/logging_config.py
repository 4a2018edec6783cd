import sys
import os
from loguru import logger

# Flag to track if logging has been configured
_logging_configured = False


def setup_logging(level="INFO", suppress_console=None, log_file=None):
    """
    Configures the global logger.

    Console logging goes to stderr so rendered configs written to stdout stay
    clean. File logging is opt-in via VAULT_AGENT_CONFIG_LOG_FILE or log_file.

    Args:
        level: Logging level (default: INFO)
        suppress_console: If True, suppress console logging. If None, check VAULT_AGENT_CONFIG_MACHINE_MODE env var.
        log_file: Path of a log file to add. If None, check VAULT_AGENT_CONFIG_LOG_FILE env var.
    """
    global _logging_configured

    # Only configure once to avoid duplicate handlers
    if _logging_configured:
        return
    _logging_configured = True

    logger.remove()

    if suppress_console is None:
        suppress_console = os.getenv("VAULT_AGENT_CONFIG_MACHINE_MODE", "").lower() in ("1", "true", "yes")

    if not suppress_console:
        logger.add(
            sys.stderr,
            level=level,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
            colorize=True
        )

    if log_file is None:
        log_file = os.getenv("VAULT_AGENT_CONFIG_LOG_FILE") or None

    if log_file:
        # One file per sidecar run; nothing to rotate
        logger.add(log_file, level=level, mode="w", catch=True)


def reset_logging() -> None:
    """Allow setup_logging to run again (tests, CLI flag changes)."""
    global _logging_configured
    _logging_configured = False


# Configure the logger on import (will check env var for machine mode)
setup_logging()
