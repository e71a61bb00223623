# config.py
"""
Centralized configuration, project-wide constants, and logging setup.

Every module reads its settings from here instead of hardcoding paths or
credentials. The logging setup wires structlog on top of the standard
library so that all modules emit consistent key/value log lines.
"""

import logging
import os
import sys
from typing import Dict, Any, Optional

import structlog

# --- Storage ---
# Default SQLite file used by `SQLiteConnector` when no path is given.
DB_FILE = os.getenv(
    "RECORDS_DB_FILE", os.path.join(os.path.dirname(__file__), "data/records.db")
)

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


# --- Logging Setup ---


def setup_logging(level: Optional[str] = None):
    """
    Configures structlog for context-aware, structured logging.

    Workflow:
    1.  Sets up Python's standard logging module as the base handler.
    2.  Configures structlog to wrap it with a processor chain that adds
        context variables, logger name, level, timestamp and exception info.
    3.  Renders the final record with `ConsoleRenderer`.

    Args:
        - level (str | None): Minimum level name (e.g. "DEBUG"). Defaults to
                              the `LOG_LEVEL` environment variable.
    """
    level_name = (level or LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(message)s",
        stream=sys.stdout,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            # Swap for `structlog.processors.JSONRenderer()` in production.
            structlog.dev.ConsoleRenderer(colors=True),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# --- Cloudflare D1 Configuration ---


def get_d1_config_from_env() -> Dict[str, str]:
    """
    Loads Cloudflare D1 configuration from environment variables.

    Expected Input:
    - Environment variables:
        - D1_ACCOUNT_ID: Your Cloudflare account ID.
        - D1_DATABASE_ID: The UUID of the target D1 database.
        - D1_API_TOKEN: A Cloudflare API token with D1 read/write permissions.

    Returns:
        - A dictionary containing the credentials.
          Example: {'d1_account_id': '...', 'd1_database_id': '...', 'd1_api_token': '...'}

    Raises:
        - ValueError: If any of the required environment variables are not set.
    """
    log = structlog.get_logger("config.d1")
    config = {
        "d1_account_id": os.getenv("D1_ACCOUNT_ID"),
        "d1_database_id": os.getenv("D1_DATABASE_ID"),
        "d1_api_token": os.getenv("D1_API_TOKEN"),
    }

    missing_keys = [key for key, value in config.items() if not value]
    if missing_keys:
        missing = [key.upper() for key in missing_keys]
        log.error("D1 config missing from environment", missing_keys=missing)
        raise ValueError(f"Required D1 environment variables are not set: {', '.join(missing)}")

    log.info(
        "D1 configuration loaded from environment variables",
        config=mask_sensitive_data(config),
    )
    return config


def mask_sensitive_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Returns a copy of `data` with sensitive string values redacted.

    A key is sensitive when its name contains "token", "password", "key" or
    "id" (case-insensitive). Non-string values are left as they are.
    """
    sensitive_keys = ["token", "password", "key", "id"]
    safe_data = data.copy()
    for key, value in safe_data.items():
        if any(sens_key in key.lower() for sens_key in sensitive_keys):
            if isinstance(value, str):
                safe_data[key] = "***REDACTED***"
    return safe_data
