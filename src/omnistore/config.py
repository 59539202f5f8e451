# SPDX-License-Identifier: MIT
"""Configuration management for omnistore.

This module handles:
- Logging setup
- Connection string lookup from the environment
"""

import logging
import os
import sys

# ---------- Logging configuration ----------
LOG_LEVEL = os.getenv("OMNISTORE_LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger("omnistore")


# ---------- Connection string (runtime) ----------

# Checked in order; the first non-empty value wins
CONNECTION_STRING_ENV_VARS: tuple[str, ...] = (
    "OMNISTORE_CONNECTION_STRING",
    "AZURE_STORAGE_CONNECTION_STRING",
)


def get_connection_string() -> str:
    """Get the storage connection string from the environment.

    ``OMNISTORE_CONNECTION_STRING`` takes precedence over
    ``AZURE_STORAGE_CONNECTION_STRING``.

    Returns:
        The stripped connection string

    Raises:
        RuntimeError: If none of the variables is set to a non-empty value
    """
    for name in CONNECTION_STRING_ENV_VARS:
        value = os.getenv(name, "").strip()
        if value:
            logger.debug("Using connection string from %s", name)
            return value
    raise RuntimeError(
        "Storage connection string not configured. Set " + " or ".join(CONNECTION_STRING_ENV_VARS)
    )
