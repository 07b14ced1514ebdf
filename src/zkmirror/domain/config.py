from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of the runtime configuration (connection,
storage target and snapshot placement) as JSON in the user data directory,
with default fallback when the file is missing or corrupted.
"""

import json
import logging
import os
import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from zkmirror.domain.constants import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_ENDPOINT,
    SNAPSHOT_ID_PREFIX,
    TARGET_TTY,
)
from zkmirror.infra.fs import get_default_snapshots_dir, get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "config.json"
CURRENT_CONFIG_VERSION = "1.0.0"


def get_config_file() -> str:
    """Absolute location of the persisted configuration."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


def generate_snapshot_id() -> str:
    """Create a unique snapshot identifier from the current UTC time."""
    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    return f"{SNAPSHOT_ID_PREFIX}-{stamp}-{uuid.uuid4().hex[:8]}"

# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Tree service
        "endpoint": DEFAULT_ENDPOINT,
        "connect_timeout": DEFAULT_CONNECT_TIMEOUT,

        # Snapshot placement
        "snapshot_id": "",
        "work_dir": os.getcwd(),
        "keep_mirror": False,

        # Storage target
        "storage_target": TARGET_TTY,
        "local_target_dir": get_default_snapshots_dir(),
        "remote_url": "",
    }

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """
    Load the persisted configuration merged over the defaults.

    Returns:
        Dict[str, Any]: The loaded configuration or the defaults on failure.
    """
    defaults = get_default_config()
    config_file = get_config_file()

    if not os.path.exists(config_file):
        logger.debug("Config file not found. Returning defaults.")
        return defaults

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return defaults

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return defaults

    data.pop("version", None)
    # The snapshot id is per run and never taken from the persisted state
    data.pop("snapshot_id", None)
    defaults.update({k: v for k, v in data.items() if k in defaults})
    return defaults


def save_config(config: Dict[str, Any]) -> None:
    """
    Persist the configuration to disk.

    Args:
        config: The configuration dictionary to save.
    """
    config_file = get_config_file()
    state = {k: v for k, v in config.items() if k != "snapshot_id"}
    state["version"] = CURRENT_CONFIG_VERSION
    try:
        os.makedirs(os.path.dirname(config_file), exist_ok=True)
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {config_file}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
