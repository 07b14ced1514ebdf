from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between untrusted configuration sources (persisted JSON, CLI
overrides) and the engine. Coerces types, normalizes paths and injects
domain defaults, collecting a warning for every value it had to replace.
"""

import logging
import os
from typing import Any, Dict, List, Tuple

from zkmirror.domain.config import get_default_config
from zkmirror.domain.constants import STORAGE_TARGETS
from zkmirror.infra.fs import normalize_path

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on invalid values instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and a
                                          list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    string_fields = [
        "endpoint", "snapshot_id", "storage_target",
        "work_dir", "local_target_dir", "remote_url",
    ]
    for field in string_fields:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    merged["keep_mirror"] = _as_bool(
        merged.get("keep_mirror"), defaults["keep_mirror"], "keep_mirror", warnings, strict
    )
    merged["connect_timeout"] = _as_positive_float(
        merged.get("connect_timeout"), defaults["connect_timeout"], "connect_timeout", warnings, strict
    )

    # Domain-specific normalization
    merged["storage_target"] = _normalize_target(
        merged["storage_target"], defaults["storage_target"], warnings, strict
    )
    merged["snapshot_id"] = _normalize_snapshot_id(merged["snapshot_id"], warnings, strict)
    merged["work_dir"] = normalize_path(merged["work_dir"], defaults["work_dir"])
    merged["local_target_dir"] = normalize_path(merged["local_target_dir"], defaults["local_target_dir"])

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _reject(msg: str, warnings: List[str], strict: bool) -> None:
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        return value.strip()
    _reject(f"Invalid field '{field}': expected str, received {type(value).__name__}.", warnings, strict)
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    if value is None:
        return fallback
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("1", "true", "yes", "on", "0", "false", "no", "off"):
        return value.strip().lower() in ("1", "true", "yes", "on")
    _reject(f"Invalid field '{field}': expected bool, received {value!r}.", warnings, strict)
    return fallback


def _as_positive_float(value: Any, fallback: float, field: str, warnings: List[str], strict: bool) -> float:
    if value is None:
        return fallback
    try:
        number = float(value)
    except (TypeError, ValueError):
        _reject(f"Invalid field '{field}': expected number, received {value!r}.", warnings, strict)
        return fallback
    if number <= 0:
        _reject(f"Invalid field '{field}': must be positive, received {number}.", warnings, strict)
        return fallback
    return number


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_target(value: str, fallback: str, warnings: List[str], strict: bool) -> str:
    target = value.lower()
    if target in STORAGE_TARGETS:
        return target
    known = ", ".join(sorted(STORAGE_TARGETS))
    _reject(f"Unknown storage target '{value}' (known: {known}).", warnings, strict)
    return fallback


def _normalize_snapshot_id(value: str, warnings: List[str], strict: bool) -> str:
    if not value:
        return ""
    if value in (os.curdir, os.pardir) or "/" in value or os.sep in value:
        _reject(f"Invalid snapshot id '{value}': must be a plain directory name.", warnings, strict)
        return ""
    return value
