# -*- coding: utf-8 -*-
"""Settings persistence and validation."""

from __future__ import annotations

import re
from copy import deepcopy
from pathlib import Path
from typing import Any

from socialstudio.constants import (
    APP_NAME,
    APP_VERSION,
    DEFAULT_DISPLAY_SIZE,
    DEFAULT_FEATURES,
    DEFAULT_SETTINGS_FILE,
    DEFAULT_THEME_COLOR,
    FETCH_MAX_RETRIES,
    FETCH_RETRY_DELAY_SECONDS,
    JPEG_QUALITY,
    MERGE_OUTPUT_NAME,
    THEMES,
    TRIM_OUTPUT_NAME,
)
from socialstudio.models.capability_status import AuthorizationStatus
from socialstudio.utils.file_utils import read_json_file, write_json_file


DEFAULT_CONFIG: dict[str, Any] = {
    "app": {"name": APP_NAME, "bundle_id": "", "version": APP_VERSION, "build_target": "desktop"},
    "backend": {
        "base_url": "https://lightek.diy",
        "timeout_seconds": 15.0,
        "max_retries": FETCH_MAX_RETRIES,
        "retry_delay_seconds": FETCH_RETRY_DELAY_SECONDS,
    },
    "appearance": {"theme": "system", "theme_color_hex": DEFAULT_THEME_COLOR},
    "features": deepcopy(DEFAULT_FEATURES),
    "permissions": {},
    "media": {
        "temp_dir": "",
        "trim_output_name": TRIM_OUTPUT_NAME,
        "merge_output_name": MERGE_OUTPUT_NAME,
        "jpeg_quality": JPEG_QUALITY,
        "display_width": DEFAULT_DISPLAY_SIZE[0],
        "display_height": DEFAULT_DISPLAY_SIZE[1],
    },
    "auth": {"auth_token": ""},
}

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{6})$")


class ConfigError(ValueError):
    """Raised when settings are invalid."""


def get_default_config() -> dict[str, Any]:
    """Return a deep copy of the default config."""
    return deepcopy(DEFAULT_CONFIG)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_env_file(env_path: Path) -> dict[str, str]:
    """Load a simple .env file (KEY=VALUE)."""
    values: dict[str, str] = {}
    if not env_path.exists():
        return values

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue
        if (value.startswith('"') and value.endswith('"')) or (
            value.startswith("'") and value.endswith("'")
        ):
            value = value[1:-1]
        values[key] = value
    return values


def _apply_env_overrides(config: dict[str, Any], env_values: dict[str, str]) -> dict[str, Any]:
    """Apply environment-based overrides to runtime config."""
    merged = deepcopy(config)
    backend_url = env_values.get("SOCIALSTUDIO_BACKEND_URL", "").strip()
    if backend_url:
        merged.setdefault("backend", {})
        merged["backend"]["base_url"] = backend_url
    return merged


def parse_hex_color(value: str) -> tuple[float, float, float]:
    """Parse ``#RRGGBB`` into an (r, g, b) tuple of floats in 0..1."""
    match = _HEX_COLOR.match(str(value).strip())
    if not match:
        raise ConfigError(f"Invalid hex color: {value!r}")
    rgb = int(match.group(1), 16)
    return (
        ((rgb >> 16) & 0xFF) / 255,
        ((rgb >> 8) & 0xFF) / 255,
        (rgb & 0xFF) / 255,
    )


def validate_config(config: dict[str, Any]) -> None:
    """Validate the settings fields the client relies on."""
    appearance = config.get("appearance", {})
    if appearance.get("theme") not in THEMES:
        raise ConfigError(f"appearance.theme must be one of {', '.join(THEMES)}")
    parse_hex_color(appearance.get("theme_color_hex", ""))

    backend = config.get("backend", {})
    retries = backend.get("max_retries")
    if not isinstance(retries, int) or isinstance(retries, bool) or retries < 1:
        raise ConfigError("backend.max_retries must be an int >= 1")
    delay = backend.get("retry_delay_seconds")
    if not isinstance(delay, (int, float)) or float(delay) < 0:
        raise ConfigError("backend.retry_delay_seconds must be >= 0")

    media = config.get("media", {})
    quality = media.get("jpeg_quality")
    if not isinstance(quality, int) or not (1 <= quality <= 100):
        raise ConfigError("media.jpeg_quality must be an int in range 1..100")
    for key in ("display_width", "display_height"):
        size = media.get(key)
        if not isinstance(size, (int, float)) or isinstance(size, bool) or size <= 0:
            raise ConfigError(f"media.{key} must be a positive number")
    for key in ("temp_dir", "trim_output_name", "merge_output_name"):
        if not isinstance(media.get(key, ""), str):
            raise ConfigError(f"media.{key} must be a string")

    allowed = {status.value for status in AuthorizationStatus}
    for name, status in config.get("permissions", {}).items():
        if status not in allowed:
            raise ConfigError(f"permissions.{name} has unknown status {status!r}")


def feature_enabled(config: dict[str, Any], key: str) -> bool:
    """Return the feature flag value; unknown flags are off."""
    return bool(config.get("features", {}).get(key, False))


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load config from JSON and merge into defaults."""
    config_path = Path(path or DEFAULT_SETTINGS_FILE)
    env_values = _load_env_file(config_path.parent / ".env")
    if not config_path.exists():
        return _apply_env_overrides(get_default_config(), env_values)

    loaded = read_json_file(config_path)
    merged = _deep_merge(get_default_config(), loaded)
    merged = _apply_env_overrides(merged, env_values)
    validate_config(merged)
    return merged


def _strip_secrets(config: dict[str, Any]) -> dict[str, Any]:
    """Remove the auth token before writing settings to disk."""
    config_copy = deepcopy(config)
    auth = config_copy.get("auth")
    if isinstance(auth, dict) and auth.get("auth_token"):
        auth["auth_token"] = ""
    return config_copy


def save_config(config: dict[str, Any], path: str | Path | None = None) -> Path:
    """Validate and save config as JSON, without the auth token.

    The token belongs in the secret store, not in settings.json.
    """
    validate_config(config)
    config_path = Path(path or DEFAULT_SETTINGS_FILE)
    write_json_file(config_path, _strip_secrets(config))
    return config_path
