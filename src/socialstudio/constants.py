# -*- coding: utf-8 -*-
"""Application constants."""

APP_NAME = "social-studio"
APP_VERSION = "0.1.0"

DEFAULT_SETTINGS_FILE = "settings.json"
DEFAULT_SECRETS_FILE = ".secrets.json"
AUTH_TOKEN_KEY = "auth_token"

THEMES = ("system", "light", "dark")
DEFAULT_THEME_COLOR = "#007AFF"

DEFAULT_FEATURES = {
    "Comments": True,
    "E-Commerce": False,
    "User Profiles": True,
}

# Fixed output names inside the temp dir; concurrent exports overwrite each other.
TRIM_OUTPUT_NAME = "trimmed.mov"
MERGE_OUTPUT_NAME = "merged.mov"

# Image editor frame, in display points.
DEFAULT_DISPLAY_SIZE = (390, 400)

JPEG_QUALITY = 80

FETCH_MAX_RETRIES = 3
FETCH_RETRY_DELAY_SECONDS = 0.5
