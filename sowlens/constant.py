# -*- coding: utf-8 -*-
import os
from pathlib import Path

WORKING_DIR = (
    Path(os.environ.get("SOWLENS_WORKING_DIR", "~/.sowlens"))
    .expanduser()
    .resolve()
)

CONFIG_STORE_FILE = os.environ.get(
    "SOWLENS_CONFIG_STORE_FILE",
    "llm_config.json",
)

# Env key for app log level (read by the CLI root group).
LOG_LEVEL_ENV = "SOWLENS_LOG_LEVEL"
LOG_LEVEL_DEFAULT = "warning"

# Provider selected when nothing has been persisted yet (and after remove).
DEFAULT_PROVIDER_ID = "openai"

# ---------------------------------------------------------------------------
# Persisted key layout: four flat string entries, no version tag.
# ---------------------------------------------------------------------------
STORE_KEY_PROVIDER = "provider"
STORE_KEY_API_KEY = "apiKey"
STORE_KEY_BASE_URL = "baseUrl"
STORE_KEY_MODEL_NAME = "modelName"

STORE_KEYS = (
    STORE_KEY_PROVIDER,
    STORE_KEY_API_KEY,
    STORE_KEY_BASE_URL,
    STORE_KEY_MODEL_NAME,
)


def get_config_store_path() -> Path:
    """Return the default path of the JSON-backed config store."""
    return WORKING_DIR / CONFIG_STORE_FILE
