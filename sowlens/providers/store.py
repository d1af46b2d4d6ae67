# -*- coding: utf-8 -*-
"""Key/value persistence for the LLM configuration.

The medium is flat: four string entries (see ``constant.STORE_KEYS``), each
read and written on its own. There is no cross-key transaction, so a save
interrupted half way can leave ``provider`` pointing at a new provider while
``apiKey`` still holds the previous one.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Protocol, runtime_checkable

from ..constant import (
    STORE_KEY_API_KEY,
    STORE_KEY_BASE_URL,
    STORE_KEY_MODEL_NAME,
    STORE_KEY_PROVIDER,
    get_config_store_path,
)
from .errors import ConfigStoreError, UnknownProviderKind
from .models import ResolvedModelConfig
from .registry import parse_provider, profile_for

logger = logging.getLogger(__name__)


@runtime_checkable
class ConfigStore(Protocol):
    """Synchronous string key/value medium, atomic per key."""

    def read(self, key: str) -> Optional[str]:
        ...

    def write(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class InMemoryConfigStore:
    """Dict-backed store; also the fake used by tests."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def write(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._data)


class JsonFileConfigStore:
    """Store backed by a flat JSON object on disk.

    Every call re-reads the file, and every write/remove rewrites it, so each
    key operation stands on its own like the browser storage it replaces.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else get_config_store_path()

    def _load(self) -> Dict[str, str]:
        if not self.path.is_file():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                raw = json.load(fh)
        except (json.JSONDecodeError, ValueError):
            logger.warning(
                "Config store %s is not valid JSON, treating as empty",
                self.path,
            )
            return {}
        except OSError as exc:
            raise ConfigStoreError(
                f"Cannot read config store {self.path}: {exc}",
            ) from exc
        if not isinstance(raw, dict):
            logger.warning(
                "Config store %s does not hold an object, treating as empty",
                self.path,
            )
            return {}
        return {k: v for k, v in raw.items() if isinstance(v, str)}

    def _dump(self, data: Dict[str, str]) -> None:
        """Write *data* to a sibling temp file, then swap it into place.

        An interrupted write leaves the previous file intact.
        """
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp_path.unlink()
            raise ConfigStoreError(
                f"Cannot write config store {self.path}: {exc}",
            ) from exc

    def read(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def write(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key not in data:
            return
        del data[key]
        self._dump(data)


# ---------------------------------------------------------------------------
# Query — resolved config for the document-analysis consumer
# ---------------------------------------------------------------------------


def get_active_llm_config(
    store: ConfigStore,
) -> Optional[ResolvedModelConfig]:
    """Return the persisted provider config, or ``None`` if nothing is saved.

    Only fields the stored provider's profile uses are returned.
    """
    raw_provider = store.read(STORE_KEY_PROVIDER)
    if not raw_provider:
        return None
    try:
        provider = parse_provider(raw_provider)
    except UnknownProviderKind:
        logger.warning("Ignoring unknown stored provider %r", raw_provider)
        return None
    profile = profile_for(provider)
    return ResolvedModelConfig(
        provider=provider,
        api_key=store.read(STORE_KEY_API_KEY) or "",
        base_url=(
            store.read(STORE_KEY_BASE_URL) or ""
            if profile.needs_base_url
            else ""
        ),
        model_name=(
            store.read(STORE_KEY_MODEL_NAME) or ""
            if profile.needs_model_name
            else ""
        ),
    )


# ---------------------------------------------------------------------------
# Utilities
# ---------------------------------------------------------------------------


def mask_api_key(api_key: str, visible_chars: int = 4) -> str:
    """Mask an API key for display, e.g. ``"sk-abcdefghijk"`` becomes
    ``"sk-*******hijk"``.

    Keys of at most ``2 * visible_chars`` characters are fully masked.
    """
    if len(api_key) <= 2 * visible_chars:
        return "*" * len(api_key)
    head = api_key[:3]
    tail = api_key[-visible_chars:]
    return head + "*" * (len(api_key) - len(head) - len(tail)) + tail
