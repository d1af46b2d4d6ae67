# -*- coding: utf-8 -*-
"""Errors raised while validating or persisting provider configuration."""

from __future__ import annotations

from typing import Any


class ConfigError(Exception):
    """Base class; ``message`` is safe to show to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingProviderSelection(ConfigError):
    def __init__(self) -> None:
        super().__init__("Please select an LLM provider.")


class MissingRequiredField(ConfigError):
    """A field mandated by the active requirement profile is blank."""

    _LABELS = {
        "apiKey": "API Key",
        "baseUrl": "Base URL",
        "modelName": "Model Name",
    }

    def __init__(self, field_name: str):
        label = self._LABELS.get(field_name, field_name)
        super().__init__(f"{label} cannot be empty.")
        self.field_name = field_name


class UnknownProviderKind(ConfigError, ValueError):
    def __init__(self, value: Any):
        super().__init__(f"Unknown provider: {value}")
        self.value = value


class ConfigStoreError(ConfigError):
    """The persistence medium rejected a read or write."""
