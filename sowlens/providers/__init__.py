# -*- coding: utf-8 -*-
"""Provider management — models, registry, store + session controller."""

from .controller import ConfigController, OnConfigChange, OnNotice
from .errors import (
    ConfigError,
    ConfigStoreError,
    MissingProviderSelection,
    MissingRequiredField,
    UnknownProviderKind,
)
from .models import (
    ConfigSnapshot,
    CredentialSet,
    ProviderDefinition,
    ProviderInfo,
    ProviderKind,
    RequirementProfile,
    ResolvedModelConfig,
    SessionState,
)
from .registry import (
    DEFAULT_PROVIDER,
    PROVIDERS,
    get_provider,
    list_providers,
    parse_provider,
    profile_for,
)
from .store import (
    ConfigStore,
    InMemoryConfigStore,
    JsonFileConfigStore,
    get_active_llm_config,
    mask_api_key,
)

__all__ = [
    # controller
    "ConfigController",
    "OnConfigChange",
    "OnNotice",
    # errors
    "ConfigError",
    "ConfigStoreError",
    "MissingProviderSelection",
    "MissingRequiredField",
    "UnknownProviderKind",
    # models
    "ConfigSnapshot",
    "CredentialSet",
    "ProviderDefinition",
    "ProviderInfo",
    "ProviderKind",
    "RequirementProfile",
    "ResolvedModelConfig",
    "SessionState",
    # registry
    "DEFAULT_PROVIDER",
    "PROVIDERS",
    "get_provider",
    "list_providers",
    "parse_provider",
    "profile_for",
    # store
    "ConfigStore",
    "InMemoryConfigStore",
    "JsonFileConfigStore",
    "get_active_llm_config",
    "mask_api_key",
]
