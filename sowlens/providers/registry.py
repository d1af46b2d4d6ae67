# -*- coding: utf-8 -*-
"""Built-in provider definitions and registry."""

from __future__ import annotations

from typing import List, Optional, Union

from ..constant import DEFAULT_PROVIDER_ID
from .errors import UnknownProviderKind
from .models import ProviderDefinition, ProviderKind, RequirementProfile

# ---------------------------------------------------------------------------
# Requirement profiles
# ---------------------------------------------------------------------------

KEY_ONLY = RequirementProfile(key_required=True)

ENDPOINT_WITH_KEY = RequirementProfile(
    key_required=True,
    needs_base_url=True,
    needs_model_name=True,
)

ENDPOINT_OPTIONAL_KEY = RequirementProfile(
    key_required=False,
    needs_base_url=True,
    needs_model_name=True,
)

# ---------------------------------------------------------------------------
# Provider definitions
# ---------------------------------------------------------------------------

PROVIDER_OPENAI = ProviderDefinition(
    id=ProviderKind.OPENAI,
    name="OpenAI",
    api_key_placeholder="sk-xxxxxxxxxxxxxxxxxxxxxxxxxxxx",
    profile=KEY_ONLY,
)

PROVIDER_OPENAI_COMPATIBLE = ProviderDefinition(
    id=ProviderKind.OPENAI_COMPATIBLE,
    name="OpenAI Compatible LLM",
    api_key_placeholder="sk-xxxxxxxxxxxxxxxxxxxxxxxxxxxx",
    base_url_placeholder="e.g., https://api.example.com/v1",
    model_name_placeholder="e.g., gpt-3.5-turbo or custom-model",
    profile=ENDPOINT_WITH_KEY,
)

PROVIDER_ANTHROPIC = ProviderDefinition(
    id=ProviderKind.ANTHROPIC,
    name="Anthropic",
    api_key_placeholder="sk-ant-REDACTED",
    profile=KEY_ONLY,
)

PROVIDER_GOOGLE = ProviderDefinition(
    id=ProviderKind.GOOGLE,
    name="Google Gemini",
    api_key_placeholder="AIzaSyxxxxxxxxxxxxxxxxxxxxxxxxxxxx",
    profile=KEY_ONLY,
)

PROVIDER_LOCAL = ProviderDefinition(
    id=ProviderKind.LOCAL,
    name="Local Model (e.g., Ollama, private endpoint)",
    api_key_label="Local Model Endpoint/Key (if applicable)",
    api_key_placeholder="Enter API Key or Endpoint URL",
    base_url_placeholder="e.g., http://localhost:11434/v1",
    model_name_placeholder="e.g., llama2",
    profile=ENDPOINT_OPTIONAL_KEY,
)

# Registry: provider kind -> ProviderDefinition (menu order)
PROVIDERS: dict[ProviderKind, ProviderDefinition] = {
    PROVIDER_OPENAI.id: PROVIDER_OPENAI,
    PROVIDER_OPENAI_COMPATIBLE.id: PROVIDER_OPENAI_COMPATIBLE,
    PROVIDER_ANTHROPIC.id: PROVIDER_ANTHROPIC,
    PROVIDER_GOOGLE.id: PROVIDER_GOOGLE,
    PROVIDER_LOCAL.id: PROVIDER_LOCAL,
}

DEFAULT_PROVIDER = ProviderKind(DEFAULT_PROVIDER_ID)


def parse_provider(value: Union[str, ProviderKind]) -> ProviderKind:
    """Coerce *value* to a :class:`ProviderKind`.

    Raises :class:`UnknownProviderKind` for anything outside the closed set.
    """
    if isinstance(value, ProviderKind):
        return value
    try:
        return ProviderKind(value)
    except ValueError:
        raise UnknownProviderKind(value) from None


def profile_for(provider: Union[str, ProviderKind]) -> RequirementProfile:
    """Return the requirement profile of *provider*."""
    return PROVIDERS[parse_provider(provider)].profile


def get_provider(
    provider_id: Union[str, ProviderKind],
) -> Optional[ProviderDefinition]:
    """Return a provider definition by id, or None if not found."""
    try:
        return PROVIDERS[parse_provider(provider_id)]
    except UnknownProviderKind:
        return None


def list_providers() -> List[ProviderDefinition]:
    """Return all registered provider definitions."""
    return list(PROVIDERS.values())
