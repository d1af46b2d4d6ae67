# -*- coding: utf-8 -*-
"""Pydantic data models for providers and credential configuration."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, Field

# Credential field names as they appear in the store and in the UI.
FIELD_API_KEY = "apiKey"
FIELD_BASE_URL = "baseUrl"
FIELD_MODEL_NAME = "modelName"

# field name -> CredentialSet attribute
CREDENTIAL_FIELDS: dict[str, str] = {
    FIELD_API_KEY: "api_key",
    FIELD_BASE_URL: "base_url",
    FIELD_MODEL_NAME: "model_name",
}


class ProviderKind(str, Enum):
    """Closed set of supported LLM backends."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    LOCAL = "local"
    OPENAI_COMPATIBLE = "openai-compatible"


class RequirementProfile(BaseModel):
    """Which credential fields a provider mandates."""

    model_config = {"frozen": True}

    key_required: bool = Field(
        default=True,
        description="Whether an API key must be supplied",
    )
    needs_base_url: bool = Field(
        default=False,
        description="Whether the provider needs an endpoint URL",
    )
    needs_model_name: bool = Field(
        default=False,
        description="Whether the provider needs an explicit model name",
    )

    @property
    def relevant_fields(self) -> Tuple[str, ...]:
        """Fields that are persisted and compared for this profile.

        The key field is always shown, even when it is optional.
        """
        fields = [FIELD_API_KEY]
        if self.needs_base_url:
            fields.append(FIELD_BASE_URL)
        if self.needs_model_name:
            fields.append(FIELD_MODEL_NAME)
        return tuple(fields)


class ProviderDefinition(BaseModel):
    """Static definition of a provider: labels plus its requirement profile."""

    id: ProviderKind = Field(..., description="Provider identifier")
    name: str = Field(..., description="Human-readable provider name")
    api_key_label: str = Field(default="Your LLM API Key")
    api_key_placeholder: str = Field(default="")
    base_url_placeholder: str = Field(default="")
    model_name_placeholder: str = Field(default="")
    profile: RequirementProfile = Field(default_factory=RequirementProfile)


class CredentialSet(BaseModel):
    """One provider's configuration; empty strings mean unset."""

    model_config = {"populate_by_name": True, "protected_namespaces": ()}

    api_key: str = Field(default="", alias=FIELD_API_KEY)
    base_url: str = Field(default="", alias=FIELD_BASE_URL)
    model_name: str = Field(default="", alias=FIELD_MODEL_NAME)

    def get(self, field: str) -> str:
        return getattr(self, CREDENTIAL_FIELDS[field])

    def trimmed(self) -> "CredentialSet":
        return CredentialSet(
            api_key=self.api_key.strip(),
            base_url=self.base_url.strip(),
            model_name=self.model_name.strip(),
        )

    def restricted_to(self, profile: RequirementProfile) -> "CredentialSet":
        """Return a copy that keeps only the fields *profile* uses."""
        keep = profile.relevant_fields
        return CredentialSet(
            **{
                attr: (self.get(field) if field in keep else "")
                for field, attr in CREDENTIAL_FIELDS.items()
            },
        )


class SessionState(BaseModel):
    """Draft, saved snapshot and selected provider of one editing session."""

    selected_provider: Optional[ProviderKind] = None
    draft: CredentialSet = Field(default_factory=CredentialSet)
    saved: Optional[CredentialSet] = None
    saved_provider: Optional[ProviderKind] = None


class ConfigSnapshot(BaseModel):
    """Payload handed to the change callback; empty values become ``None``."""

    model_config = {"protected_namespaces": ()}

    api_key: Optional[str] = None
    provider: Optional[ProviderKind] = None
    base_url: Optional[str] = None
    model_name: Optional[str] = None

    @classmethod
    def from_credentials(
        cls,
        provider: Optional[ProviderKind],
        credentials: Optional[CredentialSet],
    ) -> "ConfigSnapshot":
        creds = credentials or CredentialSet()
        return cls(
            api_key=creds.api_key or None,
            provider=provider,
            base_url=creds.base_url or None,
            model_name=creds.model_name or None,
        )

    def as_tuple(
        self,
    ) -> Tuple[Optional[str], Optional[str], Optional[str], Optional[str]]:
        provider = self.provider.value if self.provider else None
        return (self.api_key, provider, self.base_url, self.model_name)


class ResolvedModelConfig(BaseModel):
    """Persisted config resolved for the document-analysis consumer."""

    model_config = {"protected_namespaces": ()}

    provider: ProviderKind
    api_key: str = Field(default="", description="API key")
    base_url: str = Field(default="", description="API base URL")
    model_name: str = Field(default="", description="Model identifier")


class ProviderInfo(BaseModel):
    """Provider info returned by the API (definition + stored state)."""

    model_config = {"protected_namespaces": ()}

    id: ProviderKind
    name: str
    key_required: bool
    needs_base_url: bool
    needs_model_name: bool
    api_key_label: str
    api_key_placeholder: str = ""
    is_configured: bool = Field(
        default=False,
        description="Whether this provider holds the persisted config",
    )
    current_api_key: str = Field(
        default="",
        description="Currently configured API key (masked)",
    )
    current_base_url: str = ""
    current_model_name: str = ""
