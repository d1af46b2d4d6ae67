# -*- coding: utf-8 -*-
"""API routes for the LLM provider configuration."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import BaseModel, Field

from ...providers import (
    ConfigController,
    ConfigStore,
    ConfigStoreError,
    JsonFileConfigStore,
    MissingProviderSelection,
    MissingRequiredField,
    ProviderDefinition,
    ProviderInfo,
    ProviderKind,
    ResolvedModelConfig,
    UnknownProviderKind,
    get_active_llm_config,
    list_providers,
    mask_api_key,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/models", tags=["models"])


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def get_config_store() -> ConfigStore:
    """Default store; override with ``app.dependency_overrides`` in tests."""
    return JsonFileConfigStore()


# ---------------------------------------------------------------------------
# Request / response schemas
# ---------------------------------------------------------------------------


class ConfigRequest(BaseModel):
    """Request body for saving the provider configuration."""

    model_config = {"protected_namespaces": ()}

    provider: str = Field(..., description="Provider identifier")
    api_key: Optional[str] = Field(
        default=None,
        description="API key; omitted keeps the stored key of this provider",
    )
    base_url: Optional[str] = Field(
        default=None,
        description="Endpoint URL (providers that need one)",
    )
    model_name: Optional[str] = Field(
        default=None,
        description="Model identifier (providers that need one)",
    )


class ConfigView(BaseModel):
    """Stored configuration as shown to clients (key masked)."""

    model_config = {"protected_namespaces": ()}

    is_configured: bool = False
    provider: Optional[ProviderKind] = None
    api_key: str = ""
    base_url: str = ""
    model_name: str = ""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _build_provider_info(
    provider: ProviderDefinition,
    resolved: Optional[ResolvedModelConfig],
) -> ProviderInfo:
    """Build a ProviderInfo from a definition and the stored config."""
    profile = provider.profile
    current = (
        resolved
        if resolved is not None and resolved.provider == provider.id
        else None
    )
    return ProviderInfo(
        id=provider.id,
        name=provider.name,
        key_required=profile.key_required,
        needs_base_url=profile.needs_base_url,
        needs_model_name=profile.needs_model_name,
        api_key_label=provider.api_key_label,
        api_key_placeholder=provider.api_key_placeholder,
        is_configured=current is not None,
        current_api_key=mask_api_key(current.api_key) if current else "",
        current_base_url=current.base_url if current else "",
        current_model_name=current.model_name if current else "",
    )


def _build_view(resolved: Optional[ResolvedModelConfig]) -> ConfigView:
    if resolved is None:
        return ConfigView()
    return ConfigView(
        is_configured=True,
        provider=resolved.provider,
        api_key=mask_api_key(resolved.api_key),
        base_url=resolved.base_url,
        model_name=resolved.model_name,
    )


def _store_failure(exc: ConfigStoreError) -> HTTPException:
    logger.error("Config store failure: %s", exc.message)
    return HTTPException(status_code=500, detail=exc.message)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get(
    "",
    response_model=List[ProviderInfo],
    summary="List all providers",
    description="Return all providers with their requirement profile "
    "and, for the stored provider, its current configuration.",
)
async def list_all_providers(
    store: ConfigStore = Depends(get_config_store),
) -> List[ProviderInfo]:
    """List all registered providers."""
    try:
        resolved = get_active_llm_config(store)
    except ConfigStoreError as exc:
        raise _store_failure(exc) from exc
    return [_build_provider_info(p, resolved) for p in list_providers()]


@router.get(
    "/config",
    response_model=ConfigView,
    summary="Get the stored LLM configuration",
)
async def get_config(
    store: ConfigStore = Depends(get_config_store),
) -> ConfigView:
    try:
        return _build_view(get_active_llm_config(store))
    except ConfigStoreError as exc:
        raise _store_failure(exc) from exc


@router.put(
    "/config",
    response_model=ConfigView,
    summary="Save the LLM configuration",
    description="Validate the fields against the provider's requirement "
    "profile and persist them, replacing any stored configuration.",
)
async def save_config(
    body: ConfigRequest = Body(..., description="Configuration to save"),
    store: ConfigStore = Depends(get_config_store),
) -> ConfigView:
    controller = ConfigController(store)
    try:
        controller.initialize()
        controller.switch_provider(body.provider)
        if body.api_key is not None:
            controller.edit_api_key(body.api_key)
        if body.base_url is not None:
            controller.edit_base_url(body.base_url)
        if body.model_name is not None:
            controller.edit_model_name(body.model_name)
        controller.save()
    except UnknownProviderKind as exc:
        raise HTTPException(status_code=404, detail=exc.message) from exc
    except (MissingProviderSelection, MissingRequiredField) as exc:
        raise HTTPException(status_code=400, detail=exc.message) from exc
    except ConfigStoreError as exc:
        raise _store_failure(exc) from exc
    return _build_view(get_active_llm_config(store))


@router.delete(
    "/config",
    response_model=ConfigView,
    summary="Remove the stored LLM configuration",
)
async def delete_config(
    store: ConfigStore = Depends(get_config_store),
) -> ConfigView:
    controller = ConfigController(store)
    try:
        controller.initialize()
        controller.remove()
    except ConfigStoreError as exc:
        raise _store_failure(exc) from exc
    return ConfigView()
