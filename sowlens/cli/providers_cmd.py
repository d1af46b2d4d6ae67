# -*- coding: utf-8 -*-
"""CLI commands for managing the LLM provider configuration."""
from __future__ import annotations

import json
from typing import Optional

import click

from ..providers import (
    ConfigController,
    ConfigError,
    ConfigStore,
    get_active_llm_config,
    get_provider,
    list_providers,
    mask_api_key,
)
from ..providers.models import FIELD_API_KEY, FIELD_BASE_URL
from .utils import prompt_choice


# ---------------------------------------------------------------------------
# Reusable helpers
# ---------------------------------------------------------------------------


def _echo_notice(message: str) -> None:
    click.echo(click.style(f"✓ {message}", fg="green"))


def _fail(message: str) -> None:
    click.echo(click.style(f"Error: {message}", fg="red"))
    raise SystemExit(1)


def _open_controller(store: ConfigStore) -> ConfigController:
    """Create a controller bound to *store* and hydrate it."""
    controller = ConfigController(store, on_notice=_echo_notice)
    try:
        controller.initialize()
    except ConfigError as exc:
        _fail(exc.message)
    return controller


def _save(controller: ConfigController) -> None:
    try:
        controller.save()
    except ConfigError as exc:
        _fail(exc.message)


def _describe_saved(controller: ConfigController) -> str:
    state = controller.state
    defn = get_provider(state.selected_provider)
    parts = [f"{defn.name} — API Key: "]
    parts.append(mask_api_key(state.draft.api_key) or "(not set)")
    if state.draft.base_url:
        parts.append(f", Base URL: {state.draft.base_url}")
    if state.draft.model_name:
        parts.append(f", Model: {state.draft.model_name}")
    return "".join(parts)


def _select_provider_interactive(
    prompt_text: str = "Select LLM provider:",
    *,
    default_pid: str = "",
    saved_pid: str = "",
) -> str:
    """Prompt user to pick a provider. Returns provider id.

    The provider that holds the stored configuration is marked with ✓.
    """
    labels: list[str] = []
    ids: list[str] = []
    for d in list_providers():
        mark = " [✓]" if d.id.value == saved_pid else ""
        labels.append(f"{d.name} ({d.id.value}){mark}")
        ids.append(d.id.value)

    default_label: Optional[str] = None
    if default_pid in ids:
        default_label = labels[ids.index(default_pid)]

    chosen_label = prompt_choice(
        prompt_text,
        options=labels,
        default=default_label,
    )
    return ids[labels.index(chosen_label)]


def configure_provider_interactive(
    store: ConfigStore,
    provider_id: Optional[str] = None,
) -> None:
    """Interactively pick a provider, fill in its fields and save."""
    controller = _open_controller(store)
    state = controller.state

    if provider_id is None:
        saved = state.saved_provider
        provider_id = _select_provider_interactive(
            default_pid=state.selected_provider.value,
            saved_pid=saved.value if saved else "",
        )
    try:
        controller.switch_provider(provider_id)
    except ConfigError as exc:
        _fail(exc.message)

    defn = get_provider(provider_id)
    draft = controller.draft
    for field in controller.visible_fields:
        current = draft.get(field)
        if field == FIELD_API_KEY:
            hint = "required" if defn.profile.key_required else "optional"
            value = click.prompt(
                f"{defn.api_key_label} ({hint})",
                default=current,
                hide_input=True,
                show_default=False,
                prompt_suffix=f" [{'set' if current else 'not set'}]: ",
            )
        elif field == FIELD_BASE_URL:
            value = click.prompt(
                f"Base URL ({defn.base_url_placeholder})",
                default=current,
                show_default=bool(current),
            )
        else:
            value = click.prompt(
                f"Model Name ({defn.model_name_placeholder})",
                default=current,
                show_default=bool(current),
            )
        controller.edit_field(field, value)

    _save(controller)
    click.echo(_describe_saved(controller))


# ---------------------------------------------------------------------------
# Group
# ---------------------------------------------------------------------------


@click.group("models")
def models_group() -> None:
    """Manage the LLM provider configuration."""


# ---------------------------------------------------------------------------
# list
# ---------------------------------------------------------------------------


@models_group.command("list")
@click.pass_obj
def list_cmd(obj: dict) -> None:
    """Show all providers, what they require and the stored config."""
    resolved = get_active_llm_config(obj["store"])

    click.echo("\n=== Providers ===")
    for defn in list_providers():
        profile = defn.profile
        is_saved = resolved is not None and resolved.provider == defn.id

        click.echo(f"\n{'─' * 44}")
        mark = " [✓]" if is_saved else ""
        click.echo(f"  {defn.name} ({defn.id.value}){mark}")
        click.echo(f"{'─' * 44}")
        key_req = "required" if profile.key_required else "optional"
        click.echo(f"  {'api_key':16s}: {key_req}")
        if profile.needs_base_url:
            click.echo(f"  {'base_url':16s}: required")
        if profile.needs_model_name:
            click.echo(f"  {'model_name':16s}: required")

    click.echo(f"\n{'═' * 44}")
    click.echo("  Stored Configuration")
    click.echo(f"{'═' * 44}")
    if resolved is None:
        click.echo(f"  {'LLM':16s}: (not configured)")
    else:
        click.echo(f"  {'provider':16s}: {resolved.provider.value}")
        key = mask_api_key(resolved.api_key) or "(not set)"
        click.echo(f"  {'api_key':16s}: {key}")
        if resolved.base_url:
            click.echo(f"  {'base_url':16s}: {resolved.base_url}")
        if resolved.model_name:
            click.echo(f"  {'model_name':16s}: {resolved.model_name}")

    click.echo()


# ---------------------------------------------------------------------------
# show
# ---------------------------------------------------------------------------


@models_group.command("show")
@click.option("--json", "as_json", is_flag=True, help="Print as JSON.")
@click.pass_obj
def show_cmd(obj: dict, as_json: bool) -> None:
    """Show the stored configuration (API key masked)."""
    resolved = get_active_llm_config(obj["store"])
    if resolved is None:
        if as_json:
            click.echo("null")
        else:
            click.echo("No LLM configuration stored.")
        return

    payload = resolved.model_dump(mode="json")
    payload["api_key"] = mask_api_key(resolved.api_key)
    if as_json:
        click.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return
    for key, value in payload.items():
        click.echo(f"{key:16s}: {value or '(not set)'}")


# ---------------------------------------------------------------------------
# set
# ---------------------------------------------------------------------------


@models_group.command("set")
@click.argument("provider_id")
@click.option("--api-key", default=None, help="API key for the provider.")
@click.option("--base-url", default=None, help="Endpoint URL.")
@click.option("--model-name", default=None, help="Model identifier.")
@click.pass_obj
def set_cmd(
    obj: dict,
    provider_id: str,
    api_key: Optional[str],
    base_url: Optional[str],
    model_name: Optional[str],
) -> None:
    """Save the configuration for PROVIDER_ID non-interactively.

    Options left out keep the stored value when PROVIDER_ID is the provider
    already stored.
    """
    if get_provider(provider_id) is None:
        _fail(f"Unknown provider: {provider_id}")

    controller = _open_controller(obj["store"])
    controller.switch_provider(provider_id)
    if api_key is not None:
        controller.edit_api_key(api_key)
    if base_url is not None:
        controller.edit_base_url(base_url)
    if model_name is not None:
        controller.edit_model_name(model_name)

    _save(controller)
    click.echo(_describe_saved(controller))


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------


@models_group.command("config")
@click.argument("provider_id", required=False, default=None)
@click.pass_obj
def config_cmd(obj: dict, provider_id: Optional[str]) -> None:
    """Interactively configure the LLM provider."""
    if provider_id is not None and get_provider(provider_id) is None:
        _fail(f"Unknown provider: {provider_id}")
    configure_provider_interactive(obj["store"], provider_id)


# ---------------------------------------------------------------------------
# remove
# ---------------------------------------------------------------------------


@models_group.command("remove")
@click.option("--yes", "-y", is_flag=True, help="Do not ask to confirm.")
@click.pass_obj
def remove_cmd(obj: dict, yes: bool) -> None:
    """Remove the stored configuration."""
    if not yes and not click.confirm(
        "Remove the stored LLM configuration?",
        default=False,
    ):
        click.echo("Aborted.")
        return
    controller = _open_controller(obj["store"])
    try:
        controller.remove()
    except ConfigError as exc:
        _fail(exc.message)
