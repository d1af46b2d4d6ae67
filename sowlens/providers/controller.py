# -*- coding: utf-8 -*-
"""Session controller for the multi-provider LLM configuration.

The controller owns one :class:`SessionState` and is its only mutator. Each
public operation below is one transition:

* :meth:`ConfigController.initialize` hydrates the session from the store.
* :meth:`ConfigController.switch_provider` changes the selected provider.
* :meth:`ConfigController.edit_field` changes a draft field.
* :meth:`ConfigController.save` validates and persists the draft.
* :meth:`ConfigController.remove` clears the persisted config.

Only one provider's configuration is ever persisted. Switching back to the
stored provider restores its saved fields; any other provider starts empty.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple, Union

from ..constant import (
    STORE_KEY_API_KEY,
    STORE_KEY_BASE_URL,
    STORE_KEY_MODEL_NAME,
    STORE_KEY_PROVIDER,
    STORE_KEYS,
)
from .errors import (
    MissingProviderSelection,
    MissingRequiredField,
    UnknownProviderKind,
)
from .models import (
    CREDENTIAL_FIELDS,
    FIELD_API_KEY,
    FIELD_BASE_URL,
    FIELD_MODEL_NAME,
    ConfigSnapshot,
    CredentialSet,
    ProviderKind,
    SessionState,
)
from .registry import (
    DEFAULT_PROVIDER,
    get_provider,
    parse_provider,
    profile_for,
)
from .store import ConfigStore

logger = logging.getLogger(__name__)

# (api_key, provider, base_url, model_name), empty values passed as None
OnConfigChange = Optional[
    Callable[
        [Optional[str], Optional[str], Optional[str], Optional[str]],
        None,
    ]
]
# User-facing feedback ("saved", "removed")
OnNotice = Optional[Callable[[str], None]]

MSG_SAVED = "LLM Configuration saved successfully!"
MSG_REMOVED = "LLM Configuration removed."

# snake_case aliases accepted by edit_field
_FIELD_ALIASES = {attr: field for field, attr in CREDENTIAL_FIELDS.items()}


class ConfigController:
    def __init__(
        self,
        store: ConfigStore,
        on_change: OnConfigChange = None,
        on_notice: OnNotice = None,
    ):
        self._store = store
        self._on_change = on_change
        self._on_notice = on_notice
        self._state: Optional[SessionState] = None

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def initialized(self) -> bool:
        return self._state is not None

    @property
    def state(self) -> SessionState:
        """A copy of the session state; mutate it through the operations."""
        return self._require_state().model_copy(deep=True)

    @property
    def selected_provider(self) -> Optional[ProviderKind]:
        return self._require_state().selected_provider

    @property
    def draft(self) -> CredentialSet:
        return self._require_state().draft.model_copy()

    @property
    def is_config_saved(self) -> bool:
        """True iff the draft matches what is stored for this provider.

        Only the fields the selected provider's profile uses are compared.
        The API key always takes part, even for profiles where it is
        optional, since the key input is shown for every provider.
        """
        state = self._require_state()
        if state.saved is None or state.saved_provider is None:
            return False
        if state.saved_provider != state.selected_provider:
            return False
        profile = profile_for(state.selected_provider)
        return all(
            state.draft.get(field) == state.saved.get(field)
            for field in profile.relevant_fields
        )

    @property
    def is_dirty(self) -> bool:
        return not self.is_config_saved

    @property
    def can_remove(self) -> bool:
        return self.is_config_saved

    @property
    def save_label(self) -> str:
        if self.is_config_saved:
            return "Update Configuration"
        return "Save Configuration"

    @property
    def status_message(self) -> Optional[str]:
        if not self.is_config_saved:
            return None
        saved_provider = self._require_state().saved_provider
        return (
            f"LLM Configuration for {saved_provider.value} "
            "is currently set."
        )

    @property
    def visible_fields(self) -> Tuple[str, ...]:
        """Credential inputs to render for the selected provider."""
        provider = self._require_state().selected_provider
        if provider is None:
            return (FIELD_API_KEY,)
        return profile_for(provider).relevant_fields

    def snapshot(self) -> ConfigSnapshot:
        """The draft as the change callback would receive it."""
        state = self._require_state()
        return ConfigSnapshot.from_credentials(
            state.selected_provider,
            state.draft.trimmed(),
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def initialize(self) -> ConfigSnapshot:
        """Hydrate the session from the store (read each key once)."""
        stored = {key: self._store.read(key) for key in STORE_KEYS}
        raw_provider = stored[STORE_KEY_PROVIDER]

        provider: Optional[ProviderKind] = None
        if raw_provider:
            try:
                provider = parse_provider(raw_provider)
            except UnknownProviderKind:
                logger.warning(
                    "Ignoring unknown stored provider %r",
                    raw_provider,
                )

        if provider is None:
            self._state = SessionState(selected_provider=DEFAULT_PROVIDER)
            logger.debug(
                "No stored LLM config, defaulting to %s",
                DEFAULT_PROVIDER.value,
            )
            return self._notify_change(
                ConfigSnapshot(provider=DEFAULT_PROVIDER),
            )

        saved = CredentialSet(
            api_key=stored[STORE_KEY_API_KEY] or "",
            base_url=stored[STORE_KEY_BASE_URL] or "",
            model_name=stored[STORE_KEY_MODEL_NAME] or "",
        ).restricted_to(profile_for(provider))
        self._state = SessionState(
            selected_provider=provider,
            draft=saved.model_copy(),
            saved=saved,
            saved_provider=provider,
        )
        logger.debug("Loaded stored LLM config for %s", provider.value)
        return self._notify_change(
            ConfigSnapshot.from_credentials(provider, saved),
        )

    def switch_provider(
        self,
        provider: Union[str, ProviderKind],
    ) -> ConfigSnapshot:
        """Select *provider*; clear the draft, restoring saved fields if the
        stored config belongs to it."""
        state = self._require_state()
        new_provider = parse_provider(provider)

        state.selected_provider = new_provider
        # Never carry one provider's secret over into another's fields.
        state.draft = CredentialSet()
        if state.saved is not None and state.saved_provider == new_provider:
            state.draft = state.saved.restricted_to(profile_for(new_provider))
        logger.debug(
            "Switched provider to %s (restored=%s)",
            new_provider.value,
            state.saved_provider == new_provider,
        )
        return self._notify_change(self.snapshot())

    def edit_field(self, field: str, value: str) -> None:
        """Set one draft field. Nothing is validated or persisted here."""
        state = self._require_state()
        name = _FIELD_ALIASES.get(field, field)
        if name not in CREDENTIAL_FIELDS:
            raise ValueError(f"Unknown credential field: {field}")
        setattr(state.draft, CREDENTIAL_FIELDS[name], value)

    def edit_api_key(self, value: str) -> None:
        self.edit_field(FIELD_API_KEY, value)

    def edit_base_url(self, value: str) -> None:
        self.edit_field(FIELD_BASE_URL, value)

    def edit_model_name(self, value: str) -> None:
        self.edit_field(FIELD_MODEL_NAME, value)

    def save(self) -> ConfigSnapshot:
        """Validate the draft against the profile and persist it.

        Raises :class:`MissingProviderSelection` or
        :class:`MissingRequiredField` before any key is written.
        """
        state = self._require_state()
        # initialize, switch_provider and remove always leave one selected
        if state.selected_provider is None:
            raise MissingProviderSelection()
        provider = state.selected_provider
        profile = profile_for(provider)
        values = state.draft.trimmed()

        if profile.needs_base_url and not values.base_url:
            self._reject(provider, FIELD_BASE_URL)
        if profile.needs_model_name and not values.model_name:
            self._reject(provider, FIELD_MODEL_NAME)
        if profile.key_required and not values.api_key:
            self._reject(provider, FIELD_API_KEY)

        saved = values.restricted_to(profile)

        self._store.write(STORE_KEY_PROVIDER, provider.value)
        self._write_or_remove(STORE_KEY_API_KEY, saved.api_key)
        self._write_or_remove(STORE_KEY_BASE_URL, saved.base_url)
        self._write_or_remove(STORE_KEY_MODEL_NAME, saved.model_name)

        state.saved = saved
        state.saved_provider = provider
        state.draft = saved.model_copy()
        logger.info("Saved LLM config for %s", provider.value)

        snapshot = self._notify_change(
            ConfigSnapshot.from_credentials(provider, saved),
        )
        self._notify(MSG_SAVED)
        return snapshot

    def remove(self) -> ConfigSnapshot:
        """Clear every persisted key and reset to the default provider."""
        state = self._require_state()
        for key in STORE_KEYS:
            self._store.remove(key)

        state.saved = None
        state.saved_provider = None
        state.selected_provider = DEFAULT_PROVIDER
        state.draft = CredentialSet()
        logger.info("Removed stored LLM config")

        snapshot = self._notify_change(
            ConfigSnapshot(provider=DEFAULT_PROVIDER),
        )
        self._notify(MSG_REMOVED)
        return snapshot

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_state(self) -> SessionState:
        if self._state is None:
            raise RuntimeError(
                "ConfigController.initialize() must be called first",
            )
        return self._state

    def _write_or_remove(self, key: str, value: str) -> None:
        if value:
            self._store.write(key, value)
        else:
            self._store.remove(key)

    def _reject(self, provider: ProviderKind, field: str) -> None:
        defn = get_provider(provider)
        logger.info(
            "Refusing to save %s config: %s is empty",
            defn.name if defn else provider.value,
            field,
        )
        raise MissingRequiredField(field)

    def _notify_change(self, snapshot: ConfigSnapshot) -> ConfigSnapshot:
        if self._on_change is not None:
            self._on_change(*snapshot.as_tuple())
        return snapshot

    def _notify(self, message: str) -> None:
        if self._on_notice is not None:
            self._on_notice(message)
