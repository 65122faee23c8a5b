"""
Settings Store - Accessibility toggles and ReadEasy typography.

Single source of truth for the accessibility preferences of a session:
loaded lazily from storage on first read, written back synchronously on
every change, and applied to the presentation immediately.

Example:
    store = SettingsStore(storage, speech=speech, presenter=presenter)

    store.set_speech_enabled(True)
    store.update_read_easy_params(font_size_percent=999)
    store.get().read_easy_params.font_size_percent  # 150 (clamped)
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import asdict, dataclass, field, replace
from typing import Any, Callable, Mapping, Optional

from inclusive_jobs.accessibility.presentation import TypographyPresenter
from inclusive_jobs.accessibility.speech import SpeechEffector
from inclusive_jobs.monitoring.logging import get_logger
from inclusive_jobs.storage import (
    READ_EASY_KEY,
    READ_EASY_PARAMS_KEY,
    SIGN_ON_HOVER_KEY,
    SPEAK_ON_HOVER_KEY,
    SPEECH_KEY,
    KeyValueStorage,
)

logger = logging.getLogger(__name__)


# Valid (min, max) per typography parameter
PARAM_RANGES: dict[str, tuple[float, float]] = {
    "font_size_percent": (80.0, 150.0),
    "line_height": (1.2, 2.0),
    "letter_spacing_em": (0.0, 0.3),
    "word_spacing_em": (0.0, 0.15),
}


@dataclass(frozen=True)
class ReadEasyParams:
    """Typography overrides used while ReadEasy mode is on.

    Attributes:
        font_size_percent: Root font size, 80-150
        line_height: Unitless line height, 1.2-2.0
        letter_spacing_em: Extra letter spacing, 0-0.3em
        word_spacing_em: Extra word spacing, 0-0.15em
    """
    font_size_percent: float = 100.0
    line_height: float = 1.65
    letter_spacing_em: float = 0.02
    word_spacing_em: float = 0.08

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


DEFAULT_READ_EASY_PARAMS = ReadEasyParams()


@dataclass(frozen=True)
class AccessibilitySettings:
    """Accessibility preferences for the session.

    ``speak_on_hover_enabled`` only has an effect while
    ``speech_enabled`` is also on; sign-on-hover is independent.
    """
    read_easy_mode: bool = True
    read_easy_params: ReadEasyParams = field(default_factory=ReadEasyParams)
    speech_enabled: bool = False
    speak_on_hover_enabled: bool = False
    sign_on_hover_enabled: bool = False

    @property
    def hover_speech_active(self) -> bool:
        return self.speech_enabled and self.speak_on_hover_enabled


SettingsListener = Callable[[AccessibilitySettings], None]


def clamp_param(name: str, value: float) -> float:
    """Clamp a typography value into its valid range.

    Raises:
        ValueError: If ``name`` is not a typography parameter
    """
    if name not in PARAM_RANGES:
        raise ValueError(
            f"Unknown ReadEasy parameter '{name}'. "
            f"Expected one of: {', '.join(PARAM_RANGES)}"
        )
    low, high = PARAM_RANGES[name]
    return max(low, min(high, float(value)))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_params(raw: Optional[str]) -> ReadEasyParams:
    """Hydrate stored params; anything unusable falls back to the default."""
    if raw is None:
        return DEFAULT_READ_EASY_PARAMS

    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Ignoring corrupt ReadEasy parameters in storage")
        return DEFAULT_READ_EASY_PARAMS

    if not isinstance(data, dict):
        return DEFAULT_READ_EASY_PARAMS

    values = DEFAULT_READ_EASY_PARAMS.to_dict()
    for name in PARAM_RANGES:
        stored = data.get(name)
        if _is_number(stored) and not math.isnan(stored):
            values[name] = clamp_param(name, stored)
    return ReadEasyParams(**values)


def _parse_flag(raw: Optional[str], default: bool) -> bool:
    if raw == "1":
        return True
    if raw == "0":
        return False
    return default


class SettingsStore:
    """Persisted accessibility settings with immediate side effects.

    The store:
    - Hydrates from storage on first ``get()`` (defaults for absent keys)
    - Persists each mutation synchronously
    - Cancels in-flight speech when a speech toggle is switched off
    - Re-applies typography on every ReadEasy change
    - Notifies subscribers with the new settings
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        speech: Optional[SpeechEffector] = None,
        presenter: Optional[TypographyPresenter] = None,
    ) -> None:
        """Initialize the store.

        Args:
            storage: Where settings are persisted
            speech: Speech effector to cancel when speech is disabled
            presenter: Typography presenter to re-apply on changes
        """
        self._storage = storage
        self._speech = speech
        self._presenter = presenter
        self._settings: Optional[AccessibilitySettings] = None
        self._listeners: list[SettingsListener] = []

    def get(self) -> AccessibilitySettings:
        """Current settings, hydrated from storage on first call."""
        if self._settings is None:
            self._settings = self._load()
        return self._settings

    def _load(self) -> AccessibilitySettings:
        defaults = AccessibilitySettings()
        return AccessibilitySettings(
            read_easy_mode=_parse_flag(
                self._storage.get_item(READ_EASY_KEY), defaults.read_easy_mode
            ),
            read_easy_params=_parse_params(self._storage.get_item(READ_EASY_PARAMS_KEY)),
            speech_enabled=_parse_flag(
                self._storage.get_item(SPEECH_KEY), defaults.speech_enabled
            ),
            speak_on_hover_enabled=_parse_flag(
                self._storage.get_item(SPEAK_ON_HOVER_KEY), defaults.speak_on_hover_enabled
            ),
            sign_on_hover_enabled=_parse_flag(
                self._storage.get_item(SIGN_ON_HOVER_KEY), defaults.sign_on_hover_enabled
            ),
        )

    def subscribe(self, listener: SettingsListener) -> Callable[[], None]:
        """Receive the new settings after every mutation.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, settings: AccessibilitySettings, setting: str, value: Any) -> None:
        self._settings = settings
        get_logger().setting_changed(setting, value)
        for listener in list(self._listeners):
            try:
                listener(settings)
            except Exception:
                logger.exception("Settings listener failed")

    def _set_flag(self, key: str, attr: str, enabled: bool) -> AccessibilitySettings:
        enabled = bool(enabled)
        self._storage.set_item(key, "1" if enabled else "0")
        settings = replace(self.get(), **{attr: enabled})
        self._commit(settings, attr, enabled)
        return settings

    def apply_presentation(self) -> None:
        """Write the current typography onto the presentation layer."""
        if self._presenter is None:
            return
        settings = self.get()
        self._presenter.apply(settings.read_easy_mode, settings.read_easy_params)

    # Toggles

    def set_read_easy_mode(self, enabled: bool) -> AccessibilitySettings:
        settings = self._set_flag(READ_EASY_KEY, "read_easy_mode", enabled)
        self.apply_presentation()
        return settings

    def set_speech_enabled(self, enabled: bool) -> AccessibilitySettings:
        settings = self._set_flag(SPEECH_KEY, "speech_enabled", enabled)
        if not settings.speech_enabled and self._speech is not None:
            self._speech.stop()
        return settings

    def set_speak_on_hover_enabled(self, enabled: bool) -> AccessibilitySettings:
        settings = self._set_flag(SPEAK_ON_HOVER_KEY, "speak_on_hover_enabled", enabled)
        if not settings.speak_on_hover_enabled and self._speech is not None:
            self._speech.stop()
        return settings

    def set_sign_on_hover_enabled(self, enabled: bool) -> AccessibilitySettings:
        return self._set_flag(SIGN_ON_HOVER_KEY, "sign_on_hover_enabled", enabled)

    # Typography

    def update_read_easy_params(
        self,
        partial: Optional[Mapping[str, float]] = None,
        **fields: float,
    ) -> ReadEasyParams:
        """Merge typography changes, clamping each into its range.

        Args:
            partial: Mapping of parameter name to new value
            **fields: Same, as keyword arguments

        Returns:
            The merged, clamped parameters

        Raises:
            ValueError: If a parameter name is unknown
            TypeError: If a value is not a number
        """
        changes = {**dict(partial or {}), **fields}
        current = self.get().read_easy_params
        values = current.to_dict()

        for name, value in changes.items():
            if name not in PARAM_RANGES:
                raise ValueError(
                    f"Unknown ReadEasy parameter '{name}'. "
                    f"Expected one of: {', '.join(PARAM_RANGES)}"
                )
            if not _is_number(value):
                raise TypeError(f"ReadEasy parameter '{name}' must be a number, got {value!r}")
            if math.isnan(value):
                continue
            values[name] = clamp_param(name, value)

        params = ReadEasyParams(**values)
        self._store_params(params)
        return params

    def reset_read_easy_params(self) -> ReadEasyParams:
        """Restore the default typography."""
        self._store_params(DEFAULT_READ_EASY_PARAMS)
        return DEFAULT_READ_EASY_PARAMS

    def _store_params(self, params: ReadEasyParams) -> None:
        self._storage.set_item(READ_EASY_PARAMS_KEY, json.dumps(params.to_dict()))
        settings = replace(self.get(), read_easy_params=params)
        self._commit(settings, "read_easy_params", params.to_dict())
        self.apply_presentation()
