"""
Field Sync Settings

User-tunable behaviour of the inline editors.

Usage:
    settings = FieldSyncSettingsManager(JsonPreferencesStore(get_preferences_path()))
    settings.text_debounce_ms = 800    # validated, auto-saves
"""
from dataclasses import dataclass

from .base_settings import BaseSettings, BaseSettingsManager, validated_field


LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@dataclass
class FieldSyncSettings(BaseSettings):
    """Inline editor settings schema."""

    # Quiet period before a text edit is persisted
    text_debounce_ms: int = validated_field(500, min_value=0, max_value=10000)

    # Width of select widgets in pixels
    select_width: int = validated_field(120, min_value=40, max_value=600)

    # Offer distinct stored values as suggestions in select widgets
    option_suggestions_enabled: bool = True

    log_level: str = validated_field("INFO", choices=LOG_LEVELS)


class FieldSyncSettingsManager(BaseSettingsManager):
    """Typed access to FieldSyncSettings."""

    NAMESPACE = "field_sync"
    SETTINGS_CLASS = FieldSyncSettings

    @property
    def text_debounce_ms(self) -> int:
        return self._settings.text_debounce_ms

    @text_debounce_ms.setter
    def text_debounce_ms(self, value: int):
        self.set('text_debounce_ms', value)

    @property
    def select_width(self) -> int:
        return self._settings.select_width

    @select_width.setter
    def select_width(self, value: int):
        self.set('select_width', value)

    @property
    def option_suggestions_enabled(self) -> bool:
        return self._settings.option_suggestions_enabled

    @option_suggestions_enabled.setter
    def option_suggestions_enabled(self, value: bool):
        self.set('option_suggestions_enabled', value)

    @property
    def log_level(self) -> str:
        return self._settings.log_level

    @log_level.setter
    def log_level(self, value: str):
        self.set('log_level', value)
