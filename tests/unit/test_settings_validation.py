"""
Tests for settings schemas and the settings manager.

Covers validated_field(), BaseSettings load/validate, debounced saves in
BaseSettingsManager, and the FieldSyncSettings schema.
"""
import json
from dataclasses import dataclass

import pytest

from src.application.settings import (
    BaseSettings,
    FieldSyncSettings,
    FieldSyncSettingsManager,
    validated_field,
)
from src.infrastructure.persistence.file import JsonPreferencesStore


class DictStore:
    """In-memory preferences store."""

    def __init__(self, data=None):
        self.data = dict(data or {})
        self.set_calls = 0

    def get(self, key, default=None):
        return self.data.get(key, default)

    def set(self, key, value):
        self.set_calls += 1
        self.data[key] = value


@dataclass
class SampleSettings(BaseSettings):
    volume: int = validated_field(50, min_value=0, max_value=100)
    theme: str = validated_field("dark", choices=["dark", "light"])
    name: str = validated_field("desk", required=True, max_length=10)
    free: str = "anything"


class TestBaseSettings:
    """Schema behaviour."""

    def test_defaults_are_valid(self):
        assert SampleSettings().is_valid()

    def test_range_violation(self):
        result = SampleSettings(volume=150).validate()
        assert result.error_messages() == ["volume: must be at most 100 (got 150)"]

    def test_choice_violation(self):
        result = SampleSettings(theme="neon").validate()
        assert not result.valid
        assert result.errors[0].field == "theme"

    def test_required_and_length(self):
        assert not SampleSettings(name="").is_valid()
        assert not SampleSettings(name="x" * 11).is_valid()

    def test_validate_candidate_value(self):
        settings = SampleSettings()
        assert not settings.validate_field("volume", -1, use_current=False).valid
        assert settings.validate_field("volume").valid

    def test_unknown_field_raises(self):
        with pytest.raises(AttributeError):
            SampleSettings().validate_field("missing")

    def test_from_dict_ignores_unknown_and_fills_missing(self):
        settings = SampleSettings.from_dict({"volume": 10, "legacy_key": True})
        assert settings.volume == 10
        assert settings.theme == "dark"


class TestFieldSyncSettingsManager:
    """Typed access, validation and debounced persistence."""

    def test_defaults(self, fake_timers):
        manager = FieldSyncSettingsManager(timer_factory=fake_timers)
        assert manager.text_debounce_ms == 500
        assert manager.select_width == 120
        assert manager.option_suggestions_enabled is True
        assert manager.log_level == "INFO"

    def test_set_saves_after_debounce(self, fake_timers):
        store = DictStore()
        manager = FieldSyncSettingsManager(store, timer_factory=fake_timers)
        changed = []
        manager.settings_changed.connect(changed.append)

        manager.text_debounce_ms = 800
        manager.select_width = 200

        assert changed == ["text_debounce_ms", "select_width"]
        assert manager.has_pending_save()
        assert store.set_calls == 0

        fake_timers.timers[0].fire()

        assert store.set_calls == 1
        assert store.data["field_sync.settings"]["text_debounce_ms"] == 800
        assert not manager.has_pending_save()

    def test_invalid_value_rejected(self, fake_timers):
        manager = FieldSyncSettingsManager(timer_factory=fake_timers)
        failures = []
        manager.validation_failed.connect(failures.append)

        manager.text_debounce_ms = 20000

        assert manager.text_debounce_ms == 500
        assert len(failures) == 1
        assert not manager.has_pending_save()

    def test_unknown_setting_ignored(self, fake_timers):
        manager = FieldSyncSettingsManager(timer_factory=fake_timers)
        assert manager.set("nope", 1) is False

    def test_loads_stored_settings(self, fake_timers):
        store = DictStore({"field_sync.settings": {"text_debounce_ms": 250, "log_level": "DEBUG"}})
        manager = FieldSyncSettingsManager(store, timer_factory=fake_timers)
        assert manager.text_debounce_ms == 250
        assert manager.log_level == "DEBUG"
        assert manager.is_loaded()

    def test_invalid_stored_settings_fall_back_to_defaults(self, fake_timers):
        store = DictStore({"field_sync.settings": {"text_debounce_ms": -5}})
        manager = FieldSyncSettingsManager(store, timer_factory=fake_timers)
        assert manager.text_debounce_ms == 500

    def test_save_failure_signalled(self, fake_timers):
        store = DictStore()

        def failing_set(key, value):
            raise OSError("disk full")

        store.set = failing_set
        manager = FieldSyncSettingsManager(store, timer_factory=fake_timers)
        errors = []
        manager.settings_save_failed.connect(errors.append)

        manager.select_width = 150
        manager.force_save()

        assert errors == ["disk full"]

    def test_reset_to_defaults(self, fake_timers):
        store = DictStore()
        manager = FieldSyncSettingsManager(store, timer_factory=fake_timers)
        manager.select_width = 300
        manager.reset_to_defaults()
        assert manager.select_width == 120
        assert store.data["field_sync.settings"] == FieldSyncSettings().to_dict()


class TestJsonPreferencesStore:
    """File-backed preferences."""

    def test_round_trip_through_file(self, tmp_path):
        path = tmp_path / "config" / "preferences.json"
        store = JsonPreferencesStore(path)
        store.set("field_sync.settings", {"select_width": 150})

        reopened = JsonPreferencesStore(path)
        assert reopened.get("field_sync.settings") == {"select_width": 150}
        assert json.loads(path.read_text(encoding="utf-8"))["field_sync.settings"]["select_width"] == 150

    def test_corrupt_file_starts_empty(self, tmp_path):
        path = tmp_path / "preferences.json"
        path.write_text("{not json", encoding="utf-8")
        assert JsonPreferencesStore(path).get_all() == {}

    def test_delete(self, tmp_path):
        store = JsonPreferencesStore(tmp_path / "preferences.json")
        store.set("a", 1)
        assert store.delete("a") is True
        assert store.delete("a") is False
        assert store.get("a") is None

    def test_manager_with_json_store(self, tmp_path, fake_timers):
        store = JsonPreferencesStore(tmp_path / "preferences.json")
        manager = FieldSyncSettingsManager(store, timer_factory=fake_timers)
        manager.log_level = "WARNING"
        manager.force_save()

        reloaded = FieldSyncSettingsManager(JsonPreferencesStore(tmp_path / "preferences.json"), timer_factory=fake_timers)
        assert reloaded.log_level == "WARNING"
