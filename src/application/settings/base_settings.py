"""
Base Settings Manager

Foundation for the desk's settings managers.

Features:
- Dataclass-based schema with defaults for every field
- Persistence through a preferences store (get/set of JSON-able values)
- Debounced auto-save on change (single-shot QTimer)
- Signals for UI reactivity
- Backwards-compatible loading (unknown keys dropped, missing keys defaulted)
- Field validation via the shared validation framework

Usage:
    @dataclass
    class MySettings(BaseSettings):
        width: int = validated_field(120, min_value=40, max_value=600)

    class MySettingsManager(BaseSettingsManager):
        NAMESPACE = "my_component"
        SETTINGS_CLASS = MySettings
"""
from dataclasses import dataclass, asdict, fields, field
from typing import Optional, Dict, Any, Type, List, Union, Callable

from PyQt6.QtCore import QObject, pyqtSignal, QTimer

from src.shared.application.validation import (
    CustomValidator,
    LengthValidator,
    RangeValidator,
    RequiredValidator,
    ValidationResult,
    Validator,
    validate_field,
)
from src.utils.message import Log


def validated_field(
    default: Any = None,
    *,
    min_value: Optional[Union[int, float]] = None,
    max_value: Optional[Union[int, float]] = None,
    choices: Optional[List[Any]] = None,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    required: bool = False,
    **kwargs
):
    """
    Create a dataclass field carrying validators in its metadata.

    Example:
        debounce_ms: int = validated_field(500, min_value=0, max_value=10000)
        log_level: str = validated_field("INFO", choices=["DEBUG", "INFO"])
    """
    validators: List[Validator] = []
    if required:
        validators.append(RequiredValidator())
    if min_value is not None or max_value is not None:
        validators.append(RangeValidator(min_value=min_value, max_value=max_value))
    if min_length is not None or max_length is not None:
        validators.append(LengthValidator(min_length=min_length, max_length=max_length))
    if choices is not None:
        allowed = list(choices)
        validators.append(CustomValidator(lambda v: v in allowed, f"must be one of {allowed}"))

    metadata = dict(kwargs.pop('metadata', {}))
    metadata['validators'] = validators
    return field(default=default, metadata=metadata, **kwargs)


@dataclass
class BaseSettings:
    """
    Base class for settings dataclasses.

    Every field needs a default so older stored settings keep loading.
    """

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BaseSettings':
        """Create settings from stored data; unknown keys are ignored."""
        valid_keys = {f.name for f in fields(cls)}
        merged = asdict(cls())
        merged.update({k: v for k, v in data.items() if k in valid_keys})
        return cls(**merged)

    def validate(self) -> ValidationResult:
        """Validate every field that declares validators."""
        result = ValidationResult()
        for f in fields(self):
            result.merge(self._validate(f, getattr(self, f.name)))
        return result

    def validate_field(self, field_name: str, value: Any = None, use_current: bool = True) -> ValidationResult:
        """
        Validate one field (its current value, or a candidate value).

        Raises:
            AttributeError: If the field doesn't exist
        """
        for f in fields(self):
            if f.name == field_name:
                candidate = getattr(self, field_name) if use_current else value
                return self._validate(f, candidate)
        raise AttributeError(f"Field '{field_name}' not found in {self.__class__.__name__}")

    def is_valid(self) -> bool:
        return self.validate().valid

    @staticmethod
    def _validate(f, value: Any) -> ValidationResult:
        validators = f.metadata.get('validators') if f.metadata else None
        if not validators:
            return ValidationResult()
        return validate_field(f.name, value, validators)


class BaseSettingsManager(QObject):
    """
    Base class for settings managers.

    Subclasses define NAMESPACE and SETTINGS_CLASS and usually expose typed
    properties over get()/set().
    """

    settings_changed = pyqtSignal(str)       # name of the setting that changed
    settings_loaded = pyqtSignal()
    validation_failed = pyqtSignal(object)   # ValidationResult
    settings_save_failed = pyqtSignal(str)   # error message

    NAMESPACE: str = ""
    SETTINGS_CLASS: Type[BaseSettings] = BaseSettings

    SAVE_DEBOUNCE_MS: int = 300

    def __init__(self, preferences_store=None, timer_factory: Optional[Callable[[], Any]] = None, parent=None):
        """
        Args:
            preferences_store: Object with get(key, default) / set(key, value);
                None keeps settings in memory only
            timer_factory: Builds the save timer (defaults to QTimer)
            parent: Parent QObject
        """
        super().__init__(parent)

        if not self.NAMESPACE:
            raise ValueError(f"{self.__class__.__name__} must define NAMESPACE")

        self._preferences_store = preferences_store
        self._settings: BaseSettings = self.SETTINGS_CLASS()
        self._loaded = False
        self._pending_save = False

        self._save_timer = timer_factory() if timer_factory else QTimer(self)
        self._save_timer.setSingleShot(True)
        self._save_timer.timeout.connect(self._do_save)

        self._load_from_storage()

    @property
    def _storage_key(self) -> str:
        return f"{self.NAMESPACE}.settings"

    @property
    def settings(self) -> BaseSettings:
        return self._settings

    # =========================================================================
    # Generic Access
    # =========================================================================

    def get(self, key: str, default: Any = None) -> Any:
        return getattr(self._settings, key, default)

    def set(self, key: str, value: Any) -> bool:
        """
        Validate and store one setting.

        Invalid values are not stored; validation_failed is emitted instead.

        Returns:
            True if the setting changed
        """
        if not hasattr(self._settings, key):
            Log.warning(f"{self.__class__.__name__}: Unknown setting '{key}'")
            return False

        if getattr(self._settings, key) == value:
            return False

        result = self._settings.validate_field(key, value, use_current=False)
        if not result.valid:
            Log.warning(f"{self.__class__.__name__}: Rejected {key}={value!r}: {'; '.join(result.error_messages())}")
            self.validation_failed.emit(result)
            return False

        setattr(self._settings, key, value)
        self._save_setting(key)
        return True

    def get_all(self) -> Dict[str, Any]:
        return self._settings.to_dict()

    def reset_to_defaults(self):
        self._settings = self.SETTINGS_CLASS()
        self.force_save()
        self.settings_loaded.emit()

    # =========================================================================
    # Persistence
    # =========================================================================

    def _load_from_storage(self):
        if not self._preferences_store:
            self._loaded = True
            return

        try:
            stored = self._preferences_store.get(self._storage_key, {})
            if stored and isinstance(stored, dict):
                candidate = self.SETTINGS_CLASS.from_dict(stored)
                result = candidate.validate()
                if result.valid:
                    self._settings = candidate
                else:
                    Log.warning(f"{self.__class__.__name__}: Stored settings invalid, using defaults: {'; '.join(result.error_messages())}")
                    self.validation_failed.emit(result)
            self._loaded = True
            self.settings_loaded.emit()
        except Exception as e:
            Log.error(f"{self.__class__.__name__}: Failed to load settings: {e}")
            self._loaded = True

    def _save_setting(self, key: str):
        self._pending_save = True
        self._save_timer.start(self.SAVE_DEBOUNCE_MS)
        self.settings_changed.emit(key)

    def _do_save(self):
        if not self._preferences_store:
            self._pending_save = False
            return

        try:
            self._preferences_store.set(self._storage_key, self._settings.to_dict())
            self._pending_save = False
        except Exception as e:
            Log.error(f"{self.__class__.__name__}: Failed to save settings: {e}")
            self.settings_save_failed.emit(str(e))

    def force_save(self):
        """Save immediately, bypassing the debounce."""
        self._save_timer.stop()
        self._do_save()

    # =========================================================================
    # Status
    # =========================================================================

    def is_loaded(self) -> bool:
        return self._loaded

    def has_pending_save(self) -> bool:
        return self._pending_save

    def validate(self) -> ValidationResult:
        return self._settings.validate()
