"""
Application Settings Module

Classes:
    BaseSettings: Base dataclass for settings schemas
    BaseSettingsManager: Base for settings managers
    FieldSyncSettings / FieldSyncSettingsManager: inline editor settings

Usage:
    from src.application.settings import FieldSyncSettingsManager
"""

from .base_settings import BaseSettings, BaseSettingsManager, validated_field
from .field_sync_settings import (
    FieldSyncSettings,
    FieldSyncSettingsManager,
    LOG_LEVELS,
)

__all__ = [
    'BaseSettings',
    'BaseSettingsManager',
    'validated_field',
    'FieldSyncSettings',
    'FieldSyncSettingsManager',
    'LOG_LEVELS',
]
