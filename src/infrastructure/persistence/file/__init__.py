"""
File-based persistence implementations.
"""
from src.infrastructure.persistence.file.json_preferences_store import JsonPreferencesStore

__all__ = ['JsonPreferencesStore']
