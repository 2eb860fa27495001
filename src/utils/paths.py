"""
Path management for WorksDesk

Handles platform-specific user directories following standard conventions:
- macOS: ~/Library/Application Support/WorksDesk/
- Linux: ~/.local/share/worksdesk/ (data), ~/.config/worksdesk/ (config)
- Windows: %APPDATA%/WorksDesk/

Application code should be separate from user data.
"""
import os
import sys
from pathlib import Path


# Application name
APP_NAME = "WorksDesk"
APP_SLUG = "worksdesk"


def get_user_data_dir() -> Path:
    """
    Get platform-specific user data directory.

    Returns:
        Path to user data directory where logs and local caches are stored.
    """
    system = sys.platform

    if system == "darwin":  # macOS
        user_data_dir = Path.home() / "Library" / "Application Support" / APP_NAME
    elif system == "win32":  # Windows
        user_data_dir = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming")) / APP_NAME
    else:  # Linux and other Unix-like
        user_data_dir = Path.home() / ".local" / "share" / APP_SLUG

    user_data_dir.mkdir(parents=True, exist_ok=True)
    return user_data_dir


def get_user_config_dir() -> Path:
    """
    Get platform-specific user config directory.

    Same as the data directory on macOS/Windows, ~/.config/worksdesk/ on Linux.
    """
    if sys.platform in ("darwin", "win32"):
        return get_user_data_dir()

    config_dir = Path.home() / ".config" / APP_SLUG
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_logs_dir() -> Path:
    """Get directory for application logs (inside the user data directory)."""
    logs_dir = get_user_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir


def get_preferences_path() -> Path:
    """
    Get path to the preferences file.

    Returns:
        Path to preferences.json in user config directory.
    """
    return get_user_config_dir() / "preferences.json"
