# ==============================================================================
# Pulse Utilities
# ==============================================================================
"""
Shared utilities: configuration, retry policies and version lookup.
"""

from pulse.utils.config import (
    ApiSettings,
    FileStoreSettings,
    SessionSettings,
    Settings,
    StoreSettings,
    ValkeySettings,
    get_settings,
)

__all__ = [
    "ApiSettings",
    "FileStoreSettings",
    "SessionSettings",
    "Settings",
    "StoreSettings",
    "ValkeySettings",
    "get_settings",
]
