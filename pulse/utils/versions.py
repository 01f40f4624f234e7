# ==============================================================================
# Version Utilities
# ==============================================================================
"""
Utilities for retrieving package versions.
"""

from importlib.metadata import PackageNotFoundError, version


def get_pulse_version() -> str:
    """
    Get the pulse-analytics package version.

    Returns:
        Version string (e.g., "0.1.0")
    """
    try:
        return version("pulse-analytics")
    except PackageNotFoundError:
        return "0.1.0"
