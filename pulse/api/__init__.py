# ==============================================================================
# HTTP API
# ==============================================================================
"""
FastAPI boundary: tracking ingestion, stats queries and clearing.
"""

from pulse.api.app import create_app

__all__ = ["create_app"]
