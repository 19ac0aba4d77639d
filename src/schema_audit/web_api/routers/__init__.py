"""
API Routers
===========
Each router handles a specific domain of the API.
"""
from . import health, validate

__all__ = ["health", "validate"]
