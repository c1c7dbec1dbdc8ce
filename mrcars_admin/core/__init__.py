"""Core: config, lifespan, exception handlers, and rate limiting.

Single place for settings and application bootstrap wiring.
"""

from mrcars_admin.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
