"""Configuration module using Pydantic Settings.

Usage:
    from framestate.config import StateSettings

    settings = StateSettings(wrap_plugin_errors=False)
"""

from framestate.config.settings import StateSettings

__all__ = [
    "StateSettings",
]
