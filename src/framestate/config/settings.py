"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support.

Usage:
    from framestate.config import StateSettings

    # Load from environment variables (FRAMESTATE_*)
    settings = StateSettings()

    # Or override with explicit values
    settings = StateSettings(strict_validation=True)
"""

from __future__ import annotations

try:
    from pydantic_settings import BaseSettings, SettingsConfigDict
except ImportError as e:
    raise ImportError(
        "pydantic-settings is required for config module. "
        "Install with: pip install framestate"
    ) from e


class StateSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for object states and the plugin registry.

    Attributes:
        strict_validation: Type-check scalar fields when no validators are passed.
        wrap_plugin_errors: Wrap non-PluginError failures raised by plugin code.
        log_dispatch: Log every gateway invocation at DEBUG level.

    Environment Variables:
        FRAMESTATE_STRICT_VALIDATION
        FRAMESTATE_WRAP_PLUGIN_ERRORS
        FRAMESTATE_LOG_DISPATCH
    """

    model_config = SettingsConfigDict(
        env_prefix="FRAMESTATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    strict_validation: bool = False
    wrap_plugin_errors: bool = True
    log_dispatch: bool = False
