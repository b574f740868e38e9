"""Public API for shared Stowage configuration utilities."""

from .loader import load_settings
from .models import (
    ComponentsSettings,
    DEFAULT_CONFIG_PATH,
    LoggingSettings,
    StowageSettings,
    resolve_component_settings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ComponentsSettings",
    "LoggingSettings",
    "StowageSettings",
    "resolve_component_settings",
    "load_settings",
]
