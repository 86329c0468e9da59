"""Effect and application configuration."""

from mandalagen.core.config.loader import (
    configure_logging,
    detect_format,
    load_app_config,
    load_config,
    load_preset,
)
from mandalagen.core.config.models import AppConfig, LoggingConfig, RenderConfig
from mandalagen.core.config.presets import BUILTIN_PRESETS, get_preset, list_presets
from mandalagen.core.config.schema import (
    PICK_ONE_KEYS,
    ConfigurationError,
    ResolvedConfig,
    ValidationResult,
    phase_starts,
    resolve_config,
    validate_config,
)

__all__ = [
    "BUILTIN_PRESETS",
    "PICK_ONE_KEYS",
    "AppConfig",
    "ConfigurationError",
    "LoggingConfig",
    "RenderConfig",
    "ResolvedConfig",
    "ValidationResult",
    "configure_logging",
    "detect_format",
    "get_preset",
    "list_presets",
    "load_app_config",
    "load_config",
    "load_preset",
    "phase_starts",
    "resolve_config",
    "validate_config",
]
