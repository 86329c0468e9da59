"""Reading effect presets and app settings from JSON or YAML files."""

from __future__ import annotations

from collections.abc import Callable
import json
import logging
from pathlib import Path
from typing import IO, Any

import yaml

from mandalagen.core.config.models import AppConfig
from mandalagen.core.config.presets import BUILTIN_PRESETS, get_preset
from mandalagen.core.config.schema import declared_phases, phase_starts, without_phases
from mandalagen.core.utils.logging import configure_logging as _configure_logging

logger = logging.getLogger(__name__)

BASE_PRESET_KEY = "extends"


def _read_json(stream: IO[str]) -> Any:
    return json.load(stream)


def _read_yaml(stream: IO[str]) -> Any:
    # An empty document parses to None
    return yaml.safe_load(stream) or {}


_FORMATS: dict[str, str] = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}
_READERS: dict[str, tuple[Callable[[IO[str]], Any], type[Exception]]] = {
    "json": (_read_json, json.JSONDecodeError),
    "yaml": (_read_yaml, yaml.YAMLError),
}


def detect_format(file_path: Path | str) -> str:
    """Map a file extension to ``"json"`` or ``"yaml"``.

    Raises:
        ValueError: For any other extension.

    Example:
        >>> detect_format("ethereal.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()
    try:
        return _FORMATS[suffix]
    except KeyError:
        raise ValueError(
            f"Unsupported config format: {suffix or '(none)'}; expected one of {sorted(_FORMATS)}"
        ) from None


def load_config(path: str | Path) -> dict[str, Any]:
    """Parse a JSON/YAML file whose top level is a mapping.

    Raises:
        FileNotFoundError: If the file is missing.
        ValueError: On an unsupported extension, a parse error, or a
            top-level value that is not a mapping.
    """
    source = Path(path)
    if not source.is_file():
        raise FileNotFoundError(f"Config file not found: {source}")

    fmt = detect_format(source)
    reader, parse_error = _READERS[fmt]
    with source.open(encoding="utf-8") as stream:
        try:
            data = reader(stream)
        except parse_error as e:
            raise ValueError(f"Invalid {fmt.upper()} in {source}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config in {source} must be a mapping, got {type(data).__name__}")
    return data


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Read app settings, falling back to defaults when the file is absent.

    Args:
        path: Settings file; ``AppConfig.default_path()`` when None.

    Raises:
        pydantic.ValidationError: If the file holds invalid settings.
    """
    source = Path(path) if path is not None else AppConfig.default_path()
    if not source.is_file():
        logger.debug(f"No app config at {source}; using defaults")
        return AppConfig()

    logger.debug(f"Loading app config from {source}")
    return AppConfig.model_validate(load_config(source))


def configure_logging(config: AppConfig | None = None) -> None:
    """Apply an AppConfig's logging section (read from the default path if None)."""
    settings = (config or load_app_config()).logging
    _configure_logging(
        level=settings.level,
        format_string=settings.format,
        structured=settings.structured,
    )


def _find_preset_file(name: str, search_dir: Path | None) -> Path | None:
    direct = Path(name)
    if direct.suffix.lower() in _FORMATS and direct.is_file():
        return direct
    if search_dir is None:
        return None
    return next(
        (search_dir / f"{name}{suffix}" for suffix in _FORMATS if (search_dir / f"{name}{suffix}").is_file()),
        None,
    )


def load_preset(name_or_path: str | Path, search_dir: str | Path | None = None) -> dict[str, Any]:
    """Raw effect config for a built-in preset name or a preset file.

    A preset file is merged over a built-in base preset: the one named by
    its ``extends`` key, else ``default``. When the file declares phase
    names the base does not have, the base's phase starts and the keys of
    its undeclared phases are dropped before merging.

    Args:
        name_or_path: Built-in name, path to a preset file, or the stem of a
            file in ``search_dir`` (which takes precedence over built-ins).
        search_dir: Directory searched for ``<name>.json|.yaml|.yml``.

    Raises:
        KeyError: If nothing matches, or ``extends`` names an unknown preset.
        ValueError: If the file cannot be parsed.

    Example:
        >>> load_preset("minimalist")["enableEnergyPulses"]
        False
    """
    name = str(name_or_path)
    found = _find_preset_file(name, Path(search_dir) if search_dir is not None else None)

    if found is None:
        if name not in BUILTIN_PRESETS:
            raise KeyError(f"No built-in preset or preset file named '{name}'")
        return get_preset(name)

    overrides = load_config(found)
    base_name = overrides.pop(BASE_PRESET_KEY, "default")
    base = get_preset(base_name)

    # A file with its own phase names replaces the base timeline
    declared = set(declared_phases(overrides))
    base_phases = set(phase_starts(base))
    if declared and not declared <= base_phases:
        base = without_phases(base, base_phases - declared)
        logger.debug(f"Preset file {found} replaces the phases of '{base_name}'")

    merged = {**base, **overrides}
    logger.debug(f"Preset file {found} extends '{base_name}' ({len(overrides)} override(s))")
    return merged
