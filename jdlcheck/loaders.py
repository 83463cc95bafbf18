# File: jdlcheck/loaders.py
"""
JDLCheck - Model File Loaders
==============================
Load an already-parsed JDL Object Model exported as JSON or YAML, plus the
optional application settings stored next to it.

Expected document shapes::

    # model only
    entities: [...]
    relationships: [...]

    # model + settings
    jdl: {entities: [...], ...}
    settings: {databaseType: sql, applicationType: monolith}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple, Type, Union

import yaml
from pydantic import ValidationError

from jdlcheck.models import ApplicationSettings, JDLObject

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("jdlcheck.loaders")

_MODEL_KEYS: Tuple[str, ...] = ("jdl", "model", "jdlObject")
_SETTINGS_KEYS: Tuple[str, ...] = ("settings", "applicationSettings")


# Parsers keyed by file extension: (format, top-level noun, loads, parse error)
_PARSERS: Dict[str, Tuple[str, str, Callable[[str], Any], Type[Exception]]] = {
    ".json": ("JSON", "object", json.loads, json.JSONDecodeError),
    ".yaml": ("YAML", "mapping", yaml.safe_load, yaml.YAMLError),
    ".yml": ("YAML", "mapping", yaml.safe_load, yaml.YAMLError),
}


def _parse(path: Path, text: str, suffix: str) -> Dict[str, Any]:
    """Parse ``text`` with the parser registered for ``suffix``. Raises ValueError."""
    fmt, noun, loads, error = _PARSERS[suffix]
    try:
        data: Any = loads(text)
    except error as exc:
        raise ValueError(f"Invalid {fmt} in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(
            f"Expected a {fmt} {noun} at top level, got {type(data).__name__}."
        )
    return data


def load_model_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a model file (JSON or YAML), dispatching on the file extension.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file can't be parsed.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Model file not found: {path}")
    if not path.is_file():
        raise ValueError(f"Model path is not a file: {path}")

    text: str = path.read_text(encoding="utf-8")
    suffix: str = path.suffix.lower()
    if suffix in _PARSERS:
        return _parse(path, text, suffix)
    logger.info("Unknown extension '%s', trying JSON then YAML.", suffix)
    try:
        return _parse(path, text, ".json")
    except ValueError:
        return _parse(path, text, ".yaml")


def _first_present(raw: Dict[str, Any], keys: Tuple[str, ...]) -> Optional[Any]:
    for key in keys:
        if key in raw:
            return raw[key]
    return None


def parse_raw_model(
    raw: Dict[str, Any],
) -> Tuple[JDLObject, Optional[ApplicationSettings]]:
    """
    Build the ``JDLObject`` (and settings, when present) from a raw mapping.

    Raises:
        ValueError: If the mapping does not describe a valid model.
    """
    model_data: Any = _first_present(raw, _MODEL_KEYS)
    settings_data: Any = _first_present(raw, _SETTINGS_KEYS)
    if model_data is None:
        model_data = {
            key: value
            for key, value in raw.items()
            if key not in _SETTINGS_KEYS
        }

    try:
        jdl_object: JDLObject = JDLObject.model_validate(model_data)
        settings: Optional[ApplicationSettings] = (
            ApplicationSettings.model_validate(settings_data)
            if settings_data is not None
            else None
        )
    except ValidationError as exc:
        raise ValueError(f"Invalid JDL model: {exc}") from exc

    logger.debug("Parsed %r (settings: %s).", jdl_object, settings is not None)
    return jdl_object, settings


def load_jdl_file(
    path: Union[str, Path],
) -> Tuple[JDLObject, Optional[ApplicationSettings]]:
    """Load a model file and build the ``JDLObject`` it describes."""
    return parse_raw_model(load_model_file(path))


__all__ = ["load_model_file", "parse_raw_model", "load_jdl_file"]
