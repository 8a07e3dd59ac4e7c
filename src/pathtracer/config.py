"""Render configuration loading.

Parameters start from the ``TracerParams`` defaults, are overridden by a
TOML config file, and are finally overridden by command-line values.

Recognized keys (file and command line share the same names):

    ========== ================ =======================================
    Key        Parameter        Format
    ========== ================ =======================================
    height     height           integer >= 1
    sampling   sampling_rate    integer >= 1
    depth      max_depth        integer >= 0
    vfov       vfov             float in (0, 180), degrees
    angle      defocus_angle    float, degrees
    focus      focus_distance   float > 0
    look_from  look_from        "X/Y/Z", e.g. "13.0/2.0/3.0"
    look_at    look_at          "X/Y/Z"
    ========== ================ =======================================

Numbers may be written as TOML numbers or as strings. A value that fails
to parse is reported and ignored, keeping the previous value. A missing
or malformed file is reported and treated as empty.

Example ``renderconfig.toml``::

    height = 720
    sampling = 100
    look_from = "13.0/2.0/3.0"
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import replace
from typing import Any, Callable, Mapping

from pathtracer.camera.thin_lens import TracerParams
from pathtracer.core.vec import Vec3
from pathtracer.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "renderconfig.toml"


# =============================================================================
# Value Parsers
# =============================================================================


def _parse_int(key: str, value: Any, minimum: int) -> int:
    if isinstance(value, bool):
        raise ConfigError(key, value, "expected an integer")
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = int(value.strip())
        except ValueError:
            raise ConfigError(key, value, "expected an integer") from None
    else:
        raise ConfigError(key, value, "expected an integer")

    if parsed < minimum:
        raise ConfigError(key, value, f"must be at least {minimum}")
    return parsed


def _parse_float(key: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigError(key, value, "expected a number")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            raise ConfigError(key, value, "expected a number") from None
    raise ConfigError(key, value, "expected a number")


def parse_vector(text: str, key: str = "vector") -> Vec3:
    """Parse three slash-separated floats, e.g. ``"13.0/2.0/3.0"``.

    Raises:
        ConfigError: If the text is not exactly three floats.
    """
    if not isinstance(text, str):
        raise ConfigError(key, text, 'expected a string "X/Y/Z"')
    parts = text.split("/")
    if len(parts) != 3:
        raise ConfigError(key, text, 'expected three components "X/Y/Z"')
    try:
        x, y, z = (float(part.strip()) for part in parts)
    except ValueError:
        raise ConfigError(key, text, "components must be numbers") from None
    return Vec3(x, y, z)


def _height(value: Any) -> int:
    return _parse_int("height", value, minimum=1)


def _sampling(value: Any) -> int:
    return _parse_int("sampling", value, minimum=1)


def _depth(value: Any) -> int:
    return _parse_int("depth", value, minimum=0)


def _vfov(value: Any) -> float:
    vfov = _parse_float("vfov", value)
    if not 0.0 < vfov < 180.0:
        raise ConfigError("vfov", value, "must be in (0, 180)")
    return vfov


def _angle(value: Any) -> float:
    return _parse_float("angle", value)


def _focus(value: Any) -> float:
    focus = _parse_float("focus", value)
    if focus <= 0.0:
        raise ConfigError("focus", value, "must be positive")
    return focus


# Config key -> (TracerParams attribute, parser)
FIELDS: dict[str, tuple[str, Callable[[Any], Any]]] = {
    "height": ("height", _height),
    "sampling": ("sampling_rate", _sampling),
    "depth": ("max_depth", _depth),
    "vfov": ("vfov", _vfov),
    "angle": ("defocus_angle", _angle),
    "focus": ("focus_distance", _focus),
    "look_from": ("look_from", lambda value: parse_vector(value, "look_from")),
    "look_at": ("look_at", lambda value: parse_vector(value, "look_at")),
}


# =============================================================================
# Loading
# =============================================================================


def read_config_file(path: str | os.PathLike) -> dict[str, Any]:
    """Read a TOML config file.

    Args:
        path: Path to the file.

    Returns:
        The parsed key/value table, or an empty dict if the file is
        missing, unreadable or not valid TOML.
    """
    try:
        with open(path, "rb") as f:
            table = tomllib.load(f)
    except FileNotFoundError:
        logger.warning("Config file '%s' not found. Using defaults", path)
        return {}
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("Failed to read config file '%s': %s", path, exc)
        return {}

    logger.info("Using config file: '%s'", path)
    return table


def apply_settings(
    params: TracerParams, settings: Mapping[str, Any], source: str
) -> TracerParams:
    """Return a copy of ``params`` with valid settings applied.

    Settings whose value is None are skipped. Invalid values are logged
    and ignored. Unknown keys are ignored.

    Args:
        params: Starting parameters (not modified).
        settings: Config key to raw value.
        source: Where the settings came from, for log messages.

    Returns:
        The updated parameters.
    """
    changes: dict[str, Any] = {}
    for key, value in settings.items():
        if value is None:
            continue
        if key not in FIELDS:
            logger.debug("Ignoring unknown setting '%s' from %s", key, source)
            continue

        attribute, parser = FIELDS[key]
        try:
            changes[attribute] = parser(value)
        except ConfigError as exc:
            logger.warning("%s (from %s). Keeping %r", exc, source, getattr(params, attribute))

    return replace(params, **changes)


def load_params(
    config_path: str | os.PathLike | None = None,
    overrides: Mapping[str, Any] | None = None,
    base: TracerParams | None = None,
) -> TracerParams:
    """Build render parameters from defaults, a config file and overrides.

    Args:
        config_path: TOML file to read. Defaults to ``renderconfig.toml``.
        overrides: Values that take precedence over the file (command line).
        base: Starting parameters. Defaults to ``TracerParams()``.

    Returns:
        The merged parameters.
    """
    params = base if base is not None else TracerParams()
    path = config_path if config_path is not None else DEFAULT_CONFIG_FILE
    if config_path is None:
        logger.info("No config file specified. Trying default '%s'", DEFAULT_CONFIG_FILE)

    params = apply_settings(params, read_config_file(path), f"config file '{path}'")
    if overrides:
        params = apply_settings(params, overrides, "command line")
    return params
