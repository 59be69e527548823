"""Converter configuration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any

import voluptuous as vol

from .const import (
    BACKENDS,
    CONF_BACKEND,
    CONF_PLATFORM_API,
    CONF_UNIT_WIDTH,
    DEFAULT_BACKEND,
    DEFAULT_PLATFORM_API,
    PLATFORM_APIS,
    SUPPORTED_UNIT_WIDTHS,
)
from .errors import InvalidConfigError

CONFIG_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_BACKEND, default=DEFAULT_BACKEND): vol.All(vol.Lower, vol.In(BACKENDS)),
        vol.Optional(CONF_UNIT_WIDTH, default=None): vol.Any(
            None, vol.All(vol.Coerce(int), vol.In(SUPPORTED_UNIT_WIDTHS))
        ),
        vol.Optional(CONF_PLATFORM_API, default=DEFAULT_PLATFORM_API): vol.All(
            vol.Lower, vol.In(PLATFORM_APIS)
        ),
    }
)


@dataclass
class ConverterConfig:
    """Configuration for building a converter.

    ``unit_width`` of None means the platform ``wchar_t`` width.
    """

    backend: str = DEFAULT_BACKEND
    unit_width: int | None = None
    platform_api: str = DEFAULT_PLATFORM_API

    def as_dict(self) -> dict[str, Any]:
        """Return the configuration as a plain mapping."""
        return asdict(self)


def validate_config(config: ConverterConfig) -> ConverterConfig:
    """Validate a config object, returning a normalized copy."""
    return config_from_dict(config.as_dict())


def config_from_dict(data: Mapping[str, Any] | None) -> ConverterConfig:
    """Build a validated ``ConverterConfig`` from a mapping.

    Raises:
        InvalidConfigError: If the mapping does not match ``CONFIG_SCHEMA``.
    """
    try:
        validated = CONFIG_SCHEMA(dict(data or {}))
    except vol.Invalid as err:
        raise InvalidConfigError(f"Invalid converter configuration: {err}") from err
    return ConverterConfig(
        backend=validated[CONF_BACKEND],
        unit_width=validated[CONF_UNIT_WIDTH],
        platform_api=validated[CONF_PLATFORM_API],
    )
