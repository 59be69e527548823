"""Factory functions for creating converters."""

from __future__ import annotations

from functools import lru_cache
import logging
import sys

from .backends.base import Converter
from .backends.generic import GenericConverter
from .backends.native import NativeConverter
from .backends.platform_api import create_platform_api
from .config import ConverterConfig, validate_config
from .const import BACKEND_AUTO, BACKEND_GENERIC, BACKEND_NATIVE, PLATFORM_UNIT_WIDTH
from .errors import InvalidConfigError

_LOGGER = logging.getLogger(__name__)


def resolve_backend(backend: str) -> str:
    """Return the concrete backend name for ``backend``.

    ``auto`` is the native backend on Windows and the generic backend
    everywhere else.
    """
    if backend != BACKEND_AUTO:
        return backend
    return BACKEND_NATIVE if sys.platform == "win32" else BACKEND_GENERIC


# Backend wired behind the public API for this platform; never changes at runtime
SELECTED_BACKEND = resolve_backend(BACKEND_AUTO)


def create_converter(config: ConverterConfig | None = None) -> Converter:
    """Factory function to create the converter described by ``config``.

    Raises:
        InvalidConfigError: If the configuration is invalid or cannot be
            satisfied on this platform.
    """
    config = validate_config(config or ConverterConfig())
    backend = resolve_backend(config.backend)
    unit_width = config.unit_width

    if backend == BACKEND_GENERIC:
        return GenericConverter(unit_width or PLATFORM_UNIT_WIDTH)

    try:
        api = create_platform_api(config.platform_api, unit_width)
    except (OSError, ValueError) as err:
        raise InvalidConfigError(f"Cannot create native converter: {err}") from err
    return NativeConverter(api)


@lru_cache(maxsize=1)
def get_default_converter() -> Converter:
    """Return the converter selected for this platform (cached)."""
    converter = create_converter(ConverterConfig(backend=SELECTED_BACKEND))
    _LOGGER.debug("Selected %r as default converter", converter)
    return converter
