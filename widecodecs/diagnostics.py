from __future__ import annotations

from typing import Any

from .backends.base import Converter
from .backends.native import NativeConverter
from .const import PLATFORM_UNIT_WIDTH
from .factory import SELECTED_BACKEND, get_default_converter


def get_diagnostics(converter: Converter | None = None) -> dict[str, Any]:
    """Return diagnostics for a converter (the platform default if omitted)."""
    converter = converter or get_default_converter()

    return {
        "selected_backend": SELECTED_BACKEND,
        "platform_unit_width": PLATFORM_UNIT_WIDTH,
        "converter": {
            "backend": converter.name,
            "unit_width": converter.unit_width,
            "wide_encoding": converter.wide_encoding,
            "error_domain": converter.error_domain.value,
            "platform_api": converter.api.name if isinstance(converter, NativeConverter) else None,
        },
    }
