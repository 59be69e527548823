"""Native backend built on the platform query/convert routines."""

from __future__ import annotations

import logging

from ..buffers import WideBuffer
from ..const import (
    BACKEND_NATIVE,
    CP_UTF8,
    ERROR_BAD_ARGUMENTS,
    ERROR_NOT_ENOUGH_MEMORY,
    MB_ERR_INVALID_CHARS,
    NARROW_TERMINATOR,
    WC_ERR_INVALID_CHARS,
    WIDE_TERMINATOR,
)
from ..errors import ErrorCode, ErrorDomain, map_error
from .base import Converter
from .platform_api import PlatformCodecApi, create_platform_api

_LOGGER = logging.getLogger(__name__)


class NativeConverter(Converter):
    """Converter using a two-pass size query and convert protocol.

    Inputs are handed to the platform with an explicit length that
    includes one terminator unit, so embedded NULs are converted rather
    than ending the string and the size query counts the terminator.
    A size query of 0 for non-empty input is therefore reported as a
    failure with the platform last error, never as an empty success.
    """

    name = BACKEND_NATIVE
    error_domain = ErrorDomain.WIN32
    out_of_memory_code = ERROR_NOT_ENOUGH_MEMORY
    invalid_argument_code = ERROR_BAD_ARGUMENTS

    def __init__(self, api: PlatformCodecApi | None = None, unit_width: int | None = None) -> None:
        if api is None:
            api = create_platform_api(unit_width=unit_width)
        elif unit_width is not None and unit_width != api.unit_width:
            raise ValueError(f"Platform api {api.name} uses {api.unit_width}-byte units, not {unit_width}")
        super().__init__(api.unit_width)
        self._api = api

    @property
    def api(self) -> PlatformCodecApi:
        """Return the platform query/convert API in use."""
        return self._api

    def _last_error(self) -> ErrorCode:
        code = self._api.get_last_error()
        _LOGGER.debug("Platform api %s reported last error %s", self._api.name, code)
        return map_error(code, self.error_domain)

    def _narrow_to_wide(self, source: memoryview, dest: WideBuffer) -> ErrorCode | None:
        if not len(source):
            return None

        data = bytes(source) + bytes([NARROW_TERMINATOR])
        size = self._api.multibyte_to_wide(CP_UTF8, MB_ERR_INVALID_CHARS, data, None)
        if size == 0:
            return self._last_error()

        dest.resize(size)
        dest[size - 1] = WIDE_TERMINATOR

        if self._api.multibyte_to_wide(CP_UTF8, MB_ERR_INVALID_CHARS, data, dest) == 0:
            dest.clear()
            return self._last_error()

        dest.resize(size - 1)
        return None

    def _wide_to_narrow(self, source: WideBuffer, dest: bytearray) -> ErrorCode | None:
        if not len(source):
            return None

        data = WideBuffer(source.units, source.unit_width)
        data.units.append(WIDE_TERMINATOR)
        size = self._api.wide_to_multibyte(CP_UTF8, WC_ERR_INVALID_CHARS, data, None)
        if size == 0:
            return self._last_error()

        dest.extend(bytes(size))
        dest[size - 1] = NARROW_TERMINATOR

        if self._api.wide_to_multibyte(CP_UTF8, WC_ERR_INVALID_CHARS, data, dest) == 0:
            dest.clear()
            return self._last_error()

        del dest[size - 1:]
        return None

    def __repr__(self) -> str:
        return f"NativeConverter(api={self._api.name}, unit_width={self.unit_width})"
