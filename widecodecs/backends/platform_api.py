"""Platform query/convert APIs used by the native backend.

Both calls follow the Win32 ``MultiByteToWideChar``/``WideCharToMultiByte``
contract: with no destination they return the required size in units, with
a destination they return the units written, and on failure they return 0
and leave the reason in the thread's last-error value.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import ctypes
import logging
import sys
import threading
from typing import Any

from ..buffers import WideBuffer, wide_encoding
from ..const import (
    CP_UTF8,
    ERROR_INSUFFICIENT_BUFFER,
    ERROR_INVALID_FLAGS,
    ERROR_INVALID_PARAMETER,
    ERROR_NO_UNICODE_TRANSLATION,
    ERROR_SUCCESS,
    MB_ERR_INVALID_CHARS,
    NARROW_ENCODING,
    PLATFORM_API_AUTO,
    PLATFORM_API_COMPAT,
    PLATFORM_API_WIN32,
    PLATFORM_UNIT_WIDTH,
    WC_ERR_INVALID_CHARS,
)

_LOGGER = logging.getLogger(__name__)


class PlatformCodecApi(ABC):
    """Two-pass character set conversion routines of a platform."""

    name: str
    unit_width: int

    @abstractmethod
    def multibyte_to_wide(
        self, code_page: int, flags: int, source: bytes, dest: WideBuffer | None
    ) -> int:
        """Convert ``source`` into ``dest``, or query the size if ``dest`` is None."""

    @abstractmethod
    def wide_to_multibyte(
        self, code_page: int, flags: int, source: WideBuffer, dest: bytearray | None
    ) -> int:
        """Convert ``source`` into ``dest``, or query the size if ``dest`` is None."""

    @abstractmethod
    def get_last_error(self) -> int:
        """Return the calling thread's last error value."""


class Win32CodecApi(PlatformCodecApi):
    """``kernel32`` conversion routines called through ctypes."""

    name = PLATFORM_API_WIN32
    unit_width = 2

    def __init__(self) -> None:
        if sys.platform != "win32":
            raise OSError("kernel32 conversion routines are only available on Windows")

        from ctypes import wintypes  # noqa: PLC0415

        kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)  # type: ignore[attr-defined]

        self._mb2wc = kernel32.MultiByteToWideChar
        self._mb2wc.argtypes = [
            wintypes.UINT,
            wintypes.DWORD,
            ctypes.c_char_p,
            ctypes.c_int,
            ctypes.POINTER(ctypes.c_uint16),
            ctypes.c_int,
        ]
        self._mb2wc.restype = ctypes.c_int

        self._wc2mb = kernel32.WideCharToMultiByte
        self._wc2mb.argtypes = [
            wintypes.UINT,
            wintypes.DWORD,
            ctypes.POINTER(ctypes.c_uint16),
            ctypes.c_int,
            ctypes.POINTER(ctypes.c_char),
            ctypes.c_int,
            ctypes.c_char_p,
            ctypes.POINTER(wintypes.BOOL),
        ]
        self._wc2mb.restype = ctypes.c_int

    def multibyte_to_wide(
        self, code_page: int, flags: int, source: bytes, dest: WideBuffer | None
    ) -> int:
        if dest is None:
            return int(self._mb2wc(code_page, flags, source, len(source), None, 0))
        out: Any = (ctypes.c_uint16 * len(dest)).from_buffer(dest.units)
        return int(self._mb2wc(code_page, flags, source, len(source), out, len(dest)))

    def wide_to_multibyte(
        self, code_page: int, flags: int, source: WideBuffer, dest: bytearray | None
    ) -> int:
        src: Any = (ctypes.c_uint16 * len(source)).from_buffer_copy(source.units)
        if dest is None:
            return int(self._wc2mb(code_page, flags, src, len(source), None, 0, None, None))
        out: Any = (ctypes.c_char * len(dest)).from_buffer(dest)
        return int(self._wc2mb(code_page, flags, src, len(source), out, len(dest), None, None))

    def get_last_error(self) -> int:
        return int(ctypes.get_last_error())  # type: ignore[attr-defined]


class CompatCodecApi(PlatformCodecApi):
    """Portable emulation of the Win32 routines for UTF-8.

    Only ``CP_UTF8`` is supported. Works with either wide unit width, and
    keeps a per-thread last error like the real API.
    """

    name = PLATFORM_API_COMPAT

    def __init__(self, unit_width: int = PLATFORM_UNIT_WIDTH) -> None:
        self._encoding = wide_encoding(unit_width)
        self.unit_width = unit_width
        self._state = threading.local()

    def get_last_error(self) -> int:
        return getattr(self._state, "last_error", ERROR_SUCCESS)

    def set_last_error(self, code: int) -> None:
        """Set the calling thread's last error value."""
        self._state.last_error = code

    def _fail(self, code: int) -> int:
        self.set_last_error(code)
        return 0

    def multibyte_to_wide(
        self, code_page: int, flags: int, source: bytes, dest: WideBuffer | None
    ) -> int:
        if code_page != CP_UTF8 or not source:
            return self._fail(ERROR_INVALID_PARAMETER)
        if flags & ~MB_ERR_INVALID_CHARS:
            return self._fail(ERROR_INVALID_FLAGS)

        errors = "strict" if flags & MB_ERR_INVALID_CHARS else "replace"
        try:
            encoded = bytes(source).decode(NARROW_ENCODING, errors).encode(self._encoding)
        except UnicodeError:
            return self._fail(ERROR_NO_UNICODE_TRANSLATION)

        converted = WideBuffer.from_bytes(encoded, self.unit_width)
        if dest is None:
            return len(converted)
        if len(converted) > len(dest):
            return self._fail(ERROR_INSUFFICIENT_BUFFER)
        dest[: len(converted)] = converted.units
        return len(converted)

    def wide_to_multibyte(
        self, code_page: int, flags: int, source: WideBuffer, dest: bytearray | None
    ) -> int:
        if code_page != CP_UTF8 or not len(source) or source.unit_width != self.unit_width:
            return self._fail(ERROR_INVALID_PARAMETER)
        if flags & ~WC_ERR_INVALID_CHARS:
            return self._fail(ERROR_INVALID_FLAGS)

        errors = "strict" if flags & WC_ERR_INVALID_CHARS else "replace"
        try:
            encoded = source.to_bytes().decode(self._encoding, errors).encode(NARROW_ENCODING)
        except UnicodeError:
            return self._fail(ERROR_NO_UNICODE_TRANSLATION)

        if dest is None:
            return len(encoded)
        if len(encoded) > len(dest):
            return self._fail(ERROR_INSUFFICIENT_BUFFER)
        dest[: len(encoded)] = encoded
        return len(encoded)


def create_platform_api(name: str = PLATFORM_API_AUTO, unit_width: int | None = None) -> PlatformCodecApi:
    """Create the query/convert API for the native backend.

    ``auto`` picks ``kernel32`` on Windows when the requested width matches
    the Windows ``wchar_t`` and the portable emulation otherwise.
    """
    if name == PLATFORM_API_AUTO:
        if sys.platform == "win32" and unit_width in (None, Win32CodecApi.unit_width):
            name = PLATFORM_API_WIN32
        else:
            name = PLATFORM_API_COMPAT
    _LOGGER.debug("Using %s platform api for %s-byte units", name, unit_width or PLATFORM_UNIT_WIDTH)

    if name == PLATFORM_API_WIN32:
        if unit_width not in (None, Win32CodecApi.unit_width):
            raise ValueError(f"kernel32 only supports {Win32CodecApi.unit_width}-byte units")
        return Win32CodecApi()
    if name == PLATFORM_API_COMPAT:
        return CompatCodecApi(unit_width or PLATFORM_UNIT_WIDTH)
    raise ValueError(f"Unknown platform api: {name}")
