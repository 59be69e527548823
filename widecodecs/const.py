"""Constants for the widecodecs conversion layer."""

from __future__ import annotations

import ctypes
import errno

# Encodings
NARROW_ENCODING = "utf-8"
WIDE_ENCODINGS: dict[int, str] = {
    2: "utf-16-le",
    4: "utf-32-le",
}
SUPPORTED_UNIT_WIDTHS = sorted(WIDE_ENCODINGS)

# Width of the platform wchar_t (2 on Windows, 4 on most Unix systems)
PLATFORM_UNIT_WIDTH = ctypes.sizeof(ctypes.c_wchar)

# Worst case number of UTF-8 bytes produced by a single wide code unit
MAX_NARROW_BYTES_PER_UNIT = 4

WIDE_TERMINATOR = 0
NARROW_TERMINATOR = 0

# Configuration keys
CONF_BACKEND = "backend"
CONF_UNIT_WIDTH = "unit_width"
CONF_PLATFORM_API = "platform_api"

BACKEND_AUTO = "auto"
BACKEND_GENERIC = "generic"
BACKEND_NATIVE = "native"
BACKENDS = [BACKEND_AUTO, BACKEND_GENERIC, BACKEND_NATIVE]

PLATFORM_API_AUTO = "auto"
PLATFORM_API_WIN32 = "win32"
PLATFORM_API_COMPAT = "compat"
PLATFORM_APIS = [PLATFORM_API_AUTO, PLATFORM_API_WIN32, PLATFORM_API_COMPAT]

# Default values
DEFAULT_BACKEND = BACKEND_AUTO
DEFAULT_PLATFORM_API = PLATFORM_API_AUTO

# Longest input preview written to the logs
MAX_LOG_PREVIEW = 32

# errno values reported by the stream transcoder
ERRNO_INVALID_ARGUMENT = errno.EINVAL
ERRNO_ILLEGAL_SEQUENCE = errno.EILSEQ
ERRNO_NO_MEMORY = errno.ENOMEM
ERRNO_TOO_BIG = errno.E2BIG

# Win32 code page and flags
CP_UTF8 = 65001
MB_ERR_INVALID_CHARS = 0x00000008
WC_ERR_INVALID_CHARS = 0x00000080

# Win32 system error codes
ERROR_SUCCESS = 0
ERROR_NOT_ENOUGH_MEMORY = 8
ERROR_OUTOFMEMORY = 14
ERROR_INVALID_PARAMETER = 87
ERROR_INSUFFICIENT_BUFFER = 122
ERROR_BAD_ARGUMENTS = 160
ERROR_INVALID_FLAGS = 1004
ERROR_NO_UNICODE_TRANSLATION = 1113
