"""UTF-8 <-> platform wide character conversion.

This package converts between UTF-8 byte strings ("narrow") and sequences
of platform wide code units ("wide": UTF-16LE where ``wchar_t`` is two
bytes, UTF-32LE where it is four).

Backends:
---------
Two interchangeable backends implement the same contract:

1. generic: a stream transcoder opened per call, reporting errno values.
2. native: the platform size-query/convert routine pair (``kernel32`` on
   Windows), reporting Win32 last-error values.

One backend is selected for the platform at import time and sits behind
``narrow_to_wide`` and ``wide_to_narrow``. Failures never raise; they are
reported through ``ConversionOutcome`` with a portable ``ErrorCode``.
"""

from __future__ import annotations

from .api import narrow_to_wide, text_to_wide, wide_to_narrow, wide_to_text
from .backends import Converter, GenericConverter, NativeConverter
from .buffers import WideBuffer
from .config import CONFIG_SCHEMA, ConverterConfig, config_from_dict
from .diagnostics import get_diagnostics
from .errors import (
    ConversionOutcome,
    ErrorCode,
    ErrorDomain,
    ErrorKind,
    InvalidConfigError,
    WideCodecError,
    map_error,
)
from .factory import SELECTED_BACKEND, create_converter, get_default_converter

__all__ = [
    "CONFIG_SCHEMA",
    "ConversionOutcome",
    "Converter",
    "ConverterConfig",
    "ErrorCode",
    "ErrorDomain",
    "ErrorKind",
    "GenericConverter",
    "InvalidConfigError",
    "NativeConverter",
    "SELECTED_BACKEND",
    "WideBuffer",
    "WideCodecError",
    "config_from_dict",
    "create_converter",
    "get_default_converter",
    "get_diagnostics",
    "map_error",
    "narrow_to_wide",
    "text_to_wide",
    "wide_to_narrow",
    "wide_to_text",
]
