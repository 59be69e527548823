"""Portable error domain for wide/narrow conversions.

Both backends report failures in their own numeric space: the generic
backend uses errno values from the stream transcoder, the native backend
uses Win32 last-error values. The same integer means different things in
each space (``8`` is ``ENOEXEC`` in one and ``ERROR_NOT_ENOUGH_MEMORY`` in
the other), so every code is interpreted only against the table of the
domain it came from.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import os

from .const import (
    ERRNO_ILLEGAL_SEQUENCE,
    ERRNO_INVALID_ARGUMENT,
    ERRNO_NO_MEMORY,
    ERROR_BAD_ARGUMENTS,
    ERROR_INVALID_FLAGS,
    ERROR_INVALID_PARAMETER,
    ERROR_NO_UNICODE_TRANSLATION,
    ERROR_NOT_ENOUGH_MEMORY,
    ERROR_OUTOFMEMORY,
)


class ErrorKind(Enum):
    """Backend independent error categories."""

    INVALID_ARGUMENT = "invalid_argument"
    CONVERSION_FAILURE = "conversion_failure"
    OUT_OF_MEMORY = "out_of_memory"
    PLATFORM_OPAQUE = "platform_opaque"


class ErrorDomain(Enum):
    """Numeric space a native error code belongs to."""

    ERRNO = "errno"
    WIN32 = "win32"


_ERRNO_TABLE: dict[int, ErrorKind] = {
    ERRNO_INVALID_ARGUMENT: ErrorKind.INVALID_ARGUMENT,
    ERRNO_ILLEGAL_SEQUENCE: ErrorKind.CONVERSION_FAILURE,
    ERRNO_NO_MEMORY: ErrorKind.OUT_OF_MEMORY,
}

_WIN32_TABLE: dict[int, ErrorKind] = {
    ERROR_INVALID_PARAMETER: ErrorKind.INVALID_ARGUMENT,
    ERROR_BAD_ARGUMENTS: ErrorKind.INVALID_ARGUMENT,
    ERROR_INVALID_FLAGS: ErrorKind.INVALID_ARGUMENT,
    ERROR_NO_UNICODE_TRANSLATION: ErrorKind.CONVERSION_FAILURE,
    ERROR_NOT_ENOUGH_MEMORY: ErrorKind.OUT_OF_MEMORY,
    ERROR_OUTOFMEMORY: ErrorKind.OUT_OF_MEMORY,
}

_TABLES: dict[ErrorDomain, dict[int, ErrorKind]] = {
    ErrorDomain.ERRNO: _ERRNO_TABLE,
    ErrorDomain.WIN32: _WIN32_TABLE,
}

_WIN32_MESSAGES: dict[int, str] = {
    ERROR_INVALID_PARAMETER: "The parameter is incorrect.",
    ERROR_BAD_ARGUMENTS: "One or more arguments are not correct.",
    ERROR_INVALID_FLAGS: "Invalid flags.",
    ERROR_NO_UNICODE_TRANSLATION: (
        "No mapping for the Unicode character exists in the target multi-byte code page."
    ),
    ERROR_NOT_ENOUGH_MEMORY: "Not enough memory resources are available to process this command.",
    ERROR_OUTOFMEMORY: "Not enough memory resources are available to complete this operation.",
}


@dataclass(frozen=True)
class ErrorCode:
    """Portable error value handed back to callers.

    ``native_code`` and ``domain`` keep the raw backend signal for
    diagnostics; ``kind`` is what callers should branch on.
    """

    kind: ErrorKind
    domain: ErrorDomain | None = None
    native_code: int | None = None

    @property
    def message(self) -> str:
        """Return a human readable description of the error."""
        if self.native_code is None or self.domain is None:
            return self.kind.value.replace("_", " ")
        if self.domain is ErrorDomain.ERRNO:
            return os.strerror(self.native_code)
        return _WIN32_MESSAGES.get(self.native_code, f"Windows error {self.native_code}")

    def __str__(self) -> str:
        if self.native_code is None:
            return self.message
        return f"[{self.domain.value}:{self.native_code}] {self.message}"  # type: ignore[union-attr]


class WideCodecError(ValueError):
    """Raised by ``ConversionOutcome.raise_for_error`` for failed conversions."""

    def __init__(self, error: ErrorCode) -> None:
        super().__init__(str(error))
        self.error = error


class InvalidConfigError(ValueError):
    """Raised when a converter configuration does not validate."""


def map_error(native_code: int, domain: ErrorDomain) -> ErrorCode:
    """Translate a backend native failure code into a portable error.

    Args:
        native_code: Raw errno or Win32 last-error value.
        domain: Numeric space ``native_code`` belongs to.

    Returns:
        The portable error. Codes without a classification in their
        domain's table are passed through as ``PLATFORM_OPAQUE``.
    """
    kind = _TABLES[domain].get(native_code, ErrorKind.PLATFORM_OPAQUE)
    return ErrorCode(kind=kind, domain=domain, native_code=native_code)


@dataclass(frozen=True)
class ConversionOutcome:
    """Result flag and optional error of a single conversion call."""

    success: bool
    error: ErrorCode | None = None

    @classmethod
    def ok(cls) -> ConversionOutcome:
        """Return a successful outcome."""
        return cls(success=True)

    @classmethod
    def failed(cls, error: ErrorCode) -> ConversionOutcome:
        """Return a failed outcome carrying ``error``."""
        return cls(success=False, error=error)

    def __bool__(self) -> bool:
        return self.success

    def raise_for_error(self) -> None:
        """Raise ``WideCodecError`` if the conversion failed."""
        if not self.success and self.error is not None:
            raise WideCodecError(self.error)
