"""Base converter class shared by both backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
import logging
from typing import Any, ClassVar

from ..buffers import NarrowInput, WideBuffer, coerce_wide_input, sanitize_log_preview, wide_encoding
from ..const import PLATFORM_UNIT_WIDTH
from ..errors import ConversionOutcome, ErrorCode, ErrorDomain, ErrorKind, map_error

_LOGGER = logging.getLogger(__name__)


class Converter(ABC):
    """Abstract UTF-8 <-> wide converter.

    Subclasses implement the two conversion hooks and report failures as
    ``ErrorCode`` values. The public methods are the boundary: nothing
    raised by a hook escapes them, and the destination is always empty
    when the outcome is a failure.
    """

    name: ClassVar[str]
    error_domain: ClassVar[ErrorDomain]
    # Native codes reported for allocation failures and unexpected errors
    out_of_memory_code: ClassVar[int]
    invalid_argument_code: ClassVar[int]

    def __init__(self, unit_width: int = PLATFORM_UNIT_WIDTH) -> None:
        self._wide_encoding = wide_encoding(unit_width)
        self._unit_width = unit_width

    @property
    def unit_width(self) -> int:
        """Return the wide code unit width in bytes."""
        return self._unit_width

    @property
    def wide_encoding(self) -> str:
        """Return the codec name of the wide side."""
        return self._wide_encoding

    @abstractmethod
    def _narrow_to_wide(self, source: memoryview, dest: WideBuffer) -> ErrorCode | None:
        """Convert ``source`` into ``dest``; return an error or ``None``."""

    @abstractmethod
    def _wide_to_narrow(self, source: WideBuffer, dest: bytearray) -> ErrorCode | None:
        """Convert ``source`` into ``dest``; return an error or ``None``."""

    def narrow_to_wide(self, data: NarrowInput | None) -> tuple[WideBuffer, ConversionOutcome]:
        """Convert UTF-8 bytes into wide code units.

        Any bytes-like object is accepted; multi-dimensional and
        non-contiguous views are read in C order.
        """
        dest = WideBuffer(unit_width=self._unit_width)
        if data is None:
            return dest, self._fail("narrow_to_wide", data, ErrorCode(ErrorKind.INVALID_ARGUMENT))

        try:
            with memoryview(data) as view:
                source = view.cast("B") if view.c_contiguous else memoryview(view.tobytes())
                error = self._narrow_to_wide(source, dest)
        except MemoryError:
            error = map_error(self.out_of_memory_code, self.error_domain)
        except Exception:
            _LOGGER.debug("Unexpected failure in %s narrow_to_wide", self.name, exc_info=True)
            error = map_error(self.invalid_argument_code, self.error_domain)

        if error is not None:
            dest.clear()
            return dest, self._fail("narrow_to_wide", data, error)
        return dest, ConversionOutcome.ok()

    def wide_to_narrow(self, units: WideBuffer | Iterable[int] | None) -> tuple[bytearray, ConversionOutcome]:
        """Convert wide code units into UTF-8 bytes."""
        dest = bytearray()
        if units is None:
            return dest, self._fail("wide_to_narrow", units, ErrorCode(ErrorKind.INVALID_ARGUMENT))

        try:
            source = coerce_wide_input(units, self._unit_width)
            error = self._wide_to_narrow(source, dest)
        except MemoryError:
            error = map_error(self.out_of_memory_code, self.error_domain)
        except Exception:
            _LOGGER.debug("Unexpected failure in %s wide_to_narrow", self.name, exc_info=True)
            error = map_error(self.invalid_argument_code, self.error_domain)

        if error is not None:
            dest.clear()
            return dest, self._fail("wide_to_narrow", units, error)
        return dest, ConversionOutcome.ok()

    def _fail(self, operation: str, data: Any, error: ErrorCode) -> ConversionOutcome:
        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug(
                "%s %s failed for %s: %s", self.name, operation, sanitize_log_preview(data), error
            )
        return ConversionOutcome.failed(error)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(unit_width={self._unit_width})"
