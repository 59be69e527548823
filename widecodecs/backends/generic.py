"""Generic backend built on a byte-stream transcoder.

The transcoder is the ``codecs`` incremental decoder/encoder pair opened for
one (source, destination) encoding pair. It reports failures with errno
values the way iconv does: ``EINVAL`` when the pair cannot be opened,
``EILSEQ`` for malformed input and ``E2BIG`` when the output does not fit.
"""

from __future__ import annotations

import codecs
import logging
import os
import sys
from types import TracebackType

from ..buffers import WideBuffer
from ..const import (
    BACKEND_GENERIC,
    ERRNO_ILLEGAL_SEQUENCE,
    ERRNO_INVALID_ARGUMENT,
    ERRNO_NO_MEMORY,
    ERRNO_TOO_BIG,
    MAX_NARROW_BYTES_PER_UNIT,
    NARROW_ENCODING,
)
from ..errors import ErrorCode, ErrorDomain, map_error
from .base import Converter

_LOGGER = logging.getLogger(__name__)


class TranscoderError(OSError):
    """Failure reported by a stream transcoder, carrying an errno value."""

    def __init__(self, code: int) -> None:
        super().__init__(code, os.strerror(code))


class StreamTranscoder:
    """Conversion handle between two byte encodings.

    Opened per conversion and closed before the conversion returns; use it
    as a context manager.
    """

    def __init__(self, to_code: str, from_code: str) -> None:
        try:
            self._decoder = codecs.getincrementaldecoder(from_code)("strict")
            self._encoder = codecs.getincrementalencoder(to_code)("strict")
        except LookupError:
            raise TranscoderError(ERRNO_INVALID_ARGUMENT) from None
        self._pair = (from_code, to_code)
        self._closed = False

    @property
    def closed(self) -> bool:
        """Return True once the handle has been released."""
        return self._closed

    def convert(self, inbuf: memoryview | bytes, outbuf: memoryview | bytearray) -> tuple[int, int]:
        """Transcode all of ``inbuf`` into ``outbuf`` in a single pass.

        Returns:
            Tuple of (input bytes left, output bytes left unused).

        Raises:
            TranscoderError: ``EILSEQ`` for malformed input, ``E2BIG`` if the
                output would exceed ``outbuf``.
        """
        if self._closed:
            raise TranscoderError(ERRNO_INVALID_ARGUMENT)
        try:
            text = self._decoder.decode(inbuf, final=True)
            encoded = self._encoder.encode(text, final=True)
        except UnicodeError:
            raise TranscoderError(ERRNO_ILLEGAL_SEQUENCE) from None
        finally:
            self._decoder.reset()
            self._encoder.reset()

        produced = len(encoded)
        if produced > len(outbuf):
            raise TranscoderError(ERRNO_TOO_BIG)
        outbuf[:produced] = encoded
        return 0, len(outbuf) - produced

    def close(self) -> None:
        """Release the handle."""
        self._closed = True

    def __enter__(self) -> StreamTranscoder:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<StreamTranscoder {self._pair[0]} -> {self._pair[1]} ({state})>"


def narrow_capacity(length: int, unit_width: int) -> int:
    """Return the destination bytes reserved for ``length`` UTF-8 bytes.

    Every UTF-8 byte yields at most one wide unit; the extra unit covers
    the terminator slot.
    """
    return (length + 1) * unit_width


def wide_capacity(length: int) -> int:
    """Return the destination bytes reserved for ``length`` wide units."""
    return length * MAX_NARROW_BYTES_PER_UNIT + 1


class GenericConverter(Converter):
    """Converter backed by the stream transcoder."""

    name = BACKEND_GENERIC
    error_domain = ErrorDomain.ERRNO
    out_of_memory_code = ERRNO_NO_MEMORY
    invalid_argument_code = ERRNO_INVALID_ARGUMENT

    def _open(self, to_code: str, from_code: str) -> StreamTranscoder | ErrorCode:
        try:
            return StreamTranscoder(to_code, from_code)
        except TranscoderError as err:
            _LOGGER.debug("Cannot open transcoder %s -> %s: %s", from_code, to_code, err)
            return map_error(err.errno, self.error_domain)

    def _narrow_to_wide(self, source: memoryview, dest: WideBuffer) -> ErrorCode | None:
        handle = self._open(self.wide_encoding, NARROW_ENCODING)
        if isinstance(handle, ErrorCode):
            return handle

        with handle:
            dest.resize(narrow_capacity(len(source), self.unit_width) // self.unit_width)
            capacity = len(dest) * self.unit_width
            try:
                with memoryview(dest.units) as view, view.cast("B") as outbuf:
                    _, unused = handle.convert(source, outbuf)
            except TranscoderError as err:
                return map_error(err.errno, self.error_domain)

            dest.resize((capacity - unused) // self.unit_width)
            if sys.byteorder == "big":
                dest.units.byteswap()
        return None

    def _wide_to_narrow(self, source: WideBuffer, dest: bytearray) -> ErrorCode | None:
        handle = self._open(NARROW_ENCODING, self.wide_encoding)
        if isinstance(handle, ErrorCode):
            return handle

        with handle:
            capacity = wide_capacity(len(source))
            dest.extend(bytes(capacity))
            try:
                with memoryview(dest) as outbuf:
                    _, unused = handle.convert(source.to_bytes(), outbuf)
            except TranscoderError as err:
                return map_error(err.errno, self.error_domain)

            del dest[capacity - unused:]
        return None
