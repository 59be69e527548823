"""Owned buffers for narrow (UTF-8) and wide (UTF-16/UTF-32) text."""

from __future__ import annotations

from array import array
from collections.abc import Iterable, Iterator
import sys
from typing import Any

from .const import MAX_LOG_PREVIEW, PLATFORM_UNIT_WIDTH, WIDE_ENCODINGS

NarrowInput = bytes | bytearray | memoryview


def _typecode_for_width(unit_width: int) -> str:
    """Return an array typecode whose item size is ``unit_width`` bytes."""
    for code in ("H", "I", "L"):
        if array(code).itemsize == unit_width:
            return code
    raise ValueError(f"No array typecode with item size {unit_width}")


def wide_encoding(unit_width: int) -> str:
    """Return the little-endian wide encoding for a code unit width."""
    try:
        return WIDE_ENCODINGS[unit_width]
    except KeyError:
        raise ValueError(f"Unsupported wide code unit width: {unit_width}") from None


class WideBuffer:
    """Resizable sequence of wide code units of a fixed width.

    Units are stored natively in an ``array.array``; serialisation to and
    from bytes is always little-endian regardless of the host byte order.
    """

    __slots__ = ("_units", "_unit_width")

    def __init__(self, units: Iterable[int] = (), unit_width: int = PLATFORM_UNIT_WIDTH) -> None:
        wide_encoding(unit_width)
        self._unit_width = unit_width
        self._units = array(_typecode_for_width(unit_width), units)

    @classmethod
    def from_bytes(cls, data: NarrowInput, unit_width: int = PLATFORM_UNIT_WIDTH) -> WideBuffer:
        """Build a buffer from little-endian encoded bytes."""
        if len(data) % unit_width:
            raise ValueError(f"Byte length {len(data)} is not a multiple of {unit_width}")
        buf = cls(unit_width=unit_width)
        buf._units.frombytes(bytes(data))
        if sys.byteorder == "big":
            buf._units.byteswap()
        return buf

    @classmethod
    def from_text(cls, text: str, unit_width: int = PLATFORM_UNIT_WIDTH) -> WideBuffer:
        """Encode ``text`` into a buffer of the given unit width."""
        return cls.from_bytes(text.encode(wide_encoding(unit_width)), unit_width)

    @property
    def unit_width(self) -> int:
        """Return the size of one code unit in bytes."""
        return self._unit_width

    @property
    def encoding(self) -> str:
        """Return the Python codec name of the units."""
        return wide_encoding(self._unit_width)

    @property
    def units(self) -> array:
        """Return the underlying array of code units."""
        return self._units

    def to_bytes(self) -> bytes:
        """Return the units as little-endian bytes."""
        if sys.byteorder == "big":
            swapped = array(self._units.typecode, self._units)
            swapped.byteswap()
            return swapped.tobytes()
        return self._units.tobytes()

    def to_text(self) -> str:
        """Decode the units into a ``str`` (strict)."""
        return self.to_bytes().decode(self.encoding)

    def resize(self, size: int) -> None:
        """Grow with zero units or shrink to exactly ``size`` units."""
        if size < 0:
            raise ValueError("size must be non-negative")
        current = len(self._units)
        if size < current:
            del self._units[size:]
        elif size > current:
            self._units.extend([0] * (size - current))

    def clear(self) -> None:
        """Drop all units."""
        del self._units[:]

    def __len__(self) -> int:
        return len(self._units)

    def __getitem__(self, index: Any) -> Any:
        return self._units[index]

    def __setitem__(self, index: Any, value: Any) -> None:
        self._units[index] = value

    def __iter__(self) -> Iterator[int]:
        return iter(self._units)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, WideBuffer):
            return self._unit_width == other._unit_width and self._units == other._units
        if isinstance(other, (list, tuple, array)):
            return list(self._units) == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"WideBuffer({list(self._units[:MAX_LOG_PREVIEW])!r}, unit_width={self._unit_width})"


def coerce_wide_input(units: WideBuffer | Iterable[int], unit_width: int) -> WideBuffer:
    """Return ``units`` as a ``WideBuffer`` of ``unit_width``.

    Plain integer sequences are taken as units of ``unit_width``. A buffer
    of a different width is rejected rather than re-encoded.
    """
    if isinstance(units, WideBuffer):
        if units.unit_width != unit_width:
            raise ValueError(f"Expected {unit_width}-byte units, got {units.unit_width}-byte units")
        return units
    return WideBuffer(units, unit_width)


def sanitize_log_preview(data: Any) -> str:
    """Return a short, log-safe preview of a conversion input."""
    if isinstance(data, (bytes, bytearray, memoryview)):
        # memoryviews may be 0-dim, multi-dimensional or non-contiguous
        flat = data.tobytes() if isinstance(data, memoryview) else data
        raw = bytes(flat[:MAX_LOG_PREVIEW])
        suffix = "..." if len(flat) > MAX_LOG_PREVIEW else ""
        return f"{raw.hex(' ')}{suffix} ({len(flat)} bytes)"
    if isinstance(data, WideBuffer):
        return f"{len(data)} units of {data.unit_width} bytes"
    return type(data).__name__
