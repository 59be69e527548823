"""Public conversion operations.

Every operation returns ``(buffer, outcome)`` and never raises: on success
the buffer holds exactly the converted units, on failure it is empty and
``outcome.error`` says why.
"""

from __future__ import annotations

from collections.abc import Iterable

from .backends.base import Converter
from .buffers import NarrowInput, WideBuffer
from .const import NARROW_ENCODING
from .errors import ConversionOutcome
from .factory import get_default_converter


def narrow_to_wide(
    data: NarrowInput | None, *, converter: Converter | None = None
) -> tuple[WideBuffer, ConversionOutcome]:
    """Convert UTF-8 bytes into platform wide code units.

    Args:
        data: UTF-8 encoded bytes. Not modified.
        converter: Converter to use instead of the platform default.

    Returns:
        The wide buffer and the outcome of the conversion.
    """
    return (converter or get_default_converter()).narrow_to_wide(data)


def wide_to_narrow(
    units: WideBuffer | Iterable[int] | None, *, converter: Converter | None = None
) -> tuple[bytearray, ConversionOutcome]:
    """Convert platform wide code units into UTF-8 bytes.

    Args:
        units: A ``WideBuffer`` or a sequence of integer code units of the
            converter's unit width. Not modified.
        converter: Converter to use instead of the platform default.

    Returns:
        The UTF-8 buffer and the outcome of the conversion.
    """
    return (converter or get_default_converter()).wide_to_narrow(units)


def text_to_wide(
    text: str, *, converter: Converter | None = None
) -> tuple[WideBuffer, ConversionOutcome]:
    """Convert a ``str`` into wide code units.

    Lone surrogates are passed through to the converter, which rejects
    them as malformed input.
    """
    data = text.encode(NARROW_ENCODING, "surrogatepass") if isinstance(text, str) else None
    return narrow_to_wide(data, converter=converter)


def wide_to_text(
    units: WideBuffer | Iterable[int] | None, *, converter: Converter | None = None
) -> tuple[str, ConversionOutcome]:
    """Convert wide code units into a ``str``."""
    narrow, outcome = wide_to_narrow(units, converter=converter)
    return narrow.decode(NARROW_ENCODING), outcome
