"""Contract tests for the public conversion operations."""

from concurrent.futures import ThreadPoolExecutor
import logging

import pytest

from widecodecs import (
    ErrorKind,
    GenericConverter,
    WideBuffer,
    get_default_converter,
    narrow_to_wide,
    text_to_wide,
    wide_to_narrow,
    wide_to_text,
)
from widecodecs.const import PLATFORM_UNIT_WIDTH

HELLO_NARROW = bytes([0x68, 0xC3, 0xA9, 0x6C, 0x6C, 0x6F])

SAMPLES = [
    "",
    "plain ascii",
    "héllo",
    "Grüße, Jürgen",
    "日本語のテキスト",
    "emoji \U0001F600 and \U0001F4A9",
    "mixed é€\U00010348 end",
    "nul\x00inside",
]


class TestDefaultConverter:
    """The module level operations use the platform converter."""

    def test_hello(self) -> None:
        wide, outcome = narrow_to_wide(HELLO_NARROW)
        assert outcome
        assert outcome.error is None
        assert len(wide) == 5
        assert wide.unit_width == PLATFORM_UNIT_WIDTH

        narrow, outcome = wide_to_narrow(wide)
        assert outcome
        assert bytes(narrow) == HELLO_NARROW
        assert len(narrow) == 6

    def test_default_converter_is_cached(self) -> None:
        assert get_default_converter() is get_default_converter()

    def test_explicit_converter(self) -> None:
        wide, outcome = narrow_to_wide(b"hi", converter=GenericConverter(2))
        assert outcome
        assert wide.unit_width == 2

    def test_input_not_modified(self) -> None:
        data = bytearray(HELLO_NARROW)
        narrow_to_wide(data)
        assert data == HELLO_NARROW


class TestContract:
    """Behaviour both backends must share."""

    def test_empty_narrow(self, converter) -> None:
        wide, outcome = converter.narrow_to_wide(b"")
        assert outcome
        assert outcome.error is None
        assert len(wide) == 0

    def test_empty_wide(self, converter) -> None:
        narrow, outcome = converter.wide_to_narrow(WideBuffer(unit_width=converter.unit_width))
        assert outcome
        assert outcome.error is None
        assert narrow == b""

    @pytest.mark.parametrize("data", [b"\x80", b"abc\xc3", b"\xed\xa0\x80", b"\xff\xfe", b"\xf4\x90\x80\x80"])
    def test_malformed_narrow(self, converter, data: bytes) -> None:
        wide, outcome = converter.narrow_to_wide(data)
        assert outcome.success is False
        assert len(wide) == 0
        assert outcome.error.kind in (ErrorKind.CONVERSION_FAILURE, ErrorKind.PLATFORM_OPAQUE)

    def test_none_input_is_invalid_argument(self, converter) -> None:
        wide, outcome = converter.narrow_to_wide(None)
        assert not outcome
        assert len(wide) == 0
        assert outcome.error.kind is ErrorKind.INVALID_ARGUMENT

        narrow, outcome = converter.wide_to_narrow(None)
        assert not outcome
        assert narrow == b""
        assert outcome.error.kind is ErrorKind.INVALID_ARGUMENT

    def test_wrong_input_type_is_invalid_argument(self, converter) -> None:
        wide, outcome = converter.narrow_to_wide("not bytes")
        assert not outcome
        assert outcome.error.kind is ErrorKind.INVALID_ARGUMENT

    def test_wrong_unit_width_is_invalid_argument(self, converter) -> None:
        other_width = 4 if converter.unit_width == 2 else 2
        narrow, outcome = converter.wide_to_narrow(WideBuffer([0x61], unit_width=other_width))
        assert not outcome
        assert outcome.error.kind is ErrorKind.INVALID_ARGUMENT

    @pytest.mark.parametrize("text", SAMPLES)
    def test_round_trip(self, converter, text: str) -> None:
        data = text.encode("utf-8")
        wide, outcome = converter.narrow_to_wide(data)
        assert outcome
        assert wide == WideBuffer.from_text(text, converter.unit_width)

        narrow, outcome = converter.wide_to_narrow(wide)
        assert outcome
        assert bytes(narrow) == data

    def test_accepts_memoryview(self, converter) -> None:
        wide, outcome = converter.narrow_to_wide(memoryview(HELLO_NARROW)[1:3])
        assert outcome
        assert wide == [0xE9]

    @pytest.mark.parametrize(
        ("view", "expected"),
        [
            (memoryview(b"a").cast("B", shape=[]), [0x61]),
            (memoryview(b"abcd").cast("B", shape=[2, 2]), [0x61, 0x62, 0x63, 0x64]),
            (memoryview(b"abcd")[::2], [0x61, 0x63]),
        ],
        ids=["0-dim", "2-dim", "strided"],
    )
    def test_accepts_shaped_memoryview(self, converter, view: memoryview, expected: list[int]) -> None:
        wide, outcome = converter.narrow_to_wide(view)
        assert outcome
        assert wide == expected

    @pytest.mark.parametrize(
        "view",
        [
            memoryview(b"\x80").cast("B", shape=[]),
            memoryview(b"a\x80bc").cast("B", shape=[2, 2]),
            memoryview(b"a.\x80.")[::2],
        ],
        ids=["0-dim", "2-dim", "strided"],
    )
    @pytest.mark.parametrize("log_level", [logging.WARNING, logging.DEBUG])
    def test_malformed_shaped_memoryview(
        self, converter, view: memoryview, log_level: int, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(log_level, logger="widecodecs")
        wide, outcome = converter.narrow_to_wide(view)
        assert not outcome
        assert len(wide) == 0
        assert outcome.error.kind is ErrorKind.CONVERSION_FAILURE

    def test_accepts_plain_sequence(self, converter) -> None:
        narrow, outcome = converter.wide_to_narrow([0x68, 0x69])
        assert outcome
        assert narrow == b"hi"

    def test_failure_does_not_affect_next_call(self, converter) -> None:
        assert not converter.narrow_to_wide(b"\x80")[1]
        wide, outcome = converter.narrow_to_wide(b"ok")
        assert outcome
        assert wide == [0x6F, 0x6B]


class TestCrossBackend:
    """Generic and native backends agree on every input."""

    @pytest.mark.parametrize("text", SAMPLES)
    def test_same_wide_output(self, generic_converter, native_converter, text: str) -> None:
        data = text.encode("utf-8")
        assert generic_converter.narrow_to_wide(data) == native_converter.narrow_to_wide(data)

    @pytest.mark.parametrize("text", SAMPLES)
    def test_same_narrow_output(self, generic_converter, native_converter, text: str) -> None:
        wide = WideBuffer.from_text(text, generic_converter.unit_width)
        generic_narrow, generic_outcome = generic_converter.wide_to_narrow(wide)
        native_narrow, native_outcome = native_converter.wide_to_narrow(wide)
        assert generic_outcome and native_outcome
        assert generic_narrow == native_narrow

    def test_both_reject_malformed(self, generic_converter, native_converter) -> None:
        generic_wide, generic_outcome = generic_converter.narrow_to_wide(b"a\x80")
        native_wide, native_outcome = native_converter.narrow_to_wide(b"a\x80")
        assert not generic_outcome and not native_outcome
        assert generic_outcome.error.kind is native_outcome.error.kind is ErrorKind.CONVERSION_FAILURE
        assert len(generic_wide) == len(native_wide) == 0


class TestThreads:
    """Calls on different threads are independent."""

    def test_concurrent_mixed_calls(self, converter) -> None:
        inputs = [b"\x80" if i % 3 == 0 else f"thread {i} é".encode() for i in range(200)]

        def _convert(data: bytes):
            return data, converter.narrow_to_wide(data)

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(_convert, inputs))

        for data, (wide, outcome) in results:
            if data == b"\x80":
                assert not outcome
                assert len(wide) == 0
            else:
                assert outcome
                assert wide == WideBuffer.from_text(data.decode(), converter.unit_width)


class TestTextHelpers:
    """Tests for text_to_wide / wide_to_text."""

    def test_text_round_trip(self) -> None:
        wide, outcome = text_to_wide("héllo \U0001F600")
        assert outcome
        text, outcome = wide_to_text(wide)
        assert outcome
        assert text == "héllo \U0001F600"

    def test_lone_surrogate_rejected(self, converter) -> None:
        wide, outcome = text_to_wide("a\ud800b", converter=converter)
        assert not outcome
        assert len(wide) == 0
        assert outcome.error.kind is ErrorKind.CONVERSION_FAILURE

    def test_non_text_is_invalid_argument(self) -> None:
        wide, outcome = text_to_wide(b"bytes")  # type: ignore[arg-type]
        assert not outcome
        assert outcome.error.kind is ErrorKind.INVALID_ARGUMENT

    def test_wide_to_text_failure_is_empty(self) -> None:
        text, outcome = wide_to_text([0xD800], converter=GenericConverter(2))
        assert not outcome
        assert text == ""
