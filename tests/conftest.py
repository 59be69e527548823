from __future__ import annotations

from collections.abc import Generator
from typing import Any

from hypothesis import HealthCheck, settings
import pytest

from widecodecs.backends import generic
from widecodecs.backends.generic import GenericConverter, StreamTranscoder
from widecodecs.backends.native import NativeConverter
from widecodecs.backends.platform_api import CompatCodecApi
from widecodecs.factory import get_default_converter

settings.register_profile(
    "default",
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.data_too_large],
)
settings.load_profile("default")


@pytest.fixture(params=[2, 4], ids=["utf16", "utf32"])
def unit_width(request: Any) -> int:
    return request.param


@pytest.fixture
def generic_converter(unit_width: int) -> GenericConverter:
    """Generic backend for the parametrized unit width."""
    return GenericConverter(unit_width)


@pytest.fixture
def native_converter(unit_width: int) -> NativeConverter:
    """Native backend over the portable platform api."""
    return NativeConverter(CompatCodecApi(unit_width))


@pytest.fixture(params=["generic", "native"])
def converter(request: Any, unit_width: int) -> Any:
    """Each backend in turn, for contract tests both must satisfy."""
    if request.param == "generic":
        return GenericConverter(unit_width)
    return NativeConverter(CompatCodecApi(unit_width))


@pytest.fixture
def opened_transcoders(monkeypatch: pytest.MonkeyPatch) -> list[StreamTranscoder]:
    """Record every transcoder handle opened by the generic backend."""
    handles: list[StreamTranscoder] = []

    class _RecordingTranscoder(StreamTranscoder):
        def __init__(self, *args: Any, **kwargs: Any) -> None:
            super().__init__(*args, **kwargs)
            handles.append(self)

    monkeypatch.setattr(generic, "StreamTranscoder", _RecordingTranscoder)
    return handles


@pytest.fixture(autouse=True)
def clear_default_converter() -> Generator[None, None, None]:
    get_default_converter.cache_clear()
    yield
    get_default_converter.cache_clear()
