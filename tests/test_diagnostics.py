"""Tests for converter diagnostics."""

from widecodecs.backends.generic import GenericConverter
from widecodecs.backends.native import NativeConverter
from widecodecs.backends.platform_api import CompatCodecApi
from widecodecs.const import PLATFORM_UNIT_WIDTH
from widecodecs.diagnostics import get_diagnostics
from widecodecs.factory import SELECTED_BACKEND


def test_default_diagnostics():
    payload = get_diagnostics()
    assert payload["selected_backend"] == SELECTED_BACKEND
    assert payload["platform_unit_width"] == PLATFORM_UNIT_WIDTH
    assert payload["converter"]["backend"] == SELECTED_BACKEND


def test_generic_diagnostics():
    payload = get_diagnostics(GenericConverter(2))
    assert payload["converter"] == {
        "backend": "generic",
        "unit_width": 2,
        "wide_encoding": "utf-16-le",
        "error_domain": "errno",
        "platform_api": None,
    }


def test_native_diagnostics():
    payload = get_diagnostics(NativeConverter(CompatCodecApi(4)))
    assert payload["converter"]["backend"] == "native"
    assert payload["converter"]["error_domain"] == "win32"
    assert payload["converter"]["platform_api"] == "compat"
    assert payload["converter"]["wide_encoding"] == "utf-32-le"
