"""Converter backends.

Exactly one backend is selected per platform (see ``widecodecs.factory``);
both are importable so they can be exercised side by side.
"""

from __future__ import annotations

from .base import Converter
from .generic import GenericConverter, StreamTranscoder, TranscoderError
from .native import NativeConverter
from .platform_api import CompatCodecApi, PlatformCodecApi, Win32CodecApi, create_platform_api

__all__ = [
    "CompatCodecApi",
    "Converter",
    "GenericConverter",
    "NativeConverter",
    "PlatformCodecApi",
    "StreamTranscoder",
    "TranscoderError",
    "Win32CodecApi",
    "create_platform_api",
]
