__all__ = [
    "base", "packed",
    "Channel", "Format",
    "RGBA5551_to_RGBA32", "RGBA32_to_RGBA5551",
    "RGBA4444_to_RGBA32", "RGBA32_to_RGBA4444",
    "RGB565_to_RGBA32", "RGBA32_to_RGB565",
    "RGBA8888_to_RGBA32", "RGBA32_to_RGBA8888"]

from . import base
from . import packed

from .base import Channel, Format
from .packed import (
    RGBA5551_to_RGBA32, RGBA32_to_RGBA5551,
    RGBA4444_to_RGBA32, RGBA32_to_RGBA4444,
    RGB565_to_RGBA32, RGBA32_to_RGB565,
    RGBA8888_to_RGBA32, RGBA32_to_RGBA8888)
