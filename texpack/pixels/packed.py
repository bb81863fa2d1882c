import numpy as np

from . import base


RGBA_5551 = base.Format(red=5, green=5, blue=5, alpha=1)
RGBA_4444 = base.Format(red=4, green=4, blue=4, alpha=4)
RGB_565 = base.Format(red=5, green=6, blue=5)


def RGBA5551_to_RGBA32(raw_pixels: bytes) -> np.array:
    return RGBA_5551.unpack(raw_pixels)


def RGBA32_to_RGBA5551(pixels: np.array) -> bytes:
    return RGBA_5551.pack(pixels)


def RGBA4444_to_RGBA32(raw_pixels: bytes) -> np.array:
    return RGBA_4444.unpack(raw_pixels)


def RGBA32_to_RGBA4444(pixels: np.array) -> bytes:
    return RGBA_4444.pack(pixels)


def RGB565_to_RGBA32(raw_pixels: bytes) -> np.array:
    return RGB_565.unpack(raw_pixels)  # alpha is always 0xFF


def RGBA32_to_RGB565(pixels: np.array) -> bytes:
    return RGB_565.pack(pixels)


# NOTE: byte order matches canonical order, no word packing
def RGBA8888_to_RGBA32(raw_pixels: bytes) -> np.array:
    rgba32 = np.frombuffer(raw_pixels, dtype=np.uint8)
    return rgba32.reshape(rgba32.size // 4, 4)


def RGBA32_to_RGBA8888(pixels: np.array) -> bytes:
    return pixels.astype(np.uint8).tobytes()
