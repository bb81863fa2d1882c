"""vertical flip between on-disk & canonical row order"""
# NOTE: packages store rows bottom-to-top (OpenGL convention)
import numpy as np


def flip(pixels: np.array) -> np.array:
    """(height, width, channels) array w/ rows in reverse order"""
    return np.ascontiguousarray(pixels[::-1])
