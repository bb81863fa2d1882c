from __future__ import annotations
from typing import Dict, List

import numpy as np


# canonical channel order for unpacked pixels
rgba = ("red", "green", "blue", "alpha")


class Channel:
    name: str
    bits: int
    # assuming 0-limit unsigned int per-channel

    def __init__(self, name, bits):
        self.name = name
        self.bits = bits

    @property
    def mask(self) -> int:
        return (1 << self.bits) - 1

    def extract(self, words: np.array, offset: int) -> np.array:
        return (words >> offset) & self.mask

    # NOTE: linear scaling, not bit replication
    # -- expand rounds down, reduce rounds to nearest
    # -- reduce(expand(x)) == x
    # -- 1-bit alpha is set for any value >= 128, not only 255
    def expand(self, values: np.array) -> np.array:
        """n-bit -> 8-bit"""
        return (values.astype(np.uint32) * 0xFF // self.mask).astype(np.uint8)

    def reduce(self, values: np.array) -> np.array:
        """8-bit -> n-bit"""
        return (values.astype(np.uint32) * self.mask + 0x7F) // 0xFF


class Format:  # one packed word per pixel
    channels: List[Channel]
    # ^ first channel occupies the highest bits
    dtype: np.dtype

    def __init__(self, **channels):
        self.channels = [
            Channel(name, size)
            for name, size in channels.items()]
        self.dtype = self.dtype_for(self.bits_per_pixel)

    @staticmethod
    def dtype_for(bits_per_pixel: int) -> np.dtype:
        dtypes = {16: np.dtype("<u2"), 32: np.dtype("<u4")}
        if bits_per_pixel not in dtypes:
            raise RuntimeError(f"cannot pack {bits_per_pixel} bits into a word")
        return dtypes[bits_per_pixel]

    @property
    def bits_per_pixel(self) -> int:
        return sum(channel.bits for channel in self.channels)

    @property
    def offsets(self) -> Dict[str, int]:
        out = dict()
        offset = self.bits_per_pixel
        for channel in self.channels:
            offset -= channel.bits
            out[channel.name] = offset
        return out

    def unpack(self, raw_pixels: bytes) -> np.array:
        """b"\\x..\\x.." -> [[r, g, b, a], ...]; missing channels are 0xFF"""
        words = np.frombuffer(raw_pixels, dtype=self.dtype)
        out = np.full((words.size, 4), 0xFF, dtype=np.uint8)
        offsets = self.offsets
        for channel in self.channels:
            values = channel.extract(words, offsets[channel.name])
            out[:, rgba.index(channel.name)] = channel.expand(values)
        return out

    def pack(self, pixels: np.array) -> bytes:
        """[[r, g, b, a], ...] -> b"\\x..\\x.."; drops unused channels"""
        pixels = pixels.reshape(-1, 4)
        words = np.zeros((pixels.shape[0],), dtype=self.dtype)
        offsets = self.offsets
        for channel in self.channels:
            values = channel.reduce(pixels[:, rgba.index(channel.name)])
            words |= values.astype(self.dtype) << offsets[channel.name]
        return words.tobytes()
