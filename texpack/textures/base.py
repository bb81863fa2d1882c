from __future__ import annotations
import enum
import numbers
from typing import Any, Dict, Tuple

import numpy as np

from ..pixels import packed
from ..decode.flip import flip
from ..errors import InvalidTexture, MalformedContainer, MalformedMetadata, UnknownFormat


Size = Tuple[int, int]
# ^ (width, height)


class TextureFormat(enum.Enum):
    R5G5B5A1 = 0
    R4G4B4A4 = 1
    R5G6B5 = 2
    R8G8B8A8 = 3

    @classmethod
    def from_value(cls, value: int) -> TextureFormat:
        try:
            return cls(value)
        except ValueError:
            raise UnknownFormat(f"unknown texture format: {value!r}") from None

    @classmethod
    def from_name(cls, name: str) -> TextureFormat:
        if not isinstance(name, str) or name not in cls.__members__:
            raise UnknownFormat(f"unknown texture format: {name!r}")
        return cls[name]

    @property
    def bytes_per_pixel(self) -> int:
        return bytes_per_pixel[self]


bytes_per_pixel = {
    TextureFormat.R5G5B5A1: 2,
    TextureFormat.R4G4B4A4: 2,
    TextureFormat.R5G6B5: 2,
    TextureFormat.R8G8B8A8: 4}


decoders = {
    TextureFormat.R5G5B5A1: packed.RGBA5551_to_RGBA32,
    TextureFormat.R4G4B4A4: packed.RGBA4444_to_RGBA32,
    TextureFormat.R5G6B5: packed.RGB565_to_RGBA32,
    TextureFormat.R8G8B8A8: packed.RGBA8888_to_RGBA32}

encoders = {
    TextureFormat.R5G5B5A1: packed.RGBA32_to_RGBA5551,
    TextureFormat.R4G4B4A4: packed.RGBA32_to_RGBA4444,
    TextureFormat.R5G6B5: packed.RGBA32_to_RGB565,
    TextureFormat.R8G8B8A8: packed.RGBA32_to_RGBA8888}


def data_size(format_: TextureFormat, size: Size) -> int:
    width, height = size
    return width * height * bytes_per_pixel[format_]


def decode(format_: TextureFormat, raw_pixels: bytes, size: Size) -> np.array:
    """packed, bottom-to-top -> (height, width, 4) RGBA, top-to-bottom"""
    if format_ not in decoders:
        raise UnknownFormat(f"unknown texture format: {format_!r}")
    expected = data_size(format_, size)
    if len(raw_pixels) != expected:
        raise MalformedContainer(
            f"{format_.name} {size[0]}x{size[1]} needs {expected} bytes,"
            f" got {len(raw_pixels)}")
    width, height = size
    rgba32 = decoders[format_](raw_pixels)
    return flip(rgba32.reshape((height, width, 4)))


def encode(format_: TextureFormat, pixels: np.array) -> bytes:
    """(height, width, 4) RGBA, top-to-bottom -> packed, bottom-to-top"""
    if format_ not in encoders:
        raise UnknownFormat(f"unknown texture format: {format_!r}")
    return encoders[format_](flip(pixels))


class TextureMeta:
    id: int  # u32
    # NOTE: purpose unknown, preserved as-is
    unk_c: int  # i32
    unk_10: int  # i32
    unk_14: int  # i32
    unk_18: int  # i32
    format: TextureFormat

    fields = ("id", "unk_c", "unk_10", "unk_14", "unk_18")
    limits = {
        "id": (0, 0xFFFFFFFF),
        "unk_c": (-0x80000000, 0x7FFFFFFF),
        "unk_10": (-0x80000000, 0x7FFFFFFF),
        "unk_14": (-0x80000000, 0x7FFFFFFF),
        "unk_18": (-0x80000000, 0x7FFFFFFF)}

    def __init__(self, id, unk_c=0, unk_10=0, unk_14=0, unk_18=0,
                 format=TextureFormat.R8G8B8A8):
        self.id = id
        self.unk_c = unk_c
        self.unk_10 = unk_10
        self.unk_14 = unk_14
        self.unk_18 = unk_18
        self.format = format

    def __repr__(self) -> str:
        args = [
            f"id=0x{self.id:08x}",
            *[f"{name}={getattr(self, name)!r}" for name in self.fields[1:]],
            f"format=TextureFormat.{self.format.name}"]
        return f"{self.__class__.__name__}({', '.join(args)})"

    def __eq__(self, other) -> bool:
        if isinstance(other, TextureMeta):
            return self.as_tuple() == other.as_tuple()
        return False

    def __hash__(self):
        return hash(self.as_tuple())

    def as_tuple(self) -> Tuple[int, int, int, int, int, TextureFormat]:
        return (*[getattr(self, name) for name in self.fields], self.format)

    @property
    def as_json(self) -> Dict[str, Any]:
        out = {name: getattr(self, name) for name in self.fields}
        out["texture_format"] = self.format.name
        return out

    def validate(self):
        """raises if any field won't fit its slot in a texture header"""
        for name, (minimum, maximum) in self.limits.items():
            value = getattr(self, name)
            # NOTE: bool is a subclass of int
            if not isinstance(value, numbers.Integral) or isinstance(value, bool):
                raise MalformedMetadata(f"{name} must be an integer, got {value!r}")
            if not minimum <= value <= maximum:
                raise MalformedMetadata(f"{name} out of range: {value}")
        if not isinstance(self.format, TextureFormat):
            raise UnknownFormat(f"unknown texture format: {self.format!r}")

    @classmethod
    def from_json(cls, meta_json: Dict[str, Any]) -> TextureMeta:
        if not isinstance(meta_json, dict):
            raise MalformedMetadata(f"expected an object, got {type(meta_json).__name__}")
        missing = [
            name
            for name in (*cls.fields, "texture_format")
            if name not in meta_json]
        if len(missing) > 0:
            raise MalformedMetadata(f"missing fields: {', '.join(missing)}")
        format_ = TextureFormat.from_name(meta_json["texture_format"])
        out = cls(*[meta_json[name] for name in cls.fields], format_)
        out.validate()
        return out


class Texture:
    meta: TextureMeta
    pixels: np.array
    # ^ (height, width, 4) uint8 RGBA, top row first

    def __init__(self, meta, pixels):
        pixels = np.asarray(pixels)
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise InvalidTexture(f"expected (height, width, 4) pixels, got {pixels.shape}")
        if pixels.dtype != np.uint8:
            if pixels.dtype.kind not in "iuf":
                raise InvalidTexture(f"expected numeric pixels, got {pixels.dtype}")
            if pixels.size > 0:
                if pixels.min() < 0 or pixels.max() > 0xFF:
                    raise InvalidTexture("pixel values must be in 0..255")
                if pixels.dtype.kind == "f" and not np.all(pixels == np.floor(pixels)):
                    raise InvalidTexture("pixel values must be whole numbers")
            pixels = pixels.astype(np.uint8)
        self.meta = meta
        self.pixels = pixels

    def __repr__(self) -> str:
        width, height = self.size
        descriptor = f"0x{self.meta.id:08x} {width}x{height} {self.meta.format.name}"
        return f"<{self.__class__.__name__} {descriptor} @ 0x{id(self):016X}>"

    # NOTE: size always comes from pixels, never from stale metadata
    @property
    def size(self) -> Size:
        height, width = self.pixels.shape[:2]
        return (width, height)

    @property
    def data_size(self) -> int:
        return data_size(self.meta.format, self.size)
