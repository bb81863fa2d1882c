# .tpg texture package
# u32 texture_count, u32 header table pointer, then 36-byte texture headers
# each header points to a bottom-to-top pixel payload elsewhere in the file
from __future__ import annotations
import io
import os
import struct
from typing import List

from ..errors import MalformedContainer, UnsupportedDimensions
from ..utils import read_bytes, read_struct, write_struct
from . import base


header_format = "<2I"  # texture_count, header table pointer
header_size = 0x20  # header table starts right after, zero padded
record_format = "<3I4i2I"
# ^ id, width, height, unk_c, unk_10, unk_14, unk_18, format, data pointer
record_size = struct.calcsize(record_format)  # 36

u32_max = 0xFFFFFFFF


class Tpg:
    extension: str = "tpg"
    folder: str
    filename: str
    textures: List[base.Texture]

    def __init__(self, textures=None):
        self.folder = ""
        self.filename = f"untitled.{self.extension}"
        self.textures = list() if textures is None else list(textures)

    def __repr__(self) -> str:
        descriptor = f"'{self.filename}' {len(self.textures)} textures"
        return f"<{self.__class__.__name__} {descriptor} @ 0x{id(self):016X}>"

    def __len__(self) -> int:
        return len(self.textures)

    def __iter__(self):
        return iter(self.textures)

    def override_format(self, format_: base.TextureFormat):
        """pixels are re-encoded in the new format by .as_bytes()"""
        for texture in self.textures:
            texture.meta.format = format_

    # read
    @classmethod
    def from_bytes(cls, raw_data: bytes) -> Tpg:
        texture_count, table_offset = read_struct(raw_data, 0, header_format)
        table_size = texture_count * record_size
        if table_offset + table_size > len(raw_data):
            raise MalformedContainer(
                f"{texture_count} texture headers @ 0x{table_offset:08X}"
                f" run past end of file (0x{len(raw_data):X} bytes)")
        # first pass: texture headers
        records = list()
        for i in range(texture_count):
            offset = table_offset + i * record_size
            id_, width, height, *unknowns, format_, data_offset = read_struct(
                raw_data, offset, record_format)
            format_ = base.TextureFormat.from_value(format_)
            meta = base.TextureMeta(id_, *unknowns, format_)
            records.append((meta, (width, height), data_offset))
        # second pass: follow pointers to pixels
        out = cls()
        for meta, size, data_offset in records:
            raw_pixels = read_bytes(
                raw_data, data_offset, base.data_size(meta.format, size))
            pixels = base.decode(meta.format, raw_pixels, size)
            out.textures.append(base.Texture(meta, pixels))
        return out

    @classmethod
    def from_file(cls, path: str) -> Tpg:
        with open(path, "rb") as tpg_file:
            out = cls.from_bytes(tpg_file.read())
        out.folder, out.filename = os.path.split(path)
        return out

    # write
    def as_bytes(self) -> bytes:
        stream = io.BytesIO()
        # header
        write_struct(stream, header_format, len(self.textures), header_size)
        stream.write(b"\0" * (header_size - stream.tell()))
        # texture headers
        data_offset = header_size + len(self.textures) * record_size
        for texture in self.textures:
            meta = texture.meta
            meta.validate()
            width, height = texture.size
            data_size = texture.data_size
            if max(width, height, data_size, data_offset) > u32_max:
                raise UnsupportedDimensions(
                    f"texture 0x{meta.id:08x} ({width}x{height} {meta.format.name})"
                    f" @ 0x{data_offset:X} does not fit in a .tpg")
            write_struct(
                stream, record_format,
                meta.id, width, height,
                meta.unk_c, meta.unk_10, meta.unk_14, meta.unk_18,
                meta.format.value, data_offset)
            data_offset += data_size
        assert stream.tell() == header_size + len(self.textures) * record_size
        # pixels
        for texture in self.textures:
            stream.write(base.encode(texture.meta.format, texture.pixels))
        # stream -> bytes
        return stream.getvalue()

    def save_as(self, path: str):
        out = self.as_bytes()
        folder = os.path.dirname(path)
        if folder != "":
            os.makedirs(folder, exist_ok=True)
        with open(path, "wb") as tpg_file:
            tpg_file.write(out)


def parse_container(raw_data: bytes) -> Tpg:
    return Tpg.from_bytes(raw_data)


def write_container(tpg: Tpg) -> bytes:
    return tpg.as_bytes()
