import struct

import numpy as np
import pytest

from texpack.errors import (
    MalformedContainer, MalformedMetadata, UnknownFormat, UnsupportedDimensions)
from texpack.textures import tpg
from texpack.textures.base import Texture, TextureFormat, TextureMeta


def red_square() -> bytes:
    """1x 4x4 R8G8B8A8 texture, header @ 0x20, pixels @ 0x44"""
    header = struct.pack("<2I", 1, 0x20) + b"\0" * 24
    record = struct.pack("<3I4i2I", 0x1234ABCD, 4, 4, 1, -2, 3, -4, 3, 0x44)
    return header + record + b"\xFF\x00\x00\xFF" * 16


def mixed_package() -> tpg.Tpg:
    rng = np.random.default_rng(1)
    textures = [
        Texture(
            TextureMeta(i, i, -i, 0x10, -0x10, format_),
            rng.integers(0, 256, (3 + i, 2 + i, 4), dtype=np.uint8))
        for i, format_ in enumerate(TextureFormat)]
    return tpg.Tpg(textures)


def test_parse_red_square():
    package = tpg.parse_container(red_square())
    assert len(package) == 1
    texture = package.textures[0]
    assert texture.meta == TextureMeta(0x1234ABCD, 1, -2, 3, -4, TextureFormat.R8G8B8A8)
    assert texture.size == (4, 4)
    assert np.all(texture.pixels == [255, 0, 0, 255])


def test_write_red_square():
    raw = red_square()
    assert tpg.write_container(tpg.parse_container(raw)) == raw


def test_layout():
    package = mixed_package()
    raw = package.as_bytes()
    assert struct.unpack_from("<2I", raw, 0) == (4, 0x20)
    assert raw[8:0x20] == b"\0" * 24
    data_offset = 0x20 + 4 * tpg.record_size
    for i, texture in enumerate(package.textures):
        record = struct.unpack_from("<3I4i2I", raw, 0x20 + i * tpg.record_size)
        width, height = texture.size
        assert record[:3] == (i, width, height)
        assert record[7] == texture.meta.format.value
        assert record[8] == data_offset
        data_offset += texture.data_size
    assert len(raw) == data_offset


def test_resave_is_stable():
    raw = mixed_package().as_bytes()
    assert tpg.Tpg.from_bytes(raw).as_bytes() == raw


def test_R8G8B8A8_pixels_survive():
    package = mixed_package()
    reparsed = tpg.Tpg.from_bytes(package.as_bytes())
    original = package.textures[3]
    assert original.meta.format == TextureFormat.R8G8B8A8
    assert np.array_equal(reparsed.textures[3].pixels, original.pixels)
    assert [t.meta for t in reparsed] == [t.meta for t in package]


def test_size_from_pixels():
    package = mixed_package()
    texture = package.textures[0]
    texture.pixels = np.zeros((2, 7, 4), dtype=np.uint8)
    raw = package.as_bytes()
    assert struct.unpack_from("<3I", raw, 0x20) == (0, 7, 2)
    assert tpg.Tpg.from_bytes(raw).textures[0].size == (7, 2)


def test_override_format():
    package = mixed_package()
    package.override_format(TextureFormat.R5G6B5)
    reparsed = tpg.Tpg.from_bytes(package.as_bytes())
    assert {t.meta.format for t in reparsed} == {TextureFormat.R5G6B5}
    assert np.all(reparsed.textures[3].pixels[..., 3] == 0xFF)


def test_empty_package():
    raw = tpg.Tpg().as_bytes()
    assert raw == struct.pack("<2I", 0, 0x20) + b"\0" * 24
    assert len(tpg.Tpg.from_bytes(raw)) == 0


@pytest.mark.parametrize("raw", [
    b"",
    b"\x01\x00\x00",
    struct.pack("<2I", 1, 0x20),  # truncated before header table
    red_square()[:0x20 + 20],  # truncated header
    red_square()[:-1],  # truncated pixels
    struct.pack("<2I", 0xFFFFFFFF, 0x20) + b"\0" * 24])
def test_truncated(raw):
    with pytest.raises(MalformedContainer):
        tpg.parse_container(raw)


def test_bad_pointers():
    raw = bytearray(red_square())
    struct.pack_into("<I", raw, 0x20 + 32, 0x1000)  # pixels past EOF
    with pytest.raises(MalformedContainer):
        tpg.parse_container(bytes(raw))
    raw = bytearray(red_square())
    struct.pack_into("<I", raw, 4, 0xFFFFFFF0)  # header table past EOF
    with pytest.raises(MalformedContainer):
        tpg.parse_container(bytes(raw))
    raw = bytearray(red_square())
    struct.pack_into("<2I", raw, 0x20 + 4, 0x10000, 0x10000)  # huge texture
    with pytest.raises(MalformedContainer):
        tpg.parse_container(bytes(raw))


def test_unknown_format():
    raw = bytearray(red_square())
    struct.pack_into("<I", raw, 0x20 + 28, 4)
    with pytest.raises(UnknownFormat):
        tpg.parse_container(bytes(raw))


def test_unsupported_dimensions():
    # NOTE: broadcast_to avoids allocating 16GiB
    pixels = np.broadcast_to(np.zeros(4, dtype=np.uint8), (0x10000, 0x10000, 4))
    package = tpg.Tpg([Texture(TextureMeta(1), pixels)])
    with pytest.raises(UnsupportedDimensions):
        package.as_bytes()


def test_files(tmp_path):
    path = tmp_path / "out" / "red.tpg"
    package = tpg.parse_container(red_square())
    package.save_as(str(path))
    assert path.read_bytes() == red_square()
    loaded = tpg.Tpg.from_file(str(path))
    assert loaded.filename == "red.tpg"
    assert loaded.folder == str(tmp_path / "out")
    with pytest.raises(OSError):
        tpg.Tpg.from_file(str(tmp_path / "missing.tpg"))


def test_empty_texture():
    empty = Texture(TextureMeta(9), np.zeros((4, 0, 4), dtype=np.uint8))
    package = tpg.Tpg([empty, *mixed_package().textures])
    raw = package.as_bytes()
    data_offset = 0x20 + 5 * tpg.record_size
    assert struct.unpack_from("<3I4i2I", raw, 0x20) == (9, 0, 4, 0, 0, 0, 0, 3, data_offset)
    # next texture shares the same offset
    assert struct.unpack_from("<I", raw, 0x20 + tpg.record_size + 32)[0] == data_offset
    reparsed = tpg.parse_container(raw)
    assert reparsed.textures[0].size == (0, 4)
    assert reparsed.as_bytes() == raw


@pytest.mark.parametrize("field,value", [
    ("id", -1),
    ("id", 0x100000000),
    ("unk_18", -0x80000001),
    ("unk_10", 1.5)])
def test_meta_out_of_range(field, value):
    package = mixed_package()
    setattr(package.textures[1].meta, field, value)
    with pytest.raises(MalformedMetadata):
        package.as_bytes()
