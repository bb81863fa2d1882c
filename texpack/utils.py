import io
import struct
from typing import Any, List, Union

from .errors import MalformedContainer


# NOTE: all reads are offset-indexed into the whole container
# -- pointers in the file are absolute, so we never track a cursor
def read_struct(raw_data: bytes, offset: int, format_: str) -> Union[Any, List[Any]]:
    byte_size = struct.calcsize(format_)
    check_range(raw_data, offset, byte_size)
    out = struct.unpack_from(format_, raw_data, offset)
    if len(out) == 1:
        out = out[0]
    return out


def read_bytes(raw_data: bytes, offset: int, size: int) -> bytes:
    check_range(raw_data, offset, size)
    return raw_data[offset:offset + size]


def check_range(raw_data: bytes, offset: int, size: int):
    if offset < 0 or offset + size > len(raw_data):
        raise MalformedContainer(
            f"cannot read 0x{size:X} bytes @ 0x{offset:08X}"
            f" (buffer is only 0x{len(raw_data):X} bytes)")


def write_struct(stream: io.BytesIO, format_: str, *args):
    stream.write(struct.pack(format_, *args))
