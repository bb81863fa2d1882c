__all__ = [
    "decode", "errors", "pixels", "textures",
    "Size", "Texture", "TextureFormat", "TextureMeta", "Tpg",
    "assemble_from_directory", "emit_to_directory",
    "parse_container", "write_container",
    "TexpackError", "MalformedContainer", "UnknownFormat",
    "MissingMetadata", "MalformedMetadata",
    "UnsupportedDimensions", "DuplicateId", "InvalidTexture"]

# core
from . import decode
from . import errors
from . import pixels
from . import textures
# base classes / utils
from .textures import Size, Texture, TextureFormat, TextureMeta
from .errors import (
    TexpackError, MalformedContainer, UnknownFormat,
    MissingMetadata, MalformedMetadata,
    UnsupportedDimensions, DuplicateId, InvalidTexture)
# formats
from .textures import Tpg, parse_container, write_container
from .textures import assemble_from_directory, emit_to_directory
