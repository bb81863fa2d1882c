__all__ = [
    "base", "folder", "tpg",
    "Size", "Texture", "TextureFormat", "TextureMeta", "Tpg",
    "assemble_from_directory", "emit_to_directory",
    "parse_container", "write_container"]


from . import base
from . import folder
from . import tpg

from .base import Size, Texture, TextureFormat, TextureMeta
from .folder import assemble_from_directory, emit_to_directory
from .tpg import Tpg, parse_container, write_container
