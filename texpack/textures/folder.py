"""texture package <-> folder of .png images w/ .json metadata sidecars"""
import collections
import json
import logging
import os

import numpy as np
from PIL import Image

from ..errors import (
    DuplicateId, MalformedMetadata, MissingMetadata, UnsupportedDimensions)
from . import base
from . import tpg


log = logging.getLogger(__name__)

image_ext = ".png"
meta_ext = ".json"


def stem_for(meta: base.TextureMeta) -> str:
    return f"{meta.id:08x}"


def read_meta(path: str) -> base.TextureMeta:
    with open(path, "r", encoding="utf-8") as json_file:
        try:
            meta_json = json.load(json_file)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise MalformedMetadata(f"{path}: {exc}") from exc
    try:
        return base.TextureMeta.from_json(meta_json)
    except MalformedMetadata as exc:
        raise MalformedMetadata(f"{path}: {exc}") from exc


def read_image(path: str) -> np.array:
    with Image.open(path) as image:
        return np.array(image.convert("RGBA"), dtype=np.uint8)


# NOTE: filenames are sorted, which orders textures by id for our own output
# -- the original package order is not recoverable from a folder
def assemble_from_directory(folder: str) -> tpg.Tpg:
    out = tpg.Tpg()
    for filename in sorted(os.listdir(folder)):
        path = os.path.join(folder, filename)
        stem, ext = os.path.splitext(filename)
        if os.path.isdir(path) or ext.lower() != image_ext:
            continue
        meta_path = os.path.join(folder, stem + meta_ext)
        if not os.path.isfile(meta_path):
            raise MissingMetadata(f"missing metadata for texture '{path}'")
        meta = read_meta(meta_path)
        texture = base.Texture(meta, read_image(path))
        log.debug("read %r from '%s'", texture, path)
        out.textures.append(texture)
    out.folder, out.filename = os.path.split(os.path.normpath(folder))
    out.filename += f".{tpg.Tpg.extension}"
    return out


def emit_to_directory(package: tpg.Tpg, folder: str):
    for texture in package.textures:
        texture.meta.validate()
    ids = collections.Counter(texture.meta.id for texture in package.textures)
    duplicates = sorted(id_ for id_, count in ids.items() if count > 1)
    if len(duplicates) > 0:
        stems = ", ".join(f"{id_:08x}" for id_ in duplicates)
        raise DuplicateId(f"texture ids would overwrite each other: {stems}")
    empty = [texture for texture in package.textures if 0 in texture.size]
    if len(empty) > 0:
        stems = ", ".join(stem_for(texture.meta) for texture in empty)
        raise UnsupportedDimensions(f"cannot save empty images: {stems}")
    os.makedirs(folder, exist_ok=True)
    for texture in package.textures:
        stem = os.path.join(folder, stem_for(texture.meta))
        image = Image.frombytes("RGBA", texture.size, texture.pixels.tobytes())
        image.save(stem + image_ext)
        with open(stem + meta_ext, "w", encoding="utf-8") as json_file:
            json.dump(texture.meta.as_json, json_file, indent=2)
        log.debug("wrote %r to '%s'", texture, stem + image_ext)
