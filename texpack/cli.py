"""
texpack command line

unpack .tpg texture packages into folders of .png + .json files,
and pack those folders back into .tpg files.
"""
import argparse
import logging
import os
import sys
from typing import List

from .errors import TexpackError
from .textures import TextureFormat, Tpg
from .textures import assemble_from_directory, emit_to_directory


log = logging.getLogger(__name__)

container_ext = ".tpg"


def find_containers(paths: List[str]) -> List[str]:
    """expand folders into every .tpg file inside (recursive)"""
    out = list()
    for path in paths:
        if not os.path.isdir(path):
            out.append(path)
            continue
        for folder, subfolders, filenames in os.walk(path):
            subfolders.sort()
            out.extend(
                os.path.join(folder, filename)
                for filename in sorted(filenames)
                if os.path.splitext(filename)[1].lower() == container_ext)
    return out


def unpack(path: str) -> str:
    folder = os.path.splitext(path)[0]
    package = Tpg.from_file(path)
    log.debug("%r: %r", package, package.textures)
    emit_to_directory(package, folder)
    return folder


def pack(folder: str, output: str = None, format_: TextureFormat = None) -> str:
    if output is None:
        output = os.path.normpath(folder) + container_ext
    package = assemble_from_directory(folder)
    if format_ is not None:
        package.override_format(format_)
    package.save_as(output)
    return output


def cmd_unpack(args) -> int:
    paths = find_containers(args.paths)
    if len(paths) == 0:
        log.warning("no %s files found", container_ext)
    failed = 0
    for path in paths:
        log.info("%s", path)
        try:
            folder = unpack(path)
        except (TexpackError, OSError) as exc:
            log.error("%s: %s", path, exc)
            failed += 1
            continue
        log.info("-> %s", folder)
    if failed > 0:
        log.error("%d of %d packages failed", failed, len(paths))
        return 1
    return 0


def cmd_pack(args) -> int:
    format_ = None if args.format is None else TextureFormat[args.format]
    if args.output is not None and len(args.folders) > 1:
        log.error("--output can only be used with a single folder")
        return 2
    failed = 0
    for folder in args.folders:
        log.info("%s", folder)
        try:
            output = pack(folder, args.output, format_)
        except (TexpackError, OSError) as exc:
            log.error("%s: %s", folder, exc)
            failed += 1
            continue
        log.info("-> %s", output)
    if failed > 0:
        log.error("%d of %d folders failed", failed, len(args.folders))
        return 1
    return 0


def main(argv: List[str] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="texpack",
        description="Convert .tpg texture packages to & from folders of images",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  texpack unpack game/data/
  texpack unpack title.tpg
  texpack pack title/ --output patched/title.tpg --format R5G6B5
        """)
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every texture")

    subparsers = parser.add_subparsers(dest="command", required=True)

    unpack_parser = subparsers.add_parser(
        "unpack",
        help="Extract .tpg files into folders of .png + .json")
    unpack_parser.add_argument("paths", nargs="+", help=".tpg files or folders to search")
    unpack_parser.set_defaults(func=cmd_unpack)

    pack_parser = subparsers.add_parser(
        "pack",
        help="Build .tpg files from folders of .png + .json")
    pack_parser.add_argument("folders", nargs="+", help="Folders made by unpack")
    pack_parser.add_argument("--output", "-o", help="Output .tpg file (default: FOLDER.tpg)")
    pack_parser.add_argument(
        "--format", "-f",
        choices=[format_.name for format_ in TextureFormat],
        help="Re-encode every texture in this pixel format")
    pack_parser.set_defaults(func=cmd_pack)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s")
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
