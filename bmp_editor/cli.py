"""
Командная строка для просмотра и правки 24-битных BMP.

Примеры:
  bmp-editor info photo.bmp --hex
  bmp-editor edit photo.bmp out.bmp --op rotate-left
  bmp-editor crop photo.bmp out.bmp 10 10 100 80
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Dict, List, Optional

from bmp_editor.models.errors import BitmapError, ErrorKind
from bmp_editor.services.bitmap_service import BitmapService
from bmp_editor.services.report_service import format_metadata, format_pixels
from bmp_editor.services.transform_service import TRANSFORMS, TransformService, apply
from bmp_editor.utils.config import EditorConfig, load_config

log = logging.getLogger("bmp_editor")

EXIT_CODES: Dict[ErrorKind, int] = {
    ErrorKind.CHANNEL_OPEN: 2,
    ErrorKind.UNEXPECTED_END: 3,
    ErrorKind.CHANNEL_IO: 4,
    ErrorKind.INCOMPATIBLE_FORMAT: 5,
    ErrorKind.OUT_OF_RANGE: 6,
}


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="bmp-editor", description="Read, inspect and edit 24-bit BMP images.")
    ap.add_argument("--config", help="YAML config file")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = ap.add_subparsers(dest="command", required=True)

    info = sub.add_parser("info", help="print header metadata")
    info.add_argument("src", help="source .bmp")
    info.add_argument("--hex", action="store_true", default=None, help="hexadecimal numbers")
    info.add_argument("--pixels", action="store_true", help="also list every pixel")

    edit = sub.add_parser("edit", help="apply one transform and save")
    edit.add_argument("src", help="source .bmp")
    edit.add_argument("dst", help="destination .bmp")
    edit.add_argument("--op", required=True, choices=sorted(TRANSFORMS), help="transform to apply")

    crop = sub.add_parser("crop", help="crop and save")
    crop.add_argument("src", help="source .bmp")
    crop.add_argument("dst", help="destination .bmp")
    for name in ("x_begin", "y_begin", "x_end", "y_end"):
        crop.add_argument(name, type=int)
    return ap


def run(args: argparse.Namespace, config: EditorConfig) -> int:
    service = BitmapService()
    doc = service.load(args.src)

    if args.command == "info":
        hex_base = config.hex_dump if args.hex is None else args.hex
        sys.stdout.write(format_metadata(doc, hex_base=hex_base))
        if args.pixels:
            sys.stdout.write("\n" + format_pixels(doc, hex_base=hex_base))
        return 0

    if args.command == "edit":
        apply(doc, args.op)
    else:
        TransformService().crop(doc, args.x_begin, args.y_begin, args.x_end, args.y_end)
    service.save(doc, args.dst)
    print(f"Saved {args.dst} ({doc.width} x {doc.height})")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    level = "DEBUG" if args.verbose else config.log_level
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")

    try:
        return run(args, config)
    except BitmapError as exc:
        log.debug("Failed with %s", exc.kind.value)
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_CODES[exc.kind]


if __name__ == "__main__":
    sys.exit(main())
