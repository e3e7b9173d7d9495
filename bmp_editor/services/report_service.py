"""Текстовый отчёт по документу: метаданные заголовков и построчный список пикселей."""
from __future__ import annotations

from typing import List

from bmp_editor.models.bitmap_model import Document

_DIVIDER = "=" * 40


def _base_line(hex_base: bool) -> str:
    return "Number base: hexadecimal" if hex_base else "Number base: decimal"


def _num(value: int, hex_base: bool) -> str:
    return f"{value:x}" if hex_base else str(value)


def format_metadata(doc: Document, hex_base: bool = False) -> str:
    """Возвращает поля заголовка и инфо-заголовка в читаемом виде."""
    h, i = doc.header, doc.info
    fields = [
        ("File Size (Bytes)", h.file_size),
        ("Reserved Flags", h.reserved),
        ("Data Offset (Bytes)", h.data_offset),
    ]
    info_fields = [
        ("Info Header Size (Bytes)", i.header_size),
        ("Image Width (Pixels)", i.width),
        ("Image Height (Pixels)", i.height),
        ("Planes", i.planes),
        ("Bits Per Pixel", i.bits_per_pixel),
        ("Compression Type", i.compression),
        ("Compressed Image Size (Bytes)", i.image_size),
        ("Horizontal Resolution (Pixels/Meter)", i.x_resolution),
        ("Vertical Resolution (Pixels/Meter)", i.y_resolution),
        ("Number of Actually Used Colors", i.colors_used),
        ("Number of Important Colors", i.important_colors),
    ]
    lines: List[str] = [_base_line(hex_base), "", "HEADER", _DIVIDER]
    # signature is always shown in hex
    lines.append(f"Signature (hexadecimal): 0x{h.signature:x}")
    lines.extend(f"{label}: {_num(value, hex_base)}" for label, value in fields)
    lines.extend(["", "INFO HEADER", _DIVIDER])
    lines.extend(f"{label}: {_num(value, hex_base)}" for label, value in info_fields)
    return "\n".join(lines) + "\n"


def format_pixels(doc: Document, hex_base: bool = False) -> str:
    """
    Построчный список пикселей (R/G/B) с числом байт выравнивания.
    Для больших изображений вывод очень длинный.
    """
    lines: List[str] = [_base_line(hex_base), ""]
    for row in range(doc.height):
        lines.append(f"Row {row} (R/G/B)")
        lines.append("=" * 30)
        for col in range(doc.width):
            r, g, b = doc.pixel(row, col)
            lines.append(f"Col {col}:\t\t{_num(r, hex_base)} {_num(g, hex_base)} {_num(b, hex_base)}")
        # 0-3 bytes, same in both bases
        lines.append(f"Padding Bytes: {doc.padding}")
        lines.append("")
    return "\n".join(lines)
