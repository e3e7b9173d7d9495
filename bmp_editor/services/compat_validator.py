"""Проверка совместимости: поддерживаются только 24-битные несжатые файлы без палитры.

Размеры `image_size`/`file_size` намеренно не сверяются с шириной и высотой:
некоторые редакторы дописывают в конец файла нулевые байты.
"""
from __future__ import annotations

from typing import Callable, List, Tuple

from bmp_editor.models.bitmap_model import (
    BITS_PER_PIXEL,
    COMPRESSION_NONE,
    INFO_HEADER_SIZE,
    PLANES,
    SIGNATURE_VALUE,
    TOTAL_HEADER_SIZE,
    FileHeader,
    FormatInfo,
)
from bmp_editor.models.errors import IncompatibleFormat

_Check = Tuple[str, Callable[[FileHeader, FormatInfo], bool]]

_CHECKS: List[_Check] = [
    ("signature must be 'BM'", lambda h, i: h.signature == SIGNATURE_VALUE),
    (f"data offset must be {TOTAL_HEADER_SIZE}", lambda h, i: h.data_offset == TOTAL_HEADER_SIZE),
    (f"info header size must be {INFO_HEADER_SIZE}", lambda h, i: i.header_size == INFO_HEADER_SIZE),
    (f"planes must be {PLANES}", lambda h, i: i.planes == PLANES),
    ("compression must be 0 (uncompressed)", lambda h, i: i.compression == COMPRESSION_NONE),
    (f"bits per pixel must be {BITS_PER_PIXEL}", lambda h, i: i.bits_per_pixel == BITS_PER_PIXEL),
    ("colors used must be 0 (no palette)", lambda h, i: i.colors_used == 0),
    ("important colors must be 0", lambda h, i: i.important_colors == 0),
]


def check_compatibility(header: FileHeader, info: FormatInfo) -> List[str]:
    """Возвращает описания всех не пройденных проверок (пустой список — файл совместим)."""
    return [description for description, passes in _CHECKS if not passes(header, info)]


def is_compatible(header: FileHeader, info: FormatInfo) -> bool:
    return not check_compatibility(header, info)


def ensure_compatible(header: FileHeader, info: FormatInfo) -> None:
    failures = check_compatibility(header, info)
    if failures:
        raise IncompatibleFormat(failures)
