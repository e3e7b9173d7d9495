"""Общие фикстуры: документы и BMP-байты, собранные вручную через struct."""
from __future__ import annotations

import struct
from typing import List, Sequence, Tuple

import numpy as np
import pytest

from bmp_editor.models.bitmap_model import Document, FileHeader, FormatInfo, calculate_size, row_padding

RGB = Tuple[int, int, int]


def build_bmp(
    rows: Sequence[Sequence[RGB]],
    padding_byte: int = 0,
    trailing: bytes = b"",
    top_down: bool = False,
    **info_overrides,
) -> bytes:
    """Собирает BMP из строк (сверху вниз, RGB) независимо от кодека пакета."""
    height = len(rows)
    width = len(rows[0]) if rows else 0
    pad = row_padding(width)
    info = dict(
        header_size=40, width=width, height=-height if top_down else height, planes=1,
        bits_per_pixel=24, compression=0, image_size=0, x_res=2835, y_res=2835,
        colors_used=0, important_colors=0,
    )
    data_offset = info_overrides.pop("data_offset", 54)
    info.update(info_overrides)
    header = b"BM" + struct.pack("<III", calculate_size(width, height), 0, data_offset)
    info_bytes = struct.pack(
        "<IIiHHIIIIII",
        info["header_size"], info["width"], info["height"], info["planes"],
        info["bits_per_pixel"], info["compression"], info["image_size"],
        info["x_res"], info["y_res"], info["colors_used"], info["important_colors"],
    )
    body = bytearray()
    ordered = rows if top_down else list(reversed(rows))
    for row in ordered:
        for r, g, b in row:
            body += bytes((b, g, r))
        body += bytes([padding_byte]) * pad
    return header + info_bytes + bytes(body) + trailing


def make_document(rows: List[List[RGB]]) -> Document:
    height = len(rows)
    width = len(rows[0]) if rows else 0
    pixels = np.array(rows, dtype=np.uint8).reshape(height, width, 3)
    return Document(
        header=FileHeader(file_size=calculate_size(width, height)),
        info=FormatInfo(width=width, height=height),
        pixels=pixels,
        padding=row_padding(width),
    )


@pytest.fixture
def grid_rows() -> List[List[RGB]]:
    """Сетка 3×2 с различимыми пикселями (сверху вниз)."""
    return [
        [(1, 2, 3), (4, 5, 6), (7, 8, 9)],
        [(10, 11, 12), (13, 14, 15), (16, 17, 18)],
    ]


@pytest.fixture
def doc(grid_rows) -> Document:
    return make_document(grid_rows)


@pytest.fixture
def wide_doc() -> Document:
    """Документ 5×4 с уникальными значениями для проверок геометрии."""
    rows = [[((r * 5 + c) * 3 % 256, (r * 5 + c) * 7 % 256, (r * 5 + c) * 11 % 256) for c in range(5)] for r in range(4)]
    return make_document(rows)
