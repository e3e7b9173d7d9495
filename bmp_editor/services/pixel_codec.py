"""Кодек пиксельных данных: строки с выравниванием, порядок снизу вверх, каналы BGR.

В памяти сетка хранится сверху вниз в порядке каналов R, G, B, поэтому
все преобразования работают с привычной ориентацией.
"""
from __future__ import annotations

from typing import List

import numpy as np

from bmp_editor.models.bitmap_model import BYTES_PER_PIXEL, empty_grid, row_padding
from bmp_editor.services.byte_channel import ByteCursor


def read_pixels(cursor: ByteCursor, width: int, rows: int, top_down: bool = False) -> np.ndarray:
    """Читает `rows` строк по `width` пикселей и возвращает сетку (rows, width, 3).

    Первая строка в файле — нижняя строка изображения (если не `top_down`).
    Байты выравнивания пропускаются без проверки содержимого.

    Raises:
        UnexpectedEndOfInput: если данных меньше, чем требуется.
    """
    padding = row_padding(width)
    line_size = width * BYTES_PER_PIXEL
    if line_size + padding == 0:
        # строки нулевой длины: читать нечего, сетка (rows, 0, 3) не занимает памяти
        return empty_grid(0, rows)
    scanlines: List[np.ndarray] = []
    for _ in range(rows):
        raw = np.frombuffer(cursor.read_exact(line_size), dtype=np.uint8)
        # BGR -> RGB
        scanlines.append(raw.reshape(width, BYTES_PER_PIXEL)[:, ::-1])
        cursor.skip(padding)

    if not scanlines:
        return empty_grid(width, 0)
    if not top_down:
        scanlines.reverse()
    return np.ascontiguousarray(np.stack(scanlines))


def write_pixels(cursor: ByteCursor, pixels: np.ndarray, top_down: bool = False) -> None:
    """Записывает сетку: строки снизу вверх (если не `top_down`), каналы BGR, нулевой паддинг."""
    rows, width = pixels.shape[0], pixels.shape[1]
    pad = bytes(row_padding(width))
    order = range(rows) if top_down else range(rows - 1, -1, -1)
    for row in order:
        # RGB -> BGR
        cursor.write(np.ascontiguousarray(pixels[row, :, ::-1]).tobytes() + pad)
