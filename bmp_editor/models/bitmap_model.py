"""Модели данных BMP-документа.

Принципы:
- SRP: только структура данных и производные величины (паддинг, размер файла).
- Документ изменяется целиком: заголовок, инфо-заголовок, сетка пикселей и паддинг.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np

SIGNATURE = b"BM"
SIGNATURE_VALUE = 0x424D
FILE_HEADER_SIZE = 14
INFO_HEADER_SIZE = 40
TOTAL_HEADER_SIZE = FILE_HEADER_SIZE + INFO_HEADER_SIZE
BITS_PER_PIXEL = 24
BYTES_PER_PIXEL = 3
PLANES = 1
COMPRESSION_NONE = 0
ROW_ALIGNMENT = 4


def row_padding(width: int) -> int:
    """Количество байт выравнивания в конце строки (0..3) для заданной ширины."""
    return (ROW_ALIGNMENT - (BYTES_PER_PIXEL * width) % ROW_ALIGNMENT) % ROW_ALIGNMENT


def calculate_size(width: int, height: int) -> int:
    """Полный размер файла в байтах для изображения `width` × `height`."""
    return TOTAL_HEADER_SIZE + height * (BYTES_PER_PIXEL * width + row_padding(width))


class Pixel(NamedTuple):
    red: int
    green: int
    blue: int


@dataclass
class FileHeader:
    """14-байтный заголовок файла.

    Fields:
        signature: Сигнатура как big-endian число (0x424D для "BM").
        file_size: Полный размер файла, байт.
        reserved: Зарезервировано, передаётся без изменений.
        data_offset: Смещение начала пиксельных данных от начала файла.
    """
    signature: int = SIGNATURE_VALUE
    file_size: int = TOTAL_HEADER_SIZE
    reserved: int = 0
    data_offset: int = TOTAL_HEADER_SIZE


@dataclass
class FormatInfo:
    """40-байтный инфо-заголовок (BITMAPINFOHEADER).

    `height` хранится со знаком: отрицательное значение означает,
    что строки лежат в файле сверху вниз.
    """
    header_size: int = INFO_HEADER_SIZE
    width: int = 0
    height: int = 0
    planes: int = PLANES
    bits_per_pixel: int = BITS_PER_PIXEL
    compression: int = COMPRESSION_NONE
    image_size: int = 0
    x_resolution: int = 0
    y_resolution: int = 0
    colors_used: int = 0
    important_colors: int = 0

    @property
    def rows(self) -> int:
        return abs(self.height)

    @property
    def top_down(self) -> bool:
        return self.height < 0


def empty_grid(width: int, height: int) -> np.ndarray:
    return np.zeros((height, width, BYTES_PER_PIXEL), dtype=np.uint8)


@dataclass(eq=False)
class Document:
    """BMP-документ в памяти.

    Fields:
        header: Заголовок файла.
        info: Инфо-заголовок.
        pixels: Массив `uint8` формы (строки, ширина, 3), каналы R, G, B;
            строка 0 — верхняя строка изображения.
        padding: Кэшированное значение `row_padding(info.width)`.
    """
    header: FileHeader = field(default_factory=FileHeader)
    info: FormatInfo = field(default_factory=FormatInfo)
    pixels: np.ndarray = field(default_factory=lambda: empty_grid(0, 0))
    padding: int = 0

    @property
    def width(self) -> int:
        return self.info.width

    @property
    def height(self) -> int:
        return self.info.rows

    def pixel(self, row: int, col: int) -> Pixel:
        r, g, b = self.pixels[row, col]
        return Pixel(int(r), int(g), int(b))

    def set_pixel(self, row: int, col: int, value: Pixel) -> None:
        self.pixels[row, col] = value

    def is_consistent(self) -> bool:
        """Проверяет, что метаданные соответствуют форме сетки пикселей."""
        return (
            self.pixels.shape == (self.info.rows, self.info.width, BYTES_PER_PIXEL)
            and self.padding == row_padding(self.info.width)
            and self.header.file_size == calculate_size(self.info.width, self.info.rows)
        )

    def copy(self) -> "Document":
        return Document(
            header=copy.copy(self.header),
            info=copy.copy(self.info),
            pixels=self.pixels.copy(),
            padding=self.padding,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return (
            self.header == other.header
            and self.info == other.info
            and self.padding == other.padding
            and np.array_equal(self.pixels, other.pixels)
        )
