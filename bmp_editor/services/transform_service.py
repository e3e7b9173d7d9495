from __future__ import annotations

import logging
from typing import Callable, Dict

import numpy as np

from bmp_editor.models.bitmap_model import Document, calculate_size, row_padding
from bmp_editor.models.errors import OutOfRange

logger = logging.getLogger(__name__)

COLOR_MAX = 255
SEPIA_MAX = 255.0


class TransformService:
    """Преобразования документа на месте.

    Геометрические операции обновляют ширину, высоту, паддинг и размер файла
    одновременно; цветовые операции размеров не меняют.
    """

    # ---------- Вспомогательные функции ----------
    def _set_dimensions(self, doc: Document, width: int, rows: int) -> None:
        """Пересчитывает метаданные под новую форму сетки (ориентация сохраняется)."""
        sign = -1 if doc.info.top_down else 1
        doc.info.width = width
        doc.info.height = sign * rows
        doc.padding = row_padding(width)
        doc.header.file_size = calculate_size(width, rows)

    def _channels(self, doc: Document):
        """Возвращает каналы R, G, B как int32, чтобы избежать переполнения uint8."""
        arr = doc.pixels.astype(np.int32)
        return arr[..., 0], arr[..., 1], arr[..., 2]

    # ---------- Геометрия ----------
    def flip_horizontal(self, doc: Document) -> None:
        """Отражение по горизонтали: порядок пикселей в каждой строке меняется на обратный."""
        doc.pixels = np.ascontiguousarray(doc.pixels[:, ::-1])

    def flip_vertical(self, doc: Document) -> None:
        """Отражение по вертикали: порядок строк меняется на обратный."""
        doc.pixels = np.ascontiguousarray(doc.pixels[::-1])

    def transpose(self, doc: Document) -> None:
        """
        Транспонирование: new[c][r] = old[r][c].
        Ширина и высота меняются местами, паддинг и размер файла пересчитываются.
        """
        rows, width = doc.height, doc.width
        doc.pixels = np.ascontiguousarray(np.transpose(doc.pixels, (1, 0, 2)))
        self._set_dimensions(doc, width=rows, rows=width)

    def rotate90_left(self, doc: Document) -> None:
        """Поворот на 90° против часовой стрелки."""
        self.transpose(doc)
        self.flip_vertical(doc)

    def rotate90_right(self, doc: Document) -> None:
        """Поворот на 90° по часовой стрелке."""
        self.transpose(doc)
        self.flip_horizontal(doc)

    def crop(self, doc: Document, x_begin: int, y_begin: int, x_end: int, y_end: int) -> None:
        """
        Обрезка по границам [x_begin, x_end], [y_begin, y_end].

        Границы проверяются как включительные, но новая ширина равна
        `x_end - x_begin`, а высота `y_end - y_begin`: последний столбец и
        последняя строка диапазона в результат не попадают. Такое поведение
        сохранено для совместимости с ранее сохранёнными файлами.

        Raises:
            OutOfRange: при неверных границах; документ при этом не меняется.
        """
        width, height = doc.width, doc.height
        if not (0 <= x_begin < width and 0 <= x_end < width):
            raise OutOfRange("x", f"x_begin and x_end must be within [0, {width})")
        if not x_begin <= x_end:
            raise OutOfRange("x_begin", "x_begin must be smaller than or equal to x_end")
        if not (0 <= y_begin < height and 0 <= y_end < height):
            raise OutOfRange("y", f"y_begin and y_end must be within [0, {height})")
        if not y_begin <= y_end:
            raise OutOfRange("y_begin", "y_begin must be smaller than or equal to y_end")

        new_width = x_end - x_begin
        new_height = y_end - y_begin
        doc.pixels = doc.pixels[y_begin:y_begin + new_height, x_begin:x_begin + new_width].copy()
        self._set_dimensions(doc, width=new_width, rows=new_height)
        logger.debug("Cropped to %dx%d from (%d, %d)", new_width, new_height, x_begin, y_begin)

    # ---------- Цвет ----------
    def invert_colors(self, doc: Document) -> None:
        doc.pixels = (COLOR_MAX - doc.pixels).astype(np.uint8)

    def grayscale(self, doc: Document) -> None:
        """
        Оттенки серого методом среднего без переполнения:
        avg = r/3 + g/3 + b/3 + (r%3 + g%3 + b%3)/3, деление целочисленное.
        """
        r, g, b = self._channels(doc)
        avg = r // 3 + g // 3 + b // 3 + (r % 3 + g % 3 + b % 3) // 3
        doc.pixels = np.repeat(avg.astype(np.uint8)[..., np.newaxis], 3, axis=2)

    def sepia(self, doc: Document) -> None:
        """
        Сепия по коэффициентам Microsoft.
        Значения считаются в float64, ограничиваются сверху 255.0 и усекаются до uint8.
        """
        arr = doc.pixels.astype(np.float64)
        r, g, b = arr[..., 0], arr[..., 1], arr[..., 2]
        new_r = 0.393 * r + 0.769 * g + 0.189 * b
        new_g = 0.349 * r + 0.686 * g + 0.168 * b
        new_b = 0.272 * r + 0.534 * g + 0.131 * b
        out = np.stack([new_r, new_g, new_b], axis=-1)
        doc.pixels = np.minimum(out, SEPIA_MAX).astype(np.uint8)

    def isolate_red(self, doc: Document) -> None:
        doc.pixels[..., 1] = 0
        doc.pixels[..., 2] = 0

    def isolate_green(self, doc: Document) -> None:
        doc.pixels[..., 0] = 0
        doc.pixels[..., 2] = 0

    def isolate_blue(self, doc: Document) -> None:
        doc.pixels[..., 0] = 0
        doc.pixels[..., 1] = 0


_service = TransformService()

# Преобразования без параметров, доступные по имени (CLI, UI).
TRANSFORMS: Dict[str, Callable[[Document], None]] = {
    "invert": _service.invert_colors,
    "grayscale": _service.grayscale,
    "sepia": _service.sepia,
    "flip-h": _service.flip_horizontal,
    "flip-v": _service.flip_vertical,
    "transpose": _service.transpose,
    "rotate-left": _service.rotate90_left,
    "rotate-right": _service.rotate90_right,
    "red": _service.isolate_red,
    "green": _service.isolate_green,
    "blue": _service.isolate_blue,
}


def apply(doc: Document, name: str) -> None:
    """Применяет преобразование `name` из `TRANSFORMS`.

    Raises:
        KeyError: если такого преобразования нет.
    """
    try:
        transform = TRANSFORMS[name]
    except KeyError:
        raise KeyError(f"Unknown transform: {name}") from None
    logger.debug("Applying %s", name)
    transform(doc)
