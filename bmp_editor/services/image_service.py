"""Мост между BMP-документом и Pillow.

Принципы:
- SRP: только конвертация; чтение и запись файлов — в `BitmapService`.
- Документ из Pillow всегда согласован: размеры, паддинг и размер файла пересчитаны.
"""
from __future__ import annotations

import numpy as np
from PIL import Image

from bmp_editor.models.bitmap_model import Document, FileHeader, FormatInfo, calculate_size, row_padding


class ImageService:
    def to_pil(self, doc: Document) -> Image.Image:
        """Возвращает копию сетки пикселей как `PIL.Image.Image` в режиме RGB."""
        return Image.fromarray(np.ascontiguousarray(doc.pixels, dtype=np.uint8))

    def from_pil(self, image: Image.Image) -> Document:
        """Строит документ из изображения Pillow (приводится к RGB).

        Raises:
            ValueError: если у изображения нулевая площадь.
        """
        rgb = image if image.mode == "RGB" else image.convert("RGB")
        width, height = rgb.size
        if width == 0 or height == 0:
            raise ValueError(f"Изображение не содержит пикселей: {width}x{height}")
        pixels = np.array(rgb, dtype=np.uint8)
        return Document(
            header=FileHeader(file_size=calculate_size(width, height)),
            info=FormatInfo(width=width, height=height),
            pixels=pixels,
            padding=row_padding(width),
        )
