"""Чтение и запись BMP-документов: потоки, байты и файлы на диске.

Принципы:
- SRP: сервис собирает документ из кодеков заголовков и пикселей, но не изменяет его.
- Пиксели не читаются, пока заголовки не прошли проверку совместимости.
- Файл закрывается на любом пути выхода (`open_channel`).
"""
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import BinaryIO

import numpy as np

from bmp_editor.models.bitmap_model import (
    BYTES_PER_PIXEL,
    Document,
    FileHeader,
    FormatInfo,
    Pixel,
    calculate_size,
    row_padding,
)
from bmp_editor.services.byte_channel import ByteCursor, open_channel
from bmp_editor.services.compat_validator import ensure_compatible
from bmp_editor.services.header_codec import (
    read_file_header,
    read_format_info,
    write_file_header,
    write_format_info,
)
from bmp_editor.services.pixel_codec import read_pixels, write_pixels

__all__ = [
    "BitmapService",
    "calculate_size",
    "decode",
    "decode_bytes",
    "encode",
    "encode_bytes",
    "new_document",
    "row_padding",
]

logger = logging.getLogger(__name__)


def _decode_cursor(cursor: ByteCursor) -> Document:
    header = read_file_header(cursor)
    info = read_format_info(cursor)
    ensure_compatible(header, info)
    pixels = read_pixels(cursor, info.width, info.rows, top_down=info.top_down)
    logger.debug("Decoded %dx%d bitmap (top_down=%s)", info.width, info.rows, info.top_down)
    return Document(header=header, info=info, pixels=pixels, padding=row_padding(info.width))


def _encode_cursor(document: Document, cursor: ByteCursor) -> None:
    expected = (document.info.rows, document.info.width, BYTES_PER_PIXEL)
    if document.pixels.shape != expected:
        raise ValueError(
            f"Pixel grid shape {document.pixels.shape} does not match header dimensions {expected}"
        )
    write_file_header(cursor, document.header)
    write_format_info(cursor, document.info)
    write_pixels(cursor, document.pixels.astype(np.uint8, copy=False), top_down=document.info.top_down)
    logger.debug("Encoded %dx%d bitmap", document.info.width, document.info.rows)


def decode(source: BinaryIO) -> Document:
    """Читает документ из бинарного потока.

    Raises:
        UnexpectedEndOfInput: поток закончился раньше, чем нужно.
        ChannelIOError: ошибка чтения.
        IncompatibleFormat: заголовки не проходят проверки совместимости.
    """
    return _decode_cursor(ByteCursor(source))


def decode_bytes(data: bytes) -> Document:
    return decode(io.BytesIO(data))


def encode(document: Document, sink: BinaryIO) -> None:
    """Записывает документ в бинарный поток как есть, без пересчёта метаданных."""
    _encode_cursor(document, ByteCursor(sink))


def encode_bytes(document: Document) -> bytes:
    buffer = io.BytesIO()
    encode(document, buffer)
    return buffer.getvalue()


def new_document(width: int, height: int, fill: Pixel = Pixel(0, 0, 0)) -> Document:
    """Создаёт согласованный документ `width` × `height`, залитый цветом `fill`."""
    if width < 0 or height < 0:
        raise ValueError(f"Image dimensions must be non-negative, got {width}x{height}")
    pixels = np.empty((height, width, BYTES_PER_PIXEL), dtype=np.uint8)
    pixels[:, :] = fill
    return Document(
        header=FileHeader(file_size=calculate_size(width, height)),
        info=FormatInfo(width=width, height=height),
        pixels=pixels,
        padding=row_padding(width),
    )


class BitmapService:
    def load(self, file_path: str | Path) -> Document:
        """Загружает BMP-файл с диска.

        Raises:
            ChannelOpenError: файл не удалось открыть.
            UnexpectedEndOfInput, ChannelIOError, IncompatibleFormat: см. `decode`.
        """
        path = Path(file_path)
        with open_channel(path, "rb") as cursor:
            document = _decode_cursor(cursor)
        logger.info("Loaded %s (%d x %d px)", path, document.width, document.height)
        return document

    def save(self, document: Document, file_path: str | Path) -> None:
        path = Path(file_path)
        with open_channel(path, "wb") as cursor:
            _encode_cursor(document, cursor)
        logger.info("Saved %s (%d bytes declared)", path, document.header.file_size)
