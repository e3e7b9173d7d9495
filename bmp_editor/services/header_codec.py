"""Чтение и запись 14-байтного заголовка файла и 40-байтного инфо-заголовка."""
from __future__ import annotations

import struct

from bmp_editor.models.bitmap_model import SIGNATURE, FileHeader, FormatInfo
from bmp_editor.services.byte_channel import ByteCursor

# Сигнатура читается как big-endian, все остальные поля little-endian.
_SIGNATURE = struct.Struct(">H")
_FILE_HEADER_TAIL = struct.Struct("<III")
# size, width, height (со знаком), planes, bpp, compression, image_size,
# x_res, y_res, colors_used, important_colors
_INFO_HEADER = struct.Struct("<IIiHHIIIIII")


def read_file_header(cursor: ByteCursor) -> FileHeader:
    (signature,) = _SIGNATURE.unpack(cursor.read_exact(_SIGNATURE.size))
    file_size, reserved, data_offset = _FILE_HEADER_TAIL.unpack(
        cursor.read_exact(_FILE_HEADER_TAIL.size)
    )
    return FileHeader(
        signature=signature,
        file_size=file_size,
        reserved=reserved,
        data_offset=data_offset,
    )


def read_format_info(cursor: ByteCursor) -> FormatInfo:
    (
        header_size,
        width,
        height,
        planes,
        bits_per_pixel,
        compression,
        image_size,
        x_resolution,
        y_resolution,
        colors_used,
        important_colors,
    ) = _INFO_HEADER.unpack(cursor.read_exact(_INFO_HEADER.size))
    return FormatInfo(
        header_size=header_size,
        width=width,
        height=height,
        planes=planes,
        bits_per_pixel=bits_per_pixel,
        compression=compression,
        image_size=image_size,
        x_resolution=x_resolution,
        y_resolution=y_resolution,
        colors_used=colors_used,
        important_colors=important_colors,
    )


def write_file_header(cursor: ByteCursor, header: FileHeader) -> None:
    # Без сдвигов: байты "BM" уже в нужном порядке.
    cursor.write(SIGNATURE)
    cursor.write(_FILE_HEADER_TAIL.pack(header.file_size, header.reserved, header.data_offset))


def write_format_info(cursor: ByteCursor, info: FormatInfo) -> None:
    cursor.write(
        _INFO_HEADER.pack(
            info.header_size,
            info.width,
            info.height,
            info.planes,
            info.bits_per_pixel,
            info.compression,
            info.image_size,
            info.x_resolution,
            info.y_resolution,
            info.colors_used,
            info.important_colors,
        )
    )
