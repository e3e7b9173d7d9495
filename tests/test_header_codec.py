"""
Заголовки: порядок байт полей и точный размер 54 байта.

Run from project root: pytest tests/test_header_codec.py -v
"""
import io
import struct

import pytest

from bmp_editor.models.bitmap_model import FileHeader, FormatInfo
from bmp_editor.models.errors import ErrorKind, UnexpectedEndOfInput
from bmp_editor.services.byte_channel import ByteCursor
from bmp_editor.services.header_codec import (
    read_file_header,
    read_format_info,
    write_file_header,
    write_format_info,
)

from conftest import build_bmp


def test_signature_read_big_endian():
    """Байты 'B','M' дают 0x424D, а не 0x4D42."""
    header = read_file_header(ByteCursor(io.BytesIO(build_bmp([[(0, 0, 0)]]))))
    assert header.signature == 0x424D


def test_file_header_fields_little_endian():
    data = b"BM" + struct.pack("<III", 0x01020304, 7, 54)
    header = read_file_header(ByteCursor(io.BytesIO(data)))
    assert header == FileHeader(signature=0x424D, file_size=0x01020304, reserved=7, data_offset=54)


def test_info_header_fields():
    cursor = ByteCursor(io.BytesIO(build_bmp([[(0, 0, 0)] * 3] * 2, image_size=24)))
    read_file_header(cursor)
    info = read_format_info(cursor)
    assert (info.header_size, info.width, info.height) == (40, 3, 2)
    assert (info.planes, info.bits_per_pixel, info.compression) == (1, 24, 0)
    assert info.image_size == 24
    assert (info.x_resolution, info.y_resolution) == (2835, 2835)
    assert info.top_down is False


def test_negative_height_is_top_down():
    cursor = ByteCursor(io.BytesIO(build_bmp([[(0, 0, 0)]] * 3, top_down=True)))
    read_file_header(cursor)
    info = read_format_info(cursor)
    assert info.height == -3
    assert info.rows == 3
    assert info.top_down is True


def test_write_is_54_bytes_and_mirrors_read():
    header = FileHeader(file_size=1234, reserved=5)
    info = FormatInfo(width=17, height=-9, image_size=99, x_resolution=1, y_resolution=2)
    buffer = io.BytesIO()
    cursor = ByteCursor(buffer)
    write_file_header(cursor, header)
    write_format_info(cursor, info)

    raw = buffer.getvalue()
    assert len(raw) == 54
    assert raw[:2] == b"BM"

    back = ByteCursor(io.BytesIO(raw))
    assert read_file_header(back) == header
    assert read_format_info(back) == info


@pytest.mark.parametrize("length", [0, 1, 10, 14, 30, 53])
def test_short_header_is_unexpected_end(length):
    data = build_bmp([[(0, 0, 0)]])[:length]
    cursor = ByteCursor(io.BytesIO(data))
    with pytest.raises(UnexpectedEndOfInput) as exc_info:
        read_file_header(cursor)
        read_format_info(cursor)
    assert exc_info.value.kind is ErrorKind.UNEXPECTED_END


def test_struct_layouts_match_header_sizes():
    """Форматы struct дают ровно 14 и 40 байт."""
    from bmp_editor.models.bitmap_model import FILE_HEADER_SIZE, INFO_HEADER_SIZE
    from bmp_editor.services import header_codec

    assert header_codec._SIGNATURE.size + header_codec._FILE_HEADER_TAIL.size == FILE_HEADER_SIZE
    assert header_codec._INFO_HEADER.size == INFO_HEADER_SIZE
