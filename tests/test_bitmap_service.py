"""
Кодек целиком: порядок строк, каналы BGR, паддинг, файлы на диске.

Run from project root: pytest tests/test_bitmap_service.py -v
"""
import io

import numpy as np
import pytest

from bmp_editor.models.bitmap_model import Pixel
from bmp_editor.models.errors import ChannelOpenError, ErrorKind, UnexpectedEndOfInput
from bmp_editor.services.bitmap_service import (
    BitmapService,
    calculate_size,
    decode,
    decode_bytes,
    encode,
    encode_bytes,
    new_document,
    row_padding,
)
from bmp_editor.services.byte_channel import open_channel

from conftest import build_bmp, make_document


@pytest.mark.parametrize("width", range(0, 13))
def test_row_padding_aligns_to_four_bytes(width):
    pad = row_padding(width)
    assert 0 <= pad <= 3
    assert (3 * width + pad) % 4 == 0


@pytest.mark.parametrize("width, height", [(0, 0), (1, 1), (2, 3), (3, 2), (4, 4), (5, 7), (640, 480)])
def test_calculate_size(width, height):
    assert calculate_size(width, height) == 54 + height * (3 * width + row_padding(width))


def test_known_padding_values():
    assert [row_padding(w) for w in (1, 2, 3, 4)] == [1, 2, 3, 0]


def test_decode_bottom_up_into_top_down_grid(grid_rows):
    doc = decode_bytes(build_bmp(grid_rows))
    assert (doc.width, doc.height, doc.padding) == (3, 2, 3)
    assert doc.pixel(0, 0) == Pixel(1, 2, 3)
    assert doc.pixel(1, 2) == Pixel(16, 17, 18)
    assert doc.is_consistent()


def test_scanline_bytes_are_bgr_and_bottom_row_first():
    doc = make_document([[(1, 2, 3)], [(4, 5, 6)]])
    raw = encode_bytes(doc)
    # width 1 -> 3 pixel bytes + 1 padding byte per scanline
    assert raw[54:] == bytes([6, 5, 4, 0, 3, 2, 1, 0])
    assert len(raw) == doc.header.file_size


def test_nonzero_padding_ignored_on_read_and_zeroed_on_write(grid_rows):
    doc = decode_bytes(build_bmp(grid_rows, padding_byte=0xAB))
    assert doc == decode_bytes(build_bmp(grid_rows))
    assert encode_bytes(doc) == build_bmp(grid_rows)


def test_trailing_bytes_are_accepted(grid_rows):
    doc = decode_bytes(build_bmp(grid_rows, trailing=b"\x00\x00"))
    assert doc.pixel(1, 0) == Pixel(10, 11, 12)


@pytest.mark.parametrize("cut", [4, 9, 12, 24])
def test_truncated_pixels_raise_unexpected_end(grid_rows, cut):
    data = build_bmp(grid_rows)
    with pytest.raises(UnexpectedEndOfInput) as exc_info:
        decode_bytes(data[:-cut])
    assert exc_info.value.kind is ErrorKind.UNEXPECTED_END


def test_top_down_source_decodes_and_round_trips(grid_rows):
    data = build_bmp(grid_rows, top_down=True)
    doc = decode_bytes(data)
    assert doc.info.top_down
    assert doc.pixel(0, 0) == Pixel(1, 2, 3)
    assert encode_bytes(doc) == data


@pytest.mark.parametrize("width, height", [(1, 1), (2, 2), (3, 5), (4, 1), (5, 3), (7, 2)])
def test_round_trip(width, height):
    rng = np.random.default_rng(width * 31 + height)
    doc = new_document(width, height)
    doc.pixels = rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)
    doc.info.x_resolution = 3780
    doc.header.reserved = 42

    buffer = io.BytesIO()
    encode(doc, buffer)
    buffer.seek(0)
    assert decode(buffer) == doc


def test_new_document_is_filled_and_consistent():
    doc = new_document(3, 2, fill=Pixel(9, 8, 7))
    assert doc.is_consistent()
    assert doc.pixel(1, 2) == Pixel(9, 8, 7)
    assert doc.header.file_size == 54 + 2 * 12


def test_new_document_rejects_negative_size():
    with pytest.raises(ValueError):
        new_document(-1, 3)


def test_encode_rejects_inconsistent_document(doc):
    doc.info.width = 4
    with pytest.raises(ValueError):
        encode_bytes(doc)


def test_load_and_save(tmp_path, grid_rows):
    src = tmp_path / "in.bmp"
    src.write_bytes(build_bmp(grid_rows))
    service = BitmapService()

    doc = service.load(src)
    dst = tmp_path / "out.bmp"
    service.save(doc, dst)
    assert dst.read_bytes() == src.read_bytes()


def test_load_missing_file(tmp_path):
    with pytest.raises(ChannelOpenError) as exc_info:
        BitmapService().load(tmp_path / "missing.bmp")
    assert exc_info.value.kind is ErrorKind.CHANNEL_OPEN


def test_save_into_missing_directory(tmp_path, doc):
    with pytest.raises(ChannelOpenError):
        BitmapService().save(doc, tmp_path / "no" / "such" / "dir.bmp")


def test_channel_closed_when_body_raises(tmp_path):
    path = tmp_path / "x.bmp"
    path.write_bytes(b"BM")
    opened = {}
    with pytest.raises(UnexpectedEndOfInput):
        with open_channel(path) as cursor:
            opened["stream"] = cursor._stream
            cursor.read_exact(10)
    assert opened["stream"].closed


def test_missing_final_padding_is_tolerated(grid_rows):
    """Паддинг пропускается сдвигом, а не чтением, поэтому его отсутствие в конце не ошибка."""
    doc = decode_bytes(build_bmp(grid_rows)[:-3])
    assert doc.pixel(0, 2) == Pixel(7, 8, 9)
