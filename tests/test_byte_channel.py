"""
Байтовый канал: ошибки ввода-вывода, потоки без seek и заголовки с ложными размерами.

Run from project root: pytest tests/test_byte_channel.py -v
"""
import io
import os
import struct
import time

import pytest

from bmp_editor.models.bitmap_model import Pixel
from bmp_editor.models.errors import ChannelIOError, ErrorKind, UnexpectedEndOfInput
from bmp_editor.services.bitmap_service import BitmapService, decode, decode_bytes, encode, encode_bytes
from bmp_editor.services.byte_channel import READ_CHUNK, ByteCursor

from conftest import build_bmp, make_document


def header_bytes(width: int, height: int) -> bytes:
    """54 байта совместимого заголовка с произвольными размерами."""
    return b"BM" + struct.pack("<III", 0, 0, 54) + struct.pack(
        "<IIiHHIIIIII", 40, width, height, 1, 24, 0, 0, 0, 0, 0, 0
    )


class FailingStream(io.RawIOBase):
    """Поток, у которого чтение и запись падают с OSError."""

    def readable(self):
        return True

    def writable(self):
        return True

    def readinto(self, buffer):
        raise OSError(5, "Input/output error")

    def write(self, data):
        raise OSError(28, "No space left on device")


class NonSeekable(io.RawIOBase):
    """Обёртка над байтами без поддержки seek."""

    def __init__(self, data: bytes) -> None:
        self._inner = io.BytesIO(data)

    def readable(self):
        return True

    def seekable(self):
        return False

    def readinto(self, buffer):
        chunk = self._inner.read(len(buffer))
        buffer[:len(chunk)] = chunk
        return len(chunk)


def test_read_error_is_channel_io():
    with pytest.raises(ChannelIOError) as exc_info:
        ByteCursor(FailingStream()).read_exact(4)
    assert exc_info.value.kind is ErrorKind.CHANNEL_IO


def test_write_error_is_channel_io(doc):
    with pytest.raises(ChannelIOError) as exc_info:
        encode(doc, FailingStream())
    assert exc_info.value.kind is ErrorKind.CHANNEL_IO
    assert exc_info.value.operation == "write"


def test_decode_read_error_is_channel_io():
    with pytest.raises(ChannelIOError):
        decode(FailingStream())


def test_non_seekable_stream_skips_padding(grid_rows):
    """Ширина 3 требует 3 байта паддинга: они пропускаются чтением."""
    data = build_bmp(grid_rows, padding_byte=0xEE)
    doc = decode(NonSeekable(data))
    assert doc.padding == 3
    assert doc == decode_bytes(data)
    assert doc.pixel(1, 2) == Pixel(16, 17, 18)


def test_read_exact_spans_several_chunks():
    data = bytes(range(256)) * (READ_CHUNK // 256 * 2 + 1)
    assert ByteCursor(io.BytesIO(data)).read_exact(len(data)) == data


def test_huge_width_on_disk_is_unexpected_end(tmp_path):
    """Ширина из заголовка не должна приводить к огромному выделению памяти."""
    path = tmp_path / "huge.bmp"
    path.write_bytes(header_bytes(0xFFFFFFFF, 1) + bytes(10))
    with pytest.raises(UnexpectedEndOfInput) as exc_info:
        BitmapService().load(path)
    assert exc_info.value.received == 10


def test_huge_height_with_truncated_data(tmp_path):
    path = tmp_path / "tall.bmp"
    path.write_bytes(header_bytes(4, 2 ** 31 - 1) + bytes(12))
    start = time.monotonic()
    with pytest.raises(UnexpectedEndOfInput):
        BitmapService().load(path)
    assert time.monotonic() - start < 5.0


def test_zero_width_many_rows_is_fast():
    start = time.monotonic()
    doc = decode_bytes(header_bytes(0, 5_000_000))
    assert time.monotonic() - start < 5.0
    assert doc.pixels.shape == (5_000_000, 0, 3)
    assert doc.pixels.nbytes == 0


def test_set_pixel_round_trips_through_codec():
    doc = make_document([[(0, 0, 0), (0, 0, 0)]])
    doc.set_pixel(0, 1, Pixel(200, 100, 50))
    back = decode_bytes(encode_bytes(doc))
    assert back.pixel(0, 1) == Pixel(200, 100, 50)
    assert back.pixel(0, 0) == Pixel(0, 0, 0)




@pytest.mark.skipif(not os.path.exists("/dev/full"), reason="needs /dev/full")
def test_save_to_full_device_is_channel_io(doc):
    with pytest.raises(ChannelIOError) as exc_info:
        BitmapService().save(doc, "/dev/full")
    assert exc_info.value.kind is ErrorKind.CHANNEL_IO
