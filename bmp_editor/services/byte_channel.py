"""Байтовый канал для кодека: последовательное чтение/запись и пропуск байт.

Принципы:
- SRP: только ввод-вывод и перевод сбоев в ошибки кодека.
- Канал, открытый через `open_channel`, закрывается на любом пути выхода.
"""
from __future__ import annotations

import io
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator

from bmp_editor.models.errors import ChannelIOError, ChannelOpenError, UnexpectedEndOfInput

logger = logging.getLogger(__name__)

READ_CHUNK = 1 << 16


class ByteCursor:
    """Обёртка над бинарным потоком с проверкой каждой операции."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    def read_exact(self, count: int) -> bytes:
        """Читает ровно `count` байт.

        Raises:
            UnexpectedEndOfInput: если поток закончился раньше.
            ChannelIOError: при любой другой ошибке чтения.
        """
        chunks = []
        received = 0
        # count comes from the header; read in bounded chunks so a lying width
        # cannot make the reader reserve a huge buffer up front
        while received < count:
            try:
                chunk = self._stream.read(min(count - received, READ_CHUNK))
            except OSError as exc:
                raise ChannelIOError("read", str(exc)) from exc
            if not chunk:
                raise UnexpectedEndOfInput(count, received)
            chunks.append(chunk)
            received += len(chunk)
        return b"".join(chunks)

    def write(self, data: bytes) -> None:
        try:
            written = self._stream.write(data)
        except OSError as exc:
            raise ChannelIOError("write", str(exc)) from exc
        if written is not None and written != len(data):
            raise ChannelIOError("write", f"wrote {written} of {len(data)} bytes")

    def skip(self, count: int) -> None:
        """Сдвигается вперёд на `count` байт, содержимое не проверяется."""
        if count <= 0:
            return
        try:
            if self._stream.seekable():
                self._stream.seek(count, io.SEEK_CUR)
            else:
                self._stream.read(count)
        except OSError as exc:
            raise ChannelIOError("seek", str(exc)) from exc


@contextmanager
def open_channel(path: str | Path, mode: str = "rb") -> Iterator[ByteCursor]:
    """Открывает файл как `ByteCursor` и гарантированно закрывает его.

    Raises:
        ChannelOpenError: если файл нельзя открыть или создать.
    """
    if mode not in ("rb", "wb"):
        raise ValueError(f"Unsupported channel mode: {mode}")
    file_path = Path(path)
    try:
        stream = open(file_path, mode)
    except OSError as exc:
        raise ChannelOpenError(file_path, exc.strerror or str(exc)) from exc
    logger.debug("Opened %s (%s)", file_path, mode)
    try:
        yield ByteCursor(stream)
    finally:
        # close() flushes buffered writes, so a full disk may only show up here
        try:
            stream.close()
        except OSError as exc:
            raise ChannelIOError("close", str(exc)) from exc
        logger.debug("Closed %s", file_path)
