"""Контроллер приложения: оркестрация UI и сервисов.

SOLID:
- SRP: класс связывает UI с сервисами кодека и преобразований, сам пиксели не трогает.
- DIP: зависит от сервисов как от ролей; конкретные реализации инкапсулированы.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from tkinter import TclError, filedialog
from typing import Optional, Tuple

import customtkinter as ctk

from bmp_editor.models.bitmap_model import Document
from bmp_editor.models.errors import BitmapError
from bmp_editor.services.bitmap_service import BitmapService
from bmp_editor.services.image_service import ImageService
from bmp_editor.services.transform_service import TransformService, apply
from bmp_editor.ui.bottom_bar import BottomBar
from bmp_editor.ui.image_viewer import ImageViewer
from bmp_editor.ui.sidebar import Sidebar

logger = logging.getLogger(__name__)

_FILETYPES = (("Bitmap", "*.bmp"), ("All files", "*.*"))


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Загрузка и сохранение документов через `BitmapService`.
    - Применение преобразований через `TransformService`.
    - Вывод ошибок кодека в строку статуса вместо падения окна.
    """
    viewer: ImageViewer
    sidebar: Sidebar
    bottom: BottomBar
    window: ctk.CTk

    _bitmap_service: BitmapService = field(default_factory=BitmapService)
    _image_service: ImageService = field(default_factory=ImageService)
    _transform_service: TransformService = field(default_factory=TransformService)
    _path: Optional[Path] = None
    _original: Optional[Document] = None
    _current: Optional[Document] = None
    _modified: bool = False

    def bind_events(self) -> None:
        self.sidebar.on_open_file = self._handle_open_file
        self.sidebar.on_save_file = self._handle_save_file
        self.sidebar.on_transform = self._handle_transform
        self.sidebar.on_crop = self._handle_crop
        self.sidebar.on_reset = self._handle_reset

        self.viewer.on_cursor_move = self._handle_cursor_move
        self.viewer.on_zoom_change = self.bottom.set_zoom_percent

        self.bottom.on_zoom_change = self.viewer.set_zoom_percent
        self.bottom.on_zoom_fit = self._handle_zoom_fit

    def open_path(self, file_path: str | Path) -> None:
        """Открывает документ; ошибки формата показываются в строке статуса."""
        path = Path(file_path)
        try:
            document = self._bitmap_service.load(path)
        except BitmapError as exc:
            logger.warning("Cannot open %s: %s", path, exc)
            self.bottom.set_status(str(exc), error=True)
            return
        self._path = path
        self._original = document.copy()
        self._current = document
        self._modified = False
        self._refresh(keep_zoom=False)
        self.bottom.set_status(f"Открыт {path.name}")

    # ---- Handlers ----
    def _handle_open_file(self) -> None:
        try:
            file_path = filedialog.askopenfilename(title="Выберите BMP-файл", filetypes=_FILETYPES)
        except TclError:
            return
        if file_path:
            self.open_path(file_path)

    def _handle_save_file(self) -> None:
        if self._current is None:
            return
        try:
            file_path = filedialog.asksaveasfilename(
                title="Сохранить как", defaultextension=".bmp", filetypes=_FILETYPES
            )
        except TclError:
            return
        if not file_path:
            return
        try:
            self._bitmap_service.save(self._current, file_path)
        except BitmapError as exc:
            self.bottom.set_status(str(exc), error=True)
            return
        self._path = Path(file_path)
        self._modified = False
        self._show_document()
        self.bottom.set_status(f"Сохранено: {self._path.name}")

    def _handle_transform(self, name: str) -> None:
        if self._current is None:
            return
        apply(self._current, name)
        self._modified = True
        self._refresh(keep_zoom=True)
        self.bottom.set_status(f"Применено: {name}")

    def _handle_crop(self) -> None:
        if self._current is None:
            return
        try:
            x_begin, y_begin, x_end, y_end = self.sidebar.get_crop_params()
            self._transform_service.crop(self._current, x_begin, y_begin, x_end, y_end)
        except (ValueError, BitmapError) as exc:
            self.bottom.set_status(str(exc), error=True)
            return
        self._modified = True
        self._refresh(keep_zoom=False)
        self.bottom.set_status(f"Обрезано до {self._current.width} × {self._current.height}")

    def _handle_reset(self) -> None:
        if self._original is None:
            return
        self._current = self._original.copy()
        self._modified = False
        self._refresh(keep_zoom=False)
        self.bottom.set_status("Изменения сброшены")

    def _handle_cursor_move(self, x: Optional[int], y: Optional[int], rgb: Optional[Tuple[int, int, int]]) -> None:
        self.sidebar.update_cursor_info(x, y, rgb)

    def _handle_zoom_fit(self) -> None:
        self.viewer.set_zoom_to_fit()
        self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())

    # ---- Helpers ----
    def _refresh(self, keep_zoom: bool) -> None:
        doc = self._current
        if doc is None:
            return
        # пустое изображение (например, после обрезки в ноль) не рисуем
        image = self._image_service.to_pil(doc) if doc.width and doc.height else None
        self.viewer.set_image(image, keep_zoom=keep_zoom)
        self.sidebar.set_document_info(str(self._path), doc)
        self._show_document()
        self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())

    def _show_document(self) -> None:
        doc = self._current
        name = self._path.name if self._path is not None else None
        if doc is None:
            self.bottom.set_document(name)
        else:
            self.bottom.set_document(name, doc.width, doc.height, modified=self._modified)
