from __future__ import annotations

from pathlib import Path
from typing import Optional

import customtkinter as ctk

from bmp_editor.controllers.app_controller import AppController
from bmp_editor.ui.bottom_bar import BottomBar
from bmp_editor.ui.image_viewer import ImageViewer
from bmp_editor.ui.sidebar import Sidebar
from bmp_editor.utils.config import EditorConfig


class BitmapEditorApp(ctk.CTk):
    def __init__(self, config: Optional[EditorConfig] = None, initial_path: Optional[Path] = None) -> None:
        super().__init__()
        config = config or EditorConfig()
        ctk.set_appearance_mode(config.appearance_mode)
        ctk.set_default_color_theme(config.color_theme)

        self.title("BMP Editor")
        self.minsize(config.min_width, config.min_height)

        # root layout: left viewer, right sidebar
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=0)

        self._viewer = ImageViewer(self)
        self._viewer.grid(row=0, column=0, sticky="nsew", padx=(12, 6), pady=(12, 6))

        self._sidebar = Sidebar(self)
        self._sidebar.grid(row=0, column=1, sticky="ns", padx=(6, 12), pady=(12, 6))

        self._bottom = BottomBar(self)
        self._bottom.grid(row=1, column=0, columnspan=2, sticky="ew", padx=12, pady=(0, 12))

        self._controller = AppController(viewer=self._viewer, sidebar=self._sidebar, bottom=self._bottom, window=self)
        self._controller.bind_events()
        self._viewer.set_zoom_percent(config.default_zoom)
        self._bottom.set_zoom_percent(config.default_zoom)

        if initial_path is not None:
            # дождаться первой раскладки, чтобы «вписать» изображение в окно
            self.after(50, lambda: self._controller.open_path(initial_path))
