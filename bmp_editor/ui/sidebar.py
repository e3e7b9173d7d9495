"""Боковая панель: файл, метаданные, курсор и кнопки преобразований.

Принципы:
- SRP: управляет только UI, преобразования выполняет контроллер.
- ISP: параметры отдаются через `get_*`, события — через `on_*`.
"""
from __future__ import annotations

from typing import Callable, Optional, Sequence, Tuple

import customtkinter as ctk

from bmp_editor.models.bitmap_model import Document

# (название на кнопке, имя преобразования в TRANSFORMS)
GEOMETRY_ACTIONS: Sequence[Tuple[str, str]] = (
    ("Отразить по горизонтали", "flip-h"),
    ("Отразить по вертикали", "flip-v"),
    ("Транспонировать", "transpose"),
    ("Повернуть влево", "rotate-left"),
    ("Повернуть вправо", "rotate-right"),
)
COLOR_ACTIONS: Sequence[Tuple[str, str]] = (
    ("Инверсия", "invert"),
    ("Оттенки серого", "grayscale"),
    ("Сепия", "sepia"),
    ("Только красный", "red"),
    ("Только зелёный", "green"),
    ("Только синий", "blue"),
)


def _rgb_to_hex(rgb: Tuple[int, int, int]) -> str:
    r, g, b = rgb
    return f"#{r:02X}{g:02X}{b:02X}"


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: файл, информация, курсор, обработка."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[], None]] = None
        self.on_save_file: Optional[Callable[[], None]] = None
        self.on_transform: Optional[Callable[[str], None]] = None
        self.on_crop: Optional[Callable[[], None]] = None
        self.on_reset: Optional[Callable[[], None]] = None

        bold = ctk.CTkFont(size=16, weight="bold")

        # File
        self._title = ctk.CTkLabel(self, text="Файл", font=bold)
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")
        self._open_btn = ctk.CTkButton(self, text="Открыть BMP…", command=lambda: self._emit(self.on_open_file))
        self._open_btn.grid(row=1, column=0, padx=8, pady=(0, 4), sticky="ew")
        self._save_btn = ctk.CTkButton(self, text="Сохранить как…", command=lambda: self._emit(self.on_save_file))
        self._save_btn.grid(row=2, column=0, padx=8, pady=(0, 12), sticky="ew")

        # Info section
        self._info_title = ctk.CTkLabel(self, text="Информация", font=bold)
        self._info_title.grid(row=3, column=0, padx=8, pady=(8, 4), sticky="w")

        self._path_val = ctk.StringVar(value="—")
        self._dims_val = ctk.StringVar(value="—")
        self._size_val = ctk.StringVar(value="—")
        self._layout_val = ctk.StringVar(value="—")
        info_rows = (self._path_val, self._dims_val, self._size_val, self._layout_val)
        for offset, var in enumerate(info_rows):
            label = ctk.CTkLabel(self, textvariable=var, wraplength=250, anchor="w", justify="left")
            label.grid(row=4 + offset, column=0, padx=8, pady=(0, 2), sticky="ew")

        # Cursor section
        self._cursor_title = ctk.CTkLabel(self, text="Курсор", font=bold)
        self._cursor_title.grid(row=10, column=0, padx=8, pady=(8, 4), sticky="w")
        self._cursor_xy_val = ctk.StringVar(value="—")
        self._cursor_rgb_val = ctk.StringVar(value="—")
        ctk.CTkLabel(self, textvariable=self._cursor_xy_val, anchor="w").grid(row=11, column=0, padx=8, sticky="ew")
        ctk.CTkLabel(self, textvariable=self._cursor_rgb_val, anchor="w").grid(row=12, column=0, padx=8, sticky="ew")

        # Processing
        self._proc_title = ctk.CTkLabel(self, text="Обработка", font=bold)
        self._proc_title.grid(row=20, column=0, padx=8, pady=(8, 4), sticky="w")

        self._tabs = ctk.CTkTabview(self)
        self._tabs.grid(row=21, column=0, padx=8, pady=(0, 8), sticky="nsew")
        self._tabs.add("Геометрия")
        self._tabs.add("Цвет")
        self._tabs.add("Обрезка")
        self.grid_rowconfigure(21, weight=1)

        self._add_action_buttons(self._tabs.tab("Геометрия"), GEOMETRY_ACTIONS)
        self._add_action_buttons(self._tabs.tab("Цвет"), COLOR_ACTIONS)

        # Обрезка: x_begin, y_begin, x_end, y_end
        crop_tab = self._tabs.tab("Обрезка")
        crop_tab.grid_columnconfigure(1, weight=1)
        self._crop_vals = {}
        for idx, name in enumerate(("x_begin", "y_begin", "x_end", "y_end")):
            var = ctk.StringVar(value="0")
            ctk.CTkLabel(crop_tab, text=f"{name}:").grid(row=idx, column=0, padx=6, pady=2, sticky="w")
            ctk.CTkEntry(crop_tab, textvariable=var, width=80).grid(row=idx, column=1, padx=6, pady=2, sticky="w")
            self._crop_vals[name] = var
        self._crop_btn = ctk.CTkButton(crop_tab, text="Обрезать", command=lambda: self._emit(self.on_crop))
        self._crop_btn.grid(row=4, column=0, columnspan=2, padx=6, pady=(6, 4), sticky="ew")

        self._reset_btn = ctk.CTkButton(self, text="Сбросить изменения", command=lambda: self._emit(self.on_reset))
        self._reset_btn.grid(row=22, column=0, padx=8, pady=(0, 8), sticky="ew")

    # ---- Public API ----
    def set_document_info(self, path: str, doc: Document) -> None:
        """Отображает метаданные текущего документа."""
        self._path_val.set(path)
        self._dims_val.set(f"{doc.width} × {doc.height} px")
        self._size_val.set(f"{doc.header.file_size} байт")
        order = "сверху вниз" if doc.info.top_down else "снизу вверх"
        self._layout_val.set(f"Паддинг: {doc.padding} байт, строки {order}")

    def update_cursor_info(self, x: Optional[int], y: Optional[int], rgb: Optional[Tuple[int, int, int]]) -> None:
        if x is None or y is None or rgb is None:
            self._cursor_xy_val.set("—")
            self._cursor_rgb_val.set("—")
            return
        self._cursor_xy_val.set(f"({x}, {y})")
        r, g, b = rgb
        self._cursor_rgb_val.set(f"RGB: {r}, {g}, {b}  {_rgb_to_hex(rgb)}")

    def get_crop_params(self) -> Tuple[int, int, int, int]:
        """Возвращает (x_begin, y_begin, x_end, y_end).

        Raises:
            ValueError: если в поле не целое число.
        """
        values = []
        for name in ("x_begin", "y_begin", "x_end", "y_end"):
            raw = self._crop_vals[name].get().strip()
            try:
                values.append(int(raw))
            except ValueError:
                raise ValueError(f"{name}: ожидается целое число, получено {raw!r}") from None
        return values[0], values[1], values[2], values[3]

    # ---- Helpers ----
    def _add_action_buttons(self, tab: ctk.CTkFrame, actions: Sequence[Tuple[str, str]]) -> None:
        tab.grid_columnconfigure(0, weight=1)
        for row, (text, name) in enumerate(actions):
            btn = ctk.CTkButton(tab, text=text, command=lambda n=name: self._emit_transform(n))
            btn.grid(row=row, column=0, padx=6, pady=(4, 2), sticky="ew")

    def _emit_transform(self, name: str) -> None:
        if self.on_transform:
            self.on_transform(name)

    @staticmethod
    def _emit(callback: Optional[Callable[[], None]]) -> None:
        if callback:
            callback()
