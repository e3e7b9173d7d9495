"""Нижняя панель редактора: сводка по документу, шаги масштаба и строка статуса.

Строка статуса различает два вида сообщений:
- информационные гаснут сами через `STATUS_TIMEOUT_MS`;
- ошибки кодека висят, пока их не сменит следующее сообщение.
"""
from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk

# Ступени масштаба для кнопок «−» / «+», в процентах (10–400, как у просмотрщика).
ZOOM_STEPS = (10, 25, 50, 75, 100, 150, 200, 300, 400)
STATUS_TIMEOUT_MS = 4000
IDLE_STATUS = "Откройте BMP-файл"

_ERROR_COLOR = "#d9534f"
_INFO_COLOR = ("gray10", "gray90")
_IDLE_COLOR = ("gray40", "gray60")


def next_zoom_step(percent: int, direction: int) -> int:
    """Ближайшая ступень строго больше (`direction > 0`) или меньше текущего масштаба."""
    if direction > 0:
        return next((step for step in ZOOM_STEPS if step > percent), ZOOM_STEPS[-1])
    return next((step for step in reversed(ZOOM_STEPS) if step < percent), ZOOM_STEPS[0])


class BottomBar(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, height=48, **kwargs)

        # callbacks
        self.on_zoom_change: Optional[Callable[[int], None]] = None
        self.on_zoom_fit: Optional[Callable[[], None]] = None

        self._zoom_percent = 100
        self._clear_job: Optional[str] = None

        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(5, weight=1)  # status takes the rest

        # Документ: имя, размер, отметка о несохранённых правках
        self._document = ctk.StringVar(value="—")
        ctk.CTkLabel(self, textvariable=self._document, anchor="w", width=220).grid(
            row=0, column=0, padx=(10, 12), pady=8, sticky="w"
        )

        self._zoom_out = ctk.CTkButton(self, text="−", width=32, command=lambda: self._step_zoom(-1))
        self._zoom_out.grid(row=0, column=1, padx=(0, 4), pady=8)
        self._zoom_text = ctk.StringVar(value="100%")
        ctk.CTkLabel(self, textvariable=self._zoom_text, width=52).grid(row=0, column=2, pady=8)
        self._zoom_in = ctk.CTkButton(self, text="+", width=32, command=lambda: self._step_zoom(1))
        self._zoom_in.grid(row=0, column=3, padx=(4, 6), pady=8)
        ctk.CTkButton(self, text="Вписать", width=72, command=self._fit).grid(row=0, column=4, padx=6, pady=8)

        self._status = ctk.StringVar(value=IDLE_STATUS)
        self._status_label = ctk.CTkLabel(self, textvariable=self._status, anchor="e", text_color=_IDLE_COLOR)
        self._status_label.grid(row=0, column=5, padx=(6, 10), pady=8, sticky="ew")

    # public API (sync from controller)
    def set_zoom_percent(self, percent: int) -> None:
        self._zoom_percent = percent
        self._zoom_text.set(f"{percent}%")
        self._zoom_out.configure(state="normal" if percent > ZOOM_STEPS[0] else "disabled")
        self._zoom_in.configure(state="normal" if percent < ZOOM_STEPS[-1] else "disabled")

    def set_document(self, name: Optional[str], width: int = 0, height: int = 0, modified: bool = False) -> None:
        if name is None:
            self._document.set("—")
            return
        mark = " •" if modified else ""
        self._document.set(f"{name}{mark}  {width} × {height}")

    def set_status(self, message: str, error: bool = False) -> None:
        """Показывает сообщение; информационное погаснет через `STATUS_TIMEOUT_MS`."""
        self._cancel_clear()
        self._status.set(message)
        self._status_label.configure(text_color=_ERROR_COLOR if error else _INFO_COLOR)
        if not error:
            self._clear_job = self.after(STATUS_TIMEOUT_MS, self._clear_status)

    # events
    def _step_zoom(self, direction: int) -> None:
        percent = next_zoom_step(self._zoom_percent, direction)
        self.set_zoom_percent(percent)
        if self.on_zoom_change:
            self.on_zoom_change(percent)

    def _fit(self) -> None:
        if self.on_zoom_fit:
            self.on_zoom_fit()

    # helpers
    def _clear_status(self) -> None:
        self._clear_job = None
        self._status.set("")
        self._status_label.configure(text_color=_IDLE_COLOR)

    def _cancel_clear(self) -> None:
        if self._clear_job is not None:
            self.after_cancel(self._clear_job)
            self._clear_job = None
