"""Настройки редактора: значения по умолчанию и необязательный YAML-файл."""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional

import yaml


@dataclass(frozen=True)
class EditorConfig:
    """Неизменяемые настройки CLI и окна просмотра.

    Fields:
        log_level: Уровень логирования ("DEBUG", "INFO", ...).
        hex_dump: Выводить отчёт в шестнадцатеричном виде.
        appearance_mode: Тема customtkinter ("system" | "light" | "dark").
        color_theme: Цветовая тема customtkinter.
        min_width: Минимальная ширина окна, px.
        min_height: Минимальная высота окна, px.
        default_zoom: Масштаб по умолчанию, % (10–400).
    """
    log_level: str = "WARNING"
    hex_dump: bool = False
    appearance_mode: str = "system"
    color_theme: str = "blue"
    min_width: int = 900
    min_height: int = 600
    default_zoom: int = 100


def load_config(config_path: Optional[str | Path] = None) -> EditorConfig:
    """Читает настройки из YAML-файла поверх значений по умолчанию.

    Raises:
        FileNotFoundError: если указанный файл не существует.
        ValueError: если в файле есть неизвестные ключи или он не является словарём.
    """
    if config_path is None:
        return EditorConfig()

    target_path = Path(config_path)
    if not target_path.exists():
        raise FileNotFoundError(f"Config file not found: {target_path}")

    with open(target_path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Config file must contain a mapping: {target_path}")

    known = {f.name for f in fields(EditorConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")

    config = replace(EditorConfig(), **raw)
    if not 10 <= config.default_zoom <= 400:
        raise ValueError(f"default_zoom must be within 10..400, got {config.default_zoom}")
    return config
