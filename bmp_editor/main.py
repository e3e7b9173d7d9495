"""Точка входа в оконное приложение."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from bmp_editor.app import BitmapEditorApp
from bmp_editor.utils.config import load_config


def main() -> None:
    """Создаёт и запускает главное окно; можно сразу передать путь к файлу."""
    ap = argparse.ArgumentParser(prog="bmp-editor-gui", description="BMP viewer and editor.")
    ap.add_argument("path", nargs="?", help="BMP file to open")
    ap.add_argument("--config", help="YAML config file")
    args = ap.parse_args()

    config = load_config(args.config)
    logging.basicConfig(level=config.log_level, format="[%(levelname)s] %(message)s")

    app = BitmapEditorApp(config=config, initial_path=Path(args.path) if args.path else None)
    app.mainloop()


if __name__ == "__main__":
    main()
