"""
Утилиты для создания файлов в тестах.
"""

from __future__ import annotations

import textwrap
from pathlib import Path


def write(p: Path, text: str, *, dedent: bool = True) -> Path:
    """
    Записывает текст в файл, создавая родительские директории при необходимости.

    Args:
        p: Путь к файлу
        text: Содержимое для записи
        dedent: Убрать общий отступ (удобно для многострочных литералов)

    Returns:
        Путь к созданному файлу
    """
    if dedent:
        text = textwrap.dedent(text).lstrip("\n")
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


__all__ = ["write"]
