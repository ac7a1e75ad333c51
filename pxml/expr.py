"""
Встроенные выражения хост-языка.

Парсер разметки не интерпретирует выражения: ему достаточно найти их
границы. Содержимое фигурных скобок передаётся подключаемому разборщику
выражений, который лишь проверяет, что это корректное выражение, и
упаковывает его в непрозрачное значение.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Tuple, Union

from .errors import MalformedEmbeddedExpression
from .tokens import DEFAULT_SPAN, Group, Span


@dataclass(frozen=True)
class LitExpr:
    """Литерал: строка, число, True/False/None."""
    text: str
    span: Span = field(default=DEFAULT_SPAN, compare=False)

    @property
    def value(self) -> Any:
        return ast.literal_eval(self.text)

    def to_source(self) -> str:
        return self.text


@dataclass(frozen=True)
class PathExpr:
    """Путь через точку: name или obj.attr.attr."""
    segments: Tuple[str, ...]
    span: Span = field(default=DEFAULT_SPAN, compare=False)

    def to_source(self) -> str:
        return ".".join(self.segments)


@dataclass(frozen=True)
class BlockExpr:
    """
    Непрозрачное выражение в фигурных скобках.

    Attributes:
        source: Текст выражения без скобок и крайних пробелов
        span: Позиция открывающей скобки
        group: Исходная группа токенов
    """
    source: str
    span: Span = field(default=DEFAULT_SPAN, compare=False)
    group: Optional[Group] = field(default=None, compare=False, repr=False)

    @property
    def is_empty(self) -> bool:
        return not self.source

    def to_source(self) -> str:
        return "{" + self.source + "}"


Expr = Union[LitExpr, PathExpr, BlockExpr]

# Разборщик содержимого группы в фигурных скобках
ExpressionParser = Callable[[Group], BlockExpr]


def parse_block_expr(group: Group) -> BlockExpr:
    """
    Разборщик выражений по умолчанию.

    Пустые скобки допустимы. Иначе содержимое должно быть одним
    выражением Python; оно оборачивается в круглые скобки, чтобы
    многострочные выражения не зависели от отступов.

    Raises:
        MalformedEmbeddedExpression: Если содержимое не является выражением
    """
    source = group.inner_source().strip()
    if source:
        try:
            ast.parse(f"(\n{source}\n)", mode="eval")
        except SyntaxError as e:
            raise MalformedEmbeddedExpression(
                f"invalid embedded expression: {e.msg}", group.span
            ) from e
    return BlockExpr(source=source, span=group.span, group=group)


__all__ = [
    "LitExpr",
    "PathExpr",
    "BlockExpr",
    "Expr",
    "ExpressionParser",
    "parse_block_expr",
]
