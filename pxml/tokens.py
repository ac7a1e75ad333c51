"""
Модель входного потока токенов.

Парсер не читает исходный текст: он получает уже разобранное внешним
фронтендом дерево токенов. Каждый токен несёт позицию для диагностики,
а группы в скобках приходят целиком, вместе со своим содержимым.
"""

from __future__ import annotations

import ast
import enum
import keyword
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Tuple, Union


@dataclass(frozen=True)
class Span:
    """
    Позиция токена в исходном тексте.

    Не участвует в сравнении токенов, выражений и узлов: два дерева,
    разобранные из разного форматирования, структурно равны.
    """
    position: int        # Смещение в исходном тексте (с 0)
    line: int = 1        # Номер строки (начиная с 1)
    column: int = 1      # Номер колонки (начиная с 1)

    def __repr__(self) -> str:
        return f"Span({self.line}:{self.column})"


# Позиция по умолчанию для токенов, созданных программно
DEFAULT_SPAN = Span(0, 1, 1)


class Delimiter(enum.Enum):
    """Тип скобок группы."""
    PARENTHESIS = "()"
    BRACE = "{}"
    BRACKET = "[]"

    @property
    def open(self) -> str:
        return self.value[0]

    @property
    def close(self) -> str:
        return self.value[1]

    @classmethod
    def from_open(cls, char: str) -> Optional["Delimiter"]:
        for delim in cls:
            if delim.open == char:
                return delim
        return None


@dataclass(frozen=True)
class Ident:
    """Идентификатор."""
    name: str
    span: Span = field(default=DEFAULT_SPAN, compare=False)

    @property
    def is_keyword(self) -> bool:
        """Является ли идентификатор ключевым словом хост-языка."""
        return keyword.iskeyword(self.name)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Punct:
    """Один символ пунктуации."""
    char: str
    span: Span = field(default=DEFAULT_SPAN, compare=False)

    def __post_init__(self):
        if len(self.char) != 1:
            raise ValueError(f"Punct must be a single character, got {self.char!r}")

    def __str__(self) -> str:
        return self.char


@dataclass(frozen=True)
class Literal:
    """Строковый или числовой литерал в синтаксисе хост-языка."""
    text: str
    span: Span = field(default=DEFAULT_SPAN, compare=False)

    @property
    def value(self) -> Any:
        """Значение литерала."""
        return ast.literal_eval(self.text)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Group:
    """
    Группа в скобках.

    Attributes:
        delimiter: Тип скобок
        stream: Токены внутри скобок
        span: Позиция открывающей скобки
        source: Исходный текст между скобками, если фронтенд его знает
    """
    delimiter: Delimiter
    stream: Tuple["TokenTree", ...] = ()
    span: Span = field(default=DEFAULT_SPAN, compare=False)
    source: Optional[str] = field(default=None, compare=False)

    def inner_source(self) -> str:
        """Текст содержимого группы: исходный, либо восстановленный из токенов."""
        if self.source is not None:
            return self.source
        return tokens_to_source(self.stream)

    def __str__(self) -> str:
        return f"{self.delimiter.open}{self.inner_source()}{self.delimiter.close}"


TokenTree = Union[Ident, Punct, Literal, Group]


def tokens_to_source(tokens: Iterable[TokenTree]) -> str:
    """
    Восстанавливает текст из последовательности токенов.

    Пробелы ставятся только между словами, которые иначе слиплись бы;
    результат эквивалентен исходнику с точностью до форматирования.
    """
    parts = []
    prev: Optional[TokenTree] = None
    for token in tokens:
        if prev is not None and _needs_space(prev, token):
            parts.append(" ")
        parts.append(str(token))
        prev = token
    return "".join(parts)


def _needs_space(prev: TokenTree, token: TokenTree) -> bool:
    # `1 .real` слипается в некорректный литерал `1.real`
    if isinstance(prev, Literal) and isinstance(token, Punct):
        return token.char == "." and prev.text[:1].isdigit()
    if isinstance(prev, Punct) or isinstance(token, Punct):
        return False
    return True


__all__ = [
    "Span",
    "DEFAULT_SPAN",
    "Delimiter",
    "Ident",
    "Punct",
    "Literal",
    "Group",
    "TokenTree",
    "tokens_to_source",
]
