"""
Курсор по потоку токенов с поддержкой спекулятивного разбора.

Cursor - неизменяемая позиция в кортеже токенов: продвижение создаёт
новый курсор, поэтому копирование бесплатно. ParseStream оборачивает
курсор и даёт правилам грамматики примитивы разбора. Пробный разбор
выполняется на ответвлении (fork); в основной поток результат попадает
только явным advance_to.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .errors import GrammarMismatch
from .tokens import DEFAULT_SPAN, Delimiter, Group, Ident, Literal, Punct, Span, TokenTree


@dataclass(frozen=True)
class Cursor:
    """
    Позиция в потоке токенов.

    Attributes:
        tokens: Весь поток токенов
        index: Индекс текущего токена
        end: Позиция для диагностики, когда токены закончились
    """
    tokens: Tuple[TokenTree, ...]
    index: int = 0
    end: Span = DEFAULT_SPAN

    def eof(self) -> bool:
        return self.index >= len(self.tokens)

    def token(self) -> Optional[TokenTree]:
        """Текущий токен или None в конце потока."""
        if self.eof():
            return None
        return self.tokens[self.index]

    def bump(self) -> "Cursor":
        """Курсор, сдвинутый на один токен."""
        if self.eof():
            return self
        return Cursor(self.tokens, self.index + 1, self.end)

    def span(self) -> Span:
        """Позиция текущего токена (или конца потока)."""
        token = self.token()
        return token.span if token is not None else self.end


class ParseStream:
    """
    Поток разбора поверх неизменяемого курсора.

    Все примитивы либо потребляют ровно то, что разобрали, либо бросают
    GrammarMismatch, не сдвигая позицию.
    """

    def __init__(self, cursor: Cursor):
        self._cursor = cursor

    @classmethod
    def from_tokens(cls, tokens: Sequence[TokenTree], end: Optional[Span] = None) -> "ParseStream":
        """
        Создаёт поток по последовательности токенов.

        Args:
            tokens: Токены для разбора
            end: Позиция конца потока (по умолчанию - позиция последнего токена)
        """
        tokens = tuple(tokens)
        if end is None:
            end = tokens[-1].span if tokens else DEFAULT_SPAN
        return cls(Cursor(tokens, 0, end))

    @property
    def cursor(self) -> Cursor:
        return self._cursor

    # Спекулятивный разбор

    def fork(self) -> "ParseStream":
        """Независимая копия потока в той же позиции."""
        return ParseStream(self._cursor)

    def advance_to(self, fork: "ParseStream") -> None:
        """
        Фиксирует продвижение ответвления в этом потоке.

        Raises:
            ValueError: Если ответвление получено не из этого потока
        """
        if fork._cursor.tokens is not self._cursor.tokens or fork._cursor.index < self._cursor.index:
            raise ValueError("fork was not derived from the advancing parse stream")
        self._cursor = fork._cursor

    # Просмотр без потребления

    def is_empty(self) -> bool:
        return self._cursor.eof()

    def span(self) -> Span:
        return self._cursor.span()

    def peek(self) -> Optional[TokenTree]:
        return self._cursor.token()

    def peek_punct(self, char: str) -> bool:
        token = self.peek()
        return isinstance(token, Punct) and token.char == char

    def peek_group(self, delimiter: Delimiter) -> bool:
        token = self.peek()
        return isinstance(token, Group) and token.delimiter is delimiter

    # Примитивы разбора

    def error(self, message: str) -> GrammarMismatch:
        """Ошибка в текущей позиции."""
        return GrammarMismatch(message, self.span())

    def parse_token_tree(self) -> TokenTree:
        """Потребляет любой токен (группа - один токен)."""
        token = self.peek()
        if token is None:
            raise self.error("unexpected end of input")
        self._cursor = self._cursor.bump()
        return token

    def parse_punct(self, char: str) -> Punct:
        token = self.peek()
        if not (isinstance(token, Punct) and token.char == char):
            raise self.error(f"expected `{char}`")
        self._cursor = self._cursor.bump()
        return token

    def parse_optional_punct(self, char: str) -> Optional[Punct]:
        if self.peek_punct(char):
            return self.parse_punct(char)
        return None

    def parse_ident(self, allow_keywords: bool = False) -> Ident:
        """
        Потребляет идентификатор.

        Args:
            allow_keywords: Допускать ключевые слова хост-языка
        """
        token = self.peek()
        if not isinstance(token, Ident):
            raise self.error("expected identifier")
        if token.is_keyword and not allow_keywords:
            raise self.error(f"expected identifier, found keyword `{token.name}`")
        self._cursor = self._cursor.bump()
        return token

    def parse_literal(self) -> Literal:
        token = self.peek()
        if not isinstance(token, Literal):
            raise self.error("expected literal")
        self._cursor = self._cursor.bump()
        return token

    def parse_group(self, delimiter: Delimiter) -> Group:
        if not self.peek_group(delimiter):
            raise self.error(f"expected `{delimiter.open}`")
        return self.parse_token_tree()  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f"ParseStream(index={self._cursor.index}, len={len(self._cursor.tokens)})"


__all__ = ["Cursor", "ParseStream"]
