"""
Парсер встроенной тег-разметки с рекурсивным спуском и откатом.

Строит дерево узлов из потока токенов. Альтернативы грамматики
различаются только пробным разбором на ответвлении потока: ни один
фиксированный просмотр вперёд не отличает текст, блок, элемент и
лишний закрывающий тег.

Грамматика:
node       → text | block | element
element    → "<" NAME attr* tag_end (node* close_tag)?
tag_end    → "/" ">" | ">"
close_tag  → "<" "/" NAME ">"
attr       → KEY ("=" (BLOCK | EXPR))?
text       → LITERAL
block      → BLOCK
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

from .config import ParserConfig
from .cursor import Cursor, ParseStream
from .errors import (
    GrammarMismatch,
    MalformedAttribute,
    MalformedEmbeddedExpression,
    OrphanCloseTag,
    ParseError,
    TagNameMismatch,
    UnterminatedOpenTag,
)
from .expr import BlockExpr, Expr, ExpressionParser, LitExpr, PathExpr, parse_block_expr
from .nodes import Node
from .tokens import Delimiter, Ident, Span, TokenTree

logger = logging.getLogger(__name__)

# Идентификаторы, которые считаются литералами
_LITERAL_KEYWORDS = frozenset({"True", "False", "None"})


@dataclass(frozen=True)
class _Tag:
    """Разобранный открывающий тег."""
    ident: Ident
    attributes: Tuple[Node, ...]
    selfclosing: bool


class Parser:
    """
    Парсер разметки.

    Каждое правило либо полностью успешно (сдвигает поток и возвращает
    значение), либо бросает ParseError, не оставляя частичного продвижения.
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        expression_parser: Optional[ExpressionParser] = None,
    ):
        """
        Args:
            config: Настройки парсера (по умолчанию - вложенное дерево)
            expression_parser: Разборщик содержимого фигурных скобок
        """
        self.config = config or ParserConfig()
        self.expression_parser = expression_parser or parse_block_expr

    def parse(self, tokens: Sequence[TokenTree]) -> List[Node]:
        """
        Разбирает последовательность токенов в список корневых узлов.

        Raises:
            ParseError: При первой структурной ошибке
        """
        return self.parse_stream(ParseStream.from_tokens(tokens))

    def parse_stream(self, stream: ParseStream) -> List[Node]:
        """
        Разбирает поток до конца.

        Поток сдвигается только при успешном разборе всего входа.

        Raises:
            ParseError: При первой структурной ошибке
            GrammarMismatch: Если вложенность превышает предел рекурсии
        """
        fork = stream.fork()
        nodes: List[Node] = []
        while not fork.is_empty():
            start = fork.span()
            try:
                nodes.extend(self._node(fork))
            except RecursionError:
                raise GrammarMismatch("markup is nested too deeply", start) from None

        stream.advance_to(fork)
        logger.debug(f"Parsed {len(nodes)} root node(s), flatten={self.config.flatten}")
        return nodes

    # Диспетчер

    def _node(self, stream: ParseStream) -> List[Node]:
        """
        Разбирает один узел: текст, блок или элемент (в этом порядке).

        В режиме flatten возвращает узел и его уже уплощённых потомков.
        """
        node = self._try_rule(self._text, stream)
        if node is None:
            node = self._try_rule(self._block, stream)
        if node is None:
            fork = stream.fork()
            node = self._element(fork)
            stream.advance_to(fork)

        if not self.config.flatten:
            return [node]

        # Дочерние узлы уже уплощены при их собственном разборе
        return [replace(node, child_nodes=()), *node.child_nodes]

    def _try_rule(self, rule, stream: ParseStream) -> Optional[Node]:
        """
        Пробует правило на ответвлении и фиксирует его при успехе.

        Ошибка во встроенном выражении - самая точная диагностика,
        она не передаёт ход следующей альтернативе.
        """
        fork = stream.fork()
        try:
            node = rule(fork)
        except MalformedEmbeddedExpression:
            raise
        except ParseError as e:
            logger.debug(f"Rule '{rule.__name__}' did not match: {e}")
            return None
        stream.advance_to(fork)
        return node

    # Листовые правила

    def _text(self, stream: ParseStream) -> Node:
        return Node.text(self._literal_expr(stream))

    def _block(self, stream: ParseStream) -> Node:
        return Node.block(self._block_expr(stream))

    def _literal_expr(self, stream: ParseStream) -> LitExpr:
        token = stream.peek()
        if isinstance(token, Ident) and token.name in _LITERAL_KEYWORDS:
            stream.parse_token_tree()
            return LitExpr(token.name, token.span)
        literal = stream.parse_literal()
        return LitExpr(literal.text, literal.span)

    def _block_expr(self, stream: ParseStream) -> BlockExpr:
        group = stream.parse_group(Delimiter.BRACE)
        return self.expression_parser(group)

    # Элементы

    def _element(self, stream: ParseStream) -> Node:
        """Разбирает <Name ...>...</Name> или <Name .../>."""
        close_ident = self._peek_tag_close(stream)
        if close_ident is not None:
            raise OrphanCloseTag("close tag has no corresponding open tag", close_ident.span)

        tag = self._tag_open(stream)

        child_nodes: List[Node] = []
        if not tag.selfclosing:
            while self._has_child_nodes(tag, stream):
                child_nodes.extend(self._node(stream))
            self._tag_close(stream)

        return Node.element(tag.ident.name, tag.attributes, child_nodes)

    def _has_child_nodes(self, tag: _Tag, stream: ParseStream) -> bool:
        """
        Проверяет, есть ли у элемента ещё дочерние узлы.

        Raises:
            UnterminatedOpenTag: Если поток закончился до закрывающего тега
            TagNameMismatch: Если следующий закрывающий тег от другого элемента
        """
        if stream.is_empty():
            raise UnterminatedOpenTag("open tag has no corresponding close tag", tag.ident.span)

        close_ident = self._peek_tag_close(stream)
        if close_ident is None:
            return True
        if close_ident.name == tag.ident.name:
            return False
        raise TagNameMismatch(
            f"close tag has no corresponding open tag (expected `</{tag.ident.name}>`)",
            close_ident.span,
        )

    def _peek_tag_close(self, stream: ParseStream) -> Optional[Ident]:
        """Имя закрывающего тега впереди, без потребления."""
        try:
            return self._tag_close(stream.fork())
        except ParseError:
            return None

    def _tag_open(self, stream: ParseStream) -> _Tag:
        """
        Разбирает открывающий тег.

        Токены атрибутов только собираются до терминатора; их смысл
        разбирается отдельно, по точно известному диапазону.
        """
        stream.parse_punct("<")
        ident = stream.parse_ident()

        attr_tokens: List[TokenTree] = []
        while True:
            fork = stream.fork()
            try:
                selfclosing = self._tag_open_end(fork)
            except ParseError:
                pass
            else:
                terminator = stream.span()
                stream.advance_to(fork)
                break

            if stream.is_empty():
                raise UnterminatedOpenTag("open tag is not terminated", ident.span)
            attr_tokens.append(stream.parse_token_tree())

        attributes = self._attribute_list(attr_tokens, terminator)
        return _Tag(ident, attributes, selfclosing)

    def _tag_open_end(self, stream: ParseStream) -> bool:
        selfclosing = stream.parse_optional_punct("/") is not None
        stream.parse_punct(">")
        return selfclosing

    def _tag_close(self, stream: ParseStream) -> Ident:
        stream.parse_punct("<")
        stream.parse_punct("/")
        ident = stream.parse_ident()
        stream.parse_punct(">")
        return ident

    # Атрибуты

    def _attribute_list(self, tokens: List[TokenTree], end: Span) -> Tuple[Node, ...]:
        """
        Разбирает атрибуты по ограниченному диапазону токенов.

        Raises:
            MalformedAttribute: Если в диапазоне остались неразобранные токены
        """
        stream = ParseStream(Cursor(tuple(tokens), 0, end))
        nodes: List[Node] = []

        while not stream.is_empty():
            fork = stream.fork()
            try:
                key, value = self._attribute(fork)
            except MalformedEmbeddedExpression:
                raise
            except ParseError:
                break
            stream.advance_to(fork)
            nodes.append(Node.attribute(key, value))

        if not stream.is_empty():
            raise MalformedAttribute("unexpected token in attribute list", stream.span())

        return tuple(nodes)

    def _attribute(self, stream: ParseStream) -> Tuple[str, Optional[Expr]]:
        key = stream.parse_ident(allow_keywords=True).name
        if stream.parse_optional_punct("=") is None:
            return key, None

        if stream.peek_group(Delimiter.BRACE):
            return key, self._block_expr(stream)
        return key, self._value_expr(stream)

    def _value_expr(self, stream: ParseStream) -> Expr:
        """Значение атрибута без скобок: литерал или путь через точку."""
        token = stream.peek()
        if not isinstance(token, Ident) or token.name in _LITERAL_KEYWORDS:
            return self._literal_expr(stream)

        segments = [stream.parse_ident().name]
        while stream.peek_punct("."):
            stream.parse_punct(".")
            segments.append(stream.parse_ident().name)
        return PathExpr(tuple(segments), token.span)


def parse(
    tokens: Sequence[TokenTree],
    config: Optional[ParserConfig] = None,
    expression_parser: Optional[ExpressionParser] = None,
) -> List[Node]:
    """
    Удобная функция для разбора потока токенов.

    Args:
        tokens: Токены разметки
        config: Настройки парсера
        expression_parser: Разборщик содержимого фигурных скобок

    Returns:
        Список корневых узлов

    Raises:
        ParseError: При синтаксической ошибке
    """
    return Parser(config, expression_parser).parse(tokens)


__all__ = ["Parser", "parse"]
