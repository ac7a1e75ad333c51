"""
pxml: разбор встроенной тег-разметки (XML/JSX-подобной) из потока токенов
в типизированное дерево узлов.
"""

from __future__ import annotations

from .config import ParserConfig, load_config
from .cursor import Cursor, ParseStream
from .errors import (
    ConfigError,
    GrammarMismatch,
    MalformedAttribute,
    MalformedEmbeddedExpression,
    OrphanCloseTag,
    ParseError,
    PxmlUserError,
    TagNameMismatch,
    UnterminatedOpenTag,
)
from .expr import BlockExpr, ExpressionParser, LitExpr, PathExpr, parse_block_expr
from .nodes import Node, NodeType, nodes_to_source, walk_nodes
from .parser import Parser, parse
from .tokens import Delimiter, Group, Ident, Literal, Punct, Span, TokenTree
from .version import tool_version

__version__ = tool_version()

__all__ = [
    "__version__",
    # Parser
    "Parser",
    "ParserConfig",
    "load_config",
    "parse",
    # Cursor
    "Cursor",
    "ParseStream",
    # Nodes
    "Node",
    "NodeType",
    "nodes_to_source",
    "walk_nodes",
    # Expressions
    "BlockExpr",
    "ExpressionParser",
    "LitExpr",
    "PathExpr",
    "parse_block_expr",
    # Tokens
    "Delimiter",
    "Group",
    "Ident",
    "Literal",
    "Punct",
    "Span",
    "TokenTree",
    # Errors
    "PxmlUserError",
    "ParseError",
    "OrphanCloseTag",
    "UnterminatedOpenTag",
    "TagNameMismatch",
    "GrammarMismatch",
    "MalformedAttribute",
    "MalformedEmbeddedExpression",
    "ConfigError",
]
