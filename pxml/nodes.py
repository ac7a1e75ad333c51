"""
Узлы дерева разметки.

Единственный тип результата парсера - Node, размеченный NodeType.
Дерево строго иерархическое: у каждого узла ровно один владелец,
обратных ссылок нет. Узлы неизменяемы; уплощение строит новый узел
через dataclasses.replace.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple

from .expr import Expr


class NodeType(enum.Enum):
    """Типы узлов."""
    ELEMENT = "element"
    TEXT = "text"
    BLOCK = "block"
    ATTRIBUTE = "attribute"


TEXT_NODE_NAME = "#text"
BLOCK_NODE_NAME = "#block"


@dataclass(frozen=True)
class Node:
    """
    Узел дерева.

    - ELEMENT: имя тега, атрибуты, дочерние узлы; значения нет
    - TEXT: литерал в value
    - BLOCK: непрозрачное выражение в value
    - ATTRIBUTE: имя и необязательное значение
    """
    node_type: NodeType
    node_name: str
    node_value: Optional[Expr] = None
    attributes: Tuple["Node", ...] = ()
    child_nodes: Tuple["Node", ...] = ()

    @classmethod
    def element(cls, name: str, attributes: Iterable["Node"] = (), child_nodes: Iterable["Node"] = ()) -> "Node":
        return cls(NodeType.ELEMENT, name, None, tuple(attributes), tuple(child_nodes))

    @classmethod
    def text(cls, value: Expr) -> "Node":
        return cls(NodeType.TEXT, TEXT_NODE_NAME, value)

    @classmethod
    def block(cls, value: Expr) -> "Node":
        return cls(NodeType.BLOCK, BLOCK_NODE_NAME, value)

    @classmethod
    def attribute(cls, name: str, value: Optional[Expr] = None) -> "Node":
        return cls(NodeType.ATTRIBUTE, name, value)

    def walk(self) -> Iterator["Node"]:
        """Обход в прямом порядке: узел, затем его потомки (без атрибутов)."""
        yield self
        for child in self.child_nodes:
            yield from child.walk()

    def to_dict(self) -> Dict[str, Any]:
        """Представление без позиций - для сравнения и сериализации."""
        result: Dict[str, Any] = {
            "type": self.node_type.value,
            "name": self.node_name,
            "value": self.node_value.to_source() if self.node_value is not None else None,
        }
        if self.node_type is NodeType.ELEMENT:
            result["attributes"] = [a.to_dict() for a in self.attributes]
            result["children"] = [c.to_dict() for c in self.child_nodes]
        return result

    def to_source(self) -> str:
        """
        Печатает узел обратно в синтаксис разметки.

        Элемент без дочерних узлов печатается самозакрывающимся.
        """
        if self.node_type is NodeType.ATTRIBUTE:
            if self.node_value is None:
                return self.node_name
            return f"{self.node_name}={self.node_value.to_source()}"

        if self.node_type is not NodeType.ELEMENT:
            return self.node_value.to_source() if self.node_value is not None else ""

        head = " ".join([self.node_name] + [a.to_source() for a in self.attributes])
        if not self.child_nodes:
            return f"<{head}/>"
        inner = " ".join(c.to_source() for c in self.child_nodes)
        return f"<{head}>{inner}</{self.node_name}>"


def nodes_to_source(nodes: Iterable[Node]) -> str:
    """Печатает последовательность корневых узлов."""
    return " ".join(n.to_source() for n in nodes)


def walk_nodes(nodes: Iterable[Node]) -> Iterator[Node]:
    """Прямой обход последовательности корневых узлов."""
    for node in nodes:
        yield from node.walk()


__all__ = [
    "NodeType",
    "Node",
    "TEXT_NODE_NAME",
    "BLOCK_NODE_NAME",
    "nodes_to_source",
    "walk_nodes",
]
