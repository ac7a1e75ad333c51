"""
Tests for node helpers: walking, plain-data form and printing.
"""

import pytest

from pxml import LitExpr, Node, NodeType, PathExpr, nodes_to_source
from tests.infrastructure import parse_markup


class TestNodeHelpers:

    def test_walk_excludes_attributes(self):
        """Test walk() visits content nodes only, in pre-order"""
        [root] = parse_markup('<a x=1><b>"t"</b>{c}</a>')

        assert [n.node_name for n in root.walk()] == ["a", "b", "#text", "#block"]

    def test_to_dict(self):
        """Test span-free dictionary form"""
        [root] = parse_markup('<a x=1 flag><b>"t"</b></a>')

        assert root.to_dict() == {
            "type": "element",
            "name": "a",
            "value": None,
            "attributes": [
                {"type": "attribute", "name": "x", "value": "1"},
                {"type": "attribute", "name": "flag", "value": None},
            ],
            "children": [
                {
                    "type": "element",
                    "name": "b",
                    "value": None,
                    "attributes": [],
                    "children": [{"type": "text", "name": "#text", "value": '"t"'}],
                },
            ],
        }

    def test_to_source_element(self):
        """Test printing of elements and attributes"""
        node = Node.element(
            "a",
            [Node.attribute("href", PathExpr(("cfg", "url"))), Node.attribute("hidden")],
            [Node.text(LitExpr('"x"'))],
        )

        assert node.to_source() == '<a href=cfg.url hidden>"x"</a>'

    def test_to_source_empty_element_is_self_closing(self):
        """Test element without children prints self-closing"""
        assert Node.element("br").to_source() == "<br/>"

    def test_node_types(self):
        """Test factory helpers set the node type and name"""
        assert Node.text(LitExpr("1")).node_type == NodeType.TEXT
        assert Node.attribute("k").node_type == NodeType.ATTRIBUTE
        assert Node.element("e").node_name == "e"


class TestRoundTrip:

    @pytest.mark.parametrize("source", [
        "<a/>",
        '<a x=1 y={expr}/>',
        '<ul class="menu"><li key=1>"one"</li><li key={k}>{label}</li></ul>',
        '<p>"Hello, " {user.name} <b when={x > 1}>"!"</b></p> "tail" 3.5',
        "<input disabled value=form.data.name/>",
    ])
    def test_reparse_printed_tree(self, source):
        """Test re-parsing printed output yields an equal tree"""
        nodes = parse_markup(source)

        assert parse_markup(nodes_to_source(nodes)) == nodes
