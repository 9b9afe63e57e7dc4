# tests/test_parser.py
"""
Tests for header classification and document construction.
"""

import pytest
from pydantic import ValidationError

from noxml.errors import ParseException
from noxml.lexer import Block
from noxml.nodes import Element, Entity, Expression, Number, Property, StringLiteral
from noxml.parser import ElementHeader, HeaderScanner, PropertyHeader
from tests.conftest import MENU_NOX, nox


def classify(header: str):
    return HeaderScanner(Block(header=header, line=1, column=1)).classify()


class TestHeaderClassification:

    def test_bare_element(self):
        assert classify("rect:") == ElementHeader(tag="rect")

    def test_element_with_attributes(self):
        header = classify('rect name="container" id="1":')
        assert isinstance(header, ElementHeader)
        assert header.tag == "rect"
        assert header.attributes == {"name": "container", "id": "1"}

    def test_attribute_order_preserved(self):
        header = classify('button z="1" a="2" m="3":')
        assert list(header.attributes) == ["z", "a", "m"]

    def test_whitespace_before_colon(self):
        header = classify('rect name="a"  :')
        assert header == ElementHeader(tag="rect", attributes={"name": "a"})

    def test_escaped_quote_in_attribute(self):
        header = classify('text value="say \\"hi\\"":')
        assert header.attributes["value"] == 'say "hi"'

    def test_property(self):
        header = classify("width: 500")
        assert header == PropertyHeader(key="width", raw_value="500", value_offset=7)

    def test_property_space_before_colon(self):
        header = classify("width :   me().x")
        assert isinstance(header, PropertyHeader)
        assert header.raw_value == "me().x"
        assert header.value_offset == 10

    def test_first_colon_separates(self):
        header = classify("label: a:b")
        assert header == PropertyHeader(key="label", raw_value="a:b", value_offset=7)

    def test_hyphenated_identifier(self):
        assert classify("menu-item:") == ElementHeader(tag="menu-item")


class TestHeaderErrors:

    def test_missing_identifier(self):
        with pytest.raises(ParseException) as exc:
            classify("123: x")
        assert exc.value.column == 1

    def test_unterminated_attribute(self):
        with pytest.raises(ParseException) as exc:
            classify('rect name="container:')
        assert "unterminated" in exc.value.message
        assert exc.value.column == 11

    def test_unescaped_quote(self):
        with pytest.raises(ParseException):
            classify('rect name="a"b":')

    def test_unquoted_attribute(self):
        with pytest.raises(ParseException):
            classify("rect name=container:")

    def test_missing_colon(self):
        with pytest.raises(ParseException) as exc:
            classify('rect name="a"')
        assert "':'" in exc.value.message

    def test_missing_colon_without_attributes(self):
        with pytest.raises(ParseException):
            classify("rect")

    def test_content_after_element_colon(self):
        with pytest.raises(ParseException) as exc:
            classify('rect name="a": extra')
        assert "after element header" in exc.value.message
        assert exc.value.column == 16

    def test_duplicate_attribute(self):
        with pytest.raises(ParseException) as exc:
            classify('rect name="a" name="b":')
        assert "duplicate" in exc.value.message

    def test_single_quoted_attribute(self):
        header = classify("""text value='say "hi"' name='it\\'s':""")
        assert header.attributes == {"value": 'say "hi"', "name": "it's"}

    def test_mismatched_quotes_unterminated(self):
        with pytest.raises(ParseException) as exc:
            classify("""rect name='a":""")
        assert "unterminated" in exc.value.message

    def test_unknown_attribute_escape(self):
        with pytest.raises(ParseException):
            classify('rect name="a\\nb":')


class TestDocument:

    def test_nodes_are_typed(self, compiler):
        document = compiler.parse(MENU_NOX)
        assert len(document.nodes) == 1
        root = document.nodes[0]
        assert isinstance(root, Element)
        assert root.tag == "rect"
        assert root.attributes == (("name", "main_menu"), ("id", "1"))
        assert root.get_attribute("id") == "1"
        assert root.get_attribute("missing") is None

    def test_children_interleaving_preserved(self, compiler):
        document = compiler.parse(MENU_NOX)
        kinds = [(child.node_type, getattr(child, "tag", None) or child.key) for child in document.nodes[0].children]
        assert kinds == [
            ("property", "locus"),
            ("property", "width"),
            ("property", "height"),
            ("element", "image"),
            ("element", "text"),
        ]

    def test_property_values_classified(self, compiler):
        document = compiler.parse(MENU_NOX)
        values = {prop.key: prop.value for prop in document.nodes[0].children if isinstance(prop, Property)}
        assert values["locus"] == Entity(name="true")
        assert values["width"] == Number(text="640")
        assert isinstance(values["height"], Expression)

    def test_walk_is_depth_first(self, compiler):
        document = compiler.parse(MENU_NOX)
        order = [node.tag if isinstance(node, Element) else node.key for node in document.walk()]
        assert order == [
            "rect", "locus", "width", "height",
            "image", "filename", "x", "depth",
            "text", "string", "x",
        ]
        assert [element.tag for element in document.elements()] == ["rect", "image", "text"]

    def test_string_literal_property(self, compiler):
        document = compiler.parse("filename: some_picture\\.dds\n")
        assert document.nodes[0].value == StringLiteral(text="some_picture.dds")

    def test_positions_recorded(self, compiler):
        document = compiler.parse("rect:\n    width: 5\n")
        width = document.nodes[0].children[0]
        assert (width.line, width.column) == (2, 5)

    def test_empty_element_body(self, compiler):
        document = compiler.parse("rect:\nimage:\n")
        assert [node.children for node in document.nodes] == [(), ()]

    def test_multiple_roots(self, compiler):
        document = compiler.parse("rect:\n  x: 1\nimage:\n")
        assert [node.tag for node in document.nodes] == ["rect", "image"]

    def test_property_cannot_contain_children(self, compiler):
        with pytest.raises(ParseException) as exc:
            compiler.parse(nox('''
                rect:
                    label: a:
                        x: 1
            '''))
        assert exc.value.message == "property cannot contain children"
        assert exc.value.line == 3

    def test_document_is_immutable(self, compiler):
        document = compiler.parse("x: 1\n")
        with pytest.raises(ValidationError):
            document.nodes[0].key = "y"

    def test_element_attributes_are_read_only(self, compiler):
        element = compiler.parse('rect name="a":\n').nodes[0]
        assert isinstance(element.attributes, tuple)
        with pytest.raises(TypeError):
            element.attributes["name"] = "b"  # type: ignore[index]
        assert element.get_attribute("name") == "a"

    def test_element_accepts_mapping_of_attributes(self):
        element = Element(tag="rect", attributes={"b": "1", "a": "2"})
        assert element.attributes == (("b", "1"), ("a", "2"))
