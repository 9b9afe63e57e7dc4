"""Formatter that renders a NoxDocument as engine markup."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .document import NoxDocument
from .nodes import Element, Expression, Operand, Property, Value

COPY_TAG = "copy"
# "&" must be replaced first
ATTRIBUTE_ESCAPES = (("&", "&amp;"), ("<", "&lt;"), (">", "&gt;"), ('"', "&quot;"))


@dataclass(slots=True)
class OperationTag:
    """One accumulator step: either a literal body or a ``src``/``trait`` reference."""

    name: str
    body: str | None = None
    attributes: dict[str, str] = field(default_factory=dict)


def operand_tag(name: str, operand: Operand) -> OperationTag:
    match operand.kind:
        case "literal":
            return OperationTag(name=name, body=operand.text)
        case "trait":
            return OperationTag(name=name, attributes={"src": operand.source.reference, "trait": operand.trait})


def compile_operations(expression: Expression) -> list[OperationTag]:
    tags = [operand_tag(COPY_TAG, expression.first)]
    for operation in expression.rest:
        tags.append(operand_tag(operation.operator.value, operation.operand))
    return tags


def escape_attribute(value: str) -> str:
    for char, entity in ATTRIBUTE_ESCAPES:
        value = value.replace(char, entity)
    return value


@dataclass
class NoxFormatter:
    indent: str = "\t"

    def format_document(self, document: NoxDocument) -> str:
        lines: list[str] = []
        for node in document.nodes:
            lines.extend(self.format_node(node, level=0))
        if not lines:
            return ""
        return "\n".join(lines) + "\n"

    def format_node(self, node: Element | Property, level: int) -> list[str]:
        match node.node_type:
            case "element":
                return self.format_element(node, level)
            case "property":
                return [f"{self._indent(level)}{self.format_property(node)}"]

    def format_element(self, element: Element, level: int) -> list[str]:
        opening = f"<{element.tag}{self._format_attributes(element.attributes)}>"
        closing = f"</{element.tag}>"
        if not element.children:
            return [f"{self._indent(level)}{opening}{closing}"]
        lines = [f"{self._indent(level)}{opening}"]
        for child in element.children:
            lines.extend(self.format_node(child, level + 1))
        lines.append(f"{self._indent(level)}{closing}")
        return lines

    def format_property(self, prop: Property) -> str:
        return f"<{prop.key}>{self._format_value(prop.value)}</{prop.key}>"

    def _format_value(self, value: Value) -> str:
        match value.kind:
            case "entity":
                return value.text
            case "number" | "string":
                return value.text
            case "expression":
                if not value.rest and value.first.kind == "literal":
                    return value.first.text
                return "".join(self._format_operation(tag) for tag in compile_operations(value))

    def _format_operation(self, tag: OperationTag) -> str:
        if tag.body is None:
            return f"<{tag.name}{self._format_attributes(tag.attributes.items())} />"
        return f"<{tag.name}>{tag.body}</{tag.name}>"

    def _format_attributes(self, attributes: Iterable[tuple[str, str]]) -> str:
        return "".join(f' {key}="{escape_attribute(value)}"' for key, value in attributes)

    def _indent(self, level: int) -> str:
        return "" if level <= 0 else self.indent * level


__all__ = ["NoxFormatter", "OperationTag", "compile_operations", "escape_attribute"]
