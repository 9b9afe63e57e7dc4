"""Header classification and document tree construction.

Each block header is either an element header::

    rect name="container" id="1":

or a property header::

    width: me().height / 16 * 9

Element headers own the indented blocks that follow them; property headers
never do.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import NotRequired, Optional, TypedDict

from noxml.document import NoxDocument
from noxml.errors import CompileError, ParseException
from noxml.lexer import Block
from noxml.logger import Logger
from noxml.nodes import Element, Property
from noxml.utils import resolve_config
from noxml.values import ValueClassifier

IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_\-]*")
QUOTES = ('"', "'")
ATTRIBUTE_ESCAPES = {'"': '"', "'": "'", "\\": "\\"}


@dataclass(slots=True)
class ElementHeader:
    tag: str
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class PropertyHeader:
    key: str
    raw_value: str
    value_offset: int


class ParserConfig(TypedDict):
    enable_logger: NotRequired[bool]


class ParserConfigRequired(TypedDict):
    enable_logger: bool


DEFAULT_CONFIG: ParserConfigRequired = {"enable_logger": False}


class HeaderScanner:
    """Scans one header line; offsets are reported as columns relative to the block."""

    def __init__(self, block: Block):
        self.block = block
        self.text = block.header
        self.position = 0

    @property
    def has_more_chars(self) -> bool:
        return self.position < len(self.text)

    @property
    def char(self) -> str:
        return self.text[self.position] if self.has_more_chars else "\0"

    def error(self, message: str, position: Optional[int] = None) -> ParseException:
        offset = self.position if position is None else position
        return ParseException(message, self.block.line, self.block.column + offset)

    def skip_whitespace(self) -> None:
        while self.has_more_chars and self.char.isspace():
            self.position += 1

    def identifier(self, expected: str) -> str:
        match = IDENTIFIER_PATTERN.match(self.text, self.position)
        if not match:
            found = self.char if self.has_more_chars else "end of line"
            raise self.error(f"expected {expected}, found '{found}'")
        self.position = match.end()
        return match.group()

    def quoted(self) -> str:
        start = self.position
        quote = self.char
        if quote not in QUOTES:
            raise self.error("attribute value must be enclosed in quotes")
        self.position += 1
        buffer: list[str] = []
        while self.has_more_chars:
            char = self.char
            if char == quote:
                self.position += 1
                return "".join(buffer)
            if char == "\\":
                escaped = self.text[self.position + 1 : self.position + 2]
                if escaped not in ATTRIBUTE_ESCAPES:
                    raise self.error(f"unrecognized escape '\\{escaped}' in attribute value")
                buffer.append(ATTRIBUTE_ESCAPES[escaped])
                self.position += 2
                continue
            buffer.append(char)
            self.position += 1
        raise self.error("unterminated quoted attribute", start)

    def classify(self) -> ElementHeader | PropertyHeader:
        name = self.identifier("element tag or property key")
        self.skip_whitespace()
        if self.char == ":":
            self.position += 1
            rest = self.text[self.position :]
            raw_value = rest.strip()
            if not raw_value:
                return ElementHeader(tag=name)
            offset = self.position + (len(rest) - len(rest.lstrip()))
            return PropertyHeader(key=name, raw_value=raw_value, value_offset=offset)
        if not self.has_more_chars:
            raise self.error(f"expected ':' after '{name}'")
        return ElementHeader(tag=name, attributes=self.attributes())

    def attributes(self) -> dict[str, str]:
        attributes: dict[str, str] = {}
        while True:
            start = self.position
            key = self.identifier("attribute name or ':'")
            if self.char != "=":
                raise self.error(f"expected '=' after attribute '{key}'")
            self.position += 1
            value = self.quoted()
            if key in attributes:
                raise self.error(f"duplicate attribute '{key}'", start)
            attributes[key] = value
            if self.has_more_chars and not (self.char.isspace() or self.char == ":"):
                raise self.error(f"unexpected '{self.char}' after attribute '{key}' (unescaped quote?)")
            self.skip_whitespace()
            if self.char == ":":
                self.position += 1
                break
            if not self.has_more_chars:
                raise self.error("expected ':' at end of element header")
        if self.text[self.position :].strip():
            self.skip_whitespace()
            raise self.error("unexpected content after element header")
        return attributes


class NoxParser:
    def __init__(self, root: Block, config: Optional[ParserConfig] = None):
        self.root = root
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        self.logger = Logger("parser", is_enabled=self.config["enable_logger"]).logger
        self.classifier = ValueClassifier(config={"enable_logger": self.config["enable_logger"]})

    def parse_document(self) -> NoxDocument:
        self.logger.info("Parser initialized")
        try:
            nodes = tuple(self._parse_block(block) for block in self.root.children)
        except CompileError as e:
            self.logger.error(e)
            raise
        self.logger.info("Blocks parsed into document")
        return NoxDocument(nodes=nodes)

    def classify_header(self, block: Block) -> ElementHeader | PropertyHeader:
        return HeaderScanner(block).classify()

    def _parse_block(self, block: Block) -> Element | Property:
        header = self.classify_header(block)
        match header:
            case ElementHeader(tag=tag, attributes=attributes):
                self.logger.debug(f"Element <{tag}> at line {block.line}")
                children = tuple(self._parse_block(child) for child in block.children)
                return Element(
                    tag=tag,
                    attributes=attributes,
                    children=children,
                    line=block.line,
                    column=block.column,
                )
            case PropertyHeader(key=key, raw_value=raw_value, value_offset=offset):
                if block.children:
                    child = block.children[0]
                    raise ParseException("property cannot contain children", child.line, child.column)
                value = self.classifier.classify(raw_value, line=block.line, column=block.column + offset)
                self.logger.debug(f"Property '{key}' = {value.kind} at line {block.line}")
                return Property(key=key, value=value, line=block.line, column=block.column)


__all__ = ["ElementHeader", "HeaderScanner", "NoxParser", "ParserConfig", "PropertyHeader"]
