"""Block lexer: turns .nox source text into a tree of indentation blocks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NotRequired, Optional, TypedDict

from noxml.errors import LexerError, ParseException
from noxml.logger import Logger
from noxml.utils import resolve_config

COMMENT_MARKER = "//"
BODY_MARKER = ":"


@dataclass(slots=True)
class SourceLine:
    indent: str
    text: str
    line: int

    @property
    def column(self) -> int:
        return len(self.indent) + 1


@dataclass(slots=True)
class Block:
    header: str
    line: int
    column: int
    children: list["Block"] = field(default_factory=list)

    @property
    def opens_body(self) -> bool:
        return self.header.endswith(BODY_MARKER)

    def add_child(self, block: "Block") -> None:
        self.children.append(block)


@dataclass(slots=True)
class _Scope:
    indent: str
    block: Block


class LexerConfig(TypedDict):
    enable_logger: NotRequired[bool]


class LexerConfigRequired(TypedDict):
    enable_logger: bool


DEFAULT_CONFIG: LexerConfigRequired = {"enable_logger": False}


def strip_comment(text: str) -> str:
    """Drop a trailing ``// ...`` comment, ignoring markers inside quotes or after a backslash.

    A single quote only opens a quoted run when it starts an attribute value
    (``name='...'``), so apostrophes in bare text do not hide comments.
    """
    quote: str | None = None
    position = 0
    while position < len(text):
        char = text[position]
        if char == "\\":
            position += 2
            continue
        if quote is not None:
            if char == quote:
                quote = None
        elif char == '"' or (char == "'" and text[position - 1 : position] == "="):
            quote = char
        elif text.startswith(COMMENT_MARKER, position):
            return text[:position]
        position += 1
    return text


class BlockLexer:
    def __init__(self, input: str, config: Optional[LexerConfig] = None):
        self.input = input
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        self.logger = Logger("lexer", is_enabled=self.config["enable_logger"]).logger
        self.unit: str | None = None

    def source_lines(self) -> list[SourceLine]:
        lines: list[SourceLine] = []
        for number, raw in enumerate(self.input.splitlines(), start=1):
            text = strip_comment(raw).rstrip()
            if not text.strip():
                continue
            body = text.lstrip()
            indent = text[: len(text) - len(body)]
            if " " in indent and "\t" in indent:
                raise LexerError("indentation mixes tabs and spaces", number, 1)
            lines.append(SourceLine(indent=indent, text=body, line=number))
        return lines

    def tokenize(self) -> Block:
        """Build the block tree; the returned root block has an empty header."""
        self.logger.info("Starting block lexing")
        root = Block(header="", line=0, column=0)
        scopes = [_Scope(indent="", block=root)]
        try:
            for source_line in self.source_lines():
                parent = self._resolve_parent(scopes, source_line)
                block = Block(header=source_line.text, line=source_line.line, column=source_line.column)
                self.logger.debug(f"Block '{block.header}' at line {block.line} under '{parent.header}'")
                parent.add_child(block)
        except (LexerError, ParseException) as e:
            self.logger.error(e)
            raise
        self.logger.info("Block lexing complete")
        return root

    def _resolve_parent(self, scopes: list[_Scope], source_line: SourceLine) -> Block:
        indent = source_line.indent
        current = scopes[-1]
        if indent == current.indent:
            return current.block
        if len(indent) > len(current.indent):
            return self._open_scope(scopes, source_line)
        if len(indent) == len(current.indent):
            raise LexerError("inconsistent indentation characters", source_line.line, 1)
        while len(scopes) > 1:
            scopes.pop()
            if scopes[-1].indent == indent:
                return scopes[-1].block
        raise LexerError("inconsistent dedent", source_line.line, source_line.column)

    def _open_scope(self, scopes: list[_Scope], source_line: SourceLine) -> Block:
        current = scopes[-1]
        siblings = current.block.children
        if not siblings:
            raise ParseException("unexpected indent", source_line.line, source_line.column)
        owner = siblings[-1]
        if not source_line.indent.startswith(current.indent):
            raise LexerError("inconsistent indentation characters", source_line.line, 1)
        step = source_line.indent[len(current.indent) :]
        if self.unit is None:
            self.unit = step
            self.logger.debug(f"Indentation unit set to {step!r}")
        elif step != self.unit:
            raise LexerError(
                f"inconsistent indentation unit: expected {self.unit!r}, got {step!r}",
                source_line.line,
                1,
            )
        if not owner.opens_body:
            raise ParseException("unexpected indent", source_line.line, source_line.column)
        scopes.append(_Scope(indent=source_line.indent, block=owner))
        return owner


__all__ = ["Block", "BlockLexer", "LexerConfig", "SourceLine", "strip_comment"]
