"""Expression parser for computed property values.

An expression is a flat chain ``operand (operator operand)*`` reduced left
to right by the target runtime, so no precedence is applied here: the
chain preserves source order exactly.

Operands are either numeric literals (``16``, ``-0.5``, ``0\\.0``) or trait
accesses (``me().width``, ``parent().height``, ``button_ok().x``). Backslash
escapes inside an operand are decoded before it is matched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto

from noxml.errors import EscapeError, ExpressionError
from noxml.escapes import decode_string, mask_escapes
from noxml.nodes import (
    OPERATOR_SYMBOLS,
    Expression,
    LiteralOperand,
    Operand,
    Operation,
    Operator,
    TraitAccess,
    TraitSource,
)

NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d+)?|\.\d+)")
TRAIT_PATTERN = re.compile(r"(?P<source>[A-Za-z_][A-Za-z0-9_]*)\(\s*\)\.(?P<trait>[A-Za-z_][A-Za-z0-9_]*)")


class TokenType(Enum):
    OPERAND = auto()
    OPERATOR = auto()


@dataclass(slots=True)
class ExpressionToken:
    token_type: TokenType
    value: str
    offset: int


class ExpressionParser:
    def __init__(self, text: str, line: int = 0, column: int = 1):
        self.text = text
        self.line = line
        self.column = column
        self.position = 0

    @property
    def has_more_chars(self) -> bool:
        return self.position < len(self.text)

    @property
    def char(self) -> str:
        return self.text[self.position] if self.has_more_chars else "\0"

    def _peek(self, steps: int = 1) -> str:
        if self.position + steps < len(self.text):
            return self.text[self.position + steps]
        return "\0"

    def _error(self, message: str, offset: int) -> ExpressionError:
        return ExpressionError(message, self.line, self.column + offset)

    def _is_sign(self) -> bool:
        return self.char in "+-" and (self._peek().isdigit() or (self._peek() == "." and self._peek(2).isdigit()))

    def tokenize(self) -> list[ExpressionToken]:
        tokens: list[ExpressionToken] = []
        expect_operand = True
        while self.has_more_chars:
            if self.char.isspace():
                self.position += 1
            elif expect_operand:
                tokens.append(self._read_operand())
                expect_operand = False
            elif self.char in OPERATOR_SYMBOLS:
                tokens.append(ExpressionToken(TokenType.OPERATOR, self.char, self.position))
                self.position += 1
                expect_operand = True
            else:
                start = self.position
                trailing = self.text[start:].split()[0]
                raise self._error(f"unexpected token '{trailing}' after complete operand", start)
        if not tokens:
            raise self._error("empty expression", 0)
        if expect_operand:
            raise self._error(f"expression ends with operator '{tokens[-1].value}'", tokens[-1].offset)
        return tokens

    def _read_operand(self) -> ExpressionToken:
        start = self.position
        if self._is_sign():
            self.position += 1
        elif self.char in OPERATOR_SYMBOLS:
            raise self._error(f"expected operand but found operator '{self.char}'", start)
        depth = 0
        while self.has_more_chars:
            char = self.char
            if char == "\\":
                self.position += 2
                continue
            if char == "(":
                depth += 1
            elif char == ")":
                if depth == 0:
                    raise self._error("unbalanced ')' in call", self.position)
                depth -= 1
            elif depth == 0 and (char.isspace() or char in OPERATOR_SYMBOLS):
                break
            self.position += 1
        if depth:
            raise self._error("unterminated call: missing ')'", start)
        return ExpressionToken(TokenType.OPERAND, self.text[start : self.position], start)

    def decode_operand(self, token: ExpressionToken) -> str:
        _, invalid = mask_escapes(token.value)
        if invalid:
            offset, sequence = invalid[0]
            raise EscapeError(
                f"unrecognized escape sequence '{sequence}'", self.line, self.column + token.offset + offset
            )
        return decode_string(token.value)

    def resolve_operand(self, token: ExpressionToken) -> Operand:
        text = self.decode_operand(token)
        if NUMBER_PATTERN.fullmatch(text):
            return LiteralOperand(text=text)
        match = TRAIT_PATTERN.fullmatch(text)
        if match:
            return TraitAccess(source=TraitSource.from_name(match["source"]), trait=match["trait"])
        if "(" in text or ")" in text:
            raise self._error(f"malformed trait access '{text}'", token.offset)
        raise self._error(f"unrecognized operand '{text}'", token.offset)

    def parse(self) -> Expression:
        tokens = self.tokenize()
        first = self.resolve_operand(tokens[0])
        rest: list[Operation] = []
        for operator_token, operand_token in zip(tokens[1::2], tokens[2::2]):
            rest.append(
                Operation(
                    operator=Operator.from_symbol(operator_token.value),
                    operand=self.resolve_operand(operand_token),
                )
            )
        return Expression(first=first, rest=tuple(rest))


def parse_expression(text: str, line: int = 0, column: int = 1) -> Expression:
    return ExpressionParser(text, line=line, column=column).parse()


__all__ = ["ExpressionParser", "ExpressionToken", "TokenType", "parse_expression"]
