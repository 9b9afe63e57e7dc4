"""Classification of raw property values into typed value variants.

Rules are tried in order and the first match wins:

1. ``&name;``                      -> Entity
2. signed integer or decimal       -> Number
3. no unescaped ``.``, operator or call token -> StringLiteral (escapes decoded)
4. anything else                   -> Expression
"""

from __future__ import annotations

import re
from typing import NotRequired, Optional, TypedDict

from noxml.errors import EscapeError, ValueClassificationError
from noxml.escapes import decode_string, mask_escapes
from noxml.expressions import NUMBER_PATTERN, ExpressionParser
from noxml.logger import Logger
from noxml.nodes import Entity, Number, StringLiteral, Value
from noxml.utils import resolve_config

ENTITY_PATTERN = re.compile(r"&(?P<name>[A-Za-z_][A-Za-z0-9_\-]*);")
CALL_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\(\s*\)")
# an operator standing apart from its neighbours, or wedged between two numeric operands
OPERATOR_TOKEN_PATTERN = re.compile(
    r"(?:^|(?<=[\s)]))[+\-*/%]"
    r"|[+\-*/%](?=\s|$)"
    r"|(?<=[\d)])[+\-*/%](?=[\d.+\-])"
)


class ClassifierConfig(TypedDict):
    enable_logger: NotRequired[bool]


class ClassifierConfigRequired(TypedDict):
    enable_logger: bool


DEFAULT_CONFIG: ClassifierConfigRequired = {"enable_logger": False}


def looks_like_expression(masked: str) -> bool:
    return "." in masked or bool(CALL_PATTERN.search(masked)) or bool(OPERATOR_TOKEN_PATTERN.search(masked))


class ValueClassifier:
    def __init__(self, config: Optional[ClassifierConfig] = None):
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        self.logger = Logger("values", is_enabled=self.config["enable_logger"]).logger

    def classify(self, raw: str, line: int = 0, column: int = 1) -> Value:
        entity = ENTITY_PATTERN.fullmatch(raw)
        if entity:
            self.logger.debug(f"'{raw}' classified as entity")
            return Entity(name=entity["name"])
        if raw.startswith("&"):
            raise ValueClassificationError(f"malformed entity reference '{raw}'", line, column)
        if NUMBER_PATTERN.fullmatch(raw):
            self.logger.debug(f"'{raw}' classified as number")
            return Number(text=raw)
        masked, invalid = mask_escapes(raw)
        if not looks_like_expression(masked):
            if invalid:
                offset, sequence = invalid[0]
                if len(sequence) < 2:
                    raise EscapeError("dangling backslash at end of value", line, column + offset)
                raise EscapeError(f"unrecognized escape sequence '{sequence}'", line, column + offset)
            self.logger.debug(f"'{raw}' classified as string literal")
            return StringLiteral(text=decode_string(raw))
        self.logger.debug(f"'{raw}' classified as expression")
        return ExpressionParser(raw, line=line, column=column).parse()


def classify_value(raw: str, line: int = 0, column: int = 1) -> Value:
    return ValueClassifier().classify(raw, line=line, column=column)


__all__ = ["ValueClassifier", "classify_value", "decode_string", "mask_escapes"]
