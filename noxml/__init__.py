"""Compiler from indentation-structured .nox menu layouts to engine UI markup."""

from .errors import (
    CompileError,
    EscapeError,
    ExpressionError,
    LexerError,
    ParseException,
    ValueClassificationError,
)
from .nodes import (
    Element,
    Entity,
    Expression,
    LiteralOperand,
    Number,
    Operation,
    Operator,
    Property,
    SourceKind,
    StringLiteral,
    TraitAccess,
    TraitSource,
)
from .document import NoxDocument
from .lexer import Block, BlockLexer
from .parser import NoxParser
from .values import ValueClassifier, classify_value
from .expressions import ExpressionParser, parse_expression
from .formatter import NoxFormatter, compile_operations
from .compiler import CompilerConfig, NoxCompiler, compile_source

__all__ = [
    "CompileError",
    "EscapeError",
    "ExpressionError",
    "LexerError",
    "ParseException",
    "ValueClassificationError",
    "Element",
    "Entity",
    "Expression",
    "LiteralOperand",
    "Number",
    "Operation",
    "Operator",
    "Property",
    "SourceKind",
    "StringLiteral",
    "TraitAccess",
    "TraitSource",
    "NoxDocument",
    "Block",
    "BlockLexer",
    "NoxParser",
    "ValueClassifier",
    "classify_value",
    "ExpressionParser",
    "parse_expression",
    "NoxFormatter",
    "compile_operations",
    "CompilerConfig",
    "NoxCompiler",
    "compile_source",
]
