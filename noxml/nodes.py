"""Node definitions for the .nox document tree."""

from collections.abc import Mapping
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NoxModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class Operator(str, Enum):
    ADD = "add"
    SUB = "sub"
    MULT = "mult"
    DIV = "div"
    MOD = "mod"

    @classmethod
    def from_symbol(cls, symbol: str) -> "Operator":
        return OPERATOR_SYMBOLS[symbol]


OPERATOR_SYMBOLS: dict[str, Operator] = {
    "+": Operator.ADD,
    "-": Operator.SUB,
    "*": Operator.MULT,
    "/": Operator.DIV,
    "%": Operator.MOD,
}


class SourceKind(str, Enum):
    SELF = "self"
    CONTAINER = "container"
    NAMED = "named"


class TraitSource(NoxModel):
    kind: SourceKind
    name: str | None = None

    @classmethod
    def from_name(cls, name: str) -> "TraitSource":
        if name == "me":
            return cls(kind=SourceKind.SELF)
        if name == "parent":
            return cls(kind=SourceKind.CONTAINER)
        return cls(kind=SourceKind.NAMED, name=name)

    @property
    def reference(self) -> str:
        match self.kind:
            case SourceKind.SELF:
                return "me()"
            case SourceKind.CONTAINER:
                return "parent()"
            case SourceKind.NAMED:
                return f"{self.name}()"


class LiteralOperand(NoxModel):
    kind: Literal["literal"] = "literal"
    text: str


class TraitAccess(NoxModel):
    kind: Literal["trait"] = "trait"
    source: TraitSource
    trait: str


Operand = Annotated[Union[LiteralOperand, TraitAccess], Field(discriminator="kind")]


class Operation(NoxModel):
    operator: Operator
    operand: Operand


class Entity(NoxModel):
    kind: Literal["entity"] = "entity"
    name: str

    @property
    def text(self) -> str:
        return f"&{self.name};"


class Number(NoxModel):
    kind: Literal["number"] = "number"
    text: str


class StringLiteral(NoxModel):
    kind: Literal["string"] = "string"
    text: str


class Expression(NoxModel):
    """Left-to-right accumulator chain: ``first`` seeds, each operation applies in order."""

    kind: Literal["expression"] = "expression"
    first: Operand
    rest: tuple[Operation, ...] = ()


Value = Annotated[Union[Entity, Number, StringLiteral, Expression], Field(discriminator="kind")]


class Property(NoxModel):
    node_type: Literal["property"] = "property"
    key: str
    value: Value
    line: int = 0
    column: int = 0


class Element(NoxModel):
    node_type: Literal["element"] = "element"
    tag: str
    attributes: tuple[tuple[str, str], ...] = ()
    children: tuple["Node", ...] = ()
    line: int = 0
    column: int = 0

    @field_validator("attributes", mode="before")
    @classmethod
    def _freeze_attributes(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return tuple(value.items())
        return value

    def get_attribute(self, name: str) -> Optional[str]:
        return dict(self.attributes).get(name)


Node = Annotated[Union[Element, Property], Field(discriminator="node_type")]

Element.model_rebuild()
