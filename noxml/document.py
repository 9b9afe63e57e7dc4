"""Document container for a compiled .nox source."""

from typing import Iterator

from pydantic import Field

from .nodes import Element, Node, NoxModel, Property


class NoxDocument(NoxModel):
    nodes: tuple[Node, ...] = Field(default_factory=tuple)

    def walk(self) -> Iterator[Element | Property]:
        stack = list(reversed(self.nodes))
        while stack:
            node = stack.pop()
            yield node
            if isinstance(node, Element):
                stack.extend(reversed(node.children))

    def elements(self) -> list[Element]:
        return [node for node in self.walk() if isinstance(node, Element)]

    def properties(self) -> list[Property]:
        return [node for node in self.walk() if isinstance(node, Property)]
