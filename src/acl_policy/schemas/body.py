"""Declarative body schemas applied to the generic syntax tree.

A ``BodySchema`` lists which arguments and which child block types may appear
inside one block body. The syntax tree's ``Body.content`` enforces it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class AttributeSchema:
    name: str
    required: bool = False
    allow_empty: bool = True


@dataclass(frozen=True)
class BlockHeaderSchema:
    """Expected header for a child block.

    ``label_names`` names the labels that may follow the block type keyword.
    When ``labels_optional`` is set, fewer labels (including none) are accepted.
    """

    type: str
    label_names: Tuple[str, ...] = ()
    labels_optional: bool = False


@dataclass(frozen=True)
class BodySchema:
    attributes: Tuple[AttributeSchema, ...] = ()
    blocks: Tuple[BlockHeaderSchema, ...] = ()

    def attribute(self, name: str) -> Optional[AttributeSchema]:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None

    def block(self, type_name: str) -> Optional[BlockHeaderSchema]:
        for header in self.blocks:
            if header.type == type_name:
                return header
        return None

    @property
    def attribute_names(self) -> Tuple[str, ...]:
        return tuple(attr.name for attr in self.attributes)

    @property
    def block_types(self) -> Tuple[str, ...]:
        return tuple(header.type for header in self.blocks)
