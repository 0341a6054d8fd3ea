"""Generic block-structured syntax tree.

The tree carries no policy semantics. A ``Body`` is queried against a
``BodySchema`` with ``Body.content``, which reports unexpected or missing items
as diagnostics and returns only what the schema allows.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from acl_policy.schemas.body import BlockHeaderSchema, BodySchema
from acl_policy.schemas.diagnostic import Diagnostic, SourceRange
from acl_policy.suggestions import DEFAULT_SUGGESTION_CUTOFF, name_suggestion


@dataclass(frozen=True)
class LiteralExpr:
    value: Union[str, int, float, bool, None]
    range: SourceRange

    @property
    def type_name(self) -> str:
        if self.value is None:
            return "null"
        if isinstance(self.value, bool):
            return "bool"
        if isinstance(self.value, str):
            return "string"
        return "number"


@dataclass(frozen=True)
class TupleExpr:
    items: Tuple["Expression", ...]
    range: SourceRange

    @property
    def type_name(self) -> str:
        return "tuple"


@dataclass(frozen=True)
class VariableExpr:
    name: str
    range: SourceRange

    @property
    def type_name(self) -> str:
        return "variable"


Expression = Union[LiteralExpr, TupleExpr, VariableExpr]


@dataclass(frozen=True)
class Attribute:
    name: str
    expr: Expression
    name_range: SourceRange
    range: SourceRange


@dataclass(frozen=True)
class Block:
    type: str
    labels: Tuple[str, ...]
    body: "Body"
    type_range: SourceRange
    label_ranges: Tuple[SourceRange, ...]
    open_brace_range: SourceRange
    close_brace_range: SourceRange

    @property
    def def_range(self) -> SourceRange:
        """Span of the block type keyword and its labels."""
        if self.label_ranges:
            return self.type_range.through(self.label_ranges[-1])
        return self.type_range

    @property
    def range(self) -> SourceRange:
        return self.type_range.through(self.close_brace_range)


Item = Union[Attribute, Block]


@dataclass(frozen=True)
class BodyContent:
    """Items of a body that passed schema checks."""

    attributes: Dict[str, Attribute]
    blocks: Tuple[Block, ...]
    missing_item_range: SourceRange

    def blocks_of_type(self, type_name: str) -> List[Block]:
        return [block for block in self.blocks if block.type == type_name]


@dataclass(frozen=True)
class Body:
    items: Tuple[Item, ...]
    range: SourceRange
    missing_item_range: SourceRange

    @property
    def attributes(self) -> List[Attribute]:
        return [item for item in self.items if isinstance(item, Attribute)]

    @property
    def blocks(self) -> List[Block]:
        return [item for item in self.items if isinstance(item, Block)]

    def content(
        self,
        schema: BodySchema,
        suggestion_cutoff: float = DEFAULT_SUGGESTION_CUTOFF,
    ) -> Tuple[BodyContent, List[Diagnostic]]:
        """Apply ``schema`` to this body.

        Items are checked in source order. Unexpected arguments and blocks,
        repeated arguments and blocks with bad labels are reported and left out
        of the result; missing required arguments are reported last.
        """
        attributes: Dict[str, Attribute] = {}
        blocks: List[Block] = []
        diagnostics: List[Diagnostic] = []

        for item in self.items:
            if isinstance(item, Attribute):
                if schema.attribute(item.name) is None:
                    diagnostics.append(_unsupported_argument(item, schema, suggestion_cutoff))
                    continue
                previous = attributes.get(item.name)
                if previous is not None:
                    diagnostics.append(
                        Diagnostic(
                            summary="Duplicate argument",
                            detail=(
                                f'The argument "{item.name}" was already set at {previous.name_range}. '
                                "Each argument may be set only once."
                            ),
                            subject=item.name_range,
                        )
                    )
                    continue
                attributes[item.name] = item
                continue

            header = schema.block(item.type)
            if header is None:
                diagnostics.append(_unsupported_block(item, schema, suggestion_cutoff))
                continue
            label_diag = _check_labels(item, header)
            if label_diag is not None:
                diagnostics.append(label_diag)
                continue
            blocks.append(item)

        for attr_schema in schema.attributes:
            if attr_schema.required and attr_schema.name not in attributes:
                diagnostics.append(
                    Diagnostic(
                        summary="Missing required argument",
                        detail=f'The argument "{attr_schema.name}" is required, but no definition was found.',
                        subject=self.missing_item_range,
                    )
                )

        content = BodyContent(
            attributes=attributes,
            blocks=tuple(blocks),
            missing_item_range=self.missing_item_range,
        )
        return content, diagnostics


@dataclass(frozen=True)
class File:
    filename: str
    body: Body
    source: str = field(default="", repr=False)


def _unsupported_argument(attr: Attribute, schema: BodySchema, cutoff: float) -> Diagnostic:
    detail = f'An argument named "{attr.name}" is not expected here.'
    hint: Optional[str] = None
    if attr.name in schema.block_types:
        detail += f' Did you mean to define a block of type "{attr.name}"?'
    else:
        hint = name_suggestion(attr.name, schema.attribute_names, cutoff)
    return Diagnostic(summary="Unsupported argument", detail=detail, subject=attr.name_range, hint=hint)


def _unsupported_block(block: Block, schema: BodySchema, cutoff: float) -> Diagnostic:
    detail = f'Blocks of type "{block.type}" are not expected here.'
    hint: Optional[str] = None
    if block.type in schema.attribute_names:
        detail += (
            f' Did you mean to define argument "{block.type}"? '
            "If so, use the equals sign to assign it a value."
        )
    else:
        hint = name_suggestion(block.type, schema.block_types, cutoff)
    return Diagnostic(summary="Unsupported block type", detail=detail, subject=block.type_range, hint=hint)


def _check_labels(block: Block, header: BlockHeaderSchema) -> Optional[Diagnostic]:
    expected = len(header.label_names)
    given = len(block.labels)
    if given > expected:
        if expected == 0:
            detail = f"No labels are expected for {block.type} blocks."
        else:
            noun = "label" if expected == 1 else "labels"
            verb = "is" if expected == 1 else "are"
            names = ", ".join(header.label_names)
            detail = f"Only {expected} {noun} ({names}) {verb} expected for {block.type} blocks."
        return Diagnostic(
            summary=f"Extraneous label for {block.type}",
            detail=detail,
            subject=block.label_ranges[expected],
        )
    if given < expected and not header.labels_optional:
        names = ", ".join(header.label_names)
        noun = "label" if expected == 1 else "labels"
        return Diagnostic(
            summary=f"Missing {header.label_names[given]} for {block.type}",
            detail=f"All {block.type} blocks must have {expected} {noun} ({names}).",
            subject=block.open_brace_range,
        )
    return None
