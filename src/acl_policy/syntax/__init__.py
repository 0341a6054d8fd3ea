"""Block-structured syntax: lexer, parser, tree and file loader."""

from .loader import load_file, load_source
from .tree import (
    Attribute,
    Block,
    Body,
    BodyContent,
    Expression,
    File,
    LiteralExpr,
    TupleExpr,
    VariableExpr,
)

__all__ = [
    "load_file",
    "load_source",
    "Attribute",
    "Block",
    "Body",
    "BodyContent",
    "Expression",
    "File",
    "LiteralExpr",
    "TupleExpr",
    "VariableExpr",
]
