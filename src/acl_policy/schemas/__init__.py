"""Schema exports."""

from .base import SchemaBase, Severity
from .body import AttributeSchema, BlockHeaderSchema, BodySchema
from .diagnostic import (
    Diagnostic,
    SourcePos,
    SourceRange,
    error_diagnostics,
    has_errors,
    sort_diagnostics,
)
from .policy import NodeRule, PolicyDocument, Rule, ServiceRule

__all__ = [
    "SchemaBase",
    "Severity",
    "AttributeSchema",
    "BlockHeaderSchema",
    "BodySchema",
    "Diagnostic",
    "SourcePos",
    "SourceRange",
    "error_diagnostics",
    "has_errors",
    "sort_diagnostics",
    "NodeRule",
    "PolicyDocument",
    "Rule",
    "ServiceRule",
]
