"""Schema-directed decoder from the generic syntax tree to a ``PolicyDocument``.

``parse`` never raises for problems in the input; it returns the document (or
None when the outer structure cannot be decoded) together with every
diagnostic found, sorted by source position:

* a missing or unreadable file, a syntax error, an unexpected top-level item,
  a missing ``policy`` block, or a missing/undecodable ``acl`` attribute leave
  the document absent;
* an unexpected block or argument inside the policy body, or a malformed rule
  body, is reported and the offending item skipped;
* an ill-typed optional rule attribute is reported and treated as absent.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from acl_policy.catalog import (
    ACL_ATTRIBUTE,
    POLICY_BLOCK,
    POLICY_BODY_SCHEMA,
    RULE_KINDS,
    TOP_LEVEL_SCHEMA,
    RuleKind,
)
from acl_policy.config_loader import ParserSettings
from acl_policy.exceptions import PolicyParseError
from acl_policy.schemas.base import Severity
from acl_policy.schemas.diagnostic import Diagnostic, has_errors, sort_diagnostics
from acl_policy.schemas.policy import PolicyDocument, Rule
from acl_policy.syntax.loader import PathLike, load_file
from acl_policy.syntax.tree import Attribute, Block, File, LiteralExpr, VariableExpr


def parse(
    filename: PathLike,
    settings: Optional[ParserSettings] = None,
) -> Tuple[Optional[PolicyDocument], List[Diagnostic]]:
    """Parse the policy file at ``filename``."""
    settings = settings or ParserSettings()
    file, diagnostics = load_file(filename, encoding=settings.encoding)
    if file is None or has_errors(diagnostics):
        return None, diagnostics
    document, decode_diags = decode_file(file, settings)
    return document, sort_diagnostics(diagnostics + decode_diags)


def load_policy(filename: PathLike, settings: Optional[ParserSettings] = None) -> PolicyDocument:
    """Parse ``filename`` and return its document.

    Raises:
        PolicyParseError: If any error diagnostic was produced, even when a
            partial document could be decoded.
    """
    document, diagnostics = parse(filename, settings)
    if document is None or has_errors(diagnostics):
        raise PolicyParseError(str(filename), diagnostics)
    return document


def decode_file(file: File, settings: ParserSettings) -> Tuple[Optional[PolicyDocument], List[Diagnostic]]:
    cutoff = settings.suggestion_cutoff
    content, diagnostics = file.body.content(TOP_LEVEL_SCHEMA, cutoff)
    if has_errors(diagnostics):
        return None, diagnostics

    policy_blocks = content.blocks_of_type(POLICY_BLOCK)
    if not policy_blocks:
        diagnostics.append(
            Diagnostic(
                summary="Missing policy block",
                detail=f'A "{POLICY_BLOCK}" block is required, but no definition was found.',
                subject=content.missing_item_range,
            )
        )
        return None, diagnostics

    policy_block = policy_blocks[0]
    if settings.warn_on_extra_policy_blocks:
        for extra in policy_blocks[1:]:
            diagnostics.append(
                Diagnostic(
                    severity=Severity.WARNING,
                    summary="Duplicate policy block",
                    detail=(
                        f'Only the first "{POLICY_BLOCK}" block, at {policy_block.def_range}, is used. '
                        "This block is ignored."
                    ),
                    subject=extra.def_range,
                )
            )

    body, body_diags = policy_block.body.content(POLICY_BODY_SCHEMA, cutoff)
    diagnostics.extend(body_diags)

    acl_attr = body.attributes.get(ACL_ATTRIBUTE)
    if acl_attr is None:
        return None, diagnostics
    acl, acl_diags = decode_text(acl_attr)
    diagnostics.extend(acl_diags)
    if acl is None:
        return None, diagnostics

    rules: Dict[str, List[Rule]] = {kind.document_field: [] for kind in RULE_KINDS.values()}
    for block in body.blocks:
        kind = RULE_KINDS[block.type]
        rule, rule_diags = decode_rule(block, kind, cutoff)
        diagnostics.extend(rule_diags)
        if rule is not None:
            rules[kind.document_field].append(rule)

    return PolicyDocument(default_acl=acl, **rules), diagnostics


def decode_rule(block: Block, kind: RuleKind, suggestion_cutoff: float) -> Tuple[Optional[Rule], List[Diagnostic]]:
    """Decode one rule block with ``kind``'s schema.

    A body that violates the schema, or a required attribute that cannot be
    decoded, skips the rule; an optional attribute that cannot be decoded is
    dropped. The ``name`` attribute takes precedence over a block label.
    """
    content, diagnostics = block.body.content(kind.schema, suggestion_cutoff)
    if has_errors(diagnostics):
        return None, diagnostics

    values: Dict[str, str] = {}
    for attr_schema in kind.schema.attributes:
        attr = content.attributes.get(attr_schema.name)
        if attr is None:
            continue
        value, value_diags = decode_text(attr, allow_empty=attr_schema.allow_empty)
        diagnostics.extend(value_diags)
        if value is None:
            if attr_schema.required:
                return None, diagnostics
            continue
        values[attr_schema.name] = value

    if "name" not in values:
        values["name"] = block.labels[0] if block.labels else ""
    return kind.model(**values), diagnostics


def decode_text(attr: Attribute, allow_empty: bool = True) -> Tuple[Optional[str], List[Diagnostic]]:
    """Reduce an attribute's expression to text.

    Strings are returned verbatim; numbers and booleans convert to their
    canonical spelling. Anything else yields None and one diagnostic.
    """
    expr = attr.expr
    if isinstance(expr, VariableExpr):
        return None, [
            Diagnostic(
                summary="Variables not allowed",
                detail="Variables may not be used here.",
                subject=expr.range,
            )
        ]
    if not isinstance(expr, LiteralExpr) or expr.value is None:
        return None, [
            Diagnostic(
                summary="Incorrect attribute value type",
                detail=f'Inappropriate value for attribute "{attr.name}": string required, but {expr.type_name} given.',
                subject=expr.range,
            )
        ]

    value = expr.value
    if isinstance(value, bool):
        text = "true" if value else "false"
    elif isinstance(value, float):
        text = str(int(value)) if value.is_integer() else repr(value)
    else:
        text = str(value)

    if not text and not allow_empty:
        return None, [
            Diagnostic(
                summary="Invalid attribute value",
                detail=f'The argument "{attr.name}" must not be empty.',
                subject=expr.range,
            )
        ]
    return text, []
