"""Canonical text form of a ``PolicyDocument``.

Parsing the output of ``format_policy`` yields a document equal to its input.
"""

from __future__ import annotations

from typing import List

from acl_policy.catalog import ACL_ATTRIBUTE, POLICY_BLOCK, RULE_KINDS
from acl_policy.schemas.policy import PolicyDocument, Rule, ServiceRule

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def quote(text: str) -> str:
    """Return ``text`` as a double-quoted string literal."""
    out: List[str] = []
    for ch in text:
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ord(ch) < 0x20:
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def format_policy(document: PolicyDocument, indent: str = "  ") -> str:
    lines = [f"{POLICY_BLOCK} {{", f"{indent}{ACL_ATTRIBUTE} = {quote(document.default_acl)}"]
    for kind in RULE_KINDS.values():
        for rule in getattr(document, kind.document_field):
            lines.append("")
            lines.extend(_format_rule(kind.block_type, rule, indent))
    lines.append("}")
    return "\n".join(lines) + "\n"


def _format_rule(block_type: str, rule: Rule, indent: str) -> List[str]:
    lines = [f"{indent}{block_type} {quote(rule.name)} {{", f"{indent * 2}policy = {quote(rule.policy)}"]
    if isinstance(rule, ServiceRule) and rule.intentions is not None:
        lines.append(f"{indent * 2}intentions = {quote(rule.intentions)}")
    lines.append(f"{indent}}}")
    return lines
