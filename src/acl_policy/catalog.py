"""Static schema catalog for ACL policy documents.

Each rule block kind is described once in ``RULE_KINDS``; the policy body
schema and the decoder's dispatch are both derived from that table, so a new
kind only needs a new entry here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Type

from acl_policy.schemas.body import AttributeSchema, BlockHeaderSchema, BodySchema
from acl_policy.schemas.policy import NodeRule, Rule, ServiceRule

POLICY_BLOCK = "policy"
ACL_ATTRIBUTE = "acl"

TOP_LEVEL_SCHEMA = BodySchema(blocks=(BlockHeaderSchema(type=POLICY_BLOCK),))

NODE_RULE_SCHEMA = BodySchema(
    attributes=(
        AttributeSchema(name="name"),
        AttributeSchema(name="policy", required=True, allow_empty=False),
    ),
)

SERVICE_RULE_SCHEMA = BodySchema(
    attributes=(
        AttributeSchema(name="name"),
        AttributeSchema(name="policy", required=True, allow_empty=False),
        AttributeSchema(name="intentions"),
    ),
)


@dataclass(frozen=True)
class RuleKind:
    """Binds a rule block keyword to its body schema, model and document field."""

    block_type: str
    document_field: str
    schema: BodySchema
    model: Type[Rule]
    heading: str

    @property
    def header(self) -> BlockHeaderSchema:
        return BlockHeaderSchema(type=self.block_type, label_names=("name",), labels_optional=True)


RULE_KINDS: Dict[str, RuleKind] = {
    kind.block_type: kind
    for kind in (
        RuleKind("node", "nodes", NODE_RULE_SCHEMA, NodeRule, "node policies"),
        RuleKind("node_prefix", "node_prefixes", NODE_RULE_SCHEMA, NodeRule, "node prefix policies"),
        RuleKind("service", "services", SERVICE_RULE_SCHEMA, ServiceRule, "service policies"),
        RuleKind("service_prefix", "service_prefixes", SERVICE_RULE_SCHEMA, ServiceRule, "service prefix policies"),
    )
}

POLICY_BODY_SCHEMA = BodySchema(
    attributes=(AttributeSchema(name=ACL_ATTRIBUTE, required=True),),
    blocks=tuple(kind.header for kind in RULE_KINDS.values()),
)

