"""Typed ACL policy document produced by the decoder."""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple, Union

from pydantic import Field

from .base import SchemaBase


class NodeRule(SchemaBase):
    """Override of the default ACL for a node, or for nodes sharing a name prefix."""

    name: str = ""
    policy: str


class ServiceRule(SchemaBase):
    """Override of the default ACL for a service, or for services sharing a name prefix.

    Attributes:
        name: Service name (or name prefix). Empty when not given.
        policy: Verdict for the service itself.
        intentions: Policy for intentions where this service is the destination.
            None means the rule's ``policy`` governs intentions too.
    """

    name: str = ""
    policy: str
    intentions: Optional[str] = Field(default=None)


Rule = Union[NodeRule, ServiceRule]


class PolicyDocument(SchemaBase):
    default_acl: str
    nodes: List[NodeRule] = Field(default_factory=list)
    node_prefixes: List[NodeRule] = Field(default_factory=list)
    services: List[ServiceRule] = Field(default_factory=list)
    service_prefixes: List[ServiceRule] = Field(default_factory=list)

    def categories(self) -> Iterator[Tuple[str, List[Rule]]]:
        """Yield ``(field_name, rules)`` for every rule category, in declaration order."""
        for field_name in ("nodes", "node_prefixes", "services", "service_prefixes"):
            yield field_name, getattr(self, field_name)

    def rule_count(self) -> int:
        return sum(len(rules) for _, rules in self.categories())
