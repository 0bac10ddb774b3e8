from pydantic import BaseModel, Field
from typing import Any, Dict, List


class VirtualNode(BaseModel):
    """Node that would be created by the import (never persisted)"""
    labels: List[str] = Field(default_factory=list, description="Node labels, no duplicates")
    properties: Dict[str, Any] = Field(default_factory=dict, description="Node properties, always including 'uri'")

    @property
    def uri(self) -> str:
        return self.properties["uri"]

    def has_label(self, label: str) -> bool:
        return label in self.labels

    def __str__(self) -> str:
        return f"({':'.join(self.labels)} {{uri: '{self.uri}'}})"


class VirtualRelationship(BaseModel):
    """Relationship that would be created by the import (never persisted)"""
    start: VirtualNode
    end: VirtualNode
    type: str = Field(..., description="Relationship type (shortened predicate)")

    def __str__(self) -> str:
        return f"<{self.start.uri}> -[{self.type}]-> <{self.end.uri}>"


class PreviewResult(BaseModel):
    """Nodes keyed by resource URI, plus relationships in statement order"""
    nodes: Dict[str, VirtualNode] = Field(default_factory=dict)
    relationships: List[VirtualRelationship] = Field(default_factory=list)

    def node(self, uri: str) -> VirtualNode:
        return self.nodes[uri]

    def relationships_of_type(self, rel_type: str) -> List[VirtualRelationship]:
        return [r for r in self.relationships if r.type == rel_type]
