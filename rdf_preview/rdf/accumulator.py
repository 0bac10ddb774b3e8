from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from rdflib import URIRef

RESOURCE_LABEL = "Resource"
URI_PROPERTY = "uri"


@dataclass
class Resource:
    """A subject or object URI being accumulated into a node"""
    uri: str
    labels: List[str] = field(default_factory=lambda: [RESOURCE_LABEL])
    properties: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.properties.setdefault(URI_PROPERTY, self.uri)

    def add_label(self, label: str):
        if label not in self.labels:
            self.labels.append(label)


@dataclass(frozen=True)
class PendingRelationship:
    """A statement between two resources, kept until every node exists"""
    subject: str
    predicate: URIRef
    object: str


class ResourceAccumulator:
    """Owns every resource of a run, keyed by URI, in first-seen order"""

    def __init__(self):
        self._resources: Dict[str, Resource] = {}

    def ensure(self, uri: str) -> Resource:
        resource = self._resources.get(uri)
        if resource is None:
            resource = Resource(uri)
            self._resources[uri] = resource
        return resource

    def set_property(self, uri: str, name: str, value: Any):
        # Repeated values for one property overwrite each other; they are not
        # collected into a list.
        self.ensure(uri).properties[name] = value

    def add_label(self, uri: str, label: str):
        self.ensure(uri).add_label(label)

    def get(self, uri: str) -> Optional[Resource]:
        return self._resources.get(uri)

    def __contains__(self, uri: str) -> bool:
        return uri in self._resources

    def __len__(self) -> int:
        return len(self._resources)

    def __iter__(self) -> Iterator[Resource]:
        return iter(self._resources.values())


class StatementBuffer:
    """Relationship statements in arrival order, duplicates included"""

    def __init__(self):
        self._pending: List[PendingRelationship] = []

    def record(self, subject_uri: str, predicate: URIRef, object_uri: str):
        self._pending.append(PendingRelationship(subject_uri, predicate, object_uri))

    def __len__(self) -> int:
        return len(self._pending)

    def __iter__(self) -> Iterator[PendingRelationship]:
        return iter(self._pending)
