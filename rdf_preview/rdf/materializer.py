"""
Two-phase translation of RDF statements into a virtual property graph.

Phase 1 (``handle_statement``) sorts every statement into a node property,
a node label or a pending relationship. Phase 2 (``end``) turns the
accumulated resources into nodes and only then links the pending
relationships, since their endpoints are known only once the whole input
has been read.
"""

import logging
from typing import Iterable, Optional, Tuple

from rdflib import BNode, Literal, URIRef
from rdflib.namespace import RDF
from rdflib.term import Node

from ..config import PreviewSettings
from ..graph.models import PreviewResult, VirtualNode, VirtualRelationship
from .accumulator import ResourceAccumulator, StatementBuffer
from .errors import MaterializationError, NamespacePreloadError, UnresolvedEndpointError
from .literals import LANGUAGE_SUFFIX, LiteralCoercer
from .namespaces import NamespaceRegistry, NamespaceSource, split_iri

logger = logging.getLogger(__name__)

Statement = Tuple[Node, Node, Node]


class GraphMaterializer:
    """
    Builds the node/relationship preview for one RDF input.

    An instance holds the state of a single run and cannot be reused once
    ``end`` has been called.
    """

    def __init__(
        self,
        namespace_source: Optional[NamespaceSource] = None,
        shorten_uris: bool = True,
        types_to_labels: bool = True,
        language_filter: Optional[str] = None
    ):
        self.namespace_source = namespace_source
        self.shorten_uris = shorten_uris
        self.types_to_labels = types_to_labels

        self.namespaces = NamespaceRegistry()
        self.coercer = LiteralCoercer(language_filter)
        self.resources = ResourceAccumulator()
        self.statements = StatementBuffer()

        self._started = False
        self._finished = False

    @classmethod
    def from_settings(
        cls,
        settings: PreviewSettings,
        namespace_source: Optional[NamespaceSource] = None
    ) -> "GraphMaterializer":
        return cls(
            namespace_source=namespace_source,
            shorten_uris=settings.shorten_uris,
            types_to_labels=settings.types_to_labels,
            language_filter=settings.language_filter
        )

    def start(self):
        """Preload namespace prefixes already registered in the store"""
        if self._started:
            return
        self._check_open()

        if self.namespace_source is not None:
            try:
                self.namespaces.preload(self.namespace_source)
            except Exception as e:
                raise NamespacePreloadError(f"Could not load existing namespace prefixes: {e}") from e

        self._started = True
        logger.info(f"Found {len(self.namespaces)} namespaces in the DB: {self.namespaces.namespaces()}")

    def handle_statement(self, subject: Node, predicate: URIRef, obj: Node):
        """Phase 1: fold one statement into the accumulated state"""
        self._check_open()
        if not self._started:
            self.start()

        subject_uri = str(subject)

        if isinstance(obj, Literal):
            coerced = self.coercer.coerce(obj)
            if coerced is None:
                logger.debug(f"Skipping {predicate} on {subject_uri}: language '{obj.language}' filtered out")
                return
            name = self.shorten(predicate)
            self.resources.set_property(subject_uri, name, coerced.value)
            if coerced.language is not None:
                self.resources.set_property(subject_uri, name + LANGUAGE_SUFFIX, coerced.language)

        elif self.types_to_labels and predicate == RDF.type and not isinstance(obj, BNode):
            self.resources.add_label(subject_uri, self.shorten(obj))

        elif isinstance(obj, (URIRef, BNode)):
            object_uri = str(obj)
            self.resources.ensure(subject_uri)
            self.resources.ensure(object_uri)
            self.statements.record(subject_uri, predicate, object_uri)

        else:
            raise TypeError(f"Unsupported RDF term for statement object: {type(obj).__name__}")

    def end(self) -> PreviewResult:
        """Phase 2: build virtual nodes, then the relationships between them"""
        self._check_open()
        if not self._started:
            self.start()
        self._finished = True

        nodes = {
            resource.uri: VirtualNode(labels=list(resource.labels), properties=dict(resource.properties))
            for resource in self.resources
        }

        relationships = []
        for pending in self.statements:
            start = nodes.get(pending.subject)
            end = nodes.get(pending.object)
            for uri, node in ((pending.subject, start), (pending.object, end)):
                if node is None:
                    raise UnresolvedEndpointError(uri, pending.subject, str(pending.predicate), pending.object)
            relationships.append(
                VirtualRelationship(start=start, end=end, type=self.shorten(pending.predicate))
            )

        logger.info(f"Preview ready: {len(nodes)} nodes, {len(relationships)} relationships")
        return PreviewResult(nodes=nodes, relationships=relationships)

    def materialize(self, statements: Iterable[Statement]) -> PreviewResult:
        """Run both phases over a complete statement stream"""
        self.start()
        for subject, predicate, obj in statements:
            self.handle_statement(subject, predicate, obj)
        return self.end()

    def shorten(self, iri: URIRef) -> str:
        """``<prefix>_<localName>`` when shortening is on, the full IRI otherwise"""
        if not self.shorten_uris:
            return str(iri)
        namespace, local_name = split_iri(str(iri))
        return f"{self.namespaces.prefix_for(namespace)}_{local_name}"

    def _check_open(self):
        if self._finished:
            raise MaterializationError(
                "This preview has already been materialized; use a new GraphMaterializer per run"
            )
