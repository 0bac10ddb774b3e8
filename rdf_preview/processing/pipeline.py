import logging
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from rdflib import Graph
from rdflib.store import Store
from rdflib.term import Node
from rdflib.util import guess_format

from ..config import PreviewSettings, get_settings
from ..graph.models import PreviewResult
from ..rdf.materializer import GraphMaterializer
from ..rdf.namespaces import NamespaceSource

logger = logging.getLogger(__name__)

DEFAULT_SNIPPET_FORMAT = "turtle"

Statement = Tuple[Node, Node, Node]


class StatementListStore(Store):
    """
    rdflib store that keeps every parsed statement in document order.

    Unlike the default memory store it is not a set: a statement that appears
    twice in the input is kept twice.
    """

    def __init__(self):
        super().__init__()
        self.statements: List[Statement] = []

    def add(self, triple, context, quoted=False):
        self.statements.append(triple)

    def triples(self, triple_pattern, context=None) -> Iterator:
        s, p, o = triple_pattern
        for triple in self.statements:
            if (s is None or s == triple[0]) and (p is None or p == triple[1]) and (o is None or o == triple[2]):
                yield triple, iter(())

    def __len__(self, context=None) -> int:
        return len(self.statements)


class PreviewPipeline:
    """Parse RDF with rdflib and preview the graph it would import as"""

    def __init__(
        self,
        namespace_source: Optional[NamespaceSource] = None,
        settings: Optional[PreviewSettings] = None
    ):
        self.namespace_source = namespace_source
        self.settings = settings if settings is not None else get_settings().preview

    def new_materializer(self) -> GraphMaterializer:
        """A fresh materializer; one is needed per preview"""
        return GraphMaterializer.from_settings(self.settings, self.namespace_source)

    def preview_graph(self, graph: Graph) -> PreviewResult:
        """Preview an already parsed graph"""
        logger.info(f"Previewing {len(graph)} statements")
        return self.new_materializer().materialize(graph)

    def preview_statements(self, statements: List[Statement]) -> PreviewResult:
        """Preview statements in the order given, duplicates included"""
        logger.info(f"Previewing {len(statements)} statements")
        return self.new_materializer().materialize(statements)

    def preview_file(self, file_path: str | Path, rdf_format: Optional[str] = None) -> PreviewResult:
        """
        Parse an RDF file and preview it.

        Args:
            file_path: RDF document on disk
            rdf_format: rdflib parser name; defaults to the configured format,
                then to one guessed from the file extension

        Returns:
            Preview of the nodes and relationships
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"RDF file not found: {file_path}")

        rdf_format = rdf_format or self.settings.rdf_format or guess_format(str(file_path))
        if rdf_format is None:
            raise ValueError(f"Cannot guess RDF format of {file_path.name}; pass one explicitly")

        logger.info(f"Parsing {file_path} as {rdf_format}")
        sink = StatementListStore()
        Graph(store=sink).parse(str(file_path), format=rdf_format)

        return self.preview_statements(sink.statements)

    def preview_snippet(self, text: str, rdf_format: Optional[str] = None) -> PreviewResult:
        """Parse inline RDF text and preview it"""
        rdf_format = rdf_format or self.settings.rdf_format or DEFAULT_SNIPPET_FORMAT

        sink = StatementListStore()
        Graph(store=sink).parse(data=text, format=rdf_format)

        return self.preview_statements(sink.statements)
