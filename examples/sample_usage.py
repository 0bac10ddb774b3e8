import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from rdflib import Graph, Literal, Namespace
from rdflib.namespace import FOAF, RDF, XSD

from rdf_preview.config import get_settings
from rdf_preview.graph.neo4j_store import Neo4jStore
from rdf_preview.processing.pipeline import PreviewPipeline
from rdf_preview.rdf.materializer import GraphMaterializer
from rdf_preview.rdf.namespaces import StaticNamespaceSource

EX = Namespace("http://example.org/")

SAMPLE_TURTLE = """
@prefix ex: <http://example.org/> .
@prefix foaf: <http://xmlns.com/foaf/0.1/> .
@prefix xsd: <http://www.w3.org/2001/XMLSchema#> .

ex:TechVentures a ex:Organization ;
    ex:name "TechVentures Inc." ;
    ex:founded "2015"^^xsd:integer ;
    ex:headcount "250"^^xsd:int ;
    ex:listed "false"^^xsd:boolean .

ex:Sarah a foaf:Person ;
    foaf:name "Sarah Johnson" ;
    ex:role "CEO"@en, "PDG"@fr ;
    ex:worksFor ex:TechVentures .

ex:Michael a foaf:Person ;
    foaf:name "Michael Chen" ;
    ex:role "CTO"@en ;
    ex:worksFor ex:TechVentures ;
    foaf:knows ex:Sarah .
"""


def print_result(result):
    for uri, node in result.nodes.items():
        print(f"   {':'.join(node.labels)}  <{uri}>")
        for name, value in node.properties.items():
            if name != "uri":
                print(f"      {name} = {value!r}")
    print()
    for rel in result.relationships:
        print(f"   {rel}")
    print()


def main():
    """Run sample previews"""

    print("=" * 80)
    print("RDF Import Preview Sample Usage")
    print("=" * 80)
    print()

    # 1. Statements built in code, no database
    print("1. Previewing statements built with rdflib...")
    graph = Graph()
    graph.add((EX.Alice, RDF.type, FOAF.Person))
    graph.add((EX.Alice, FOAF.name, Literal("Alice", datatype=XSD.string)))
    graph.add((EX.Alice, FOAF.knows, EX.Bob))
    graph.add((EX.Bob, RDF.type, FOAF.Person))

    materializer = GraphMaterializer(
        namespace_source=StaticNamespaceSource({str(EX): "ex", str(FOAF): "foaf"})
    )
    print_result(materializer.materialize(graph))

    # 2. Turtle snippet, keeping every language and recording it
    print("2. Previewing a Turtle snippet with language properties...")
    settings = get_settings()
    offline = PreviewPipeline(
        StaticNamespaceSource(),
        settings.preview.model_copy(update={"language_filter": "@"})
    )
    print_result(offline.preview_snippet(SAMPLE_TURTLE))

    # 3. Same snippet with the prefixes already registered in Neo4j
    print("3. Previewing against the prefixes stored in Neo4j...")
    try:
        with Neo4jStore(settings.neo4j) as store:
            print_result(PreviewPipeline(store).preview_snippet(SAMPLE_TURTLE))
    except Exception as e:
        print(f"   Skipped, Neo4j not reachable: {e}")


if __name__ == "__main__":
    main()
