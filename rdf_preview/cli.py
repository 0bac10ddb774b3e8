import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import PreviewSettings, get_settings
from .graph.models import PreviewResult
from .graph.neo4j_store import Neo4jStore
from .processing.pipeline import PreviewPipeline
from .rdf.namespaces import StaticNamespaceSource

console = Console()


def setup_logging(level: str):
    """Route log records through rich, on stderr"""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True
    )


PREVIEW_OPTIONS = [
    click.option('--format', 'rdf_format', default=None, help='rdflib format (turtle, xml, nt, json-ld...)'),
    click.option('--shorten/--no-shorten', default=None, help='Shorten IRIs with namespace prefixes'),
    click.option('--types-to-labels/--no-types-to-labels', default=None, help='Turn rdf:type into labels'),
    click.option('--lang', default=None, help="Language filter, or '@' to keep all and add language properties"),
    click.option('--no-db', is_flag=True, help='Do not read existing namespace prefixes from Neo4j'),
    click.option('--limit', default=50, help='Max rows shown per table'),
]


def preview_options(func):
    """Options shared by the preview commands"""
    for option in reversed(PREVIEW_OPTIONS):
        func = option(func)
    return func


def build_pipeline(no_db: bool, shorten, types_to_labels, lang):
    """Pipeline with command line overrides applied; returns (pipeline, store or None)"""
    settings = get_settings()

    overrides = {
        "shorten_uris": shorten,
        "types_to_labels": types_to_labels,
        "language_filter": lang,
    }
    # validated so a blank --lang means no filter
    preview_settings = PreviewSettings.model_validate({
        **settings.preview.model_dump(),
        **{k: v for k, v in overrides.items() if v is not None},
    })

    if no_db:
        return PreviewPipeline(StaticNamespaceSource(), preview_settings), None

    store = Neo4jStore(settings.neo4j)
    return PreviewPipeline(store, preview_settings), store


def show_result(result: PreviewResult, limit: int):
    """Print the previewed nodes and relationships"""
    nodes = Table(title="Nodes")
    nodes.add_column("URI", style="cyan")
    nodes.add_column("Labels", style="green")
    nodes.add_column("Properties")

    for uri, node in list(result.nodes.items())[:limit]:
        props = ", ".join(
            f"{name}: {value!r}" for name, value in node.properties.items() if name != "uri"
        )
        nodes.add_row(uri, ", ".join(node.labels), props)

    console.print(nodes)

    if result.relationships:
        rels = Table(title="Relationships")
        rels.add_column("Start", style="cyan")
        rels.add_column("Type", style="magenta")
        rels.add_column("End", style="cyan")

        for rel in result.relationships[:limit]:
            rels.add_row(rel.start.uri, rel.type, rel.end.uri)

        console.print(rels)

    console.print(
        f"\n✓ {len(result.nodes)} nodes, {len(result.relationships)} relationships",
        style="green"
    )
    if len(result.nodes) > limit or len(result.relationships) > limit:
        console.print(f"Showing at most {limit} rows per table", style="dim")


@click.group()
def cli():
    """RDF import preview - see the property graph before loading it"""
    setup_logging(get_settings().log_level)


@cli.command()
@click.argument('file_path', type=click.Path(exists=True))
@preview_options
def preview(file_path: str, rdf_format, shorten, types_to_labels, lang, no_db: bool, limit: int):
    """Preview the graph an RDF file would import as"""
    store = None
    try:
        pipeline, store = build_pipeline(no_db, shorten, types_to_labels, lang)
        result = pipeline.preview_file(file_path, rdf_format)
        show_result(result, limit)

    except Exception as e:
        console.print(f"✗ Preview failed: {e}", style="red")
        sys.exit(1)
    finally:
        if store is not None:
            store.close()


@cli.command()
@click.argument('text')
@preview_options
def preview_snippet(text: str, rdf_format, shorten, types_to_labels, lang, no_db: bool, limit: int):
    """Preview the graph an inline RDF snippet would import as"""
    store = None
    try:
        pipeline, store = build_pipeline(no_db, shorten, types_to_labels, lang)
        result = pipeline.preview_snippet(text, rdf_format)
        show_result(result, limit)

    except Exception as e:
        console.print(f"✗ Preview failed: {e}", style="red")
        sys.exit(1)
    finally:
        if store is not None:
            store.close()


@cli.command()
def namespaces():
    """List namespace prefixes already registered in Neo4j"""
    try:
        settings = get_settings()
        with Neo4jStore(settings.neo4j) as store:
            pairs = store.fetch_namespaces()

        if not pairs:
            console.print("No namespace prefixes defined", style="yellow")
            return

        table = Table(title="Namespace Prefixes")
        table.add_column("Prefix", style="cyan")
        table.add_column("Namespace")

        for namespace, prefix in sorted(pairs, key=lambda pair: pair[1]):
            table.add_row(prefix, namespace)

        console.print(table)

    except Exception as e:
        console.print(f"✗ Failed: {e}", style="red")
        sys.exit(1)


@cli.command()
def info():
    """Show configuration"""
    settings = get_settings()

    console.print("\n📊 RDF Preview Configuration\n", style="bold")

    console.print("🗄️  Neo4j:", style="bold cyan")
    console.print(f"  URI: {settings.neo4j.uri}")
    console.print(f"  Database: {settings.neo4j.database}")

    console.print("\n⚙️  Preview:", style="bold cyan")
    console.print(f"  Shorten URIs: {settings.preview.shorten_uris}")
    console.print(f"  Types to labels: {settings.preview.types_to_labels}")
    console.print(f"  Language filter: {settings.preview.language_filter or '(none)'}")
    console.print(f"  RDF format: {settings.preview.rdf_format or '(guess from file name)'}")
    console.print(f"  Log level: {settings.log_level}")

    console.print()


if __name__ == '__main__':
    cli()
