from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from rdf_preview.cli import cli

SNIPPET = """
@prefix ex: <http://example.org/> .
@prefix foaf: <http://xmlns.com/foaf/0.1/> .

ex:Alice a ex:Person ; foaf:name "Alice" ; foaf:knows ex:Bob .
ex:Bob a ex:Person .
"""


@pytest.fixture
def runner():
    return CliRunner()


def test_preview_snippet_offline(runner):
    """--no-db previews without touching Neo4j"""
    with patch("rdf_preview.cli.Neo4jStore") as store_cls:
        result = runner.invoke(cli, ["preview-snippet", SNIPPET, "--no-db"])

    assert result.exit_code == 0, result.output
    assert "2 nodes, 1 relationships" in result.output
    store_cls.assert_not_called()


def test_preview_snippet_types_as_relationships(runner):
    result = runner.invoke(cli, ["preview-snippet", SNIPPET, "--no-db", "--no-types-to-labels"])

    assert result.exit_code == 0, result.output
    assert "3 nodes, 3 relationships" in result.output


def test_preview_file(runner, tmp_path):
    path = tmp_path / "people.ttl"
    path.write_text(SNIPPET, encoding="utf-8")

    result = runner.invoke(cli, ["preview", str(path), "--no-db"])

    assert result.exit_code == 0, result.output
    assert "Nodes" in result.output
    assert "Relationships" in result.output


def test_preview_uses_neo4j_prefixes(runner):
    """Without --no-db the prefixes come from Neo4j and the store is closed"""
    store = MagicMock()
    store.fetch_namespaces.return_value = [("http://xmlns.com/foaf/0.1/", "foaf")]

    with patch("rdf_preview.cli.Neo4jStore", return_value=store):
        result = runner.invoke(cli, ["preview-snippet", SNIPPET, "--limit", "5"])

    assert result.exit_code == 0, result.output
    assert "foaf_knows" in result.output
    store.fetch_namespaces.assert_called_once_with()
    store.close.assert_called_once_with()


def test_preview_bad_rdf(runner):
    """Parse errors are reported and the command exits non-zero"""
    result = runner.invoke(cli, ["preview-snippet", "this is not turtle", "--no-db"])

    assert result.exit_code == 1
    assert "Preview failed" in result.output


def test_preview_blank_lang_means_no_filter(runner):
    """--lang "" keeps literals in every language"""
    snippet = '<http://example.org/cat> <http://example.org/name> "chat"@fr .'

    result = runner.invoke(cli, ["preview-snippet", snippet, "--no-db", "--format", "nt", "--lang", ""])

    assert result.exit_code == 0, result.output
    assert "1 nodes, 0 relationships" in result.output


def test_namespaces_command(runner):
    store = MagicMock()
    store.__enter__.return_value = store
    store.fetch_namespaces.return_value = [("http://schema.org/", "sch")]

    with patch("rdf_preview.cli.Neo4jStore", return_value=store):
        result = runner.invoke(cli, ["namespaces"])

    assert result.exit_code == 0, result.output
    assert "sch" in result.output
    assert "http://schema.org/" in result.output


def test_info(runner):
    result = runner.invoke(cli, ["info"])

    assert result.exit_code == 0
    assert "Shorten URIs" in result.output
