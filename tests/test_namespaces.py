"""
Tests for the namespace prefix table and IRI splitting
"""

import pytest
from unittest.mock import Mock

from rdf_preview.rdf.namespaces import (
    NamespaceRegistry,
    NamespaceSource,
    StaticNamespaceSource,
    split_iri,
)

EX = "http://example.org/"
FOAF = "http://xmlns.com/foaf/0.1/"
RDF_NS = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"


def test_split_on_hash():
    """Hash namespaces keep the '#' in the namespace part"""
    assert split_iri(RDF_NS + "type") == (RDF_NS, "type")


def test_split_on_slash():
    """Slash namespaces split after the last '/'"""
    assert split_iri(FOAF + "name") == (FOAF, "name")
    assert split_iri("http://example.org/people/123") == ("http://example.org/people/", "123")


def test_split_on_colon():
    """URNs fall back to the last ':'"""
    assert split_iri("urn:isbn:0451450523") == ("urn:isbn:", "0451450523")


def test_split_hash_wins_over_slash():
    """A '#' after the last '/' decides the split"""
    assert split_iri("http://example.org/onto#Thing") == ("http://example.org/onto#", "Thing")


def test_split_without_separator():
    """An IRI with no separator cannot be split"""
    with pytest.raises(ValueError):
        split_iri("nothing-to-split")


def test_fresh_prefixes_are_dense_and_ordered():
    """Unseen namespaces get ns0, ns1, ... in first-seen order"""
    registry = NamespaceRegistry()

    assert registry.prefix_for(EX) == "ns0"
    assert registry.prefix_for(FOAF) == "ns1"
    assert registry.prefix_for(RDF_NS) == "ns2"
    assert len(registry) == 3


def test_prefix_for_is_idempotent():
    """Asking twice for the same namespace returns the same prefix"""
    registry = NamespaceRegistry()

    first = registry.prefix_for(EX)
    registry.prefix_for(FOAF)
    second = registry.prefix_for(EX)

    assert first == second == "ns0"
    assert len(registry) == 2


def test_preload_seeds_table():
    """Preloaded prefixes are used as-is and count towards the next ns<N>"""
    registry = NamespaceRegistry()
    source = StaticNamespaceSource({EX: "ex", FOAF: "foaf"})

    loaded = registry.preload(source)

    assert loaded == 2
    assert registry.prefix_for(EX) == "ex"
    assert registry.prefix_for(FOAF) == "foaf"
    assert registry.prefix_for(RDF_NS) == "ns2"
    assert registry.namespace_for("ex") == EX
    assert EX in registry


def test_generated_prefix_skips_preloaded_one():
    """A generated prefix never collides with a preloaded prefix"""
    registry = NamespaceRegistry()
    registry.preload(StaticNamespaceSource({EX: "ns1"}))

    prefix = registry.prefix_for(FOAF)

    assert prefix == "ns2"
    assert registry.namespace_for("ns1") == EX
    assert registry.namespace_for("ns2") == FOAF


def test_preload_accepts_any_source():
    """Any object with fetch_namespaces() works as a source"""
    source = Mock()
    source.fetch_namespaces.return_value = [(EX, "ex")]

    registry = NamespaceRegistry()
    registry.preload(source)

    source.fetch_namespaces.assert_called_once_with()
    assert registry.namespaces() == {EX: "ex"}


def test_namespaces_returns_copy():
    """Mutating the returned table does not touch the registry"""
    registry = NamespaceRegistry()
    registry.prefix_for(EX)

    table = registry.namespaces()
    table[FOAF] = "foaf"

    assert FOAF not in registry


def test_static_source_is_a_namespace_source():
    """StaticNamespaceSource satisfies the NamespaceSource protocol"""
    assert isinstance(StaticNamespaceSource(), NamespaceSource)
    assert list(StaticNamespaceSource().fetch_namespaces()) == []
