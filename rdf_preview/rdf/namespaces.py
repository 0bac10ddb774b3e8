"""
Namespace prefix table used to shorten IRIs.

Prefixes already registered in the target store are preloaded once per run;
namespaces met for the first time get ``ns<N>`` where N is the table size at
that moment, so prefix assignment depends on the order namespaces are seen.
"""

import logging
from typing import Dict, Iterable, Iterator, Mapping, Optional, Protocol, Tuple, runtime_checkable

logger = logging.getLogger(__name__)

GENERATED_PREFIX = "ns"


@runtime_checkable
class NamespaceSource(Protocol):
    """Anything that can list (namespace, prefix) pairs known to a store"""

    def fetch_namespaces(self) -> Iterable[Tuple[str, str]]:
        ...


class StaticNamespaceSource:
    """In-memory namespace source, for offline previews and tests"""

    def __init__(self, namespaces: Optional[Mapping[str, str]] = None):
        self._namespaces = dict(namespaces or {})

    def fetch_namespaces(self) -> Iterator[Tuple[str, str]]:
        return iter(self._namespaces.items())


def split_iri(iri: str) -> Tuple[str, str]:
    """
    Split an IRI into (namespace, local name).

    The local name is whatever follows the last '#', or failing that the
    last '/', or failing that the last ':'.
    """
    for separator in ("#", "/", ":"):
        index = iri.rfind(separator)
        if index >= 0:
            return iri[:index + 1], iri[index + 1:]
    raise ValueError(f"No separator character found in IRI: {iri}")


class NamespaceRegistry:
    """Bidirectional namespace <-> prefix mapping for one materialization run"""

    def __init__(self):
        self._prefixes: Dict[str, str] = {}
        self._used: Dict[str, str] = {}

    def preload(self, source: NamespaceSource) -> int:
        """Seed the table from an external source; returns number of entries loaded"""
        loaded = 0
        for namespace, prefix in source.fetch_namespaces():
            self._register(namespace, prefix)
            loaded += 1
        return loaded

    def prefix_for(self, namespace: str) -> str:
        """Prefix for a namespace, assigning the next free ``ns<N>`` if unseen"""
        prefix = self._prefixes.get(namespace)
        if prefix is None:
            prefix = self._next_prefix()
            self._register(namespace, prefix)
            logger.debug(f"Assigned prefix '{prefix}' to {namespace}")
        return prefix

    def namespace_for(self, prefix: str) -> Optional[str]:
        return self._used.get(prefix)

    def namespaces(self) -> Dict[str, str]:
        return self._prefixes.copy()

    def _register(self, namespace: str, prefix: str):
        previous = self._prefixes.get(namespace)
        if previous is not None and self._used.get(previous) == namespace:
            del self._used[previous]
        self._prefixes[namespace] = prefix
        self._used[prefix] = namespace

    def _next_prefix(self) -> str:
        # a preloaded table may already hold ns<size>
        index = len(self._prefixes)
        while f"{GENERATED_PREFIX}{index}" in self._used:
            index += 1
        return f"{GENERATED_PREFIX}{index}"

    def __len__(self) -> int:
        return len(self._prefixes)

    def __contains__(self, namespace: str) -> bool:
        return namespace in self._prefixes
