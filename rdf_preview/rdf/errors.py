class PreviewError(Exception):
    """Base class for errors raised while previewing an RDF import"""


class NamespacePreloadError(PreviewError):
    """The namespace prefixes already registered in the store could not be read"""


class LiteralCoercionError(PreviewError, ValueError):
    """A typed literal's lexical form does not fit its declared datatype"""

    def __init__(self, lexical: str, datatype: str, reason: str = ""):
        self.lexical = lexical
        self.datatype = datatype
        message = f"Cannot read {lexical!r} as {datatype}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class MaterializationError(PreviewError):
    """The materializer was driven out of order or its state is inconsistent"""


class UnresolvedEndpointError(MaterializationError):
    """A buffered relationship points at a URI that never became a node"""

    def __init__(self, uri: str, subject: str, predicate: str, obj: str):
        self.uri = uri
        super().__init__(
            f"No node for '{uri}' while building relationship "
            f"<{subject}> <{predicate}> <{obj}>"
        )
