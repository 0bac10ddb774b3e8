"""
Literal coercion: RDF typed literals to native property values.
"""

from dataclasses import dataclass
from typing import Any, Optional

from rdflib import Literal
from rdflib.namespace import XSD

from .errors import LiteralCoercionError

# Language filter value that keeps every literal and records its language
AUTO_LANGUAGE = "@"

# Appended to a property name to hold the language tag of its value
LANGUAGE_SUFFIX = "@"

INTEGER_TYPES = frozenset({XSD.int, XSD.integer, XSD.long})
FLOAT_TYPES = frozenset({XSD.decimal, XSD.float, XSD.double})

LONG_MIN = -(2 ** 63)
LONG_MAX = 2 ** 63 - 1

_TRUE = {"true", "1"}
_FALSE = {"false", "0"}


@dataclass(frozen=True)
class CoercedLiteral:
    """
    A literal turned into a property value.

    ``language`` is only set when a companion ``<prop>@`` property has to be
    written alongside the value.
    """
    value: Any
    language: Optional[str] = None


class LiteralCoercer:
    """Converts literals to int / float / bool / str and applies the language filter"""

    def __init__(self, language_filter: Optional[str] = None):
        self.auto_language_properties = language_filter == AUTO_LANGUAGE
        self.language_filter = None if self.auto_language_properties else language_filter

    def coerce(self, literal: Literal) -> Optional[CoercedLiteral]:
        """
        Coerce a literal, or return None when its language is filtered out.

        Raises:
            LiteralCoercionError: numeric or boolean lexical form is malformed
        """
        datatype = literal.datatype
        lexical = str(literal)

        if datatype in INTEGER_TYPES:
            return CoercedLiteral(self._to_long(lexical, datatype))
        if datatype in FLOAT_TYPES:
            return CoercedLiteral(self._to_double(lexical, datatype))
        if datatype == XSD.boolean:
            return CoercedLiteral(self._to_boolean(lexical, datatype))

        # a string, possibly language tagged
        language = literal.language
        if language and not self.accepts_language(language):
            return None
        if self.auto_language_properties and language:
            return CoercedLiteral(lexical, language)
        return CoercedLiteral(lexical)

    def accepts_language(self, language: str) -> bool:
        if self.language_filter is None:
            return True
        return language.lower() == self.language_filter.lower()

    @staticmethod
    def _to_long(lexical: str, datatype) -> int:
        try:
            value = int(lexical.strip())
        except ValueError as e:
            raise LiteralCoercionError(lexical, str(datatype)) from e
        if not LONG_MIN <= value <= LONG_MAX:
            raise LiteralCoercionError(lexical, str(datatype), "outside the 64-bit integer range")
        return value

    @staticmethod
    def _to_double(lexical: str, datatype) -> float:
        try:
            return float(lexical.strip())
        except ValueError as e:
            raise LiteralCoercionError(lexical, str(datatype)) from e

    @staticmethod
    def _to_boolean(lexical: str, datatype) -> bool:
        token = lexical.strip()
        if token in _TRUE:
            return True
        if token in _FALSE:
            return False
        raise LiteralCoercionError(lexical, str(datatype))
