"""
Namespace Prefix Registry.

Provides:
- Registration of namespace -> prefix label pairs (first registration wins)
- IRI compression with longest-namespace matching
- The PREFIX header prepended to ad-hoc queries
- Persistence of the declarations as sh:PrefixDeclaration statements in
  the store, and reloading them on a later run
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple, Union
from urllib.parse import quote

from pyoxigraph import Literal, NamedNode, Quad

from sparqlite.prefixes.table import PrefixTable

logger = logging.getLogger(__name__)

SH = "http://www.w3.org/ns/shacl#"
RDF = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
XSD = "http://www.w3.org/2001/XMLSchema#"

RDF_TYPE = NamedNode(f"{RDF}type")
XSD_STRING = NamedNode(f"{XSD}string")
SH_PREFIX_DECLARATION = NamedNode(f"{SH}PrefixDeclaration")
SH_PREFIX = NamedNode(f"{SH}prefix")
SH_NAMESPACE = NamedNode(f"{SH}namespace")

# Subjects of persisted declarations are minted under this base, one per label
DECLARATION_BASE = "https://sparqlite.github.io/_"

RELOAD_QUERY = """
PREFIX sh: <http://www.w3.org/ns/shacl#>

SELECT ?prefix ?namespace
WHERE {
    ?declaration
        a sh:PrefixDeclaration ;
        sh:prefix ?prefix ;
        sh:namespace ?namespace ;
    .
}
"""

BytesLike = Union[bytes, str]


class PrefixPersistenceError(Exception):
    """Writing prefix declarations to the store failed."""
    pass


def _as_bytes(value: BytesLike) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def declaration_subject(label: str) -> NamedNode:
    """Stable IRI naming the declaration of ``label``."""
    return NamedNode(DECLARATION_BASE + quote(label, safe="-_.~"))


def _term_text(term: Any) -> str:
    """Lexical value for literals, textual form for anything else."""
    if isinstance(term, Literal):
        return term.value
    return str(term)


class PrefixRegistry:
    """
    Registry of namespace prefixes for one run.

    Populated either by scanning dataset files (see ``find_prefixes``) or
    by ``reload`` from a store that already holds persisted declarations.

    Usage:
        registry = PrefixRegistry()
        registry.register(b"https://example.com/", b"ex")
        registry.shorten("https://example.com/alice")  # "ex:alice"
    """

    def __init__(self, table: Optional[PrefixTable] = None):
        self._table = table if table is not None else PrefixTable()

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, namespace: BytesLike) -> bool:
        return _as_bytes(namespace) in self._table

    @property
    def table(self) -> PrefixTable:
        return self._table

    def register(self, namespace: BytesLike, label: BytesLike) -> None:
        """Register a namespace. Ignored if the namespace is already known."""
        namespace = _as_bytes(namespace)
        label = _as_bytes(label)
        if not self._table.add(namespace, label):
            logger.debug(f"Namespace already registered, ignoring label {label!r}: {namespace!r}")

    def get(self, namespace: BytesLike) -> Optional[bytes]:
        return self._table.get(_as_bytes(namespace))

    def items(self) -> List[Tuple[bytes, bytes]]:
        return self._table.items()

    def shorten(self, uri: str) -> str:
        """
        Compress an IRI to ``label:local`` using the longest matching namespace.

        One leading and one trailing double quote are stripped first, so the
        quoted textual form of a value is accepted as well.

        Returns:
            The compressed form, or the (quote-stripped) input when no
            namespace matches
        """
        uri_bytes = uri.encode("utf-8")
        if uri_bytes.startswith(b'"'):
            uri_bytes = uri_bytes[1:]
        if uri_bytes.endswith(b'"'):
            uri_bytes = uri_bytes[:-1]

        for namespace in self._table.ordered():
            # startswith is false for a namespace longer than the uri
            if not uri_bytes.startswith(namespace):
                continue
            try:
                local = uri_bytes[len(namespace):].decode("utf-8")
                label = self._table.get(namespace).decode("utf-8")
            except UnicodeDecodeError:
                continue
            return f"{label}:{local}"

        return uri_bytes.decode("utf-8")

    def format_for_query(self) -> str:
        """PREFIX lines for every namespace, framed by newlines."""
        lines = [
            f"PREFIX {label.decode('utf-8', errors='replace')}: "
            f"<{namespace.decode('utf-8', errors='replace')}>"
            for namespace, label in self._table.items()
        ]
        return "\n" + "\n".join(lines) + "\n"

    def persist(self, store: Any) -> None:
        """
        Write every declaration into the default graph of ``store``.

        Each entry becomes three statements (type, sh:prefix, sh:namespace)
        written as one batch.

        Raises:
            PrefixPersistenceError: if the store rejects a write; nothing
                after the failing entry is written
        """
        for namespace, label in self._table.items():
            try:
                prefix = label.decode("utf-8")
                ns = namespace.decode("utf-8")
                subject = declaration_subject(prefix)
                quads = [
                    Quad(subject, RDF_TYPE, SH_PREFIX_DECLARATION),
                    Quad(subject, SH_PREFIX, Literal(prefix, datatype=XSD_STRING)),
                    Quad(subject, SH_NAMESPACE, Literal(ns, datatype=XSD_STRING)),
                ]
                store.extend(quads)
            except (OSError, UnicodeDecodeError, ValueError) as e:
                raise PrefixPersistenceError(
                    f"Failed to save prefix {label!r} <{namespace!r}> to store: {e}"
                ) from e

        logger.info(f"Persisted {len(self._table)} prefix declarations")

    def reload(self, store: Any) -> int:
        """
        Register the declarations previously persisted in ``store``.

        Returns:
            Number of declarations read. 0 when the store could not be
            queried; the registry is left untouched in that case.
        """
        try:
            solutions = list(store.query(RELOAD_QUERY))
        except Exception as e:
            logger.warning(f"Could not read prefix declarations from store: {e}")
            return 0

        count = 0
        for solution in solutions:
            prefix = solution["prefix"]
            namespace = solution["namespace"]
            if prefix is None or namespace is None:
                continue
            self.register(_term_text(namespace), _term_text(prefix))
            count += 1

        logger.info(f"Reloaded {count} prefix declarations from store")
        return count
