"""
sparqlite: query RDF datasets with SPARQL from the command line.

Oxigraph stores and evaluates; sparqlite keeps track of namespace prefixes
and collects multi-line queries at an interactive prompt.
"""

__version__ = "0.3.0"

from sparqlite.prefixes import PrefixRegistry, PrefixTable, PrefixPersistenceError, find_prefixes
from sparqlite.sparql import ValidationState, validate
from sparqlite.session import QuerySession, SessionState
from sparqlite.store import DatasetStore

__all__ = [
    "PrefixRegistry",
    "PrefixTable",
    "PrefixPersistenceError",
    "find_prefixes",
    "ValidationState",
    "validate",
    "QuerySession",
    "SessionState",
    "DatasetStore",
]
