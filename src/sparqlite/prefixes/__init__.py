"""Namespace prefix bookkeeping."""

from sparqlite.prefixes.table import PrefixTable
from sparqlite.prefixes.registry import (
    PrefixRegistry,
    PrefixPersistenceError,
    RELOAD_QUERY,
    declaration_subject,
)
from sparqlite.prefixes.scan import PREFIX_PATTERN, scan, find_prefixes

__all__ = [
    "PrefixTable",
    "PrefixRegistry",
    "PrefixPersistenceError",
    "RELOAD_QUERY",
    "declaration_subject",
    "PREFIX_PATTERN",
    "scan",
    "find_prefixes",
]
