"""SPARQL input handling: completion check, query preparation and result rendering."""

from sparqlite.sparql.validator import ValidationState, validate, is_complete
from sparqlite.sparql.query import (
    QueryType,
    QuerySource,
    detect_query_type,
    is_update,
    resolve_query,
    should_inject_prefixes,
    prepare_query,
)
from sparqlite.sparql.results import (
    term_to_text,
    solutions_to_frame,
    triples_to_frame,
    print_results,
)

__all__ = [
    "ValidationState",
    "validate",
    "is_complete",
    "QueryType",
    "QuerySource",
    "detect_query_type",
    "is_update",
    "resolve_query",
    "should_inject_prefixes",
    "prepare_query",
    "term_to_text",
    "solutions_to_frame",
    "triples_to_frame",
    "print_results",
]
