"""
Query preparation.

Provides:
- Query type detection (query vs. update forms)
- Resolving the -q argument to inline text or a query file
- PREFIX header injection rules
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from sparqlite.prefixes.registry import PrefixRegistry

logger = logging.getLogger(__name__)

# Leading PREFIX/BASE declarations and comments, skipped before the query keyword
_PROLOGUE = re.compile(
    r"\A(?:\s+|#[^\n]*\n|PREFIX\s+[^\s:]*:\s*<[^>]*>|BASE\s+<[^>]*>)*",
    re.IGNORECASE,
)


class QueryType(Enum):
    """Type of SPARQL request."""
    SELECT = "select"
    CONSTRUCT = "construct"
    ASK = "ask"
    DESCRIBE = "describe"
    INSERT = "insert"
    DELETE = "delete"
    INSERT_DATA = "insert_data"
    DELETE_DATA = "delete_data"
    LOAD = "load"
    CLEAR = "clear"


UPDATE_TYPES = frozenset({
    QueryType.INSERT,
    QueryType.DELETE,
    QueryType.INSERT_DATA,
    QueryType.DELETE_DATA,
    QueryType.LOAD,
    QueryType.CLEAR,
})


def detect_query_type(sparql: str) -> QueryType:
    """Detect the type of SPARQL request from its text."""
    body = sparql[_PROLOGUE.match(sparql).end():]
    normalized = " ".join(body.split()).upper()

    if normalized.startswith("SELECT"):
        return QueryType.SELECT
    elif normalized.startswith("CONSTRUCT"):
        return QueryType.CONSTRUCT
    elif normalized.startswith("ASK"):
        return QueryType.ASK
    elif normalized.startswith("DESCRIBE"):
        return QueryType.DESCRIBE
    elif normalized.startswith("INSERT DATA"):
        return QueryType.INSERT_DATA
    elif normalized.startswith("DELETE DATA"):
        return QueryType.DELETE_DATA
    elif normalized.startswith("INSERT") or normalized.startswith("WITH"):
        return QueryType.INSERT
    elif normalized.startswith("DELETE"):
        return QueryType.DELETE
    elif normalized.startswith("LOAD"):
        return QueryType.LOAD
    elif normalized.startswith("CLEAR"):
        return QueryType.CLEAR

    # Default to SELECT if unclear
    return QueryType.SELECT


def is_update(query_type: QueryType) -> bool:
    return query_type in UPDATE_TYPES


@dataclass
class QuerySource:
    """Query text and where it came from."""
    text: str
    from_file: bool = False
    path: Path | None = None


def resolve_query(value: str) -> QuerySource:
    """
    Interpret the -q argument.

    An existing file is read as UTF-8; anything else is the query itself.

    Raises:
        OSError: if the file exists but cannot be read
    """
    path = Path(value)
    try:
        is_file = path.is_file()
    except (OSError, ValueError):
        # query text too long or otherwise not a usable path
        is_file = False

    if not is_file:
        return QuerySource(text=value)

    logger.debug(f"Reading query from {path}")
    return QuerySource(text=path.read_text(encoding="utf-8"), from_file=True, path=path)


def should_inject_prefixes(from_file: bool, toggle_prefix: bool = False) -> bool:
    """
    Inline queries get the PREFIX header by default, query files do not.

    ``toggle_prefix`` inverts the default for either source.
    """
    if from_file:
        return toggle_prefix
    return not toggle_prefix


def prepare_query(text: str, registry: PrefixRegistry, inject: bool = True) -> str:
    """Prepend the registry's PREFIX header when ``inject`` is set."""
    if not inject:
        return text
    return f"{registry.format_for_query()}\n\n{text}"
