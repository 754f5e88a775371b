"""
Result rendering.

Converts pyoxigraph result sets into polars DataFrames with IRIs
compressed through the prefix registry, and prints them as tables.
"""
import sys
from typing import Any, Iterable, Optional, TextIO

import polars as pl
from pyoxigraph import (
    BlankNode,
    Literal,
    NamedNode,
    QueryBoolean,
    QuerySolutions,
    QueryTriples,
    Triple,
)

from sparqlite.prefixes.registry import PrefixRegistry

TRIPLE_COLUMNS = ["subject", "predicate", "object"]


def term_to_text(term: Any, registry: PrefixRegistry) -> str:
    """Display form of a single bound value ("" when unbound)."""
    if term is None:
        return ""
    if isinstance(term, NamedNode):
        return registry.shorten(term.value)
    if isinstance(term, Literal):
        return term.value
    if isinstance(term, BlankNode):
        return str(term)
    if isinstance(term, Triple):
        return "\t".join(
            term_to_text(part, registry)
            for part in (term.subject, term.predicate, term.object)
        )
    return str(term)


def _frame(columns: list, rows: list) -> pl.DataFrame:
    data = {name: [row[i] for row in rows] for i, name in enumerate(columns)}
    return pl.DataFrame(data, schema={name: pl.Utf8 for name in columns})


def solutions_to_frame(solutions: QuerySolutions, registry: PrefixRegistry) -> pl.DataFrame:
    """One Utf8 column per projected variable, in projection order."""
    variables = list(solutions.variables)
    columns = [v.value for v in variables]
    rows = [
        [term_to_text(solution[v], registry) for v in variables]
        for solution in solutions
    ]
    return _frame(columns, rows)


def triples_to_frame(triples: Iterable[Triple], registry: PrefixRegistry) -> pl.DataFrame:
    """subject/predicate/object columns for CONSTRUCT and DESCRIBE results."""
    rows = [
        [term_to_text(t.subject, registry),
         term_to_text(t.predicate, registry),
         term_to_text(t.object, registry)]
        for t in triples
    ]
    return _frame(TRIPLE_COLUMNS, rows)


def print_frame(df: pl.DataFrame, file: Optional[TextIO] = None) -> None:
    out = file if file is not None else sys.stdout
    with pl.Config(
        tbl_rows=-1,
        tbl_cols=-1,
        fmt_str_lengths=10_000,
        tbl_width_chars=10_000,
        tbl_hide_column_data_types=True,
        tbl_hide_dataframe_shape=True,
    ):
        print(df, file=out)


def print_results(results: Any, registry: PrefixRegistry, file: Optional[TextIO] = None) -> int:
    """
    Print a query result and a trailing "Total: N" line.

    Args:
        results: Solutions, boolean or triples as returned by the store
        registry: Registry used to compress IRIs
        file: Output stream (stdout by default)

    Returns:
        Number of rows printed (1 for boolean results)
    """
    out = file if file is not None else sys.stdout

    if isinstance(results, (bool, QueryBoolean)):
        print("true" if bool(results) else "false", file=out)
        return 1

    if isinstance(results, QuerySolutions):
        df = solutions_to_frame(results, registry)
    elif isinstance(results, QueryTriples):
        df = triples_to_frame(results, registry)
    else:
        raise TypeError(f"Unsupported result type: {type(results).__name__}")

    print_frame(df, file=out)
    print(f"Total: {df.height}", file=out)
    return df.height
