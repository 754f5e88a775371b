"""
sparqlite command line.

Loads a directory of RDF files (or reopens a saved database), then runs one
SPARQL query given with -q or typed at the interactive prompt and prints
the results as a table.
"""
import argparse
import logging
import sys
from typing import List, Optional

from sparqlite import __version__
from sparqlite.config import ConfigValidationError, SparqliteConfig
from sparqlite.loader import load_directory
from sparqlite.prefixes.registry import PrefixPersistenceError, PrefixRegistry
from sparqlite.session import QuerySession, create_line_reader
from sparqlite.sparql.query import (
    QuerySource,
    detect_query_type,
    is_update,
    prepare_query,
    resolve_query,
    should_inject_prefixes,
)
from sparqlite.sparql.results import print_results
from sparqlite.store import DatasetStore

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sparqlite",
        description="Query a directory of RDF files with SPARQL",
    )
    parser.add_argument("-d", "--directory", help="Directory of TriG/Turtle/N-Quads files to load")
    parser.add_argument("-q", "--query", help="Query text, or path of a file containing the query")
    parser.add_argument("--print-query", action="store_true", help="Print the query before executing")
    parser.add_argument(
        "--db",
        help="Use or create an on-disk database. Without -d, the saved database "
             "and its prefixes are reused",
    )
    parser.add_argument(
        "--toggle-prefix",
        action="store_true",
        help="Toggle prefix injection. Inline queries get the PREFIX header by "
             "default and query files do not; this flag inverts both",
    )
    parser.add_argument("--history-file", help="Keep interactive input history in this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def prepare_prefixes(store: DatasetStore, config: SparqliteConfig) -> PrefixRegistry:
    """
    Build the registry for this run.

    With a dataset directory the files are loaded, their prefixes collected
    and persisted into the store. Otherwise the prefixes saved by an earlier
    run are read back from the store.

    Raises:
        PrefixPersistenceError: if the collected prefixes cannot be saved
    """
    registry = PrefixRegistry()
    if config.directory is not None:
        report = load_directory(store, config.directory, registry)
        logger.info(
            f"Loaded {len(report.loaded)} files ({report.quads:,} quads), "
            f"skipped {len(report.skipped)}, {len(registry)} prefixes"
        )
        registry.persist(store)
        store.flush()
    else:
        registry.reload(store)
    return registry


def obtain_query(config: SparqliteConfig, registry: PrefixRegistry) -> Optional[QuerySource]:
    """Query from -q, or from the interactive prompt. None if nothing was entered."""
    if config.query is not None:
        return resolve_query(config.query)

    session = QuerySession(registry, read_line=create_line_reader(config.history_file))
    text = session.read_query()
    if text is None:
        return None
    return QuerySource(text=text)


def execute(
    store: DatasetStore,
    source: QuerySource,
    registry: PrefixRegistry,
    config: SparqliteConfig,
) -> int:
    """Run the query and print its results. Returns the number of rows printed."""
    inject = should_inject_prefixes(source.from_file, config.toggle_prefix)
    sparql = prepare_query(source.text, registry, inject=inject)

    if config.print_query:
        print(f"{sparql}\n\n")

    if is_update(detect_query_type(source.text)):
        store.update(sparql)
        store.flush()
        print("Update applied")
        return 0

    return print_results(store.query(sparql), registry)


def run(config: SparqliteConfig) -> int:
    """Execute one sparqlite run. Returns the process exit code."""
    store = DatasetStore(config.db)

    try:
        registry = prepare_prefixes(store, config)
    except PrefixPersistenceError as e:
        print(f"Error in Save to Store: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if store.is_empty():
        print("Error in loading datasets", file=sys.stderr)
        return EXIT_FAILURE

    try:
        source = obtain_query(config, registry)
    except OSError as e:
        print(f"There is an error in reading the query file: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if source is None:
        print("No query obtained", file=sys.stderr)
        return EXIT_FAILURE

    try:
        execute(store, source, registry, config)
    except (SyntaxError, ValueError, OSError) as e:
        print(f"Error executing query: {e}", file=sys.stderr)
        return EXIT_FAILURE

    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = SparqliteConfig.from_env().merge_args(args)

    try:
        config.validate()
    except ConfigValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    logging.basicConfig(
        level=config.log_level_value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return run(config)


if __name__ == "__main__":
    sys.exit(main())
