"""Extraction of PREFIX declarations from raw dataset bytes."""
import re
from typing import Iterator, Tuple

from sparqlite.prefixes.registry import PrefixRegistry

# Matches both SPARQL-style "PREFIX ex: <...>" and Turtle "@prefix ex: <...> ."
PREFIX_PATTERN = re.compile(
    rb"prefix\s+([A-Za-z0-9_\-]+):\s+<([A-Za-z0-9/:\-.#_]+)>",
    re.IGNORECASE,
)


def scan(file_contents: bytes) -> Iterator[Tuple[bytes, bytes]]:
    """Yield (namespace, label) for every declaration, in file order."""
    for match in PREFIX_PATTERN.finditer(file_contents):
        yield match.group(2), match.group(1)


def find_prefixes(file_contents: bytes, registry: PrefixRegistry) -> int:
    """Register every declaration found in ``file_contents``. Returns the match count."""
    count = 0
    for namespace, label in scan(file_contents):
        registry.register(namespace, label)
        count += 1
    return count
