"""
Dataset store backed by Oxigraph.

Oxigraph does the parsing, storage and SPARQL evaluation; this wrapper only
fixes the handful of operations the CLI needs.
"""
import logging
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from pyoxigraph import Quad, RdfFormat, Store

logger = logging.getLogger(__name__)


class DatasetStore:
    """
    Oxigraph store, on disk or in memory.

    An on-disk store created by an earlier run is reopened as is, including
    any prefix declarations persisted into it.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        """
        Create or open a store.

        Args:
            path: Directory of an on-disk store; created if missing.
                In-memory store when omitted.
        """
        self.path = Path(path) if path else None
        self._store = Store(str(self.path)) if self.path else Store()
        if self.path:
            logger.debug(f"Opened store at {self.path}")

    def __len__(self) -> int:
        """Return number of quads."""
        return len(self._store)

    def is_empty(self) -> bool:
        return len(self) == 0

    def load(
        self,
        data: bytes,
        format: RdfFormat = RdfFormat.TRIG,
        base_iri: Optional[str] = None,
    ) -> int:
        """
        Bulk-load serialized RDF.

        Returns:
            Number of quads added

        Raises:
            SyntaxError: if the data does not parse in ``format``
        """
        before = len(self)
        self._store.load(data, format, base_iri=base_iri)
        return len(self) - before

    def query(self, sparql: str) -> Any:
        """Evaluate a SPARQL query; returns solutions, a boolean or triples."""
        return self._store.query(sparql)

    def update(self, sparql: str) -> None:
        self._store.update(sparql)

    def extend(self, quads: Iterable[Quad]) -> None:
        """Add quads as one transaction."""
        self._store.extend(quads)

    def flush(self) -> None:
        if self.path:
            self._store.flush()
