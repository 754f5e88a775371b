"""
Namespace/prefix table.

Holds namespace -> label associations plus an ordering index that is
re-sorted lazily, longest namespace first, so the most specific namespace
is tried first when compressing IRIs.
"""
from typing import Dict, Iterator, List, Optional, Tuple


class PrefixTable:
    """
    Namespace -> label mapping with a longest-first lookup order.

    Keys and values are raw bytes. A namespace maps to at most one label;
    the first label added for a namespace is kept.
    """

    def __init__(self):
        self._labels: Dict[bytes, bytes] = {}
        self._order: List[bytes] = []
        self._sorted = False

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, namespace: bytes) -> bool:
        return namespace in self._labels

    def __iter__(self) -> Iterator[bytes]:
        """Iterate namespaces in the current ordering (no sort is triggered)."""
        return iter(list(self._order))

    @property
    def is_sorted(self) -> bool:
        return self._sorted

    def add(self, namespace: bytes, label: bytes) -> bool:
        """
        Add a namespace/label pair.

        Returns:
            True if the pair was inserted, False if the namespace was
            already present (the existing label is kept)
        """
        if namespace in self._labels:
            return False

        self._labels[bytes(namespace)] = bytes(label)
        self._order.append(bytes(namespace))
        self._sorted = False
        return True

    def get(self, namespace: bytes) -> Optional[bytes]:
        return self._labels.get(namespace)

    def sort(self) -> None:
        """Sort by descending length. Equal lengths keep insertion order."""
        self._order.sort(key=len, reverse=True)
        self._sorted = True

    def ordered(self) -> List[bytes]:
        """Namespaces longest first, sorting only if something was added since the last sort."""
        if not self._sorted:
            self.sort()
        return self._order

    def items(self) -> List[Tuple[bytes, bytes]]:
        """(namespace, label) pairs in the current ordering."""
        return [(ns, self._labels[ns]) for ns in self._order]
