"""
Dataset directory loading.

Reads every file in a directory, collects its PREFIX declarations into the
registry and bulk-loads it into the store. Files that cannot be read or
parsed are reported and skipped.
"""
import gzip
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from pyoxigraph import RdfFormat

from sparqlite.prefixes.registry import PrefixRegistry
from sparqlite.prefixes.scan import find_prefixes
from sparqlite.store import DatasetStore

logger = logging.getLogger(__name__)


@dataclass
class LoadReport:
    """Outcome of loading a dataset directory."""
    loaded: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)
    quads: int = 0

    def to_dict(self) -> dict:
        return {
            "loaded": [str(p) for p in self.loaded],
            "skipped": [str(p) for p in self.skipped],
            "quads": self.quads,
        }


def detect_format(path: Path) -> Optional[RdfFormat]:
    """
    RDF format from the file extension.

    A ``.gz`` suffix is looked through. Unknown extensions are read as TriG
    (a superset of Turtle and N-Triples); files without an extension are
    not datasets (None).
    """
    suffixes = [s.lower() for s in path.suffixes]
    if suffixes and suffixes[-1] == ".gz":
        suffixes = suffixes[:-1]
    if not suffixes:
        return None

    rdf_format = RdfFormat.from_extension(suffixes[-1][1:])
    return rdf_format if rdf_format is not None else RdfFormat.TRIG


def read_dataset_file(path: Path) -> bytes:
    """Raw file bytes, decompressed when the name ends in .gz."""
    if path.suffix.lower() == ".gz":
        with gzip.open(path, "rb") as f:
            return f.read()
    return path.read_bytes()


def load_file(store: DatasetStore, path: Path, registry: PrefixRegistry) -> Optional[int]:
    """
    Load one dataset file.

    Prefixes are collected before the store sees the data, so declarations
    of a file the store rejects are still registered.

    Returns:
        Number of quads added, or None if the file was skipped
    """
    rdf_format = detect_format(path)
    if rdf_format is None:
        logger.debug(f"Skipping {path.name}: no file extension")
        return None

    try:
        contents = read_dataset_file(path)
    except OSError as e:
        logger.error(f"Error reading {path}: {e}")
        return None

    found = find_prefixes(contents, registry)
    logger.debug(f"{path.name}: {found} prefix declarations")

    try:
        added = store.load(contents, rdf_format)
    except (SyntaxError, ValueError, OSError) as e:
        logger.error(f"Error saving {path.name} to store: {e}")
        return None

    logger.info(f"Loaded {path.name}: {added:,} quads")
    return added


def load_directory(store: DatasetStore, directory: Path, registry: PrefixRegistry) -> LoadReport:
    """Load every file directly under ``directory`` (no recursion), in name order."""
    report = LoadReport()
    for path in sorted(Path(directory).iterdir()):
        if not path.is_file():
            continue
        added = load_file(store, path, registry)
        if added is None:
            report.skipped.append(path)
        else:
            report.loaded.append(path)
            report.quads += added
    return report
