"""
Tests for dataset directory loading.
"""
import gzip
from pathlib import Path

import pytest
from pyoxigraph import RdfFormat

from sparqlite.loader import detect_format, load_directory, load_file, read_dataset_file
from sparqlite.prefixes import PrefixRegistry
from sparqlite.store import DatasetStore


PEOPLE_TRIG = b"""
@prefix ex: <https://example.com/> .
@prefix foaf: <http://xmlns.com/foaf/0.1/> .

ex:people {
    ex:alice foaf:name "Alice" ;
        foaf:knows ex:bob .
}
"""

THINGS_TTL = b"""
PREFIX ex: <https://example.com/other/>
PREFIX rdfs: <http://www.w3.org/2000/01/rdf-schema#>

ex:thing rdfs:label "Thing" .
"""

BROKEN_TTL = b"""
@prefix bad: <https://broken.example/> .
bad:a bad:b .
"""


@pytest.fixture
def dataset_dir(tmp_path):
    (tmp_path / "people.trig").write_bytes(PEOPLE_TRIG)
    (tmp_path / "things.ttl").write_bytes(THINGS_TTL)
    return tmp_path


class TestDetectFormat:
    @pytest.mark.parametrize("name,expected", [
        ("data.trig", RdfFormat.TRIG),
        ("data.ttl", RdfFormat.TURTLE),
        ("data.nq", RdfFormat.N_QUADS),
        ("data.nt", RdfFormat.N_TRIPLES),
        ("data.ttl.gz", RdfFormat.TURTLE),
        ("data.unknown", RdfFormat.TRIG),
    ])
    def test_by_extension(self, name, expected):
        assert detect_format(Path(name)) == expected

    def test_no_extension(self):
        assert detect_format(Path("README")) is None


class TestLoadFile:
    def test_loads_quads_and_prefixes(self, dataset_dir):
        store = DatasetStore()
        registry = PrefixRegistry()

        added = load_file(store, dataset_dir / "people.trig", registry)

        assert added == 2
        assert len(store) == 2
        assert registry.get("https://example.com/") == b"ex"
        assert registry.get("http://xmlns.com/foaf/0.1/") == b"foaf"

    def test_gzip(self, tmp_path):
        path = tmp_path / "people.trig.gz"
        path.write_bytes(gzip.compress(PEOPLE_TRIG))
        assert read_dataset_file(path) == PEOPLE_TRIG

        store = DatasetStore()
        assert load_file(store, path, PrefixRegistry()) == 2

    def test_parse_error_skips_file_but_keeps_prefixes(self, tmp_path):
        path = tmp_path / "broken.ttl"
        path.write_bytes(BROKEN_TTL)
        store = DatasetStore()
        registry = PrefixRegistry()

        assert load_file(store, path, registry) is None
        assert registry.get("https://broken.example/") == b"bad"

    def test_missing_file(self, tmp_path):
        assert load_file(DatasetStore(), tmp_path / "gone.ttl", PrefixRegistry()) is None

    def test_no_extension_skipped(self, tmp_path):
        path = tmp_path / "NOTES"
        path.write_bytes(PEOPLE_TRIG)
        registry = PrefixRegistry()
        assert load_file(DatasetStore(), path, registry) is None
        assert len(registry) == 0


class TestLoadDirectory:
    def test_loads_all_files(self, dataset_dir):
        store = DatasetStore()
        registry = PrefixRegistry()

        report = load_directory(store, dataset_dir, registry)

        assert [p.name for p in report.loaded] == ["people.trig", "things.ttl"]
        assert report.skipped == []
        assert report.quads == 3
        assert len(store) == 3

    def test_first_declaration_wins_across_files(self, dataset_dir):
        registry = PrefixRegistry()
        load_directory(DatasetStore(), dataset_dir, registry)

        # "ex" is declared twice with different namespaces; both namespaces are kept
        assert registry.get("https://example.com/") == b"ex"
        assert registry.get("https://example.com/other/") == b"ex"
        assert registry.shorten("https://example.com/other/thing") == "ex:thing"

    def test_skips_subdirectories_and_bad_files(self, dataset_dir):
        (dataset_dir / "nested").mkdir()
        (dataset_dir / "nested" / "more.ttl").write_bytes(THINGS_TTL)
        (dataset_dir / "broken.ttl").write_bytes(BROKEN_TTL)

        report = load_directory(DatasetStore(), dataset_dir, PrefixRegistry())

        assert [p.name for p in report.skipped] == ["broken.ttl"]
        assert report.to_dict()["quads"] == 3
