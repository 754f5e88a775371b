"""
Tests for query preparation.
"""
import pytest

from sparqlite.prefixes import PrefixRegistry
from sparqlite.sparql.query import (
    QueryType,
    QuerySource,
    detect_query_type,
    is_update,
    prepare_query,
    resolve_query,
    should_inject_prefixes,
)


SAMPLE_SELECT = """
PREFIX foaf: <http://xmlns.com/foaf/0.1/>
SELECT ?name
WHERE {
    ?person foaf:name ?name .
}
"""

SAMPLE_INSERT = """
PREFIX foaf: <http://xmlns.com/foaf/0.1/>
INSERT DATA {
    <http://example.org/alice> foaf:age 30 .
}
"""


class TestDetectQueryType:
    def test_select(self):
        assert detect_query_type(SAMPLE_SELECT) == QueryType.SELECT

    def test_insert_data(self):
        assert detect_query_type(SAMPLE_INSERT) == QueryType.INSERT_DATA

    def test_prefix_on_same_line(self):
        query = "PREFIX ex: <http://example.org/> ASK { ?s a ex:Thing }"
        assert detect_query_type(query) == QueryType.ASK

    def test_comments_and_base_skipped(self):
        query = "# find things\nBASE <http://example.org/>\nconstruct { ?s ?p ?o } where { ?s ?p ?o }"
        assert detect_query_type(query) == QueryType.CONSTRUCT

    @pytest.mark.parametrize("text,expected", [
        ("DESCRIBE <http://a>", QueryType.DESCRIBE),
        ("DELETE DATA { <a> <b> <c> }", QueryType.DELETE_DATA),
        ("DELETE { ?s ?p ?o } WHERE { ?s ?p ?o }", QueryType.DELETE),
        ("INSERT { ?s ?p ?o } WHERE { ?s ?p ?o }", QueryType.INSERT),
        ("CLEAR DEFAULT", QueryType.CLEAR),
        ("LOAD <http://example.org/data.ttl>", QueryType.LOAD),
        ("", QueryType.SELECT),
    ])
    def test_forms(self, text, expected):
        assert detect_query_type(text) == expected

    def test_is_update(self):
        assert is_update(QueryType.INSERT_DATA)
        assert is_update(QueryType.CLEAR)
        assert not is_update(QueryType.SELECT)
        assert not is_update(QueryType.ASK)


class TestResolveQuery:
    def test_inline_text(self):
        source = resolve_query("SELECT * { ?s ?p ?o }")
        assert source == QuerySource(text="SELECT * { ?s ?p ?o }")
        assert source.from_file is False

    def test_query_file(self, tmp_path):
        path = tmp_path / "query.rq"
        path.write_text(SAMPLE_SELECT, encoding="utf-8")

        source = resolve_query(str(path))
        assert source.from_file is True
        assert source.text == SAMPLE_SELECT
        assert source.path == path

    def test_directory_is_not_a_query_file(self, tmp_path):
        source = resolve_query(str(tmp_path))
        assert source.from_file is False

    def test_very_long_inline_query(self):
        text = "SELECT * { ?s ?p ?o } # " + "x" * 5000
        assert resolve_query(text).text == text


class TestPrefixInjection:
    def test_defaults(self):
        assert should_inject_prefixes(from_file=False) is True
        assert should_inject_prefixes(from_file=True) is False

    def test_toggle_inverts(self):
        assert should_inject_prefixes(from_file=False, toggle_prefix=True) is False
        assert should_inject_prefixes(from_file=True, toggle_prefix=True) is True

    def test_prepare_query_injects_header(self):
        registry = PrefixRegistry()
        registry.register("https://example.com/", "ex")
        query = "SELECT * { ?s a ex:Thing }"

        assert prepare_query(query, registry) == (
            "\nPREFIX ex: <https://example.com/>\n\n\nSELECT * { ?s a ex:Thing }"
        )

    def test_prepare_query_without_injection(self):
        registry = PrefixRegistry()
        registry.register("https://example.com/", "ex")
        assert prepare_query("ASK {}", registry, inject=False) == "ASK {}"
