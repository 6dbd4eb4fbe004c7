"""Tests for nested document traversal."""

from genome_report.references import collect, find_first, iter_nodes

DOC = {
    "sections": [
        {"paragraphs": [{"sentences": [{"text": "a"}, {"text": "b"}]}]},
        {"paragraphs": "not-a-list"},
        "not-a-dict",
        {"paragraphs": [{"sentences": [{"text": "c"}]}, {}]},
    ]
}

PATH = ("sections", "paragraphs", "sentences")


class TestIterNodes:
    def test_document_order(self):
        assert [n["text"] for n in iter_nodes(DOC, PATH)] == ["a", "b", "c"]

    def test_empty_path_yields_root(self):
        assert list(iter_nodes(DOC, ())) == [DOC]

    def test_non_dict_root(self):
        assert list(iter_nodes(["x"], PATH)) == []

    def test_missing_key(self):
        assert list(iter_nodes({}, PATH)) == []


class TestCollectAndFindFirst:
    def test_collect_all(self):
        assert len(collect(DOC, PATH)) == 3

    def test_collect_filtered(self):
        assert collect(DOC, PATH, lambda n: n["text"] != "b") == [{"text": "a"}, {"text": "c"}]

    def test_find_first(self):
        assert find_first(DOC, PATH, lambda n: n["text"] > "a") == {"text": "b"}

    def test_find_first_none(self):
        assert find_first(DOC, PATH, lambda n: False) is None
