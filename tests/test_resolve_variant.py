import logging

from idstree.core.expand.resolve import extend_preference, resolve_variant
from idstree.core.table import VariantTable


def test_no_entries():
    assert resolve_variant("x", {}, ["a"]) is None


def test_single_entry_ignores_preference(caplog):
    with caplog.at_level(logging.WARNING, logger="idstree"):
        assert resolve_variant("x", {"J": "#(1)"}, []) == ("J", "#(1)")
        assert resolve_variant("x", {"J": "#(1)"}, ["G", "T"]) == ("J", "#(1)")
    assert caplog.records == []


def test_preference_order_wins():
    available = {"a": "X", "b": "Y"}
    assert resolve_variant("x", available, ["b", "a"]) == ("b", "Y")
    assert resolve_variant("x", available, ["a", "b"]) == ("a", "X")
    assert resolve_variant("x", available, ["c", "b"]) == ("b", "Y")


def test_fallback_to_default_tag_is_logged(caplog):
    available = {"a": "X", "": "D", "b": "Y"}
    with caplog.at_level(logging.WARNING, logger="idstree"):
        assert resolve_variant("x", available, ["c"]) == ("", "D")
    assert len(caplog.records) == 1
    assert "'x'" in caplog.records[0].getMessage()
    assert "using ()" in caplog.records[0].getMessage()


def test_fallback_to_first_entry_is_deterministic(caplog):
    available = {"a": "X", "b": "Y"}
    with caplog.at_level(logging.WARNING, logger="idstree"):
        assert resolve_variant("x", available, ["c"]) == ("a", "X")
        assert resolve_variant("x", available, []) == ("a", "X")
    assert len(caplog.records) == 2


def test_table_lookup_uses_resolution():
    table = VariantTable({"x": {"a": "X", "b": "Y"}})
    assert table.lookup("x", ["b"]) == ("b", "Y")
    assert table.lookup("missing", ["b"]) is None
    assert dict(table.variants("x") or {}) == {"a": "X", "b": "Y"}
    assert "x" in table
    assert len(table) == 1


def test_extend_preference():
    assert extend_preference(["a", "b", "c"], "b") == ["b", "a", "c"]
    assert extend_preference(["a", "b"], "c") == ["c", "a", "b"]
    assert extend_preference(["b", "a", "b"], "b") == ["b", "a"]
    assert extend_preference(["a"], "") == ["a"]
    assert extend_preference([], "v") == ["v"]


def test_extend_preference_does_not_mutate():
    pref = ["a", "b"]
    extend_preference(pref, "b")
    assert pref == ["a", "b"]
