import pytest

from idstree.core.expand.expand_tree import create_tree, expand_character
from idstree.core.model import BinExpr, IdsNode, IdsTree, TerExpr, UnaryExpr
from idstree.core.render.render_tree import format_ids_tree, format_tree, node_to_dict, to_string_simp
from idstree.core.table import VariantTable


def _forest_table() -> VariantTable:
    return VariantTable(
        {
            "森": {"": "⿱木林"},
            "林": {"": "⿰木木"},
            "木": {"": "⿻十八"},
            "十": {"": "#(a)"},
            "八": {"": "#(b)"},
            "品": {"": "⿱口⿰口口"},
            "口": {"": "#(c)"},
        }
    )


def test_format_binary_with_annotations():
    node = IdsNode(
        hint="h",
        expr=BinExpr(
            op="⿻",
            op_arg="ov",
            args=[IdsNode(char="十", variant="G"), IdsNode(strokes="㇒", hint="s")],
        ),
    )
    assert format_tree(node) == "* ⿻[ov]\tHint: {h}\n    * \t十(G) \n    * \t㇒ Hint: {s}\n"


def test_format_arity_matches_child_lines():
    leaf = lambda c: IdsNode(char=c)  # noqa: E731
    unary = IdsNode(expr=UnaryExpr(op="⿾", args=[leaf("a")]))
    ternary = IdsNode(char="川", variant="T", expr=TerExpr(op="⿲", args=[leaf("a"), leaf("b"), leaf("c")]))

    unary_lines = format_tree(unary).splitlines()
    assert unary_lines[0] == "* ⿾\t"
    assert unary_lines[1:] == ["    * \ta "]

    ternary_lines = format_tree(ternary).splitlines()
    assert ternary_lines[0] == "* ⿲\t川(T) "
    assert len([ln for ln in ternary_lines if ln.startswith("    * ")]) == 3


def test_format_nesting_indent():
    node = expand_character(_forest_table(), "森", [])
    lines = format_tree(node).splitlines()
    assert lines[0] == "* ⿱\t森 "
    assert lines[1] == "    * ⿻\t木 "
    assert lines[2] == "        * \t十 a "
    assert lines[4] == "    * ⿰\t林 "
    assert lines[5] == "        * ⿻\t木 "
    assert lines[6] == "            * \t十 a "
    assert len(lines) == 11


def test_format_ids_tree_header():
    tree = create_tree(_forest_table(), "木", [])
    assert format_ids_tree(tree).startswith("'木' \n* ⿻\t木 \n")
    assert format_ids_tree(IdsTree(root=IdsNode(strokes="x"))) == "\n* \tx \n"


@pytest.mark.parametrize(
    "level, expected",
    [
        (1, "森"),
        (2, "⿱木林"),
        (3, "⿱⿻十八⿰木木"),
        (10, "⿱⿻⿰⿻⿻"),
    ],
)
def test_simp_levels(level, expected):
    node = expand_character(_forest_table(), "森", [])
    assert to_string_simp(node, level) == expected


def test_simp_anonymous_node_keeps_rendering_at_level_one():
    node = expand_character(_forest_table(), "品", [])
    assert to_string_simp(node, 2) == "⿱口⿰口口"


def test_simp_leaf_without_character_is_empty():
    assert to_string_simp(IdsNode(strokes="x"), 3) == ""


def test_simp_rejects_level_zero():
    with pytest.raises(ValueError):
        to_string_simp(IdsNode(char="木"), 0)


def test_node_to_dict():
    node = expand_character(_forest_table(), "木", [])
    d = node_to_dict(node)
    assert d["char"] == "木"
    assert d["op"] == "⿻"
    assert d["op_arg"] is None
    assert [c["char"] for c in d["children"]] == ["十", "八"]
    assert d["children"][0]["strokes"] == "a"
    assert d["children"][0]["op"] is None
    assert d["children"][0]["children"] == []
