"""Tests for the generic SGF reader and writer."""

import pytest

from gosgf.core.notation import (
    SgfCollection,
    SgfNode,
    SgfParseError,
    escape_text,
    parse_sgf,
    serialize_collection,
    serialize_tree,
    unescape_text,
)


class TestEscaping:
    def test_escape_specials(self) -> None:
        assert escape_text("a]b[c\\d\ne") == "a\\]b\\[c\\\\d\\ne"

    def test_unescape_is_inverse(self) -> None:
        text = "brackets [x] and \\ slash\nnew line"
        assert unescape_text(escape_text(text)) == text

    def test_unescape_drops_backslash_before_other(self) -> None:
        assert unescape_text("a\\:b") == "a:b"


class TestParse:
    def test_simple_game(self) -> None:
        collection = parse_sgf("(;FF[4]GM[1]SZ[19]PB[A]PW[B];B[pd];W[qe])")
        assert len(collection.trees) == 1
        root, first, second = collection.trees[0]
        assert root.get("PB") == "A"
        assert root.get("SZ") == "19"
        assert first.get("B") == "pd"
        assert second.get("W") == "qe"

    def test_multiple_values(self) -> None:
        (tree,) = parse_sgf("(;AB[aa][bb]  [cc])").trees
        assert tree[0].values("AB") == ["aa", "bb", "cc"]

    def test_escaped_value(self) -> None:
        (tree,) = parse_sgf("(;C[a \\] b \\\\ c \\n d])").trees
        assert tree[0].get("C") == "a ] b \\ c \n d"

    def test_mixed_case_identifier(self) -> None:
        (tree,) = parse_sgf("(;SiZe[19];B[aa])").trees
        assert tree[0].get("SZ") == "19"

    def test_unknown_properties_kept(self) -> None:
        (tree,) = parse_sgf("(;XY[hello];B[aa]ZZ[1][2])").trees
        assert tree[0].get("XY") == "hello"
        assert tree[1].values("ZZ") == ["1", "2"]

    def test_whitespace_between_tokens(self) -> None:
        (tree,) = parse_sgf("\n( ;B [aa]\n ; W[bb] )\n").trees
        assert [n.get("B") or n.get("W") for n in tree] == ["aa", "bb"]

    def test_leading_junk_skipped(self) -> None:
        (tree,) = parse_sgf("garbage before (;B[aa])").trees
        assert tree[0].get("B") == "aa"

    def test_trailing_junk_ignored(self) -> None:
        collection = parse_sgf("(;B[aa]) trailing")
        assert len(collection.trees) == 1


class TestVariations:
    def test_variations_attach_to_preceding_node(self) -> None:
        (tree,) = parse_sgf("(;GM[1];B[aa](;W[bb])(;W[cc];B[dd]))").trees
        assert len(tree) == 2
        move = tree[1]
        assert len(move.variations) == 2
        assert move.variations[0][0].get("W") == "bb"
        assert [n.get("W") or n.get("B") for n in move.variations[1]] == ["cc", "dd"]

    def test_sequence_continues_after_subtree(self) -> None:
        (tree,) = parse_sgf("(;B[aa](;W[bb]);W[cc])").trees
        assert [n.get("B") or n.get("W") for n in tree] == ["aa", "cc"]
        assert tree[0].variations[0][0].get("W") == "bb"

    def test_subtree_before_any_node_gets_anchor(self) -> None:
        (tree,) = parse_sgf("((;B[aa])(;B[bb]))").trees
        assert len(tree) == 1
        anchor = tree[0]
        assert anchor.properties == {}
        assert len(anchor.variations) == 2

    def test_empty_subtree_ignored(self) -> None:
        (tree,) = parse_sgf("(;B[aa]())").trees
        assert tree[0].variations == []

    def test_deep_nesting(self) -> None:
        depth = 1500
        text = "(;GM[1]" + "(;B[aa]" * depth + ")" * (depth + 1)
        (tree,) = parse_sgf(text).trees
        level = 0
        node = tree[0]
        while node.variations:
            node = node.variations[0][0]
            level += 1
        assert level == depth
        assert serialize_tree(tree) == text

    def test_several_top_level_trees(self) -> None:
        collection = parse_sgf("(;B[aa])\n(;B[bb];W[cc])")
        assert [len(tree) for tree in collection.trees] == [1, 2]


class TestParseErrors:
    @pytest.mark.parametrize(
        ("text", "message"),
        [
            ("", "Empty SGF input"),
            ("   ", "Empty SGF input"),
            ("no tree here", "No game tree found"),
            ("()", "holds no nodes"),
            ("(;B[aa]", "Unterminated game tree"),
            ("(;C[never closed", "Unterminated property value"),
            ("(B[aa])", "Property outside of a node"),
            ("(;B[aa]#)", "Unexpected character"),
            ("(;bb[aa])", "Malformed property identifier"),
            ("(;B;W[aa])", "has no value"),
        ],
    )
    def test_malformed(self, text: str, message: str) -> None:
        with pytest.raises(SgfParseError, match=message):
            parse_sgf(text)

    def test_error_records_offset(self) -> None:
        with pytest.raises(SgfParseError) as info:
            parse_sgf("(;B[aa]#)")
        assert info.value.position == 7

    def test_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_sgf("(;B[aa]")


class TestSerialize:
    def test_tree_layout(self) -> None:
        root = SgfNode()
        root.add("GM", "1")
        move = SgfNode()
        move.add("B", "aa")
        branch = SgfNode()
        branch.add("B", "bb")
        root.variations.append([branch])
        assert serialize_tree([root, move]) == "(;GM[1](;B[bb]);B[aa])"

    def test_values_escaped(self) -> None:
        node = SgfNode()
        node.add("C", "a]b")
        assert serialize_tree([node]) == "(;C[a\\]b])"

    def test_empty_property_skipped(self) -> None:
        node = SgfNode(properties={"XX": [], "B": ["aa"]})
        assert serialize_tree([node]) == "(;B[aa])"

    def test_collection_joined_by_newline(self) -> None:
        a = SgfNode(properties={"B": ["aa"]})
        b = SgfNode(properties={"W": ["bb"]})
        text = serialize_collection(SgfCollection(trees=[[a], [b]]))
        assert text == "(;B[aa])\n(;W[bb])"

    def test_reparse_preserves_structure(self) -> None:
        text = "(;FF[4]C[x\\]y](;B[aa];W[bb])(;B[cc]);B[dd](;W[ee])(;W[ff]))"
        assert serialize_collection(parse_sgf(text)) == text
