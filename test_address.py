"""Tests for path expression parsing and matching."""

import pytest
from contractdiff import (
    Address,
    AddressSyntaxError,
    Field,
    Index,
    IndexRange,
    IndexRangeFrom,
    IndexRangeTo,
    WildcardField,
    WildcardIndex,
    is_valid_address,
    parse_address,
    prefixes,
)


class TestParseAddress:
    """Test parsing of path expressions."""

    def test_root(self):
        """Test that '$' alone is the root."""
        path = parse_address("$")
        assert path == Address.root()
        assert path.is_root

    def test_fields(self):
        assert parse_address("$.a.b.c") == Address.of(Field("a"), Field("b"), Field("c"))

    def test_fields_and_indexes(self):
        path = parse_address("$.a[0].b[1].c")
        assert path == Address.of(
            Field("a"), Index(0), Field("b"), Index(1), Field("c")
        )

    def test_range(self):
        path = parse_address("$.a[0].b[1:2].c")
        assert path == Address.of(
            Field("a"), Index(0), Field("b"), IndexRange(1, 2), Field("c")
        )

    def test_wildcards(self):
        path = parse_address("$.a[0].b[*].*.c[0:1]")
        assert path == Address.of(
            Field("a"),
            Index(0),
            Field("b"),
            WildcardIndex(),
            WildcardField(),
            Field("c"),
            IndexRange(0, 1),
        )

    def test_open_ranges_and_root_bracket(self):
        path = parse_address("$[:].a[3:].b[:4].*.c[0:1]")
        assert path == Address.of(
            WildcardIndex(),
            Field("a"),
            IndexRangeFrom(3),
            Field("b"),
            IndexRangeTo(4),
            WildcardField(),
            Field("c"),
            IndexRange(0, 1),
        )

    def test_index_on_root(self):
        assert parse_address("$[*].a") == Address.of(WildcardIndex(), Field("a"))
        assert parse_address("$[2]") == Address.of(Index(2))

    def test_nested_arrays(self):
        assert parse_address("$.a[0][1]") == Address.of(Field("a"), Index(0), Index(1))

    def test_structural_equality(self):
        """Test that two parses of the same text are equal and hash alike."""
        first = parse_address("$.items[1:3].name")
        second = Address.parse("$.items[1:3].name")
        assert first == second
        assert hash(first) == hash(second)
        assert len({first, second}) == 1

    @pytest.mark.parametrize("text", [
        "",
        "id",
        ".a.b.c",
        "$.a.b.c[",
        "$.a.b.c[]",
        "$.a.b.c[1:",
        "$.a.b.c[1:2",
        "$.",
        "$..a",
        "$.1a",
        "$.a[-1]",
        "$.a b",
        "$.a\n",
        "$\n",
    ])
    def test_malformed(self, text):
        with pytest.raises(AddressSyntaxError) as exc_info:
            parse_address(text)
        assert exc_info.value.text == text
        assert not is_valid_address(text)

    def test_non_string(self):
        with pytest.raises(AddressSyntaxError):
            parse_address(None)

    def test_syntax_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_address("nope")


class TestRendering:
    """Test textual forms of addresses."""

    def test_root_label(self):
        assert str(Address.root()) == "(root)"
        assert Address.root().to_jsonpath() == "$"

    def test_step_rendering(self):
        path = parse_address("$.a[0].*[*][1:2][3:][:4]")
        assert str(path) == ".a[0].*[*][1:2][3:][:4]"
        assert path.to_jsonpath() == "$.a[0].*[*][1:2][3:][:4]"

    def test_colon_wildcard_renders_as_star(self):
        assert parse_address("$[:]").to_jsonpath() == "$[*]"

    @pytest.mark.parametrize("text", [
        "$",
        "$.id",
        "$.a.b.c",
        "$[0].a",
        "$.a[*].b",
        "$.a.*.c[0:3]",
        "$[:].a[3:].b[:4]",
        "$.*",
    ])
    def test_reparse(self, text):
        path = parse_address(text)
        assert parse_address(path.to_jsonpath()) == path

    def test_append_is_immutable(self):
        base = parse_address("$.a")
        child = base.append(Index(1))
        assert base == Address.of(Field("a"))
        assert child == Address.of(Field("a"), Index(1))


class TestPrefixes:
    """Test pattern matching between addresses."""

    def test_root_prefixes_everything(self):
        root = Address.root()
        assert prefixes(root, root)
        assert prefixes(root, parse_address("$.a.b"))
        assert prefixes(root, parse_address("$[3]"))

    def test_non_root_never_prefixes_root(self):
        assert not prefixes(parse_address("$.a"), Address.root())
        assert not prefixes(parse_address("$[*]"), Address.root())

    def test_identical(self):
        assert prefixes(parse_address("$.a.b.c"), parse_address("$.a.b.c"))

    def test_shorter_pattern_covers_subtree(self):
        assert prefixes(parse_address("$.a.b"), parse_address("$.a.b.c"))

    def test_longer_pattern(self):
        assert not prefixes(parse_address("$.a.b.c"), parse_address("$.a.b"))

    def test_different_field(self):
        assert not prefixes(parse_address("$.a.b.c"), parse_address("$.a.b.d"))

    def test_wildcard_and_range(self):
        pattern = parse_address("$.a.*.c[0:3]")
        assert prefixes(pattern, parse_address("$.a.b.c[1]"))
        assert not prefixes(pattern, parse_address("$.a.b.c[3]"))

    def test_wildcard_field_does_not_match_index(self):
        assert not prefixes(parse_address("$.a.*.c[0]"), parse_address("$.a[1].c[0]"))

    def test_wildcard_index_does_not_match_field(self):
        assert not prefixes(parse_address("$.a[*]"), parse_address("$.a.b"))

    def test_pattern_longer_than_subject(self):
        assert not prefixes(parse_address("$.a.*.c[0].*"), parse_address("$.a.d.c[0]"))

    def test_range_to(self):
        pattern = parse_address("$.a.*.c[:3]")
        assert prefixes(pattern, parse_address("$.a.d.c[2]"))
        assert not prefixes(pattern, parse_address("$.a.d.c[3]"))
        assert not prefixes(pattern, parse_address("$.a.d.c[4]"))

    def test_range_from(self):
        pattern = parse_address("$.a.*.c[3:]")
        assert prefixes(pattern, parse_address("$.a.d.c[3]"))
        assert prefixes(pattern, parse_address("$.a.d.c[4]"))
        assert not prefixes(pattern, parse_address("$.a.d.c[2]"))

    def test_wildcard_index(self):
        pattern = parse_address("$.items[*].id")
        assert prefixes(pattern, parse_address("$.items[0].id"))
        assert prefixes(pattern, parse_address("$.items[42].id.nested"))
        assert not prefixes(pattern, parse_address("$.items[0].name"))

    def test_concrete_subject_does_not_match_wildcard_pattern_in_reverse(self):
        assert not prefixes(parse_address("$.a.b"), parse_address("$.a.*"))
        assert not prefixes(parse_address("$[1]"), parse_address("$[*]"))

    def test_matches_requires_same_depth(self):
        pattern = parse_address("$.a[*]")
        assert pattern.matches(parse_address("$.a[3]"))
        assert not pattern.matches(parse_address("$.a[3].b"))
        assert not pattern.matches(parse_address("$.a"))
