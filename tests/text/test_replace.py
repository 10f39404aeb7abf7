"""Tests for pattern replacement."""

import re

import pytest
import regex

from unistring.core.errors import ArgumentError
from unistring.text.patterns import compile_pattern
from unistring.text.replace import (
    replace,
    replace_leading,
    replace_prefix,
    replace_suffix,
    replace_trailing,
)

# Mark all tests as unit tests
pytestmark = pytest.mark.unit

E_COMBINING = "e\N{COMBINING ACUTE ACCENT}".encode()


class TestReplace:
    """replace() with literal patterns."""

    def test_global_and_first(self):
        assert replace(b"a,b,c", b",", b"-") == b"a-b-c"
        assert replace(b"a,b,c", b",", b"-", global_=False) == b"a-b,c"

    def test_no_match(self):
        assert replace(b"abc", b",", b"-") == b"abc"

    def test_several_literals(self):
        assert replace(b"a-b_c", [b"-", b"_"], b"+") == b"a+b+c"

    def test_longest_literal_wins(self):
        assert replace(b"abc", [b"a", b"ab"], b"X") == b"Xc"

    def test_occurrences_do_not_overlap(self):
        assert replace(b"aaaa", b"aa", b"b") == b"bb"
        assert replace(b"aaa", b"aa", b"b") == b"ba"

    def test_replacement_is_not_rescanned(self):
        assert replace(b"abc", b"b", b"bb") == b"abbc"


class TestInsertReplaced:
    """Re-inserting the matched bytes into the replacement."""

    def test_single_offset(self):
        assert replace(b"a,b,c", b",", b"[]", insert_replaced=1) == b"a[,]b[,]c"

    def test_several_offsets(self):
        assert replace(b"a,b", b",", b"[]", insert_replaced=[0, 2]) == b"a,[],b"

    def test_offset_at_end(self):
        assert replace(b"cat", b"cat", b"the ", insert_replaced=4) == b"the cat"

    @pytest.mark.parametrize("offsets", [3, -1, [0, 5], ["1"]])
    def test_out_of_range_offsets(self, offsets):
        with pytest.raises(ArgumentError):
            replace(b"a,b", b",", b"[]", insert_replaced=offsets)


class TestReplaceEmptyPattern:
    """The empty literal matches at every grapheme boundary."""

    def test_global(self):
        assert replace(b"abc", b"", b"-") == b"-a-b-c-"

    def test_first_only(self):
        assert replace(b"abc", b"", b"-", global_=False) == b"-abc"

    def test_clusters_are_not_split(self):
        assert replace(E_COMBINING, b"", b"|") == b"|" + E_COMBINING + b"|"

    def test_empty_buffer(self):
        assert replace(b"", b"", b"-") == b"-"


class TestReplaceRegex:
    """replace() with regular expressions."""

    def test_global_and_first(self):
        assert replace(b"a1b22", regex.compile(r"\d+"), b"#") == b"a#b#"
        assert replace(b"a1b22", regex.compile(r"\d+"), b"#", global_=False) == b"a#b22"

    def test_group_references(self):
        assert replace(b"john smith", re.compile(r"(\w+) (\w+)"), rb"\2 \1") == b"smith john"

    def test_invalid_bytes_survive(self):
        assert replace(b"\xff1", re.compile(r"\d"), b"x") == b"\xffx"

    def test_insert_replaced_is_rejected(self):
        with pytest.raises(ArgumentError):
            replace(b"a1", re.compile(r"\d"), b"x", insert_replaced=0)


class TestAnchoredReplace:
    """Leading, trailing, prefix and suffix replacement."""

    def test_replace_leading(self):
        assert replace_leading(b"hello hello world", b"hello ", b"") == b"world"
        assert replace_leading(b"aaab", b"a", b"b") == b"bbbb"
        assert replace_leading(b"baa", b"a", b"x") == b"baa"

    def test_replace_leading_whole_buffer(self):
        assert replace_leading(b"aaa", b"a", b"") == b""

    def test_replace_trailing(self):
        assert replace_trailing(b"abcc", b"c", b"d") == b"abdd"
        assert replace_trailing(b"world hello hello", b" hello", b"") == b"world"
        assert replace_trailing(b"cab", b"c", b"x") == b"cab"

    def test_empty_match_is_a_no_op(self):
        assert replace_leading(b"abc", b"", b"x") == b"abc"
        assert replace_trailing(b"abc", b"", b"x") == b"abc"

    def test_replace_prefix(self):
        assert replace_prefix(b"hello world", b"hello ", b"") == b"world"
        assert replace_prefix(b"hello hello", b"hello", b"bye") == b"bye hello"
        assert replace_prefix(b"world", b"hello ", b"") == b"world"
        assert replace_prefix(b"world", b"", b"hello ") == b"hello world"

    def test_replace_prefix_from_list(self):
        """The longest listed prefix at the start is the one replaced."""
        assert replace_prefix(b"hello world", [b"hi ", b"hello "], b"") == b"world"
        assert replace_prefix(b"hello world", [b"he", b"hell"], b"J") == b"Jo world"
        assert replace_prefix(b"world", [b"hi ", b"hello "], b"") == b"world"
        assert replace_prefix(b"\xffabc", compile_pattern([b"\xff"]), b"?") == b"?abc"

    def test_replace_prefix_rejects_empty_list(self):
        with pytest.raises(ArgumentError):
            replace_prefix(b"abc", [], b"x")

    def test_replace_suffix(self):
        assert replace_suffix(b"hello world", b" world", b"") == b"hello"
        assert replace_suffix(b"world world", b"world", b"there") == b"world there"
        assert replace_suffix(b"hello", b" world", b"") == b"hello"
        assert replace_suffix(b"hello", b"", b" world") == b"hello world"
