"""Tests for extended grapheme cluster segmentation."""

import pytest
import regex

from unistring.unicode.graphemes import (
    BoundaryKind,
    GraphemeBoundary,
    graphemes,
    length,
    next_grapheme,
    next_grapheme_size,
    split_at,
)

# Mark all tests as unit tests
pytestmark = pytest.mark.unit

ACUTE = "\N{COMBINING ACUTE ACCENT}"
ZWJ = "\N{ZERO WIDTH JOINER}"
FAMILY = "\U0001f468" + ZWJ + "\U0001f469" + ZWJ + "\U0001f467"
FLAG_US = "\U0001f1fa\U0001f1f8"
FLAG_FR = "\U0001f1eb\U0001f1f7"
THUMBS_UP_MEDIUM = "\U0001f44d\U0001f3fd"
HANGUL_GAG = "\N{HANGUL CHOSEONG KIYEOK}\N{HANGUL JUNGSEONG A}\N{HANGUL JONGSEONG KIYEOK}"  # L V T jamo
DEVANAGARI_KI = "\N{DEVANAGARI LETTER KA}\N{DEVANAGARI VOWEL SIGN I}"  # SpacingMark

# Strings whose segmentation has been stable across recent Unicode versions
CORPUS = [
    "hello",
    "e" + ACUTE + "le\N{COMBINING GRAVE ACCENT}ve",
    "a\r\nb\n\rc",
    FLAG_US + FLAG_FR + "\U0001f1e9",
    FAMILY + " family",
    THUMBS_UP_MEDIUM + "x",
    HANGUL_GAG + "가각",
    "a" + ZWJ + "b",
    DEVANAGARI_KI,
    "\N{DEVANAGARI LETTER KA}\N{DEVANAGARI SIGN VIRAMA}\N{DEVANAGARI LETTER SSA}a",
    "\N{THAI CHARACTER KO KAI}\N{THAI CHARACTER SARA AM}",
    "x\N{COMBINING DIAERESIS}\N{COMBINING DIAERESIS}y",
    "\t\x00\x7f",
    "漢字かな",
]


def clusters(text):
    return [g.decode() for g in graphemes(text.encode())]


class TestClusterRules:
    """Boundary rules on representative sequences."""

    def test_combining_marks_attach(self):
        assert clusters("e" + ACUTE + "x") == ["e" + ACUTE, "x"]

    def test_crlf_is_one_cluster(self):
        """CR LF stays together; LF CR does not."""
        assert clusters("\r\n") == ["\r\n"]
        assert clusters("\n\r") == ["\n", "\r"]

    def test_controls_break_around_marks(self):
        """A combining mark after a control starts a new cluster."""
        assert clusters("\n" + ACUTE) == ["\n", ACUTE]

    def test_regional_indicators_pair_up(self):
        """Flags pair regional indicators; an odd one stands alone."""
        assert clusters(FLAG_US + FLAG_FR) == [FLAG_US, FLAG_FR]
        assert clusters(FLAG_US + "\U0001f1eb") == [FLAG_US, "\U0001f1eb"]

    def test_zwj_emoji_sequence(self):
        assert clusters(FAMILY) == [FAMILY]

    def test_zwj_without_pictograph_does_not_join(self):
        assert clusters("a" + ZWJ + "b") == ["a" + ZWJ, "b"]

    def test_skin_tone_modifier(self):
        assert clusters(THUMBS_UP_MEDIUM) == [THUMBS_UP_MEDIUM]

    def test_hangul_syllable_sequences(self):
        assert clusters(HANGUL_GAG) == [HANGUL_GAG]
        assert clusters("각가") == ["각", "가"]

    def test_spacing_mark(self):
        assert clusters(DEVANAGARI_KI) == [DEVANAGARI_KI]

    def test_indic_conjunct(self):
        """Consonant + virama + consonant is one cluster."""
        conjunct = "\N{DEVANAGARI LETTER KA}\N{DEVANAGARI SIGN VIRAMA}\N{DEVANAGARI LETTER SSA}"
        assert clusters(conjunct) == [conjunct]


class TestInvalidBytes:
    """Invalid units form clusters of their own."""

    def test_invalid_byte_is_a_cluster(self):
        assert graphemes(b"e\xff\xcc\x81") == [b"e", b"\xff", b"\xcc\x81"]

    def test_invalid_byte_breaks_a_cluster(self):
        assert graphemes(b"a\xc0\xaf") == [b"a", b"\xc0", b"\xaf"]

    def test_partition_covers_the_buffer(self):
        """Clusters are non-empty and concatenate back to the buffer."""
        buffer = ("ne" + ACUTE + "\U0001f600\r\n" + FLAG_US).encode() + b"\xed\xa0\x80z"
        parts = graphemes(buffer)
        assert all(parts)
        assert b"".join(parts) == buffer


class TestAgainstRegex:
    """Cross-check against the regex library's \\X."""

    @pytest.mark.parametrize("text", CORPUS)
    def test_matches_regex_extended_grapheme(self, text):
        assert clusters(text) == regex.findall(r"\X", text)

    @pytest.mark.parametrize("text", CORPUS)
    def test_length_matches_cluster_count(self, text):
        assert length(text.encode()) == len(regex.findall(r"\X", text))


class TestNavigation:
    """Stepping and boundary lookup."""

    def test_next_grapheme(self):
        head = ("e" + ACUTE).encode()
        assert next_grapheme(head + b"x") == (head, b"x")
        assert next_grapheme(b"") is None

    def test_next_grapheme_size(self):
        # e + two combining marks: 1 + 2 + 2 bytes
        assert next_grapheme_size(("e" + ACUTE + ACUTE + "x").encode()) == (5, b"x")
        assert next_grapheme_size(b"") is None

    def test_length(self):
        assert length(b"") == 0
        assert length("héllo".encode()) == 5
        assert length(("he" + ACUTE + "llo").encode()) == 5

    @pytest.mark.parametrize(
        "n, expected",
        [
            (0, GraphemeBoundary(0, BoundaryKind.WITHIN)),
            (1, GraphemeBoundary(1, BoundaryKind.WITHIN)),
            (3, GraphemeBoundary(3, BoundaryKind.WITHIN)),
            (5, GraphemeBoundary(3, BoundaryKind.PAST_END)),
            (-1, GraphemeBoundary(2, BoundaryKind.WITHIN)),
            (-3, GraphemeBoundary(0, BoundaryKind.WITHIN)),
            (-5, GraphemeBoundary(0, BoundaryKind.BEFORE_START)),
        ],
    )
    def test_split_at(self, n, expected):
        """Negative positions resolve from the end; before-start is distinct from 0."""
        assert split_at(b"abc", n) == expected

    def test_split_at_counts_clusters_not_bytes(self):
        assert split_at(("e" + ACUTE + "x").encode(), 1).offset == 3
