"""Tests for tms.reader.tokens — comment stripping and positioned tokens."""

from tms.reader.tokens import Token, strip_comment, tokenize


class TestStripComment:
    def test_no_comment(self):
        assert strip_comment("a 0 1 r b") == "a 0 1 r b"

    def test_trailing_comment(self):
        assert strip_comment("a 0 1 r b ; move right") == "a 0 1 r b "

    def test_comment_only_line(self):
        assert strip_comment("; just a comment") == ""

    def test_first_delimiter_wins(self):
        assert strip_comment("x ; one ; two") == "x "

    def test_escaped_delimiter_is_kept(self):
        assert strip_comment(r"a \; \; r b ; comment") == r"a \; \; r b "


class TestTokenize:
    def test_columns(self):
        assert tokenize("  STATE  go") == [Token("STATE", 2, 7), Token("go", 9, 11)]

    def test_tabs_are_separators(self):
        assert [t.value for t in tokenize("a\t0\t1 r\tb")] == ["a", "0", "1", "r", "b"]

    def test_empty_line(self):
        assert tokenize("   ") == []

    def test_escaped_delimiter_unescaped_in_value(self):
        (token,) = tokenize(r"\;")
        assert token.value == ";"
        assert (token.start, token.end) == (0, 2)
