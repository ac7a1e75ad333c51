"""
Tests for the immutable cursor and the fork/commit parse stream.
"""

import pytest

from pxml import Cursor, Delimiter, GrammarMismatch, Group, Ident, Literal, ParseStream, Punct, Span


def _stream():
    return ParseStream.from_tokens([
        Punct("<", Span(0, 1, 1)),
        Ident("div", Span(1, 1, 2)),
        Punct(">", Span(4, 1, 5)),
    ])


class TestCursor:

    def test_bump_returns_new_cursor(self):
        """Test advancing never mutates the original cursor"""
        cursor = Cursor((Ident("a"), Ident("b")))
        moved = cursor.bump()

        assert cursor.index == 0
        assert moved.index == 1
        assert moved.token() == Ident("b")

    def test_eof(self):
        """Test end of input and end span"""
        end = Span(10, 2, 3)
        cursor = Cursor((Ident("a"),), 1, end)

        assert cursor.eof()
        assert cursor.token() is None
        assert cursor.span() == end
        assert cursor.bump() is cursor


class TestParseStream:

    def test_failed_fork_does_not_advance(self):
        """Test failed speculation leaves the stream untouched"""
        stream = _stream()
        fork = stream.fork()

        fork.parse_punct("<")
        with pytest.raises(GrammarMismatch):
            fork.parse_punct("/")

        assert stream.cursor.index == 0
        assert fork.cursor.index == 1

    def test_advance_to_commits_fork(self):
        """Test committing a successful fork"""
        stream = _stream()
        fork = stream.fork()
        fork.parse_punct("<")
        fork.parse_ident()

        stream.advance_to(fork)

        assert stream.cursor.index == 2
        assert stream.peek_punct(">")

    def test_advance_to_rejects_foreign_fork(self):
        """Test committing a fork of another stream is a programming error"""
        stream = _stream()
        with pytest.raises(ValueError):
            stream.advance_to(_stream())

    def test_primitive_failure_does_not_consume(self):
        """Test a failed primitive leaves the position as is"""
        stream = _stream()

        with pytest.raises(GrammarMismatch, match="expected literal") as exc:
            stream.parse_literal()

        assert stream.cursor.index == 0
        assert exc.value.column == 1

    def test_error_at_end_uses_end_span(self):
        """Test errors on empty stream point at the end span"""
        stream = ParseStream.from_tokens([], end=Span(7, 3, 4))

        with pytest.raises(GrammarMismatch, match="unexpected end of input") as exc:
            stream.parse_token_tree()

        assert (exc.value.line, exc.value.column) == (3, 4)

    def test_keyword_ident(self):
        """Test keywords need explicit permission"""
        stream = ParseStream.from_tokens([Ident("class")])

        with pytest.raises(GrammarMismatch):
            stream.parse_ident()
        assert stream.parse_ident(allow_keywords=True).name == "class"

    def test_parse_group(self):
        """Test groups are consumed as a single token"""
        group = Group(Delimiter.BRACE, (Ident("x"), Punct(">"), Literal("1")))
        stream = ParseStream.from_tokens([group, Punct("/")])

        with pytest.raises(GrammarMismatch, match=r"expected `\(`"):
            stream.parse_group(Delimiter.PARENTHESIS)
        assert stream.parse_group(Delimiter.BRACE) is group
        assert stream.peek_punct("/")

    def test_optional_punct(self):
        """Test optional punctuation"""
        stream = _stream()

        assert stream.parse_optional_punct("/") is None
        assert stream.parse_optional_punct("<") is not None
        assert stream.cursor.index == 1
