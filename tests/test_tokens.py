# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Tests for lexing and keyword reclassification."""

import pytest

from sprepl.repl.tokens import (
    KEYWORDS,
    Token,
    TokenKind,
    classify,
    has_indent,
    is_keyword,
    lex,
)


def kinds_of(tokens, literal):
    return [t.kind for t in tokens if t.literal == literal]


class TestClassify:
    """Tests for classify()."""

    @pytest.mark.parametrize("source", [
        "",
        "x = 1",
        "if True:\n    pass\n",
        "print(1",
        "x = '''abc",
        "def f(a, b=2):\n    return a + b  # sum\n\n",
        "s = f'{x!r:>10} {{literal}}'",
        "a = [1,\n     2]\n",
    ])
    def test_literals_reproduce_source(self, source):
        """Joining token literals gives back the input text."""
        assert "".join(t.literal for t in classify(source)) == source

    def test_reserved_words_become_keywords(self):
        tokens = classify("if x: pass")
        assert kinds_of(tokens, "if") == [TokenKind.KEYWORD]
        assert kinds_of(tokens, "pass") == [TokenKind.KEYWORD]
        assert kinds_of(tokens, "x") == [TokenKind.NAME]

    def test_constants_are_keywords(self):
        tokens = classify("a = True or None")
        assert kinds_of(tokens, "True") == [TokenKind.KEYWORD]
        assert kinds_of(tokens, "None") == [TokenKind.KEYWORD]
        assert kinds_of(tokens, "or") == [TokenKind.KEYWORD]

    def test_soft_keywords_stay_names(self):
        """match/case are only special in statement position."""
        tokens = classify("match = case")
        assert kinds_of(tokens, "match") == [TokenKind.NAME]
        assert kinds_of(tokens, "case") == [TokenKind.NAME]

    def test_literal_unchanged_on_relabel(self):
        tokens = classify("while")
        assert tokens[0] == Token(TokenKind.KEYWORD, "while")

    def test_other_kinds_pass_through(self):
        tokens = classify("x = 1  # note")
        assert kinds_of(tokens, "=") == [TokenKind.OPERATOR]
        assert kinds_of(tokens, "1") == [TokenKind.NUMBER]
        assert kinds_of(tokens, "# note") == [TokenKind.COMMENT]
        assert kinds_of(tokens, "  ") == [TokenKind.WHITESPACE]

    def test_strings(self):
        tokens = classify("s = 'hi'")
        assert kinds_of(tokens, "'hi'") == [TokenKind.STRING]

    def test_fresh_tokens_each_call(self):
        assert classify("x") == classify("x")
        assert classify("x") is not classify("x")


class TestLex:
    """Tests for the raw lexer."""

    def test_names_are_not_relabelled(self):
        tokens = lex("if x: pass")
        assert kinds_of(tokens, "if") == [TokenKind.NAME]

    def test_indent_token_has_indent_text(self):
        tokens = lex("if x:\n    y\n")
        assert Token(TokenKind.INDENT, "    ") in tokens

    def test_bad_dedent_becomes_error(self):
        """Lexer failure yields an ERROR token instead of raising."""
        source = "if x:\n        a\n    b\n"
        tokens = lex(source)
        assert any(t.kind is TokenKind.ERROR for t in tokens)
        assert "".join(t.literal for t in tokens) == source

    def test_newlines(self):
        tokens = lex("x\ny\n")
        assert kinds_of(tokens, "\n") == [TokenKind.NEWLINE, TokenKind.NEWLINE]


class TestKeywords:
    """Tests for the reserved word table."""

    def test_table_matches_interpreter(self):
        import keyword
        assert KEYWORDS == frozenset(keyword.kwlist)

    def test_is_keyword(self):
        assert is_keyword("lambda")
        assert is_keyword("async")
        assert not is_keyword("print")
        assert not is_keyword("match")


class TestHasIndent:
    """Tests for has_indent()."""

    def test_block_has_indent(self):
        assert has_indent(classify("if True:\n    pass"))

    def test_simple_statement_has_none(self):
        assert not has_indent(classify("x = 1"))

    def test_open_block_without_body_has_none(self):
        assert not has_indent(classify("if True:"))
