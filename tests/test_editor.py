# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Tests for the prompt_toolkit adapters."""

import pytest
from prompt_toolkit.completion import CompleteEvent
from prompt_toolkit.document import Document
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.output import DummyOutput

from sprepl.core.config import ReplConfig
from sprepl.repl.editor import (
    ClassifierLexer,
    NamespaceCompleter,
    build_prompt_session,
    build_style,
    newline_indent,
    split_lines,
    to_formatted_text,
)
from sprepl.repl.session import ReplSession
from sprepl.repl.tokens import classify


class TestLexer:
    """Tests for highlighting."""

    def test_lines_split_at_newlines(self):
        lines = split_lines(classify("if x:\n    pass"))
        assert len(lines) == 2
        assert ("class:keyword", "if") in lines[0]
        assert ("class:keyword", "pass") in lines[1]

    def test_lexer_lines(self):
        get_line = ClassifierLexer().lex_document(Document("x = 1  # c\ny"))
        first = get_line(0)
        assert "".join(text for _, text in first) == "x = 1  # c"
        assert ("class:comment", "# c") in first
        assert get_line(1) == [("class:name", "y")]
        assert get_line(5) == []

    def test_multi_line_string_spans_lines(self):
        get_line = ClassifierLexer().lex_document(Document("s = '''a\nb'''"))
        assert get_line(1) == [("class:string", "b'''")]


class TestCompleter:
    """Tests for NamespaceCompleter."""

    def test_yields_suffix_with_full_display(self, session: ReplSession):
        session.namespace.globals["foobar"] = 1
        completions = list(
            NamespaceCompleter(session).get_completions(Document("foob"), CompleteEvent())
        )
        assert len(completions) == 1
        assert completions[0].text == "ar"
        assert completions[0].display_text == "foobar"
        assert completions[0].start_position == 0

    def test_uses_current_line_only(self, session: ReplSession):
        session.namespace.globals["foobar"] = 1
        doc = Document("x = 1\nfoob", cursor_position=10)
        completions = list(NamespaceCompleter(session).get_completions(doc, CompleteEvent()))
        assert [c.text for c in completions] == ["ar"]


class TestNewlineIndent:
    """Tests for auto-indent."""

    @pytest.fixture
    def config(self) -> ReplConfig:
        return ReplConfig()

    def test_after_block_header(self, config):
        assert newline_indent(Document("if x:"), config) == "    "

    def test_keeps_current_indent(self, config):
        assert newline_indent(Document("if x:\n    y = 1"), config) == "    "

    def test_nested_header(self, config):
        assert newline_indent(Document("if x:\n    for i in y:"), config) == "        "

    def test_disabled(self):
        assert newline_indent(Document("if x:"), ReplConfig(auto_indent=False)) == ""


class TestPromptParts:
    """Tests for prompt formatting and style."""

    def test_prompt_fragments(self, session: ReplSession):
        assert list(to_formatted_text(session.prompt_tokens())) == [("class:prompt", "In [1]: ")]

    def test_style_has_token_classes(self):
        style = build_style(ReplConfig())
        attrs = style.get_attrs_for_style_str("class:keyword")
        assert attrs.color == "ee00ee"


class TestPromptSession:
    """Drive the editor with scripted key presses."""

    def prompt(self, session: ReplSession, keys: str) -> str:
        with create_pipe_input() as pipe:
            prompt_session = build_prompt_session(session, input=pipe, output=DummyOutput())
            pipe.send_text(keys)
            return prompt_session.prompt()

    def test_enter_submits_statement(self, session: ReplSession):
        assert self.prompt(session, "x = 1\r") == "x = 1"

    def test_enter_continues_open_call(self, session: ReplSession):
        assert self.prompt(session, "print(1,\r2)\r") == "print(1,\n2)"

    def test_block_needs_second_enter(self, session: ReplSession):
        text = self.prompt(session, "if True:\rpass\r\r")
        assert text == "if True:\n    pass\n    "

    def test_tab_completes_single_match(self, session: ReplSession):
        session.namespace.globals["foobar"] = 1
        assert self.prompt(session, "foob\t\r") == "foobar"

    def test_tab_on_blank_line_indents(self, session: ReplSession):
        text = self.prompt(session, "if True:\r\tpass\r\r")
        assert text == "if True:\n        pass\n        "
