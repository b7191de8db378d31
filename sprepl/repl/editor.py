# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""prompt_toolkit glue: highlighting, completion, Enter/Tab handling, prompts."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Iterable

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document
from prompt_toolkit.filters import has_selection
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.formatted_text.base import StyleAndTextTuples
from prompt_toolkit.key_binding import KeyBindings, KeyPressEvent
from prompt_toolkit.lexers import Lexer
from prompt_toolkit.styles import Style as PTStyle

from sprepl.core.config import ReplConfig
from sprepl.repl.tokens import Token, classify

if TYPE_CHECKING:
    from sprepl.repl.session import ReplSession

logger = logging.getLogger(__name__)


def style_class(token: Token) -> str:
    return f"class:{token.kind.value}"


def to_formatted_text(tokens: Iterable[Token]) -> FormattedText:
    """Convert tokens to prompt_toolkit (style, text) fragments."""
    return FormattedText([(style_class(t), t.literal) for t in tokens])


def split_lines(tokens: Iterable[Token]) -> list[StyleAndTextTuples]:
    """Fragments for each line of the text, split at newlines inside tokens."""
    lines: list[StyleAndTextTuples] = [[]]
    for t in tokens:
        style = style_class(t)
        parts = t.literal.split("\n")
        for i, part in enumerate(parts):
            if i > 0:
                lines.append([])
            if part:
                lines[-1].append((style, part))
    return lines


class ClassifierLexer(Lexer):
    """Highlight the buffer with the keyword-aware token classifier."""

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        lines = split_lines(classify(document.text))

        def get_line(lineno: int) -> StyleAndTextTuples:
            if 0 <= lineno < len(lines):
                return lines[lineno]
            return []

        return get_line


class NamespaceCompleter(Completer):
    """Complete names from the session's globals and builtins."""

    def __init__(self, session: "ReplSession"):
        self.session = session

    def get_completions(
        self, document: Document, complete_event: CompleteEvent
    ) -> Iterable[Completion]:
        _, candidates, _ = self.session.complete(
            document.current_line, document.cursor_position_col
        )
        for candidate in candidates:
            yield Completion(candidate.suffix, start_position=0, display=candidate.display)


def newline_indent(document: Document, config: ReplConfig) -> str:
    """Indentation for a new line inserted at the cursor."""
    if not config.auto_indent:
        return ""
    line = document.current_line_before_cursor
    indent = line[:len(line) - len(line.lstrip())]
    if line.rstrip().endswith(":"):
        indent += config.indent
    return indent


def build_key_bindings(session: "ReplSession") -> KeyBindings:
    """Enter submits or continues; Tab completes."""
    kb = KeyBindings()
    config = session.config

    @kb.add("enter", filter=~has_selection)
    def _enter(event: KeyPressEvent) -> None:
        buffer = event.current_buffer
        state = buffer.complete_state
        if state is not None:
            if state.current_completion is not None:
                buffer.apply_completion(state.current_completion)
                return
            buffer.cancel_completion()

        document = buffer.document
        if session.should_continue(document):
            buffer.insert_text("\n" + newline_indent(document, config))
        else:
            buffer.validate_and_handle()

    @kb.add("tab", filter=~has_selection)
    def _tab(event: KeyPressEvent) -> None:
        buffer = event.current_buffer
        if buffer.complete_state is not None:
            buffer.complete_next()
            return

        document = buffer.document
        if not document.current_line_before_cursor.strip():
            buffer.insert_text(config.indent)
            return

        suffix = session.complete_now(document.current_line, document.cursor_position_col)
        if suffix:
            buffer.insert_text(suffix)
        else:
            buffer.start_completion(select_first=False)

    return kb


def build_style(config: ReplConfig) -> PTStyle:
    return PTStyle.from_dict(config.styles)


def build_prompt_session(session: "ReplSession", **kwargs: Any) -> PromptSession:
    """
    Create the line editor for a session.

    Args:
        session: Session supplying prompts, completions and the submit check
        **kwargs: Passed to ``PromptSession`` (e.g. ``input``/``output`` in tests)
    """
    config = session.config

    def message() -> FormattedText:
        return to_formatted_text(session.prompt_tokens())

    def continuation(width: int, line_number: int, wrap_count: int) -> FormattedText:
        return to_formatted_text(session.continuation_tokens())

    return PromptSession(
        message=message,
        multiline=True,
        prompt_continuation=continuation,
        lexer=ClassifierLexer(),
        completer=NamespaceCompleter(session),
        complete_while_typing=config.complete_while_typing,
        key_bindings=build_key_bindings(session),
        style=build_style(config),
        **kwargs,
    )
