# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Decide whether Enter submits the buffer or starts another line."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from sprepl.execution.runtime import (
    EOF_IN_TRIPLE_QUOTED_STRING,
    EOF_WHILE_PARSING,
    CompileError,
)
from sprepl.repl.tokens import classify, has_indent

if TYPE_CHECKING:
    from sprepl.repl.session import ReplSession

logger = logging.getLogger(__name__)

# Compiler messages meaning "the statement is not finished yet"
INCOMPLETE_INPUT_MARKERS = (
    EOF_WHILE_PARSING,
    EOF_IN_TRIPLE_QUOTED_STRING,
)

COMMENT_MARKER = "#"


class DocumentLike(Protocol):
    """The slice of prompt_toolkit's Document the detector reads."""
    text: str
    cursor_position: int
    on_last_line: bool


def is_incomplete_input(error: CompileError) -> bool:
    """Translate a compile error into "needs more input" or not.

    Message text is matched as-is; messages are assumed to be the
    interpreter's English wording.
    """
    return any(marker in error.error for marker in INCOMPLETE_INPUT_MARKERS)


def should_continue(session: "ReplSession", document: DocumentLike) -> bool:
    """
    Return True to keep reading lines, False to submit the buffer.

    Args:
        session: Session whose runtime compiles the buffer
        document: Current editor snapshot

    Returns:
        True while the buffer is an unfinished statement, or while an
        indented block has not been closed by a blank line.
    """
    # Cursor is on an earlier line: Enter just splits the line
    if not document.on_last_line:
        return True

    text = document.text
    if not text:
        return False

    _, error = session.runtime.compile(text + "\n", session.program)
    if error is not None and is_incomplete_input(error):
        is_comment = text.strip().startswith(COMMENT_MARKER)
        logger.debug("Incomplete input (comment=%s): %r", is_comment, text)
        return not is_comment

    # Blocks need Enter twice: the block is closed by a blank last line
    if has_indent(classify(text)):
        return not text.rstrip(" ").endswith("\n")
    return False
