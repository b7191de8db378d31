# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Lexing and keyword reclassification of REPL input.

The lexer is the interpreter's own ``tokenize`` module. Its output is
re-expressed as a flat list of ``Token`` values whose literals, joined
together, reproduce the input text exactly. Highlighting and the
continuation check both work from that list.
"""

from __future__ import annotations

import io
import keyword
import logging
import tokenize
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

logger = logging.getLogger(__name__)


class TokenKind(Enum):
    """Semantic token kinds."""
    NAME = "name"
    KEYWORD = "keyword"
    OPERATOR = "operator"
    NUMBER = "number"
    STRING = "string"
    COMMENT = "comment"
    INDENT = "indent"
    DEDENT = "dedent"
    NEWLINE = "newline"
    WHITESPACE = "whitespace"
    ERROR = "error"
    PROMPT = "prompt"
    PROMPT_SECOND_LINE_PREFIX = "prompt_second_line_prefix"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    literal: str

    def is_kind(self, kind: TokenKind) -> bool:
        return self.kind is kind


# Reserved words of the running interpreter. Soft keywords (match, case,
# type, _) are ordinary names outside their special positions.
KEYWORDS: frozenset[str] = frozenset(keyword.kwlist)

_KIND_BY_TOKEN_NAME = {
    "NAME": TokenKind.NAME,
    "OP": TokenKind.OPERATOR,
    "NUMBER": TokenKind.NUMBER,
    "STRING": TokenKind.STRING,
    "FSTRING_START": TokenKind.STRING,
    "FSTRING_MIDDLE": TokenKind.STRING,
    "FSTRING_END": TokenKind.STRING,
    "TSTRING_START": TokenKind.STRING,
    "TSTRING_MIDDLE": TokenKind.STRING,
    "TSTRING_END": TokenKind.STRING,
    "COMMENT": TokenKind.COMMENT,
    "INDENT": TokenKind.INDENT,
    "DEDENT": TokenKind.DEDENT,
    "NEWLINE": TokenKind.NEWLINE,
    "NL": TokenKind.NEWLINE,
    "ERRORTOKEN": TokenKind.ERROR,
}


def is_keyword(name: str) -> bool:
    return name in KEYWORDS


def _line_offsets(lines: list[str]) -> list[int]:
    offsets = [0]
    for line in lines:
        offsets.append(offsets[-1] + len(line))
    return offsets


def lex(text: str) -> list[Token]:
    """Split text into raw tokens. Never raises.

    Whitespace between tokens becomes ``WHITESPACE`` tokens. If the
    tokenizer gives up (an open bracket or string at end of input, a dedent
    that matches no outer level) the rest of the text is one ``ERROR`` token.
    """
    lines = io.StringIO(text).readlines()
    offsets = _line_offsets(lines)
    end_of_text = len(text)

    def to_offset(row: int, col: int) -> int:
        if row - 1 >= len(lines):
            return end_of_text
        return min(offsets[row - 1] + col, end_of_text)

    tokens: list[Token] = []
    pos = 0
    readline = io.StringIO(text).readline
    try:
        for tok in tokenize.generate_tokens(readline):
            kind = _KIND_BY_TOKEN_NAME.get(tokenize.tok_name[tok.type])
            if kind is None:
                # ENDMARKER, ENCODING and anything newer we don't color
                continue
            start = max(to_offset(*tok.start), pos)
            end = to_offset(*tok.end)
            if start > pos:
                tokens.append(_gap_token(text[pos:start], tokens))
                pos = start
            if end < start:
                continue
            literal = text[start:end]
            if not literal and kind is not TokenKind.DEDENT:
                continue
            tokens.append(Token(kind, literal))
            pos = end
    except (tokenize.TokenError, SyntaxError) as e:
        logger.debug("Lexer stopped at offset %d: %s", pos, e)
        if pos < end_of_text:
            tokens.append(Token(TokenKind.ERROR, text[pos:]))
            pos = end_of_text

    if pos < end_of_text:
        tokens.append(_gap_token(text[pos:], tokens))
    return tokens


def _gap_token(gap: str, previous: list[Token]) -> Token:
    stripped = gap.strip()
    if not stripped or stripped == "\\":
        return Token(TokenKind.WHITESPACE, gap)
    # Text the tokenizer spans oddly (escaped braces inside f-strings)
    if previous:
        return Token(previous[-1].kind, gap)
    return Token(TokenKind.ERROR, gap)


def classify(text: str) -> list[Token]:
    """Lex text and relabel reserved words from NAME to KEYWORD."""
    converted = []
    for t in lex(text):
        if t.is_kind(TokenKind.NAME) and is_keyword(t.literal):
            converted.append(Token(TokenKind.KEYWORD, t.literal))
        else:
            converted.append(t)
    return converted


def has_indent(tokens: Iterable[Token]) -> bool:
    """True when the stream opens an indented block."""
    return any(t.is_kind(TokenKind.INDENT) for t in tokens)
