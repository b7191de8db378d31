# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Prefix completion over the live interpreter namespaces."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from sprepl.execution.runtime import Namespace

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    """A completion: the full name, and the part still to be inserted."""
    display: str
    suffix: str


def split_word(line: str, cursor: int) -> tuple[str, str, str]:
    """Split a line into (head, partial, tail) around the cursor.

    ``partial`` is the text between the last space before the cursor and
    the cursor; ``head`` is everything before it, trailing space included.
    """
    head, tail = line[:cursor], line[cursor:]
    last_space = head.rfind(" ")
    return head[:last_space + 1], head[last_space + 1:], tail


def matching_names(partial: str, *scopes: Mapping[str, Any]) -> list[str]:
    """Names starting with ``partial``, first scope first, without repeats."""
    found: dict[str, None] = {}
    for scope in scopes:
        for name in scope:
            # Plain prefix test; keys need not be identifiers
            if isinstance(name, str) and name.startswith(partial) and name not in found:
                found[name] = None
    return list(found)


def complete(
    namespace: Namespace,
    line: str,
    cursor: int,
) -> tuple[str, list[Candidate], str]:
    """
    Complete the word before the cursor.

    If the line is "Hello, wo!!!" and the cursor is before the first '!',
    ("Hello, wo!!!", 9) yields ("Hello, ", [world, Word...], "!!!").

    Args:
        namespace: Execution globals are searched before builtins
        line: Current line text
        cursor: Cursor offset within ``line``

    Returns:
        (head, candidates sorted by name, tail)
    """
    head, partial, tail = split_word(line, cursor)
    names = sorted(matching_names(partial, *namespace.scopes()))

    # Characters of the word already typed
    remain_length = len(line) - len(head) - len(tail)
    candidates = [Candidate(display=name, suffix=name[remain_length:]) for name in names]
    logger.debug("Completing %r: %d candidate(s)", partial, len(candidates))
    return head, candidates, tail


def complete_now(namespace: Namespace, line: str, cursor: int) -> str:
    """Suffix of the only candidate, or "" when there are none or several."""
    _, candidates, _ = complete(namespace, line, cursor)
    if len(candidates) == 1:
        return candidates[0].suffix
    return ""
