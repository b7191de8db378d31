# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""REPL session: persistent namespace, input counter and the run cycle."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from rich.cells import cell_len
from rich.console import Console
from rich.text import Text

from sprepl.core.config import ReplConfig
from sprepl.execution.runtime import (
    CompileError,
    ExecutionRuntimeError,
    PythonRuntime,
)
from sprepl.repl import completion, continuation
from sprepl.repl.completion import Candidate
from sprepl.repl.continuation import DocumentLike
from sprepl.repl.tokens import Token, TokenKind

logger = logging.getLogger(__name__)

SECOND_LINE_MARKER = "...: "


class RunStatus(Enum):
    SKIPPED = "skipped"
    OK = "ok"
    COMPILE_ERROR = "compile_error"
    RUNTIME_ERROR = "runtime_error"


@dataclass
class RunResult:
    """Outcome of one submitted line."""
    status: RunStatus
    compile_error: Optional[CompileError] = None
    runtime_error: Optional[ExecutionRuntimeError] = None

    @property
    def success(self) -> bool:
        return self.status in (RunStatus.OK, RunStatus.SKIPPED)


class ReplSession:
    """
    One interactive session.

    Owns the execution namespace for its whole lifetime. The completion,
    continuation and prompt helpers read it; only ``run`` writes to it.
    """

    def __init__(
        self,
        config: ReplConfig | None = None,
        runtime: PythonRuntime | None = None,
        console: Console | None = None,
    ):
        self.config = config or ReplConfig()
        self.runtime = runtime or PythonRuntime()
        self.console = console or Console()
        self.program = self.config.program
        self.namespace = self.runtime.new_execution_context()
        self.input_count = 1

    def run(self, line: str) -> RunResult:
        """Compile and execute one submitted line.

        Errors are reported on the console and returned, never raised.
        """
        if not line:
            return RunResult(status=RunStatus.SKIPPED)

        self.input_count += 1
        compiled, error = self.runtime.compile(line + "\n", self.program)
        if error is not None:
            self.console.print(
                f"compile error: {error}", markup=False, highlight=False, soft_wrap=True
            )
            logger.debug("Turn %d: compile error %s", self.input_count - 1, error)
            return RunResult(status=RunStatus.COMPILE_ERROR, compile_error=error)

        result = self.runtime.execute(compiled, self.namespace)
        if not result.success:
            self.console.print(
                Text(result.runtime_error.traceback.rstrip("\n"), style="red"),
                soft_wrap=True,
            )
            logger.debug("Turn %d: %s", self.input_count - 1, result.runtime_error.error)
            return RunResult(status=RunStatus.RUNTIME_ERROR, runtime_error=result.runtime_error)

        logger.debug("Turn %d: ok", self.input_count - 1)
        return RunResult(status=RunStatus.OK)

    def should_continue(self, document: DocumentLike) -> bool:
        return continuation.should_continue(self, document)

    def complete(self, line: str, cursor: int) -> tuple[str, list[Candidate], str]:
        return completion.complete(self.namespace, line, cursor)

    def complete_now(self, line: str, cursor: int) -> str:
        return completion.complete_now(self.namespace, line, cursor)

    def prompt_text(self) -> str:
        return self.config.format_prompt(self.input_count)

    def prompt_tokens(self) -> list[Token]:
        """Prompt label, e.g. ``In [3]: ``."""
        return [Token(TokenKind.PROMPT, self.prompt_text())]

    def continuation_tokens(self) -> list[Token]:
        """Prefix for lines after the first, as wide as the prompt.

        ``In [3]: `` gets ``   ...: `` so code on every line lines up.
        """
        width = cell_len(self.prompt_text())
        spaces = max(width - len(SECOND_LINE_MARKER), 0)
        return [
            Token(TokenKind.PROMPT_SECOND_LINE_PREFIX, " " * spaces),
            Token(TokenKind.PROMPT_SECOND_LINE_PREFIX, SECOND_LINE_MARKER),
        ]
