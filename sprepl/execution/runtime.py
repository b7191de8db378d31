# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Interactive Python compilation and execution against a persistent namespace."""

from __future__ import annotations

import __future__
import builtins
import codeop
import logging
import traceback
import warnings
from dataclasses import dataclass, field
from types import CodeType
from typing import Any, Optional

logger = logging.getLogger(__name__)

# Canonical compiler messages for input that needs more lines
EOF_WHILE_PARSING = "unexpected EOF while parsing"
EOF_IN_TRIPLE_QUOTED_STRING = "EOF while scanning triple-quoted string literal"

# Same flags codeop uses to let the parser report "incomplete input"
_INCOMPLETE_INPUT_FLAGS = codeop.PyCF_ALLOW_INCOMPLETE_INPUT | codeop.PyCF_DONT_IMPLY_DEDENT

_FUTURE_FLAGS = [
    getattr(__future__, name).compiler_flag for name in __future__.all_feature_names
]


def _is_blank_or_comment(source: str) -> bool:
    for line in source.split("\n"):
        line = line.strip()
        if line and not line.startswith("#"):
            return False
    return True


@dataclass
class CompileError:
    """Python compilation/syntax error."""
    error: str
    line: Optional[int] = None
    offset: Optional[int] = None

    def __str__(self) -> str:
        if self.line:
            return f"{self.error} (line {self.line})"
        return self.error


@dataclass
class ExecutionRuntimeError:
    """Exception raised while executing a compiled statement.

    ``traceback`` is the full formatted traceback, starting at the user's
    own code.
    """
    error: str
    traceback: str


@dataclass
class ExecutionResult:
    """Result of executing one compiled statement."""
    success: bool
    runtime_error: Optional[ExecutionRuntimeError] = None


@dataclass
class Namespace:
    """Scopes visible to interactive code: execution globals, then builtins."""
    globals: dict[str, Any] = field(default_factory=dict)
    builtins: dict[str, Any] = field(default_factory=dict)

    def scopes(self) -> tuple[dict[str, Any], dict[str, Any]]:
        return self.globals, self.builtins


class PythonRuntime:
    """
    Compile and execute interactive statements in-process.

    ``from __future__`` imports stay in effect for later statements, the
    way they do at the stock interpreter prompt.
    """

    def __init__(self):
        self._future_flags = 0

    def new_execution_context(self) -> Namespace:
        """Create the namespace pair used for a whole session."""
        module_globals: dict[str, Any] = {
            "__name__": "__main__",
            "__doc__": None,
            "__builtins__": builtins,
        }
        return Namespace(globals=module_globals, builtins=vars(builtins))

    def compile(
        self,
        source: str,
        program: str = "<stdin>",
        mode: str = "single",
    ) -> tuple[Optional[CodeType], Optional[CompileError]]:
        """Compile source, returning (compiled, error).

        Source the compiler could still accept after more lines is reported
        with one of the canonical messages ``EOF_WHILE_PARSING`` or
        ``EOF_IN_TRIPLE_QUOTED_STRING``. Source made only of blank and
        comment lines compiles to a no-op.
        """
        if _is_blank_or_comment(source):
            source = "pass\n"

        try:
            compiled = compile(source, program, mode, self._future_flags, True)
        except SyntaxError as e:
            message = str(e.msg) if e.msg else str(e)
            if "unterminated triple-quoted string" in message:
                message = EOF_IN_TRIPLE_QUOTED_STRING
            elif self._needs_more_input(source, program, mode):
                message = EOF_WHILE_PARSING
            logger.debug("Compile failed for %r: %s", source, message)
            return None, CompileError(error=message, line=e.lineno, offset=e.offset)
        except (OverflowError, ValueError) as e:
            logger.debug("Compile failed for %r: %s", source, e)
            return None, CompileError(error=str(e))

        for flag in _FUTURE_FLAGS:
            if compiled.co_flags & flag:
                self._future_flags |= flag
        return compiled, None

    def _needs_more_input(self, source: str, program: str, mode: str) -> bool:
        """Ask the compiler whether the error is only the end of input."""
        flags = self._future_flags | _INCOMPLETE_INPUT_FLAGS
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", (SyntaxWarning, DeprecationWarning))
            try:
                compile(source, program, mode, flags, True)
            except SyntaxError as e:
                return "incomplete input" in str(e)
            except (OverflowError, ValueError):
                return False
        return False

    def execute(self, compiled: CodeType, namespace: Namespace) -> ExecutionResult:
        """
        Execute compiled code with the execution globals as both scopes.

        Args:
            compiled: Code object from ``compile``
            namespace: Session namespace; top-level assignments persist in it

        Returns:
            ExecutionResult with the runtime error, if any. ``SystemExit``
            is not caught.
        """
        scope = namespace.globals
        try:
            exec(compiled, scope, scope)
        except (Exception, KeyboardInterrupt) as e:
            # Drop this frame so the traceback starts at the user's code
            tb = "".join(traceback.format_exception(type(e), e, e.__traceback__.tb_next))
            return ExecutionResult(
                success=False,
                runtime_error=ExecutionRuntimeError(
                    error=f"{type(e).__name__}: {e}",
                    traceback=tb,
                ),
            )
        return ExecutionResult(success=True)
