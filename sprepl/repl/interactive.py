# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Interactive read-eval-print loop."""

from __future__ import annotations

import logging
import sys
from typing import BinaryIO, Optional

from prompt_toolkit import PromptSession
from rich.console import Console

from sprepl.core.config import ReplConfig
from sprepl.repl.editor import build_prompt_session
from sprepl.repl.session import ReplSession

logger = logging.getLogger(__name__)

BANNER = 'Type "Ctrl-D" to exit.'
EXIT_QUESTION = "Do you really want to exit ([y]/n)? "


class InteractiveREPL:
    """Read-Eval-Print Loop around a ReplSession.

    Two states: awaiting a line, and confirming exit after Ctrl-D.
    """

    def __init__(
        self,
        config: ReplConfig | None = None,
        session: ReplSession | None = None,
        console: Console | None = None,
        prompt_session: PromptSession | None = None,
        stdin: BinaryIO | None = None,
    ):
        self.config = config or (session.config if session else ReplConfig())
        self.console = console or Console()
        self.session = session or ReplSession(self.config, console=self.console)
        self._prompt_session = prompt_session
        self._stdin = stdin

    @property
    def prompt_session(self) -> PromptSession:
        if self._prompt_session is None:
            self._prompt_session = build_prompt_session(self.session)
        return self._prompt_session

    def read_line(self) -> str:
        return self.prompt_session.prompt()

    def _read_reply(self) -> bytes:
        """First byte of the reply line, b"" at end of input.

        The whole line is consumed so its newline is not taken as the
        answer to the next confirmation.
        """
        stdin = self._stdin if self._stdin is not None else sys.stdin.buffer
        return stdin.readline()[:1]

    def confirm_exit(self) -> Optional[int]:
        """Ask whether to leave.

        Returns:
            None to keep going, otherwise the process exit status.
        """
        self.console.print(EXIT_QUESTION, end="", markup=False, highlight=False)
        try:
            reply = self._read_reply()
        except OSError as e:
            self.console.print(f"read error: {e}", markup=False, highlight=False)
            return 1

        if reply == b"n":
            logger.debug("Exit cancelled")
            return None
        return 0

    def run(self) -> int:
        """Run the interactive REPL until the user leaves.

        Returns:
            Process exit status.
        """
        self.console.print(BANNER, markup=False, highlight=False)
        while True:
            try:
                line = self.read_line()
            except EOFError:
                if not self.config.confirm_exit:
                    return 0
                status = self.confirm_exit()
                if status is None:
                    continue
                return status
            except KeyboardInterrupt:
                self.console.print("KeyboardInterrupt", markup=False, highlight=False)
                continue
            except Exception as e:
                self.console.print(f"ReadInput error: {e}", markup=False, highlight=False)
                logger.debug("Line editor failed", exc_info=True)
                return 1

            if not line:
                continue

            try:
                self.session.run(line)
            except SystemExit as e:
                return self._exit_status(e)
            self.console.print()

    def _exit_status(self, exc: SystemExit) -> int:
        """Map exit() arguments to a status the way the interpreter does."""
        code = exc.code
        if code is None:
            return 0
        if isinstance(code, int):
            return code
        self.console.print(str(code), markup=False, highlight=False)
        return 1
