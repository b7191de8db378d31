# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Shared fixtures: a runtime, a quiet console and a fresh session."""

import io

import pytest
from rich.console import Console

from sprepl.core.config import ReplConfig
from sprepl.execution.runtime import PythonRuntime
from sprepl.repl.session import ReplSession


@pytest.fixture
def runtime() -> PythonRuntime:
    return PythonRuntime()


@pytest.fixture
def console() -> Console:
    """Console writing to a buffer; read it back with console.file.getvalue()."""
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def session(runtime: PythonRuntime, console: Console) -> ReplSession:
    return ReplSession(ReplConfig(), runtime=runtime, console=console)
