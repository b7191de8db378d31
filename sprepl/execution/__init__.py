# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Language runtime: compilation and execution."""

from .runtime import (
    EOF_IN_TRIPLE_QUOTED_STRING,
    EOF_WHILE_PARSING,
    CompileError,
    ExecutionResult,
    ExecutionRuntimeError,
    Namespace,
    PythonRuntime,
)

__all__ = [
    "EOF_IN_TRIPLE_QUOTED_STRING",
    "EOF_WHILE_PARSING",
    "CompileError",
    "ExecutionResult",
    "ExecutionRuntimeError",
    "Namespace",
    "PythonRuntime",
]
