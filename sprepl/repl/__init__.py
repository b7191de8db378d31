# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""REPL module - interactive front end.

- tokens: lexing and keyword reclassification
- continuation: submit-or-continue decision for Enter
- completion: name completion over live namespaces
- session: ReplSession (namespace, input counter, run cycle)
- editor: prompt_toolkit lexer, completer and key bindings
- interactive: InteractiveREPL loop with exit confirmation
"""
