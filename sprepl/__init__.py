# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""sprepl - an interactive Python prompt.

Submodules:
- core: Configuration
- execution: Compiling and executing interactive statements
- repl: Token classification, continuation, completion, session and loop

Main classes:
- ReplSession: Namespace, input counter and the submit/execute/report cycle
- InteractiveREPL: The prompt loop
"""

__version__ = "0.1.0"
