# SPDX-License-Identifier: MIT
# Copyright (c) 2025 ripple-auth contributors

"""Root conftest.py to make ripple_auth importable without installing it."""

import sys
from pathlib import Path

_repo_root = Path(__file__).parent
if str(_repo_root) not in sys.path:
    sys.path.insert(0, str(_repo_root))
