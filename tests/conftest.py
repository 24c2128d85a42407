"""Make the checkout importable when pytest runs without an install.

The ``pytest`` console script does not always put the repository root on
``sys.path``; prepend it so ``import lazytree`` finds the local package.
"""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = str(Path(__file__).resolve().parent.parent)

if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
