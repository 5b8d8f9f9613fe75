"""
quadmesh test bootstrap: puts src/ on sys.path so the suite runs from a
plain checkout, before or without `pip install -e .`.
"""

import sys
from pathlib import Path

SRC_ROOT = str(Path(__file__).resolve().parent)

if SRC_ROOT not in sys.path:
    sys.path.insert(0, SRC_ROOT)
