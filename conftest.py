# Test discovery helper when run from the repository root.
# Keeps the root on sys.path so 'those' is importable without an install.
import os
import sys

ROOT = os.path.dirname(os.path.abspath(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
