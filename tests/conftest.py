"""
Shared pytest configuration for the aggregation builder test suite.
"""

import os
import sys

# Ensure the src directory is importable without an editable install
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
SRC_DIR = os.path.join(PROJECT_ROOT, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)
