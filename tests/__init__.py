"""
Test package for the floodfill module.

To run all tests:
    python -m pytest tests

or with unittest:
    python -m unittest discover tests
"""

import sys
from pathlib import Path

# Add the project root to the path for proper imports
# This allows tests to be run from any directory
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.append(str(project_root))
