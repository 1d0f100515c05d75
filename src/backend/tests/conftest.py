import os
import sys


# Make `common`, `connectors`, `pipelines`, `api` and `scripts` importable when
# pytest is started from the repository root (see pyproject.toml).
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)
