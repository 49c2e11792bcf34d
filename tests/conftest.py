from __future__ import annotations

import sys
from pathlib import Path

# Make ``equation_plotter`` importable from a plain checkout (no install).
_REPO_ROOT = Path(__file__).resolve().parent.parent
if (_REPO_ROOT / "equation_plotter" / "__init__.py").exists() and str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))
