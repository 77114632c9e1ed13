"""
io_utils/path.py
================
Utility helpers for consistent file‑path handling across the chalkboard
project.

Conventions
-----------
* The input argument is treated as a **glob pattern** so that file names
  containing spaces or wildcards resolve to a real file.
* The output mask always has the same file name (``output.png``).  It is
  written to the current working directory unless the environment
  variable ``CHALKBOARD_OUTDIR`` overrides it.
"""
from __future__ import annotations

import glob
import os
from typing import Optional

OUTPUT_FILENAME = "output.png"


def ensure_dir(path: str) -> None:
    """Create *path* recursively if it does not already exist."""
    if path and not os.path.isdir(path):
        os.makedirs(path, exist_ok=True)

# ---------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------

def resolve_input(pattern: str) -> Optional[str]:
    """
    Expand *pattern* and return the first matching path.

    Matches are sorted so the choice is stable between runs.  Returns
    ``None`` when nothing matches.
    """
    files = sorted(glob.glob(pattern))
    if not files:
        return None
    return files[0]

# ---------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------

def out_root() -> str:
    """Directory receiving the output mask (``CHALKBOARD_OUTDIR`` or cwd)."""
    return os.path.abspath(os.getenv("CHALKBOARD_OUTDIR", os.getcwd()))


def output_path(filename: str = OUTPUT_FILENAME) -> str:
    """
    Absolute path of *filename* under :pyfunc:`out_root`.
    Parent folders are auto‑created.
    """
    path = os.path.join(out_root(), filename)
    ensure_dir(os.path.dirname(path))
    return path


__all__ = [
    "OUTPUT_FILENAME",
    "ensure_dir",
    "resolve_input",
    "out_root",
    "output_path",
]
