#!/usr/bin/env python3
"""
cli.py
======

Thin command‑line wrapper for the chalkboard edge‑mask filter.

This script does **no** argument parsing of its own; it simply delegates
to :pyfunc:`chalkboard.pipeline.main`, so all options and documentation
are maintained in one place.  Installed as the ``chalkboard`` console
script.

Examples
--------
Trace a photo with default settings (threshold 20, thickness 0):

    chalkboard portrait.jpg

Stronger threshold, 3‑pixel lines, dark lines on white:

    chalkboard "my photos/portrait.jpg" 40 1 -invert

The mask is always written to ``output.png`` in the current directory
(or ``$CHALKBOARD_OUTDIR``).
"""
from __future__ import annotations

import sys

from chalkboard import pipeline


def main() -> None:
    """Forward ``sys.argv[1:]`` to :pyfunc:`pipeline.main`."""
    sys.exit(pipeline.main(sys.argv[1:]))


if __name__ == "__main__":  # pragma: no cover
    main()
