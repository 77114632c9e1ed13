"""
pipeline.py
===========

End‑to‑end orchestration of the chalkboard edge‑mask filter.

Usage (stand‑alone)
-------------------
```bash
python -m chalkboard.pipeline "holiday photo.jpg" 30 1 -invert
```

Arguments
---------
* `input`            : image path, resolved as a glob pattern
* `threshold`        : edge threshold (default 20)
* `thickness`        : line dilation radius (default 0)
* `-invert`          : write dark lines on a white board
* `--timings`        : print per‑stage timings

Arguments are read by position: with three or more of them the second
and third are the threshold and thickness, whatever they hold.
An unparseable threshold falls back to 50 and an unparseable thickness
to 1.  The mask is always written to ``output.png`` (see
:pyfunc:`chalkboard.io_utils.path.output_path`).
"""
from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple

import numpy as np
from rich.console import Console

from chalkboard import edges, post
from chalkboard.io_utils import path
from chalkboard.io_utils.io import load_gray, save_image
from chalkboard.io_utils.timing import Timer

logger = logging.getLogger(__name__)

BANNER = "CHALKBOARDIMAGE: by Dave Duke [bright_green]dave@daveduke.co.uk[/bright_green]"
USAGE = "chalkboard <input_image_path> [threshold] [thickness] [-invert]"

FALLBACK_THRESHOLD = 50
FALLBACK_THICKNESS = 1


# ----------------------------------------------------------------------
# Core pipeline
# ----------------------------------------------------------------------
def run(
    img_path: Path,
    *,
    threshold: int = edges.DEFAULT_THRESHOLD,
    thickness: int = edges.DEFAULT_THICKNESS,
    invert: bool = False,
    verbose: bool = False,
) -> np.ndarray:
    """
    Execute the filter on *img_path*.

    Returns
    -------
    mask : np.ndarray[uint8] – 0/255 edge mask, inverted if requested.
    """
    with Timer("load", silent=not verbose):
        img = load_gray(img_path)

    with Timer("mask", silent=not verbose):
        mask = edges.make_mask(img, threshold=threshold, thickness=thickness)

    if invert:
        with Timer("invert", silent=not verbose):
            mask = post.invert(mask)

    return mask


# ----------------------------------------------------------------------
# CLI
# ----------------------------------------------------------------------
@dataclass
class Options:
    """Command line, as read by :pyfunc:`parse_args`."""
    input: str
    threshold: int = edges.DEFAULT_THRESHOLD
    thickness: int = edges.DEFAULT_THICKNESS
    invert: bool = False
    timings: bool = False


def parse_levels(threshold: str, thickness: str) -> Tuple[int, int]:
    """Parse the optional positional levels, falling back to 50 / 1."""
    try:
        t = int(threshold)
    except ValueError:
        logger.warning("Invalid threshold value. Using default (%d).", FALLBACK_THRESHOLD)
        t = FALLBACK_THRESHOLD

    try:
        k = int(thickness)
    except ValueError:
        logger.warning("Invalid thickness value. Using default (%d).", FALLBACK_THICKNESS)
        k = FALLBACK_THICKNESS
    return t, k


def parse_args(argv: Sequence[str]) -> Options:
    """
    Read *argv* positionally.

    ``argv[0]`` is the input pattern.  With three or more arguments,
    ``argv[1]`` and ``argv[2]`` are the threshold and thickness whatever
    they hold, so ``img 30 -invert`` gives threshold 30 and the fallback
    thickness.  ``-invert`` is matched anywhere.  ``--timings`` is removed
    before positions are counted.
    """
    timings = "--timings" in argv
    argv = [a for a in argv if a != "--timings"]
    if not argv:
        raise ValueError("missing input image path")

    opts = Options(input=argv[0], invert="-invert" in argv, timings=timings)
    if len(argv) >= 3:
        opts.threshold, opts.thickness = parse_levels(argv[1], argv[2])
    return opts


def _configure_logging() -> None:
    level = os.getenv("CHALKBOARD_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    _configure_logging()
    argv = list(sys.argv[1:] if argv is None else argv)

    Console(highlight=False).print(BANNER)
    if not argv or argv[0] in ("-h", "--help"):
        print(f"Usage: {USAGE}")
        return 0

    try:
        args = parse_args(argv)
    except ValueError:
        print(f"Usage: {USAGE}")
        return 0

    input_file = path.resolve_input(args.input)
    if input_file is None:
        print("No image files found.")
        return 0

    try:
        mask = run(
            Path(input_file),
            threshold=args.threshold,
            thickness=args.thickness,
            invert=args.invert,
            verbose=args.timings,
        )
    except (OSError, ValueError, TypeError) as exc:
        logger.critical("Error reading image: %s", exc)
        sys.exit(1)

    try:
        out_file = path.output_path()
        with Timer("save", silent=not args.timings):
            save_image(out_file, mask)
    except OSError as exc:
        logger.critical("Error saving mask: %s", exc)
        sys.exit(1)

    logger.info("input=%s threshold=%d thickness=%d invert=%s -> %s",
                input_file, args.threshold, args.thickness, args.invert, out_file)
    print("Mask created and saved successfully.")

    if args.timings:
        print(Timer.summary(reset=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())
