"""
edges.py
========

Pixel‑level edge mask for the chalkboard effect.

For every **interior** pixel (x,y) (the 1‑pixel frame is never
evaluated) a central‑difference gradient is computed

    dx = I(x+1,y) − I(x−1,y)
    dy = I(x,y+1) − I(x,y−1)
    g  = ⌊√(dx² + dy²)⌋            0 ≤ g ≤ 360

and the pixel becomes a *seed* if

    c₁ : g > T
    c₂ : g > I(n) + T   for any of the 8 neighbours n

Seeds are then grown into (2·thickness+1)² squares, clipped to the image
bounds, and the result is scaled to {0, 255}.

All functions take a **uint8** grayscale array of shape (H, W).

Public API
----------
* `gradient_magnitude(img) -> np.ndarray[int64]`
* `neighbour_floor(img) -> np.ndarray[uint8]`
* `edge_seeds(img, threshold=20) -> np.ndarray[bool]`
* `make_mask(img, threshold=20, thickness=0) -> np.ndarray[uint8]`
"""
from __future__ import annotations

import logging

import numpy as np
from scipy.ndimage import minimum_filter

from .post import thicken

__all__ = [
    "DEFAULT_THRESHOLD",
    "DEFAULT_THICKNESS",
    "gradient_magnitude",
    "neighbour_floor",
    "edge_seeds",
    "make_mask",
]

DEFAULT_THRESHOLD = 20
DEFAULT_THICKNESS = 0

logger = logging.getLogger(__name__)

# 8‑neighbourhood without the centre pixel
_RING = np.array(
    [[1, 1, 1],
     [1, 0, 1],
     [1, 1, 1]],
    dtype=bool,
)


# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------
def _check_gray(img: np.ndarray) -> None:
    if img.ndim != 2:
        raise ValueError(f"Expected a 2-D grayscale image, got shape {img.shape}")
    if img.dtype != np.uint8:
        raise TypeError("Input image must be uint8 (range [0,255])")


def _has_interior(img: np.ndarray) -> bool:
    return img.shape[0] >= 3 and img.shape[1] >= 3


def gradient_magnitude(img: np.ndarray) -> np.ndarray:
    """
    Central‑difference gradient magnitude of *img*.

    Parameters
    ----------
    img : np.ndarray
        Grayscale uint8 image.

    Returns
    -------
    g : np.ndarray, int64
        Truncated magnitude in [0, 360], not clipped to 8 bits.  The
        1‑pixel border is 0.
    """
    _check_gray(img)
    g = np.zeros(img.shape, dtype=np.int64)
    if not _has_interior(img):
        return g

    px = img.astype(np.int64)
    dx = px[1:-1, 2:] - px[1:-1, :-2]
    dy = px[2:, 1:-1] - px[:-2, 1:-1]
    mag = np.sqrt(dx * dx + dy * dy)
    g[1:-1, 1:-1] = mag.astype(np.int64)
    return g


def neighbour_floor(img: np.ndarray) -> np.ndarray:
    """
    Minimum raw intensity among the 8 neighbours of each pixel.

    Only the interior values are meaningful; border pixels replicate the
    edge of the image.
    """
    _check_gray(img)
    return minimum_filter(img, footprint=_RING, mode="nearest")


def edge_seeds(img: np.ndarray, threshold: int = DEFAULT_THRESHOLD) -> np.ndarray:
    """
    Boolean map of interior pixels that pass the edge test.

    A pixel passes when its gradient magnitude exceeds *threshold*, or
    exceeds the raw intensity of any 8‑neighbour plus *threshold*.  The
    second test is checked against the darkest neighbour, which is
    equivalent to testing all eight.

    Parameters
    ----------
    img : np.ndarray
        Grayscale uint8 image.
    threshold : int, default=20

    Returns
    -------
    seeds : np.ndarray[bool]
        Border pixels are always False.
    """
    _check_gray(img)
    seeds = np.zeros(img.shape, dtype=bool)
    if not _has_interior(img):
        return seeds

    t = int(threshold)
    g = gradient_magnitude(img)[1:-1, 1:-1]
    floor = neighbour_floor(img)[1:-1, 1:-1].astype(np.int64)

    c1 = g > t
    c2 = g > floor + t
    seeds[1:-1, 1:-1] = np.logical_or(c1, c2)
    return seeds


def make_mask(
    img: np.ndarray,
    threshold: int = DEFAULT_THRESHOLD,
    thickness: int = DEFAULT_THICKNESS,
) -> np.ndarray:
    """
    Generate the chalkboard edge mask of *img*.

    Parameters
    ----------
    img : np.ndarray
        Grayscale uint8 image, shape (H, W).
    threshold : int, default=20
        Edge strength threshold (see module docstring).
    thickness : int, default=0
        Dilation radius; every seed becomes a (2·thickness+1)² square.
        Negative values mark nothing.

    Returns
    -------
    mask : np.ndarray, uint8
        Same shape as *img*; 255 on edges, 0 elsewhere.
    """
    seeds = edge_seeds(img, threshold=threshold)
    lines = thicken(seeds, int(thickness))
    logger.debug(
        "threshold=%s thickness=%s: %d seeds, %d mask pixels",
        threshold, thickness, int(seeds.sum()), int(lines.sum()),
    )
    return lines.astype(np.uint8) * 255
