"""
post.py
=======

Post‑processing helpers applied to the edge mask.

Typical workflow
----------------
```
seeds = edges.edge_seeds(img, threshold=20)
thick = thicken(seeds, 2)                 # 5×5 square around every seed
mask  = thick.astype(np.uint8) * 255
chalk = invert(mask)                      # white board, dark lines
```

Functions
---------
* **thicken(mask, radius)** – square binary dilation clipped to the image.
* **invert(mask)**          – pointwise 255 − value.
"""
from __future__ import annotations

import numpy as np
from scipy.ndimage import maximum_filter

__all__ = [
    "thicken",
    "invert",
]

# ---------------------------------------------------------------------
# Binary mask ops
# ---------------------------------------------------------------------
def thicken(mask: np.ndarray, radius: int = 1) -> np.ndarray:
    """
    Grow every True pixel of *mask* into a ``(2·radius+1)²`` square.

    Implemented as one separable maximum filter, independent of *radius*.
    Pixels outside the image count as background, so the squares are
    clipped to the image bounds.

    Parameters
    ----------
    mask : np.ndarray[bool] | uint8
    radius : int, default=1
        `radius=0` → unchanged, `radius<0` → empty mask (the square
        around each pixel has no cells).

    Returns
    -------
    np.ndarray[bool]
    """
    mask = mask.astype(bool)
    if radius < 0:
        return np.zeros_like(mask)
    if radius == 0 or not mask.any():
        return mask
    size = 2 * radius + 1
    grown = maximum_filter(mask.view(np.uint8), size=size, mode="constant", cval=0)
    return grown.astype(bool)


def invert(mask: np.ndarray) -> np.ndarray:
    """
    Return ``255 - mask`` as a new uint8 array.

    Parameters
    ----------
    mask : np.ndarray
        uint8 image (any values, not only 0/255).

    Returns
    -------
    np.ndarray[uint8] – inverted copy, same shape as *mask*.
    """
    if mask.dtype != np.uint8:
        raise TypeError("invert expects a uint8 image")
    return np.subtract(255, mask, dtype=np.uint8)
