"""
io_utils/io.py
==============

Light‑weight image I/O helpers for the chalkboard project.

Responsibilities
----------------
* Load any raster format OpenCV can decode as an **8‑bit grayscale** grid.
* Save an image (mask) as PNG, making sure the parent directory exists.

No heavy lifting (CLI parsing, logging setup, timing) lives here; those
belong to upper‑level modules.  Failures are raised, never swallowed.
"""
from __future__ import annotations

import logging
import os
from typing import Union

import cv2
import numpy as np

from .path import ensure_dir

# ---------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------
__all__ = [
    "load_gray",
    "save_image",
]

PathLike = Union[str, os.PathLike]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Load
# ---------------------------------------------------------------------
def _to_gray(img: np.ndarray) -> np.ndarray:
    """
    Reduce a decoded image (any channel count) to 8‑bit grayscale.

    16‑bit samples keep their high byte.  With an alpha channel the colour
    is premultiplied first, so fully transparent pixels become black.
    """
    if img.dtype == np.uint16:
        img = (img >> 8).astype(np.uint8)
    elif img.dtype != np.uint8:
        img = _to_uint8(img)

    if img.ndim == 2:
        return img
    channels = img.shape[2]
    if channels == 1:
        return img[..., 0]
    if channels == 4:
        alpha = img[..., 3:4].astype(np.float32) / 255.0
        bgr = np.round(img[..., :3] * alpha).astype(np.uint8)
        return cv2.cvtColor(bgr, cv2.COLOR_BGR2GRAY)
    return cv2.cvtColor(np.ascontiguousarray(img[..., :3]), cv2.COLOR_BGR2GRAY)


def load_gray(src: PathLike) -> np.ndarray:
    """
    Read *src* as a **grayscale** uint8 array.

    Colour images are reduced with the ITU‑R 601 luma weights
    (0.299 R + 0.587 G + 0.114 B) after premultiplying by alpha, if any.

    Parameters
    ----------
    src : str | os.PathLike
        Image path.

    Returns
    -------
    img : np.ndarray, uint8, shape (H, W)

    Raises
    ------
    FileNotFoundError
        If *src* is missing, unreadable or not a decodable image.
    """
    if not os.path.isfile(src):
        raise FileNotFoundError(f"No such image file: {src}")

    raw = cv2.imread(str(src), cv2.IMREAD_UNCHANGED)
    if raw is None:
        raise FileNotFoundError(f"Cannot read image: {src}")

    img = _to_gray(raw)
    logger.debug("loaded %s (%dx%d, %s)", src, img.shape[1], img.shape[0], raw.dtype)
    return img


# ---------------------------------------------------------------------
# Save
# ---------------------------------------------------------------------
def _to_uint8(img: np.ndarray) -> np.ndarray:
    """
    Convert *img* to uint8, scaling if it is float.

    * If the dtype is uint8 already, return as‑is (copy).
    * bool → {0, 255}.
    * If float → assume range [0,1] or [0,255]; clip and scale accordingly.
    """
    if img.dtype == np.uint8:
        return img.copy()
    if img.dtype == bool:
        return img.astype(np.uint8) * 255
    if img.dtype.kind in {"f"}:
        if img.size and img.max() <= 1.0:
            img = img * 255.0
    return np.clip(img, 0, 255).astype(np.uint8)


def save_image(dst: PathLike, img: np.ndarray, *, auto_mkdir: bool = True) -> None:
    """
    Save *img* to *dst* as PNG. Creates parent directories if needed.

    Parameters
    ----------
    dst : str | os.PathLike
        Destination file path.
    img : np.ndarray
        Image to write.
    auto_mkdir : bool, default=True
        If True (default) create parent directories automatically.

    Raises
    ------
    OSError
        If OpenCV fails to encode the image or the file cannot be written.
    """
    if auto_mkdir:
        ensure_dir(os.path.dirname(str(dst)))

    ok, buf = cv2.imencode(".png", _to_uint8(img))
    if not ok:
        raise OSError(f"Cannot encode PNG for {dst}")

    with open(dst, "wb") as f:
        f.write(buf.tobytes())
    logger.debug("wrote %s (%d bytes)", dst, buf.size)
