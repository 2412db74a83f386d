"""Image export for rendered images.

The renderer already quantizes colors to 8 bits, so export is a direct
write of the (height, width, 3) uint8 buffer. The file format follows the
path's extension (PNG, JPEG, PPM and anything else Pillow supports).

Example:
    >>> from src.phong.preview.export import save_image
    >>> from src.phong.core.integrator import render
    >>>
    >>> image = render(camera, world)
    >>> save_image(image, "ray.png")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage


def _check_image(image: npt.NDArray[np.uint8]) -> None:
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (height, width, 3), got {image.shape}")
    if image.dtype != np.uint8:
        raise ValueError(f"Expected a uint8 image, got {image.dtype}")


def to_pil_image(image: npt.NDArray[np.uint8]) -> PILImage.Image:
    """Wrap a rendered image in a Pillow image.

    Args:
        image: Array of shape (height, width, 3) with dtype uint8.

    Raises:
        ValueError: If the shape or dtype is wrong.
    """
    _check_image(image)
    return PILImage.fromarray(np.ascontiguousarray(image), mode="RGB")


def save_image(image: npt.NDArray[np.uint8], filepath: str | Path) -> None:
    """Save a rendered image to a file.

    Args:
        image: Array of shape (height, width, 3) with dtype uint8, row 0 at
            the top.
        filepath: Output path. The extension selects the format.

    Raises:
        ValueError: If the shape or dtype is wrong, or the extension is not
            a known image format.
    """
    to_pil_image(image).save(filepath)


def compute_rmse(image1: npt.NDArray[np.uint8], image2: npt.NDArray[np.uint8]) -> float:
    """Compute Root Mean Square Error between two images.

    Useful for comparing renders against reference images.

    Args:
        image1: First image array.
        image2: Second image array.

    Returns:
        The RMSE value in 8-bit channel units (0 means identical).

    Raises:
        ValueError: If images have different shapes.
    """
    if image1.shape != image2.shape:
        raise ValueError(f"Image shapes must match: {image1.shape} vs {image2.shape}")

    diff = image1.astype(np.float64) - image2.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
