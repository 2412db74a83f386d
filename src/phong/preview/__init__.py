"""Preview module for rendered output.

Components:
    export: Pillow-based image export

Example:
    >>> from src.phong.preview import save_image
    >>> save_image(image, "ray.png")
"""

from src.phong.preview.export import compute_rmse, save_image, to_pil_image

__all__ = [
    "save_image",
    "to_pil_image",
    "compute_rmse",
]
