"""Camera module for view and ray generation.

Components:
    camera: Pinhole camera positioned by a view transform

Camera responsibilities:
    - Derive canvas and pixel size from image size and field of view
    - Map pixel (x, y) to a world-space ray through the pixel center

Pixel coordinates are integer image coordinates:
    x in [0, hsize): left to right across the image
    y in [0, vsize): top to bottom across the image
"""

from .camera import (
    MAX_IMAGE_HEIGHT,
    MAX_IMAGE_WIDTH,
    Camera,
    get_camera_info,
    get_image_dimensions,
    ray_for_pixel,
    setup_camera,
)

__all__ = [
    "Camera",
    "setup_camera",
    "ray_for_pixel",
    "get_camera_info",
    "get_image_dimensions",
    "MAX_IMAGE_WIDTH",
    "MAX_IMAGE_HEIGHT",
]
