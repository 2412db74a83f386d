"""Pinhole camera defined by a view transform.

The camera sits at the origin of its own space looking down -z, with a
canvas one unit in front of it. ``transform`` maps world space into camera
space (typically built with ``view_transform``); rays are generated in camera
space and carried back to world space with its inverse.

The canvas spans ``2 * half_width`` by ``2 * half_height`` units where the
longer side covers the field of view:

    half_view = tan(field_of_view / 2)
    aspect    = hsize / vsize
    aspect >= 1: half_width = half_view,          half_height = half_view / aspect
    aspect <  1: half_width = half_view * aspect, half_height = half_view

Pixel (0, 0) is the top-left corner of the image. Each ray passes through
the center of its pixel.

Example:
    >>> import math
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.phong.camera.camera import Camera, setup_camera, ray_for_pixel
    >>> from src.phong.core.transforms import view_transform
    >>>
    >>> camera = Camera(
    ...     hsize=200,
    ...     vsize=100,
    ...     field_of_view=math.pi / 2,
    ...     transform=view_transform((0, 0, -5), (0, 0, 0), (0, 1, 0)),
    ... )
    >>> setup_camera(camera)
    >>>
    >>> @ti.kernel
    ... def render():
    ...     ray = ray_for_pixel(100, 50)  # Ray through image center
"""

import math
from dataclasses import dataclass, field

import taichi as ti
import taichi.math as tm

from src.phong.core.ray import Ray, make_ray, normalize, transform_point
from src.phong.core.transforms import Matrix4, as_matrix, identity, invert_transform

vec3 = tm.vec3

# Maximum supported image dimensions (the render target is preallocated)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass(eq=False)
class Camera:
    """Configuration for a pinhole camera.

    The canvas geometry and the inverse transform are derived from the
    current fields on every access, so ``transform`` (or the image size) may
    be reassigned after construction, e.g. to apply a ``view_transform``.

    Attributes:
        hsize: Image width in pixels.
        vsize: Image height in pixels.
        field_of_view: Angle covered by the longer image side, in radians.
        transform: World-to-camera view transform (default identity).
    """

    hsize: int
    vsize: int
    field_of_view: float
    transform: Matrix4 = field(default_factory=identity)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Check the image size, field of view and transform.

        Raises:
            ValueError: If the image size is out of range, the field of view
                is not in (0, pi) or the transform is singular.
        """
        if not (0 < self.hsize <= MAX_IMAGE_WIDTH and 0 < self.vsize <= MAX_IMAGE_HEIGHT):
            raise ValueError(
                f"Image dimensions ({self.hsize}x{self.vsize}) must be positive and at most "
                f"{MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT}"
            )
        if not 0.0 < self.field_of_view < math.pi:
            raise ValueError(
                f"Field of view must be between 0 and pi radians, got {self.field_of_view}"
            )
        self.transform = as_matrix(self.transform)

    @property
    def inverse_transform(self) -> Matrix4:
        """Camera-to-world transform."""
        return invert_transform(self.transform)

    @property
    def half_width(self) -> float:
        """Half the canvas width."""
        return self._half_extents()[0]

    @property
    def half_height(self) -> float:
        """Half the canvas height."""
        return self._half_extents()[1]

    @property
    def pixel_size(self) -> float:
        """Side length of one pixel on the canvas."""
        return (self.half_width * 2.0) / self.hsize

    def _half_extents(self) -> tuple[float, float]:
        half_view = math.tan(self.field_of_view / 2.0)
        aspect = self.hsize / self.vsize
        if aspect >= 1.0:
            return half_view, half_view / aspect
        return half_view * aspect, half_view


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_inverse = ti.Matrix.field(4, 4, dtype=ti.f32, shape=())
_half_width = ti.field(dtype=ti.f32, shape=())
_half_height = ti.field(dtype=ti.f32, shape=())
_pixel_size = ti.field(dtype=ti.f32, shape=())
_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())


def setup_camera(camera: Camera) -> None:
    """Copy camera state into the Taichi fields.

    Must be called before any kernel that uses ``ray_for_pixel``.

    The camera is validated again, so fields reassigned after construction
    are checked before they reach a kernel.

    Args:
        camera: The camera to activate.

    Raises:
        ValueError: If the camera settings are invalid.
    """
    camera.validate()
    _camera_inverse[None] = ti.Matrix(camera.inverse_transform.tolist())
    _half_width[None] = camera.half_width
    _half_height[None] = camera.half_height
    _pixel_size[None] = camera.pixel_size
    _image_width[None] = camera.hsize
    _image_height[None] = camera.vsize


# =============================================================================
# Ray Generation
# =============================================================================


@ti.func
def ray_for_pixel(px: ti.i32, py: ti.i32) -> Ray:
    """Generate the primary ray through the center of pixel (px, py).

    Args:
        px: Column, 0 at the left edge.
        py: Row, 0 at the top edge.

    Returns:
        A world-space ray from the camera position with a unit direction.
    """
    xoffset = (ti.cast(px, ti.f32) + 0.5) * _pixel_size[None]
    yoffset = (ti.cast(py, ti.f32) + 0.5) * _pixel_size[None]

    # Camera looks toward -z, so +x is to the left
    world_x = _half_width[None] - xoffset
    world_y = _half_height[None] - yoffset

    inverse = _camera_inverse[None]
    pixel = transform_point(inverse, vec3(world_x, world_y, -1.0))
    origin = transform_point(inverse, vec3(0.0, 0.0, 0.0))
    return make_ray(origin, normalize(pixel - origin))


# =============================================================================
# Utility Functions
# =============================================================================


def get_image_dimensions() -> tuple[int, int]:
    """Get the (hsize, vsize) of the active camera."""
    return int(_image_width[None]), int(_image_height[None])


def get_camera_info() -> dict[str, float | tuple[float, float, float]]:
    """Get the active camera state for debugging.

    Returns:
        Dictionary with hsize, vsize, half_width, half_height, pixel_size and
        origin (the camera position in world space).
    """
    inverse = _camera_inverse[None]
    return {
        "hsize": int(_image_width[None]),
        "vsize": int(_image_height[None]),
        "half_width": float(_half_width[None]),
        "half_height": float(_half_height[None]),
        "pixel_size": float(_pixel_size[None]),
        "origin": (float(inverse[0, 3]), float(inverse[1, 3]), float(inverse[2, 3])),
    }
