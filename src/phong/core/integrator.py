"""Render loop: one primary ray per pixel, shaded and quantized.

Every pixel gets exactly one ray through its center. The ray's color comes
from ``color_at`` (nearest hit, Phong lighting, one shadow ray) and is
quantized to 8 bits as it is written to the render target.

The render target holds conventional image rows: entry ``[y, x]`` is the
pixel in row ``y`` (0 at the top) and column ``x`` (0 at the left).

Pixels are rendered serially, one row batch per kernel launch, so a progress
callback can run between batches.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.phong.core.integrator import render
    >>> from src.phong.scene.demo import create_demo_scene
    >>>
    >>> world, camera = create_demo_scene()
    >>> image = render(camera, world)
    >>> image.shape
    (450, 300, 3)
"""

from collections.abc import Callable

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from src.phong.camera.camera import (
    MAX_IMAGE_HEIGHT,
    MAX_IMAGE_WIDTH,
    Camera,
    get_image_dimensions,
    ray_for_pixel,
    setup_camera,
)
from src.phong.core.color import to_rgb8
from src.phong.scene.intersection import load_world
from src.phong.scene.shading import color_at
from src.phong.scene.world import World

# Type alias for 3D vectors
vec3 = tm.vec3

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]

# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# 8-bit RGB buffer, preallocated to max size to avoid kernel recompilation
_image = ti.Vector.field(3, dtype=ti.u8, shape=(MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH))

# Scratch result for single-pixel rendering
_pixel_color = ti.Vector.field(3, dtype=ti.f32, shape=())


@ti.kernel
def _render_rows(row_start: ti.i32, row_end: ti.i32, width: ti.i32):
    """Render rows [row_start, row_end) of the image."""
    ti.loop_config(serialize=True)
    for py in range(row_start, row_end):
        for px in range(width):
            color = color_at(ray_for_pixel(px, py))
            _image[py, px] = ti.cast(to_rgb8(color), ti.u8)


@ti.kernel
def _render_single_pixel(px: ti.i32, py: ti.i32):
    for _ in range(1):
        _pixel_color[None] = color_at(ray_for_pixel(px, py))


# =============================================================================
# Public Rendering API
# =============================================================================


def render(
    camera: Camera,
    world: World,
    *,
    rows_per_batch: int | None = None,
    callback: ProgressCallback | None = None,
) -> npt.NDArray[np.uint8]:
    """Render a world through a camera.

    Loads the world and camera into Taichi fields, renders every pixel and
    returns the finished image.

    Args:
        camera: The camera to render through.
        world: The world to render. Must contain at least one light.
        rows_per_batch: Rows rendered per kernel launch. Defaults to the
            whole image in a single batch.
        callback: Optional callback called after each batch.
            Receives (rows_done, total_rows).

    Returns:
        A (vsize, hsize, 3) uint8 array indexed ``[y, x]``.

    Raises:
        ValueError: If the world has no light or rows_per_batch is not positive.
        RuntimeError: If the world exceeds the scene storage capacity.

    Example:
        >>> def progress(done, total):
        ...     print(f"Progress: {done}/{total} rows")
        >>> image = render(camera, world, rows_per_batch=10, callback=progress)
    """
    # Raises if the world has no light
    _ = world.light

    total_rows = camera.vsize
    batch = total_rows if rows_per_batch is None else rows_per_batch
    if batch <= 0:
        raise ValueError(f"rows_per_batch must be positive, got {batch}")

    load_world(world)
    setup_camera(camera)

    row = 0
    while row < total_rows:
        end = min(row + batch, total_rows)
        _render_rows(row, end, camera.hsize)
        row = end

        if callback is not None:
            callback(row, total_rows)

    return get_image_numpy()


def render_pixel(px: int, py: int) -> tuple[float, float, float]:
    """Compute the unquantized color of a single pixel.

    Used for testing and debugging. The scene and camera must already be
    loaded with ``load_world`` and ``setup_camera``.

    Args:
        px: Column, 0 at the left edge.
        py: Row, 0 at the top edge.

    Returns:
        Tuple of (R, G, B) color values.
    """
    _render_single_pixel(px, py)
    color = _pixel_color[None]
    return (float(color[0]), float(color[1]), float(color[2]))


def get_image_numpy() -> npt.NDArray[np.uint8]:
    """Get the active region of the render target as a NumPy array.

    Returns:
        A (vsize, hsize, 3) uint8 copy of the last rendered image.
    """
    width, height = get_image_dimensions()
    return _image.to_numpy()[:height, :width, :].copy()
