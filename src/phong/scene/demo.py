"""Demo scene: five spheres, two of them striped.

The demo extends the default world (a pink unit sphere at the origin lit
from (-10, 10, -10)) with four more spheres:

- a green-striped sphere floating above and in front of the origin
- a small yellow-green sphere to the right
- a huge striped sphere behind everything, acting as a backdrop
- a small glossy purple sphere at the upper left

The camera looks from (0, 1.5, -5) toward (0, 1, 0) with a portrait
300x450 image and a 60 degree field of view.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.phong.scene.demo import create_demo_scene
    >>> from src.phong.core.integrator import render
    >>>
    >>> world, camera = create_demo_scene()
    >>> image = render(camera, world)
"""

import math
from dataclasses import dataclass

from src.phong.camera.camera import Camera
from src.phong.materials.material import Material
from src.phong.materials.pattern import StripePattern
from src.phong.scene.config import CameraConfig
from src.phong.scene.world import World, WorldBuilder, default_world

# =============================================================================
# Demo Scene Parameters
# =============================================================================


@dataclass
class DemoSceneParams:
    """Parameters for configuring the demo scene.

    Attributes:
        hsize: Image width in pixels. Default is 300.
        vsize: Image height in pixels. Default is 450.
        field_of_view: Field of view in radians. Default is pi / 3.
        light_position: Position of the point light.
            Default is (-10, 10, -10), the default world's light.
        light_color: RGB color of the light. Default is white.

    Example:
        >>> params = DemoSceneParams(hsize=150, vsize=225)
        >>> world, camera = create_demo_scene(params)
    """

    hsize: int = 300
    vsize: int = 450
    field_of_view: float = math.pi / 3.0
    light_position: tuple[float, float, float] = (-10.0, 10.0, -10.0)
    light_color: tuple[float, float, float] = (1.0, 1.0, 1.0)


# =============================================================================
# Demo Scene Constants
# =============================================================================

CAMERA_FROM = (0.0, 1.5, -5.0)
CAMERA_TO = (0.0, 1.0, 0.0)
CAMERA_UP = (0.0, 1.0, 0.0)

STRIPED_SPHERE_MATERIAL = Material(
    color=(0.1, 1.0, 0.5),
    pattern=StripePattern(a=(0.14, 0.58, 0.26), b=(0.8, 0.4, 0.6)),
    ambient=0.5,
    diffuse=0.9,
    specular=0.4,
)
SMALL_SPHERE_MATERIAL = Material(color=(0.5, 1.0, 0.1), diffuse=0.5, specular=0.6)
BACKDROP_MATERIAL = Material(
    color=(0.2, 1.0, 0.9),
    pattern=StripePattern(a=(0.5, 0.7, 1.0), b=(0.8, 0.4, 0.6)),
    diffuse=0.7,
    specular=0.3,
)
GLOSSY_SPHERE_MATERIAL = Material(
    color=(0.2, 0.0, 0.9),
    diffuse=0.3,
    specular=0.3,
    shininess=10.0,
)


# =============================================================================
# Demo Scene Factory
# =============================================================================


def create_demo_scene(params: DemoSceneParams | None = None) -> tuple[World, Camera]:
    """Create the demo scene and its camera.

    Args:
        params: Optional DemoSceneParams for image size, field of view and
            light. If None, uses default DemoSceneParams().

    Returns:
        A tuple of (World, Camera).

    Raises:
        ValueError: If the image size or field of view is invalid.
    """
    if params is None:
        params = DemoSceneParams()

    builder = WorldBuilder(objects=list(default_world().objects))
    builder.add_light(position=params.light_position, color=params.light_color)

    builder.add_sphere(center=(0.4, 1.7, -1.0), radius=0.7, material=STRIPED_SPHERE_MATERIAL)
    builder.add_sphere(center=(1.5, 0.5, -0.5), radius=0.5, material=SMALL_SPHERE_MATERIAL)
    builder.add_sphere(center=(2.0, 0.5, 12.5), radius=12.0, material=BACKDROP_MATERIAL)
    builder.add_sphere(center=(-0.9, 2.5, 0.5), radius=0.4, material=GLOSSY_SPHERE_MATERIAL)

    camera = CameraConfig(
        hsize=params.hsize,
        vsize=params.vsize,
        field_of_view=params.field_of_view,
        from_point=CAMERA_FROM,
        to_point=CAMERA_TO,
        up=CAMERA_UP,
    ).build()

    return builder.build(), camera
