"""World-level shading: shadow tests, hit shading and per-ray color.

All functions read the scene from the Taichi storage filled by
``load_world``; the world must hold at least one light.

Roots behind the ray origin are never shaded: ``color_at`` picks the nearest
intersection with ``t > 0``, so a ray starting inside a sphere sees the far
wall and a ray pointing away from every object sees the background.
"""

import taichi as ti
import taichi.math as tm

from src.phong.core.color import BLACK
from src.phong.core.lighting import lighting
from src.phong.core.ray import Ray, length, make_ray, normalize
from src.phong.geometry.sphere import NO_OBJECT
from src.phong.scene.computation import Computation, prepare_computations
from src.phong.scene.intersection import (
    get_light,
    get_material,
    get_sphere,
    nearest_hit,
    nearest_non_negative,
)

vec3 = tm.vec3

# Color returned for rays that hit nothing
BACKGROUND_COLOR = vec3(*BLACK)


@ti.func
def is_shadowed(point: vec3) -> ti.i32:
    """Check whether any object lies between a point and the light.

    An occluder counts when its nearest intersection along the shadow ray
    has ``0 <= t < distance to light``; objects beyond the light do not.

    Returns:
        1 if the point is in shadow, 0 otherwise.
    """
    to_light = get_light().position - point
    distance = length(to_light)
    shadow_ray = make_ray(point, normalize(to_light))
    hit = nearest_non_negative(shadow_ray)

    shadowed = 0
    if hit.object_id != NO_OBJECT and hit.t < distance:
        shadowed = 1
    return shadowed


@ti.func
def shade_hit(comps: Computation) -> vec3:
    """Shade a prepared hit, testing for shadow from its over_point."""
    shadowed = is_shadowed(comps.over_point)
    return lighting(
        get_material(comps.object_id),
        get_light(),
        comps.over_point,
        comps.eyev,
        comps.normalv,
        shadowed,
        get_sphere(comps.object_id),
    )


@ti.func
def color_at(ray: Ray) -> vec3:
    """Color seen along a ray: the shaded nearest hit, or the background."""
    color = BACKGROUND_COLOR
    hit = nearest_hit(ray)
    if hit.object_id != NO_OBJECT:
        color = shade_hit(prepare_computations(hit, ray))
    return color
