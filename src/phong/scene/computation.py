"""Shading context prepared from a hit.

``prepare_computations`` turns an intersection and the ray that produced it
into the per-hit quantities the lighting model needs: the hit point, the eye
vector, the eye-facing normal, whether the ray started inside the object,
and a point nudged off the surface for the shadow ray.

The object must already be loaded into the scene storage (see
``load_world``).
"""

import taichi as ti
import taichi.math as tm

from src.phong.core.ray import Ray, ray_at
from src.phong.geometry.sphere import Intersection, normal_at
from src.phong.scene.intersection import get_sphere

vec3 = tm.vec3

# Offset along the normal for shadow ray origins, prevents acne
SHADOW_EPSILON = 1e-4


@ti.dataclass
class Computation:
    """Precomputed geometry at a hit.

    Attributes:
        t: Ray parameter of the hit.
        object_id: Index of the hit object.
        point: World-space hit point.
        eyev: Vector toward the eye (the negated ray direction).
        normalv: Surface normal, flipped to face the eye.
        inside: 1 if the ray originated inside the object.
        over_point: ``point`` shifted along ``normalv`` by SHADOW_EPSILON.
    """

    t: ti.f32
    object_id: ti.i32
    point: vec3
    eyev: vec3
    normalv: vec3
    inside: ti.i32
    over_point: vec3


@ti.func
def prepare_computations(hit: Intersection, ray: Ray) -> Computation:
    """Build the shading context for a hit.

    Args:
        hit: A valid intersection (object_id >= 0).
        ray: The ray that produced it.

    Returns:
        The shading context.
    """
    sphere = get_sphere(hit.object_id)
    point = ray_at(ray, hit.t)
    eyev = -ray.direction
    normalv = normal_at(sphere, point)

    inside = 0
    if tm.dot(normalv, eyev) < 0.0:
        inside = 1
        normalv = -normalv

    return Computation(
        t=hit.t,
        object_id=hit.object_id,
        point=point,
        eyev=eyev,
        normalv=normalv,
        inside=inside,
        over_point=point + normalv * SHADOW_EPSILON,
    )
