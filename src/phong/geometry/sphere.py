"""Sphere primitive with transformed ray-sphere intersection.

A sphere is described by a local center and radius plus a single composed
object-to-world affine transform. Rays are intersected in object space by
transforming them with the inverse transform; normals are mapped back to
world space with the inverse-transpose and renormalized, so non-uniform
scale does not distort them.

The intersection engine solves

    |o + t*d - center|^2 = radius^2

for the object-space ray (o, d), giving

    a = d.d
    b = 2 * d.(o - center)
    c = (o - center).(o - center) - radius^2
    discriminant = b^2 - 4ac

A negative discriminant is a miss. Otherwise both roots are reported in
ascending order, including the two equal roots of a tangent ray.

Preconditions (not guarded): the transform is invertible and ray directions
are non-zero. Violating either yields NaN values rather than an error.

Example:
    >>> import numpy as np
    >>> from src.phong.geometry.sphere import Sphere
    >>> from src.phong.core.transforms import scaling
    >>> sphere = Sphere(transform=scaling(2.0, 2.0, 2.0))
    >>> data = sphere.inverse_transform  # uploaded to Taichi by load_world
"""

from dataclasses import dataclass, field
from functools import cached_property
from typing import Any

import numpy as np
import taichi as ti
import taichi.math as tm

from src.phong.core.ray import Ray, mat4, normalize, transform_point, transform_ray, transform_vector
from src.phong.core.transforms import Matrix4, as_matrix, as_vec3, identity, invert_transform
from src.phong.materials.material import Material

vec3 = tm.vec3

# Object index marking "no intersection"
NO_OBJECT = -1


@dataclass(frozen=True, eq=False)
class Sphere:
    """Host-side description of a renderable sphere.

    Attributes:
        center: Local center of the sphere in object space.
        radius: Local radius (must be positive).
        transform: Object-to-world 4x4 affine transform (must be invertible).
        material: The sphere's material, owned by value.
    """

    center: tuple[float, float, float] = (0.0, 0.0, 0.0)
    radius: float = 1.0
    transform: Matrix4 = field(default_factory=identity)
    material: Material = field(default_factory=Material)

    def __post_init__(self) -> None:
        if self.radius <= 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")
        object.__setattr__(self, "center", as_vec3(self.center))
        object.__setattr__(self, "transform", as_matrix(self.transform))

    @cached_property
    def inverse_transform(self) -> Matrix4:
        """World-to-object transform."""
        return invert_transform(self.transform)

    def to_dict(self) -> dict[str, Any]:
        return {
            "center": list(self.center),
            "radius": self.radius,
            "transform": self.transform.tolist(),
            "material": self.material.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Sphere":
        """Build a sphere from a dictionary.

        Raises:
            ValueError: If the radius, transform or material is invalid.
        """
        transform = data.get("transform")
        return cls(
            center=tuple(data.get("center", (0.0, 0.0, 0.0))),
            radius=float(data.get("radius", 1.0)),
            transform=np.asarray(transform) if transform is not None else identity(),
            material=Material.from_dict(data.get("material", {})),
        )


@ti.dataclass
class SphereData:
    """Kernel-side sphere geometry.

    Attributes:
        center: Local center in object space.
        radius: Local radius.
        inverse: World-to-object transform.
        normal_matrix: Transpose of ``inverse``, maps object normals to world.
    """

    center: vec3
    radius: ti.f32
    inverse: mat4
    normal_matrix: mat4


@ti.dataclass
class Intersection:
    """A parametric hit record.

    Attributes:
        t: Ray parameter of the hit.
        object_id: Index of the hit object in the scene arena, or -1 for
            "no hit".
    """

    t: ti.f32
    object_id: ti.i32


@ti.dataclass
class Intersections:
    """Result of intersecting a ray with one sphere.

    Attributes:
        count: 0 on a miss, 2 otherwise (tangent rays report two equal roots).
        t0: The smaller root. Only valid if count == 2.
        t1: The larger root. Only valid if count == 2.
        object_id: Index of the sphere that was intersected.
    """

    count: ti.i32
    t0: ti.f32
    t1: ti.f32
    object_id: ti.i32


@ti.func
def make_sphere_data(center: vec3, radius: ti.f32, inverse: mat4) -> SphereData:
    """Build sphere data from a center, radius and world-to-object matrix."""
    return SphereData(center=center, radius=radius, inverse=inverse, normal_matrix=inverse.transpose())


@ti.func
def intersect_sphere(sphere: SphereData, object_id: ti.i32, ray: Ray) -> Intersections:
    """Intersect a world-space ray with a sphere.

    Args:
        sphere: The sphere to test.
        object_id: Arena index recorded in the result.
        ray: The world-space ray.

    Returns:
        Both roots of the intersection quadratic (t0 <= t1), or count == 0.
    """
    local = transform_ray(sphere.inverse, ray)
    sphere_to_ray = local.origin - sphere.center

    a = tm.dot(local.direction, local.direction)
    b = 2.0 * tm.dot(local.direction, sphere_to_ray)
    c = tm.dot(sphere_to_ray, sphere_to_ray) - sphere.radius * sphere.radius
    discriminant = b * b - 4.0 * a * c

    count = 0
    t0 = 0.0
    t1 = 0.0
    if discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)
        count = 2
        t0 = (-b - sqrt_d) / (2.0 * a)
        t1 = (-b + sqrt_d) / (2.0 * a)

    return Intersections(count=count, t0=t0, t1=t1, object_id=object_id)


@ti.func
def hit_sphere(sphere: SphereData, object_id: ti.i32, ray: Ray) -> Intersection:
    """Find the nearest intersection with ``t > 0``.

    Zero is excluded so a ray starting exactly on the surface does not hit
    that surface again.

    Returns:
        The nearest positive intersection, or one with object_id == -1.
    """
    xs = intersect_sphere(sphere, object_id, ray)
    result = Intersection(t=0.0, object_id=NO_OBJECT)
    if xs.count > 0:
        if xs.t0 > 0.0:
            result = Intersection(t=xs.t0, object_id=object_id)
        elif xs.t1 > 0.0:
            result = Intersection(t=xs.t1, object_id=object_id)
    return result


@ti.func
def normal_at(sphere: SphereData, world_point: vec3) -> vec3:
    """Compute the unit world-space surface normal at a point on the sphere.

    Args:
        sphere: The sphere.
        world_point: A world-space point on the surface.

    Returns:
        The outward unit normal.
    """
    object_point = transform_point(sphere.inverse, world_point)
    object_normal = object_point - sphere.center
    world_normal = transform_vector(sphere.normal_matrix, object_normal)
    return normalize(world_normal)
