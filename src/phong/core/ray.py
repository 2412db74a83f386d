"""Ray data structure, vector and affine utilities for Taichi kernels.

This module provides the Ray dataclass and the small set of vector and
4x4 affine helpers the Phong pipeline needs inside kernels. Host-side matrix
construction lives in ``src.phong.core.transforms``.

Points and vectors are both ``vec3``; the distinction is made by the helper
used to transform them (``transform_point`` applies translation,
``transform_vector`` does not).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> origin = ti.math.vec3(0.0, 0.0, -5.0)
    >>> direction = ti.math.vec3(0.0, 0.0, 1.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> point = ray_at(ray, 4.0)  # (0, 0, -1)
"""

import taichi as ti
import taichi.math as tm

# Type aliases using Taichi's math module
vec3 = tm.vec3
vec4 = tm.vec4
mat4 = tm.mat4


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3). Not required to be
            unit length; intersection code treats ``dot(direction, direction)``
            as a general quadratic coefficient. Must not be zero-length.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction."""
    return Ray(origin=origin, direction=direction)


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the Euclidean length of a vector."""
    return tm.length(v)


@ti.func
def normalize(v: vec3) -> vec3:
    """Normalize a vector to unit length.

    The vector must not be zero-length.
    """
    return tm.normalize(v)


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product of two vectors."""
    return tm.dot(a, b)


@ti.func
def cross(a: vec3, b: vec3) -> vec3:
    """Compute the cross product of two vectors."""
    return tm.cross(a, b)


@ti.func
def reflect(incoming: vec3, normal: vec3) -> vec3:
    """Reflect a vector about a normal.

    Computes ``incoming - normal * 2 * dot(incoming, normal)``. The normal
    should be unit length for the result to preserve the input length.

    Args:
        incoming: The vector to reflect (pointing toward the surface).
        normal: The surface normal.

    Returns:
        The reflected vector.
    """
    return incoming - normal * 2.0 * tm.dot(incoming, normal)


# =============================================================================
# Affine Transform Helpers
# =============================================================================


@ti.func
def transform_point(m: mat4, p: vec3) -> vec3:
    """Apply a 4x4 affine matrix to a point (w = 1)."""
    r = m @ vec4(p.x, p.y, p.z, 1.0)
    return vec3(r[0], r[1], r[2])


@ti.func
def transform_vector(m: mat4, v: vec3) -> vec3:
    """Apply a 4x4 affine matrix to a direction (w = 0, translation ignored)."""
    r = m @ vec4(v.x, v.y, v.z, 0.0)
    return vec3(r[0], r[1], r[2])


@ti.func
def transform_ray(m: mat4, ray: Ray) -> Ray:
    """Transform a ray by a 4x4 affine matrix.

    The direction is transformed without renormalization, so the ray
    parameter ``t`` keeps its meaning across the transform.

    Args:
        m: The affine matrix (typically an object's world-to-object inverse).
        ray: The ray to transform.

    Returns:
        The transformed ray.
    """
    return Ray(
        origin=transform_point(m, ray.origin),
        direction=transform_vector(m, ray.direction),
    )
