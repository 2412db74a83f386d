"""Geometry module for the sphere primitive and its intersection engine.

Components:
    sphere: Host-side Sphere description, kernel-side SphereData,
        ray-sphere root finding, nearest-positive-hit selection and
        surface normals

Every ray is tested against every object; there is no acceleration
structure. Intersection routines are Taichi functions (@ti.func).
"""

from .sphere import (
    NO_OBJECT,
    Intersection,
    Intersections,
    Sphere,
    SphereData,
    hit_sphere,
    intersect_sphere,
    make_sphere_data,
    normal_at,
)

__all__ = [
    "Sphere",
    "SphereData",
    "Intersection",
    "Intersections",
    "NO_OBJECT",
    "intersect_sphere",
    "hit_sphere",
    "make_sphere_data",
    "normal_at",
]
