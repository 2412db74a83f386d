"""Core rendering module.

This module contains the fundamental building blocks of the ray tracer:

Components:
    ray: Ray data structure, vector and affine helpers for kernels
    transforms: Host-side 4x4 transform construction (NumPy)
    color: Color constants and 8-bit quantization
    lighting: Point lights and the Phong lighting model
    integrator: Render target and the per-pixel render loop

The pipeline is local (non-recursive): one primary ray per pixel, the nearest
hit shaded with ambient, diffuse and specular terms, and a single shadow ray
toward the light.
"""

from .color import BLACK, WHITE, Color, quantize_channel, quantize_color, to_rgb8
from .ray import (
    Ray,
    cross,
    dot,
    length,
    make_ray,
    normalize,
    ray_at,
    reflect,
    transform_point,
    transform_ray,
    transform_vector,
    vec3,
)
from .transforms import (
    compose_transform,
    identity,
    invert_transform,
    is_invertible,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
    view_transform,
)

# Note: lighting and integrator are NOT imported here to avoid circular imports.
# Import directly from src.phong.core.lighting or src.phong.core.integrator.

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "length",
    "normalize",
    "dot",
    "cross",
    "reflect",
    "transform_point",
    "transform_vector",
    "transform_ray",
    "identity",
    "translation",
    "scaling",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "shearing",
    "compose_transform",
    "view_transform",
    "invert_transform",
    "is_invertible",
    "Color",
    "BLACK",
    "WHITE",
    "quantize_channel",
    "quantize_color",
    "to_rgb8",
]
