"""Materials module for Phong shading parameters.

Components:
    material: Host-side Material description and kernel-side MaterialData
    pattern: Two-color stripe pattern keyed by object-space Y

Materials are owned by value by each sphere. At load time they are
flattened into per-sphere Taichi fields (see ``src.phong.scene.intersection``)
so kernels can fetch them by object index.
"""

from .material import (
    DEFAULT_AMBIENT,
    DEFAULT_DIFFUSE,
    DEFAULT_SHININESS,
    DEFAULT_SPECULAR,
    Material,
    MaterialData,
)
from .pattern import StripePattern, stripe_at

__all__ = [
    "Material",
    "MaterialData",
    "StripePattern",
    "stripe_at",
    "DEFAULT_AMBIENT",
    "DEFAULT_DIFFUSE",
    "DEFAULT_SPECULAR",
    "DEFAULT_SHININESS",
]
