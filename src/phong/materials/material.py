"""Phong material parameters.

A ``Material`` is the host-side description attached to each sphere; it is
owned by value, so two spheres never share a material instance. When a world
is loaded for rendering the material is flattened into per-sphere Taichi
fields and read back inside kernels as a ``MaterialData`` struct.

Example:
    >>> from src.phong.materials import Material, StripePattern
    >>> plain = Material(color=(0.8, 0.4, 0.6), ambient=0.5, specular=0.4)
    >>> striped = Material(pattern=StripePattern((1, 1, 1), (0, 0, 0)))
"""

from dataclasses import dataclass
from typing import Any

import taichi as ti
import taichi.math as tm

from src.phong.core.color import WHITE, Color, as_color
from src.phong.materials.pattern import StripePattern

vec3 = tm.vec3

DEFAULT_AMBIENT = 0.1
DEFAULT_DIFFUSE = 0.9
DEFAULT_SPECULAR = 0.9
DEFAULT_SHININESS = 200.0


@dataclass(frozen=True)
class Material:
    """Per-object Phong shading parameters.

    Attributes:
        color: Base RGB color, used when no pattern is set.
        pattern: Optional stripe pattern overriding ``color``.
        ambient: Ambient reflection coefficient (roughly [0, 1]).
        diffuse: Diffuse reflection coefficient (roughly [0, 1]).
        specular: Specular reflection coefficient (roughly [0, 1]).
        shininess: Specular exponent; larger values give tighter highlights.
    """

    color: Color = WHITE
    pattern: StripePattern | None = None
    ambient: float = DEFAULT_AMBIENT
    diffuse: float = DEFAULT_DIFFUSE
    specular: float = DEFAULT_SPECULAR
    shininess: float = DEFAULT_SHININESS

    def __post_init__(self) -> None:
        object.__setattr__(self, "color", as_color(self.color))
        # Coefficients are nominally in [0, 1] but not clamped
        for name in ("ambient", "diffuse", "specular"):
            object.__setattr__(self, name, float(getattr(self, name)))
        if self.shininess <= 0.0:
            raise ValueError(f"Shininess must be positive, got {self.shininess}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "color": list(self.color),
            "pattern": self.pattern.to_dict() if self.pattern is not None else None,
            "ambient": self.ambient,
            "diffuse": self.diffuse,
            "specular": self.specular,
            "shininess": self.shininess,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Material":
        """Build a material from a dictionary, filling in defaults.

        Raises:
            ValueError: If any parameter is invalid.
        """
        pattern_data = data.get("pattern")
        return cls(
            color=tuple(data.get("color", WHITE)),
            pattern=StripePattern.from_dict(pattern_data) if pattern_data else None,
            ambient=float(data.get("ambient", DEFAULT_AMBIENT)),
            diffuse=float(data.get("diffuse", DEFAULT_DIFFUSE)),
            specular=float(data.get("specular", DEFAULT_SPECULAR)),
            shininess=float(data.get("shininess", DEFAULT_SHININESS)),
        )


@ti.dataclass
class MaterialData:
    """Kernel-side mirror of a Material.

    Attributes:
        color: Base RGB color.
        has_pattern: 1 if the stripe pattern colors are used, 0 otherwise.
        pattern_a: Even-band stripe color (valid if has_pattern == 1).
        pattern_b: Odd-band stripe color (valid if has_pattern == 1).
        ambient: Ambient coefficient.
        diffuse: Diffuse coefficient.
        specular: Specular coefficient.
        shininess: Specular exponent.
    """

    color: vec3
    has_pattern: ti.i32
    pattern_a: vec3
    pattern_b: vec3
    ambient: ti.f32
    diffuse: ti.f32
    specular: ti.f32
    shininess: ti.f32
