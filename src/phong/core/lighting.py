"""Point lights and the Phong lighting model.

The lighting model sums three independent terms per channel:

    ambient  = effective_color * ambient
    diffuse  = effective_color * diffuse * (lightv . normalv)
    specular = light_color * intensity * specular * (reflectv . eyev)^shininess

where ``effective_color`` is the material (or stripe pattern) color tinted by
the light color and scaled by the light intensity. A point in shadow keeps
only the ambient term. The result is left unclamped; quantization happens
when the pixel is written.

Only the first light of a world drives shading.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.phong.core.lighting import PointLight
    >>> light = PointLight(position=(-10.0, 10.0, -10.0))
    >>> # Use lighting(...) within a Taichi kernel
"""

from dataclasses import dataclass
from typing import Any

import taichi as ti
import taichi.math as tm

from src.phong.core.color import WHITE, Color, as_color
from src.phong.core.ray import normalize, reflect, transform_point
from src.phong.core.transforms import as_vec3
from src.phong.geometry.sphere import SphereData
from src.phong.materials.material import MaterialData
from src.phong.materials.pattern import stripe_at

vec3 = tm.vec3


@dataclass(frozen=True)
class PointLight:
    """A point light source.

    Attributes:
        position: World-space position.
        color: Light color.
        intensity: Positive scalar multiplier applied to the light color.
    """

    position: tuple[float, float, float]
    color: Color = WHITE
    intensity: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", as_vec3(self.position))
        object.__setattr__(self, "color", as_color(self.color))
        if self.intensity <= 0.0:
            raise ValueError(f"Light intensity must be positive, got {self.intensity}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "position": list(self.position),
            "color": list(self.color),
            "intensity": self.intensity,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PointLight":
        if "position" not in data:
            raise ValueError("Point light requires a position")
        return cls(
            position=tuple(data["position"]),
            color=tuple(data.get("color", WHITE)),
            intensity=float(data.get("intensity", 1.0)),
        )


@ti.dataclass
class PointLightData:
    """Kernel-side point light.

    Attributes:
        position: World-space position.
        color: Light color.
        intensity: Scalar multiplier.
    """

    position: vec3
    color: vec3
    intensity: ti.f32


@ti.func
def stripe_at_object(material: MaterialData, sphere: SphereData, world_point: vec3) -> vec3:
    """Evaluate a material's stripe pattern at a world-space point.

    The point is first mapped into the object's space so the stripes move,
    rotate and scale with the object.
    """
    object_point = transform_point(sphere.inverse, world_point)
    return stripe_at(material.pattern_a, material.pattern_b, object_point)


@ti.func
def lighting(
    material: MaterialData,
    light: PointLightData,
    point: vec3,
    eyev: vec3,
    normalv: vec3,
    in_shadow: ti.i32,
    sphere: SphereData,
) -> vec3:
    """Evaluate the Phong model at a surface point.

    Args:
        material: Material of the surface.
        light: The light source.
        point: World-space surface point.
        eyev: Unit vector from the point toward the eye.
        normalv: Unit surface normal (already facing the eye).
        in_shadow: 1 if the point is occluded from the light.
        sphere: The object, used to evaluate the pattern in object space.

    Returns:
        The unclamped RGB color.
    """
    base_color = material.color
    if material.has_pattern == 1:
        base_color = stripe_at_object(material, sphere, point)
    effective_color = base_color * light.color * light.intensity

    ambient = effective_color * material.ambient
    diffuse = vec3(0.0, 0.0, 0.0)
    specular = vec3(0.0, 0.0, 0.0)

    if in_shadow == 0:
        lightv = normalize(light.position - point)
        light_dot_normal = tm.dot(lightv, normalv)
        # Light behind the surface contributes nothing but ambient
        if light_dot_normal >= 0.0:
            diffuse = effective_color * material.diffuse * light_dot_normal
            reflectv = reflect(-lightv, normalv)
            reflect_dot_eye = tm.dot(reflectv, eyev)
            if reflect_dot_eye > 0.0:
                factor = reflect_dot_eye**material.shininess
                specular = light.color * light.intensity * material.specular * factor

    return ambient + diffuse + specular
