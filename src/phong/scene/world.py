"""Host-side world description and builder.

A ``World`` is an immutable aggregate of spheres and point lights. It is
assembled with a ``WorldBuilder`` during scene construction and then handed,
read-only, to the renderer, which uploads it into Taichi fields with
``load_world``.

Object order matters only for breaking ties between intersections at equal
``t`` (the earlier object wins). Although a world may hold several lights,
only the first one drives shading.

Example:
    >>> from src.phong.scene.world import WorldBuilder
    >>> from src.phong.materials import Material
    >>> builder = WorldBuilder()
    >>> idx = builder.add_sphere(center=(0, 0, 0), radius=1.0,
    ...                          material=Material(color=(0.8, 0.4, 0.6)))
    >>> builder.add_light(position=(-10, 10, -10))
    0
    >>> world = builder.build()
"""

from dataclasses import dataclass, field
from typing import Any

import numpy.typing as npt

from src.phong.core.color import WHITE, Color
from src.phong.core.lighting import PointLight
from src.phong.core.transforms import identity
from src.phong.geometry.sphere import Sphere
from src.phong.materials.material import Material


@dataclass(frozen=True)
class World:
    """The scene aggregate: ordered spheres and point lights.

    Attributes:
        objects: Spheres in insertion order. An object's position in this
            tuple is its object_id during rendering.
        lights: Point lights. Only the first is used for shading.
    """

    objects: tuple[Sphere, ...] = ()
    lights: tuple[PointLight, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "objects", tuple(self.objects))
        object.__setattr__(self, "lights", tuple(self.lights))

    @property
    def light(self) -> PointLight:
        """The light that drives shading (the first one).

        Raises:
            ValueError: If the world has no lights.
        """
        if not self.lights:
            raise ValueError("World has no light source")
        return self.lights[0]

    def to_dict(self) -> dict[str, Any]:
        """Export the world to a JSON-compatible dictionary."""
        return {
            "objects": [sphere.to_dict() for sphere in self.objects],
            "lights": [light.to_dict() for light in self.lights],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "World":
        """Build a world from a dictionary with 'objects' and 'lights' keys.

        Raises:
            ValueError: If any object or light is invalid.
        """
        return cls(
            objects=tuple(Sphere.from_dict(obj) for obj in data.get("objects", [])),
            lights=tuple(PointLight.from_dict(light) for light in data.get("lights", [])),
        )


@dataclass
class WorldBuilder:
    """Accumulates spheres and lights, then produces an immutable World.

    Attributes:
        objects: Spheres added so far.
        lights: Lights added so far.
    """

    objects: list[Sphere] = field(default_factory=list)
    lights: list[PointLight] = field(default_factory=list)

    def add(self, sphere: Sphere) -> int:
        """Add a prebuilt sphere.

        Returns:
            The object index of the sphere.
        """
        self.objects.append(sphere)
        return len(self.objects) - 1

    def add_sphere(
        self,
        center: tuple[float, float, float] = (0.0, 0.0, 0.0),
        radius: float = 1.0,
        transform: npt.ArrayLike | None = None,
        material: Material | None = None,
    ) -> int:
        """Create and add a sphere.

        Args:
            center: Local center.
            radius: Local radius.
            transform: Object-to-world transform; identity if omitted.
            material: Material; the default material if omitted.

        Returns:
            The object index of the sphere.

        Raises:
            ValueError: If the radius is not positive or the transform is singular.
        """
        sphere = Sphere(
            center=center,
            radius=radius,
            transform=identity() if transform is None else transform,
            material=Material() if material is None else material,
        )
        return self.add(sphere)

    def add_light(
        self,
        position: tuple[float, float, float],
        color: Color = WHITE,
        intensity: float = 1.0,
    ) -> int:
        """Create and add a point light.

        Returns:
            The index of the light. Only index 0 drives shading.
        """
        self.lights.append(PointLight(position=position, color=color, intensity=intensity))
        return len(self.lights) - 1

    def build(self) -> World:
        """Freeze the accumulated objects and lights into a World."""
        return World(objects=tuple(self.objects), lights=tuple(self.lights))


def default_world() -> World:
    """The standard test world.

    One unit sphere at the origin with a pinkish material
    (color (0.8, 0.4, 0.6), ambient 0.5, diffuse 0.9, specular 0.4) and a
    white light at (-10, 10, -10).
    """
    builder = WorldBuilder()
    builder.add_sphere(
        material=Material(color=(0.8, 0.4, 0.6), ambient=0.5, diffuse=0.9, specular=0.4),
    )
    builder.add_light(position=(-10.0, 10.0, -10.0))
    return builder.build()
