"""Scene configuration files.

A scene file is a JSON document with a ``world`` section (spheres and
lights, in the format of ``World.to_dict``) and a ``camera`` section::

    {
        "camera": {
            "hsize": 400,
            "vsize": 200,
            "field_of_view": 1.0472,
            "from_point": [0, 1.5, -5],
            "to_point": [0, 1, 0],
            "up": [0, 1, 0]
        },
        "world": {
            "objects": [{"center": [0, 0, 0], "radius": 1.0,
                         "material": {"color": [0.8, 0.4, 0.6]}}],
            "lights": [{"position": [-10, 10, -10]}]
        }
    }

Example:
    >>> from src.phong.scene.config import load_scene_config
    >>> config = load_scene_config("scene.json")
    >>> world, camera = config.build()
"""

from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from src.phong.camera.camera import Camera
from src.phong.core.transforms import as_vec3, view_transform
from src.phong.scene.world import World


@dataclass
class CameraConfig:
    """Camera placement for a scene file.

    Attributes:
        hsize: Image width in pixels.
        vsize: Image height in pixels.
        field_of_view: Field of view in radians.
        from_point: Eye position.
        to_point: Point the camera looks at.
        up: Approximate up direction.
    """

    hsize: int = 300
    vsize: int = 450
    field_of_view: float = math.pi / 3.0
    from_point: tuple[float, float, float] = (0.0, 1.5, -5.0)
    to_point: tuple[float, float, float] = (0.0, 1.0, 0.0)
    up: tuple[float, float, float] = (0.0, 1.0, 0.0)

    def build(self) -> Camera:
        """Create the camera.

        Raises:
            ValueError: If the image size, field of view or view is invalid.
        """
        return Camera(
            hsize=self.hsize,
            vsize=self.vsize,
            field_of_view=self.field_of_view,
            transform=view_transform(self.from_point, self.to_point, self.up),
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        for key in ("from_point", "to_point", "up"):
            data[key] = list(data[key])
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CameraConfig:
        defaults = cls()
        return cls(
            hsize=int(data.get("hsize", defaults.hsize)),
            vsize=int(data.get("vsize", defaults.vsize)),
            field_of_view=float(data.get("field_of_view", defaults.field_of_view)),
            from_point=as_vec3(data.get("from_point", defaults.from_point)),
            to_point=as_vec3(data.get("to_point", defaults.to_point)),
            up=as_vec3(data.get("up", defaults.up)),
        )


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        world: World description in the format of ``World.to_dict``.
        camera: Camera placement.
    """

    world: dict[str, Any] = field(default_factory=dict)
    camera: CameraConfig = field(default_factory=CameraConfig)

    def build(self) -> tuple[World, Camera]:
        """Create the world and camera.

        Raises:
            ValueError: If the configuration contains invalid data.
        """
        return World.from_dict(self.world), self.camera.build()

    def to_dict(self) -> dict[str, Any]:
        return {"world": self.world, "camera": self.camera.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SceneConfig:
        return cls(
            world=data.get("world", {}),
            camera=CameraConfig.from_dict(data.get("camera", {})),
        )

    @classmethod
    def from_scene(cls, world: World, camera: CameraConfig) -> SceneConfig:
        """Capture an existing world and camera placement."""
        return cls(world=world.to_dict(), camera=camera)


def load_scene_config(path: str | Path) -> SceneConfig:
    """Read a scene configuration from a JSON file.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not valid JSON.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Scene file {path} must contain a JSON object")
    return SceneConfig.from_dict(data)


def save_scene_config(config: SceneConfig, path: str | Path) -> None:
    """Write a scene configuration to a JSON file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2)
