"""Scene module: world description, scene storage and the shading pipeline.

Components:
    world: Immutable World aggregate, WorldBuilder and the default test world
    intersection: Taichi-field scene storage and world intersection queries
    computation: Per-hit shading context (Computation)
    shading: Shadow tests, hit shading and per-ray color
    config: JSON scene files (SceneConfig, CameraConfig)
    demo: The five-sphere demo scene

Scene data is organized for kernel access:
    - Structure-of-Arrays layout for sphere geometry and materials
    - Objects addressed by index; -1 means "no object"
"""

from .computation import SHADOW_EPSILON, Computation, prepare_computations
from .config import CameraConfig, SceneConfig, load_scene_config, save_scene_config
from .demo import DemoSceneParams, create_demo_scene
from .intersection import (
    MAX_LIGHTS,
    MAX_SPHERES,
    IntersectionRecord,
    clear_world,
    get_light,
    get_light_count,
    get_material,
    get_sphere,
    get_sphere_count,
    intersect_world,
    load_world,
    nearest_hit,
    nearest_non_negative,
)
from .shading import color_at, is_shadowed, shade_hit
from .world import World, WorldBuilder, default_world

__all__ = [
    # World module
    "World",
    "WorldBuilder",
    "default_world",
    # Intersection module
    "IntersectionRecord",
    "load_world",
    "clear_world",
    "get_sphere_count",
    "get_light_count",
    "get_sphere",
    "get_material",
    "get_light",
    "intersect_world",
    "nearest_hit",
    "nearest_non_negative",
    "MAX_SPHERES",
    "MAX_LIGHTS",
    # Shading pipeline
    "Computation",
    "prepare_computations",
    "SHADOW_EPSILON",
    "is_shadowed",
    "shade_hit",
    "color_at",
    # Configuration
    "SceneConfig",
    "CameraConfig",
    "load_scene_config",
    "save_scene_config",
    "DemoSceneParams",
    "create_demo_scene",
]
