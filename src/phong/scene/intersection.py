"""Scene storage and world-level intersection queries.

This module mirrors a host-side ``World`` into Taichi fields so kernels can
test rays against every object. Objects are addressed by their index in the
world's object tuple (arena + index); an ``Intersection`` stores that index
rather than a reference, so hit records stay valid however the host-side
collection is rebuilt between frames.

Each sphere owns its material by value, so material parameters are stored
per sphere alongside the geometry.

Queries:
    - ``intersect_world`` (Python scope): every intersection of every object,
      sorted ascending by ``t``, negative roots included. The previously
      loaded world is restored afterwards.
    - ``nearest_hit`` (Taichi func): smallest ``t > 0``, used for visibility.
    - ``nearest_non_negative`` (Taichi func): smallest ``t >= 0``, used for
      shadow rays.

There is no acceleration structure: every ray is tested against every object.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.phong.scene.intersection import intersect_world
    >>> from src.phong.scene.world import default_world
    >>> xs = intersect_world(default_world(), (0, 0, -5), (0, 0, 1))
    >>> [x.t for x in xs]
    [4.0, 6.0]
"""

from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from src.phong.core.lighting import PointLightData
from src.phong.core.ray import Ray
from src.phong.geometry.sphere import (
    NO_OBJECT,
    Intersection,
    SphereData,
    intersect_sphere,
)
from src.phong.materials.material import MaterialData
from src.phong.scene.world import World

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Maximum number of primitives and lights supported in the scene
MAX_SPHERES = 1024
MAX_LIGHTS = 16

# Upper bound on the ray parameter for nearest-hit searches
T_MAX = 1e10

# Sphere storage: Structure of Arrays layout
sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_inverses = ti.Matrix.field(4, 4, dtype=ti.f32, shape=MAX_SPHERES)
sphere_normal_matrices = ti.Matrix.field(4, 4, dtype=ti.f32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())

# Per-sphere material storage
material_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
material_has_pattern = ti.field(dtype=ti.i32, shape=MAX_SPHERES)
material_pattern_a = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
material_pattern_b = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
material_ambient = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
material_diffuse = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
material_specular = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
material_shininess = ti.field(dtype=ti.f32, shape=MAX_SPHERES)

# Light storage
light_positions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
light_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
light_intensities = ti.field(dtype=ti.f32, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())

# Scratch buffers for host-side intersection listing
_xs_t = ti.field(dtype=ti.f32, shape=2 * MAX_SPHERES)
_xs_object = ti.field(dtype=ti.i32, shape=2 * MAX_SPHERES)
_xs_count = ti.field(dtype=ti.i32, shape=())

# Host-side record of the world currently in the scene storage
_loaded_world: World | None = None


@dataclass(frozen=True)
class IntersectionRecord:
    """Host-side intersection returned by ``intersect_world``.

    Attributes:
        t: Ray parameter of the intersection.
        object_id: Index of the object in ``World.objects``.
    """

    t: float
    object_id: int


# =============================================================================
# Loading
# =============================================================================


def clear_world() -> None:
    """Remove all spheres and lights from the scene storage.

    The field data itself is not cleared; it is overwritten when a new world
    is loaded.
    """
    global _loaded_world
    _loaded_world = None
    num_spheres[None] = 0
    num_lights[None] = 0


def load_world(world: World) -> None:
    """Upload a world into the scene storage, replacing what was there.

    Args:
        world: The world to load. Object i becomes object_id i.

    Raises:
        RuntimeError: If the world exceeds MAX_SPHERES or MAX_LIGHTS.
    """
    global _loaded_world

    if len(world.objects) > MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    if len(world.lights) > MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")

    clear_world()
    for idx, sphere in enumerate(world.objects):
        inverse = sphere.inverse_transform
        sphere_centers[idx] = sphere.center
        sphere_radii[idx] = sphere.radius
        sphere_inverses[idx] = ti.Matrix(inverse.tolist())
        sphere_normal_matrices[idx] = ti.Matrix(inverse.T.tolist())

        material = sphere.material
        material_colors[idx] = material.color
        if material.pattern is not None:
            material_has_pattern[idx] = 1
            material_pattern_a[idx] = material.pattern.a
            material_pattern_b[idx] = material.pattern.b
        else:
            material_has_pattern[idx] = 0
            material_pattern_a[idx] = material.color
            material_pattern_b[idx] = material.color
        material_ambient[idx] = material.ambient
        material_diffuse[idx] = material.diffuse
        material_specular[idx] = material.specular
        material_shininess[idx] = material.shininess
    num_spheres[None] = len(world.objects)

    for idx, light in enumerate(world.lights):
        light_positions[idx] = light.position
        light_colors[idx] = light.color
        light_intensities[idx] = light.intensity
    num_lights[None] = len(world.lights)
    _loaded_world = world


def get_sphere_count() -> int:
    """Get the number of spheres in the scene storage."""
    return int(num_spheres[None])


def get_light_count() -> int:
    """Get the number of lights in the scene storage."""
    return int(num_lights[None])


# =============================================================================
# Accessors (Taichi scope)
# =============================================================================


@ti.func
def get_sphere(object_id: ti.i32) -> SphereData:
    """Fetch the geometry of a stored sphere."""
    return SphereData(
        center=sphere_centers[object_id],
        radius=sphere_radii[object_id],
        inverse=sphere_inverses[object_id],
        normal_matrix=sphere_normal_matrices[object_id],
    )


@ti.func
def get_material(object_id: ti.i32) -> MaterialData:
    """Fetch the material of a stored sphere."""
    return MaterialData(
        color=material_colors[object_id],
        has_pattern=material_has_pattern[object_id],
        pattern_a=material_pattern_a[object_id],
        pattern_b=material_pattern_b[object_id],
        ambient=material_ambient[object_id],
        diffuse=material_diffuse[object_id],
        specular=material_specular[object_id],
        shininess=material_shininess[object_id],
    )


@ti.func
def get_light() -> PointLightData:
    """Fetch the light that drives shading (the first stored light)."""
    return PointLightData(
        position=light_positions[0],
        color=light_colors[0],
        intensity=light_intensities[0],
    )


# =============================================================================
# Nearest-intersection queries (Taichi scope)
# =============================================================================


@ti.func
def _accepts(t: ti.f32, include_zero: ti.template()) -> ti.i32:
    ok = t > 0.0
    if ti.static(include_zero):
        ok = t >= 0.0
    return ok


@ti.func
def _nearest(ray: Ray, include_zero: ti.template()) -> Intersection:
    """Scan every object and keep the smallest acceptable root.

    Ties keep the earlier object, and t0 before t1.
    """
    closest_t = T_MAX
    result = Intersection(t=0.0, object_id=NO_OBJECT)

    n_spheres = num_spheres[None]
    for i in range(n_spheres):
        xs = intersect_sphere(get_sphere(i), i, ray)
        if xs.count > 0:
            if _accepts(xs.t0, include_zero) and xs.t0 < closest_t:
                closest_t = xs.t0
                result = Intersection(t=xs.t0, object_id=i)
            if _accepts(xs.t1, include_zero) and xs.t1 < closest_t:
                closest_t = xs.t1
                result = Intersection(t=xs.t1, object_id=i)

    return result


@ti.func
def nearest_hit(ray: Ray) -> Intersection:
    """Nearest intersection with ``t > 0`` across the scene.

    Returns:
        The hit, or an Intersection with object_id == -1 on a miss.
    """
    return _nearest(ray, False)


@ti.func
def nearest_non_negative(ray: Ray) -> Intersection:
    """Nearest intersection with ``t >= 0`` across the scene.

    Returns:
        The intersection, or one with object_id == -1 if there is none.
    """
    return _nearest(ray, True)


# =============================================================================
# Full intersection listing (Python scope)
# =============================================================================


@ti.kernel
def _collect_intersections(origin: vec3, direction: vec3):
    ray = Ray(origin=origin, direction=direction)
    _xs_count[None] = 0
    ti.loop_config(serialize=True)
    for i in range(num_spheres[None]):
        xs = intersect_sphere(get_sphere(i), i, ray)
        if xs.count > 0:
            n = _xs_count[None]
            _xs_t[n] = xs.t0
            _xs_object[n] = i
            _xs_t[n + 1] = xs.t1
            _xs_object[n + 1] = i
            _xs_count[None] = n + 2


def intersect_world(
    world: World,
    ray_origin: tuple[float, float, float],
    ray_direction: tuple[float, float, float],
) -> list[IntersectionRecord]:
    """Intersect a ray with every object in a world.

    Concatenates the two roots of every object the ray crosses and sorts
    them ascending by ``t``. Negative roots are kept. Objects the ray misses
    contribute nothing.

    The world is loaded into the scene storage for the query; whatever world
    was loaded before is restored afterwards.

    Args:
        world: The world to intersect.
        ray_origin: Ray origin.
        ray_direction: Ray direction (non-zero).

    Returns:
        The intersections sorted by ``t``; equal ``t`` keep object order.
    """
    previous = _loaded_world
    load_world(world)
    try:
        _collect_intersections(vec3(*ray_origin), vec3(*ray_direction))
        count = int(_xs_count[None])
        records = [
            IntersectionRecord(t=float(_xs_t[k]), object_id=int(_xs_object[k]))
            for k in range(count)
        ]
    finally:
        if previous is None:
            clear_world()
        elif previous is not world:
            load_world(previous)
    return sorted(records, key=lambda record: record.t)
