"""Scene storage and closest-hit intersection.

The scene is the aggregate surface: it holds every sphere in Taichi fields
and answers the same ``(ray, t_min, t_max) -> HitRecord`` query as a single
sphere, returning the nearest hit across all members.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from weekend_tracer.scene.intersection import (
    ...     add_sphere, clear_scene, intersect_scene, vec3
    ... )
    >>> clear_scene()
    >>> add_sphere(vec3(0, 0, -1), 0.5)
    >>> add_sphere(vec3(0, -100.5, -1), 100.0)
    >>> # Use intersect_scene within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from weekend_tracer.core.ray import Ray
from weekend_tracer.geometry.sphere import HitRecord, Sphere, hit_sphere, make_miss_record

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Maximum number of spheres supported in the scene
MAX_SPHERES = 1024

# Sphere storage: Structure of Arrays layout
sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Remove all spheres from the scene.

    Resets the sphere count to zero. The field data is left in place and
    overwritten by later additions.
    """
    num_spheres[None] = 0


def add_sphere(center, radius: float) -> int:
    """Add a sphere to the scene.

    Args:
        center: The center point of the sphere (vec3 or 3-sequence).
        radius: The radius of the sphere.

    Returns:
        The index of the added sphere.

    Raises:
        ValueError: If the radius is not positive.
        RuntimeError: If the maximum number of spheres is exceeded.
    """
    if not radius > 0.0:
        raise ValueError(f"Sphere radius must be positive, got {radius}")
    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    sphere_centers[idx] = center
    sphere_radii[idx] = radius
    num_spheres[None] = idx + 1
    return idx


def get_sphere_count() -> int:
    """Get the number of spheres in the scene."""
    return int(num_spheres[None])


@ti.func
def get_sphere(index: ti.i32) -> Sphere:
    """Load one stored sphere as a Sphere struct."""
    return Sphere(center=sphere_centers[index], radius=sphere_radii[index])


@ti.func
def intersect_scene(ray: Ray, t_min: ti.f32, t_max: ti.f32) -> HitRecord:
    """Find the closest hit between the ray and any sphere in the scene.

    Each sphere is queried with t_max shrunk to the closest hit so far, so a
    farther sphere tested later can never replace a nearer one.

    Args:
        ray: The ray to test.
        t_min: Minimum t value to consider a valid hit.
        t_max: Maximum t value to consider a valid hit.

    Returns:
        The closest HitRecord, or a miss record if nothing was hit
        (always the case for an empty scene).
    """
    closest_t = t_max
    result = make_miss_record()

    # while keeps this serial even when inlined at kernel top level
    i = 0
    while i < num_spheres[None]:
        rec = hit_sphere(ray, get_sphere(i), t_min, closest_t)
        if rec.hit == 1:
            closest_t = rec.t
            result = rec
        i += 1

    return result
