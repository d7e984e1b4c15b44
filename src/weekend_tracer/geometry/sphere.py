"""Sphere primitive and ray-sphere intersection.

The intersection solves ``|origin + t * direction - center|^2 = radius^2``
with the half-b form of the quadratic formula and reports the nearest root
strictly inside the requested (t_min, t_max) interval.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from weekend_tracer.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, -1), radius=0.5)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from weekend_tracer.core.ray import Ray, ray_at

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
    """

    center: vec3
    radius: ti.f32


@ti.dataclass
class HitRecord:
    """Record of a ray-surface intersection.

    Attributes:
        hit: Whether the ray intersected the surface (1 if hit, 0 if miss).
        t: The ray parameter at the intersection. Only valid if hit == 1.
        point: The 3D point where the ray met the surface.
            Only valid if hit == 1.
        normal: The outward unit surface normal at the point. It is not
            flipped toward the ray, so a ray starting inside a sphere sees
            a normal pointing along its direction. Only valid if hit == 1.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3


@ti.func
def make_miss_record() -> HitRecord:
    """Create a HitRecord indicating no intersection."""
    return HitRecord(
        hit=0,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
    )


@ti.func
def hit_sphere(ray: Ray, sphere: Sphere, t_min: ti.f32, t_max: ti.f32) -> HitRecord:
    """Test for ray-sphere intersection.

    With oc = origin - center the quadratic coefficients are:
        a = dot(direction, direction)
        half_b = dot(oc, direction)
        c = dot(oc, oc) - radius^2

    and the discriminant is half_b^2 - a*c. The smaller root is tried
    first, then the larger one; the first that lies strictly inside
    (t_min, t_max) wins.

    Args:
        ray: The ray to test. Its direction need not be normalized.
        sphere: The sphere to test against.
        t_min: Hits at or below this parameter are ignored.
        t_max: Hits at or above this parameter are ignored.

    Returns:
        A HitRecord. Check the hit field to see whether it is valid.
    """
    oc = ray.origin - sphere.center
    a = tm.dot(ray.direction, ray.direction)
    half_b = tm.dot(oc, ray.direction)
    c = tm.dot(oc, oc) - sphere.radius * sphere.radius
    discriminant = half_b * half_b - a * c

    # Initialize result (Taichi requires outer-scope declaration)
    result = make_miss_record()

    if discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)

        root = (-half_b - sqrt_d) / a
        valid = root > t_min and root < t_max
        if not valid:
            root = (-half_b + sqrt_d) / a
            valid = root > t_min and root < t_max

        if valid:
            point = ray_at(ray, root)
            result = HitRecord(
                hit=1,
                t=root,
                point=point,
                normal=(point - sphere.center) / sphere.radius,
            )

    return result


@ti.func
def make_sphere(center: vec3, radius: ti.f32) -> Sphere:
    """Create a sphere from center and radius inside a Taichi kernel.

    Public helper for kernels that build spheres on the fly; the renderer
    itself reads spheres from the scene fields.
    """
    return Sphere(center=center, radius=radius)
