"""Vector algebra and random vector sampling.

Vectors are ``taichi.math.vec3`` values. The native operators already cover
negation, addition, subtraction, component-wise multiplication and scalar
multiply/divide; this module adds the geometric operations the tracer needs
and the rejection samplers used for diffuse scattering.

A vec3 doubles as a point, a direction and an RGB color.

Division by a zero-length vector is not guarded: ``unit`` of a zero vector
yields NaNs, in line with IEEE-754.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from weekend_tracer.core.vector import reflect, unit, vec3
    >>> @ti.kernel
    ... def mirror() -> vec3:
    ...     return reflect(vec3(1.0, -1.0, 0.0), unit(vec3(0.0, 2.0, 0.0)))
    >>> mirror()  # [1.0, 1.0, 0.0]
"""

import taichi as ti
import taichi.math as tm

from weekend_tracer.core.sampler import random_float, random_range

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Components below this magnitude count as zero
NEAR_ZERO_EPSILON = 1e-8


# =============================================================================
# Geometric Operations
# =============================================================================


@ti.func
def length_squared(v: vec3) -> ti.f32:
    """Compute the squared length of a vector."""
    return v.x * v.x + v.y * v.y + v.z * v.z


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the Euclidean length of a vector."""
    return ti.sqrt(length_squared(v))


@ti.func
def unit(v: vec3) -> vec3:
    """Scale a vector to unit length.

    Args:
        v: The input vector. Must not be zero-length.

    Returns:
        v / length(v).
    """
    return v / length(v)


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product a . b."""
    return a.x * b.x + a.y * b.y + a.z * b.z


@ti.func
def cross(a: vec3, b: vec3) -> vec3:
    """Compute the cross product a x b."""
    return vec3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


@ti.func
def reflect(v: vec3, n: vec3) -> vec3:
    """Reflect a vector about a normal.

    Args:
        v: The incoming direction.
        n: The surface normal (unit length for a true mirror reflection).

    Returns:
        v - 2 * dot(v, n) * n.
    """
    return v - 2.0 * dot(v, n) * n


@ti.func
def refract(uv: vec3, n: vec3, eta_ratio: ti.f32) -> vec3:
    """Refract a direction through a surface using Snell's law.

    The outgoing direction is split into a component perpendicular to the
    normal and one parallel to it. There is no total-internal-reflection
    check; the caller decides whether refraction is possible.

    Args:
        uv: The incoming direction (unit length).
        n: The surface normal on the incoming side (unit length).
        eta_ratio: Ratio of refractive indices, incident over transmitted.

    Returns:
        The refracted direction.
    """
    cos_theta = tm.min(dot(-uv, n), 1.0)
    r_out_perp = eta_ratio * (uv + cos_theta * n)
    r_out_parallel = -ti.sqrt(ti.abs(1.0 - length_squared(r_out_perp))) * n
    return r_out_perp + r_out_parallel


@ti.func
def near_zero(v: vec3) -> ti.i32:
    """Check whether every component is within 1e-8 of zero.

    Used to catch degenerate scatter directions.

    Returns:
        1 if the vector is near zero, 0 otherwise.
    """
    s = NEAR_ZERO_EPSILON
    return ti.abs(v.x) < s and ti.abs(v.y) < s and ti.abs(v.z) < s


# =============================================================================
# Random Vectors
# =============================================================================


@ti.func
def random_vec3() -> vec3:
    """Random vector with each component uniform in [0, 1)."""
    return vec3(random_float(), random_float(), random_float())


@ti.func
def random_vec3_range(min_value: ti.f32, max_value: ti.f32) -> vec3:
    """Random vector with each component uniform in [min_value, max_value)."""
    return vec3(
        random_range(min_value, max_value),
        random_range(min_value, max_value),
        random_range(min_value, max_value),
    )


@ti.func
def random_in_unit_sphere() -> vec3:
    """Random point strictly inside the unit ball.

    Rejection sampling from the [-1, 1]^3 cube. About 52% of candidates are
    accepted, so the loop ends quickly, but it has no iteration cap: a capped
    loop could hand back a point outside the ball.

    Returns:
        A point p with length_squared(p) < 1.
    """
    p = random_vec3_range(-1.0, 1.0)
    while length_squared(p) >= 1.0:
        p = random_vec3_range(-1.0, 1.0)
    return p


@ti.func
def random_unit_vector() -> vec3:
    """Random direction uniformly distributed on the unit sphere.

    Normalizes a unit-ball sample, drawing again if the sample is too close
    to the origin to normalize.
    """
    p = random_in_unit_sphere()
    while near_zero(p):
        p = random_in_unit_sphere()
    return unit(p)


@ti.func
def random_in_unit_disk() -> vec3:
    """Random point strictly inside the unit disk in the z = 0 plane.

    Same rejection scheme as random_in_unit_sphere, in two dimensions
    (about 79% acceptance).

    Returns:
        A point (x, y, 0) with x^2 + y^2 < 1.
    """
    p = vec3(random_range(-1.0, 1.0), random_range(-1.0, 1.0), 0.0)
    while length_squared(p) >= 1.0:
        p = vec3(random_range(-1.0, 1.0), random_range(-1.0, 1.0), 0.0)
    return p
