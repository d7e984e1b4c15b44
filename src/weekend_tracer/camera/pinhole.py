"""Pinhole camera model for perspective ray generation.

The camera maps normalized viewport coordinates (u, v) to world-space rays.
It supports:
- Vertical field of view and arbitrary aspect ratios
- Look-at positioning (lookfrom, lookat, vup)

The defaults describe the fixed camera at the world origin looking down the
-Z axis with +Y up. The viewport sits at focal length 1 in front of the
camera. There is no lens, so every ray starts exactly at the camera origin.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from weekend_tracer.camera.pinhole import PinholeCamera, setup_camera, get_ray
    >>>
    >>> setup_camera(PinholeCamera(vfov=90.0, aspect_ratio=16.0 / 9.0))
    >>>
    >>> @ti.kernel
    ... def render():
    ...     ray = get_ray(0.5, 0.5)  # Ray through viewport center
"""

import math
from dataclasses import dataclass

import numpy as np
import taichi as ti
import taichi.math as tm

from weekend_tracer.core.ray import Ray, make_ray

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Distance from the camera origin to the viewport plane
FOCAL_LENGTH = 1.0

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class PinholeCamera:
    """Configuration for a pinhole (perspective) camera.

    Attributes:
        vfov: Vertical field of view in degrees, in (0, 180).
        aspect_ratio: Width divided by height of the output image.
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
        vup: Up direction vector for camera orientation.
    """

    vfov: float = 90.0
    aspect_ratio: float = 16.0 / 9.0
    lookfrom: tuple[float, float, float] = (0.0, 0.0, 0.0)
    lookat: tuple[float, float, float] = (0.0, 0.0, -1.0)
    vup: tuple[float, float, float] = (0.0, 1.0, 0.0)


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_origin = ti.Vector.field(3, dtype=ti.f32, shape=())
_viewport_horizontal = ti.Vector.field(3, dtype=ti.f32, shape=())  # Full width
_viewport_vertical = ti.Vector.field(3, dtype=ti.f32, shape=())  # Full height
_lower_left_corner = ti.Vector.field(3, dtype=ti.f32, shape=())


# =============================================================================
# Camera Setup (Python-side, called once per render)
# =============================================================================


def setup_camera(camera: PinholeCamera) -> None:
    """Derive the viewport geometry from a camera configuration.

    viewport height = 2 * tan(vfov / 2), width = aspect_ratio * height.
    The basis is w = unit(lookfrom - lookat), u = unit(vup x w),
    v = w x u, and the lower-left corner is
    origin - horizontal / 2 - vertical / 2 - focal_length * w.

    Args:
        camera: Camera configuration.

    Raises:
        ValueError: If the field of view or aspect ratio is out of range, or
            if lookfrom equals lookat or vup is parallel to the view
            direction.
    """
    if not 0.0 < camera.vfov < 180.0:
        raise ValueError(f"Vertical field of view must be in (0, 180) degrees, got {camera.vfov}")
    if not camera.aspect_ratio > 0.0:
        raise ValueError(f"Aspect ratio must be positive, got {camera.aspect_ratio}")

    theta = math.radians(camera.vfov)
    viewport_height = 2.0 * math.tan(theta / 2.0)
    viewport_width = camera.aspect_ratio * viewport_height

    # Build the orthonormal basis in double precision before storing as f32
    lookfrom = np.array(camera.lookfrom, dtype=np.float64)
    lookat = np.array(camera.lookat, dtype=np.float64)
    vup = np.array(camera.vup, dtype=np.float64)

    w = lookfrom - lookat
    w_norm = np.linalg.norm(w)
    if w_norm == 0.0:
        raise ValueError("lookfrom and lookat must be different points")
    w = w / w_norm

    u = np.cross(vup, w)
    u_norm = np.linalg.norm(u)
    if u_norm < 1e-12:
        raise ValueError("vup must not be parallel to the view direction")
    u = u / u_norm

    v = np.cross(w, u)

    horizontal = viewport_width * u
    vertical = viewport_height * v
    lower_left = lookfrom - horizontal / 2.0 - vertical / 2.0 - FOCAL_LENGTH * w

    _camera_origin[None] = lookfrom.tolist()
    _viewport_horizontal[None] = horizontal.tolist()
    _viewport_vertical[None] = vertical.tolist()
    _lower_left_corner[None] = lower_left.tolist()


# =============================================================================
# Ray Generation
# =============================================================================


@ti.func
def get_ray(u: ti.f32, v: ti.f32) -> Ray:
    """Generate a ray through normalized viewport coordinates (u, v).

    - u = 0: left edge, u = 1: right edge
    - v = 0: bottom edge, v = 1: top edge

    Values outside [0, 1] are not clamped; they extrapolate past the
    viewport edge.

    Args:
        u: Horizontal viewport coordinate.
        v: Vertical viewport coordinate.

    Returns:
        A Ray from the camera origin toward the viewport point. The direction
        is not normalized.
    """
    origin = _camera_origin[None]
    point_on_viewport = (
        _lower_left_corner[None] + u * _viewport_horizontal[None] + v * _viewport_vertical[None]
    )
    return make_ray(origin, point_on_viewport - origin)


# =============================================================================
# Utility Functions
# =============================================================================


def get_camera_info() -> dict[str, tuple[float, float, float]]:
    """Get current camera state for debugging.

    Returns:
        Dictionary with origin, horizontal, vertical and lower_left.
    """

    def _as_tuple(field: "ti.MatrixField") -> tuple[float, float, float]:
        value = field[None]
        return (float(value[0]), float(value[1]), float(value[2]))

    return {
        "origin": _as_tuple(_camera_origin),
        "horizontal": _as_tuple(_viewport_horizontal),
        "vertical": _as_tuple(_viewport_vertical),
        "lower_left": _as_tuple(_lower_left_corner),
    }
