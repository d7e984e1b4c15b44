"""Diffuse path tracing integrator.

This module turns camera rays into colors. Its lighting model is:

- One implicit diffuse material: every hit scatters toward
  ``hit_point + normal + random_unit_vector()`` and keeps 50% of the light.
- One implicit light: a sky gradient from white at the horizon to light blue
  at the zenith, seen by every ray that escapes the scene.
- A bounce budget: paths still bouncing when it runs out contribute black.

The recursive definition
``color(ray, depth) = 0.5 * color(scattered, depth - 1)`` on a hit and
``sky(ray)`` on a miss is evaluated as a loop carrying the attenuation
factor, since Taichi functions cannot recurse.

Pixels are accumulated into a render-target buffer one scanline per kernel
launch. The pixel loop is serialized so the shared random stream is drawn in
a fixed order and a given seed always produces the same image.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from weekend_tracer.core.integrator import render_scanline, setup_render_target
    >>> from weekend_tracer.scene.presets import create_two_sphere_scene
    >>> from weekend_tracer.camera.pinhole import setup_camera
    >>>
    >>> scene, camera = create_two_sphere_scene()
    >>> setup_camera(camera)
    >>> setup_render_target(400, 225)
    >>> for j in reversed(range(225)):
    ...     render_scanline(j, samples_per_pixel=100, max_depth=50)
"""

import math

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from weekend_tracer.camera.pinhole import get_ray
from weekend_tracer.core.ray import Ray, make_ray
from weekend_tracer.core.sampler import random_float
from weekend_tracer.core.vector import random_unit_vector, unit
from weekend_tracer.scene.intersection import intersect_scene

# Type alias for 3D vectors
vec3 = tm.vec3

# =============================================================================
# Shading Constants
# =============================================================================

# Hits closer than this are ignored to avoid shadow acne
T_MIN = 0.001
T_MAX = math.inf

# Fraction of light kept at each diffuse bounce
ALBEDO = 0.5

# Sky gradient endpoints
SKY_HORIZON_COLOR = vec3(1.0, 1.0, 1.0)
SKY_ZENITH_COLOR = vec3(0.5, 0.7, 1.0)

# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# Per-pixel sum of sample colors, indexed [i, j] with j = 0 at the bottom
_color_buffer = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))

_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Initialize the render target buffers.

    Sets the active image dimensions and clears the buffers.

    Args:
        width: Image width in pixels, between 2 and MAX_IMAGE_WIDTH.
        height: Image height in pixels, between 2 and MAX_IMAGE_HEIGHT.

    Raises:
        ValueError: If a dimension is out of range. Widths and heights below
            2 are rejected because pixel coordinates are normalized by
            (size - 1).
    """
    if width < 2 or height < 2:
        raise ValueError(f"Image dimensions must be at least 2x2, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1

    clear_render_target()


def clear_render_target() -> None:
    """Clear the render target buffer to zero."""
    _color_buffer.fill(0.0)


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions.

    Returns:
        Tuple of (width, height).
    """
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


# =============================================================================
# Shading
# =============================================================================


@ti.func
def sky_color(ray: Ray) -> vec3:
    """Color seen by a ray that escapes the scene.

    Linear blend keyed on the height of the unit direction:
    t = 0.5 * (unit(direction).y + 1), white at t = 0, light blue at t = 1.
    """
    t = 0.5 * (unit(ray.direction).y + 1.0)
    return (1.0 - t) * SKY_HORIZON_COLOR + t * SKY_ZENITH_COLOR


@ti.func
def ray_color(ray: Ray, depth: ti.i32) -> vec3:
    """Estimate the color carried back along a ray.

    Args:
        ray: The ray to follow.
        depth: Number of surface hits allowed. At depth <= 0 the light is
            fully absorbed and the result is black.

    Returns:
        The sampled color (RGB).
    """
    color = vec3(0.0, 0.0, 0.0)
    attenuation = 1.0
    current = ray
    remaining = depth

    # while keeps this serial even when inlined at kernel top level
    while remaining > 0:
        rec = intersect_scene(current, T_MIN, T_MAX)
        if rec.hit == 1:
            target = rec.point + rec.normal + random_unit_vector()
            current = make_ray(rec.point, target - rec.point)
            attenuation *= ALBEDO
            remaining -= 1
        else:
            color = attenuation * sky_color(current)
            remaining = 0

    return color


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_scanline(
    j: ti.i32,
    width: ti.i32,
    height: ti.i32,
    samples_per_pixel: ti.i32,
    max_depth: ti.i32,
):
    """Sum samples_per_pixel jittered samples for every pixel in row j."""
    ti.loop_config(serialize=True)
    for i in range(width):
        pixel_color = vec3(0.0, 0.0, 0.0)
        for _ in range(samples_per_pixel):
            u = (ti.cast(i, ti.f32) + random_float()) / ti.cast(width - 1, ti.f32)
            v = (ti.cast(j, ti.f32) + random_float()) / ti.cast(height - 1, ti.f32)
            pixel_color += ray_color(get_ray(u, v), max_depth)
        _color_buffer[i, j] = pixel_color


@ti.kernel
def _trace_ray(origin: vec3, direction: vec3, depth: ti.i32) -> vec3:
    return ray_color(make_ray(origin, direction), depth)


# =============================================================================
# Public Rendering API
# =============================================================================


def render_scanline(j: int, samples_per_pixel: int, max_depth: int) -> None:
    """Render one row of the image into the render target.

    Each pixel gets the sum of samples_per_pixel samples; averaging happens
    on readback.

    Args:
        j: Row index, 0 at the bottom of the image.
        samples_per_pixel: Number of jittered samples per pixel.
        max_depth: Bounce budget for each sample.

    Raises:
        RuntimeError: If render target has not been set up.
        ValueError: If j is outside the image.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    if not 0 <= j < height:
        raise ValueError(f"Row {j} is outside an image of height {height}")

    _render_scanline(j, width, height, samples_per_pixel, max_depth)


def trace_ray(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    depth: int,
) -> tuple[float, float, float]:
    """Sample the color along a single ray against the loaded scene.

    This is a Python-callable entry point for testing and debugging.

    Returns:
        Tuple of (R, G, B) color values.
    """
    color = _trace_ray(vec3(*origin), vec3(*direction), depth)
    return (float(color[0]), float(color[1]), float(color[2]))


def get_accumulated_image_numpy() -> npt.NDArray[np.float64]:
    """Get the per-pixel sample sums as a NumPy array.

    The array is in image order: shape (height, width, 3), top row first.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()

    full_image = _color_buffer.to_numpy()
    image = full_image[:width, :height, :]

    # Transpose from (width, height, 3) to (height, width, 3)
    image = np.transpose(image, (1, 0, 2))

    # Flip vertically (row 0 of the buffer is the bottom of the image)
    image = np.flipud(image)

    return image.astype(np.float64)
