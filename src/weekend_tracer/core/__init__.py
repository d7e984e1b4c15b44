"""Core rendering module.

Components:
    sampler: Seedable random stream shared by every kernel
    vector: Vector algebra and random vector sampling
    ray: Ray data structure
    integrator: Diffuse shading, scanline kernel and render target
    renderer: Scanline renderer with progress reporting and output

Only the ray module is re-exported here. The other modules declare Taichi
fields at import time, so import them directly once Taichi is initialized:

    from weekend_tracer.core.renderer import Renderer
"""

from .ray import Ray, make_ray, ray_at, vec3

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
]
