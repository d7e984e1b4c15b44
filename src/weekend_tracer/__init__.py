"""Offline diffuse ray tracer built on Taichi.

Renders a static scene of spheres by averaging many randomly sampled light
paths per pixel and writes the result as an image.

Subpackages:
    core: Random stream, vector algebra, rays, the integrator and the
        scanline renderer
    geometry: Sphere primitive and ray-sphere intersection
    scene: Scene storage, closest-hit queries, scene manager and presets
    camera: Pinhole camera with ray generation
    output: Gamma/quantize pipeline, PPM and Pillow export

Modules that declare Taichi fields must be imported after ``ti.init()``.
"""

__version__ = "0.1.0"
