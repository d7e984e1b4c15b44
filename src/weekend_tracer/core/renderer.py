"""Scanline renderer driving the integrator.

This module wraps the integrator kernels in a small object that:
- Sets up the camera and render target from RenderSettings
- Renders top row first, one scanline at a time
- Reports progress through a callback or a generator
- Converts the accumulated samples to 8-bit pixels and hands them to a sink

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from weekend_tracer.config import RenderSettings
    >>> from weekend_tracer.core.renderer import Renderer
    >>> from weekend_tracer.scene.presets import create_two_sphere_scene
    >>>
    >>> scene, camera = create_two_sphere_scene()
    >>> renderer = Renderer(RenderSettings(seed=7), camera)
    >>> renderer.render()
    >>> renderer.save("image.ppm")
"""

from __future__ import annotations

from collections.abc import Callable, Generator, Iterator
from pathlib import Path
from typing import TextIO

import numpy as np
import numpy.typing as npt

from weekend_tracer.camera.pinhole import PinholeCamera, setup_camera
from weekend_tracer.config import RenderSettings
from weekend_tracer.core.integrator import (
    get_accumulated_image_numpy,
    render_scanline,
    setup_render_target,
)
from weekend_tracer.core.sampler import seed_random
from weekend_tracer.output.display import samples_to_uint8
from weekend_tracer.output.export import save_image
from weekend_tracer.output.ppm import write_ppm

# Type alias for progress callback
# Callback receives (rows_remaining, total_rows) after each scanline
ProgressCallback = Callable[[int, int], None]


class Renderer:
    """Renders the loaded scene into an 8-bit image.

    The scene is whatever is currently loaded into the scene fields (see
    SceneManager). The camera and render target are shared by every
    renderer, so each render loads its own camera and image size before
    the first scanline, and a finished image is copied out of the render
    target. Only one render can be in progress at a time.

    Attributes:
        settings: The render settings.
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, settings: RenderSettings, camera: PinholeCamera | None = None) -> None:
        """Validate settings and prepare the camera and render target.

        Args:
            settings: Image size, sampling parameters and seed.
            camera: Camera configuration. Defaults to the fixed camera at the
                origin looking down -Z with the settings' aspect ratio.

        Raises:
            ValueError: If the settings or camera are invalid, or the image
                exceeds the render target.
        """
        settings.validate()
        self._settings = settings
        self._camera = camera if camera is not None else PinholeCamera(
            aspect_ratio=settings.aspect_ratio
        )
        setup_camera(self._camera)
        setup_render_target(settings.image_width, settings.image_height)
        self._rows_rendered = 0
        self._sums: npt.NDArray[np.float64] | None = None

    @property
    def settings(self) -> RenderSettings:
        """Get the render settings."""
        return self._settings

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._settings.image_width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._settings.image_height

    @property
    def rows_rendered(self) -> int:
        """Get the number of scanlines finished in the current render."""
        return self._rows_rendered

    @property
    def is_complete(self) -> bool:
        """Whether every scanline of the last render has been rendered."""
        return self._sums is not None

    def render(self, callback: ProgressCallback | None = None) -> None:
        """Render the whole image.

        Args:
            callback: Optional function called after each scanline with
                (rows_remaining, total_rows).

        Example:
            >>> def progress(remaining, total):
            ...     print(f"\\rScanlines remaining: {remaining}", end="")
            >>> renderer.render(callback=progress)
        """
        for rows_remaining, total_rows in self.render_progressive():
            if callback is not None:
                callback(rows_remaining, total_rows)

    def render_progressive(self) -> Generator[tuple[int, int], None, None]:
        """Render the image, yielding progress after each scanline.

        Rows are rendered from the top of the image (j = height - 1) down to
        the bottom (j = 0). The random stream is reseeded first when the
        settings carry a seed, and this renderer's camera and image size are
        loaded again in case another renderer replaced them.

        Yields:
            Tuple of (rows_remaining, total_rows).
        """
        settings = self._settings
        if settings.seed is not None:
            seed_random(settings.seed)

        self._sums = None
        self._rows_rendered = 0
        setup_camera(self._camera)
        setup_render_target(self.width, self.height)

        for j in range(self.height - 1, -1, -1):
            render_scanline(j, settings.samples_per_pixel, settings.max_depth)
            self._rows_rendered += 1
            if j == 0:
                self._sums = get_accumulated_image_numpy()
            yield (j, self.height)

    def get_image_uint8(self) -> npt.NDArray[np.uint8]:
        """Get the finished image as 8-bit RGB.

        Samples are averaged, gamma corrected with gamma 2, clamped and
        quantized.

        Returns:
            Array of shape (height, width, 3), top row first.

        Raises:
            RuntimeError: If the render has not finished.
        """
        if not self.is_complete:
            raise RuntimeError(
                f"Render incomplete: {self._rows_rendered} of {self.height} rows rendered"
            )
        return samples_to_uint8(self._sums, self._settings.samples_per_pixel)

    def iter_pixels(self) -> Iterator[tuple[int, int, int]]:
        """Yield (R, G, B) integer triplets in scan order (top row first)."""
        for row in self.get_image_uint8():
            for r, g, b in row:
                yield (int(r), int(g), int(b))

    def write_ppm(self, stream: TextIO) -> None:
        """Write the finished image as P3 text to a stream."""
        write_ppm(stream, self.get_image_uint8())

    def save(self, filepath: str | Path) -> Path:
        """Save the finished image; .ppm is written as P3 text, other
        extensions go through Pillow.

        Returns:
            The path written to.
        """
        return save_image(filepath, self.get_image_uint8())

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"Renderer(width={self.width}, height={self.height}, "
            f"samples_per_pixel={self._settings.samples_per_pixel}, "
            f"rows_rendered={self._rows_rendered})"
        )
