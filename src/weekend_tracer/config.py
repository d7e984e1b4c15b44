"""Render settings.

Example:
    >>> from weekend_tracer.config import RenderSettings
    >>> settings = RenderSettings(image_width=400, samples_per_pixel=100)
    >>> settings.image_height
    225
"""

from dataclasses import dataclass

# Defaults for the standard two-sphere render
DEFAULT_IMAGE_WIDTH = 400
DEFAULT_ASPECT_RATIO = 16.0 / 9.0
DEFAULT_SAMPLES_PER_PIXEL = 100
DEFAULT_MAX_DEPTH = 50


@dataclass
class RenderSettings:
    """Image size and sampling parameters for one render.

    Attributes:
        image_width: Image width in pixels.
        aspect_ratio: Width divided by height. The height is derived from
            it by truncation.
        samples_per_pixel: Number of jittered samples averaged per pixel.
        max_depth: Maximum number of bounces per sample.
        seed: Seed for the random stream. None keeps whatever stream is
            current, so consecutive renders differ.
    """

    image_width: int = DEFAULT_IMAGE_WIDTH
    aspect_ratio: float = DEFAULT_ASPECT_RATIO
    samples_per_pixel: int = DEFAULT_SAMPLES_PER_PIXEL
    max_depth: int = DEFAULT_MAX_DEPTH
    seed: int | None = None

    @property
    def image_height(self) -> int:
        """Image height in pixels, int(image_width / aspect_ratio)."""
        return int(self.image_width / self.aspect_ratio)

    def validate(self) -> None:
        """Check the settings before any rendering work starts.

        Raises:
            ValueError: If any value is out of range.
        """
        if not self.aspect_ratio > 0.0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if self.image_width < 2 or self.image_height < 2:
            raise ValueError(
                f"Image must be at least 2x2 pixels, got "
                f"{self.image_width}x{self.image_height}"
            )
        if self.samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be at least 1, got {self.samples_per_pixel}")
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")
