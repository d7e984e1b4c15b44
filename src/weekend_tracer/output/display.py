"""Conversion of accumulated samples to display-ready 8-bit pixels.

The pipeline per channel is:
    1. Average: divide the sample sum by the number of samples.
    2. Gamma 2: take the square root.
    3. Clamp to [0, 0.999].
    4. Quantize: floor(256 * value), giving an integer in [0, 255].

Example:
    >>> import numpy as np
    >>> from weekend_tracer.output.display import samples_to_uint8
    >>> sums = np.full((2, 2, 3), 25.0)  # 100 samples averaging 0.25
    >>> samples_to_uint8(sums, samples_per_pixel=100)[0, 0]
    array([128, 128, 128], dtype=uint8)
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

# Upper clamp before quantizing so that 256 * value stays below 256
MAX_INTENSITY = 0.999


def average_samples(
    sums: npt.NDArray[np.floating],
    samples_per_pixel: int,
) -> npt.NDArray[np.float64]:
    """Divide per-pixel sample sums by the sample count.

    Raises:
        ValueError: If samples_per_pixel is not positive.
    """
    if samples_per_pixel <= 0:
        raise ValueError(f"samples_per_pixel must be positive, got {samples_per_pixel}")
    return np.asarray(sums, dtype=np.float64) / float(samples_per_pixel)


def apply_gamma2(image: npt.NDArray[np.floating]) -> npt.NDArray[np.float64]:
    """Gamma-correct linear values with gamma 2 (square root).

    Negative values are treated as zero.
    """
    return np.sqrt(np.maximum(np.asarray(image, dtype=np.float64), 0.0))


def quantize(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Map [0, 1] values to integers with floor(256 * clamp(value, 0, 0.999))."""
    clamped = np.clip(np.asarray(image, dtype=np.float64), 0.0, MAX_INTENSITY)
    return np.floor(256.0 * clamped).astype(np.uint8)


def samples_to_uint8(
    sums: npt.NDArray[np.floating],
    samples_per_pixel: int,
) -> npt.NDArray[np.uint8]:
    """Run the full average, gamma and quantize pipeline.

    Args:
        sums: Per-pixel sample sums of shape (H, W, 3).
        samples_per_pixel: Number of samples summed into each pixel.

    Returns:
        8-bit image of the same shape.
    """
    return quantize(apply_gamma2(average_samples(sums, samples_per_pixel)))
