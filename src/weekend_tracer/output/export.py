"""Image export to files.

Supported formats:
    - PPM (plain-text P3, written directly)
    - PNG and anything else Pillow can encode from 8-bit RGB

Example:
    >>> from weekend_tracer.output.export import save_image
    >>> save_image("image.ppm", renderer.get_image_uint8())
    >>> save_image("image.png", renderer.get_image_uint8())
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from weekend_tracer.output.ppm import save_ppm


def save_png(filepath: str | Path, image: npt.NDArray[np.uint8]) -> None:
    """Save an 8-bit RGB image through Pillow.

    The format follows the file extension, so this also handles other
    Pillow formats such as .bmp or .tif.

    Args:
        filepath: Output file path.
        image: 8-bit image array of shape (H, W, 3), top row first.

    Raises:
        ValueError: If the image does not have shape (H, W, 3).
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (H, W, 3), got {image.shape}")

    # (H, W, 3) uint8 is read as RGB
    pil_image = PILImage.fromarray(np.ascontiguousarray(image, dtype=np.uint8))
    pil_image.save(filepath)


def save_image(filepath: str | Path, image: npt.NDArray[np.uint8]) -> Path:
    """Save an image, choosing the writer from the file extension.

    ``.ppm`` files are written as plain-text P3; every other extension goes
    through Pillow.

    Returns:
        The path written to.
    """
    path = Path(filepath)
    if path.suffix.lower() == ".ppm":
        save_ppm(path, image)
    else:
        save_png(path, image)
    return path
