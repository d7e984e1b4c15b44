"""Plain-text PPM (P3) output.

A P3 file is a text header followed by one line per pixel::

    P3
    <width> <height>
    255
    R G B
    R G B
    ...

Pixels are listed top row first, left to right.

Example:
    >>> import io
    >>> import numpy as np
    >>> from weekend_tracer.output.ppm import write_ppm
    >>> buffer = io.StringIO()
    >>> write_ppm(buffer, np.zeros((1, 2, 3), dtype=np.uint8))
    >>> buffer.getvalue()
    'P3\\n2 1\\n255\\n0 0 0\\n0 0 0\\n'
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import TextIO

import numpy as np
import numpy.typing as npt

MAX_CHANNEL_VALUE = 255


def _check_image(image: npt.NDArray[np.uint8]) -> None:
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (H, W, 3), got {image.shape}")


def ppm_header(width: int, height: int) -> str:
    """Build the P3 header for an image of the given size."""
    return f"P3\n{width} {height}\n{MAX_CHANNEL_VALUE}\n"


def ppm_lines(image: npt.NDArray[np.uint8]) -> Iterator[str]:
    """Yield the header and then one "R G B" line per pixel.

    Args:
        image: 8-bit image of shape (H, W, 3), top row first.

    Raises:
        ValueError: If the image does not have shape (H, W, 3).
    """
    _check_image(image)
    height, width, _ = image.shape
    yield ppm_header(width, height)
    for row in image:
        for r, g, b in row:
            yield f"{r} {g} {b}\n"


def write_ppm(stream: TextIO, image: npt.NDArray[np.uint8]) -> None:
    """Write an image as P3 text to any text stream."""
    stream.writelines(ppm_lines(image))


def save_ppm(filepath: str | Path, image: npt.NDArray[np.uint8]) -> None:
    """Write an image to a P3 file."""
    with open(filepath, "w", encoding="ascii", newline="\n") as stream:
        write_ppm(stream, image)
