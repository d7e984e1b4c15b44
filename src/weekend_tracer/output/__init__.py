"""Output module for turning accumulated samples into image files.

Components:
    display: Averaging, gamma 2 correction and 8-bit quantization
    ppm: Plain-text PPM (P3) writer
    export: File export by extension (PPM directly, other formats via Pillow)
"""

from .display import apply_gamma2, average_samples, quantize, samples_to_uint8
from .export import save_image, save_png
from .ppm import ppm_header, ppm_lines, save_ppm, write_ppm

__all__ = [
    "average_samples",
    "apply_gamma2",
    "quantize",
    "samples_to_uint8",
    "ppm_header",
    "ppm_lines",
    "write_ppm",
    "save_ppm",
    "save_png",
    "save_image",
]
