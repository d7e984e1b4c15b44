"""Camera module for view and ray generation.

Components:
    pinhole: Pinhole (perspective) camera model

Ray generation uses normalized viewport coordinates:
    u in [0, 1]: left to right across the image
    v in [0, 1]: bottom to top across the image
"""

from .pinhole import PinholeCamera, get_camera_info, get_ray, setup_camera

__all__ = [
    "PinholeCamera",
    "setup_camera",
    "get_ray",
    "get_camera_info",
]
