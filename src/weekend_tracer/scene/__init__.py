"""Scene module for scene storage and ray-scene queries.

Components:
    intersection: Sphere storage in Taichi fields and closest-hit queries
    manager: Python-side scene manager with dict serialization
    presets: Ready-made scenes
"""

from .intersection import (
    MAX_SPHERES,
    add_sphere,
    clear_scene,
    get_sphere_count,
    intersect_scene,
)
from .manager import SceneConfig, SceneManager, SphereInfo
from .presets import create_two_sphere_scene

__all__ = [
    # Intersection module
    "add_sphere",
    "clear_scene",
    "get_sphere_count",
    "intersect_scene",
    "MAX_SPHERES",
    # Manager module
    "SceneManager",
    "SphereInfo",
    "SceneConfig",
    # Presets
    "create_two_sphere_scene",
]
