"""Python-side scene manager.

The Taichi fields in ``scene.intersection`` are what the kernels read. The
SceneManager keeps a Python mirror of what was added so a scene can be
inspected, exported to a plain dictionary and loaded back.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from weekend_tracer.scene.manager import SceneManager
    >>> scene = SceneManager()
    >>> scene.add_sphere(center=(0, 0, -1), radius=0.5)
    >>> scene.add_sphere(center=(0, -100.5, -1), radius=100.0)
    >>> scene.to_dict()["spheres"][0]["radius"]
    0.5
"""

from dataclasses import dataclass, field
from typing import Any

import taichi.math as tm

from weekend_tracer.scene.intersection import (
    MAX_SPHERES,
    add_sphere,
    clear_scene,
    get_sphere_count,
)

# Type alias for 3D vectors
vec3 = tm.vec3


@dataclass
class SphereInfo:
    """Information about a sphere in the scene.

    Attributes:
        sphere_index: The index in the sphere storage arrays.
        center: The center of the sphere.
        radius: The radius of the sphere.
    """

    sphere_index: int
    center: tuple[float, float, float]
    radius: float


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        spheres: List of sphere configurations, each a dict with
            "center" (3-list) and "radius" keys.
    """

    spheres: list[dict[str, Any]] = field(default_factory=list)


class SceneManager:
    """Builds the scene and keeps a Python-side record of it.

    There is a single scene in the Taichi fields, so creating a
    SceneManager clears whatever was loaded before.

    Attributes:
        spheres: List of SphereInfo for all spheres in the scene, in
            insertion order.
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.spheres: list[SphereInfo] = []
        self.clear()

    def clear(self) -> None:
        """Remove every sphere from the scene and from local tracking."""
        clear_scene()
        self.spheres.clear()

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
    ) -> int:
        """Add a sphere to the scene.

        Args:
            center: The center point of the sphere as (x, y, z).
            radius: The radius of the sphere.

        Returns:
            The index of the added sphere.

        Raises:
            ValueError: If the center is not three numbers or the radius is
                not positive.
            RuntimeError: If the maximum number of spheres is exceeded.
        """
        if len(center) != 3:
            raise ValueError(f"Sphere center must have 3 components, got {center!r}")
        center_tuple = (float(center[0]), float(center[1]), float(center[2]))

        sphere_index = add_sphere(vec3(*center_tuple), float(radius))

        self.spheres.append(
            SphereInfo(sphere_index=sphere_index, center=center_tuple, radius=float(radius))
        )
        return sphere_index

    def get_sphere_count(self) -> int:
        """Get the number of spheres loaded into the Taichi fields."""
        return get_sphere_count()

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object."""
        config = SceneConfig()
        for sphere in self.spheres:
            config.spheres.append({"center": list(sphere.center), "radius": sphere.radius})
        return config

    def from_config(self, config: SceneConfig) -> None:
        """Load a scene from a configuration object.

        Clears the current scene first.

        Raises:
            ValueError: If a sphere entry is missing its radius or has an
                invalid center or radius.
        """
        self.clear()
        for sphere_config in config.spheres:
            if "radius" not in sphere_config:
                raise ValueError(f"Sphere entry has no radius: {sphere_config!r}")
            center = sphere_config.get("center", [0.0, 0.0, 0.0])
            self.add_sphere(tuple(center), sphere_config["radius"])

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        return {"spheres": self.to_config().spheres}

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a scene from a dictionary with a 'spheres' key."""
        self.from_config(SceneConfig(spheres=data.get("spheres", [])))

    @staticmethod
    def get_max_spheres() -> int:
        """Get the maximum number of spheres supported."""
        return MAX_SPHERES
