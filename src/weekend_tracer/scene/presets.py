"""Ready-made scenes.

The two-sphere scene is the standard diffuse test image: a small sphere
resting on a very large one that acts as the ground, lit only by the sky.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from weekend_tracer.scene.presets import create_two_sphere_scene
    >>> from weekend_tracer.camera.pinhole import setup_camera
    >>>
    >>> scene, camera = create_two_sphere_scene()
    >>> setup_camera(camera)
"""

from weekend_tracer.camera.pinhole import PinholeCamera
from weekend_tracer.scene.manager import SceneManager

# =============================================================================
# Two-Sphere Scene Constants
# =============================================================================

CENTER_SPHERE_CENTER = (0.0, 0.0, -1.0)
CENTER_SPHERE_RADIUS = 0.5

GROUND_SPHERE_CENTER = (0.0, -100.5, -1.0)
GROUND_SPHERE_RADIUS = 100.0


def create_two_sphere_scene(
    aspect_ratio: float = 16.0 / 9.0,
    vfov: float = 90.0,
) -> tuple[SceneManager, PinholeCamera]:
    """Create the two-sphere scene and its camera.

    Loads a sphere of radius 0.5 at (0, 0, -1) and a ground sphere of radius
    100 at (0, -100.5, -1), replacing any scene already loaded. The camera
    sits at the origin looking down -Z.

    Args:
        aspect_ratio: Camera aspect ratio; should match the image.
        vfov: Vertical field of view in degrees. 90 degrees gives a viewport
            two units tall.

    Returns:
        A tuple of (SceneManager, PinholeCamera).
    """
    scene = SceneManager()
    scene.add_sphere(CENTER_SPHERE_CENTER, CENTER_SPHERE_RADIUS)
    scene.add_sphere(GROUND_SPHERE_CENTER, GROUND_SPHERE_RADIUS)

    camera = PinholeCamera(vfov=vfov, aspect_ratio=aspect_ratio)
    return scene, camera
