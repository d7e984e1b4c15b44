"""Pytest configuration for raytracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu)
    yield


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear the scene and reseed the random stream around each test.

    This ensures tests are isolated from each other.
    """
    # Import here so Taichi is initialized before any fields are declared
    from weekend_tracer.core.integrator import clear_render_target
    from weekend_tracer.core.sampler import seed_random
    from weekend_tracer.scene.intersection import clear_scene

    clear_scene()
    clear_render_target()
    seed_random(12345)

    yield

    clear_scene()
    clear_render_target()
