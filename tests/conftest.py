"""Pytest configuration for renderer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import math

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls, which would
    invalidate the module-level fields. f64 and fast_math=False keep the
    kernel results in step with the pure-Python renderer.
    """
    ti.init(arch=ti.cpu, default_fp=ti.f64, fast_math=False, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear GPU scene data before and after each test.

    This ensures tests are isolated from each other.
    """
    # Import here so Taichi is initialized before fields are declared
    from sdf_marcher.core.integrator import clear_render_target
    from sdf_marcher.scene.intersection import clear_scene

    clear_scene()
    clear_render_target()

    yield

    clear_scene()
    clear_render_target()


@pytest.fixture
def make_settings():
    """Factory for small image settings with test-friendly defaults."""
    from sdf_marcher.core.color import BLACK
    from sdf_marcher.core.settings import ImageSettings
    from sdf_marcher.core.vector import Vec3

    def _make(**overrides):
        values = {
            "width": 9,
            "height": 9,
            "field_of_view": math.pi / 2,
            "render_distance": 100.0,
            "tolerance": 1e-5,
            "background_color": BLACK,
            "sun_position": Vec3(0.0, 0.0, 10.0),
        }
        values.update(overrides)
        return ImageSettings(**values)

    return _make
