"""Default image settings and example scene.

These are ordinary values built on demand, not shared state.

The example scene is a red unit sphere three units in front of the camera
with a small blue sphere floating between it and the camera, lit from the
upper right so the blue sphere casts a shadow on the red one.

Example:
    >>> from sdf_marcher.core.image import render_pixels
    >>> from sdf_marcher.scene.default_scene import default_scene, default_settings
    >>> settings = default_settings().replace(width=128, height=128)
    >>> pixels = render_pixels(settings, default_scene())
"""

import math

from sdf_marcher.core.color import BLACK, BLUE, RED
from sdf_marcher.core.settings import ImageSettings
from sdf_marcher.core.vector import Vec3
from sdf_marcher.scene.sdf import SceneNode, colorize, merge_scenes, sphere

# =============================================================================
# Default Settings
# =============================================================================

DEFAULT_WIDTH = 1024
DEFAULT_HEIGHT = 1024
DEFAULT_FIELD_OF_VIEW = math.pi / 2
DEFAULT_RENDER_DISTANCE = 100.0
DEFAULT_TOLERANCE = 1e-5
DEFAULT_SUN_POSITION = Vec3(10.0, 10.0, 7.0)


def default_settings() -> ImageSettings:
    """Create the default image settings.

    Returns:
        1024x1024 settings with a 90 degree field of view, a black background
        and the sun at (10, 10, 7).
    """
    return ImageSettings(
        width=DEFAULT_WIDTH,
        height=DEFAULT_HEIGHT,
        field_of_view=DEFAULT_FIELD_OF_VIEW,
        render_distance=DEFAULT_RENDER_DISTANCE,
        tolerance=DEFAULT_TOLERANCE,
        background_color=BLACK,
        sun_position=DEFAULT_SUN_POSITION,
    )


def default_scene() -> SceneNode:
    """Create the example scene: a red sphere and a small blue sphere."""
    return merge_scenes(
        colorize(RED, sphere(Vec3(0.0, 0.0, -3.0), 1.0)),
        colorize(BLUE, sphere(Vec3(1.0, 1.0, -2.0), 0.1)),
    )
