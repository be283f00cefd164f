"""Pinhole camera ray generation.

The camera sits at the origin. Pixel coordinates are spread evenly over
[-1, 1] on both axes and every ray points through ``(x, -y, z)`` where

    z = tan(pi - field_of_view / 2)

is constant for the image. The y flip maps top-to-bottom image rows onto an
upward y axis, and z is negative for fields of view in (0, pi), so the
camera looks down the negative z axis.

Example:
    >>> from sdf_marcher.camera.pinhole import get_rays
    >>> from sdf_marcher.scene.default_scene import default_settings
    >>> rays = get_rays(default_settings().replace(width=4, height=3))
    >>> len(rays), len(rays[0])
    (3, 4)
"""

from __future__ import annotations

import math

from sdf_marcher.core.ray import Ray
from sdf_marcher.core.settings import ImageSettings
from sdf_marcher.core.vector import ZERO, Vec3, normalize
from sdf_marcher.errors import ConfigError


def spaced_points(n: int) -> list[float]:
    """Generate n floats from -1 to 1, equally spaced.

    The first value is exactly -1 and the last exactly 1.

    Args:
        n: Number of points.

    Returns:
        Strictly increasing list of n values.

    Raises:
        ConfigError: If n is below 2, which would divide by zero.
    """
    if n < 2:
        raise ConfigError(f"spaced_points() needs at least 2 points, got {n}")
    span = n - 1
    return [-1.0 + 2.0 * i / span for i in range(n)]


def image_plane_depth(field_of_view: float) -> float:
    """Compute the z component shared by every ray of an image."""
    return math.tan(math.pi - field_of_view / 2.0)


def ray_direction(x: float, y: float, depth: float) -> Vec3:
    """Compute the normalized direction through image coordinates (x, y).

    Raises:
        InvalidVectorError: If (x, -y, depth) is the zero vector.
    """
    return normalize(Vec3(x, -y, depth))


def get_rays(settings: ImageSettings) -> list[list[Ray]]:
    """Produce the grid of camera rays for an image.

    Args:
        settings: Image settings providing width, height and field of view.

    Returns:
        ``height`` rows of ``width`` rays each. Row 0 is the top of the image,
        column 0 its left edge.

    Raises:
        ConfigError: If the width or height is below 2.
    """
    settings.validate()
    depth = image_plane_depth(settings.field_of_view)
    xs = spaced_points(settings.width)
    ys = spaced_points(settings.height)
    return [[Ray(origin=ZERO, direction=ray_direction(x, y, depth)) for x in xs] for y in ys]
