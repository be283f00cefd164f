"""Pure-Python image assembly.

Maps every camera ray through the marcher and shader, then quantizes the
colors into a row-major ``(height, width, 3)`` array of 8-bit RGB values.
Pixels are independent of each other; ``sdf_marcher.core.integrator``
renders the same image in parallel with Taichi.

Example:
    >>> from sdf_marcher.core.image import render_pixels
    >>> from sdf_marcher.scene.default_scene import default_scene, default_settings
    >>> pixels = render_pixels(default_settings().replace(width=32, height=32), default_scene())
    >>> pixels.shape
    (32, 32, 3)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from sdf_marcher.camera.pinhole import get_rays
from sdf_marcher.core.color import color_to_rgb
from sdf_marcher.core.shading import ray_render
from sdf_marcher.core.vector import Vec3

if TYPE_CHECKING:
    from sdf_marcher.core.settings import ImageSettings
    from sdf_marcher.scene.sdf import SceneNode


def render_colors(settings: ImageSettings, scene: SceneNode) -> list[list[Vec3]]:
    """Render every pixel to a clamped color.

    Returns:
        ``height`` rows of ``width`` colors, top row first.

    Raises:
        ConfigError: If the settings are invalid.
        InvalidVectorError: If a ray or normal direction is degenerate.
    """
    return [[ray_render(settings, scene, ray) for ray in row] for row in get_rays(settings)]


def quantize(colors: list[list[Vec3]]) -> npt.NDArray[np.uint8]:
    """Quantize a grid of clamped colors to 8-bit RGB.

    Raises:
        ValueError: If a channel quantizes outside [0, 255].
    """
    rgb = np.array([[color_to_rgb(color) for color in row] for row in colors], dtype=np.int64)
    if rgb.size and (rgb.min() < 0 or rgb.max() > 255):
        raise ValueError("Colors must be clamped to [0, 1] before quantizing")
    return rgb.astype(np.uint8)


def render_pixels(settings: ImageSettings, scene: SceneNode) -> npt.NDArray[np.uint8]:
    """Render an image to a ``(height, width, 3)`` uint8 array."""
    return quantize(render_colors(settings, scene))
