"""Core rendering module.

This module contains the building blocks of the sphere tracer:

Components:
    vector: Immutable Vec3 and vector utilities
    color: Named colors, clamping and 8-bit quantization
    ray: Ray data structure
    settings: Image settings
    marcher: Sphere-tracing loop and normal estimation
    shading: Hard-shadow shading of camera rays
    image: Pure-Python image assembly
    integrator: Parallel Taichi renderer

All modules except integrator are pure Python and need no Taichi runtime.
"""

from .color import (
    BLACK,
    BLUE,
    DARK_RED,
    DARK_YELLOW,
    GRAY,
    GREEN,
    PINK,
    RED,
    WHITE,
    clamp,
    color_to_rgb,
    mix_colors,
)
from .ray import Ray, make_ray, ray_at
from .settings import ImageSettings
from .vector import (
    Vec3,
    dot,
    equal_within_error,
    length,
    length_squared,
    normalize,
    scale,
    vec3_from,
)

# marcher, shading, image and integrator are imported from their modules

__all__ = [
    "Vec3",
    "vec3_from",
    "dot",
    "scale",
    "length",
    "length_squared",
    "normalize",
    "equal_within_error",
    "Ray",
    "ray_at",
    "make_ray",
    "ImageSettings",
    "RED",
    "GREEN",
    "BLUE",
    "BLACK",
    "WHITE",
    "GRAY",
    "DARK_RED",
    "DARK_YELLOW",
    "PINK",
    "clamp",
    "color_to_rgb",
    "mix_colors",
]
