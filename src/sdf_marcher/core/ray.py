"""Ray data structure.

Example:
    >>> from sdf_marcher.core.ray import Ray, ray_at
    >>> from sdf_marcher.core.vector import Vec3
    >>> ray = Ray(origin=Vec3(0.0, 0.0, 5.0), direction=Vec3(0.0, 0.0, -1.0))
    >>> ray_at(ray, 4.0)
    Vec3(x=0.0, y=0.0, z=1.0)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from sdf_marcher.core.vector import Vec3, normalize, scale, vec3_from


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of the ray. Producers hand out unit vectors,
            but this is not enforced.
    """

    origin: Vec3
    direction: Vec3


def ray_at(ray: Ray, t: float) -> Vec3:
    """Compute the point ``ray.origin + t * ray.direction``."""
    return ray.origin + scale(t, ray.direction)


def make_ray(origin: Vec3 | Sequence[float], direction: Vec3 | Sequence[float]) -> Ray:
    """Create a ray, normalizing the direction.

    Raises:
        InvalidVectorError: If the direction has zero length.
    """
    return Ray(origin=vec3_from(origin), direction=normalize(vec3_from(direction)))
