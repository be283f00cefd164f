"""Sphere tracing through a signed distance field.

Each step moves the ray forward by the distance the scene reports at the
current position. That distance is a lower bound on the distance to the
nearest surface, so the step can never pass through one. The march ends
with one of three outcomes, checked in this order on every iteration:

    1. The remaining travel budget is used up (<= 0): miss.
    2. The scene distance is within tolerance of zero: hit.
    3. Otherwise step forward and spend the distance from the budget.

The budget starts at ``settings.render_distance``.

Example:
    >>> from sdf_marcher.core.marcher import ray_march
    >>> from sdf_marcher.core.ray import Ray
    >>> from sdf_marcher.core.vector import Vec3
    >>> from sdf_marcher.scene.default_scene import default_settings
    >>> from sdf_marcher.scene.sdf import sphere
    >>> unit_sphere = sphere(Vec3(0.0, 0.0, 0.0), 1.0)
    >>> ray = Ray(Vec3(0.0, 0.0, 5.0), Vec3(0.0, 0.0, -1.0))
    >>> ray_march(default_settings(), unit_sphere, ray)
    Vec3(x=0.0, y=0.0, z=1.0)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sdf_marcher.core.vector import UNIT_X, UNIT_Y, UNIT_Z, Vec3, equal_within_error, normalize, scale

if TYPE_CHECKING:
    from sdf_marcher.core.ray import Ray
    from sdf_marcher.core.settings import ImageSettings
    from sdf_marcher.scene.sdf import SceneNode


def ray_march(settings: ImageSettings, scene: SceneNode, ray: Ray) -> Vec3 | None:
    """March a ray through a scene until it hits an object.

    Args:
        settings: Supplies the travel budget and hit tolerance.
        scene: The scene to march through.
        ray: The ray to march. Its direction should be normalized.

    Returns:
        The hit position, or None if the travel budget ran out first.
    """
    tolerance = settings.tolerance
    position = ray.origin
    direction = ray.direction
    remaining = settings.render_distance

    while remaining > 0:
        distance, _ = scene.evaluate(position)
        if equal_within_error(tolerance, 0.0, distance):
            return position
        position = position + scale(distance, direction)
        remaining -= distance

    return None


def _axis_difference(scene: SceneNode, point: Vec3, offset: Vec3) -> float:
    forward, _ = scene.evaluate(point + offset)
    backward, _ = scene.evaluate(point - offset)
    return forward - backward


def calc_normal(settings: ImageSettings, scene: SceneNode, point: Vec3) -> Vec3:
    """Estimate the surface normal at a point by central differences.

    Samples the scene at ``point +/- tolerance`` along each axis (six
    evaluations) and normalizes the resulting gradient.

    Raises:
        InvalidVectorError: If the gradient is zero, e.g. at a sphere center.
    """
    epsilon = settings.tolerance
    return normalize(
        Vec3(
            _axis_difference(scene, point, scale(epsilon, UNIT_X)),
            _axis_difference(scene, point, scale(epsilon, UNIT_Y)),
            _axis_difference(scene, point, scale(epsilon, UNIT_Z)),
        )
    )
