"""Shading: direct color with a hard shadow from one point light.

For a camera ray that hits a surface, the surface color is taken from the
scene material at the hit point. A shadow ray is then marched from just above
the surface toward the light, through the scene merged with a point marker at
the light position:

    - shadow ray misses          -> lit, surface color
    - shadow ray reaches light   -> lit, surface color
    - shadow ray hits geometry   -> shadowed, GRAY * surface color

Rays that miss the scene get the background color. The result is clamped.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sdf_marcher.core.color import GRAY, clamp
from sdf_marcher.core.marcher import calc_normal, ray_march
from sdf_marcher.core.ray import Ray
from sdf_marcher.core.vector import Vec3, equal_within_error, length, normalize, scale
from sdf_marcher.scene.sdf import merge_scenes, point_to_scene

if TYPE_CHECKING:
    from sdf_marcher.core.settings import ImageSettings
    from sdf_marcher.scene.sdf import SceneNode

# Shadow rays start this many tolerances above the surface
SHADOW_OFFSET_TOLERANCES = 3.0


def shade_hit(settings: ImageSettings, scene: SceneNode, position: Vec3) -> Vec3:
    """Compute the unclamped color of a surface point.

    Args:
        settings: Supplies the tolerance, travel budget and light position.
        scene: The scene that was hit.
        position: The hit position returned by ``ray_march``.

    Returns:
        The material color, dimmed by GRAY if the light is blocked.

    Raises:
        InvalidVectorError: If the surface normal or the direction to the
            light cannot be normalized.
    """
    light = settings.sun_position
    epsilon = settings.tolerance
    _, material = scene.evaluate(position)
    color = material.color

    normal = calc_normal(settings, scene, position)
    shadow_origin = position + scale(SHADOW_OFFSET_TOLERANCES * epsilon, normal)
    shadow_ray = Ray(origin=shadow_origin, direction=normalize(light - position))
    lit_scene = merge_scenes(scene, point_to_scene(light))

    blocker = ray_march(settings, lit_scene, shadow_ray)
    if blocker is None:
        return color
    if equal_within_error(epsilon, 0.0, length(light - blocker)):
        return color
    return GRAY * color


def ray_render(settings: ImageSettings, scene: SceneNode, ray: Ray) -> Vec3:
    """March a camera ray through a scene and shade the result.

    Returns:
        The final color, clamped to [0, 1].
    """
    position = ray_march(settings, scene, ray)
    if position is None:
        return clamp(settings.background_color)
    return clamp(shade_hit(settings, scene, position))
