"""Scene module for signed distance field scenes.

Components:
    sdf: Scene node tree (sphere, point, union, recolor), builders,
        flattening and serialization
    default_scene: Default image settings and example scene
    intersection: Taichi storage of flattened scenes (import after ti.init)

Example:
    >>> from sdf_marcher.core.color import RED
    >>> from sdf_marcher.scene import colorize, merge_scenes, point_to_scene, sphere
    >>> scene = merge_scenes(colorize(RED, sphere((0, 0, -3), 1.0)), point_to_scene((10, 10, 7)))
"""

from .default_scene import default_scene, default_settings
from .sdf import (
    DEFAULT_MATERIAL,
    Material,
    PointMarker,
    Primitive,
    PrimitiveKind,
    Recolor,
    SceneNode,
    Sphere,
    Union,
    colorize,
    flatten_scene,
    merge_all,
    merge_scenes,
    point_to_scene,
    scene_from_dict,
    scene_to_dict,
    sphere,
)

__all__ = [
    "Material",
    "DEFAULT_MATERIAL",
    "SceneNode",
    "Sphere",
    "PointMarker",
    "Union",
    "Recolor",
    "Primitive",
    "PrimitiveKind",
    "sphere",
    "point_to_scene",
    "merge_scenes",
    "merge_all",
    "colorize",
    "flatten_scene",
    "scene_to_dict",
    "scene_from_dict",
    "default_settings",
    "default_scene",
]
