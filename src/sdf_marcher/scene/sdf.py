"""Signed distance field scenes as a tree of immutable nodes.

A scene maps a position to ``(distance, material)``. The distance is signed:
negative inside a solid, zero on its surface and otherwise a lower bound on
the distance to the nearest surface. Scenes are built by composing nodes:

    Sphere      distance to a sphere surface
    PointMarker distance to a single point (used to mark the light)
    Union       nearest of two scenes, ties going to the second
    Recolor     a scene with its material color replaced

Every node is callable, so ``scene(position)`` and ``scene.evaluate(position)``
are the same. The tree can be flattened into an ordered list of primitives
for the Taichi renderer, and serialized to plain dictionaries.

Example:
    >>> from sdf_marcher.core.color import RED
    >>> from sdf_marcher.core.vector import Vec3
    >>> from sdf_marcher.scene.sdf import colorize, merge_scenes, sphere
    >>> scene = merge_scenes(
    ...     colorize(RED, sphere(Vec3(0.0, 0.0, -3.0), 1.0)),
    ...     sphere(Vec3(1.0, 1.0, -2.0), 0.1),
    ... )
    >>> distance, material = scene(Vec3(0.0, 0.0, 0.0))
    >>> distance
    2.0
    >>> material.color
    Vec3(x=1.0, y=0.0, z=0.0)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from sdf_marcher.core.color import WHITE
from sdf_marcher.core.vector import Vec3, length, vec3_from
from sdf_marcher.errors import ConfigError


@dataclass(frozen=True)
class Material:
    """All properties describing an object other than its shape.

    Attributes:
        color: Surface color (RGB).
        specular_lighting: Strength of the bright spot on shiny objects.
            Carried with the material but not used by the shading model.
        gloss: How soft or hard the reflection is. Carried with the material
            but not used by the shading model.
    """

    color: Vec3
    specular_lighting: float
    gloss: float


# Material used when none is specified
DEFAULT_MATERIAL = Material(color=WHITE, specular_lighting=20.0, gloss=0.5)


class PrimitiveKind(IntEnum):
    """Leaf node types, as stored in the GPU primitive arrays."""

    SPHERE = 0
    POINT = 1


@dataclass(frozen=True)
class Primitive:
    """A flattened scene leaf with its effective material.

    Attributes:
        kind: The leaf type.
        center: Sphere center or point position.
        radius: Sphere radius (0 for points).
        material: Material after all enclosing recolors were applied.
    """

    kind: PrimitiveKind
    center: Vec3
    radius: float
    material: Material


class SceneNode:
    """Base class for scene nodes."""

    def evaluate(self, position: Vec3) -> tuple[float, Material]:
        """Return the signed distance and material at a position."""
        raise NotImplementedError

    def __call__(self, position: Vec3) -> tuple[float, Material]:
        return self.evaluate(position)


@dataclass(frozen=True)
class Sphere(SceneNode):
    """A sphere defined by center point and radius."""

    center: Vec3
    radius: float
    material: Material = DEFAULT_MATERIAL

    def evaluate(self, position: Vec3) -> tuple[float, Material]:
        return length(self.center - position) - self.radius, self.material


@dataclass(frozen=True)
class PointMarker(SceneNode):
    """A single point, i.e. a sphere of radius zero."""

    position: Vec3
    material: Material = DEFAULT_MATERIAL

    def evaluate(self, position: Vec3) -> tuple[float, Material]:
        return length(self.position - position), self.material


@dataclass(frozen=True)
class Union(SceneNode):
    """CSG union of two scenes.

    Picks whichever side reports the strictly smaller distance; on a tie the
    right side wins.
    """

    left: SceneNode
    right: SceneNode

    def evaluate(self, position: Vec3) -> tuple[float, Material]:
        left_result = self.left.evaluate(position)
        right_result = self.right.evaluate(position)
        if left_result[0] < right_result[0]:
            return left_result
        return right_result


@dataclass(frozen=True)
class Recolor(SceneNode):
    """A scene whose material color is replaced.

    Geometry, specular lighting and gloss pass through unchanged.
    """

    color: Vec3
    child: SceneNode

    def evaluate(self, position: Vec3) -> tuple[float, Material]:
        distance, material = self.child.evaluate(position)
        return distance, Material(self.color, material.specular_lighting, material.gloss)


# =============================================================================
# Scene Builders
# =============================================================================


def sphere(center: Vec3 | Sequence[float], radius: float) -> Sphere:
    """Define a sphere with the default material."""
    return Sphere(center=vec3_from(center), radius=float(radius))


def point_to_scene(position: Vec3 | Sequence[float]) -> PointMarker:
    """Turn a position into a scene, e.g. to make a light reachable by a ray."""
    return PointMarker(position=vec3_from(position))


def merge_scenes(first: SceneNode, second: SceneNode) -> Union:
    """Combine two scenes into a single scene."""
    return Union(first, second)


def merge_all(*scenes: SceneNode) -> SceneNode:
    """Combine any number of scenes into one.

    Builds a balanced tree of unions. The result at every position is the
    same as folding ``merge_scenes`` from the left, ties included, but the
    tree depth grows logarithmically with the number of scenes.

    Raises:
        ValueError: If no scenes are given.
    """
    if not scenes:
        raise ValueError("merge_all() needs at least one scene")
    if len(scenes) == 1:
        return scenes[0]
    middle = len(scenes) // 2
    return Union(merge_all(*scenes[:middle]), merge_all(*scenes[middle:]))


def colorize(color: Vec3 | Sequence[float], scene: SceneNode) -> Recolor:
    """Set the color of an entire scene."""
    return Recolor(color=vec3_from(color), child=scene)


# =============================================================================
# Flattening
# =============================================================================


def flatten_scene(scene: SceneNode) -> list[Primitive]:
    """Flatten a scene into its leaves, left to right.

    A union returns the leaf with the smallest distance and, among equal
    distances, the one that comes last in this order. Recolors are resolved
    into each leaf's material; the outermost recolor wins.

    Raises:
        TypeError: If the tree contains a node type that cannot be flattened.
    """
    primitives: list[Primitive] = []
    # (node, color override) pairs, right child pushed first so left pops first
    stack: list[tuple[SceneNode, Vec3 | None]] = [(scene, None)]
    while stack:
        node, color = stack.pop()
        if isinstance(node, Union):
            stack.append((node.right, color))
            stack.append((node.left, color))
        elif isinstance(node, Recolor):
            stack.append((node.child, color if color is not None else node.color))
        elif isinstance(node, Sphere):
            primitives.append(
                Primitive(PrimitiveKind.SPHERE, node.center, node.radius, _recolored(node.material, color))
            )
        elif isinstance(node, PointMarker):
            primitives.append(
                Primitive(PrimitiveKind.POINT, node.position, 0.0, _recolored(node.material, color))
            )
        else:
            raise TypeError(f"Cannot flatten scene node of type {type(node).__name__}")
    return primitives


def _recolored(material: Material, color: Vec3 | None) -> Material:
    if color is None:
        return material
    return Material(color, material.specular_lighting, material.gloss)


# =============================================================================
# Serialization
# =============================================================================


def _material_to_dict(material: Material) -> dict[str, Any]:
    return {
        "color": list(material.color.to_tuple()),
        "specular_lighting": material.specular_lighting,
        "gloss": material.gloss,
    }


def _material_from_dict(data: dict[str, Any]) -> Material:
    return Material(
        color=vec3_from(data["color"]),
        specular_lighting=float(data["specular_lighting"]),
        gloss=float(data["gloss"]),
    )


def scene_to_dict(scene: SceneNode) -> dict[str, Any]:
    """Convert a scene tree into nested JSON-friendly dictionaries."""
    if isinstance(scene, Sphere):
        return {
            "type": "sphere",
            "center": list(scene.center.to_tuple()),
            "radius": scene.radius,
            "material": _material_to_dict(scene.material),
        }
    if isinstance(scene, PointMarker):
        return {
            "type": "point",
            "position": list(scene.position.to_tuple()),
            "material": _material_to_dict(scene.material),
        }
    if isinstance(scene, Union):
        return {"type": "union", "left": scene_to_dict(scene.left), "right": scene_to_dict(scene.right)}
    if isinstance(scene, Recolor):
        return {"type": "recolor", "color": list(scene.color.to_tuple()), "child": scene_to_dict(scene.child)}
    raise TypeError(f"Cannot serialize scene node of type {type(scene).__name__}")


def scene_from_dict(data: dict[str, Any]) -> SceneNode:
    """Rebuild a scene tree from ``scene_to_dict`` output.

    Materials are optional and default to ``DEFAULT_MATERIAL``.

    Raises:
        ConfigError: If a node type is unknown or a required key is missing.
    """
    node_type = data.get("type")
    try:
        if node_type == "sphere":
            material = _material_from_dict(data["material"]) if "material" in data else DEFAULT_MATERIAL
            return Sphere(vec3_from(data["center"]), float(data["radius"]), material)
        if node_type == "point":
            material = _material_from_dict(data["material"]) if "material" in data else DEFAULT_MATERIAL
            return PointMarker(vec3_from(data["position"]), material)
        if node_type == "union":
            return Union(scene_from_dict(data["left"]), scene_from_dict(data["right"]))
        if node_type == "recolor":
            return Recolor(vec3_from(data["color"]), scene_from_dict(data["child"]))
    except KeyError as e:
        raise ConfigError(f"Scene node of type {node_type!r} is missing key {e}") from e
    raise ConfigError(f"Unknown scene node type: {node_type!r}")
