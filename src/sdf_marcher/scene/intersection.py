"""GPU storage for flattened scenes and scene distance evaluation.

A scene tree is flattened (see ``flatten_scene``) into an ordered list of
primitives that is copied into Taichi fields. ``scene_distance`` then takes
the minimum over all primitives, keeping the last primitive among equal
distances, which gives the same answer as evaluating the union tree.

The light marker is kept separately and is only part of the scene when a
shadow ray asks for it; it always comes after every primitive.

All fields are f64 so GPU renders agree with the pure-Python reference.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from sdf_marcher.scene.default_scene import default_scene
    >>> from sdf_marcher.scene.intersection import load_scene, set_light
    >>> load_scene(default_scene())
    2
    >>> set_light((10.0, 10.0, 7.0))
    >>> # Use scene_distance within a Taichi kernel
"""

import logging
from collections.abc import Sequence

import taichi as ti
import taichi.math as tm

from sdf_marcher.core.vector import Vec3, vec3_from
from sdf_marcher.scene.sdf import Primitive, SceneNode, flatten_scene

logger = logging.getLogger(__name__)

# 3D vector type used by every kernel
dvec3 = ti.types.vector(3, ti.f64)

# Maximum number of primitives supported in the scene
MAX_PRIMITIVES = 1024

# Index reported by scene_distance when the light marker is nearest
LIGHT_INDEX = -2

# Primitive storage: Structure of Arrays layout for GPU efficiency
primitive_kinds = ti.field(dtype=ti.i32, shape=MAX_PRIMITIVES)
primitive_centers = ti.Vector.field(3, dtype=ti.f64, shape=MAX_PRIMITIVES)
primitive_radii = ti.field(dtype=ti.f64, shape=MAX_PRIMITIVES)
primitive_colors = ti.Vector.field(3, dtype=ti.f64, shape=MAX_PRIMITIVES)
# Material fields not read by the shading model, kept with the scene
primitive_specular = ti.field(dtype=ti.f64, shape=MAX_PRIMITIVES)
primitive_gloss = ti.field(dtype=ti.f64, shape=MAX_PRIMITIVES)
num_primitives = ti.field(dtype=ti.i32, shape=())

# Light marker position
light_position = ti.Vector.field(3, dtype=ti.f64, shape=())


def clear_scene() -> None:
    """Clear all primitives from the scene.

    Resets the primitive count to zero. Field data is overwritten when new
    primitives are added.
    """
    num_primitives[None] = 0


def add_primitive(primitive: Primitive) -> int:
    """Append a flattened primitive to the scene.

    Args:
        primitive: The primitive to add. Order matters for ties.

    Returns:
        The index of the added primitive.

    Raises:
        RuntimeError: If the maximum number of primitives is exceeded.
    """
    idx = num_primitives[None]
    if idx >= MAX_PRIMITIVES:
        raise RuntimeError(f"Maximum number of primitives ({MAX_PRIMITIVES}) exceeded")
    material = primitive.material
    primitive_kinds[idx] = int(primitive.kind)
    primitive_centers[idx] = list(primitive.center.to_tuple())
    primitive_radii[idx] = primitive.radius
    primitive_colors[idx] = list(material.color.to_tuple())
    primitive_specular[idx] = material.specular_lighting
    primitive_gloss[idx] = material.gloss
    num_primitives[None] = idx + 1
    return idx


def load_scene(scene: SceneNode) -> int:
    """Replace the stored scene with a flattened scene tree.

    Returns:
        The number of primitives loaded.

    Raises:
        RuntimeError: If the scene has more than MAX_PRIMITIVES leaves.
    """
    primitives = flatten_scene(scene)
    if len(primitives) > MAX_PRIMITIVES:
        raise RuntimeError(
            f"Scene has {len(primitives)} primitives, maximum is {MAX_PRIMITIVES}"
        )
    clear_scene()
    for primitive in primitives:
        add_primitive(primitive)
    logger.debug("Loaded scene with %d primitives", len(primitives))
    return len(primitives)


def get_primitive_count() -> int:
    """Get the number of primitives in the scene."""
    return int(num_primitives[None])


def set_light(position: Vec3 | Sequence[float]) -> None:
    """Set the position of the light marker used by shadow rays."""
    light_position[None] = list(vec3_from(position).to_tuple())


@ti.func
def scene_distance(position: dvec3, include_light: ti.i32):
    """Evaluate the stored scene at a position.

    Args:
        position: The point to evaluate.
        include_light: 1 to merge the light marker into the scene.

    Returns:
        A tuple (distance, index) where index is the nearest primitive,
        LIGHT_INDEX for the light marker, or -1 for an empty scene.
    """
    best_distance = ti.cast(0.0, ti.f64)
    best_index = -1
    for i in range(num_primitives[None]):
        d = tm.length(primitive_centers[i] - position) - primitive_radii[i]
        if best_index == -1 or d <= best_distance:
            best_distance = d
            best_index = i
    if include_light == 1:
        d = tm.length(light_position[None] - position)
        if best_index == -1 or d <= best_distance:
            best_distance = d
            best_index = LIGHT_INDEX
    return best_distance, best_index


@ti.func
def primitive_color(index: ti.i32) -> dvec3:
    """Get the material color of a stored primitive."""
    return primitive_colors[index]
