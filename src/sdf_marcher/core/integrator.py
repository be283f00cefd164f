"""Parallel sphere-tracing renderer built on Taichi kernels.

Renders the same image as ``sdf_marcher.core.image`` but evaluates every
pixel in parallel. Each pixel is independent, so the kernel is a single
parallel loop over the image with no synchronization.

Per pixel the kernel follows the reference algorithm step by step:
    - ray through (x, -y, z) with x, y evenly spaced over [-1, 1]
    - march: miss when the budget is used up, hit within tolerance, else step
    - on a hit, central-difference normal and a shadow ray from three
      tolerances above the surface toward the light
    - background on a miss, GRAY * color when the light is blocked
    - clamp to [0, 1]

Normalizing a zero vector inside the kernel cannot raise, so it sets a flag
that is turned into ``InvalidVectorError`` once the kernel returns.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from sdf_marcher.core.integrator import get_pixels_numpy, render_image
    >>> from sdf_marcher.scene.default_scene import default_scene, default_settings
    >>> render_image(default_settings().replace(width=256, height=256), default_scene())
    >>> pixels = get_pixels_numpy()
"""

import logging

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from sdf_marcher.camera.pinhole import image_plane_depth
from sdf_marcher.core.color import GRAY
from sdf_marcher.core.settings import ImageSettings
from sdf_marcher.core.shading import SHADOW_OFFSET_TOLERANCES
from sdf_marcher.core.vector import Vec3
from sdf_marcher.errors import InvalidVectorError
from sdf_marcher.scene.intersection import (
    dvec3,
    get_primitive_count,
    light_position,
    load_scene,
    primitive_color,
    scene_distance,
    set_light,
)
from sdf_marcher.scene.sdf import SceneNode

logger = logging.getLogger(__name__)

# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

# Image dimensions (actual active size)
_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# Clamped colors, indexed [row, column] with row 0 at the top
_color_buffer = ti.Vector.field(3, dtype=ti.f64, shape=(MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH))

# Flag to track if render target is initialized
_render_target_initialized = ti.field(dtype=ti.i32, shape=())

# Color returned for rays that miss
_background_color = ti.Vector.field(3, dtype=ti.f64, shape=())

# Multiplier applied to the color of shadowed surfaces
_shadow_color = ti.Vector.field(3, dtype=ti.f64, shape=())

# Set by the kernel when it had to normalize a zero vector
_invalid_vector = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Initialize the render target buffer.

    Sets the active image dimensions and clears the buffer.

    Args:
        width: Image width in pixels (max MAX_IMAGE_WIDTH).
        height: Image height in pixels (max MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If dimensions exceed maximum supported size.
    """
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1

    clear_render_target()


def clear_render_target() -> None:
    """Clear the render target buffer to zero."""
    _color_buffer.fill(0.0)


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions.

    Returns:
        Tuple of (width, height).
    """
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


# =============================================================================
# Marching and Shading
# =============================================================================


@ti.func
def _normalize_checked(v: dvec3) -> dvec3:
    """Normalize a vector, flagging zero-length input instead of raising."""
    magnitude = tm.length(v)
    result = dvec3(0.0, 0.0, 0.0)
    if magnitude == 0.0:
        _invalid_vector[None] = 1
    else:
        result = (1.0 / magnitude) * v
    return result


@ti.func
def _march(origin: dvec3, direction: dvec3, budget: ti.f64, tolerance: ti.f64, include_light: ti.i32):
    """March a ray through the stored scene.

    Returns:
        A tuple (hit, position): hit is 1 if a surface was reached before
        the budget ran out, and position is where the march stopped.
    """
    position = origin
    remaining = budget
    hit = 0
    active = 1
    while active == 1:
        if remaining <= 0.0:
            active = 0
        else:
            distance, _ = scene_distance(position, include_light)
            if ti.abs(0.0 - distance) < tolerance:
                hit = 1
                active = 0
            else:
                position = position + distance * direction
                remaining -= distance
    return hit, position


@ti.func
def _axis_difference(point: dvec3, offset: dvec3) -> ti.f64:
    forward, _ = scene_distance(point + offset, 0)
    backward, _ = scene_distance(point - offset, 0)
    return forward - backward


@ti.func
def _calc_normal(point: dvec3, tolerance: ti.f64) -> dvec3:
    """Estimate the surface normal by central differences."""
    dx = _axis_difference(point, dvec3(tolerance, 0.0, 0.0))
    dy = _axis_difference(point, dvec3(0.0, tolerance, 0.0))
    dz = _axis_difference(point, dvec3(0.0, 0.0, tolerance))
    return _normalize_checked(dvec3(dx, dy, dz))


@ti.func
def _shade_hit(position: dvec3, budget: ti.f64, tolerance: ti.f64) -> dvec3:
    """Compute the unclamped color of a hit point with a hard shadow."""
    light = light_position[None]
    _, index = scene_distance(position, 0)
    color = primitive_color(index)

    normal = _calc_normal(position, tolerance)
    shadow_origin = position + (SHADOW_OFFSET_TOLERANCES * tolerance) * normal
    shadow_direction = _normalize_checked(light - position)

    blocked, blocker = _march(shadow_origin, shadow_direction, budget, tolerance, 1)
    if blocked == 1:
        # A stop at the light marker itself means the light is visible
        if not (ti.abs(0.0 - tm.length(light - blocker)) < tolerance):
            color = _shadow_color[None] * color
    return color


@ti.func
def _render_pixel_impl(
    row: ti.i32,
    col: ti.i32,
    width: ti.i32,
    height: ti.i32,
    depth: ti.f64,
    budget: ti.f64,
    tolerance: ti.f64,
) -> dvec3:
    """Render one pixel to a clamped color."""
    x = -1.0 + 2.0 * col / (width - 1)
    y = -1.0 + 2.0 * row / (height - 1)
    direction = _normalize_checked(dvec3(x, -y, depth))
    origin = dvec3(0.0, 0.0, 0.0)

    color = _background_color[None]
    hit, position = _march(origin, direction, budget, tolerance, 0)
    if hit == 1:
        color = _shade_hit(position, budget, tolerance)
    return tm.clamp(color, 0.0, 1.0)


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_kernel(width: ti.i32, height: ti.i32, depth: ti.f64, budget: ti.f64, tolerance: ti.f64):
    """Render every pixel into the color buffer."""
    for row, col in ti.ndrange(height, width):
        _color_buffer[row, col] = _render_pixel_impl(row, col, width, height, depth, budget, tolerance)


@ti.kernel
def _render_single_pixel(
    row: ti.i32,
    col: ti.i32,
    width: ti.i32,
    height: ti.i32,
    depth: ti.f64,
    budget: ti.f64,
    tolerance: ti.f64,
) -> dvec3:
    """Render a single pixel. Used for testing and debugging."""
    return _render_pixel_impl(row, col, width, height, depth, budget, tolerance)


# =============================================================================
# Public Rendering API
# =============================================================================


def _prepare(settings: ImageSettings, scene: SceneNode) -> None:
    """Validate settings and upload the scene, light and background."""
    settings.validate()
    setup_render_target(settings.width, settings.height)
    load_scene(scene)
    set_light(settings.sun_position)
    _background_color[None] = list(settings.background_color.to_tuple())
    _shadow_color[None] = list(GRAY.to_tuple())
    _invalid_vector[None] = 0


def _check_invalid_vector() -> None:
    if _invalid_vector[None] != 0:
        raise InvalidVectorError("Cannot normalize a vector with magnitude 0 while rendering")


def render_image(settings: ImageSettings, scene: SceneNode) -> None:
    """Render the scene into the render target.

    Args:
        settings: Image settings.
        scene: The scene to render.

    Raises:
        ConfigError: If the width or height is below 2.
        ValueError: If the image exceeds the maximum supported size.
        RuntimeError: If the scene has too many primitives.
        InvalidVectorError: If a ray, normal or light direction was degenerate.
    """
    _prepare(settings, scene)
    logger.debug(
        "Rendering %dx%d image with %d primitives",
        settings.width,
        settings.height,
        get_primitive_count(),
    )
    _render_kernel(
        settings.width,
        settings.height,
        image_plane_depth(settings.field_of_view),
        settings.render_distance,
        settings.tolerance,
    )
    _check_invalid_vector()


def render_pixel(settings: ImageSettings, scene: SceneNode, row: int, col: int) -> Vec3:
    """Render a single pixel and return its clamped color.

    This is a Python-callable function for testing. For production rendering,
    use render_image() which processes all pixels in parallel.

    Raises:
        IndexError: If the pixel lies outside the image.
    """
    if not (0 <= row < settings.height and 0 <= col < settings.width):
        raise IndexError(f"Pixel ({row}, {col}) outside {settings.width}x{settings.height} image")
    _prepare(settings, scene)
    color = _render_single_pixel(
        row,
        col,
        settings.width,
        settings.height,
        image_plane_depth(settings.field_of_view),
        settings.render_distance,
        settings.tolerance,
    )
    _check_invalid_vector()
    return Vec3(float(color[0]), float(color[1]), float(color[2]))


def get_image_numpy() -> npt.NDArray[np.float64]:
    """Get the rendered colors as a NumPy array.

    Returns:
        Array of shape (height, width, 3), row 0 at the top, values in [0, 1].

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    return _color_buffer.to_numpy()[:height, :width, :]


def get_pixels_numpy() -> npt.NDArray[np.uint8]:
    """Get the rendered image quantized to 8-bit RGB.

    Each channel is ``round(255 * c)`` with ties to even.

    Returns:
        Array of shape (height, width, 3) with dtype uint8.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    return np.rint(255.0 * get_image_numpy()).astype(np.uint8)
