"""Image settings shared read-only by every pixel computation.

``ImageSettings`` holds everything needed to produce a render except the
scene itself. Instances are immutable; use ``replace`` to derive variants.

Example:
    >>> import math
    >>> from sdf_marcher.core.settings import ImageSettings
    >>> from sdf_marcher.core.vector import Vec3
    >>> settings = ImageSettings(
    ...     width=64,
    ...     height=48,
    ...     field_of_view=math.pi / 2,
    ...     render_distance=100.0,
    ...     tolerance=1e-5,
    ...     background_color=Vec3(0.0, 0.0, 0.0),
    ...     sun_position=Vec3(10.0, 10.0, 7.0),
    ... )
    >>> settings.validate()
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

from sdf_marcher.core.vector import Vec3
from sdf_marcher.errors import ConfigError

# Ray generation spaces pixels from -1 to 1, which needs at least two samples
MIN_IMAGE_DIMENSION = 2


@dataclass(frozen=True)
class ImageSettings:
    """Rendering settings.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        field_of_view: Field of view in radians.
        render_distance: How far a ray may travel before it counts as a miss.
        tolerance: Distance below which a ray counts as hitting a surface.
            Also the step used for finite-difference normals.
        background_color: Color returned for rays that miss.
        sun_position: Position of the single point light.
    """

    width: int
    height: int
    field_of_view: float
    render_distance: float
    tolerance: float
    background_color: Vec3
    sun_position: Vec3

    def validate(self) -> None:
        """Check the settings can be used to generate rays.

        A non-positive render distance is allowed; every ray then misses.

        Raises:
            ConfigError: If the width or height is below 2.
        """
        for name in ("width", "height"):
            value = getattr(self, name)
            if value < MIN_IMAGE_DIMENSION:
                raise ConfigError(
                    f"Image {name} must be at least {MIN_IMAGE_DIMENSION} pixels, got {value}"
                )

    def replace(self, **changes: Any) -> ImageSettings:
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)
