"""Camera module for ray generation.

Components:
    pinhole: Pinhole camera at the origin producing one ray per pixel

Image coordinates run from -1 to 1 on both axes; row 0 is the top of the
image and column 0 its left edge.
"""

from .pinhole import get_rays, image_plane_depth, ray_direction, spaced_points

__all__ = [
    "spaced_points",
    "image_plane_depth",
    "ray_direction",
    "get_rays",
]
