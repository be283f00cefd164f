"""Preview module for output and visualization.

Components:
    export: PNG/PPM export through Pillow and RMSE comparison
    display: Matplotlib-based preview and side-by-side comparison

Example:
    >>> from sdf_marcher.preview import save_image, show_preview
    >>> save_image(pixels, "output.png")
    >>> show_preview(pixels)
"""

from sdf_marcher.preview.display import show_comparison, show_preview
from sdf_marcher.preview.export import SUPPORTED_FORMATS, compute_rmse, save_image

__all__ = [
    "show_preview",
    "show_comparison",
    "save_image",
    "compute_rmse",
    "SUPPORTED_FORMATS",
]
