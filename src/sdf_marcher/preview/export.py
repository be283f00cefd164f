"""Image export utilities for rendered images.

This module writes 8-bit RGB pixel arrays to files. The renderer hands over
a row-major ``(height, width, 3)`` uint8 array and owns no file format; the
format is picked from the file suffix.

Supported formats:
    - PNG (via Pillow)
    - Binary PPM, P6 (via Pillow)

Example:
    >>> from sdf_marcher.core.image import render_pixels
    >>> from sdf_marcher.preview.export import save_image
    >>> from sdf_marcher.scene.default_scene import default_scene, default_settings
    >>> pixels = render_pixels(default_settings().replace(width=64, height=64), default_scene())
    >>> save_image(pixels, "output.ppm")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

# Pillow format name for each supported suffix
SUPPORTED_FORMATS = {
    ".png": "PNG",
    ".ppm": "PPM",
}


def save_image(pixels: npt.NDArray[np.uint8], filepath: str | Path) -> Path:
    """Save an RGB pixel array to a PNG or PPM file.

    Args:
        pixels: Array of shape (height, width, 3) with dtype uint8.
        filepath: Output path; the suffix selects the format.

    Returns:
        The path written.

    Raises:
        ValueError: If the suffix is not supported or the array has the
            wrong shape or dtype.
    """
    path = Path(filepath)
    image_format = SUPPORTED_FORMATS.get(path.suffix.lower())
    if image_format is None:
        raise ValueError(
            f"Unsupported image format {path.suffix!r}; "
            f"expected one of {', '.join(sorted(SUPPORTED_FORMATS))}"
        )
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"Expected an array of shape (height, width, 3), got {pixels.shape}")
    if pixels.dtype != np.uint8:
        raise ValueError(f"Expected dtype uint8, got {pixels.dtype}")

    pil_image = PILImage.fromarray(np.ascontiguousarray(pixels))
    pil_image.save(path, format=image_format)
    return path


def compute_rmse(
    image_a: npt.NDArray[np.generic],
    image_b: npt.NDArray[np.generic],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
