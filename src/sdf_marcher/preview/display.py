"""Matplotlib-based preview display for rendered images.

Example:
    >>> from sdf_marcher.core.image import render_pixels
    >>> from sdf_marcher.preview.display import show_preview
    >>> from sdf_marcher.scene.default_scene import default_scene, default_settings
    >>> pixels = render_pixels(default_settings().replace(width=64, height=64), default_scene())
    >>> show_preview(pixels)
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from sdf_marcher.preview.export import compute_rmse


def show_preview(
    pixels: npt.NDArray[np.uint8],
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 8),
    block: bool = True,
) -> None:
    """Display a rendered image as a Matplotlib figure.

    Args:
        pixels: Array of shape (height, width, 3) with dtype uint8.
        title: Custom title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(1, 1, figsize=figsize)

    ax.imshow(pixels)
    ax.axis("off")

    if title is None:
        height, width = pixels.shape[:2]
        title = f"Render Preview - {width}x{height}"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)


def show_comparison(
    image_a: npt.NDArray[np.uint8],
    image_b: npt.NDArray[np.uint8],
    *,
    labels: tuple[str, str] = ("A", "B"),
    diff_scale: float = 10.0,
    figsize: tuple[float, float] = (16, 6),
    block: bool = True,
) -> float:
    """Display side-by-side comparison of two images with difference view.

    Handy for checking the Taichi render against the pure-Python one.

    Args:
        image_a: First image array (H, W, 3).
        image_b: Second image array (H, W, 3).
        labels: Labels for the two images.
        diff_scale: Scale factor for difference amplification.
        figsize: Figure size in inches.
        block: Whether to block execution until figure is closed.

    Returns:
        RMSE between the two images, in 8-bit units.
    """
    import matplotlib.pyplot as plt

    rmse = compute_rmse(image_a, image_b)

    diff = np.abs(image_a.astype(np.float64) - image_b.astype(np.float64)) / 255.0
    diff_amplified = np.clip(diff * diff_scale, 0.0, 1.0)

    fig, axes = plt.subplots(1, 3, figsize=figsize)

    axes[0].imshow(image_a)
    axes[0].set_title(labels[0])
    axes[0].axis("off")

    axes[1].imshow(image_b)
    axes[1].set_title(labels[1])
    axes[1].axis("off")

    axes[2].imshow(diff_amplified)
    axes[2].set_title(f"Difference ({diff_scale}x) - RMSE: {rmse:.4f}")
    axes[2].axis("off")

    plt.tight_layout()
    plt.show(block=block)

    return rmse
