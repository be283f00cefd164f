"""Named colors and color utilities.

Colors are ``Vec3`` values in RGB order with a nominal [0, 1] range. They are
left unclamped while shading and only clamped right before quantization.
"""

from sdf_marcher.core.vector import Vec3

# RGB FF0000
RED = Vec3(1.0, 0.0, 0.0)
# RGB 00FF00
GREEN = Vec3(0.0, 1.0, 0.0)
# RGB 0000FF
BLUE = Vec3(0.0, 0.0, 1.0)
# RGB 000000
BLACK = Vec3(0.0, 0.0, 0.0)
# RGB FFFFFF
WHITE = Vec3(1.0, 1.0, 1.0)
# RGB 7F7F7F, also the shadow dimming factor
GRAY = Vec3(0.5, 0.5, 0.5)
# RGB 800000
DARK_RED = Vec3(0.5, 0.0, 0.0)
# RGB 808000
DARK_YELLOW = Vec3(0.5, 0.5, 0.0)
# RGB FF8080
PINK = Vec3(1.0, 0.5, 0.5)


def mix_colors(a: Vec3, b: Vec3) -> Vec3:
    """Mix two colors additively.

    Useful for building a palette, not for rendering, since it does not
    follow a physical light model::

        red + black   = dark red
        red + green   = dark yellow
        red + white   = pink
        black + white = gray
    """
    return (a + b) * GRAY


def _clamp_channel(value: float) -> float:
    return max(0.0, min(1.0, value))


def clamp(color: Vec3) -> Vec3:
    """Clamp every component of a color to [0, 1]."""
    return Vec3(_clamp_channel(color.x), _clamp_channel(color.y), _clamp_channel(color.z))


def color_to_rgb(color: Vec3) -> tuple[int, int, int]:
    """Quantize a color to an 8-bit RGB triple.

    Each channel becomes ``round(255 * c)`` (ties round to even). The input
    should already be clamped; out-of-range colors give out-of-range integers.
    """
    return (round(255 * color.x), round(255 * color.y), round(255 * color.z))
