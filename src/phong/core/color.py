"""Color constants and 8-bit quantization.

Colors are plain ``vec3`` values inside kernels and ``(r, g, b)`` float
tuples on the host. Components are unclamped while light contributions are
summed and may exceed 1.0; they are only clamped when quantized to 8 bits.

Quantization truncates: ``value <= 0`` maps to 0, ``value >= 1`` maps to 255,
anything in between maps to ``int(255 * value)``.
"""

import taichi as ti
import taichi.math as tm

from src.phong.core.transforms import as_vec3

vec3 = tm.vec3
ivec3 = tm.ivec3

Color = tuple[float, float, float]

BLACK: Color = (0.0, 0.0, 0.0)
WHITE: Color = (1.0, 1.0, 1.0)


@ti.func
def quantize_channel(value: ti.f32) -> ti.i32:
    """Quantize one color channel to the 0-255 range."""
    result = 0
    if value >= 1.0:
        result = 255
    elif value > 0.0:
        result = ti.cast(255.0 * value, ti.i32)
    return result


@ti.func
def to_rgb8(color: vec3) -> ivec3:
    """Quantize an RGB color to three 8-bit channel values."""
    return ivec3(
        quantize_channel(color.x),
        quantize_channel(color.y),
        quantize_channel(color.z),
    )


def quantize_color(color: Color) -> tuple[int, int, int]:
    """Host-side counterpart of ``to_rgb8``.

    Args:
        color: Linear RGB color, components unclamped.

    Returns:
        The quantized (r, g, b) channel values.
    """
    channels = []
    for value in color:
        if value >= 1.0:
            channels.append(255)
        elif value <= 0.0:
            channels.append(0)
        else:
            channels.append(int(255.0 * value))
    return channels[0], channels[1], channels[2]


def as_color(value) -> Color:
    """Validate and convert a 3-component sequence into a Color tuple.

    Raises:
        ValueError: If the value does not have exactly three components.
    """
    return as_vec3(value)
