"""Two-color stripe pattern evaluated in object space.

The stripe rule bands along the Y axis only: ``floor(y * 2) mod 2 == 0``
selects color ``a``, otherwise color ``b``. Each band is therefore half a unit
tall in object space.
"""

from dataclasses import dataclass
from typing import Any

import taichi as ti
import taichi.math as tm

from src.phong.core.color import BLACK, WHITE, Color, as_color

vec3 = tm.vec3


@dataclass(frozen=True)
class StripePattern:
    """A two-color stripe pattern.

    Attributes:
        a: Color of the even bands.
        b: Color of the odd bands.
    """

    a: Color = WHITE
    b: Color = BLACK

    def __post_init__(self) -> None:
        object.__setattr__(self, "a", as_color(self.a))
        object.__setattr__(self, "b", as_color(self.b))

    def to_dict(self) -> dict[str, Any]:
        return {"a": list(self.a), "b": list(self.b)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StripePattern":
        return cls(a=tuple(data.get("a", WHITE)), b=tuple(data.get("b", BLACK)))


@ti.func
def stripe_at(a: vec3, b: vec3, point: vec3) -> vec3:
    """Evaluate the stripe rule at an object-space point.

    Args:
        a: Color of the even bands.
        b: Color of the odd bands.
        point: The object-space point.

    Returns:
        ``a`` when ``floor(point.y * 2)`` is even, ``b`` otherwise.
    """
    band = ti.cast(ti.floor(point.y * 2.0), ti.i32)
    result = b
    if band % 2 == 0:
        result = a
    return result
