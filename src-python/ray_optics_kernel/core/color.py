"""
Copyright 2026 ray-optics-kernel authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

from typing import Sequence, Tuple, Union

from .constants import MAX_INTENSITY


class Color:
    """
    RGBA color of a ray, every channel on a 0..255 scale.

    The color channels (r, g, b) describe the spectral content used by
    filters. The alpha channel is the ray's intensity.

    Attributes:
        r (float): Red channel.
        g (float): Green channel.
        b (float): Blue channel.
        a (float): Alpha channel, i.e. intensity.
    """

    def __init__(self, r: float = MAX_INTENSITY, g: float = MAX_INTENSITY,
                 b: float = MAX_INTENSITY, a: float = MAX_INTENSITY):
        for name, value in (('r', r), ('g', g), ('b', b), ('a', a)):
            if value < 0:
                raise ValueError(f"Color channel '{name}' must be non-negative, got {value}")
        self.r = float(r)
        self.g = float(g)
        self.b = float(b)
        self.a = float(a)

    @classmethod
    def of(cls, value: Union['Color', Sequence[float]]) -> 'Color':
        """
        Coerce a Color or a 3/4-element sequence of levels to a Color.

        A 3-element sequence gets full intensity.
        """
        if isinstance(value, Color):
            return value.copy()
        levels = list(value)
        if len(levels) == 3:
            levels.append(MAX_INTENSITY)
        if len(levels) != 4:
            raise ValueError(f"Color needs 3 or 4 levels, got {value!r}")
        return cls(*levels)

    @property
    def levels(self) -> Tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)

    @property
    def rgb(self) -> Tuple[float, float, float]:
        return (self.r, self.g, self.b)

    @property
    def channel_sum(self) -> float:
        """Sum of the color channels (alpha excluded)."""
        return self.r + self.g + self.b

    def with_alpha(self, a: float) -> 'Color':
        """Copy of this color with a different intensity."""
        return Color(self.r, self.g, self.b, a)

    def copy(self) -> 'Color':
        return Color(self.r, self.g, self.b, self.a)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return self.levels == other.levels

    def __repr__(self) -> str:
        return f"Color(r={self.r}, g={self.g}, b={self.b}, a={self.a})"
