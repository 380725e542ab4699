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

from typing import List, Tuple

from .base_scene_obj import BaseSceneObj
from ..color import Color
from ..constants import MAX_INTENSITY
from ..geometry import Vector2
from ..ray import Ray


class BaseLightSource(BaseSceneObj):
    """
    The base class for light sources.

    A light source seeds a trace pass: ``emit`` returns fresh root rays,
    which the simulator then propagates. Subclasses store an ``origin``
    and decide how many rays to emit and in which directions.

    Attributes:
        origin (Vector2): Position of the source.
        intensity (float): Intensity of each emitted ray, 0..255.
        color (tuple): (r, g, b) levels of the emitted light, 0..255.
    """

    is_light_source = True
    point_props = ('origin',)

    @property
    def intensity(self) -> float:
        return self._intensity

    @intensity.setter
    def intensity(self, value: float) -> None:
        if not isinstance(value, (int, float)) or not 0 <= value <= MAX_INTENSITY:
            raise ValueError(f"intensity must be in [0, {MAX_INTENSITY}], got {value}")
        self._intensity = float(value)
        self._mark_changed()

    @property
    def color(self) -> Tuple[float, float, float]:
        return self._color

    @color.setter
    def color(self, value) -> None:
        levels = tuple(float(v) for v in value)
        if len(levels) != 3 or any(v < 0 or v > MAX_INTENSITY for v in levels):
            raise ValueError(f"color must be three levels in [0, 255], got {value!r}")
        self._color = levels
        self._mark_changed()

    def make_ray(self, origin: Vector2, direction: Vector2) -> Ray:
        """Create a root ray carrying this source's color and identity."""
        ray = Ray(origin, direction, Color(*self._color, self._intensity))
        ray.source_uuid = self.uuid
        return ray

    def emit(self) -> List[Ray]:
        """
        Emit the root rays of a trace pass.

        Returns:
            New Ray objects; nothing is shared with previous passes.
        """
        raise NotImplementedError

    def move(self, diff: Vector2) -> bool:
        self.origin = self.origin + Vector2.of(diff)
        self._mark_changed()
        return True

    def get_default_center(self) -> Vector2:
        return self.origin
