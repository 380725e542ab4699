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

import math
from typing import List, Optional

import numpy as np

# Handle both relative imports (when used as a module) and absolute imports (when run as script)
if __name__ == "__main__":
    from ray_optics_kernel.core.scene_objs.base_light_source import BaseLightSource
    from ray_optics_kernel.core.geometry import Vector2
    from ray_optics_kernel.core.ray import Ray
    from ray_optics_kernel.core.constants import MAX_INTENSITY
else:
    from ..base_light_source import BaseLightSource
    from ...geometry import Vector2
    from ...ray import Ray
    from ...constants import MAX_INTENSITY


class PointLight(BaseLightSource):
    """
    360-degree point source.

    Emits ``ray_count`` rays evenly spaced in angle: the k-th ray has
    heading k * 2*pi / ray_count, starting at heading 0 (+x).

    Attributes:
        origin (Vector2): Position of the source.
        ray_count (int): Number of rays, at least 1.
        intensity (float): Intensity of each ray, 0..255.
        color (tuple): (r, g, b) levels, 0..255.
        headings (numpy.ndarray): Ray headings, regenerated when
            ``ray_count`` changes.

    Usage:
        Point lights are useful for:
        - Testing optical systems with diverging light
        - Placing at focal points to create collimated beams
    """

    type = 'PointLight'

    defaults = {
        'origin': (0.0, 0.0),
        'ray_count': 36,
        'intensity': MAX_INTENSITY,
        'color': (MAX_INTENSITY, MAX_INTENSITY, MAX_INTENSITY),
    }

    @property
    def ray_count(self) -> int:
        return self._ray_count

    @ray_count.setter
    def ray_count(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
            raise ValueError(f"ray_count must be a positive integer, got {value}")
        self._ray_count = int(value)
        self.reset_rays()

    def reset_rays(self) -> None:
        """Regenerate the ray headings for the current ray count."""
        self.headings = np.arange(self._ray_count) * (2 * math.pi / self._ray_count)
        self._mark_changed()

    def rotate(self, angle: float, center: Optional[Vector2] = None) -> bool:
        """Move the origin around ``center``; a point light has no orientation."""
        if center is not None:
            center = Vector2.of(center)
            self.origin = center + (self.origin - center).rotate(angle)
        return True

    def morph(self, target: Vector2, tag: Optional[str] = None,
              offset: Optional[Vector2] = None) -> None:
        """
        Tags:
            'rotate' or 'resize': the ray count becomes the squared distance
                from the origin to the target over 100 (at least one).
            None: move the origin to ``target - offset``.
        """
        if tag in ('rotate', 'resize'):
            dist_sq = (Vector2.of(target) - self.origin).mag_sq()
            self.ray_count = max(1, int(dist_sq / 100))
        else:
            super().morph(target, tag, offset)

    def emit(self) -> List[Ray]:
        """Emit one ray per heading."""
        directions = np.column_stack((np.cos(self.headings), np.sin(self.headings)))
        return [self.make_ray(self.origin, Vector2(dx, dy)) for dx, dy in directions]


if __name__ == "__main__":
    from ray_optics_kernel.core.scene import Scene

    light = PointLight(Scene(), origin=(0, 0), ray_count=4)
    for ray in light.emit():
        print(f"heading={math.degrees(ray.direction.heading()):7.2f}  {ray}")
