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

from typing import List, Optional

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


class RaySource(BaseLightSource):
    """
    A single ray.

    Attributes:
        origin (Vector2): Starting point of the ray.
        direction (Vector2): Unit direction. Setting a zero vector leaves
            the direction unchanged.
        intensity (float): Intensity of the ray, 0..255.
        color (tuple): (r, g, b) levels, 0..255.
    """

    type = 'RaySource'

    defaults = {
        'origin': (0.0, 0.0),
        'direction': (1.0, 0.0),
        'intensity': MAX_INTENSITY,
        'color': (MAX_INTENSITY, MAX_INTENSITY, MAX_INTENSITY),
    }

    @property
    def direction(self) -> Vector2:
        return self._direction

    @direction.setter
    def direction(self, value) -> None:
        direction = Vector2.of(value).normalize()
        if direction.mag_sq() == 0:
            if hasattr(self, '_direction'):
                return
            raise ValueError("RaySource direction must be a non-zero vector")
        self._direction = direction
        self._mark_changed()

    def get_direction(self) -> Vector2:
        return self._direction

    def set_direction(self, target: Vector2) -> None:
        """Aim the ray at a point. A target at the origin is ignored."""
        self.direction = Vector2.of(target) - self.origin

    def rotate(self, angle: float, center: Optional[Vector2] = None) -> bool:
        """Rotate the source about ``center`` (default: its origin)."""
        rotation_center = Vector2.of(center) if center is not None else self.origin
        self.origin = rotation_center + (self.origin - rotation_center).rotate(angle)
        self.direction = self._direction.rotate(angle)
        return True

    def morph(self, target: Vector2, tag: Optional[str] = None,
              offset: Optional[Vector2] = None) -> None:
        """
        Tags:
            'rotate' or 'resize': aim the ray at the target.
            None: move the origin to ``target - offset``.
        """
        if tag in ('rotate', 'resize'):
            self.set_direction(target)
        else:
            super().morph(target, tag, offset)

    def emit(self) -> List[Ray]:
        """Emit the single ray."""
        return [self.make_ray(self.origin, self._direction)]


if __name__ == "__main__":
    from ray_optics_kernel.core.scene import Scene

    source = RaySource(Scene(), origin=(10, 10), intensity=128)
    source.set_direction(Vector2(20, 20))
    print(source.emit())
