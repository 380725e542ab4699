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
    from ray_optics_kernel.core.geometry import Vector2, fix_angle
    from ray_optics_kernel.core.ray import Ray
    from ray_optics_kernel.core.constants import MAX_INTENSITY
else:
    from ..base_light_source import BaseLightSource
    from ...geometry import Vector2, fix_angle
    from ...ray import Ray
    from ...constants import MAX_INTENSITY


class Beam(BaseLightSource):
    """
    Parallel beam.

    The ray origins are evenly spaced along a segment that starts at
    ``origin`` and runs perpendicular to the beam direction (direction
    rotated by +pi/2). All rays share the direction ``from_angle(angle)``.

    Attributes:
        origin (Vector2): First end of the emitting segment.
        angle (float): Beam direction in radians, normalized into [0, 2*pi).
        length (float): Length of the emitting segment.
        density (float): Rays per 100 units of length; the spacing between
            rays is 100 / density.
        intensity (float): Intensity of each ray, 0..255.
        color (tuple): (r, g, b) levels, 0..255.
        rays (list of Ray): The constituent rays. Changing ``length`` or
            ``density`` rebuilds them; moving or turning the beam only
            repositions them.

    Notes:
        - A zero-length beam emits a single ray.
    """

    type = 'Beam'

    defaults = {
        'origin': (0.0, 0.0),
        'angle': 0.0,
        'length': 100.0,
        'density': 10.0,
        'intensity': MAX_INTENSITY,
        'color': (MAX_INTENSITY, MAX_INTENSITY, MAX_INTENSITY),
    }

    def __init__(self, scene, props=None, **kwargs):
        self.rays: List[Ray] = []
        super().__init__(scene, props, **kwargs)
        self.reset_rays()

    @property
    def origin(self) -> Vector2:
        return self._origin

    @origin.setter
    def origin(self, value) -> None:
        self._origin = Vector2.of(value)
        self.reposition_rays()

    @property
    def angle(self) -> float:
        return self._angle

    @angle.setter
    def angle(self, value: float) -> None:
        self._angle = fix_angle(value)
        self.reposition_rays()

    @property
    def length(self) -> float:
        return self._length

    @length.setter
    def length(self, value: float) -> None:
        if not isinstance(value, (int, float)) or value < 0:
            raise ValueError(f"Beam length must be non-negative, got {value}")
        self._length = float(value)
        self.reset_rays()

    @property
    def density(self) -> float:
        return self._density

    @density.setter
    def density(self, value: float) -> None:
        if not isinstance(value, (int, float)) or value <= 0:
            raise ValueError(f"Beam density must be positive, got {value}")
        self._density = float(value)
        self.reset_rays()

    @property
    def spacing(self) -> float:
        """Distance between neighboring rays."""
        return 100.0 / self._density

    @spacing.setter
    def spacing(self, value: float) -> None:
        if not isinstance(value, (int, float)) or value <= 0:
            raise ValueError(f"Beam spacing must be positive, got {value}")
        self.density = 100.0 / value

    def get_direction(self) -> Vector2:
        return Vector2.from_angle(self._angle)

    def get_displacement(self) -> Vector2:
        """Vector from ``origin`` to the other end of the emitting segment."""
        return Vector2.from_angle(self._angle + math.pi / 2, self._length)

    def get_default_center(self) -> Vector2:
        return self._origin + self.get_displacement() * 0.5

    def get_offsets(self) -> np.ndarray:
        """Distances of the ray origins from ``origin`` along the segment."""
        # Tolerance keeps the far end when length is a multiple of spacing
        count = int(math.floor(self._length / self.spacing + 1e-9)) + 1
        return np.arange(count) * self.spacing

    def _ready(self) -> bool:
        return all(hasattr(self, attr) for attr in ('_origin', '_angle', '_length', '_density'))

    def reset_rays(self) -> None:
        """Rebuild the constituent rays (their number may change)."""
        if not self._ready():
            return
        direction = self.get_direction()
        perpendicular = Vector2.from_angle(self._angle + math.pi / 2)
        self.rays = [Ray(self._origin + perpendicular * float(s), direction)
                     for s in self.get_offsets()]
        self._mark_changed()

    def reposition_rays(self) -> None:
        """Move the constituent rays to the current origin and angle."""
        if not self._ready():
            return
        offsets = self.get_offsets()
        if len(offsets) != len(self.rays):
            self.reset_rays()
            return
        direction = self.get_direction()
        perpendicular = Vector2.from_angle(self._angle + math.pi / 2)
        for ray, s in zip(self.rays, offsets):
            ray.origin = self._origin + perpendicular * float(s)
            ray.direction = direction
        self._mark_changed()

    def move(self, diff: Vector2) -> bool:
        self.origin = self._origin + Vector2.of(diff)
        return True

    def rotate(self, angle: float, center: Optional[Vector2] = None) -> bool:
        """Turn the beam about ``center`` (default: the middle of the segment)."""
        rotation_center = Vector2.of(center) if center is not None else self.get_default_center()
        self._origin = rotation_center + (self._origin - rotation_center).rotate(angle)
        self.angle = self._angle + angle
        return True

    def set_pos(self, point: Vector2) -> None:
        """Move the beam so that ``origin`` is at ``point``."""
        self.origin = point

    def morph(self, target: Vector2, tag: Optional[str] = None,
              offset: Optional[Vector2] = None) -> None:
        """
        Tags:
            'rotate': point the beam toward the target from the segment's middle.
            'resize': the segment runs from ``origin`` to the target.
            None: move ``origin`` to ``target - offset``.
        """
        target = Vector2.of(target)
        if tag == 'rotate':
            aim = target - self.get_default_center()
            if aim.mag_sq() > 0:
                center = self.get_default_center()
                self.angle = aim.heading()
                # Keep the middle of the segment in place
                self.origin = center - self.get_displacement() * 0.5
        elif tag == 'resize':
            span = target - self._origin
            if span.mag_sq() > 0:
                self._angle = fix_angle(span.heading() - math.pi / 2)
                self.length = span.mag()
        else:
            super().morph(target, tag, offset)

    def emit(self) -> List[Ray]:
        """Emit a fresh copy of every constituent ray."""
        return [self.make_ray(ray.origin, ray.direction) for ray in self.rays]


if __name__ == "__main__":
    from ray_optics_kernel.core.scene import Scene

    beam = Beam(Scene(), origin=(0, 0), angle=0, length=40, density=10)
    print(f"{len(beam.rays)} rays, spacing {beam.spacing}")
    for ray in beam.emit():
        print(ray)
    beam.length = 20
    print(f"After shortening: {len(beam.rays)} rays")
