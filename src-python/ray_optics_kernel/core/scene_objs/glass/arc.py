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
from typing import List, Optional, Tuple, TYPE_CHECKING

# Handle both relative imports (when used as a module) and absolute imports (when run as script)
if __name__ == "__main__":
    from ray_optics_kernel.core.scene_objs.base_glass import BaseGlass
    from ray_optics_kernel.core.scene_objs.base_scene_obj import SurfaceKind
    from ray_optics_kernel.core.scene_objs.circle_obj_mixin import CircleObjMixin
    from ray_optics_kernel.core.geometry import geometry, Vector2, Segment, ArcSpan, fix_angle
    from ray_optics_kernel.core.constants import TWO_PI
else:
    from ..base_glass import BaseGlass
    from ..base_scene_obj import SurfaceKind
    from ..circle_obj_mixin import CircleObjMixin
    from ...geometry import geometry, Vector2, Segment, ArcSpan, fix_angle
    from ...constants import TWO_PI

if TYPE_CHECKING:
    from ...ray import Ray


class Arc(CircleObjMixin, BaseGlass):
    """
    Circular arc surface.

    Only the part of the circle between ``start_angle`` and
    ``start_angle + span`` (counter-clockwise) interacts with rays.

    With ``n`` set to None the arc is a curved mirror: rays are reflected
    about the tangent at the hit point. With a refractive index the arc is
    a refractive boundary of the full circle, restricted to its span.

    Attributes:
        center (Vector2): Center of the circle.
        radius (float): Radius of the circle.
        start_angle (float): Start heading, normalized into [0, 2*pi).
        span (float): Angular extent, in (0, 2*pi].
        n (float or None): Refractive index, or None for a reflective arc.
    """

    type = 'Arc'
    kind = SurfaceKind.ARC

    defaults = {
        'center': (0.0, 0.0),
        'radius': 50.0,
        'start_angle': 0.0,
        'span': math.pi / 2,
        'n': None,
    }
    point_props = ('center',)

    @property
    def n(self) -> Optional[float]:
        return self._n

    @n.setter
    def n(self, value: Optional[float]) -> None:
        if value is not None and (not isinstance(value, (int, float)) or value <= 0):
            raise ValueError(f"Arc refractive index must be positive or None, got {value}")
        self._n = None if value is None else float(value)

    @property
    def start_angle(self) -> float:
        return self._start_angle

    @start_angle.setter
    def start_angle(self, value: float) -> None:
        self._start_angle = fix_angle(value)

    @property
    def span(self) -> float:
        return self._span

    @span.setter
    def span(self, value: float) -> None:
        if not isinstance(value, (int, float)) or value <= 0:
            raise ValueError(f"Arc span must be positive, got {value}")
        self._span = min(float(value), TWO_PI)

    @property
    def is_reflective(self) -> bool:
        return self._n is None

    def get_arc_span(self) -> ArcSpan:
        return ArcSpan(self.start_angle, self.span)

    def get_end_points(self) -> Tuple[Vector2, Vector2]:
        """The two ends of the arc (start, end)."""
        return (self.center + Vector2.from_angle(self.start_angle, self.radius),
                self.center + Vector2.from_angle(self.start_angle + self.span, self.radius))

    def rotate(self, angle: float, center: Optional[Vector2] = None) -> bool:
        """Rotate the arc, turning its span with it."""
        super().rotate(angle, center)
        self.start_angle = self.start_angle + angle
        return True

    def get_surface_normal(self, hit_point: Vector2, segment: Optional[Segment] = None) -> Vector2:
        """Radial direction at the hit point."""
        return (hit_point - self.center).normalize()

    def return_ray(self, ray: 'Ray', hit_point: Vector2,
                   segment: Optional[Segment] = None) -> List['Ray']:
        """
        Reflect the ray about the tangent, or refract it if the arc has an index.

        Args:
            ray: The incident ray.
            hit_point: The intersection point on the arc.
            segment: Unused.

        Returns:
            The outgoing rays.
        """
        if self.is_reflective:
            tangent = (hit_point - self.center).perpendicular()
            return [ray.spawn(hit_point, geometry.reflect(ray.direction, tangent), 'reflect')]
        return super().return_ray(ray, hit_point, segment)

    def morph(self, target: Vector2, tag: Optional[str] = None,
              offset: Optional[Vector2] = None) -> None:
        """
        Reshape the arc toward an editor target.

        Tags:
            'rotate': the arc starts at the target's heading.
            'resize': the radius and the end of the arc follow the target.
            None: move the center to ``target - offset``.
        """
        target = Vector2.of(target)
        to_target = target - self.center
        if tag == 'rotate':
            if to_target.mag_sq() > 0:
                self.start_angle = to_target.heading()
                self._mark_changed()
        elif tag == 'resize':
            if to_target.mag_sq() > 0:
                self.radius = to_target.mag()
                span = fix_angle(to_target.heading() - self.start_angle)
                if span > 0:
                    self.span = span
                self._mark_changed()
        else:
            super().morph(target, tag, offset)


if __name__ == "__main__":
    from ray_optics_kernel.core.scene import Scene
    from ray_optics_kernel.core.ray import Ray

    scene = Scene()
    arc = Arc(scene, center=(0, 0), radius=50, start_angle=-math.pi / 4, span=math.pi / 2)
    ray = Ray((-100, 10), (1, 0))
    for hit in arc.check_ray_intersects(ray):
        print(f"Hit at {hit.point}: {arc.return_ray(ray, hit.point)}")
