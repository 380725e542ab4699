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

from typing import List, Optional, TYPE_CHECKING

from ..geometry import geometry, Vector2, Circle, ArcSpan
from .base_scene_obj import Intersection

if TYPE_CHECKING:
    from ..ray import Ray


class CircleObjMixin:
    """
    Mixin class for scene objects that are defined by a circle.

    This mixin provides common functionality for circular objects with:
    - center: Center of the circle
    - radius: Radius of the circle (validated positive)

    Features:
    - Transformation methods (move, rotate, scale)
    - Editor morph 'resize' (radius follows the target)
    - Ray intersection testing, optionally restricted to an arc span
    - Point containment

    Usage:
        class MyCircleObject(CircleObjMixin, BaseSceneObj):
            defaults = {
                'center': (0, 0),
                'radius': 50.0
            }
            point_props = ('center',)

    Note: This class should be used as a mixin with BaseSceneObj or its subclasses.
          In Python's MRO (Method Resolution Order), mixins should come before the base class.
    """

    @property
    def radius(self) -> float:
        return self._radius

    @radius.setter
    def radius(self, value: float) -> None:
        if not isinstance(value, (int, float)) or value <= 0:
            raise ValueError(f"{self.__class__.type} radius must be a positive number, got {value}")
        self._radius = float(value)

    @property
    def circle(self) -> Circle:
        return Circle(self.center, self.radius)

    def get_arc_span(self) -> Optional[ArcSpan]:
        """Part of the circle that interacts with rays; None for the full circle."""
        return None

    def move(self, diff: Vector2) -> bool:
        """
        Move the circle by the given displacement.

        Args:
            diff: The displacement.

        Returns:
            True, indicating the movement was successful.
        """
        self.center = self.center + Vector2.of(diff)
        self._mark_changed()
        return True

    def rotate(self, angle: float, center: Optional[Vector2] = None) -> bool:
        """
        Rotate the circle about a point.

        Args:
            angle: The angle in radians. Positive for counter-clockwise.
            center: The center of rotation. If None, uses the center of the
                circle (which leaves a full circle unchanged).

        Returns:
            True, indicating the rotation was successful.
        """
        rotation_center = Vector2.of(center) if center is not None else self.get_default_center()
        self.center = rotation_center + (self.center - rotation_center).rotate(angle)
        self._mark_changed()
        return True

    def scale(self, scale: float, center: Optional[Vector2] = None) -> bool:
        """
        Scale the circle by the given scale factor.

        Args:
            scale: The scale factor (positive).
            center: The center of scaling. If None, uses the center of the circle.

        Returns:
            True, indicating the scaling was successful.
        """
        scaling_center = Vector2.of(center) if center is not None else self.get_default_center()
        self.center = scaling_center + (self.center - scaling_center) * scale
        self.radius = self.radius * scale
        self._mark_changed()
        return True

    def get_default_center(self) -> Vector2:
        """
        Get the default center of rotation or scaling.

        Returns:
            The center of the circle.
        """
        return self.center

    def contains(self, point: Vector2) -> bool:
        """Whether the point lies inside or on the circle."""
        return self.circle.contains(Vector2.of(point))

    def morph(self, target: Vector2, tag: Optional[str] = None,
              offset: Optional[Vector2] = None) -> None:
        """
        Reshape the circle toward an editor target.

        Tags:
            'resize': the radius becomes the distance from the center to the target.
            None: move the center to ``target - offset``.
        """
        target = Vector2.of(target)
        if tag == 'resize':
            r = (target - self.center).mag()
            if r > 0:
                self.radius = r
                self._mark_changed()
        else:
            super().morph(target, tag, offset)

    def check_ray_intersects(self, ray: 'Ray') -> List[Intersection]:
        """
        Check whether the object intersects with the given ray.

        Args:
            ray: The ray.

        Returns:
            Forward intersection points on the circle (or its arc span).
        """
        points = geometry.ray_circle_intersections(
            ray.origin, ray.direction, self.circle, self.get_arc_span()
        )
        return [Intersection(pt) for pt in points]
