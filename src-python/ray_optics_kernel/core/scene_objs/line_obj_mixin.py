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

from ..geometry import geometry, Vector2, Segment
from .base_scene_obj import Intersection

if TYPE_CHECKING:
    from ..ray import Ray


class LineObjMixin:
    """
    Mixin class for scene objects that are defined by a line segment.

    This mixin provides common functionality for objects with two endpoints (p1 and p2):
    - The derived segment, direction and length
    - Transformation methods (move, rotate, scale)
    - Editor morphs ('rotate', 'resize', 'resize_start')
    - Ray intersection testing

    Usage:
        class MyLineObject(LineObjMixin, BaseSceneObj):
            defaults = {
                'p1': (0, 0),
                'p2': (100, 100)
            }
            point_props = ('p1', 'p2')

    Note: This class should be used as a mixin with BaseSceneObj or its subclasses.
          In Python's MRO (Method Resolution Order), mixins should come before the base class.
    """

    @property
    def segment(self) -> Segment:
        """The boundary segment from p1 to p2."""
        return Segment.from_points(self.p1, self.p2)

    @property
    def length(self) -> float:
        return (self.p2 - self.p1).mag()

    def get_direction(self) -> Optional[Vector2]:
        """Unit direction from p1 to p2 (zero vector if degenerate)."""
        return (self.p2 - self.p1).normalize()

    def move(self, diff: Vector2) -> bool:
        """
        Move the line segment by the given displacement.

        Args:
            diff: The displacement.

        Returns:
            True, indicating the movement was successful.
        """
        diff = Vector2.of(diff)
        self.p1 = self.p1 + diff
        self.p2 = self.p2 + diff
        self._mark_changed()
        return True

    def rotate(self, angle: float, center: Optional[Vector2] = None) -> bool:
        """
        Rotate the line segment by the given angle.

        Args:
            angle: The angle in radians. Positive for counter-clockwise.
            center: The center of rotation. If None, uses the midpoint of the
                line segment.

        Returns:
            True, indicating the rotation was successful.
        """
        rotation_center = Vector2.of(center) if center is not None else self.get_default_center()
        self.p1 = rotation_center + (self.p1 - rotation_center).rotate(angle)
        self.p2 = rotation_center + (self.p2 - rotation_center).rotate(angle)
        self._mark_changed()
        return True

    def scale(self, scale: float, center: Optional[Vector2] = None) -> bool:
        """
        Scale the line segment by the given scale factor.

        Args:
            scale: The scale factor.
            center: The center of scaling. If None, uses the midpoint of the
                line segment.

        Returns:
            True, indicating the scaling was successful.
        """
        scaling_center = Vector2.of(center) if center is not None else self.get_default_center()
        self.p1 = scaling_center + (self.p1 - scaling_center) * scale
        self.p2 = scaling_center + (self.p2 - scaling_center) * scale
        self._mark_changed()
        return True

    def get_default_center(self) -> Vector2:
        """
        Get the default center of rotation or scaling.

        Returns:
            The midpoint of the line segment.
        """
        return geometry.midpoint(self.p1, self.p2)

    def set_pos(self, point: Vector2) -> None:
        """Move the segment so that p1 is at ``point``, keeping its displacement."""
        self.move(Vector2.of(point) - self.p1)

    def set_direction(self, target: Vector2, keep_length: bool = True) -> None:
        """
        Aim the segment from p1 toward ``target``.

        A target equal to p1 has no direction and is ignored.

        Args:
            target: Point to aim at.
            keep_length: Keep the current length; otherwise p2 becomes ``target``.
        """
        target = Vector2.of(target)
        direction = (target - self.p1).normalize()
        if direction.mag_sq() == 0:
            return
        if keep_length:
            self.p2 = self.p1 + direction * self.length
        else:
            self.p2 = target
        self._mark_changed()

    def morph(self, target: Vector2, tag: Optional[str] = None,
              offset: Optional[Vector2] = None) -> None:
        """
        Reshape the segment toward an editor target.

        Tags:
            'rotate': aim p2 at the target, keeping the length.
            'resize': move p2 to the target.
            'resize_start': move p1 to ``target - offset``, keeping p2.
            None: move the whole segment so p1 is at ``target - offset``.
        """
        target = Vector2.of(target)
        if tag == 'rotate':
            self.set_direction(target, keep_length=True)
        elif tag == 'resize':
            self.set_direction(target, keep_length=False)
        elif tag == 'resize_start':
            offset = Vector2(0, 0) if offset is None else Vector2.of(offset)
            self.p1 = target - offset
            self._mark_changed()
        else:
            super().morph(target, tag, offset)

    def check_ray_intersects(self, ray: 'Ray') -> List[Intersection]:
        """
        Check whether the object intersects with the given ray.

        Args:
            ray: The ray.

        Returns:
            A list with the intersection point, or an empty list.
        """
        seg = self.segment
        pt = geometry.ray_segment_intersection(ray.origin, ray.direction, seg)
        if pt is None:
            return []
        return [Intersection(pt, seg)]
