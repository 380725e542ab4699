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

from typing import Optional

from ..base_glass import BaseGlass
from ..circle_obj_mixin import CircleObjMixin
from ...geometry import Vector2, Segment
from ...constants import DEFAULT_REFRACTIVE_INDEX


class CircularBlock(CircleObjMixin, BaseGlass):
    """
    Refractive block bounded by a circle.

    Attributes:
        center (Vector2): Center of the circle.
        radius (float): Radius of the circle.
        n (float): The refractive index.
    """

    type = 'CircularBlock'

    defaults = {
        'center': (0.0, 0.0),
        'radius': 50.0,
        'n': DEFAULT_REFRACTIVE_INDEX,
    }
    point_props = ('center',)

    def get_surface_normal(self, hit_point: Vector2, segment: Optional[Segment] = None) -> Vector2:
        """Radial direction at the hit point."""
        return (hit_point - self.center).normalize()
