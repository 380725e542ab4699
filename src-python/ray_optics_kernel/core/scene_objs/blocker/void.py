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

from ..base_scene_obj import BaseSceneObj, SurfaceKind
from ..line_obj_mixin import LineObjMixin
from ...geometry import Vector2, Segment

if TYPE_CHECKING:
    from ...ray import Ray


class Void(LineObjMixin, BaseSceneObj):
    """
    Absorbing line segment.

    Every ray that hits it terminates at the hit point without children.

    Attributes:
        p1 (Vector2): The first endpoint of the segment
        p2 (Vector2): The second endpoint of the segment
    """

    type = 'Void'
    kind = SurfaceKind.VOID
    is_optical = True

    defaults = {
        'p1': (0.0, 0.0),
        'p2': (0.0, 100.0),
    }
    point_props = ('p1', 'p2')

    def return_ray(self, ray: 'Ray', hit_point: Vector2,
                   segment: Optional[Segment] = None) -> List['Ray']:
        """Absorb the ray: it ends at the hit point."""
        ray.end = hit_point
        return []
