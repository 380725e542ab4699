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
from typing import List, Optional, TYPE_CHECKING

# Handle both relative imports (when used as a module) and absolute imports (when run as script)
if __name__ == "__main__":
    from ray_optics_kernel.core.scene_objs.base_scene_obj import BaseSceneObj, SurfaceKind
    from ray_optics_kernel.core.scene_objs.line_obj_mixin import LineObjMixin
    from ray_optics_kernel.core.geometry import Vector2, Segment
    from ray_optics_kernel.core.constants import DEFAULT_FOCAL_LENGTH
else:
    from ..base_scene_obj import BaseSceneObj, SurfaceKind
    from ..line_obj_mixin import LineObjMixin
    from ...geometry import Vector2, Segment
    from ...constants import DEFAULT_FOCAL_LENGTH

if TYPE_CHECKING:
    from ...ray import Ray


class Lens(LineObjMixin, BaseSceneObj):
    """
    Ideal thin lens with shape of a line segment.

    Rays are redirected through the focal plane: all rays arriving parallel
    to each other meet at the point where the parallel ray through the lens
    center crosses the focal plane. Only the direction changes; the
    intensity is untouched.

    Attributes:
        p1 (Vector2): The first endpoint of the lens.
        p2 (Vector2): The second endpoint of the lens.
        focal_length (float): Positive = converging, negative = diverging.

    Notes:
        - A ray through the lens center continues straight.
        - A ray parallel to the axis passes through the focal point.
    """

    type = 'Lens'
    kind = SurfaceKind.LENS
    is_optical = True

    defaults = {
        'p1': (0.0, -50.0),
        'p2': (0.0, 50.0),
        'focal_length': DEFAULT_FOCAL_LENGTH,
    }
    point_props = ('p1', 'p2')

    @property
    def focal_length(self) -> float:
        return self._focal_length

    @focal_length.setter
    def focal_length(self, value: float) -> None:
        if not isinstance(value, (int, float)) or value == 0:
            raise ValueError(f"focal_length must be a non-zero number, got {value}")
        self._focal_length = float(value)

    def get_focal_points(self):
        """
        The two focal points on the lens axis.

        Returns:
            (front, back) focal points, at -f and +f along the lens normal.
        """
        center = self.get_default_center()
        axis = self.segment.normal
        return center - axis * self.focal_length, center + axis * self.focal_length

    def return_ray(self, ray: 'Ray', hit_point: Vector2,
                   segment: Optional[Segment] = None) -> List['Ray']:
        """
        Deflect the ray through the focal plane.

        Args:
            ray: The incident ray.
            hit_point: The intersection point on the lens.
            segment: Unused; a lens has a single segment.

        Returns:
            The deflected ray.
        """
        center = self.get_default_center()
        f = self.focal_length

        # Cosine of the angle between the ray and the lens axis
        cos_incidence = abs(ray.direction.dot(self.segment.normal))
        focal_target = center + ray.direction * (f / cos_incidence)

        new_dir = (focal_target - hit_point).normalize() * math.copysign(1.0, f)
        if new_dir.mag_sq() == 0:
            new_dir = ray.direction
        return [ray.spawn(hit_point, new_dir, 'lens')]


if __name__ == "__main__":
    from ray_optics_kernel.core.scene import Scene
    from ray_optics_kernel.core.ray import Ray

    scene = Scene()
    lens = Lens(scene, p1=(100, -50), p2=(100, 50), focal_length=100)
    for y in (-30, 0, 30):
        ray = Ray((0, y), (1, 0))
        hit = lens.check_ray_intersects(ray)[0]
        out = lens.return_ray(ray, hit.point)[0]
        print(f"y={y}: direction after lens {out.direction}")
    print(f"Focal points: {lens.get_focal_points()}")
