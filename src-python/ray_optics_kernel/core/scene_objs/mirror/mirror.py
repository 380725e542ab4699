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

# Handle both relative imports (when used as a module) and absolute imports (when run as script)
if __name__ == "__main__":
    from ray_optics_kernel.core.scene_objs.base_scene_obj import BaseSceneObj, SurfaceKind
    from ray_optics_kernel.core.scene_objs.line_obj_mixin import LineObjMixin
    from ray_optics_kernel.core.geometry import geometry, Vector2, Segment
else:
    from ..base_scene_obj import BaseSceneObj, SurfaceKind
    from ..line_obj_mixin import LineObjMixin
    from ...geometry import geometry, Vector2, Segment

if TYPE_CHECKING:
    from ...ray import Ray


class Mirror(LineObjMixin, BaseSceneObj):
    """
    Mirror with shape of a line segment.

    Reflects rays about its own direction: d' = 2(d.m)m - d, where m is the
    unit vector from p1 to p2. The reflected ray keeps the full intensity.

    Attributes:
        p1 (Vector2): The first endpoint of the mirror line segment
        p2 (Vector2): The second endpoint of the mirror line segment
    """

    type = 'Mirror'
    kind = SurfaceKind.MIRROR
    is_optical = True

    defaults = {
        'p1': (0.0, 0.0),
        'p2': (0.0, 100.0),
    }
    point_props = ('p1', 'p2')

    def return_ray(self, ray: 'Ray', hit_point: Vector2,
                   segment: Optional[Segment] = None) -> List['Ray']:
        """
        Reflect the ray.

        Args:
            ray: The incident ray.
            hit_point: The intersection point.
            segment: Unused; a mirror has a single segment.

        Returns:
            The reflected ray.
        """
        reflected_dir = geometry.reflect(ray.direction, self.p2 - self.p1)
        return [ray.spawn(hit_point, reflected_dir, 'reflect')]


if __name__ == "__main__":
    from ray_optics_kernel.core.scene import Scene
    from ray_optics_kernel.core.ray import Ray

    scene = Scene()
    mirror = Mirror(scene, {'p1': (10, -10), 'p2': (10, 10)})
    ray = Ray((0, 0), (1, 0))
    hits = mirror.check_ray_intersects(ray)
    print(f"Hit: {hits[0].point}")
    print(f"Reflected: {mirror.return_ray(ray, hits[0].point)[0]}")
