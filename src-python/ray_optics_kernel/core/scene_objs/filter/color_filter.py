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

if __name__ == "__main__":
    from ray_optics_kernel.core.scene_objs.base_scene_obj import SurfaceKind
    from ray_optics_kernel.core.scene_objs.base_filter import BaseFilter
    from ray_optics_kernel.core.scene_objs.line_obj_mixin import LineObjMixin
    from ray_optics_kernel.core.geometry import geometry, Vector2, Segment
else:
    from ..base_scene_obj import SurfaceKind
    from ..base_filter import BaseFilter
    from ..line_obj_mixin import LineObjMixin
    from ...geometry import geometry, Vector2, Segment

if TYPE_CHECKING:
    from ...ray import Ray


class Filter(LineObjMixin, BaseFilter):
    """
    Color filter with shape of a line segment.

    The transmitted part of the light continues in the incident direction;
    the reflected part leaves as from a mirror along the segment. A part
    whose channels sum to zero is not emitted, so a ray can produce two,
    one or no children.

    Attributes:
        p1 (Vector2): The first endpoint of the segment
        p2 (Vector2): The second endpoint of the segment
        filter_color (tuple): Transmission levels (r, g, b), 0..255
        reflectivity (float): Fraction of the stopped light that is reflected
    """

    type = 'Filter'
    kind = SurfaceKind.FILTER
    is_optical = True

    defaults = {
        'p1': (0.0, 0.0),
        'p2': (0.0, 100.0),
        'filter_color': (255.0, 0.0, 0.0),
        'reflectivity': 1.0,
    }
    point_props = ('p1', 'p2')

    def return_ray(self, ray: 'Ray', hit_point: Vector2,
                   segment: Optional[Segment] = None) -> List['Ray']:
        """
        Split the ray into reflected and transmitted parts.

        Args:
            ray: The incident ray.
            hit_point: The intersection point.
            segment: Unused; a filter has a single segment.

        Returns:
            The reflected and/or transmitted rays.
        """
        transmitted_color, reflected_color = self.split_color(ray.color)

        new_rays = []
        if reflected_color.channel_sum > 0:
            reflected_dir = geometry.reflect(ray.direction, self.p2 - self.p1)
            new_rays.append(ray.spawn(hit_point, reflected_dir, 'reflect', reflected_color))
        if transmitted_color.channel_sum > 0:
            new_rays.append(ray.spawn(hit_point, ray.direction, 'transmit', transmitted_color))
        return new_rays


if __name__ == "__main__":
    from ray_optics_kernel.core.scene import Scene
    from ray_optics_kernel.core.ray import Ray

    scene = Scene()
    red_filter = Filter(scene, p1=(10, -10), p2=(10, 10), reflectivity=0.5)
    ray = Ray((0, 0), (1, 0))
    hit = red_filter.check_ray_intersects(ray)[0]
    for child in red_filter.return_ray(ray, hit.point):
        print(child, child.color)
