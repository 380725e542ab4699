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

from typing import List, Optional, Sequence, TYPE_CHECKING

# Handle both relative imports (when used as a module) and absolute imports (when run as script)
if __name__ == "__main__":
    from ray_optics_kernel.core.scene_objs.base_glass import BaseGlass
    from ray_optics_kernel.core.scene_objs.base_scene_obj import Intersection
    from ray_optics_kernel.core.geometry import geometry, Vector2, Segment
    from ray_optics_kernel.core.constants import DEFAULT_REFRACTIVE_INDEX
else:
    from ..base_glass import BaseGlass
    from ..base_scene_obj import Intersection
    from ...geometry import geometry, Vector2, Segment
    from ...constants import DEFAULT_REFRACTIVE_INDEX

if TYPE_CHECKING:
    from ...ray import Ray


class PolygonalBlock(BaseGlass):
    """
    Refractive block bounded by a polygon.

    The vertices are given in winding order and the polygon need not be
    convex. The boundary segments (one per edge, including the closing
    edge) are regenerated whenever a vertex changes, so they always join
    adjacent vertices.

    Attributes:
        vertices (tuple of Vector2): The polygon vertices (at least 3).
        segments (list of Segment): The boundary edges, derived.
        n (float): The refractive index.
    """

    type = 'PolygonalBlock'
    min_vertices = 3

    defaults = {
        'vertices': [(0.0, 0.0), (100.0, 0.0), (100.0, 100.0), (0.0, 100.0)],
        'n': DEFAULT_REFRACTIVE_INDEX,
    }

    @property
    def vertices(self):
        return tuple(self._vertices)

    @vertices.setter
    def vertices(self, value: Sequence) -> None:
        points = [Vector2.of(v) for v in value]
        self._check_vertex_count(len(points))
        self._vertices = points
        self.update_segments()

    def _check_vertex_count(self, count: int) -> None:
        if count < self.min_vertices:
            raise ValueError(
                f"{self.__class__.type} needs at least {self.min_vertices} vertices, got {count}"
            )

    def update_segments(self) -> None:
        """Regenerate the boundary segments from the vertices."""
        count = len(self._vertices)
        self.segments: List[Segment] = [
            Segment.from_points(self._vertices[i], self._vertices[(i + 1) % count])
            for i in range(count)
        ]
        self._mark_changed()

    def set_vertex(self, index: int, point: Vector2) -> None:
        """
        Move one vertex and regenerate the segments.

        Args:
            index: Vertex index.
            point: The new position.
        """
        self._vertices[index] = Vector2.of(point)
        self.update_segments()

    def insert_vertex(self, index: int, point: Vector2) -> None:
        """Insert a vertex before ``index`` and regenerate the segments."""
        self._check_vertex_count(len(self._vertices) + 1)
        self._vertices.insert(index, Vector2.of(point))
        self.update_segments()

    def remove_vertex(self, index: int) -> None:
        """
        Remove a vertex and regenerate the segments.

        Raises:
            ValueError: If the polygon would have too few vertices.
        """
        self._check_vertex_count(len(self._vertices) - 1)
        del self._vertices[index]
        self.update_segments()

    def contains(self, point: Vector2) -> bool:
        """Even-odd test of the point against the polygon boundary."""
        return geometry.point_in_polygon(Vector2.of(point), self.segments)

    def get_default_center(self) -> Vector2:
        """The area centroid of the polygon."""
        return geometry.polygon_centroid(self._vertices)

    def get_centroid(self) -> Vector2:
        return self.get_default_center()

    def to_shapely(self):
        """Convert to a Shapely Polygon."""
        return geometry.polygon_to_shapely(self._vertices)

    def move(self, diff: Vector2) -> bool:
        diff = Vector2.of(diff)
        self._vertices = [v + diff for v in self._vertices]
        self.update_segments()
        return True

    def rotate(self, angle: float, center: Optional[Vector2] = None) -> bool:
        """Rotate the polygon about ``center`` (default: its centroid)."""
        rotation_center = Vector2.of(center) if center is not None else self.get_default_center()
        self._vertices = [rotation_center + (v - rotation_center).rotate(angle)
                          for v in self._vertices]
        self.update_segments()
        return True

    def scale(self, scale: float, center: Optional[Vector2] = None) -> bool:
        """Scale the polygon about ``center`` (default: its centroid)."""
        scaling_center = Vector2.of(center) if center is not None else self.get_default_center()
        self._vertices = [scaling_center + (v - scaling_center) * scale for v in self._vertices]
        self.update_segments()
        return True

    def morph(self, target: Vector2, tag=None, offset: Optional[Vector2] = None) -> None:
        """
        Reshape the polygon toward an editor target.

        Tags:
            int: move that vertex to the target.
            None: move the whole polygon so its centroid is at ``target - offset``.
        """
        if isinstance(tag, int) and not isinstance(tag, bool):
            self.set_vertex(tag, target)
        else:
            super().morph(target, tag, offset)

    def check_ray_intersects(self, ray: 'Ray') -> List[Intersection]:
        """
        Intersect the ray with every edge.

        Args:
            ray: The ray.

        Returns:
            Up to one intersection per edge, tagged with the edge.
        """
        hits = []
        for seg in self.segments:
            pt = geometry.ray_segment_intersection(ray.origin, ray.direction, seg)
            if pt is not None:
                hits.append(Intersection(pt, seg))
        return hits

    def get_surface_normal(self, hit_point: Vector2, segment: Optional[Segment]) -> Vector2:
        """
        Normal of the hit edge.

        When the edge is not given, the edge nearest to the hit point is
        used.
        """
        if segment is None:
            pt = hit_point.to_shapely()
            segment = min(self.segments, key=lambda s: s.to_shapely().distance(pt))
        return segment.normal


class RectBlock(PolygonalBlock):
    """
    Rectangular refractive block.

    Vertex 0 is the anchor corner; the 'resize' morph drags the opposite
    corner (vertex 2) and keeps the sides axis aligned.
    """

    type = 'RectBlock'

    def _check_vertex_count(self, count: int) -> None:
        if count != 4:
            raise ValueError(f"RectBlock needs exactly 4 vertices, got {count}")

    @classmethod
    def from_corner(cls, scene, corner: Vector2, width: float, height: float,
                    n: float = DEFAULT_REFRACTIVE_INDEX, **kwargs) -> 'RectBlock':
        """
        Create a rectangle from a corner and its size.

        Args:
            scene: The scene.
            corner: Position of vertex 0.
            width: Extent along x.
            height: Extent along y.
            n: Refractive index.
        """
        x, y = Vector2.of(corner)
        vertices = [(x, y), (x + width, y), (x + width, y + height), (x, y + height)]
        return cls(scene, vertices=vertices, n=n, **kwargs)

    def morph(self, target: Vector2, tag=None, offset: Optional[Vector2] = None) -> None:
        if tag == 'resize':
            target = Vector2.of(target)
            v = self._vertices
            v[1] = Vector2(target.x, v[1].y)
            v[2] = target
            v[3] = Vector2(v[3].x, target.y)
            self.update_segments()
        else:
            super().morph(target, tag, offset)


if __name__ == "__main__":
    from ray_optics_kernel.core.scene import Scene
    from ray_optics_kernel.core.ray import Ray

    scene = Scene()
    prism = PolygonalBlock(scene, vertices=[(0, 0), (100, 0), (50, 80)], n=1.5)
    print(f"Centroid: {prism.get_centroid()}")
    print(f"Contains (50, 20): {prism.contains(Vector2(50, 20))}")

    ray = Ray((-50, 20), (1, 0))
    hit = min(prism.check_ray_intersects(ray), key=lambda h: (h.point - ray.origin).mag_sq())
    for child in prism.return_ray(ray, hit.point, hit.segment):
        print(child)
