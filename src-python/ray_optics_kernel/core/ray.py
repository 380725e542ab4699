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

import uuid as _uuid_mod
from typing import List, Optional

if __name__ == "__main__":
    from ray_optics_kernel.core.geometry import Vector2
    from ray_optics_kernel.core.color import Color
    from ray_optics_kernel.core.constants import MAX_INTENSITY
else:
    from .geometry import Vector2
    from .color import Color
    from .constants import MAX_INTENSITY


class Ray:
    """
    A node of the ray tree produced by a trace pass.

    A ray starts at ``origin`` and travels along the unit vector
    ``direction``. After propagation ``end`` is the point where it hit a
    surface (or the far bound of the scene) and ``children`` holds the rays
    the surface produced. A ray exclusively owns its children; the tree is
    rebuilt wholesale on every pass.

    Attributes:
        origin (Vector2): Starting point.
        direction (Vector2): Unit direction.
        end (Vector2 or None): Terminating point, None while unresolved
            (rendered as extending to the view horizon).
        color (Color): Color; the alpha channel is the intensity.
        children (list): Rays produced at ``end``.

    Lineage Tracking Attributes:
        uuid (str): Unique identifier of this ray.
        parent_uuid (str or None): UUID of the ray that produced this one.
        interaction_type (str): How this ray was created:
            'source' = emitted by a light source
            'reflect' = mirror, filter or Fresnel reflection
            'refract' = Snell's law refraction
            'tir' = total internal reflection
            'transmit' = passed through a filter
            'lens' = deflected by a thin lens
        depth (int): Number of interactions between the source and this ray.
        source_uuid (str or None): UUID of the emitting light source.
    """

    def __init__(
        self,
        origin: Vector2,
        direction: Vector2,
        color: Optional[Color] = None
    ) -> None:
        """
        Initialize a ray.

        Args:
            origin: Starting point (Vector2 or (x, y)).
            direction: Direction (normalized here).
            color: Ray color; white at full intensity by default.
        """
        self.origin: Vector2 = Vector2.of(origin)
        self.direction: Vector2 = Vector2.of(direction).normalize()
        self.end: Optional[Vector2] = None
        self.color: Color = Color() if color is None else Color.of(color)
        self.children: List['Ray'] = []

        self.uuid: str = str(_uuid_mod.uuid4())
        self.parent_uuid: Optional[str] = None
        self.interaction_type: str = 'source'
        self.depth: int = 0
        self.source_uuid: Optional[str] = None

    @property
    def intensity(self) -> float:
        """Intensity (alpha channel, 0..255)."""
        return self.color.a

    @intensity.setter
    def intensity(self, value: float) -> None:
        if value < 0:
            raise ValueError(f"Ray intensity must be non-negative, got {value}")
        self.color.a = float(value)

    @property
    def brightness(self) -> float:
        """Intensity as a fraction of full intensity (0.0 to 1.0)."""
        return self.color.a / MAX_INTENSITY

    def get_end(self, horizon: float) -> Vector2:
        """
        Get the end point, substituting a far point for an unbounded ray.

        Args:
            horizon: Distance used when the ray has no end.
        """
        if self.end is not None:
            return self.end
        return self.origin + self.direction * horizon

    def spawn(
        self,
        origin: Vector2,
        direction: Vector2,
        interaction_type: str,
        color: Optional[Color] = None
    ) -> 'Ray':
        """
        Create a child ray linked to this one.

        The child is not appended to ``children``; the propagation engine
        does that.

        Args:
            origin: Child origin (usually this ray's hit point).
            direction: Child direction.
            interaction_type: How the child was created.
            color: Child color; a copy of this ray's color by default.

        Returns:
            Ray: The new child.
        """
        child = Ray(origin, direction, self.color.copy() if color is None else color)
        child.parent_uuid = self.uuid
        child.interaction_type = interaction_type
        child.depth = self.depth + 1
        child.source_uuid = self.source_uuid
        return child

    def copy(self) -> 'Ray':
        """
        Create a copy of this ray without its children.

        Returns:
            Ray: A new Ray with a new uuid and the same lineage info.
        """
        new_ray = Ray(self.origin, self.direction, self.color.copy())
        new_ray.end = self.end
        new_ray.parent_uuid = self.parent_uuid
        new_ray.interaction_type = self.interaction_type
        new_ray.depth = self.depth
        new_ray.source_uuid = self.source_uuid
        return new_ray

    def __repr__(self) -> str:
        return (f"Ray(origin={self.origin}, direction={self.direction}, end={self.end}, "
                f"intensity={self.intensity:.3f}, type={self.interaction_type!r}, "
                f"children={len(self.children)})")


if __name__ == "__main__":
    ray = Ray((0, 0), (3, 4))
    child = ray.spawn(Vector2(3, 4), Vector2(1, 0), 'reflect')
    ray.end = child.origin
    ray.children.append(child)
    print(ray)
    print(child)
    print(f"Child far end: {child.get_end(2000)}")
