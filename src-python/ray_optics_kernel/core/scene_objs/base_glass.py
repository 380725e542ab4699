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

from ..geometry import geometry, Vector2, Segment
from .base_scene_obj import BaseSceneObj, SurfaceKind

if TYPE_CHECKING:
    from ..ray import Ray


class BaseGlass(BaseSceneObj):
    """
    The base class for refractive blocks.

    A block is a closed region with refractive index ``n`` surrounded by a
    medium of index 1. Subclasses provide the containment test and the
    surface normal; this class decides whether the ray is entering or
    leaving, applies Snell's law and splits the intensity between the
    refracted and reflected rays with the Schlick approximation of the
    Fresnel equations.
    """

    kind = SurfaceKind.BLOCK
    is_optical = True

    @property
    def n(self) -> float:
        """Refractive index of the block."""
        return self._n

    @n.setter
    def n(self, value: float) -> None:
        if not isinstance(value, (int, float)) or value <= 0:
            raise ValueError(f"{self.__class__.type} refractive index must be positive, got {value}")
        self._n = float(value)

    def contains(self, point: Vector2) -> bool:
        """
        Whether a point is inside the block.

        Args:
            point: The point to test.
        """
        raise NotImplementedError

    def get_surface_normal(self, hit_point: Vector2, segment: Optional[Segment]) -> Vector2:
        """
        Unit normal of the boundary at the hit point (either orientation).

        Args:
            hit_point: The intersection point.
            segment: The boundary segment that was hit, for polygonal blocks.
        """
        raise NotImplementedError

    def is_leaving(self, ray: 'Ray', hit_point: Vector2) -> bool:
        """
        Determine whether the ray is leaving the block at the hit point.

        The midpoint between the ray origin and the hit point lies inside
        the block exactly when the ray traveled inside it.

        Args:
            ray: The incident ray.
            hit_point: The intersection point.

        Returns:
            True if leaving, False if entering.
        """
        return self.contains(geometry.midpoint(ray.origin, hit_point))

    def return_ray(self, ray: 'Ray', hit_point: Vector2,
                   segment: Optional[Segment] = None) -> List['Ray']:
        """
        Refract (and partially reflect) a ray at the block boundary.

        Args:
            ray: The incident ray.
            hit_point: The intersection point.
            segment: The boundary segment that was hit, if any.

        Returns:
            The refracted and reflected rays, or only the reflected ray under
            total internal reflection. Rays too dim to emit are dropped.
        """
        normal = self.get_surface_normal(hit_point, segment)
        leaving = self.is_leaving(ray, hit_point)
        return self.refract(ray, hit_point, normal, leaving)

    def refract(self, ray: 'Ray', hit_point: Vector2, normal: Vector2, leaving: bool) -> List['Ray']:
        """
        Apply Snell's law and the Fresnel split at a boundary.

        Snell's law: sin(t) = sin(i) / n when entering and sin(t) = sin(i) * n
        when leaving. The vector form is used, so the refracted direction
        comes out directly.

        Args:
            ray: The incident ray.
            hit_point: The intersection point, origin of the new rays.
            normal: Unit normal of the boundary (either orientation).
            leaving: Whether the ray leaves the block.

        Returns:
            List of new rays.
        """
        ratio = self.n if leaving else 1 / self.n

        # Orient the normal against the incident ray
        if normal.dot(ray.direction) > 0:
            normal = -normal

        cos1 = -normal.dot(ray.direction)
        sq1 = 1 - ratio * ratio * (1 - cos1 * cos1)
        reflected_dir = ray.direction + normal * (2 * cos1)

        if sq1 < 0:
            # Total internal reflection: all the light is reflected
            return [ray.spawn(hit_point, reflected_dir, 'tir')]

        cos2 = math.sqrt(sq1)
        refracted_dir = ray.direction * ratio + normal * (ratio * cos1 - cos2)

        reflectance = self.schlick_reflectance(cos1, self.n)
        intensity = ray.intensity

        new_rays = []
        refracted = ray.spawn(hit_point, refracted_dir, 'refract',
                              ray.color.with_alpha(intensity * (1 - reflectance)))
        if self._is_visible(refracted):
            new_rays.append(refracted)
        reflected = ray.spawn(hit_point, reflected_dir, 'reflect',
                              ray.color.with_alpha(intensity * reflectance))
        if self._is_visible(reflected):
            new_rays.append(reflected)
        return new_rays

    def _is_visible(self, ray: 'Ray') -> bool:
        if ray.intensity <= 0:
            return False
        return self.scene is None or ray.intensity >= self.scene.min_intensity

    @staticmethod
    def schlick_reflectance(cos_i: float, n: float) -> float:
        """
        Schlick approximation of the Fresnel reflectance.

        R0 = ((1 - n) / (1 + n))^2 and R = R0 + (1 - R0)(1 - cos_i)^5.

        Args:
            cos_i: Cosine of the angle of incidence.
            n: Refractive index of the block.

        Returns:
            Fraction of the intensity that is reflected, in [0, 1].
        """
        r0 = ((1 - n) / (1 + n)) ** 2
        return r0 + (1 - r0) * (1 - cos_i) ** 5

    def get_critical_angle(self) -> Optional[float]:
        """
        Critical angle for light leaving the block, in radians.

        Returns:
            asin(1/n), or None if n <= 1 (no total internal reflection).
        """
        if self.n <= 1:
            return None
        return math.asin(1 / self.n)
