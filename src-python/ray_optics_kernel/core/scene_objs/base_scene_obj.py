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

import copy
import uuid as uuid_module
from enum import Enum
from typing import Optional, Dict, Any, List, NamedTuple, Tuple, TYPE_CHECKING

from ..geometry import Vector2, Segment

if TYPE_CHECKING:
    from ..ray import Ray
    from ..scene import Scene


class SurfaceKind(Enum):
    """Surface variants a ray can hit; see Scene.get_objects_by_kind."""
    MIRROR = 'mirror'
    VOID = 'void'
    FILTER = 'filter'
    LENS = 'lens'
    BLOCK = 'block'
    ARC = 'arc'


class Intersection(NamedTuple):
    """
    A candidate intersection reported by a surface.

    Attributes:
        point: The intersection point.
        segment: The boundary segment that was hit, or None for curved
            boundaries.
    """
    point: Vector2
    segment: Optional[Segment] = None


class BaseSceneObj:
    """
    Base class for objects (surfaces and light sources) in the scene.

    Provides:
    - Property initialization from a defaults table; assigning any of these
      properties marks the scene dirty
    - Object identification (uuid, name)
    - The editor mutation hooks (move, set_pos, morph, duplicate)
    - The ray interface (check_ray_intersects, return_ray) with absorbing
      defaults
    """

    type: str = ''
    """The type of the object."""

    kind: Optional[SurfaceKind] = None
    """Surface variant tag used for lookups and trace output; None for light sources."""

    defaults: Dict[str, Any] = {}
    """
    Default values of the object's properties. Every key becomes an attribute;
    a props dict passed to the constructor may only use these keys (plus
    'name').
    """

    point_props: Tuple[str, ...] = ()
    """Properties coerced to Vector2 when set from the props dict."""

    is_optical: bool = False
    """Whether the object interacts with rays."""

    is_light_source: bool = False
    """Whether the object emits rays."""

    def __init__(self, scene: 'Scene', props: Optional[Dict[str, Any]] = None, **kwargs):
        """
        Initialize the base scene object.

        Args:
            scene: The scene the object belongs to.
            props: Property values; missing keys take the class defaults.
            **kwargs: Property values, overriding ``props``.

        Raises:
            ValueError: If a property name is not known for this type.
        """
        self.scene = scene
        self._uuid: str = str(uuid_module.uuid4())
        self._name: Optional[str] = None

        values = dict(props or {})
        values.update(kwargs)
        name = values.pop('name', None)

        defaults = self.__class__.defaults
        for key in values:
            if key not in defaults:
                raise ValueError(f"Unknown property '{key}' for type '{self.__class__.type}'")

        for prop_name, default_value in defaults.items():
            value = values[prop_name] if prop_name in values else copy.deepcopy(default_value)
            setattr(self, prop_name, value)

        self._name = name

    def get_props(self) -> Dict[str, Any]:
        """
        Get the current property values.

        Returns:
            A dict with one entry per key of ``defaults``, deep-copied.
        """
        return {prop_name: copy.deepcopy(getattr(self, prop_name))
                for prop_name in self.__class__.defaults}

    def __setattr__(self, name: str, value: Any) -> None:
        # Every property in the defaults table is a ray-affecting input
        if name in self.__class__.defaults:
            if name in self.point_props and value is not None:
                value = Vector2.of(value)
            super().__setattr__(name, value)
            self._mark_changed()
        else:
            super().__setattr__(name, value)

    def _mark_changed(self) -> None:
        if self.scene is not None:
            self.scene.mark_dirty()

    # ==================== Mutation hooks ====================

    def move(self, diff: Vector2) -> bool:
        """
        Move the object by the given displacement.

        Args:
            diff: The displacement.

        Returns:
            True if the object was moved.
        """
        return False

    def get_default_center(self) -> Optional[Vector2]:
        """
        Get the default center of rotation, scaling and positioning.

        Returns:
            The center, or None if the object has no position.
        """
        return None

    def get_direction(self) -> Optional[Vector2]:
        """The object's unit direction, or None if it has none."""
        return None

    def set_pos(self, point: Vector2) -> None:
        """
        Move the object so that its default center is at ``point``.

        Args:
            point: The new position.
        """
        center = self.get_default_center()
        if center is None:
            return
        self.move(Vector2.of(point) - center)

    def morph(self, target: Vector2, tag: Optional[str] = None,
              offset: Optional[Vector2] = None) -> None:
        """
        Reshape or reposition the object toward an editor target point.

        The base behavior (no tag) repositions the object at
        ``target - offset``. Subclasses handle their own tags and fall back
        to this. The scene is marked dirty; no trace pass is run.

        Args:
            target: The point the editor drags to.
            tag: Which handle is dragged (e.g. 'rotate', 'resize').
            offset: Offset between the grab point and the object position.
        """
        target = Vector2.of(target)
        offset = Vector2(0, 0) if offset is None else Vector2.of(offset)
        self.set_pos(target - offset)
        self._mark_changed()

    def duplicate(self, offset: Optional[Vector2] = None) -> 'BaseSceneObj':
        """
        Create an independent copy of the object.

        The copy is not added to the scene. It is moved by ``offset``; by
        default one grid step along the object's direction, or one grid
        step diagonally for objects without a direction.

        Args:
            offset: Displacement of the copy.

        Returns:
            The new object, named "<name> Duplicate" (or "<name>*" if the
            original is already a duplicate).
        """
        new_obj = self.__class__(self.scene, self.get_props())

        if offset is None:
            grid = self.scene.grid_size if self.scene is not None else 0.0
            direction = self.get_direction()
            if direction is not None:
                offset = direction * grid
            else:
                offset = Vector2(grid, grid)
        offset = Vector2.of(offset)
        if offset.mag_sq() > 0:
            new_obj.move(offset)

        base_name = self.get_display_name()
        if 'Duplicate' in base_name:
            new_obj.name = f"{base_name}*"
        else:
            new_obj.name = f"{base_name} Duplicate"
        return new_obj

    # ==================== Ray interface ====================

    def check_ray_intersects(self, ray: 'Ray') -> List[Intersection]:
        """
        Find the intersections of a ray with the object.

        Args:
            ray: The ray.

        Returns:
            Candidate intersections; the resolver picks the nearest.
        """
        return []

    def return_ray(self, ray: 'Ray', hit_point: Vector2,
                   segment: Optional[Segment] = None) -> List['Ray']:
        """
        Compute the rays leaving the object where ``ray`` hit it.

        The base behavior absorbs the ray.

        Args:
            ray: The incident ray. Its ``end`` is already set to ``hit_point``.
            hit_point: The intersection point.
            segment: The boundary segment that was hit, if any.

        Returns:
            Zero or more outgoing rays.
        """
        return []

    # ==================== Identification ====================

    @property
    def uuid(self) -> str:
        """Auto-generated unique identifier, fixed for the object's lifetime."""
        return self._uuid

    @property
    def name(self) -> Optional[str]:
        """Optional human-readable name."""
        return self._name

    @name.setter
    def name(self, value: Optional[str]) -> None:
        self._name = value

    def get_display_name(self) -> str:
        """
        Get a display name for the object.

        Returns the name if set, otherwise the type plus a short UUID suffix
        (e.g. "Mirror_a1b2c3d4").
        """
        if self._name:
            return self._name
        return f"{self.__class__.type}_{self._uuid[:8]}"

    def __repr__(self) -> str:
        if self._name:
            return f"{self.__class__.__name__}(name='{self._name}', uuid='{self._uuid[:8]}...')"
        return f"{self.__class__.__name__}(uuid='{self._uuid[:8]}...')"
