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
import uuid as uuid_module
from typing import Optional

from .constants import (
    DEFAULT_HALF_WIDTH, DEFAULT_MAX_DEPTH, DEFAULT_MIN_INTENSITY, DEFAULT_GRID_SIZE
)


class Scene:
    """
    Container for scene objects and trace settings.

    The scene is mutated by its owner between trace passes and read as a
    snapshot during one. Insertion order is kept and is the order in which
    the collision resolver evaluates surfaces (first surface wins a tie).

    Attributes:
        objs (list): All objects in the scene
        optical_objs (list): Surfaces that interact with rays
        light_sources (list): Objects that emit rays
        error (str or None): Error message of the last trace pass
        warning (str or None): Warning message of the last trace pass
        name (str or None): Optional name for the scene
        revision (int): Incremented on every change; used to skip
            retracing an unchanged scene

    Properties:
        half_width (float): Half width of the visible scene. A ray that hits
            nothing ends at twice this distance from its origin.
        max_depth (int or None): Maximum depth of a ray tree. None disables
            the cap and relies only on intensity decay.
        min_intensity (float): Split rays dimmer than this (0..255 scale)
            are not emitted.
        grid_size (float): Offset given to duplicated objects.
    """

    def __init__(self):
        """Initialize an empty scene with default settings."""
        self.objs = []
        self.optical_objs = []
        self.light_sources = []
        self.error = None
        self.warning = None
        self.name = None
        self.revision = 0
        self._half_width = DEFAULT_HALF_WIDTH
        self._max_depth = DEFAULT_MAX_DEPTH
        self._min_intensity = DEFAULT_MIN_INTENSITY
        self._grid_size = DEFAULT_GRID_SIZE
        self._uuid: str = str(uuid_module.uuid4())

    @property
    def half_width(self) -> float:
        return self._half_width

    @half_width.setter
    def half_width(self, value: float) -> None:
        if not isinstance(value, (int, float)) or value <= 0:
            raise ValueError(f"half_width must be a positive number, got {value}")
        self._half_width = float(value)
        self.mark_dirty()

    @property
    def max_depth(self) -> Optional[int]:
        return self._max_depth

    @max_depth.setter
    def max_depth(self, value: Optional[int]) -> None:
        if value is not None:
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"max_depth must be a positive integer or None, got {value}")
        self._max_depth = value
        self.mark_dirty()

    @property
    def min_intensity(self) -> float:
        return self._min_intensity

    @min_intensity.setter
    def min_intensity(self, value: float) -> None:
        if not isinstance(value, (int, float)) or value < 0:
            raise ValueError(f"min_intensity must be a non-negative number, got {value}")
        self._min_intensity = float(value)
        self.mark_dirty()

    @property
    def grid_size(self) -> float:
        return self._grid_size

    @grid_size.setter
    def grid_size(self, value: float) -> None:
        if not isinstance(value, (int, float)) or value <= 0:
            raise ValueError(f"grid_size must be a positive number, got {value}")
        self._grid_size = float(value)

    @property
    def horizon(self) -> float:
        """Length given to rays that hit nothing."""
        return 2 * self._half_width

    @property
    def uuid(self) -> str:
        """Unique identifier of this scene, fixed for its lifetime."""
        return self._uuid

    def get_display_name(self) -> str:
        """
        Get a display name for the scene.

        Returns the user-defined name if set, otherwise "Scene" plus a short
        UUID suffix.
        """
        if self.name:
            return self.name
        return f"Scene_{self._uuid[:8]}"

    def mark_dirty(self) -> None:
        """Record that the scene changed and needs a new trace pass."""
        self.revision += 1

    def add_object(self, obj):
        """
        Add an object to the scene.

        Light sources go to ``light_sources`` and ray-interacting surfaces
        to ``optical_objs``; both keep insertion order.

        Args:
            obj: The scene object to add

        Returns:
            The object, for chaining.
        """
        self.objs.append(obj)
        if getattr(obj, 'is_light_source', False):
            self.light_sources.append(obj)
        elif getattr(obj, 'is_optical', False):
            self.optical_objs.append(obj)
        self.mark_dirty()
        return obj

    def remove_object(self, obj):
        """
        Remove an object from the scene.

        Args:
            obj: The scene object to remove
        """
        if obj in self.objs:
            self.objs.remove(obj)
        if obj in self.optical_objs:
            self.optical_objs.remove(obj)
        if obj in self.light_sources:
            self.light_sources.remove(obj)
        self.mark_dirty()

    def clear(self):
        """Remove all objects from the scene."""
        self.objs = []
        self.optical_objs = []
        self.light_sources = []
        self.error = None
        self.warning = None
        self.mark_dirty()

    def get_object_by_name(self, name: str):
        """Return the first object with the given name, or None."""
        for obj in self.objs:
            if getattr(obj, 'name', None) == name:
                return obj
        return None

    def get_objects_by_kind(self, kind):
        """
        Get the surfaces of one variant, in scene order.

        Args:
            kind: A SurfaceKind member or its value (e.g. 'mirror').

        Returns:
            list: Matching objects from ``optical_objs``.
        """
        value = getattr(kind, 'value', kind)
        return [obj for obj in self.optical_objs
                if getattr(getattr(obj, 'kind', None), 'value', None) == value]

    def __repr__(self) -> str:
        return (f"Scene(name={self.get_display_name()!r}, surfaces={len(self.optical_objs)}, "
                f"light_sources={len(self.light_sources)}, revision={self.revision})")
