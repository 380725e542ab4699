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

from .base_scene_obj import BaseSceneObj, SurfaceKind, Intersection
from .line_obj_mixin import LineObjMixin
from .circle_obj_mixin import CircleObjMixin
from .base_filter import BaseFilter
from .base_glass import BaseGlass
from .base_light_source import BaseLightSource
from .mirror import Mirror
from .blocker import Void
from .filter import Filter
from .glass import Lens, PolygonalBlock, RectBlock, CircularBlock, Arc
from .light_source import RaySource, PointLight, Beam

__all__ = ['BaseSceneObj', 'SurfaceKind', 'Intersection', 'LineObjMixin', 'CircleObjMixin', 'BaseFilter', 'BaseGlass', 'BaseLightSource', 'Mirror', 'Void', 'Filter', 'Lens', 'PolygonalBlock', 'RectBlock', 'CircularBlock', 'Arc', 'RaySource', 'PointLight', 'Beam']
