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

from .geometry import geometry, Vector2, Segment, Circle, ArcSpan, Geometry, fix_angle
from . import constants
from .color import Color
from .ray import Ray
from .scene import Scene
from .simulator import Simulator, TraceContext, Hit

__all__ = [
    'geometry', 'Vector2', 'Segment', 'Circle', 'ArcSpan', 'Geometry', 'fix_angle',
    'constants',
    'Color',
    'Ray',
    'Scene',
    'Simulator', 'TraceContext', 'Hit',
]
