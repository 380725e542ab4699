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

Ray Optics Kernel
=================

A 2D geometric ray tracing kernel: mirrors, refractive blocks, thin lenses,
color filters and absorbers, traced recursively from light sources into
ray trees.

Main modules:
- core: Simulation engine (Scene, Simulator, Ray, scene objects)
- analysis: Read-only traversal and statistics of traced ray trees

Quick start:
    from ray_optics_kernel import Scene, Simulator
    from ray_optics_kernel.core.scene_objs import Mirror, RaySource
"""

__version__ = "0.1.0"

# Convenience imports for common usage
from .core.scene import Scene
from .core.simulator import Simulator
from .core.ray import Ray

__all__ = [
    'Scene',
    'Simulator',
    'Ray',
    '__version__',
]
