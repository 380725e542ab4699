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

===============================================================================
Ray Tree Analysis
===============================================================================
Read-only helpers over the ray trees returned by ``Simulator.run()``. Every
function takes the root rays (or a single root) and returns plain
lists/dicts; nothing here mutates a ray.
===============================================================================
"""

from collections import Counter
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.ray import Ray


def _as_roots(rays: Union['Ray', Iterable['Ray']]) -> List['Ray']:
    if hasattr(rays, 'children'):
        return [rays]
    return list(rays)


def iter_rays(rays: Union['Ray', Iterable['Ray']]) -> Iterator['Ray']:
    """
    Walk ray trees depth first, parents before children.

    An explicit stack is used, so arbitrarily deep trees do not hit the
    recursion limit.

    Args:
        rays: A root ray or a list of root rays.

    Yields:
        Ray: Every ray of every tree, in pre-order.
    """
    stack = list(reversed(_as_roots(rays)))
    while stack:
        ray = stack.pop()
        yield ray
        stack.extend(reversed(ray.children))


def get_leaves(rays: Union['Ray', Iterable['Ray']]) -> List['Ray']:
    """Rays without children (absorbed, escaped, dimmed out or truncated)."""
    return [ray for ray in iter_rays(rays) if not ray.children]


def get_tree_depth(rays: Union['Ray', Iterable['Ray']]) -> int:
    """
    Depth of the deepest ray, counted in interactions from the source.

    Returns:
        int: 0 for a root without children, -1 for an empty list.
    """
    return max((ray.depth for ray in iter_rays(rays)), default=-1)


def get_ray_path(rays: Union['Ray', Iterable['Ray']], uuid: str) -> Optional[List['Ray']]:
    """
    Get the chain of rays from a root down to the ray with the given uuid.

    Args:
        rays: A root ray or a list of root rays.
        uuid: The uuid of the target ray.

    Returns:
        list: Rays from the root to the target (inclusive), or None if the
        uuid is not in the trees.
    """
    for root in _as_roots(rays):
        stack = [(root, [root])]
        while stack:
            ray, path = stack.pop()
            if ray.uuid == uuid:
                return path
            for child in ray.children:
                stack.append((child, path + [child]))
    return None


def filter_rays_by_interaction(rays: Union['Ray', Iterable['Ray']],
                               interaction_type: str) -> List['Ray']:
    """
    Select rays created by one kind of interaction.

    Args:
        rays: A root ray or a list of root rays.
        interaction_type: 'source', 'reflect', 'refract', 'tir',
            'transmit' or 'lens'.

    Returns:
        list: Matching rays in pre-order.
    """
    return [ray for ray in iter_rays(rays) if ray.interaction_type == interaction_type]


def get_ray_statistics(rays: Union['Ray', Iterable['Ray']],
                       horizon: Optional[float] = None) -> Dict[str, Any]:
    """
    Compute statistics about traced ray trees.

    Args:
        rays: A root ray or a list of root rays.
        horizon: Length used for rays without an end when summing lengths.
            If None, such rays are left out of ``total_length``.

    Returns:
        dict: Dictionary containing:
            - total_rays: Number of rays in all trees
            - root_rays: Number of trees
            - leaf_rays: Number of rays without children
            - unresolved_rays: Rays whose end was never set (not expanded)
            - max_depth: Depth of the deepest ray (-1 if there are none)
            - by_interaction: Count of rays per interaction type
            - total_intensity: Sum of leaf intensities
            - source_intensity: Sum of root intensities
            - total_length: Sum of ray segment lengths

    Example:
        >>> stats = get_ray_statistics(simulator.run())
        >>> print(f"Total rays: {stats['total_rays']}")
        >>> print(f"TIR events: {stats['by_interaction'].get('tir', 0)}")
    """
    roots = _as_roots(rays)
    all_rays = list(iter_rays(roots))
    leaves = [ray for ray in all_rays if not ray.children]

    total_length = 0.0
    unresolved = 0
    for ray in all_rays:
        if ray.end is None:
            unresolved += 1
            if horizon is None:
                continue
        total_length += (ray.get_end(horizon) - ray.origin).mag()

    return {
        'total_rays': len(all_rays),
        'root_rays': len(roots),
        'leaf_rays': len(leaves),
        'unresolved_rays': unresolved,
        'max_depth': max((ray.depth for ray in all_rays), default=-1),
        'by_interaction': dict(Counter(ray.interaction_type for ray in all_rays)),
        'total_intensity': sum(ray.intensity for ray in leaves),
        'source_intensity': sum(ray.intensity for ray in roots),
        'total_length': total_length,
    }
