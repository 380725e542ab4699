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

from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, TYPE_CHECKING

# Handle both relative imports (when used as a module) and absolute imports (when run as script)
if __name__ == "__main__":
    from ray_optics_kernel.core.ray import Ray
    from ray_optics_kernel.core.geometry import Vector2, Segment
    from ray_optics_kernel.core.constants import (
        MIN_RAY_SEGMENT_LENGTH_SQUARED, DEFAULT_MAX_RAYS, DEFAULT_MAX_DEPTH, DEFAULT_HALF_WIDTH
    )
else:
    from .ray import Ray
    from .geometry import Vector2, Segment
    from .constants import (
        MIN_RAY_SEGMENT_LENGTH_SQUARED, DEFAULT_MAX_RAYS, DEFAULT_MAX_DEPTH, DEFAULT_HALF_WIDTH
    )

if TYPE_CHECKING:
    from .scene import Scene
    from .scene_objs.base_scene_obj import BaseSceneObj


# Exceptions treated as numerical faults of a branch. Anything else is a bug
# and propagates.
NUMERICAL_FAULTS = (ArithmeticError, ValueError, RecursionError)


class Hit(NamedTuple):
    """
    The nearest intersection of a ray with the scene.

    Attributes:
        point: The intersection point.
        obj: The surface that was hit.
        segment: The boundary segment that was hit, None for curved boundaries.
        distance_squared: Squared distance from the ray origin.
    """
    point: Vector2
    obj: 'BaseSceneObj'
    segment: Optional[Segment]
    distance_squared: float


@dataclass
class TraceContext:
    """
    State of one trace pass, passed down the recursion.

    A fresh context is created by every call to ``Simulator.run``, so the
    warning flag never leaks from one pass to the next.

    Attributes:
        horizon: Length of rays that hit nothing.
        max_depth: Rays at this depth are kept but not expanded (None = no cap).
        max_rays: Expansion stops once this many rays have been traced.
        warning: Set when a numerical fault stopped a branch. Once set, no
            further branch is expanded in this pass.
        fault: Description of the first fault.
        ray_count: Number of rays traced so far.
        truncated_count: Number of rays not expanded because of the depth cap.
        ray_limit_reached: Whether ``max_rays`` stopped the expansion.
    """
    horizon: float = 2 * DEFAULT_HALF_WIDTH
    max_depth: Optional[int] = DEFAULT_MAX_DEPTH
    max_rays: int = DEFAULT_MAX_RAYS
    warning: bool = False
    fault: Optional[str] = None
    ray_count: int = 0
    truncated_count: int = 0
    ray_limit_reached: bool = False
    messages: List[str] = field(default_factory=list)

    def trip(self, error: BaseException) -> None:
        """Record a numerical fault and stop further expansion."""
        if not self.warning:
            self.fault = f"{type(error).__name__}: {error}"
        self.warning = True

    def can_expand(self, ray: Ray) -> bool:
        """
        Whether a ray may be propagated further in this pass.

        Updates the truncation counters as a side effect.
        """
        if self.warning:
            return False
        if self.max_depth is not None and ray.depth >= self.max_depth:
            self.truncated_count += 1
            return False
        if self.ray_count >= self.max_rays:
            self.ray_limit_reached = True
            return False
        return True


class Simulator:
    """
    Ray tracing engine.

    Each light source in the scene emits its root rays and every root is
    expanded recursively into a ray tree: the nearest surface is found, the
    surface computes the outgoing rays, and each of those is expanded in
    turn. The pass ends when every branch has left the scene, been
    absorbed, dimmed below the scene's minimum intensity, or been stopped by
    the depth cap, the ray budget or a numerical fault.

    Attributes:
        scene (Scene): The scene containing objects and settings
        max_rays (int): Maximum number of rays traced in one pass
        verbose (int): Verbosity level
        rays (list): Root rays of the last pass, None before the first pass
        context (TraceContext): Context of the last pass
    """

    def __init__(self, scene: 'Scene', max_rays: int = DEFAULT_MAX_RAYS, verbose: int = 0) -> None:
        """
        Initialize the simulator.

        Args:
            scene (Scene): The scene to simulate
            max_rays (int): Maximum rays to trace per pass (default: 10000)
            verbose (int): Verbosity level (default: 0)
                0 = silent (no debug output)
                1 = verbose (show a summary of each pass)
                2 = very verbose/debug (show every ray and hit)
        """
        if max_rays < 1:
            raise ValueError(f"max_rays must be at least 1, got {max_rays}")
        self.scene: 'Scene' = scene
        self.max_rays: int = max_rays
        self.verbose: int = verbose
        self.rays: Optional[List[Ray]] = None
        self.context: Optional[TraceContext] = None
        self._traced_revision: Optional[int] = None

    def run(self) -> List[Ray]:
        """
        Run a full trace pass.

        Numerical faults never escape: they stop the affected branch, set
        the context's warning flag and are reported in ``scene.warning``.

        Returns:
            list: The root rays, one tree per emitted ray, in source order.
        """
        self.scene.error = None
        self.scene.warning = None
        ctx = TraceContext(
            horizon=self.scene.horizon,
            max_depth=self.scene.max_depth,
            max_rays=self.max_rays,
        )

        roots: List[Ray] = []
        for source in self.scene.light_sources:
            emitted = source.emit()
            if self.verbose >= 1:
                print(f"[Simulator] {source.get_display_name()} emitted {len(emitted)} rays")
            for ray in emitted:
                roots.append(ray)
                if not ctx.can_expand(ray):
                    continue
                try:
                    self.propagate(ray, ctx)
                except NUMERICAL_FAULTS as err:
                    ctx.trip(err)

        self._report(ctx)
        self.rays = roots
        self.context = ctx
        self._traced_revision = self.scene.revision
        return roots

    def update(self) -> List[Ray]:
        """
        Retrace only if the scene changed since the last pass.

        Returns:
            list: The root rays of the current pass.
        """
        if self.rays is None or self._traced_revision != self.scene.revision:
            return self.run()
        if self.verbose >= 1:
            print("[Simulator] Scene unchanged, reusing last trace")
        return self.rays

    @property
    def is_dirty(self) -> bool:
        """Whether the scene changed since the last pass."""
        return self.rays is None or self._traced_revision != self.scene.revision

    def propagate(self, ray: Ray, ctx: TraceContext) -> None:
        """
        Expand one ray into its subtree.

        Args:
            ray: The ray to expand. Its ``end`` and ``children`` are reset.
            ctx: The context of the current pass.
        """
        ray.children = []
        ray.end = None
        ctx.ray_count += 1

        hit = self.find_nearest_intersection(ray)
        if hit is None:
            ray.end = ray.origin + ray.direction * ctx.horizon
            if self.verbose >= 2:
                print(f"  [depth {ray.depth}] {ray.interaction_type} ray leaves the scene")
            return

        ray.end = hit.point
        new_rays = hit.obj.return_ray(ray, hit.point, hit.segment)
        if self.verbose >= 2:
            print(f"  [depth {ray.depth}] hit {hit.obj.get_display_name()} "
                  f"({hit.obj.kind.value if hit.obj.kind is not None else hit.obj.type}) at "
                  f"({hit.point.x:.4f}, {hit.point.y:.4f}) -> {len(new_rays)} rays")

        for child in new_rays:
            ray.children.append(child)
            if not ctx.can_expand(child):
                continue
            try:
                self.propagate(child, ctx)
            except NUMERICAL_FAULTS as err:
                if self.verbose >= 1:
                    print(f"[Simulator] Numerical fault at depth {child.depth}: {err}")
                ctx.trip(err)

    def find_nearest_intersection(self, ray: Ray) -> Optional[Hit]:
        """
        Find the nearest intersection between a ray and the scene's surfaces.

        Surfaces are evaluated in scene order; on an exact tie the first one
        wins. Points within ``MIN_RAY_SEGMENT_LENGTH`` of the ray origin are
        the surface the ray starts on and are ignored.

        Args:
            ray (Ray): The ray to test for intersections

        Returns:
            Hit or None: The nearest hit, or None if the ray hits nothing.
        """
        nearest: Optional[Hit] = None
        for obj in self.scene.optical_objs:
            for candidate in obj.check_ray_intersects(ray):
                distance_squared = (candidate.point - ray.origin).mag_sq()
                if distance_squared <= MIN_RAY_SEGMENT_LENGTH_SQUARED:
                    continue
                if nearest is None or distance_squared < nearest.distance_squared:
                    nearest = Hit(candidate.point, obj, candidate.segment, distance_squared)
        return nearest

    def _report(self, ctx: TraceContext) -> None:
        messages = []
        if ctx.warning:
            messages.append(f"Tracing stopped after a numerical fault ({ctx.fault})")
        if ctx.truncated_count:
            messages.append(
                f"{ctx.truncated_count} rays reached the maximum depth ({ctx.max_depth})"
            )
        if ctx.ray_limit_reached:
            messages.append(f"Simulation stopped: maximum ray count ({self.max_rays}) reached")
        ctx.messages = messages
        self.scene.warning = "; ".join(messages) if messages else None

        if self.verbose >= 1:
            print(f"[Simulator] Pass complete: {ctx.ray_count} rays traced")
            for message in messages:
                print(f"[Simulator] Warning: {message}")


if __name__ == "__main__":
    from ray_optics_kernel.core.scene import Scene
    from ray_optics_kernel.core.scene_objs.mirror.mirror import Mirror
    from ray_optics_kernel.core.scene_objs.glass.circular_block import CircularBlock
    from ray_optics_kernel.core.scene_objs.light_source.single_ray import RaySource

    scene = Scene()
    scene.add_object(Mirror(scene, p1=(10, -10), p2=(10, 10)))
    scene.add_object(CircularBlock(scene, center=(-50, 0), radius=20, n=1.5))
    scene.add_object(RaySource(scene, origin=(0, 0), direction=(1, 0)))

    simulator = Simulator(scene, verbose=2)
    roots = simulator.run()
    print(roots[0])
