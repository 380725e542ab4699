"""
===============================================================================
SCENE AND SCENE OBJECT TESTS
===============================================================================

Tests for the Scene container and the editor hooks shared by all objects:

1. SCENE
   - Objects routed to optical_objs / light_sources in insertion order
   - Surfaces looked up by kind
   - Validated settings
   - Revision counter

2. OBJECT CONSTRUCTION
   - Defaults, props dict and keyword overrides
   - Unknown properties and invalid values rejected

3. EDITOR HOOKS
   - Segment morphs ('rotate', 'resize', 'resize_start', default move)
   - Circle and arc morphs
   - duplicate(): independent copy, naming and default offset

Run with:
    python developer_tests/test_scene_objs.py

Or with pytest:
    pytest developer_tests/test_scene_objs.py -v
===============================================================================
"""

import sys
import math
from pathlib import Path

# Add the src-python directory to the path
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from ray_optics_kernel.core.scene import Scene
from ray_optics_kernel.core.geometry import Vector2
from ray_optics_kernel.core.scene_objs import (
    Mirror, Void, Filter, Lens, CircularBlock, Arc, PointLight, RaySource, SurfaceKind
)


# =============================================================================
# TEST CONFIGURATION
# =============================================================================

# Tolerance for floating-point comparisons
TOLERANCE = 1e-6


def assert_close(actual, expected, tol=TOLERANCE, msg=""):
    """Assert that two values are close within tolerance."""
    if abs(actual - expected) > tol:
        raise AssertionError(
            f"{msg}: expected {expected}, got {actual} (diff: {abs(actual - expected)})"
        )


def assert_vector_close(actual, expected, tol=TOLERANCE, msg=""):
    """Assert that two vectors are close within tolerance."""
    assert_close(actual.x, expected[0], tol, f"{msg} (x)")
    assert_close(actual.y, expected[1], tol, f"{msg} (y)")


def assert_raises_value_error(func, msg):
    try:
        func()
    except ValueError:
        return
    raise AssertionError(f"{msg} should raise ValueError")


# =============================================================================
# SCENE
# =============================================================================

def test_scene_routing():
    print("\n" + "=" * 60)
    print("TEST: Scene object routing")
    print("=" * 60)

    scene = Scene()
    m1 = scene.add_object(Mirror(scene, name='m1'))
    light = scene.add_object(PointLight(scene))
    m2 = scene.add_object(Void(scene, name='v1'))

    assert scene.objs == [m1, light, m2]
    assert scene.optical_objs == [m1, m2]
    assert scene.light_sources == [light]
    assert scene.get_object_by_name('v1') is m2
    print("  Surfaces and light sources kept in insertion order - PASS")

    m3 = scene.add_object(Mirror(scene, name='m3'))
    assert scene.get_objects_by_kind(SurfaceKind.MIRROR) == [m1, m3]
    assert scene.get_objects_by_kind('void') == [m2]
    assert scene.get_objects_by_kind(SurfaceKind.LENS) == []
    print("  get_objects_by_kind() by enum member or value - PASS")

    revision = scene.revision
    scene.remove_object(m1)
    assert scene.optical_objs == [m2, m3]
    assert scene.revision > revision
    scene.clear()
    assert scene.objs == [] and scene.light_sources == []
    print("  remove_object() and clear() - PASS")


def test_scene_settings():
    print("\n" + "=" * 60)
    print("TEST: Scene settings")
    print("=" * 60)

    scene = Scene()
    assert scene.max_depth == 50
    assert_close(scene.min_intensity, 1.0, msg="min_intensity default")
    assert_close(scene.horizon, 2000.0, msg="horizon default")

    revision = scene.revision
    scene.max_depth = None
    assert scene.revision > revision
    scene.half_width = 10
    assert_close(scene.horizon, 20.0, msg="horizon")

    def set_attr(name, value):
        return lambda: setattr(scene, name, value)

    assert_raises_value_error(set_attr('half_width', 0), "half_width=0")
    assert_raises_value_error(set_attr('max_depth', 0), "max_depth=0")
    assert_raises_value_error(set_attr('max_depth', 2.5), "max_depth=2.5")
    assert_raises_value_error(set_attr('min_intensity', -1), "min_intensity=-1")
    assert_raises_value_error(set_attr('grid_size', 0), "grid_size=0")
    print("  Defaults and validation - PASS")


# =============================================================================
# OBJECT CONSTRUCTION
# =============================================================================

def test_construction():
    print("\n" + "=" * 60)
    print("TEST: Object construction")
    print("=" * 60)

    scene = Scene()
    mirror = Mirror(scene)
    assert mirror.p1 == Vector2(0, 0) and mirror.p2 == Vector2(0, 100)
    print("  Defaults - PASS")

    lens = Lens(scene, {'p1': (0, 0), 'focal_length': 50}, focal_length=80)
    assert lens.p1 == Vector2(0, 0)
    assert_close(lens.focal_length, 80.0, msg="Keyword overrides the props dict")
    assert set(lens.get_props()) == {'p1', 'p2', 'focal_length'}
    print("  Props dict and keyword overrides - PASS")

    assert mirror.get_display_name().startswith('Mirror_')
    assert Mirror(scene, name='M').get_display_name() == 'M'
    assert Mirror(scene).uuid != mirror.uuid
    print("  Names and uuids - PASS")

    assert_raises_value_error(lambda: Mirror(scene, colour=(1, 2)), "Unknown property")
    assert_raises_value_error(lambda: Lens(scene, focal_length=0), "focal_length=0")
    assert_raises_value_error(lambda: CircularBlock(scene, radius=0), "radius=0")
    assert_raises_value_error(lambda: CircularBlock(scene, n=0), "n=0")
    assert_raises_value_error(lambda: Filter(scene, reflectivity=1.5), "reflectivity=1.5")
    assert_raises_value_error(lambda: Filter(scene, filter_color=(300, 0, 0)), "filter_color")
    assert_raises_value_error(lambda: Arc(scene, span=0), "span=0")
    assert_raises_value_error(lambda: Mirror(scene, p1='x'), "p1='x'")
    print("  Invalid values rejected - PASS")


# =============================================================================
# EDITOR HOOKS
# =============================================================================

def test_segment_morphs():
    print("\n" + "=" * 60)
    print("TEST: Segment morphs")
    print("=" * 60)

    scene = Scene()
    mirror = scene.add_object(Mirror(scene, p1=(0, 0), p2=(10, 0)))

    revision = scene.revision
    mirror.morph((0, 5), 'rotate')
    assert_vector_close(mirror.p2, (0, 10), msg="'rotate' keeps the length")
    assert scene.revision > revision

    mirror.morph((3, 4), 'resize')
    assert mirror.p2 == Vector2(3, 4)
    mirror.morph((1, 1), 'resize_start')
    assert mirror.p1 == Vector2(1, 1)
    assert mirror.p2 == Vector2(3, 4)
    print("  'rotate', 'resize', 'resize_start' - PASS")

    mirror.morph((10, 10), offset=(1, 1))
    assert mirror.p1 == Vector2(9, 9)
    assert mirror.p2 == Vector2(11, 12)
    print("  Default morph moves p1 to target - offset - PASS")

    mirror.morph(mirror.p1, 'rotate')
    assert mirror.p2 == Vector2(11, 12), "Aiming at p1 is ignored"
    print("  Degenerate target ignored - PASS")


def test_circle_and_arc_morphs():
    print("\n" + "=" * 60)
    print("TEST: Circle and arc morphs")
    print("=" * 60)

    scene = Scene()
    block = CircularBlock(scene, center=(0, 0), radius=10)
    block.morph((0, 25), 'resize')
    assert_close(block.radius, 25.0, msg="Radius follows the target")
    block.morph((5, 5))
    assert block.center == Vector2(5, 5)
    print("  CircularBlock 'resize' and move - PASS")

    arc = Arc(scene, center=(0, 0), radius=10, start_angle=0, span=math.pi / 2)
    arc.morph((0, 10), 'rotate')
    assert_close(arc.start_angle, math.pi / 2, msg="Start follows the target")
    arc.morph((-20, 0), 'resize')
    assert_close(arc.radius, 20.0, msg="Radius")
    assert_close(arc.span, math.pi / 2, msg="Span ends at the target")
    print("  Arc 'rotate' and 'resize' - PASS")

    arc.rotate(math.pi / 2)
    assert_close(arc.start_angle, math.pi, msg="rotate() turns the span")
    start, end = arc.get_end_points()
    assert_vector_close(start, (-20, 0), msg="Start point")
    assert_vector_close(end, (0, -20), msg="End point")
    print("  rotate() and end points - PASS")


def test_duplicate():
    print("\n" + "=" * 60)
    print("TEST: duplicate()")
    print("=" * 60)

    scene = Scene()
    mirror = scene.add_object(Mirror(scene, p1=(0, 0), p2=(10, 0), name='M'))
    count = len(scene.objs)

    copy = mirror.duplicate()
    assert copy is not mirror
    assert copy.name == 'M Duplicate'
    assert copy.uuid != mirror.uuid
    assert copy.p1 == Vector2(20, 0) and copy.p2 == Vector2(30, 0), "One grid step along the mirror"
    assert len(scene.objs) == count, "The copy is not added to the scene"
    print("  Name, offset along the direction, not added - PASS")

    copy.move((0, 5))
    assert mirror.p1 == Vector2(0, 0), "The copy is independent"
    assert copy.duplicate().name == 'M Duplicate*'
    print("  Independent copy, second-generation name - PASS")

    block = CircularBlock(scene, center=(0, 0), radius=5, n=1.3)
    block_copy = block.duplicate()
    assert block_copy.center == Vector2(20, 20), "Diagonal grid step without a direction"
    assert_close(block_copy.n, 1.3, msg="Properties copied")
    assert block_copy.name.endswith(' Duplicate')
    print("  Objects without a direction move diagonally - PASS")

    light = RaySource(scene, origin=(0, 0), direction=(0, 1))
    assert light.duplicate(offset=(0, 0)).origin == Vector2(0, 0)
    print("  Explicit zero offset - PASS")


# =============================================================================
# RUNNER
# =============================================================================

def run_all_tests():
    """Run all tests and report results."""
    print("\n" + "=" * 78)
    print("SCENE AND SCENE OBJECT TESTS")
    print("=" * 78)

    tests = [
        ("Scene Routing", test_scene_routing),
        ("Scene Settings", test_scene_settings),
        ("Construction", test_construction),
        ("Segment Morphs", test_segment_morphs),
        ("Circle and Arc Morphs", test_circle_and_arc_morphs),
        ("duplicate()", test_duplicate),
    ]

    passed = 0
    failed = 0
    errors = []

    for name, test_func in tests:
        try:
            test_func()
            passed += 1
        except Exception as e:
            failed += 1
            errors.append((name, str(e)))
            print(f"\n  FAILED: {name}")
            print(f"    Error: {e}")

    print("\n" + "=" * 78)
    print(f"SUMMARY: {passed}/{len(tests)} tests passed")
    print("=" * 78)

    if errors:
        print("\nFailed tests:")
        for name, error in errors:
            print(f"  - {name}: {error}")
        return False

    print("\nAll tests passed!")
    return True


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
