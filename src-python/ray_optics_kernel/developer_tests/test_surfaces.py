"""
===============================================================================
SURFACE INTERACTION TESTS
===============================================================================

Tests for the line-segment surfaces (Mirror, Void, Filter, Lens):

1. MIRROR
   - Law of reflection (angle in = angle out, intensity kept)
   - Single mirror at 45 degrees scenario

2. VOID
   - Rays end at the hit point without children

3. FILTER
   - Channel split and intensity bookkeeping
   - Fully absorbing filter produces no children

4. LENS
   - Parallel rays meet on the focal plane
   - Outgoing rays do not depend on the order of p1 and p2
   - Diverging lens: outgoing rays extend back to the front focal point

Run with:
    python developer_tests/test_surfaces.py

Or with pytest:
    pytest developer_tests/test_surfaces.py -v
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
from ray_optics_kernel.core.simulator import Simulator
from ray_optics_kernel.core.ray import Ray
from ray_optics_kernel.core.color import Color
from ray_optics_kernel.core.geometry import Vector2
from ray_optics_kernel.core.scene_objs import Mirror, Void, Filter, Lens, RaySource, SurfaceKind


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


def hit_and_return(surface, ray):
    """Intersect a ray with a single surface and return (hit, children)."""
    hits = surface.check_ray_intersects(ray)
    assert len(hits) == 1, f"Expected one hit, got {len(hits)}"
    hit = hits[0]
    ray.end = hit.point
    return hit, surface.return_ray(ray, hit.point, hit.segment)


# =============================================================================
# MIRROR
# =============================================================================

def test_mirror_reflection_law():
    print("\n" + "=" * 60)
    print("TEST: Mirror - law of reflection")
    print("=" * 60)

    scene = Scene()
    mirror = Mirror(scene, p1=(10, -50), p2=(10, 50))
    assert mirror.kind is SurfaceKind.MIRROR

    ray = Ray((0, 0), (1, 1))
    hit, children = hit_and_return(mirror, ray)
    assert_vector_close(hit.point, (10, 10), msg="Hit point")
    assert len(children) == 1
    out = children[0]

    normal = mirror.segment.normal
    assert_close(abs(out.direction.dot(normal)), abs(ray.direction.dot(normal)),
                 msg="Angle of incidence equals angle of reflection")
    tangent = mirror.get_direction()
    assert_close(out.direction.dot(tangent), ray.direction.dot(tangent),
                 msg="Tangential component kept")
    assert_vector_close(out.direction, (-math.sqrt(0.5), math.sqrt(0.5)), msg="Reflected direction")
    assert_close(out.intensity, ray.intensity, msg="Intensity kept")
    assert out.interaction_type == 'reflect'
    assert out.parent_uuid == ray.uuid
    assert out.depth == 1
    print(f"  Reflected direction {out.direction} - PASS")


def test_mirror_45_degree_scenario():
    print("\n" + "=" * 60)
    print("TEST: Mirror - single mirror scenario")
    print("=" * 60)

    scene = Scene()
    scene.add_object(Mirror(scene, p1=(10, -10), p2=(10, 10)))
    scene.add_object(RaySource(scene, origin=(0, 0), direction=(1, 0)))

    roots = Simulator(scene).run()
    root = roots[0]
    assert_vector_close(root.end, (10, 0), msg="Hit point")
    assert len(root.children) == 1
    reflected = root.children[0]
    assert_vector_close(reflected.origin, (10, 0), msg="Reflected origin")
    assert_vector_close(reflected.direction, (-1, 0), msg="Reflected direction")
    print(f"  Reflected from {reflected.origin} toward {reflected.direction} - PASS")

    # The reflected ray leaves the scene
    assert reflected.children == []
    assert_vector_close(reflected.end, (10 - scene.horizon, 0), msg="Far end")
    print("  Reflected ray ends at the scene horizon - PASS")


# =============================================================================
# VOID
# =============================================================================

def test_void_absorbs():
    print("\n" + "=" * 60)
    print("TEST: Void - absorption")
    print("=" * 60)

    scene = Scene()
    scene.add_object(Void(scene, p1=(30, -10), p2=(30, 10)))
    scene.add_object(RaySource(scene, origin=(0, 0), direction=(1, 0)))

    root = Simulator(scene).run()[0]
    assert_vector_close(root.end, (30, 0), msg="Ray ends on the void")
    assert root.children == []
    print("  Ray terminated at the hit point, no children - PASS")


# =============================================================================
# FILTER
# =============================================================================

def test_filter_split():
    print("\n" + "=" * 60)
    print("TEST: Filter - channel split")
    print("=" * 60)

    scene = Scene()
    red_filter = Filter(scene, p1=(10, -10), p2=(10, 10), filter_color=(255, 0, 0), reflectivity=1.0)
    assert red_filter.kind is SurfaceKind.FILTER

    ray = Ray((0, 0), (1, 0), Color(255, 255, 255, 255))
    _, children = hit_and_return(red_filter, ray)
    assert [c.interaction_type for c in children] == ['reflect', 'transmit']
    reflected, transmitted = children

    assert transmitted.color.rgb == (255.0, 0.0, 0.0)
    assert reflected.color.rgb == (0.0, 255.0, 255.0)
    assert_close(transmitted.intensity, 85.0, msg="Transmitted intensity")
    assert_close(reflected.intensity, 170.0, msg="Reflected intensity")
    assert_vector_close(transmitted.direction, (1, 0), msg="Transmitted direction")
    assert_vector_close(reflected.direction, (-1, 0), msg="Reflected direction")
    print("  Red filter: 85 transmitted, 170 reflected - PASS")

    # Half of the stopped light is absorbed
    red_filter.reflectivity = 0.5
    ray = Ray((0, 0), (1, 0), Color(255, 255, 255, 255))
    _, children = hit_and_return(red_filter, ray)
    total = sum(c.intensity for c in children)
    assert_close(children[0].intensity, 85.0, msg="Reflected intensity at 0.5")
    assert total <= ray.intensity + TOLERANCE, "Filter created energy"
    print(f"  Reflectivity 0.5: total out {total:.1f} of {ray.intensity:.1f} - PASS")


def test_filter_fully_absorbing():
    print("\n" + "=" * 60)
    print("TEST: Filter - fully absorbing")
    print("=" * 60)

    scene = Scene()
    scene.add_object(Filter(scene, p1=(10, -10), p2=(10, 10), filter_color=(0, 0, 0), reflectivity=0.0))
    scene.add_object(RaySource(scene, origin=(0, 0), direction=(1, 0)))

    root = Simulator(scene).run()[0]
    assert root.children == []
    assert_vector_close(root.end, (10, 0), msg="Ray ends on the filter")
    print("  No transmitted and no reflected ray - PASS")

    # A filter that passes only red stops a pure blue ray entirely
    blue = Ray((0, 0), (1, 0), Color(0, 0, 255, 200))
    stopper = Filter(scene, p1=(10, -10), p2=(10, 10), filter_color=(255, 0, 0), reflectivity=0.0)
    _, children = hit_and_return(stopper, blue)
    assert children == []
    print("  Blue ray through a red filter absorbed - PASS")


# =============================================================================
# LENS
# =============================================================================

def test_lens_focus():
    print("\n" + "=" * 60)
    print("TEST: Lens - converging")
    print("=" * 60)

    scene = Scene()
    lens = Lens(scene, p1=(100, -50), p2=(100, 50), focal_length=100)
    assert lens.kind is SurfaceKind.LENS

    # Rays parallel to the axis pass through the back focal point
    for y in (-30, 0, 30):
        ray = Ray((0, y), (1, 0))
        hit, children = hit_and_return(lens, ray)
        out = children[0]
        to_focus = Vector2(200, 0) - hit.point
        assert_close(out.direction.cross(to_focus), 0.0, msg=f"Ray at y={y} through the focus")
        assert out.direction.dot(to_focus) > 0
        assert_close(out.intensity, ray.intensity, msg="Intensity kept")
        assert out.interaction_type == 'lens'
    print("  Axis-parallel rays meet at (200, 0) - PASS")

    # Oblique parallel rays meet at one point of the focal plane
    direction = Vector2(1, 0.2)
    for y0 in (-40, -10, 20):
        ray = Ray((0, y0), direction)
        hit, children = hit_and_return(lens, ray)
        to_image = Vector2(200, 20) - hit.point
        assert_close(children[0].direction.cross(to_image), 0.0, msg=f"Oblique ray from y={y0}")
    print("  Oblique parallel rays meet at (200, 20) - PASS")


def test_lens_endpoint_order():
    print("\n" + "=" * 60)
    print("TEST: Lens - endpoint order")
    print("=" * 60)

    scene = Scene()
    lens = Lens(scene, p1=(100, -50), p2=(100, 50), focal_length=100)
    flipped = Lens(scene, p1=(100, 50), p2=(100, -50), focal_length=100)

    for origin, direction in (((0, 30), (1, 0)), ((0, -20), (1, 0.2)), ((200, 10), (-1, 0.1))):
        _, children = hit_and_return(lens, Ray(origin, direction))
        _, flipped_children = hit_and_return(flipped, Ray(origin, direction))
        out = children[0].direction
        flipped_out = flipped_children[0].direction
        assert_close(out.x, flipped_out.x, msg=f"x of ray from {origin}")
        assert_close(out.y, flipped_out.y, msg=f"y of ray from {origin}")
    print("  Swapping p1 and p2 leaves the outgoing rays unchanged - PASS")


def test_lens_diverging():
    print("\n" + "=" * 60)
    print("TEST: Lens - diverging")
    print("=" * 60)

    scene = Scene()
    lens = Lens(scene, p1=(100, -50), p2=(100, 50), focal_length=-100)
    ray = Ray((0, 30), (1, 0))
    hit, children = hit_and_return(lens, ray)
    out = children[0]

    from_focus = hit.point - Vector2(0, 0)
    assert_close(out.direction.cross(from_focus), 0.0, msg="Extends back to the front focus")
    assert out.direction.dot(from_focus) > 0, "Ray should keep moving away from the lens"
    assert out.direction.y > 0, "Ray should bend away from the axis"
    print(f"  Outgoing direction {out.direction} - PASS")


# =============================================================================
# RUNNER
# =============================================================================

def run_all_tests():
    """Run all tests and report results."""
    print("\n" + "=" * 78)
    print("SURFACE INTERACTION TESTS")
    print("=" * 78)

    tests = [
        ("Mirror Reflection Law", test_mirror_reflection_law),
        ("Mirror 45 Degree Scenario", test_mirror_45_degree_scenario),
        ("Void Absorbs", test_void_absorbs),
        ("Filter Split", test_filter_split),
        ("Filter Fully Absorbing", test_filter_fully_absorbing),
        ("Lens Focus", test_lens_focus),
        ("Lens Endpoint Order", test_lens_endpoint_order),
        ("Lens Diverging", test_lens_diverging),
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
