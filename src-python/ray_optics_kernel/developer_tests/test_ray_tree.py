"""
===============================================================================
RAY TREE ANALYSIS TESTS
===============================================================================

Tests for analysis.ray_tree on a traced scene:

- iter_rays() pre-order walk
- get_leaves(), get_tree_depth()
- get_ray_path() from a root down to a given ray
- filter_rays_by_interaction()
- get_ray_statistics()

Run with:
    python developer_tests/test_ray_tree.py

Or with pytest:
    pytest developer_tests/test_ray_tree.py -v
===============================================================================
"""

import sys
from pathlib import Path

# Add the src-python directory to the path
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from ray_optics_kernel import Scene, Simulator, Ray
from ray_optics_kernel.core.scene_objs import Mirror, CircularBlock, RaySource
from ray_optics_kernel.analysis import (
    iter_rays, get_leaves, get_tree_depth, get_ray_path,
    filter_rays_by_interaction, get_ray_statistics,
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


def traced_scene():
    """A ray reflected by a mirror into a circular block."""
    scene = Scene()
    scene.min_intensity = 5
    scene.add_object(Mirror(scene, p1=(10, -10), p2=(10, 10)))
    scene.add_object(CircularBlock(scene, center=(-50, 0), radius=20, n=1.5))
    scene.add_object(RaySource(scene, origin=(0, 0), direction=(1, 0)))
    return Simulator(scene).run()


# =============================================================================
# TESTS
# =============================================================================

def test_walk_and_leaves():
    print("\n" + "=" * 60)
    print("TEST: iter_rays() and get_leaves()")
    print("=" * 60)

    roots = traced_scene()
    rays = list(iter_rays(roots))
    assert rays[0] is roots[0], "Pre-order starts at the root"
    assert rays[1] is roots[0].children[0]
    for ray in rays:
        for child in ray.children:
            assert rays.index(child) > rays.index(ray), "Parents come before children"
    print(f"  {len(rays)} rays walked in pre-order - PASS")

    leaves = get_leaves(roots)
    assert leaves, "A finite tree has leaves"
    assert all(not leaf.children for leaf in leaves)
    print(f"  {len(leaves)} leaves - PASS")

    assert list(iter_rays(roots[0])) == rays, "A single root is accepted"
    assert get_tree_depth([]) == -1
    assert get_tree_depth(roots) == max(ray.depth for ray in rays)
    print("  get_tree_depth() - PASS")


def test_paths_and_filters():
    print("\n" + "=" * 60)
    print("TEST: get_ray_path() and filter_rays_by_interaction()")
    print("=" * 60)

    roots = traced_scene()
    reflected = filter_rays_by_interaction(roots, 'reflect')
    assert reflected[0] is roots[0].children[0], "Mirror reflection comes first"
    refracted = filter_rays_by_interaction(roots, 'refract')
    assert refracted, "The block refracts the reflected ray"

    target = refracted[0]
    path = get_ray_path(roots, target.uuid)
    assert path[0] is roots[0]
    assert path[-1] is target
    for parent, child in zip(path, path[1:]):
        assert child.parent_uuid == parent.uuid
    assert [r.interaction_type for r in path][:3] == ['source', 'reflect', 'refract']
    print(f"  Path types {[r.interaction_type for r in path]} - PASS")

    assert get_ray_path(roots, 'missing') is None
    print("  Unknown uuid - PASS")


def test_statistics():
    print("\n" + "=" * 60)
    print("TEST: get_ray_statistics()")
    print("=" * 60)

    empty = get_ray_statistics([])
    assert empty['total_rays'] == 0 and empty['max_depth'] == -1

    roots = traced_scene()
    stats = get_ray_statistics(roots)
    assert stats['total_rays'] == len(list(iter_rays(roots)))
    assert stats['root_rays'] == 1
    assert stats['leaf_rays'] == len(get_leaves(roots))
    assert stats['by_interaction']['source'] == 1
    assert stats['unresolved_rays'] == 0
    assert stats['total_intensity'] <= stats['source_intensity'] + TOLERANCE
    assert stats['total_length'] > 0
    print(f"  {stats['total_rays']} rays, by type {stats['by_interaction']} - PASS")

    # Lengths of rays without an end use the horizon when given
    lone = Ray((0, 0), (1, 0))
    assert get_ray_statistics(lone)['total_length'] == 0.0
    assert_close(get_ray_statistics(lone, horizon=50)['total_length'], 50.0, msg="Horizon length")
    print("  Unresolved ray lengths - PASS")


# =============================================================================
# RUNNER
# =============================================================================

def run_all_tests():
    """Run all tests and report results."""
    print("\n" + "=" * 78)
    print("RAY TREE ANALYSIS TESTS")
    print("=" * 78)

    tests = [
        ("Walk and Leaves", test_walk_and_leaves),
        ("Paths and Filters", test_paths_and_filters),
        ("Statistics", test_statistics),
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
