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

"""
Constants used throughout the ray optics kernel.

Kept in their own module so that geometry, scene objects and the simulator
can share them without circular imports.
"""

import math

TWO_PI = 2 * math.pi
HALF_PI = math.pi / 2

# Minimum ray segment length. Intersections closer than this to the ray
# origin are the surface the ray was just emitted from.
MIN_RAY_SEGMENT_LENGTH = 1e-3

# Squared form (compared against squared distances, no sqrt)
MIN_RAY_SEGMENT_LENGTH_SQUARED = MIN_RAY_SEGMENT_LENGTH * MIN_RAY_SEGMENT_LENGTH

# When the perpendicular foot of a ray is this close (squared) to a circle
# center, the ray passes through the center and the chord is the diameter.
CIRCLE_CENTER_THRESHOLD_SQUARED = 1e-5

# Color channels and intensity (alpha) live on a 0..255 scale
MAX_INTENSITY = 255.0

# Rays dimmer than this are not emitted by splitting surfaces
DEFAULT_MIN_INTENSITY = 1.0

# Hard cap on the depth of a ray tree
DEFAULT_MAX_DEPTH = 50

# Cap on the number of rays traced in one pass
DEFAULT_MAX_RAYS = 10000

# Half width of the visible scene; unbounded rays end at twice this distance
DEFAULT_HALF_WIDTH = 1000.0

# Offset applied to duplicated objects
DEFAULT_GRID_SIZE = 20.0

# Default optical parameters
DEFAULT_REFRACTIVE_INDEX = 1.5
DEFAULT_FOCAL_LENGTH = 200.0
