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

from typing import Tuple

# Handle both relative imports (when used as a module) and absolute imports (when run as script)
if __name__ == "__main__":
    from ray_optics_kernel.core.scene_objs.base_scene_obj import BaseSceneObj
    from ray_optics_kernel.core.color import Color
    from ray_optics_kernel.core.constants import MAX_INTENSITY
else:
    from .base_scene_obj import BaseSceneObj
    from ..color import Color
    from ..constants import MAX_INTENSITY


class BaseFilter(BaseSceneObj):
    """
    The base class for color-selective elements.

    The filter color gives, per channel, the fraction of the incident light
    that is transmitted (255 = fully transmitted, 0 = fully stopped). Of
    the light that is not transmitted, the fraction ``reflectivity`` is
    reflected and the rest absorbed.

    Attributes:
        filter_color: (r, g, b) levels of the filter, 0..255.
        reflectivity: Fraction of the stopped light that is reflected, 0..1.
    """

    @property
    def filter_color(self) -> Tuple[float, float, float]:
        return self._filter_color

    @filter_color.setter
    def filter_color(self, value) -> None:
        levels = tuple(float(v) for v in value)
        if len(levels) != 3 or any(v < 0 or v > MAX_INTENSITY for v in levels):
            raise ValueError(f"filter_color must be three levels in [0, 255], got {value!r}")
        self._filter_color = levels

    @property
    def reflectivity(self) -> float:
        return self._reflectivity

    @reflectivity.setter
    def reflectivity(self, value: float) -> None:
        if not isinstance(value, (int, float)) or not 0 <= value <= 1:
            raise ValueError(f"reflectivity must be in [0, 1], got {value}")
        self._reflectivity = float(value)

    def split_color(self, color: Color) -> Tuple[Color, Color]:
        """
        Decompose an incident color into transmitted and reflected parts.

        Each part's intensity is the incident intensity scaled by the share
        of the channel sum it carries, so neither part can be brighter than
        the incident ray and their sum never exceeds it.

        Args:
            color: The incident color.

        Returns:
            (transmitted, reflected) colors.
        """
        transmitted = [c * f / MAX_INTENSITY for c, f in zip(color.rgb, self.filter_color)]
        reflected = [(c - t) * self.reflectivity for c, t in zip(color.rgb, transmitted)]

        total = color.channel_sum
        if total > 0:
            t_alpha = color.a * sum(transmitted) / total
            r_alpha = color.a * sum(reflected) / total
        else:
            t_alpha = r_alpha = 0.0

        return Color(*transmitted, t_alpha), Color(*reflected, r_alpha)


if __name__ == "__main__":
    class _DemoFilter(BaseFilter):
        type = 'DemoFilter'
        defaults = {'filter_color': (255, 0, 0), 'reflectivity': 0.5}

    demo = _DemoFilter(None)
    t, r = demo.split_color(Color(255, 255, 255, 255))
    print(f"Transmitted: {t}")
    print(f"Reflected:   {r}")
