"""
ui/
---
Presentation layer.

    from ui import BarRenderer, render_array
    from ui import algorithm_selector, analytics_panel, …
"""

from ui.canvas import BarRenderer, CanvasConfig, render_array

from ui.controls import (
    algorithm_selector,
    array_generator,
    speed_selector,
    analytics_panel,
    comparison_panel,
    pseudocode_viewer,
    explanation_panel,
    legend_panel,
)

__all__ = [
    "BarRenderer",
    "CanvasConfig",
    "render_array",
    "algorithm_selector",
    "array_generator",
    "speed_selector",
    "analytics_panel",
    "comparison_panel",
    "pseudocode_viewer",
    "explanation_panel",
    "legend_panel",
]
