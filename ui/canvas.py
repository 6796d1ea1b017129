"""
canvas.py — SVG Bar Renderer
=============================
Stateful consumer of sort Steps: Step → bar heights, colours, arrow → SVG.

The renderer consumes:
  • step       – the current Step snapshot (kind, indices, array, roles)
  • config     – visual config (canvas size, colours, fonts, …)

And produces an SVG string ready to inject into the DOM.

Design decisions:
  - The engine never looks inside the renderer.  apply_step() only
    reads the Step and overwrites drawing state, so applying the same
    Step twice leaves the same picture.
  - Role-based colouring is a simple dict lookup: role → hex colour.
    Sorted bars are always drawn in the sorted colour.
  - The swap arrow is transient: drawn on a SWAP step, gone on the next.
  - Bar heights scale against the largest value of the array passed to
    reset().  An all-zero array draws flat bars; negatives clamp to 0.
"""

from dataclasses import replace
from typing import AbstractSet, Dict, List, Optional, Sequence, Tuple

from algorithms.step import HighlightRole, Step, StepKind


# ---------------------------------------------------------------------------
# Visual Config — colour palette, dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = 1000
    height: int = 500
    bg:     str = "#0d1117"

    # bar colours (role → fill)
    bar_color: str = "#af52de"              # purple — untouched bars
    role_colors: Dict[str, str] = {
        "candidate": "#34c759",             # green — current minimum
        "compared":  "#ff3b30",             # red — being compared
        "swapped":   "#ffcc00",             # yellow — being exchanged
        "sorted":    "#8e8e93",             # grey — final position
    }

    # bars
    bar_spacing:       float = 2
    bar_width_ratio:   float = 0.8
    bar_corner_radius: int   = 4
    height_ratio:      float = 0.8          # tallest bar / canvas height
    baseline_offset:   int   = 20           # gap between bars and bottom edge

    # value labels
    label_color:  str = "#e6edf3"
    label_size:   int = 10
    label_height: int = 20

    # swap arrow
    arrow_color:      str = "#0a84ff"
    arrow_width:      int = 2
    arrow_arc_height: int = 40
    arrow_gap:        int = 10


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------
class BarRenderer:
    """
    Attributes:
        array      : Values currently drawn.
        roles      : {index: HighlightRole} currently coloured.
        sorted_set : Indices drawn as sorted.
        arrow      : (from_index, to_index) of the swap arrow, or None.
    """

    def __init__(self, config: CanvasConfig = CONFIG):
        self.config = config
        self.array:      List[int]                = []
        self.roles:      Dict[int, HighlightRole] = {}
        self.sorted_set: set                      = set()
        self.arrow:      Optional[Tuple[int, int]] = None
        self._max_value: int = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def reset(self, array: Sequence[int]) -> None:
        """Start a fresh run: plain bars, nothing sorted, no arrow."""
        self.array      = list(array)
        self.roles      = {}
        self.sorted_set = set()
        self.arrow      = None
        self._max_value = max(self.array, default=0)

    def apply_step(
        self,
        step: Step,
        array: Optional[Sequence[int]] = None,
        sorted_set: Optional[AbstractSet[int]] = None,
    ) -> None:
        """Redraw state for one Step.  array / sorted_set default to the Step's snapshots."""
        values = list(array) if array is not None else list(step.array)
        if not self.array or len(values) != len(self.array):
            self.reset(values)
        self.array = values

        if sorted_set is not None:
            step = replace(step, sorted_set=frozenset(sorted_set))
        self.sorted_set = set(step.sorted_set)
        self.roles = {
            idx: role
            for idx, role in step.roles().items()
            if 0 <= idx < len(self.array)
        }

        self.arrow = (step.i, step.j) if step.kind is StepKind.SWAP else None

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    def bar_width(self) -> float:
        n = max(len(self.array), 1)
        return self.config.width / n - self.config.bar_spacing

    def bar_x(self, index: int) -> float:
        return index * (self.bar_width() + self.config.bar_spacing)

    def bar_height(self, value: int) -> float:
        if self._max_value <= 0 or value <= 0:
            return 0.0
        return self.config.height * self.config.height_ratio * value / self._max_value

    def bar_fill(self, index: int) -> str:
        role = self.roles.get(index)
        if role is None:
            return self.config.bar_color
        return self.config.role_colors.get(role.value, self.config.bar_color)

    # ------------------------------------------------------------------
    # SVG
    # ------------------------------------------------------------------
    def render(self) -> str:
        config = self.config
        svg_parts = [
            f'<svg width="{config.width}" height="{config.height}" '
            f'viewBox="0 0 {config.width} {config.height}" '
            f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">',
            f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}"/>',
        ]

        for index, value in enumerate(self.array):
            svg_parts.append(self._render_bar(index, value))

        if self.arrow is not None:
            svg_parts.append(self._render_arrow(*self.arrow))

        svg_parts.append("</svg>")
        return "\n".join(svg_parts)

    def _render_bar(self, index: int, value: int) -> str:
        config = self.config
        width  = self.bar_width()
        height = self.bar_height(value)
        x      = self.bar_x(index)
        y      = config.height - height - config.baseline_offset
        role   = self.roles.get(index)

        label_y = y - config.label_height + config.label_size + 4
        parts = [
            f'<g class="bar" data-index="{index}" data-role="{role.value if role else "default"}">',
            f'  <rect x="{x:.2f}" y="{y:.2f}" width="{width * config.bar_width_ratio:.2f}" '
            f'height="{height:.2f}" rx="{config.bar_corner_radius}" fill="{self.bar_fill(index)}"/>',
            f'  <text x="{x + width / 2:.2f}" y="{label_y:.2f}" text-anchor="middle" '
            f'font-size="{config.label_size}" font-family="\'DM Sans\', sans-serif" '
            f'fill="{config.label_color}">{value}</text>',
            '</g>',
        ]
        return "\n".join(parts)

    def arrow_path(self, from_index: int, to_index: int) -> str:
        """SVG path data for an arc from the top of one bar to the top of the other."""
        config = self.config
        width  = self.bar_width()
        from_x = self.bar_x(from_index) + width / 2
        to_x   = self.bar_x(to_index) + width / 2
        offset = config.baseline_offset + config.label_height + config.arrow_gap
        start_y = config.height - self.bar_height(self.array[from_index]) - offset
        end_y   = config.height - self.bar_height(self.array[to_index]) - offset
        arc     = config.arrow_arc_height

        d = (
            f"M {from_x:.2f} {start_y:.2f} "
            f"L {from_x:.2f} {start_y - arc:.2f} "
            f"Q {(from_x + to_x) / 2:.2f} {start_y - arc - 20:.2f} {to_x:.2f} {end_y - arc:.2f} "
            f"L {to_x:.2f} {end_y:.2f}"
        )
        return d

    def _render_arrow(self, from_index: int, to_index: int) -> str:
        config = self.config
        d = self.arrow_path(from_index, to_index)
        return (
            f'<path class="swap-arrow" d="{d}" fill="none" stroke="{config.arrow_color}" '
            f'stroke-width="{config.arrow_width}" stroke-linecap="round"/>'
        )


# ---------------------------------------------------------------------------
# Static render
# ---------------------------------------------------------------------------
def render_array(array: Sequence[int], config: CanvasConfig = CONFIG) -> str:
    """SVG for an array with no run in progress."""
    renderer = BarRenderer(config)
    renderer.reset(array)
    return renderer.render()
