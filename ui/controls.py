"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • algorithm_selector      – dropdown of registered sorts + run button
  • array_generator         – size / value range / seed for a random array
  • speed_selector          – pacing preset
  • analytics_panel         – comparisons, swaps, steps, …
  • comparison_panel        – side-by-side metrics of two runs
  • pseudocode_viewer       – with live line highlighting
  • explanation_panel       – "why this step happened"
  • legend_panel            – what each bar colour means

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together.
"""

from typing import List, Optional

from algorithms import AlgoInfo
from engine import RunMetrics, ComparisonResult, SPEED_PRESETS, DEFAULT_PRESET
from ui.canvas import CanvasConfig, CONFIG


def _escape(text: str) -> str:
    return text.replace('&', '&amp;').replace('<', '&lt;').replace('>', '&gt;')


# ---------------------------------------------------------------------------
# Algorithm Selector
# ---------------------------------------------------------------------------
def algorithm_selector(
    algorithms: List[AlgoInfo],
    selected_key: str = "selection_sort",
) -> str:
    options = []
    for algo in algorithms:
        sel = 'selected' if algo.key == selected_key else ''
        options.append(
            f'<option value="{algo.key}" {sel}>{algo.label} — {algo.complexity_time}</option>'
        )

    return f"""
    <div class="panel algorithm-selector">
      <h3>🧠 Algorithm</h3>
      <select id="algo-selector">
        {''.join(options)}
      </select>
      <button id="btn-run" class="btn-primary">▶ Sort</button>
      <button id="btn-compare" class="btn-secondary">⚖️ Compare All</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Array Generator
# ---------------------------------------------------------------------------
def array_generator(size: int = 50, low: int = 1, high: int = 100, max_size: int = 100) -> str:
    return f"""
    <div class="panel array-generator">
      <h3>📶 Array</h3>
      <label>Size: <input type="number" id="arr-size" value="{size}" min="1" max="{max_size}"></label>
      <label>Min: <input type="number" id="arr-low" value="{low}" min="0"></label>
      <label>Max: <input type="number" id="arr-high" value="{high}" min="1"></label>
      <label>Seed: <input type="number" id="arr-seed" placeholder="random"></label>
      <button id="btn-gen-array" class="btn-secondary">Generate Random</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Speed Selector
# ---------------------------------------------------------------------------
def speed_selector(speed: str = DEFAULT_PRESET) -> str:
    options = []
    for name, (compare_s, swap_s) in SPEED_PRESETS.items():
        sel = 'selected' if name == speed else ''
        options.append(
            f'<option value="{name}" {sel}>{name.capitalize()} '
            f'({int(compare_s * 1000)} / {int(swap_s * 1000)} ms)</option>'
        )
    return f"""
    <div class="panel speed-control">
      <h3>⏱ Speed</h3>
      <select id="speed-selector">
        {''.join(options)}
      </select>
    </div>
    """


# ---------------------------------------------------------------------------
# Analytics Panel
# ---------------------------------------------------------------------------
def analytics_panel(metrics: Optional[RunMetrics] = None) -> str:
    if not metrics:
        return """
        <div class="panel analytics-panel">
          <h3>📊 Analytics</h3>
          <p class="placeholder">Run a sort to see metrics.</p>
        </div>
        """

    status = "✅ Sorted" if metrics.is_sorted else "❌ Not sorted"
    if metrics.cancelled:
        status = "⏹ Cancelled"

    return f"""
    <div class="panel analytics-panel">
      <h3>📊 Analytics — {metrics.algo_label}</h3>
      <table>
        <tr><td>Array Size:</td><td><strong>{metrics.array_size}</strong></td></tr>
        <tr><td>Comparisons:</td><td><strong>{metrics.comparisons}</strong></td></tr>
        <tr><td>Swaps:</td><td><strong>{metrics.swaps}</strong></td></tr>
        <tr><td>Total Steps:</td><td><strong>{metrics.total_steps}</strong></td></tr>
        <tr><td>Wall Time:</td><td><strong>{metrics.wall_time_ms:.2f} ms</strong></td></tr>
        <tr><td>Result:</td><td><strong>{status}</strong></td></tr>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Comparison Panel (side-by-side)
# ---------------------------------------------------------------------------
def comparison_panel(comp: Optional[ComparisonResult] = None) -> str:
    if not comp:
        return """
        <div class="panel comparison-panel">
          <h3>⚖️ Comparison</h3>
          <p class="placeholder">Compare both sorts on the same array.</p>
        </div>
        """

    left = comp.left
    right = comp.right

    def winner_badge(winner_label):
        if winner_label == "tie":
            return "🟰 Tie"
        return f"👑 {winner_label}"

    return f"""
    <div class="panel comparison-panel">
      <h3>⚖️ Comparison: {left.algo_label} vs {right.algo_label}</h3>
      <table class="comparison-table">
        <thead>
          <tr>
            <th>Metric</th>
            <th>{left.algo_label}</th>
            <th>{right.algo_label}</th>
            <th>Winner</th>
          </tr>
        </thead>
        <tbody>
          <tr>
            <td>Comparisons</td>
            <td>{left.comparisons}</td>
            <td>{right.comparisons}</td>
            <td>{winner_badge(comp.winner_comparisons)}</td>
          </tr>
          <tr>
            <td>Swaps</td>
            <td>{left.swaps}</td>
            <td>{right.swaps}</td>
            <td>{winner_badge(comp.winner_swaps)}</td>
          </tr>
          <tr>
            <td>Total Steps</td>
            <td>{left.total_steps}</td>
            <td>{right.total_steps}</td>
            <td>{winner_badge(comp.winner_steps)}</td>
          </tr>
        </tbody>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode Viewer
# ---------------------------------------------------------------------------
def pseudocode_viewer(
    pseudocode_lines: List[str],
    current_line: int = -1,
) -> str:
    if not pseudocode_lines:
        return """
        <div class="code-block">
          <div style="color: #7d8590; padding: 20px; text-align: center;">
            Select an algorithm to view pseudocode
          </div>
        </div>
        """

    lines_html = []
    for i, line in enumerate(pseudocode_lines):
        highlight = 'highlight' if i == current_line else ''
        lines_html.append(f'<div class="code-line {highlight}" data-line="{i}">{_escape(line)}</div>')

    return f"""
    <div class="code-block">
      {''.join(lines_html)}
    </div>
    """


# ---------------------------------------------------------------------------
# Explanation Panel
# ---------------------------------------------------------------------------
def explanation_panel(explanation: str = "") -> str:
    if not explanation:
        explanation = "▶ Click <strong>Sort</strong> to watch the algorithm explain every step."
    else:
        explanation = _escape(explanation)
    return f"""<div class="explanation-text">{explanation}</div>"""


# ---------------------------------------------------------------------------
# Legend
# ---------------------------------------------------------------------------
def legend_panel(config: CanvasConfig = CONFIG) -> str:
    labels = {
        "candidate": "Current minimum",
        "compared":  "Being compared",
        "swapped":   "Being swapped",
        "sorted":    "Final position",
    }
    items = [
        f'<li><span class="swatch" style="background: {config.bar_color};"></span>Unsorted</li>'
    ]
    for role, label in labels.items():
        items.append(
            f'<li><span class="swatch" style="background: {config.role_colors[role]};"></span>{label}</li>'
        )
    return f"""
    <div class="panel legend-panel">
      <h3>🎨 Legend</h3>
      <ul class="legend">
        {''.join(items)}
      </ul>
    </div>
    """
