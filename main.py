"""
main.py — Sorting Visualizer Flask App
========================================
The web server that hosts the visualizer.

Routes:
  GET  /                       – main UI
  GET  /api/algorithms         – registry listing
  POST /api/array/generate     – generate a new random array
  POST /api/run                – record a sort run, return one frame per Step
  POST /api/compare            – run every algorithm on the same array

Playback:
  A run is recorded server-side with zero delay.  The response carries
  the initial SVG once, then one compact frame per Step: kind, indices,
  highlight roles, the swap arrow path on SWAP frames, and the pause
  that follows (compare / swap delay of the chosen speed preset).  The
  browser recolours and swaps the bars of that SVG frame by frame.

State management:
  The Flask session holds:
    • array           – the current input array
    • selected_algo
    • speed           – key into SPEED_PRESETS

Configuration (environment):
  SORTVIZ_SECRET_KEY   – session signing key (random per process if unset)
  SORTVIZ_HOST / SORTVIZ_PORT
  SORTVIZ_LOG_LEVEL    – logging level name, default INFO
"""

from flask import Flask, render_template_string, request, jsonify, session
import logging
import os
import random
import secrets
import sys
from typing import List, Optional

# add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from algorithms import get_algorithm, list_algorithms, InvalidInput
from algorithms.step import Step
from engine import Pacing, Recorder, compare, DEFAULT_PRESET
from ui import (
    BarRenderer,
    render_array,
    algorithm_selector,
    array_generator,
    speed_selector,
    analytics_panel,
    comparison_panel,
    pseudocode_viewer,
    explanation_panel,
    legend_panel,
)
from ui.canvas import CONFIG

logger = logging.getLogger(__name__)

DEFAULT_SIZE = 50
DEFAULT_LOW  = 1
DEFAULT_HIGH = 100
MAX_SIZE     = 100


app = Flask(__name__)
app.secret_key = os.environ.get("SORTVIZ_SECRET_KEY") or secrets.token_hex(32)


# ---------------------------------------------------------------------------
# Array generation
# ---------------------------------------------------------------------------
def random_array(
    size: int = DEFAULT_SIZE,
    low: int = DEFAULT_LOW,
    high: int = DEFAULT_HIGH,
    seed: Optional[int] = None,
) -> List[int]:
    """`size` random ints in [low, high]; same seed, same array."""
    if size < 1 or size > MAX_SIZE:
        raise InvalidInput(f"Array size must be between 1 and {MAX_SIZE}, got {size}")
    if low < 0 or high < low:
        raise InvalidInput(f"Need 0 <= low <= high, got low={low}, high={high}")
    rng = random.Random(seed)
    return [rng.randint(low, high) for _ in range(size)]


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_array() -> List[int]:
    """Current array from session, or the default 50-value demo array."""
    if "array" not in session:
        session["array"] = random_array()
    return list(session["array"])


def get_state():
    """Return current app state as a dict."""
    return {
        "selected_algo": session.get("selected_algo", "selection_sort"),
        "speed":         session.get("speed", DEFAULT_PRESET),
    }


def set_state(**kwargs):
    for k, v in kwargs.items():
        session[k] = v


def _int_field(data: dict, key: str, default: Optional[int]) -> Optional[int]:
    value = data.get(key, default)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"'{key}' must be an integer, got {value!r}")


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
@app.errorhandler(InvalidInput)
def handle_invalid_input(exc: InvalidInput):
    logger.warning(f"Rejected request to {request.path}: {exc}")
    return jsonify({"error": str(exc)}), 400


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    array = get_array()
    state = get_state()
    algo_info = get_algorithm(state["selected_algo"])

    html = render_template_string(INDEX_TEMPLATE,
        svg=render_array(array),
        algo_selector=algorithm_selector(list_algorithms(), selected_key=state["selected_algo"]),
        array_gen=array_generator(size=len(array), max_size=MAX_SIZE),
        speed=speed_selector(state["speed"]),
        legend=legend_panel(),
        analytics=analytics_panel(),
        comparison=comparison_panel(),
        pseudocode=pseudocode_viewer(algo_info.pseudocode),
        explanation=explanation_panel(),
    )
    return html


# ---------------------------------------------------------------------------
# API: Registry
# ---------------------------------------------------------------------------
@app.route("/api/algorithms")
def api_algorithms():
    return jsonify([
        {
            "key":             a.key,
            "label":           a.label,
            "complexity_time": a.complexity_time,
            "max_swaps":       a.max_swaps,
            "description":     a.description,
            "pseudocode":      a.pseudocode,
        }
        for a in list_algorithms()
    ])


# ---------------------------------------------------------------------------
# API: Array Generation
# ---------------------------------------------------------------------------
@app.route("/api/array/generate", methods=["POST"])
def api_array_generate():
    data = request.get_json(silent=True) or {}
    array = random_array(
        size=_int_field(data, "size", DEFAULT_SIZE),
        low=_int_field(data, "low", DEFAULT_LOW),
        high=_int_field(data, "high", DEFAULT_HIGH),
        seed=_int_field(data, "seed", None),
    )
    session["array"] = array
    return jsonify({"svg": render_array(array), "array": array})


# ---------------------------------------------------------------------------
# API: Run Algorithm
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    data = request.get_json(silent=True) or {}
    state = get_state()
    algo_key = data.get("algo_key", state["selected_algo"])
    speed    = data.get("speed", state["speed"])

    algo_info = get_algorithm(algo_key)
    pacing    = Pacing.preset(speed)
    array     = get_array()

    renderer = BarRenderer()
    renderer.reset(array)
    frames = []

    def capture(step: Step) -> None:
        renderer.apply_step(step)
        delay = step.delay_kind
        roles = step.roles()
        frame = {
            "kind":            step.kind.value,
            "indices":         list(step.indices),
            "roles":           {str(idx): roles[idx].value for idx in step.highlights if idx in roles},
            "delay_ms":        pacing.delay_ms(delay) if delay else 0,
            "pseudocode_line": step.pseudocode_line,
            "explanation":     step.explanation,
        }
        if renderer.arrow is not None:
            frame["arrow"] = renderer.arrow_path(*renderer.arrow)
        frames.append(frame)

    rec = Recorder(on_step=capture)
    rec.start(algo_key, array)
    metrics = rec.run_to_completion()
    set_state(selected_algo=algo_key, speed=speed)
    logger.info(f"Shipping {len(frames)} frames for {algo_key} on {len(array)} values")

    return jsonify({
        "svg":         render_array(array),
        "colors":      {"default": CONFIG.bar_color, **CONFIG.role_colors},
        "arrow":       {"color": CONFIG.arrow_color, "width": CONFIG.arrow_width},
        "frames":      frames,
        "total_steps": len(frames),
        "result":      rec.result,
        "analytics":   analytics_panel(metrics),
        "pseudocode":  pseudocode_viewer(algo_info.pseudocode),
    })


# ---------------------------------------------------------------------------
# API: Comparison Mode
# ---------------------------------------------------------------------------
@app.route("/api/compare", methods=["POST"])
def api_compare():
    array = get_array()
    recorders = []
    for info in list_algorithms():
        rec = Recorder()
        rec.start(info.key, array)
        rec.run_to_completion()
        recorders.append(rec)

    comp = compare(recorders[0], recorders[1])
    return jsonify({"comparison": comparison_panel(comp)})


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Sorting Algorithm Visualizer</title>
  <link rel="preconnect" href="https://fonts.googleapis.com">
  <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
  <link href="https://fonts.googleapis.com/css2?family=JetBrains+Mono:wght@400;500;700&family=DM+Sans:wght@400;500;700&display=swap" rel="stylesheet">
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg-dark: #0d1117;
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --bg-panel-hover: #1c2128;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --accent-cyan: #0ea5e9;
      --accent-teal: #06b6d4;
      --accent-emerald: #10b981;
      --glow-cyan: rgba(14, 165, 233, 0.4);
    }

    body {
      font-family: 'DM Sans', -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      display: flex;
      height: 100vh;
      overflow: hidden;
    }

    #sidebar {
      width: 340px;
      background: linear-gradient(180deg, var(--bg-dark) 0%, var(--bg-darker) 100%);
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 24px 16px;
    }

    #main { flex: 1; display: flex; flex-direction: column; }

    #canvas-container {
      flex: 1;
      display: flex;
      align-items: center;
      justify-content: center;
      border-bottom: 1px solid var(--border);
    }

    #canvas-svg svg { max-width: 100%; max-height: 100%; }

    #bottom-panel {
      display: grid;
      grid-template-columns: 1fr 1fr;
      gap: 20px;
      padding: 20px;
      background: var(--bg-dark);
      min-height: 280px;
      max-height: 360px;
      overflow: hidden;
    }

    #pseudocode-container, #explanation-container {
      display: flex;
      flex-direction: column;
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 20px;
      overflow: hidden;
    }

    #pseudocode-container h3, #explanation-container h3 {
      font-size: 14px;
      text-transform: uppercase;
      letter-spacing: 0.5px;
      margin-bottom: 16px;
      color: var(--accent-cyan);
    }

    .code-block {
      background: var(--bg-darker);
      border: 1px solid var(--border);
      border-radius: 8px;
      padding: 16px;
      overflow-y: auto;
      flex: 1;
      font-family: 'JetBrains Mono', 'Courier New', monospace;
      font-size: 13px;
      line-height: 1.6;
      white-space: pre;
    }

    .code-line { padding: 2px 12px; border-radius: 6px; }

    .code-line.highlight {
      background: linear-gradient(90deg, rgba(6, 182, 212, 0.15) 0%, transparent 100%);
      border-left: 3px solid var(--accent-cyan);
      padding-left: 9px;
    }

    .explanation-text { color: var(--text-secondary); line-height: 1.8; font-size: 14px; }

    .panel {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 18px;
      margin-bottom: 16px;
    }

    .panel h3 {
      font-size: 13px;
      margin-bottom: 14px;
      text-transform: uppercase;
      letter-spacing: 0.5px;
    }

    button {
      background: linear-gradient(135deg, var(--accent-cyan), var(--accent-teal));
      color: #fff;
      border: none;
      padding: 10px 16px;
      margin-top: 8px;
      border-radius: 8px;
      cursor: pointer;
      font-size: 13px;
      font-weight: 600;
    }

    .btn-primary { background: linear-gradient(135deg, var(--accent-emerald), #059669); }
    .btn-secondary { background: var(--bg-panel-hover); border: 1px solid var(--border); }

    select, input[type="number"] {
      width: 100%;
      padding: 10px 12px;
      margin: 6px 0;
      background: var(--bg-darker);
      border: 1px solid var(--border);
      border-radius: 8px;
      color: var(--text-primary);
      font-size: 13px;
    }

    label {
      display: block;
      margin: 10px 0 4px;
      font-size: 12px;
      color: var(--text-secondary);
      text-transform: uppercase;
    }

    table { width: 100%; font-size: 13px; margin-top: 8px; }
    table td { padding: 6px 4px; }
    table td:first-child { color: var(--text-secondary); }

    .legend { list-style: none; font-size: 13px; }
    .legend li { display: flex; align-items: center; gap: 8px; margin: 4px 0; }
    .swatch { width: 14px; height: 14px; border-radius: 3px; display: inline-block; }

    .placeholder { color: var(--text-secondary); font-size: 13px; }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="algo-panel">{{ algo_selector|safe }}</div>
    <div id="speed">{{ speed|safe }}</div>
    <div id="array-gen">{{ array_gen|safe }}</div>
    <div id="legend">{{ legend|safe }}</div>
    <div id="analytics">{{ analytics|safe }}</div>
    <div id="comparison">{{ comparison|safe }}</div>
  </div>

  <div id="main">
    <div id="canvas-container">
      <div id="canvas-svg">{{ svg|safe }}</div>
    </div>

    <div id="bottom-panel">
      <div id="pseudocode-container">
        <h3>Pseudocode</h3>
        <div id="pseudocode">{{ pseudocode|safe }}</div>
      </div>
      <div id="explanation-container">
        <h3>Step Explanation</h3>
        <div id="explanation">{{ explanation|safe }}</div>
      </div>
    </div>
  </div>

  <script>
    let playback = 0;
    let colors = {};
    let arrowStyle = {};
    let sortedBars = new Set();

    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data),
      });
      const body = await res.json();
      if (body.error) alert(body.error);
      return body;
    }

    function sleep(ms) {
      return new Promise(resolve => setTimeout(resolve, ms));
    }

    function bar(index) {
      return document.querySelector(`#canvas-svg g.bar[data-index="${index}"]`);
    }

    function exchangeBars(i, j) {
      const a = bar(i), b = bar(j);
      if (!a || !b) return;
      const pairs = [
        [a.querySelector('rect'), b.querySelector('rect'), ['y', 'height']],
        [a.querySelector('text'), b.querySelector('text'), ['y']],
      ];
      for (const [x, y, attrs] of pairs) {
        for (const attr of attrs) {
          const tmp = x.getAttribute(attr);
          x.setAttribute(attr, y.getAttribute(attr));
          y.setAttribute(attr, tmp);
        }
      }
      const ta = a.querySelector('text'), tb = b.querySelector('text');
      [ta.textContent, tb.textContent] = [tb.textContent, ta.textContent];
    }

    function drawArrow(d) {
      const svg = document.querySelector('#canvas-svg svg');
      svg.querySelectorAll('path.swap-arrow').forEach(p => p.remove());
      if (!d) return;
      const path = document.createElementNS('http://www.w3.org/2000/svg', 'path');
      path.setAttribute('class', 'swap-arrow');
      path.setAttribute('d', d);
      path.setAttribute('fill', 'none');
      path.setAttribute('stroke', arrowStyle.color);
      path.setAttribute('stroke-width', arrowStyle.width);
      path.setAttribute('stroke-linecap', 'round');
      svg.appendChild(path);
    }

    function showFrame(frame) {
      if (frame.kind === 'swapped') exchangeBars(frame.indices[0], frame.indices[1]);
      if (frame.kind === 'sorted') frame.indices.forEach(i => sortedBars.add(i));
      document.querySelectorAll('#canvas-svg g.bar').forEach(g => {
        const index = +g.dataset.index;
        const role = sortedBars.has(index) ? 'sorted' : (frame.roles[index] || 'default');
        g.dataset.role = role;
        g.querySelector('rect').setAttribute('fill', colors[role] || colors['default']);
      });
      drawArrow(frame.arrow);
      document.querySelectorAll('.code-line').forEach(line => {
        line.classList.toggle('highlight', +line.dataset.line === frame.pseudocode_line);
      });
      document.getElementById('explanation').textContent = frame.explanation;
    }

    async function play(run) {
      const token = ++playback;
      document.getElementById('canvas-svg').innerHTML = run.svg;
      colors = run.colors;
      arrowStyle = run.arrow;
      sortedBars = new Set();
      for (const frame of run.frames) {
        if (token !== playback) return;
        showFrame(frame);
        await sleep(frame.delay_ms);
      }
    }

    document.getElementById('btn-run')?.addEventListener('click', async () => {
      const data = await post('/api/run', {
        algo_key: document.getElementById('algo-selector').value,
        speed: document.getElementById('speed-selector').value,
      });
      if (!data.frames) return;
      document.getElementById('pseudocode').innerHTML = data.pseudocode;
      document.getElementById('analytics').innerHTML = data.analytics;
      play(data);
    });

    document.getElementById('btn-compare')?.addEventListener('click', async () => {
      const data = await post('/api/compare', {});
      if (data.comparison) document.getElementById('comparison').innerHTML = data.comparison;
    });

    document.getElementById('btn-gen-array')?.addEventListener('click', async () => {
      playback++;
      const data = await post('/api/array/generate', {
        size: document.getElementById('arr-size').value,
        low: document.getElementById('arr-low').value,
        high: document.getElementById('arr-high').value,
        seed: document.getElementById('arr-seed').value,
      });
      if (data.svg) document.getElementById('canvas-svg').innerHTML = data.svg;
    });
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(
        level=os.environ.get("SORTVIZ_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    host = os.environ.get("SORTVIZ_HOST", "0.0.0.0")
    port = int(os.environ.get("SORTVIZ_PORT", "5000"))
    logger.info(f"Sorting Visualizer listening on http://{host}:{port}")
    app.run(debug=True, host=host, port=port)
