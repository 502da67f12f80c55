"""
Dashboard Rendering - Inline HTML Pages
=======================================

Plain f-string templates, no template engine. All user text goes through
html.escape before it reaches the page.
"""

from html import escape
from typing import Sequence

from ..application import SessionStats
from ..domain import ReviewCandidate, ReviewResult
from ..infrastructure.importer import SUPPORTED_EXTENSIONS

FILTERS = ["all", "real", "fake"]
UPLOAD_ACCEPT = ",".join(SUPPORTED_EXTENSIONS)


# ══════════════════════════════════════════════════════════════════
#  SHARED CSS
# ══════════════════════════════════════════════════════════════════

SHARED_CSS = """
    @import url('https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&display=swap');

    :root {
        --bg-dark: #0a0a14;
        --bg-card: rgba(255,255,255,0.035);
        --border: rgba(255,255,255,0.07);
        --text: #e2e8f0;
        --text-muted: #64748b;
        --success: #10b981;
        --warning: #f59e0b;
        --danger: #ef4444;
        --gradient: linear-gradient(135deg, #7c3aed 0%, #06b6d4 100%);
    }

    * { margin: 0; padding: 0; box-sizing: border-box; }

    body {
        font-family: 'Inter', -apple-system, BlinkMacSystemFont, sans-serif;
        background: var(--bg-dark);
        min-height: 100vh;
        color: var(--text);
    }

    .container { max-width: 1300px; margin: 0 auto; padding: 24px; }
    .grid { display: grid; grid-template-columns: 2fr 1fr; gap: 24px; }
    .card {
        background: var(--bg-card);
        border: 1px solid var(--border);
        border-radius: 16px;
        padding: 24px;
        margin-bottom: 24px;
    }
    h1 { font-size: 24px; background: var(--gradient); -webkit-background-clip: text; color: transparent; }
    h2 { font-size: 17px; margin-bottom: 12px; }
    .muted { color: var(--text-muted); font-size: 13px; }
    textarea, input[type=file] {
        width: 100%; background: rgba(0,0,0,0.3); color: var(--text);
        border: 1px solid var(--border); border-radius: 10px; padding: 12px; margin-bottom: 12px;
    }
    textarea { min-height: 120px; resize: vertical; }
    .btn {
        background: var(--gradient); color: white; border: none; border-radius: 10px;
        padding: 10px 18px; font-weight: 600; cursor: pointer;
    }
    .btn:disabled { opacity: 0.5; cursor: not-allowed; }
    .btn-tiny { background: transparent; color: var(--danger); border: 1px solid var(--border); border-radius: 6px; padding: 2px 8px; cursor: pointer; }
    .alert { padding: 12px 16px; border-radius: 10px; margin-bottom: 20px; }
    .alert-info { background: rgba(6,182,212,0.12); border: 1px solid rgba(6,182,212,0.3); }
    .alert-error { background: rgba(239,68,68,0.12); border: 1px solid rgba(239,68,68,0.3); }
    .badge { padding: 2px 10px; border-radius: 999px; font-size: 12px; font-weight: 600; }
    .badge.real { background: rgba(16,185,129,0.15); color: var(--success); }
    .badge.fake { background: rgba(239,68,68,0.15); color: var(--danger); }
    .conf-high { color: var(--success); }
    .conf-medium { color: var(--warning); }
    .conf-low { color: var(--danger); }
    .stat { margin-bottom: 14px; }
    .stat-value { font-size: 26px; font-weight: 700; }
    .bar { height: 8px; border-radius: 4px; background: rgba(255,255,255,0.06); overflow: hidden; margin-top: 4px; }
    .bar > div { height: 100%; background: var(--gradient); }
    .item { padding: 12px; border-radius: 10px; background: rgba(255,255,255,0.02); margin-bottom: 10px; }
    .item-head { display: flex; justify-content: space-between; align-items: center; gap: 12px; margin-bottom: 6px; }
    .filters a { color: var(--text-muted); margin-right: 12px; text-decoration: none; }
    .filters a.active { color: var(--text); font-weight: 600; }
    details summary { cursor: pointer; color: var(--text-muted); font-size: 12px; margin-top: 6px; }
"""


def _alert(message: str, error: str) -> str:
    html = ""
    if message:
        html += f'<div class="alert alert-info">{escape(message)}</div>'
    if error:
        html += f'<div class="alert alert-error">{escape(error)}</div>'
    return html


def _render_stats(stats: SessionStats) -> str:
    return f"""
    <div class="card">
        <h2>Session Overview</h2>
        <div class="stat"><div class="muted">Total Analyzed</div><div class="stat-value">{stats.total}</div></div>
        <div class="stat"><div class="muted">Fake Detected · {stats.fake_pct:.1f}% of total</div><div class="stat-value conf-low">{stats.fake_count}</div></div>
        <div class="stat"><div class="muted">Real Reviews · {stats.real_pct:.1f}% of total</div><div class="stat-value conf-high">{stats.real_count}</div></div>
        <div class="stat"><div class="muted">Avg. Confidence</div><div class="stat-value">{stats.avg_confidence * 100:.1f}%</div></div>
        <div class="muted">Real {stats.real_pct:.1f}%</div>
        <div class="bar"><div style="width: {stats.real_pct:.1f}%"></div></div>
        <div class="muted" style="margin-top: 10px;">Fake {stats.fake_pct:.1f}%</div>
        <div class="bar"><div style="width: {stats.fake_pct:.1f}%"></div></div>
    </div>"""


def _render_queue(queue: Sequence[ReviewCandidate], busy: bool) -> str:
    if not queue:
        return ""

    disabled = " disabled" if busy else ""
    rows = ""
    for i, candidate in enumerate(queue):
        rows += f"""
        <div class="item">
            <div class="item-head">
                <strong>Review #{i + 1}</strong>
                <form method="post" action="/batch/{i}/remove"><button type="submit" class="btn-tiny"{disabled}>✕</button></form>
            </div>
            <div class="muted">{escape(candidate.text)}</div>
        </div>"""

    plural = "s" if len(queue) != 1 else ""
    label = "Processing..." if busy else f"Analyze Batch ({len(queue)})"
    return f"""
    <div class="card">
        <div class="item-head">
            <div><h2>Processing Queue</h2><div class="muted">{len(queue)} review{plural} ready for analysis</div></div>
            <form method="post" action="/batch/submit"><button type="submit" class="btn"{disabled}>{label}</button></form>
        </div>
        {rows}
    </div>"""


def _render_result(result: ReviewResult) -> str:
    reasons = ""
    if result.has_explanation:
        items = "".join(f"<li>{escape(reason)}</li>" for reason in result.explanation)
        reasons = f"<details><summary>Why?</summary><ul class='muted'>{items}</ul></details>"

    return f"""
    <div class="item">
        <div class="item-head">
            <span class="badge {result.prediction.value}">{result.prediction.value.upper()}</span>
            <span class="conf-{result.confidence_level.value}">{result.confidence * 100:.1f}% confidence</span>
            <span class="muted">{result.timestamp.strftime('%Y-%m-%d %H:%M:%S')}</span>
        </div>
        <div>{escape(result.text)}</div>
        {reasons}
    </div>"""


def _render_results(results: Sequence[ReviewResult], active_filter: str, total: int) -> str:
    if total == 0:
        return ""

    links = "".join(
        f'<a href="/?filter={f}" class="{"active" if f == active_filter else ""}">{f.title()}</a>'
        for f in FILTERS
    )
    body = "".join(_render_result(r) for r in results) or '<div class="muted">No results match this filter.</div>'

    return f"""
    <div class="card">
        <div class="item-head">
            <h2>Analysis Results</h2>
            <a class="btn" href="/export" style="text-decoration:none">Export CSV</a>
        </div>
        <div class="filters" style="margin-bottom: 14px;">{links}</div>
        {body}
    </div>"""


def render_dashboard(
    stats: SessionStats,
    queue: Sequence[ReviewCandidate],
    results: Sequence[ReviewResult],
    active_filter: str = "all",
    busy: bool = False,
    max_chars: int = 2000,
    message: str = "",
    error: str = "",
) -> str:
    """Render the single-page dashboard."""
    disabled = " disabled" if busy else ""
    single_label = "Analyzing Review..." if busy else "Analyze Review"

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Echo Veritas - Fake Review Detection</title>
    <style>{SHARED_CSS}</style>
</head>
<body>
<div class="container">
    <header style="margin-bottom: 24px;">
        <h1>Echo Veritas</h1>
        <div class="muted">AI-Powered Fake Review Detection</div>
    </header>
    {_alert(message, error)}
    <div class="grid">
        <div>
            <div class="card">
                <h2>Review Analysis</h2>
                <form method="post" action="/analyze">
                    <textarea name="text" maxlength="{max_chars}" placeholder="Enter the review you'd like to analyze for authenticity..."{disabled}></textarea>
                    <button type="submit" class="btn"{disabled}>{single_label}</button>
                </form>
            </div>
            <div class="card">
                <h2>Batch Process</h2>
                <form method="post" action="/batch/text">
                    <textarea name="text" placeholder="Paste your reviews here, one per line..."{disabled}></textarea>
                    <button type="submit" class="btn"{disabled}>Add to Queue</button>
                </form>
                <form method="post" action="/batch/upload" enctype="multipart/form-data" style="margin-top: 16px;">
                    <input type="file" name="file" accept="{UPLOAD_ACCEPT}"{disabled}>
                    <div class="muted" style="margin-bottom: 10px;">First row is treated as a header · reviews in the first column or in quotes · minimum 10 characters</div>
                    <button type="submit" class="btn"{disabled}>Upload File</button>
                </form>
            </div>
            {_render_queue(queue, busy)}
            {_render_results(results, active_filter, stats.total)}
        </div>
        <div>
            {_render_stats(stats)}
        </div>
    </div>
</div>
</body>
</html>"""
