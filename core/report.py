"""
Analysis report parsing and HTML rendering.

The full analysis comes back from the model as loosely formatted text with
labeled lines (Time Complexity, Space Complexity, Bottleneck, Optimization,
Rating) and fenced code blocks. Parsing is line based and never fails:
unrecognized lines become paragraphs.
"""

import html
import re
from typing import Optional

from .highlighter import highlight
from .models import AnalysisReport, ReportBlock

_NOTATION = re.compile(r"O\([^)]+\)")
_BOLD = re.compile(r"\*\*(.*?)\*\*")
_RATING_MARKS = ("🟢", "🟡", "🟠", "🔴")
_FENCE = "```"


def _has_label(line: str, label: str) -> bool:
    return f"{label}:" in line or f"**{label}**" in line


def _field_text(line: str) -> str:
    # Text between the first and second colon.
    parts = line.split(":")
    return parts[1] if len(parts) > 1 else ""


def _metric(kind: str, line: str) -> ReportBlock:
    match = _NOTATION.search(line)
    notation = match.group(0) if match else "O(?)"
    desc = _NOTATION.sub("", _field_text(line), count=1).replace("**", "").strip()
    return ReportBlock(kind=kind, notation=notation, text=desc)


def _classify_line(line: str) -> Optional[ReportBlock]:
    if _has_label(line, "Time Complexity"):
        return _metric("time", line)
    if _has_label(line, "Space Complexity"):
        return _metric("space", line)
    if _has_label(line, "Bottleneck"):
        return ReportBlock(kind="bottleneck", text=_field_text(line).replace("**", "").strip())
    if _has_label(line, "Optimization"):
        return ReportBlock(kind="optimization", text=_field_text(line).replace("**", "").strip())
    if _has_label(line, "Rating") or any(mark in line for mark in _RATING_MARKS):
        text = line.replace("**", "").replace("Rating:", "", 1).strip()
        return ReportBlock(kind="rating", text=text)
    if line.strip() and not line.startswith("#"):
        return ReportBlock(kind="paragraph", text=line)
    return None


def parse_analysis(analysis: str) -> AnalysisReport:
    """
    Split a model report into ordered blocks.

    Args:
        analysis: Raw report text

    Returns:
        AnalysisReport keeping the original text and its blocks
    """
    blocks: list[ReportBlock] = []
    in_code = False
    code_lines: list[str] = []

    for line in analysis.split("\n"):
        if line.strip().startswith(_FENCE):
            if in_code:
                blocks.append(ReportBlock(kind="code", text="".join(code_lines)))
                code_lines = []
            in_code = not in_code
            continue

        if in_code:
            code_lines.append(line + "\n")
            continue

        block = _classify_line(line)
        if block is not None:
            blocks.append(block)

    # Unclosed fence: keep what was collected.
    if in_code and code_lines:
        blocks.append(ReportBlock(kind="code", text="".join(code_lines)))

    return AnalysisReport(raw=analysis, blocks=blocks)


def _escape(text: str) -> str:
    return html.escape(text, quote=False)


def _metric_html(label: str, block: ReportBlock) -> str:
    desc = f'<div class="metric-desc">{_escape(block.text)}</div>' if block.text else ""
    return (
        '<div class="metric">'
        f'<div class="metric-label">{label}</div>'
        f'<div class="metric-value">{_escape(block.notation or "O(?)")}</div>'
        f"{desc}"
        "</div>"
    )


def _note_html(css: str, label: str, block: ReportBlock) -> str:
    return (
        f'<div class="metric {css}">'
        f'<div class="metric-label">{label}</div>'
        f'<div class="metric-desc">{_escape(block.text)}</div>'
        "</div>"
    )


def render_block(block: ReportBlock) -> str:
    if block.kind == "time":
        return _metric_html("⏱️ Time Complexity", block)
    if block.kind == "space":
        return _metric_html("💾 Space Complexity", block)
    if block.kind == "bottleneck":
        return _note_html("bottleneck", "🔥 Bottleneck", block)
    if block.kind == "optimization":
        return _note_html("optimization", "💡 Optimization", block)
    if block.kind == "rating":
        return f'<div class="rating">{_escape(block.text)}</div>'
    if block.kind == "code":
        return f'<div class="code-snippet">{highlight(block.text)}</div>'
    text = _BOLD.sub(r"<strong>\1</strong>", _escape(block.text))
    return f"<p>{text}</p>"


def render_report(report: AnalysisReport) -> str:
    """Render report blocks as an HTML fragment."""
    return "".join(render_block(block) for block in report.blocks)


PAGE_STYLE = """
* { margin: 0; padding: 0; box-sizing: border-box; }
body {
    font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
    padding: 30px; background: #1e1e1e; color: #d4d4d4; line-height: 1.6;
}
h1 { color: #4ec9b0; margin-bottom: 30px; font-size: 28px; font-weight: 600; }
.section {
    background: #252526; padding: 24px; border-radius: 8px;
    margin-bottom: 20px; border-left: 4px solid #007acc;
}
.section-header {
    color: #569cd6; font-size: 14px; margin-bottom: 16px;
    text-transform: uppercase; letter-spacing: 1.5px; font-weight: 600;
}
.analysis-content { font-size: 15px; line-height: 1.8; }
.metric {
    margin: 16px 0; padding: 12px; background: #2d2d2d;
    border-radius: 6px; border-left: 3px solid #4ec9b0;
}
.metric-label { color: #dcdcaa; font-weight: 600; font-size: 14px; margin-bottom: 6px; }
.metric-value { color: #ce9178; font-family: 'Consolas', 'Monaco', monospace; font-size: 16px; font-weight: 600; }
.metric-desc { color: #a0a0a0; font-size: 14px; margin-top: 6px; }
.code-snippet {
    background: #1e1e1e; padding: 20px; border-radius: 6px; margin: 12px 0;
    font-family: 'Consolas', 'Monaco', 'Courier New', monospace; font-size: 14px;
    border: 1px solid #3c3c3c; overflow-x: auto; line-height: 1.6;
    white-space: pre; tab-size: 4;
}
.keyword { color: #569cd6; font-weight: 600; }
.string { color: #ce9178; }
.number { color: #b5cea8; }
.comment { color: #6a9955; font-style: italic; }
.builtin { color: #4ec9b0; }
.optimization { background: #1a3a1a; border-left-color: #4ec9b0; }
.bottleneck { background: #3a1a1a; border-left-color: #f48771; }
.rating { font-size: 24px; margin: 16px 0; text-align: center; }
strong { color: #ffd700; font-weight: 600; }
p { margin: 12px 0; }
"""


def render_page(report: AnalysisReport, code: str) -> str:
    """
    Render the full results page: report metrics plus the analyzed code.

    Args:
        report: Parsed analysis report
        code: The snippet that was analyzed

    Returns:
        Standalone HTML document
    """
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Complexity Analysis</title>
<style>{PAGE_STYLE}</style>
</head>
<body>
<h1><span>⚡</span> Complexity Analysis</h1>
<div class="section">
<div class="section-header">📊 PERFORMANCE METRICS</div>
<div class="analysis-content">{render_report(report)}</div>
</div>
<div class="section">
<div class="section-header">🐍 ANALYZED CODE</div>
<div class="code-snippet">{highlight(code)}</div>
</div>
</body>
</html>
"""
