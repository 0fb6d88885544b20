"""
Prompt templates for complexity analysis.

Two prompts: a bare label for the inline check, and a short labeled report
for the full analysis panel.
"""


def build_quick_prompt(code: str) -> str:
    """
    Build the inline label prompt.

    Args:
        code: Python source to analyze

    Returns:
        Prompt asking for the Big-O label only
    """
    return f"""Time complexity of this Python code? Reply with ONLY the Big-O notation (e.g., "O(n)", "O(n²)", "O(n log n)"). No explanation.

```python
{code}
```"""


def build_analysis_prompt(code: str) -> str:
    """
    Build the full report prompt.

    The report fields are parsed back by ``core.report.parse_analysis``.
    """
    return f"""You are an expert Python performance analyst. Analyze this code's complexity.

Python Code:
```python
{code}
```

Provide a CONCISE analysis with:
1. **Time Complexity**: O(?) with brief explanation
2. **Space Complexity**: O(?) with brief explanation
3. **Bottleneck**: Which exact line(s) and why
4. **Optimization**: ONE concrete suggestion to improve performance
5. **Rating**: 🟢 Excellent / 🟡 Good / 🟠 Needs Work / 🔴 Poor

Be specific about Python operations (list comprehensions, dict lookups, etc).
Keep total response under 200 words."""
