"""
Heuristic time complexity estimator.

Pattern-based classifier over Python source text. No parsing and no
execution: the snippet is scanned as text and indentation only. Used when
the remote model is unavailable, and for offline estimates.
"""

import re
from functools import cached_property
from typing import Callable, Optional


O_1 = "O(1)"
O_LOG_N = "O(log n)"
O_N = "O(n)"
O_N_LOG_N = "O(n log n)"
O_N2 = "O(n²)"
O_N3 = "O(n³)"
O_2N = "O(2^n)"

COMPLEXITY_LABELS = (O_1, O_LOG_N, O_N, O_N_LOG_N, O_N2, O_N3, O_2N)

_FUNC_DEF = re.compile(r"def\s+(\w+)\s*\(")
_MEMBERSHIP_TEST = re.compile(r"\sin\s+(?!range)")
_LOOP_TOKEN = re.compile(r"\b(?:for|while)\b")
_HALVING = ("// 2", "/ 2")


def _mentions(code: str, *words: str) -> bool:
    return any(word in code for word in words)


def max_nesting_depth(code: str) -> int:
    """
    Measure how deeply loop headers are nested, by indentation.

    Sequential loops at the same level do not accumulate. A loop only counts
    towards the maximum once it sits inside another loop's body, so a lone
    loop (or several sibling loops) reports 0.
    """
    max_depth = 0
    depth = 0
    indent_stack: list[int] = []

    for line in code.split("\n"):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        indent = len(line) - len(line.lstrip())

        if stripped.startswith(("for ", "while ")):
            if indent_stack and indent > indent_stack[-1]:
                depth += 1
                max_depth = max(max_depth, depth)
            else:
                while indent_stack and indent <= indent_stack[-1]:
                    indent_stack.pop()
                    depth = max(0, depth - 1)
                depth += 1
            indent_stack.append(indent)
        elif indent_stack and indent < indent_stack[-1]:
            while indent_stack and indent < indent_stack[-1]:
                indent_stack.pop()
                depth = max(0, depth - 1)

    return max_depth


class _Snippet:
    """Facts about one snippet, computed on first use."""

    def __init__(self, code: str):
        self.code = code

    @cached_property
    def function_calls(self) -> Optional[int]:
        # Includes the ``def`` header itself: one recursive call gives 2.
        match = _FUNC_DEF.search(self.code)
        if not match:
            return None
        name = re.escape(match.group(1))
        return len(re.findall(rf"\b{name}\s*\(", self.code))

    @cached_property
    def depth(self) -> int:
        return max_nesting_depth(self.code)

    @cached_property
    def halves(self) -> bool:
        return _mentions(self.code, *_HALVING)

    @cached_property
    def has_loop(self) -> bool:
        return bool(_LOOP_TOKEN.search(self.code))


def _binary_search(s: _Snippet) -> Optional[str]:
    code = s.code
    if (
        "while" in code
        and _mentions(code, "left", "low")
        and _mentions(code, "right", "high")
        and "mid" in code
        and s.halves
    ):
        return O_LOG_N
    return None


def _exponential_recursion(s: _Snippet) -> Optional[str]:
    if s.function_calls is not None and s.function_calls > 2:
        if _mentions(s.code, "fibonacci", "fib"):
            return O_2N
    return None


def _divide_and_conquer(s: _Snippet) -> Optional[str]:
    if s.function_calls is not None and s.function_calls >= 3:
        if _mentions(s.code, "merge", "partition"):
            return O_N_LOG_N
    return None


def _recursive_binary_search(s: _Snippet) -> Optional[str]:
    if s.function_calls == 2 and _mentions(s.code, "mid", "m") and s.halves:
        return O_LOG_N
    return None


def _builtin_sort(s: _Snippet) -> Optional[str]:
    if _mentions(s.code, ".sort(", "sorted("):
        return O_N_LOG_N
    return None


def _membership_in_loop(s: _Snippet) -> Optional[str]:
    # ``x in items`` is a linear scan; inside a loop it compounds.
    if _MEMBERSHIP_TEST.search(s.code) and s.depth >= 1:
        return O_N2
    return None


def _nesting(s: _Snippet) -> Optional[str]:
    if s.depth >= 3:
        return O_N3
    if s.depth == 2:
        return O_N2
    if s.depth == 1:
        return O_N
    return None


def _no_loops(s: _Snippet) -> Optional[str]:
    if not s.has_loop:
        return O_1
    return None


# First match wins; the patterns overlap, so order matters.
RULES: tuple[tuple[str, Callable[[_Snippet], Optional[str]]], ...] = (
    ("binary_search", _binary_search),
    ("exponential_recursion", _exponential_recursion),
    ("divide_and_conquer", _divide_and_conquer),
    ("recursive_binary_search", _recursive_binary_search),
    ("builtin_sort", _builtin_sort),
    ("membership_in_loop", _membership_in_loop),
    ("nesting", _nesting),
    ("no_loops", _no_loops),
)

DEFAULT_LABEL = O_N


def classify(code: str) -> str:
    """
    Estimate the time complexity of a Python snippet.

    Args:
        code: Source code text (any string, including empty)

    Returns:
        A Big-O label from COMPLEXITY_LABELS. Never raises.
    """
    snippet = _Snippet(code)
    for _name, rule in RULES:
        label = rule(snippet)
        if label is not None:
            return label
    return DEFAULT_LABEL
