import pytest

from core.estimator import COMPLEXITY_LABELS, classify, max_nesting_depth


BINARY_SEARCH = """def binary_search(arr, target):
    left, right = 0, len(arr) - 1
    while left <= right:
        mid = (left + right) // 2
        if arr[mid] == target:
            return mid
        elif arr[mid] < target:
            left = mid + 1
        else:
            right = mid - 1
    return -1"""

FIB = """def fib(n):
    if n <= 1:
        return n
    return fib(n - 1) + fib(n - 2)"""

MERGE_SORT = """def merge_sort(arr):
    if len(arr) <= 1:
        return arr
    mid = len(arr) // 2
    left = merge_sort(arr[:mid])
    right = merge_sort(arr[mid:])
    return merge(left, right)"""

RECURSIVE_SEARCH = """def bsearch(arr, target, lo, hi):
    if lo > hi:
        return -1
    mid = (lo + hi) // 2
    if arr[mid] == target:
        return mid
    if arr[mid] < target:
        lo = mid + 1
    else:
        hi = mid - 1
    return bsearch(arr, target, lo, hi)"""

SEQUENTIAL = """for i in range(n):
    print(i)
for j in range(n):
    print(j)"""

NESTED = """for i in range(n):
    for j in range(n):
        print(i, j)"""

TRIPLE = """for i in range(n):
    for j in range(n):
        for k in range(n):
            total += i * j * k"""


def test_binary_search_literal_case():
    code = "while left <= right:\n    mid = (left + right) // 2"
    assert classify(code) == "O(log n)"


def test_binary_search_function():
    assert classify(BINARY_SEARCH) == "O(log n)"


def test_fibonacci_recursion_is_exponential():
    assert classify(FIB) == "O(2^n)"


def test_merge_sort_is_n_log_n():
    assert classify(MERGE_SORT) == "O(n log n)"


def test_single_recursive_call_with_halving_is_logarithmic():
    assert classify(RECURSIVE_SEARCH) == "O(log n)"


@pytest.mark.parametrize("code", ["arr.sort()", "sorted(arr)"])
def test_builtin_sort(code):
    assert classify(code) == "O(n log n)"


def test_sort_overrides_nesting():
    assert classify(NESTED + "\nresult = sorted(arr)") == "O(n log n)"


def test_sequential_loops_are_linear():
    assert classify(SEQUENTIAL) == "O(n)"


def test_nested_loops_are_quadratic():
    assert classify(NESTED) == "O(n²)"


def test_triple_nesting_is_cubic():
    assert classify(TRIPLE) == "O(n³)"


def test_membership_test_inside_nested_loops():
    code = """for x in a:
    for y in b:
        for z in c:
            if z in seen:
                pass"""
    # the membership rule runs before the depth fallback
    assert classify(code) == "O(n²)"


def test_membership_in_single_loop_stays_linear():
    code = "for x in items:\n    if x in seen:\n        count += 1"
    assert classify(code) == "O(n)"


@pytest.mark.parametrize("code", ["", "x = 1", "def f(a):\n    return a + 1", "print('hello')"])
def test_no_loops_is_constant(code):
    assert classify(code) == "O(1)"


def test_loop_keyword_inside_identifier_is_not_a_loop():
    assert classify("format_value = platform_name") == "O(1)"


def test_single_while_loop_defaults_to_linear():
    assert classify("while True:\n    step()") == "O(n)"


def test_commented_out_loop_does_not_nest():
    code = "for i in range(n):\n    # for j in range(n):\n    print(i)"
    assert classify(code) == "O(n)"


@pytest.mark.parametrize(
    "code",
    [
        "",
        "\n\n\t  \n",
        "def (",
        "def f(:",
        "((((",
        "    for\n  while\nfor x in",
        "def fib(",
        "\u00b2\u00b3 # \u2603",
        "'unterminated",
    ],
)
def test_classify_is_total(code):
    assert classify(code) in COMPLEXITY_LABELS


def test_depth_of_sibling_loops_is_zero():
    assert max_nesting_depth(SEQUENTIAL) == 0


def test_depth_counts_nested_loops():
    assert max_nesting_depth(NESTED) == 2
    assert max_nesting_depth(TRIPLE) == 3


def test_depth_after_dedent():
    code = """for i in a:
    for j in b:
        pass
x = 1
for k in c:
    pass"""
    assert max_nesting_depth(code) == 2


def test_depth_ignores_blank_and_comment_lines():
    code = "for i in a:\n\n    # comment\n    for j in b:\n        pass"
    assert max_nesting_depth(code) == 2
