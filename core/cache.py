"""
Bounded cache of complexity estimates keyed by snippet text.
"""

from collections import OrderedDict
from typing import Optional

from .models import ComplexityEstimate


class ComplexityCache:
    """
    Insertion-ordered estimate cache.

    Keys are the stripped snippet text. Values keep the label together with
    where it came from. When full, the oldest inserted entry is evicted;
    overwriting a key does not refresh its position.
    """

    def __init__(self, max_size: int = 50):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self._entries: OrderedDict[str, ComplexityEstimate] = OrderedDict()

    @staticmethod
    def key(code: str) -> str:
        return code.strip()

    def get(self, code: str) -> Optional[ComplexityEstimate]:
        return self._entries.get(self.key(code))

    def set(self, code: str, estimate: ComplexityEstimate) -> None:
        self._entries[self.key(code)] = estimate
        while len(self._entries) > self.max_size:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, code: str) -> bool:
        return self.key(code) in self._entries

    def __len__(self) -> int:
        return len(self._entries)
