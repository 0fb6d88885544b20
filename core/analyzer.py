"""
Core Code Complexity Analyzer.

Model-backed analysis with an offline heuristic fallback.
"""

import logging
import re
from typing import Optional

from .cache import ComplexityCache
from .colors import complexity_color, complexity_tier
from .config import Settings, get_settings
from .estimator import classify
from .models import AnalysisReport, ComplexityEstimate
from .prompts import build_analysis_prompt, build_quick_prompt
from .report import parse_analysis
from providers.anthropic_provider import (
    AnthropicAPIError,
    AnthropicProvider,
    MissingAPIKeyError,
)

logger = logging.getLogger(__name__)

_NOTATION = re.compile(r"O\([^)]+\)")


def extract_notation(text: str) -> str:
    """Pull the first ``O(...)`` out of a model reply, else echo the reply."""
    match = _NOTATION.search(text)
    return match.group(0) if match else text


def _estimate(notation: str, source: str, cached: bool = False) -> ComplexityEstimate:
    return ComplexityEstimate(
        notation=notation,
        source=source,
        tier=complexity_tier(notation),
        color=complexity_color(notation),
        cached=cached,
    )


class CodeComplexityAnalyzer:
    """
    Code complexity analyzer.

    Asks the remote model when an API key is configured and falls back to
    the heuristic estimator otherwise, or when the model call fails.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        cache: Optional[ComplexityCache] = None,
        provider: Optional[AnthropicProvider] = None,
    ):
        self.settings = settings or get_settings()
        self.cache = cache if cache is not None else ComplexityCache(self.settings.CACHE_SIZE)
        self._provider = provider
        self._owns_provider = provider is None

    @property
    def online(self) -> bool:
        return self._provider is not None or self.settings.has_api_key

    async def _get_provider(self) -> AnthropicProvider:
        """Get or create the Anthropic provider."""
        if self._provider is None:
            self._provider = AnthropicProvider(self.settings)
        return self._provider

    async def close(self) -> None:
        """Close provider connection if this analyzer created it."""
        if self._provider and self._owns_provider:
            await self._provider.close()
            self._provider = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def estimate(self, code: str) -> ComplexityEstimate:
        """Offline heuristic estimate; never raises."""
        return _estimate(classify(code), "heuristic")

    async def quick_check(self, code: str) -> ComplexityEstimate:
        """
        Inline complexity label for a snippet.

        Args:
            code: Python snippet

        Returns:
            ComplexityEstimate from the cache, the model, or the heuristic
        """
        cached = self.cache.get(code)
        if cached is not None:
            return cached.model_copy(update={"cached": True})

        if not self.online:
            result = _estimate(classify(code), "heuristic")
            self.cache.set(code, result)
            return result

        try:
            provider = await self._get_provider()
            reply = await provider.complete(
                prompt=build_quick_prompt(code),
                model=self.settings.QUICK_MODEL,
                max_tokens=self.settings.QUICK_MAX_TOKENS,
            )
        except (AnthropicAPIError, MissingAPIKeyError) as e:
            notation = classify(code)
            logger.warning(f"Model check failed, using heuristic {notation}: {e}")
            return _estimate(notation, "heuristic")

        result = _estimate(extract_notation(reply), "model")
        self.cache.set(code, result)
        return result

    async def analyze(self, code: str) -> AnalysisReport:
        """
        Full model-backed analysis report.

        Args:
            code: Python snippet

        Returns:
            Parsed AnalysisReport

        Raises:
            ValueError: If code is empty
            MissingAPIKeyError: If no API key is configured
            AnthropicAPIError: If the API call fails
        """
        if not code or not code.strip():
            raise ValueError("Please select some Python code first")

        provider = await self._get_provider()
        text = await provider.complete(
            prompt=build_analysis_prompt(code),
            model=self.settings.ANALYSIS_MODEL,
            max_tokens=self.settings.ANALYSIS_MAX_TOKENS,
        )
        return parse_analysis(text)
