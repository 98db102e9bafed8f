"""
Extraction pipeline for SecHub.

Runs extraction strategies in priority order and returns the first result
that clears its strategy's length gate.
"""

from __future__ import annotations

import time
from typing import Dict, List, Optional, Sequence, Tuple

import structlog

from sechub.config.config import READABILITY_MIN_LENGTH, SELECTOR_MIN_LENGTH, ExtractionConfig
from sechub.observability import increment

from .fetcher import PageFetcher
from .models import ExtractionResult
from .protocols import ExtractionStrategy
from .readability_extractor import ReadabilityStrategy
from .selector_extractor import SelectorStrategy

logger = structlog.get_logger(__name__)

ALL_STRATEGIES_FAILED = "All extraction strategies failed"

__all__ = ["ExtractionPipeline", "ALL_STRATEGIES_FAILED", "READABILITY_MIN_LENGTH", "SELECTOR_MIN_LENGTH"]


class ExtractionPipeline:
    """
    Ordered fallback chain of extraction strategies.

    Each stage is a ``(strategy, min_length)`` pair. A stage is promoted when
    its result is successful and its content is longer than ``min_length``.
    A ``min_length`` of None promotes any successful result, empty content
    included.
    Exceptions raised by a stage are logged and demote it to a failure so the
    next stage runs.
    """

    def __init__(self, stages: Sequence[Tuple[ExtractionStrategy, Optional[int]]]) -> None:
        if not stages:
            raise ValueError("ExtractionPipeline needs at least one strategy")
        self.stages: List[Tuple[ExtractionStrategy, Optional[int]]] = list(stages)
        self.logger = logger.bind(component="ExtractionPipeline")

        self._metrics: Dict[str, Dict[str, float]] = {
            strategy.name: {"attempts": 0, "successes": 0, "total_time": 0.0} for strategy, _ in self.stages
        }

    @classmethod
    def from_config(cls, config: ExtractionConfig, fetcher: PageFetcher) -> ExtractionPipeline:
        """Build the default readability -> selector chain."""
        readability = ReadabilityStrategy(fetcher, accept=config.readability_accept)
        selector = SelectorStrategy(
            fetcher,
            accept=config.selector_accept,
            selectors=config.content_selectors,
            min_length=config.selector_min_length,
        )
        return cls([(readability, config.readability_min_length), (selector, None)])

    async def extract_with_strategies(self, url: str) -> ExtractionResult:
        for strategy, min_length in self.stages:
            name = strategy.name
            stats = self._metrics[name]
            stats["attempts"] += 1
            start_time = time.time()

            try:
                result = await strategy.extract(url)
            except Exception as e:
                stats["total_time"] += time.time() - start_time
                increment("strategy_attempts", labels={"strategy": name, "status": "error"})
                self.logger.warning(
                    "Extraction strategy failed",
                    strategy=name,
                    url=url,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                continue

            stats["total_time"] += time.time() - start_time

            if result.success and (min_length is None or len(result.content) > min_length):
                stats["successes"] += 1
                increment("strategy_attempts", labels={"strategy": name, "status": "success"})
                self.logger.info(
                    "Extraction strategy succeeded",
                    strategy=name,
                    url=url,
                    text_length=len(result.content),
                )
                return result

            increment("strategy_attempts", labels={"strategy": name, "status": "insufficient"})
            self.logger.debug(
                "Extraction strategy below length threshold",
                strategy=name,
                url=url,
                text_length=len(result.content),
                threshold=min_length,
            )

        self.logger.warning("All extraction strategies failed", url=url)
        return ExtractionResult.failure(ALL_STRATEGIES_FAILED)

    def get_metrics(self) -> Dict[str, Dict[str, float]]:
        """Per-strategy attempt, success and timing figures."""
        metrics = {}
        for name, raw in self._metrics.items():
            attempts = raw["attempts"]
            metrics[name] = {
                "attempts": attempts,
                "successes": raw["successes"],
                "success_rate": raw["successes"] / attempts if attempts > 0 else 0.0,
                "total_time": raw["total_time"],
                "avg_time": raw["total_time"] / attempts if attempts > 0 else 0.0,
            }
        return metrics
