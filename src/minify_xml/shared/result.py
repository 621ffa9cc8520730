"""Result objects for XML minification.

Defines the report returned by the configured minifier: the minified text
together with per-pass size metrics and timing information.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class PassMetrics:
    """Metrics recorded for a single minification pass."""

    name: str
    applied: bool
    characters_before: int = 0
    characters_after: int = 0
    processing_time_ms: float = 0.0

    def __post_init__(self) -> None:
        """Validate pass metrics."""
        if not self.name:
            raise ValueError("Pass name cannot be empty")
        if self.characters_before < 0 or self.characters_after < 0:
            raise ValueError("Character counts must be >= 0")

    @property
    def characters_saved(self) -> int:
        """Number of characters removed by this pass."""
        return self.characters_before - self.characters_after

    @property
    def changed(self) -> bool:
        """Whether the pass altered the document length."""
        return self.characters_before != self.characters_after


@dataclass
class MinifyResult:
    """Minified document with size and timing metadata."""

    text: str
    original_length: int
    passes: List[PassMetrics] = field(default_factory=list)
    processing_time_ms: float = 0.0
    correlation_id: Optional[str] = None
    source: Optional[str] = None
    encoding: Optional[str] = None
    timestamp: float = field(default_factory=time.time)

    @property
    def minified_length(self) -> int:
        """Length of the minified document in characters."""
        return len(self.text)

    @property
    def characters_saved(self) -> int:
        """Number of characters removed overall."""
        return self.original_length - self.minified_length

    @property
    def reduction_ratio(self) -> float:
        """Fraction of the original document removed (0.0-1.0)."""
        if self.original_length == 0:
            return 0.0
        return self.characters_saved / self.original_length

    @property
    def applied_passes(self) -> List[str]:
        """Names of the passes that were enabled, in application order."""
        return [metrics.name for metrics in self.passes if metrics.applied]

    def add_pass(self, metrics: PassMetrics) -> None:
        """Record metrics for a pass."""
        self.passes.append(metrics)

    def to_dict(self) -> Dict[str, Any]:
        """Summarize the result without the document text."""
        return {
            "source": self.source,
            "encoding": self.encoding,
            "original_length": self.original_length,
            "minified_length": self.minified_length,
            "characters_saved": self.characters_saved,
            "reduction_ratio": round(self.reduction_ratio, 4),
            "processing_time_ms": round(self.processing_time_ms, 3),
            "passes": [
                {
                    "name": metrics.name,
                    "characters_saved": metrics.characters_saved,
                    "processing_time_ms": round(metrics.processing_time_ms, 3),
                }
                for metrics in self.passes
                if metrics.applied
            ],
        }
