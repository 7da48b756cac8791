"""Helpers to render and serialise scan results."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .instruction import format_shape
from .registry import BlockRegistry
from .scanner import BlockInfo


@dataclass(frozen=True)
class MatchSummary:
    """Aggregate counters for a list of block outcomes."""

    total: int
    matched: int
    unmatched: int
    hits: Tuple[Tuple[int, int], ...] = ()

    @classmethod
    def from_results(cls, results: Sequence[BlockInfo]) -> "MatchSummary":
        hits = Counter(info.registry_idx for info in results if info.registry_idx is not None)
        matched = sum(hits.values())
        return cls(
            total=len(results),
            matched=matched,
            unmatched=len(results) - matched,
            hits=tuple(sorted(hits.items())),
        )

    def most_common(self, limit: int = 10) -> List[Tuple[int, int]]:
        return Counter(dict(self.hits)).most_common(limit)

    def describe(self) -> List[str]:
        lines = [f"blocks: {self.total} matched={self.matched} unmatched={self.unmatched}"]
        for identifier, count in self.most_common():
            lines.append(f"  #{identifier:<4d} -> {count:6d}")
        return lines


def describe_matches(results: Sequence[BlockInfo], registry: Optional[BlockRegistry] = None) -> List[str]:
    """Return one human readable line per block outcome."""

    lines: List[str] = []
    for info in results:
        line = info.describe()
        if registry is not None and info.registry_idx is not None:
            line += f" ({format_shape(registry.shape(info.registry_idx))})"
        lines.append(line)
    return lines


def serialize_match(info: BlockInfo) -> Dict[str, Any]:
    return {
        "start": info.block_start_idx,
        "end": info.block_end_idx,
        "registry_idx": info.registry_idx,
    }


def serialize_matches(results: Sequence[BlockInfo]) -> List[Dict[str, Any]]:
    """Convert block outcomes into JSON-serialisable mappings."""

    return [serialize_match(info) for info in results]


def serialize_summary(summary: MatchSummary) -> Dict[str, Any]:
    return {
        "total": summary.total,
        "matched": summary.matched,
        "unmatched": summary.unmatched,
        "hits": {str(identifier): count for identifier, count in summary.hits},
    }
