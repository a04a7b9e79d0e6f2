"""
Experience Interval Merger - Ranking Electoral
electoral_scoring/scoring/interval_merger.py

Collapses overlapping tenures so concurrent jobs are not double counted.

Algorithm:
    1. Resolve open ends (end_year=None) to the reference year.
    2. Sort by start year.
    3. Sweep: merge while next.start <= current.end (touching spans merge).
    4. unique_years = Σ (end − start) over merged spans.

Spans whose end precedes their start contribute 0 years. The reference
year is always supplied by the caller; the clock is never read here.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

import structlog

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Interval:
    start: int
    end: int

    @property
    def years(self) -> int:
        return max(self.end - self.start, 0)


@dataclass
class MergeResult:
    """Output of ExperienceIntervalMerger.merge()."""
    intervals: List[Interval] = field(default_factory=list)  # merged, sorted
    raw_years: int = 0        # Σ per-record years before merging
    unique_years: int = 0     # Σ merged years
    has_overlap: bool = False  # unique_years < raw_years


class ExperienceIntervalMerger:
    """Merge (start_year, end_year) tenures into disjoint spans."""

    def merge(
        self,
        spans: Iterable[Tuple[int, Optional[int]]],
        reference_year: int,
    ) -> MergeResult:
        """
        Args:
            spans: (start_year, end_year) pairs; end_year None means ongoing.
            reference_year: Year used to close ongoing tenures.

        Returns:
            MergeResult with merged intervals and year totals.
        """
        resolved = [
            Interval(start, end if end is not None else reference_year)
            for start, end in spans
        ]
        if not resolved:
            return MergeResult()

        raw_years = sum(i.years for i in resolved)

        # Inverted spans carry no time and must not stretch a merged span
        ordered = sorted(
            (i if i.end >= i.start else Interval(i.start, i.start) for i in resolved),
            key=lambda i: (i.start, i.end),
        )

        merged: List[Interval] = [ordered[0]]
        for current in ordered[1:]:
            last = merged[-1]
            if current.start <= last.end:
                merged[-1] = Interval(last.start, max(last.end, current.end))
            else:
                merged.append(current)

        unique_years = sum(i.years for i in merged)

        logger.debug(
            "intervals_merged",
            span_count=len(resolved),
            merged_count=len(merged),
            raw_years=raw_years,
            unique_years=unique_years,
        )

        return MergeResult(
            intervals=merged,
            raw_years=raw_years,
            unique_years=unique_years,
            has_overlap=unique_years < raw_years,
        )
