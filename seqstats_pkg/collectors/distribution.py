"""Length distributions collected from per-record statistics."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional

from seqstats_pkg.utils.settings import BaseSettings
from seqstats_pkg.utils.sequence_stats import (
    SequenceStatistics,
    assert_sorted_lengths,
    calculate_nx,
)

__all__ = [
    'VARIANTS',
    'LengthDistribution',
    'VariantSummary',
    'DistributionAggregator',
]

# Field of SequenceStatistics collected into each distribution
VARIANTS = ('len', 'len_without_ns', 'hoco_len', 'hoco_len_without_ns')


@dataclass
class VariantSummary(BaseSettings):
    """Summary of one length distribution."""
    total: int = 0
    nx: Dict[int, int] = field(default_factory=dict)
    max_length: Optional[int] = None
    min_length: Optional[int] = None


class LengthDistribution:
    """Lengths of all records for one statistic variant, with a running total.

    Lengths arrive in input order and are sorted into non-increasing order
    once, before any Nx or min/max lookup.
    """

    def __init__(self, name: str, lengths: Iterable[int] = ()):
        self.name = name
        self._lengths: List[int] = []
        self._total = 0
        self._sorted = True
        for length in lengths:
            self.append(length)

    def append(self, length: int) -> None:
        if length < 0:
            raise ValueError(f"Sequence length must be non-negative, got {length}")
        if self._lengths and length > self._lengths[-1]:
            self._sorted = False
        self._lengths.append(length)
        self._total += length

    def sort(self) -> None:
        """Sort lengths in non-increasing order (no-op when already sorted)."""
        if not self._sorted:
            self._lengths.sort(reverse=True)
            self._sorted = True

    @property
    def is_sorted(self) -> bool:
        return self._sorted

    @property
    def total(self) -> int:
        return self._total

    @property
    def lengths(self) -> List[int]:
        return self._lengths

    @property
    def max_length(self) -> int:
        self._require_lengths()
        self.sort()
        return self._lengths[0]

    @property
    def min_length(self) -> int:
        self._require_lengths()
        self.sort()
        return self._lengths[-1]

    def nx(self, percentile: int) -> int:
        """Nx of this distribution for a percentile in [0, 100]."""
        self._require_lengths()
        self.sort()
        return calculate_nx(self._lengths, self._total, percentile, check_preconditions=False)

    def summarize(self, percentiles: Iterable[int]) -> VariantSummary:
        """Total, Nx per percentile, max and min length."""
        self._require_lengths()
        self.sort()
        if __debug__:
            assert_sorted_lengths(self._lengths, self._total)
        return VariantSummary(
            total=self._total,
            nx={percentile: self.nx(percentile) for percentile in percentiles},
            max_length=self.max_length,
            min_length=self.min_length,
        )

    def _require_lengths(self) -> None:
        if not self._lengths:
            raise ValueError(f"Length distribution '{self.name}' is empty")

    def __len__(self) -> int:
        return len(self._lengths)

    def __iter__(self) -> Iterator[int]:
        return iter(self._lengths)

    def __repr__(self) -> str:
        return f"LengthDistribution(name={self.name!r}, count={len(self)}, total={self._total})"


class DistributionAggregator:
    """Collects SequenceStatistics into the four length distributions."""

    def __init__(self):
        self.distributions: Dict[str, LengthDistribution] = {
            variant: LengthDistribution(variant) for variant in VARIANTS
        }
        self.record_count = 0

    def add(self, stats: SequenceStatistics) -> None:
        for variant, distribution in self.distributions.items():
            distribution.append(getattr(stats, variant))
        self.record_count += 1

    def finalize(self) -> None:
        """Sort every distribution; call once the input is exhausted."""
        for distribution in self.distributions.values():
            distribution.sort()

    def __getitem__(self, variant: str) -> LengthDistribution:
        return self.distributions[variant]

    def masked_count(self, variant: str = 'len') -> int:
        """Masked bases ('len') or masked runs ('hoco_len') across all records."""
        if variant not in ('len', 'hoco_len'):
            raise ValueError(f"Masked count is defined for 'len' and 'hoco_len', got '{variant}'")
        return self.distributions[variant].total - self.distributions[f"{variant}_without_ns"].total

    def summarize(self, percentiles: Iterable[int]) -> Dict[str, VariantSummary]:
        """Summaries for every variant; empty when no record was collected."""
        if self.record_count == 0:
            return {}
        percentiles = tuple(percentiles)
        return {
            variant: distribution.summarize(percentiles)
            for variant, distribution in self.distributions.items()
        }
