"""Utility functions for sequence statistics calculations."""

from dataclasses import dataclass
from typing import Callable, Iterable, List, Sequence, Tuple, Union

from Bio.Seq import Seq

from seqstats_pkg.exceptions import PercentileError

__all__ = [
    'MASKED_SYMBOLS',
    'LINE_BREAKS',
    'FIXED_PERCENTILES',
    'SequenceStatistics',
    'is_masked',
    'coverage_threshold',
    'assert_sorted_lengths',
    'calculate_nx',
    'validate_percentiles',
    'build_percentile_requests',
]

MASKED_SYMBOLS = frozenset('Nn')
LINE_BREAKS = frozenset('\n\r')

# Always reported, in this order, before any additional percentiles
FIXED_PERCENTILES = (50, 75)


def is_masked(char: str) -> bool:
    """Return True for the masked base symbol, case-insensitive ('N' or 'n')."""
    return char in MASKED_SYMBOLS


def _as_text(sequence) -> str:
    # One byte per character, every byte value survives
    if isinstance(sequence, str):
        return sequence
    if isinstance(sequence, (bytes, bytearray, memoryview)):
        return bytes(sequence).decode('latin-1')
    if isinstance(sequence, Seq):
        return bytes(sequence).decode('latin-1')
    return str(sequence)


@dataclass(frozen=True)
class SequenceStatistics:
    """Lengths of a single sequence record.

    ``hoco_len`` is the homopolymer-compressed length: the number of maximal
    runs of identical consecutive characters. Runs are split on exact character
    inequality, so ``"Nn"`` is two runs even though both characters are masked.
    """
    len: int = 0
    hoco_len: int = 0
    len_without_ns: int = 0
    hoco_len_without_ns: int = 0

    @classmethod
    def from_sequence(cls, sequence: Union[str, bytes, bytearray, object]) -> "SequenceStatistics":
        """
        Compute all four lengths in a single pass.

        Args:
            sequence: Residues as str, bytes or Bio.Seq.Seq. Embedded line breaks
                are skipped and count towards nothing.

        Returns:
            SequenceStatistics, all zero for an empty sequence

        Examples:
            >>> SequenceStatistics.from_sequence("AAANNNTT")
            SequenceStatistics(len=8, hoco_len=3, len_without_ns=5, hoco_len_without_ns=2)
        """
        length = 0
        hoco_length = 0
        masked = 0
        masked_runs = 0
        last_char = None

        for char in _as_text(sequence):
            if char in LINE_BREAKS:
                continue

            length += 1
            char_is_masked = char in MASKED_SYMBOLS
            if char_is_masked:
                masked += 1

            if char != last_char:
                last_char = char
                hoco_length += 1
                if char_is_masked:
                    masked_runs += 1

        return cls(
            len=length,
            hoco_len=hoco_length,
            len_without_ns=length - masked,
            hoco_len_without_ns=hoco_length - masked_runs,
        )


def coverage_threshold(total: int, percentile: int) -> int:
    """Bases that must be covered for the given percentile (multiply before dividing)."""
    return total * percentile // 100


def assert_sorted_lengths(sorted_lengths: Sequence[int], total: int) -> None:
    """Assert non-increasing order and that ``total`` is the sum of the lengths."""
    assert all(a >= b for a, b in zip(sorted_lengths, sorted_lengths[1:])), \
        "lengths must be sorted in non-increasing order"
    assert sum(sorted_lengths) == total, "total does not match the sum of lengths"


def calculate_nx(
    sorted_lengths: Sequence[int],
    total: int,
    coverage: Union[int, Callable[[int], int]],
    check_preconditions: bool = True
) -> int:
    """Calculate the Nx metric of a length distribution.

    Nx is the length of the first sequence, scanning from the longest down,
    at which the running total of lengths reaches the coverage threshold:
    sequences at least this long cover x% of ``total``.

    Args:
        sorted_lengths: Lengths sorted in non-increasing order (ties allowed)
        total: Sum of ``sorted_lengths``
        coverage: Percentile in [0, 100], or a function mapping the total to
            the required number of covered bases
        check_preconditions: Assert the order and the total of ``sorted_lengths``.
            Both are full passes; callers that already guarantee them
            (LengthDistribution) pass False.

    Returns:
        The Nx length

    Raises:
        ValueError: If ``sorted_lengths`` is empty (Nx is undefined)

    Examples:
        >>> calculate_nx([100, 1], 101, 50)
        100
        >>> calculate_nx([10, 10, 10, 10, 10], 50, lambda total: total * 3 // 4)
        10
    """
    if not sorted_lengths:
        raise ValueError("Nx is undefined for an empty length distribution")

    if __debug__ and check_preconditions:
        assert_sorted_lengths(sorted_lengths, total)

    if callable(coverage):
        required_covered_bases = coverage(total)
    else:
        required_covered_bases = coverage_threshold(total, coverage)
    assert 0 <= required_covered_bases <= total, "coverage threshold exceeds the total"

    covered = 0
    for length in sorted_lengths:
        covered += length
        if covered >= required_covered_bases:
            return length

    raise AssertionError("coverage threshold not reached; distribution total is inconsistent")


def validate_percentiles(percentiles: Iterable) -> List[int]:
    """Check additional percentiles: integers in [0, 100], no repeats of any requested value."""
    validated = []
    seen = set(FIXED_PERCENTILES)

    for value in percentiles:
        if isinstance(value, bool) or not isinstance(value, int):
            raise PercentileError(
                f"Percentile must be an integer between 0 and 100, got {value!r}"
            )
        if not 0 <= value <= 100:
            raise PercentileError(
                f"Percentile {value} is outside the range 0-100"
            )
        if value in seen:
            if value in FIXED_PERCENTILES:
                raise PercentileError(
                    f"Percentile {value} is always reported and must not be requested again"
                )
            raise PercentileError(f"Percentile {value} was requested more than once")
        seen.add(value)
        validated.append(value)

    return validated


def build_percentile_requests(additional_percentiles: Iterable = ()) -> Tuple[int, ...]:
    """Return N50, N75 and the additional percentiles in ascending order."""
    additional = validate_percentiles(additional_percentiles)
    return tuple(sorted(FIXED_PERCENTILES + tuple(additional)))
