"""Tests for per-record length extraction."""

import pytest
from Bio.Seq import Seq

from seqstats_pkg.utils.sequence_stats import SequenceStatistics, is_masked


class TestSequenceStatistics:
    """Test SequenceStatistics.from_sequence."""

    def test_simple_sequence(self):
        stats = SequenceStatistics.from_sequence("AAANNNTT")
        assert stats == SequenceStatistics(
            len=8, hoco_len=3, len_without_ns=5, hoco_len_without_ns=2
        )

    def test_empty_sequence_is_all_zero(self):
        assert SequenceStatistics.from_sequence("") == SequenceStatistics(0, 0, 0, 0)

    def test_only_line_breaks_is_all_zero(self):
        assert SequenceStatistics.from_sequence("\n\r\n") == SequenceStatistics(0, 0, 0, 0)

    def test_all_masked(self):
        stats = SequenceStatistics.from_sequence("NNNN")
        assert stats.len == 4
        assert stats.hoco_len == 1
        assert stats.len_without_ns == 0
        assert stats.hoco_len_without_ns == 0

    def test_upper_and_lower_n_are_separate_runs(self):
        """'N' followed by 'n' is two runs, both masked."""
        stats = SequenceStatistics.from_sequence("ANnA")
        assert stats.len == 4
        assert stats.hoco_len == 4
        assert stats.len_without_ns == 2
        assert stats.hoco_len_without_ns == 2

    def test_case_sensitive_runs(self):
        """Runs are split on exact character inequality."""
        stats = SequenceStatistics.from_sequence("aAaA")
        assert stats.hoco_len == 4

    def test_line_breaks_do_not_split_runs(self):
        stats = SequenceStatistics.from_sequence("AAA\nAAA\r\nCC")
        assert stats.len == 8
        assert stats.hoco_len == 2

    def test_leading_line_break_skipped(self):
        stats = SequenceStatistics.from_sequence("\nACGT")
        assert stats.len == 4
        assert stats.hoco_len == 4

    def test_masked_run_across_line_break(self):
        stats = SequenceStatistics.from_sequence("ACNN\nNNGT")
        assert stats.len == 8
        assert stats.len_without_ns == 4
        assert stats.hoco_len == 5
        assert stats.hoco_len_without_ns == 4

    def test_bytes_input(self):
        stats = SequenceStatistics.from_sequence(b"GGGNNCC")
        assert stats == SequenceStatistics(
            len=7, hoco_len=3, len_without_ns=5, hoco_len_without_ns=2
        )

    def test_non_ascii_bytes_are_opaque_symbols(self):
        stats = SequenceStatistics.from_sequence(b"\xff\xff\xfeN")
        assert stats.len == 4
        assert stats.hoco_len == 3
        assert stats.len_without_ns == 3

    def test_biopython_seq_input(self):
        stats = SequenceStatistics.from_sequence(Seq("AAAGCGCTNNNNNTTCGAGGA"))
        assert stats == SequenceStatistics(
            len=21, hoco_len=13, len_without_ns=16, hoco_len_without_ns=12
        )

    def test_biopython_seq_non_ascii_bytes(self):
        stats = SequenceStatistics.from_sequence(Seq(b"AC\xe9\xe9GT"))
        assert stats.len == 6
        assert stats.hoco_len == 5

    def test_no_alphabet_validation(self):
        stats = SequenceStatistics.from_sequence("XX--**")
        assert stats.len == 6
        assert stats.hoco_len == 3

    @pytest.mark.parametrize("sequence", [
        "A",
        "ACGT",
        "NNNNN",
        "nNnN",
        "AAAACCCCGGGGTTTTNNNN",
        "ACGTNacgtn\nACGTN",
        "GATTACA" * 50,
    ])
    def test_length_invariants(self, sequence):
        stats = SequenceStatistics.from_sequence(sequence)
        assert stats.hoco_len <= stats.len
        assert stats.len_without_ns <= stats.len
        assert stats.hoco_len_without_ns <= stats.hoco_len
        assert stats.len > 0

    def test_is_frozen(self):
        stats = SequenceStatistics.from_sequence("ACGT")
        with pytest.raises(AttributeError):
            stats.len = 10


class TestIsMasked:
    """Test masked symbol detection."""

    @pytest.mark.parametrize("char", ["N", "n"])
    def test_masked(self, char):
        assert is_masked(char)

    @pytest.mark.parametrize("char", ["A", "X", "-", "\n"])
    def test_not_masked(self, char):
        assert not is_masked(char)
