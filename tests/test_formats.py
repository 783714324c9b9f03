"""Tests for format and compression enums."""

import pytest

from seqstats_pkg.utils.formats import CodingType, SequenceFormat


class TestCodingType:
    """Test compression type mapping."""

    @pytest.mark.parametrize("extension,expected", [
        (".gz", CodingType.GZIP),
        ("GZIP", CodingType.GZIP),
        (".bz2", CodingType.BZIP2),
        ("bzip2", CodingType.BZIP2),
        (".fasta", None),
        ("", None),
    ])
    def test_from_extension(self, extension, expected):
        assert CodingType.from_extension(extension) == expected

    def test_from_magic(self):
        assert CodingType.from_magic(b"\x1f\x8b\x08") == CodingType.GZIP
        assert CodingType.from_magic(b"BZh") == CodingType.BZIP2
        assert CodingType.from_magic(b">ch") == CodingType.NONE
        assert CodingType.from_magic(b"") == CodingType.NONE


class TestSequenceFormat:
    """Test sequence format mapping."""

    @pytest.mark.parametrize("value,expected", [
        ("fasta", SequenceFormat.FASTA),
        (".fa", SequenceFormat.FASTA),
        ("FNA", SequenceFormat.FASTA),
        ("fq", SequenceFormat.FASTQ),
        ("reads.fastq", SequenceFormat.FASTQ),
    ])
    def test_flexible_values(self, value, expected):
        assert SequenceFormat(value) == expected

    def test_unknown_value(self):
        with pytest.raises(ValueError):
            SequenceFormat("bam")

    def test_from_leading_char(self):
        assert SequenceFormat.from_leading_char(">") == SequenceFormat.FASTA
        assert SequenceFormat.from_leading_char("@") == SequenceFormat.FASTQ
        assert SequenceFormat.from_leading_char("A") is None
