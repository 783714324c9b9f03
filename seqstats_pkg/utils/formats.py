"""Sequence file format and compression type enumerations."""

from enum import Enum
from pathlib import Path
from typing import Optional

__all__ = [
    'CodingType',
    'SequenceFormat',
]


class CodingType(Enum):
    """Supported compression types for sequence files."""
    GZIP = "gzip"
    BZIP2 = "bzip2"
    NONE = "none"

    @classmethod
    def from_extension(cls, extension: str) -> Optional["CodingType"]:
        """Map a compression extension ('.gz', 'bz2', ...) to a CodingType, None if not one."""
        aliases = {
            'gz': cls.GZIP,
            'gzip': cls.GZIP,
            'bz2': cls.BZIP2,
            'bzip2': cls.BZIP2,
        }
        return aliases.get(extension.lower().strip().lstrip('.'))

    @classmethod
    def from_magic(cls, leading_bytes: bytes) -> "CodingType":
        """Detect compression from the first bytes of a file."""
        if leading_bytes.startswith(b'\x1f\x8b'):
            return cls.GZIP
        if leading_bytes.startswith(b'BZh'):
            return cls.BZIP2
        return cls.NONE


class SequenceFormat(Enum):
    FASTA = "fasta"
    FASTQ = "fastq"

    @classmethod
    def from_leading_char(cls, char: str) -> Optional["SequenceFormat"]:
        """Detect the format from the first non-blank character of the content."""
        if char == '>':
            return cls.FASTA
        if char == '@':
            return cls.FASTQ
        return None

    @classmethod
    def _missing_(cls, value):
        """Handle flexible input formats (extensions and filenames)."""
        value_lower = str(value).lower().strip()

        if value_lower.startswith('.'):
            value_lower = value_lower[1:]

        extension_map = {
            'fa': cls.FASTA,
            'fasta': cls.FASTA,
            'fna': cls.FASTA,
            'faa': cls.FASTA,
            'fq': cls.FASTQ,
            'fastq': cls.FASTQ,
        }

        if value_lower in extension_map:
            return extension_map[value_lower]

        if '.' in value_lower:
            ext = Path(value_lower).suffix[1:]
            if ext in extension_map:
                return extension_map[ext]

        raise ValueError(f"'{value}' is not a valid {cls.__name__}")
