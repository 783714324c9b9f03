"""Utility functions for opening and inspecting sequence files."""

import gzip
import bz2
from pathlib import Path
from typing import Union, TextIO, Tuple, Any, Dict

from seqstats_pkg.utils.formats import CodingType, SequenceFormat
from seqstats_pkg.exceptions import CompressionError, FileFormatError, InputFileError

__all__ = [
    'check_input_file',
    'open_file_with_coding_type',
    'detect_compression_type',
    'detect_file_format',
    'parse_config_file_value',
]

MAGIC_BYTES_LENGTH = 3
SNIFF_CHARS = 4096


def check_input_file(filepath: Union[str, Path]) -> Path:
    """Fail before any processing if the input is missing, not a file, or unreadable."""
    filepath = Path(filepath)

    if not filepath.exists():
        raise InputFileError(f"Input file not found: {filepath}")
    if not filepath.is_file():
        raise InputFileError(f"Not a file: {filepath}")

    try:
        with open(filepath, 'rb') as handle:
            handle.read(1)
    except OSError as e:
        raise InputFileError(f"Cannot open input file {filepath}: {e}") from e

    return filepath


def open_file_with_coding_type(
    filepath: Union[str, Path],
    coding_type: CodingType,
    mode: str = 'rt'
) -> TextIO:
    """Open a file with automatic decompression based on CodingType enum.

    Text modes decode latin-1, one character per byte, so no input byte is
    ever rejected.
    """
    filepath = Path(filepath)
    encoding = 'latin-1' if 't' in mode else None

    try:
        if coding_type == CodingType.GZIP:
            return gzip.open(filepath, mode, encoding=encoding)
        elif coding_type == CodingType.BZIP2:
            return bz2.open(filepath, mode, encoding=encoding)
        else:
            return open(filepath, mode, encoding=encoding)
    except OSError as e:
        raise CompressionError(f"Failed to open file {filepath}: {e}") from e


def detect_compression_type(filepath: Union[str, Path]) -> CodingType:
    """Detect compression type from file extension, falling back to magic bytes."""
    filepath = Path(filepath)

    if filepath.suffix:
        coding_type = CodingType.from_extension(filepath.suffix)
        if coding_type is not None:
            return coding_type

    # No compression extension, look at the content
    try:
        with open(filepath, 'rb') as handle:
            leading_bytes = handle.read(MAGIC_BYTES_LENGTH)
    except OSError as e:
        raise InputFileError(f"Cannot read file {filepath}: {e}") from e

    return CodingType.from_magic(leading_bytes)


def _format_extension(filepath: Path):
    suffixes = filepath.suffixes
    if suffixes and CodingType.from_extension(suffixes[-1]) is not None:
        suffixes = suffixes[:-1]
    return suffixes[-1] if suffixes else None


def _sniff_format(filepath: Path, coding_type: CodingType):
    try:
        with open_file_with_coding_type(filepath, coding_type) as handle:
            head = handle.read(SNIFF_CHARS)
    except (OSError, EOFError) as e:
        raise CompressionError(f"Failed to read {filepath.name}: {e}") from e

    stripped = head.lstrip()
    if not stripped:
        # No records at all
        return SequenceFormat.FASTA
    return SequenceFormat.from_leading_char(stripped[0])


def detect_file_format(filepath: Union[str, Path], coding_type: CodingType = CodingType.NONE) -> SequenceFormat:
    """
    Detect FASTA or FASTQ format.

    The format extension wins (``reads.fq.gz`` is FASTQ); files with an unknown
    or missing extension are sniffed from the first non-blank character of the
    decompressed content. Blank content is treated as FASTA with no records.
    """
    filepath = Path(filepath)

    format_ext = _format_extension(filepath)
    if format_ext:
        try:
            return SequenceFormat(format_ext)
        except ValueError:
            pass

    detected = _sniff_format(filepath, coding_type)
    if detected is None:
        raise FileFormatError(
            f"Cannot determine format for {filepath.name}: expected a FASTA ('>') "
            f"or FASTQ ('@') record header.\n"
            f"Supported formats: {', '.join(fmt.name for fmt in SequenceFormat)}"
        )
    return detected


def parse_config_file_value(
    value: Any,
    field_name: str
) -> Tuple[str, Dict[str, Any]]:
    """Parse a file entry from the JSON config (dict with 'filename' or plain string)."""
    filename = None
    extra = {}

    if isinstance(value, dict):
        if 'filename' not in value:
            raise ValueError(f"{field_name} must contain 'filename' field")
        filename = value['filename']
        extra = {k: v for k, v in value.items() if k != 'filename'}

    elif isinstance(value, str):
        filename = value
    else:
        raise ValueError(f"{field_name} must be a dict or string, got {type(value).__name__}")

    if not isinstance(filename, str) or not filename.strip():
        raise ValueError(f"{field_name} filename must be a non-empty string")

    return filename, extra
