"""Custom exceptions for the sequence statistics package."""


class StatisticsError(Exception):
    """Base exception for all sequence statistics errors."""
    pass


class ConfigurationError(StatisticsError):
    """Raised when there are errors in the configuration file or arguments."""
    pass


class PercentileError(ConfigurationError):
    """Raised when a requested Nx percentile is invalid."""
    pass


class InputFileError(StatisticsError):
    """Raised when the input file is missing, unreadable or not a regular file."""
    pass


class CompressionError(StatisticsError):
    """Raised when there are errors decompressing files."""
    pass


class FileFormatError(StatisticsError):
    """Base exception for file format errors."""
    pass


class FastaFormatError(FileFormatError):
    """Raised when FASTA file has invalid format."""
    pass


class FastqFormatError(FileFormatError):
    """Raised when FASTQ file has invalid format."""
    pass


class RecordIdError(FileFormatError):
    """Raised when a record id cannot be decoded as UTF-8 text."""
    pass
