"""
Sequence Statistics Package
===========================

Length statistics for FASTA and FASTQ files: record count, total length,
N50, N75 and any additional Nx percentile, longest and shortest record.
Every metric is reported for the raw sequences and for their
homopolymer-compressed (hoco) form, each with and without masked bases
('N' or 'n').

Supported File Types
-------------------
- **Sequence files:** FASTA (.fasta, .fa, .fna, .faa), FASTQ (.fastq, .fq)
- **Compression:** gzip (.gz), bzip2 (.bz2), also detected from magic bytes

Quick Start
-----------

**Functional API:**

>>> from seqstats_pkg import compute_file_statistics, StatisticsReport
>>> result = compute_file_statistics("assembly.fasta", filter_ids=["chrM"],
...                                  additional_percentiles=[90])
>>> report = StatisticsReport()
>>> report.write(result)
>>> report.flush()

**With a config file and custom settings:**

>>> from seqstats_pkg import ConfigManager, FastxStatisticsCollector, compute_statistics
>>> config = ConfigManager.load("config.json")
>>> settings = FastxStatisticsCollector.Settings(progress_interval=10000)
>>> result = compute_statistics(config.input, settings)

Configuration Example
--------------------

.. code-block:: json

    {
      "input": {"filename": "reads.fastq.gz"},
      "filter_ids": ["read_17", "read_42"],
      "additional_percentiles": [90, 95],
      "output_dir": "./output",
      "report_filename": "stats.txt",
      "options": {"progress_interval": 500000}
    }

Package Structure
----------------
- seqstats_pkg.config_manager: Configuration loading and input detection
- seqstats_pkg.collectors: Record filtering, distributions and the collector
- seqstats_pkg.utils: Formats, file handling and Nx calculations
- seqstats_pkg.report: Text report
- seqstats_pkg.logger: Structured logging system
- seqstats_pkg.cli: ``seqstats`` command

Error Handling
-------------
- StatisticsError: Base exception for all package errors
    - ConfigurationError: Config file or argument errors
        - PercentileError
    - InputFileError: Missing or unreadable input
    - CompressionError: Decompression failures
    - FileFormatError: Unrecognised or malformed input
        - FastaFormatError
        - FastqFormatError
        - RecordIdError
"""

__version__ = "0.1.0"

# Public API exports
from seqstats_pkg.config_manager import ConfigManager, Config, InputConfig
from seqstats_pkg.collectors.fastx_collector import FastxStatisticsCollector, OutputMetadata
from seqstats_pkg.collectors.record_filter import RecordFilter
from seqstats_pkg.collectors.distribution import DistributionAggregator, LengthDistribution
from seqstats_pkg.utils.sequence_stats import SequenceStatistics, calculate_nx
from seqstats_pkg.logger import setup_logging, get_logger
from seqstats_pkg.report import StatisticsReport

# Functional API imports
from pathlib import Path
from typing import Iterable, Optional, Union

# ============================================================================
# Functional API - Simplified wrapper functions
# ============================================================================

def compute_statistics(
    input_config: InputConfig,
    settings: Optional[FastxStatisticsCollector.Settings] = None
) -> OutputMetadata:
    """
    Compute statistics for a configured input with optional custom settings.

    This is a simplified wrapper around FastxStatisticsCollector for easier usage.
    """
    collector = FastxStatisticsCollector(input_config, settings)
    return collector.run()

def compute_file_statistics(
    path: Union[str, Path],
    filter_ids: Iterable[str] = (),
    additional_percentiles: Iterable[int] = ()
) -> OutputMetadata:
    """Detect compression and format of a file and compute its statistics."""
    config = ConfigManager.from_input_path(
        path,
        filter_ids=filter_ids,
        additional_percentiles=additional_percentiles,
    )
    settings = FastxStatisticsCollector.Settings(
        filter_ids=config.filter_ids,
        additional_percentiles=config.additional_percentiles,
    )
    return compute_statistics(config.input, settings)

__all__ = [
    # Configuration
    'ConfigManager',
    'Config',
    'InputConfig',

    # Collection
    'FastxStatisticsCollector',
    'OutputMetadata',
    'RecordFilter',
    'DistributionAggregator',
    'LengthDistribution',
    'SequenceStatistics',
    'calculate_nx',

    # Functional API (Primary Interface)
    'compute_statistics',
    'compute_file_statistics',

    # Logging and report
    'setup_logging',
    'get_logger',
    'StatisticsReport',

    # Version info
    '__version__',
]
