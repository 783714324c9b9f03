"""Statistics collector for FASTA and FASTQ files."""

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Iterator, List, NamedTuple, Optional, Tuple

from Bio.SeqIO.FastaIO import SimpleFastaParser
from Bio.SeqIO.QualityIO import FastqGeneralIterator

from seqstats_pkg.logger import get_logger
from seqstats_pkg.utils.settings import BaseSettings
from seqstats_pkg.utils.formats import SequenceFormat
from seqstats_pkg.utils.file_handler import check_input_file, open_file_with_coding_type
from seqstats_pkg.utils.sequence_stats import (
    SequenceStatistics,
    build_percentile_requests,
    validate_percentiles,
)
from seqstats_pkg.collectors.record_filter import RecordFilter
from seqstats_pkg.collectors.distribution import DistributionAggregator, VariantSummary
from seqstats_pkg.exceptions import (
    StatisticsError,
    FastaFormatError,
    FastqFormatError,
    RecordIdError,
)

DEFAULT_PROGRESS_INTERVAL = 100000  # Records between progress callbacks

ProgressCallback = Callable[[int], None]


class FastxRecord(NamedTuple):
    """Record id as raw header bytes and the residues as one character per byte."""
    id: bytes
    seq: str


def _record_id(title: str) -> bytes:
    # First word of the header, split on ASCII whitespace only
    words = title.encode('latin-1').split(None, 1)
    return words[0] if words else b''


@dataclass
class OutputMetadata(BaseSettings):
    """Metadata returned from a statistics run."""
    input_file: str = None
    detected_format: str = None
    num_records: int = 0
    num_filtered: int = 0
    percentiles: Tuple[int, ...] = ()
    masked_bases: int = None
    masked_runs: int = None
    elapsed_time: float = None

    # Keyed by SequenceStatistics field: len, len_without_ns, hoco_len, hoco_len_without_ns
    variants: Dict[str, VariantSummary] = field(default_factory=dict)

    def __str__(self):
        parts = [f"Input File: {self.input_file or 'N/A'}"]
        parts.append(f"Format: {self.detected_format or 'N/A'}")
        parts.append(f"Records: {self.num_records:,}")
        parts.append(f"Filtered Records: {self.num_filtered:,}")
        if 'len' in self.variants:
            summary = self.variants['len']
            parts.append(f"Total Length: {summary.total:,} bp")
            parts.append(f"N50: {summary.nx.get(50, 'N/A')} bp")
        return "\n".join(parts)


class FastxStatisticsCollector:
    """Computes length and Nx statistics of a FASTA or FASTQ file."""

    @dataclass
    class Settings(BaseSettings):
        """Settings for record filtering, Nx percentiles and progress reporting."""
        filter_ids: List[str] = field(default_factory=list)
        additional_percentiles: List[int] = field(default_factory=list)
        progress_interval: int = DEFAULT_PROGRESS_INTERVAL

        def __post_init__(self):
            """Validate settings after initialization."""
            if isinstance(self.filter_ids, str):
                raise ValueError("filter_ids must be a list of ids, not a single string")
            self.filter_ids = list(self.filter_ids)
            self.additional_percentiles = validate_percentiles(self.additional_percentiles)

            if isinstance(self.progress_interval, bool) or not isinstance(self.progress_interval, int) \
                    or self.progress_interval < 1:
                raise ValueError(
                    f"progress_interval must be a positive integer, got {self.progress_interval!r}"
                )

    def __init__(
        self,
        input_config,
        settings: Optional[Settings] = None,
        progress_callback: Optional[ProgressCallback] = None
    ) -> None:
        self.logger = get_logger()

        self.input_config = input_config
        self.input_path = input_config.filepath

        self.settings = settings if settings is not None else self.Settings()
        self.progress_callback = progress_callback or self._log_progress
        self.output_metadata = OutputMetadata()

        self.percentiles = build_percentile_requests(self.settings.additional_percentiles)
        self.record_filter = RecordFilter(self.settings.filter_ids)
        self.aggregator = DistributionAggregator()
        self.num_filtered = 0

    def run(self) -> OutputMetadata:
        """Execute the statistics workflow on the configured input file."""
        self.logger.start_timer("statistics")
        self.logger.info(f"Processing sequence file: {self.input_config.filename}")
        self.logger.debug(
            f"Format: {self.input_config.detected_format}, Compression: {self.input_config.coding_type}"
        )

        try:
            check_input_file(self.input_path)

            with open_file_with_coding_type(self.input_path, self.input_config.coding_type) as handle:
                self.collect(self._parse_records(handle))

            elapsed = self.logger.stop_timer("statistics")
            self.logger.info(
                f"✓ Statistics computed for {self.aggregator.record_count:,} record(s) in {elapsed:.2f}s"
            )

            self._fill_output_metadata()
            self.output_metadata.elapsed_time = elapsed
            return self.output_metadata

        except StatisticsError as e:
            self.logger.error(f"Statistics run failed: {e}")
            raise

    def collect(self, records: Iterable) -> DistributionAggregator:
        """
        Filter, measure and aggregate records.

        Args:
            records: Objects exposing ``id`` and ``seq``, such as FastxRecord
                or a Bio SeqRecord

        Returns:
            The aggregator, with every distribution sorted

        Raises:
            RecordIdError: A record id is not valid UTF-8
        """
        processed = 0
        for record in records:
            processed += 1

            try:
                excluded = self.record_filter.is_excluded(record.id)
            except RecordIdError as e:
                self.logger.add_issue(
                    level='ERROR',
                    category='record',
                    message=str(e),
                    details={
                        'file': self.input_config.filename,
                        'record_number': processed
                    }
                )
                raise

            if excluded:
                self.num_filtered += 1
            else:
                self.aggregator.add(SequenceStatistics.from_sequence(record.seq))

            if processed % self.settings.progress_interval == 0:
                self.progress_callback(processed)

        if self.num_filtered:
            self.logger.debug(f"Filtered out {self.num_filtered:,} record(s) by id")

        self.aggregator.finalize()
        return self.aggregator

    def _parse_records(self, handle) -> Iterator[FastxRecord]:
        """Yield (id, sequence) records, converting parser failures into package errors.

        The handle is latin-1 text, so every input byte reaches the length
        counters as one character. The id goes back to bytes and is decoded
        as strict UTF-8 when the record filter looks at it.
        """
        detected_format = self.input_config.detected_format
        self.logger.debug(f"Parsing {detected_format} file...")

        try:
            if detected_format == SequenceFormat.FASTQ:
                for title, sequence, _quality in FastqGeneralIterator(handle):
                    yield FastxRecord(_record_id(title), sequence)
            else:
                for title, sequence in SimpleFastaParser(handle):
                    yield FastxRecord(_record_id(title), sequence)
        except (ValueError, EOFError, OSError) as e:
            error_msg = f"Failed to parse {detected_format} file: {e}"

            if detected_format == SequenceFormat.FASTQ:
                exception_class = FastqFormatError
            else:
                exception_class = FastaFormatError

            self.logger.add_issue(
                level='ERROR',
                category='record',
                message=error_msg,
                details={
                    'file': self.input_config.filename,
                    'format': str(detected_format),
                    'error': str(e)
                }
            )
            raise exception_class(error_msg) from e

    def _log_progress(self, processed: int) -> None:
        self.logger.info(f"Progress: {processed:,} records processed...")

    def _fill_output_metadata(self) -> None:
        """Populate output metadata with the collected statistics."""
        self.output_metadata.input_file = str(self.input_path)
        self.output_metadata.detected_format = self.input_config.detected_format.value
        self.output_metadata.num_records = self.aggregator.record_count
        self.output_metadata.num_filtered = self.num_filtered
        self.output_metadata.percentiles = self.percentiles

        if self.aggregator.record_count > 0:
            self.output_metadata.masked_bases = self.aggregator.masked_count('len')
            self.output_metadata.masked_runs = self.aggregator.masked_count('hoco_len')
            self.output_metadata.variants = self.aggregator.summarize(self.percentiles)
        else:
            self.logger.warning("No records left to summarise; only the record count is reported")
