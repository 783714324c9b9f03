"""Statistics report generation module."""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO, Union

from seqstats_pkg.utils.path_utils import get_incremented_path
from seqstats_pkg.collectors.distribution import VariantSummary
from seqstats_pkg.collectors.fastx_collector import OutputMetadata

# (prefix, variant, masked variant, OutputMetadata masked count) per report section
SECTIONS = (
    ("", "len", "len_without_ns", "masked_bases"),
    ("hoco ", "hoco_len", "hoco_len_without_ns", "masked_runs"),
)
WITHOUT_NS_SUFFIX = " without Ns"


def format_summary(summary: VariantSummary, prefix: str = "", suffix: str = "") -> List[str]:
    """Format total length, Nx lines in ascending percentile order, max and min."""
    lines = [f"{prefix}total length{suffix}: {summary.total}"]
    for percentile in sorted(summary.nx):
        lines.append(f"{prefix}N{percentile}{suffix}: {summary.nx[percentile]}")
    lines.append(f"{prefix}max len{suffix}: {summary.max_length}")
    lines.append(f"{prefix}min len{suffix}: {summary.min_length}")
    return lines


def render_statistics(metadata: OutputMetadata) -> List[str]:
    """
    Render the report lines for one statistics run.

    The record count always comes first. With no records nothing else is
    printed, since no length distribution exists to summarise.
    """
    lines = [f"# records: {metadata.num_records}"]
    if metadata.num_records == 0:
        return lines

    variants: Dict[str, Any] = metadata.variants
    for prefix, variant, masked_variant, masked_field in SECTIONS:
        summary = _as_summary(variants[variant])
        masked_summary = _as_summary(variants[masked_variant])

        lines.append(f"{prefix}# Ns: {getattr(metadata, masked_field)}")
        lines.extend(format_summary(summary, prefix, ""))
        lines.extend(format_summary(masked_summary, prefix, WITHOUT_NS_SUFFIX))

    return lines


def _as_summary(value: Union[VariantSummary, dict]) -> VariantSummary:
    # Accept metadata that went through to_dict()
    if isinstance(value, VariantSummary):
        return value
    return VariantSummary.from_dict(value)


class StatisticsReport:
    """Text report builder for statistics results."""

    def __init__(self, report_path: Optional[Path] = None):
        """Initialize report; without a path the report goes to stdout."""
        self.report_path = None
        if report_path is not None:
            self.report_path = Path(report_path)
            self.report_path.parent.mkdir(parents=True, exist_ok=True)

            # Auto-increment if file exists
            self.report_path = get_incremented_path(self.report_path)

        self.results: List[OutputMetadata] = []

    def write(self, result: Union[OutputMetadata, List[OutputMetadata]]) -> None:
        """Add a statistics result (or several) to the report."""
        results_list = result if isinstance(result, list) else [result]
        for single_result in results_list:
            if not isinstance(single_result, OutputMetadata):
                raise TypeError(
                    f"Expected OutputMetadata, got {type(single_result).__name__}"
                )
            self.results.append(single_result)

    def render(self) -> List[str]:
        """All report lines; results are separated by a blank line."""
        lines: List[str] = []
        for idx, result in enumerate(self.results):
            if idx > 0:
                lines.append("")
            lines.extend(render_statistics(result))
        return lines

    def flush(self, stream: Optional[TextIO] = None) -> Optional[Path]:
        """
        Write the report.

        Args:
            stream: Stream used when the report has no file path (default stdout)

        Returns:
            The path written to, or None when written to a stream
        """
        report_text = '\n'.join(self.render()) + '\n'

        if self.report_path is None:
            (stream or sys.stdout).write(report_text)
            return None

        self.report_path.write_text(report_text, encoding='utf-8')
        return self.report_path
