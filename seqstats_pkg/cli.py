#!/usr/bin/env python3
"""
Command line entry point.

Usage:
    seqstats reads.fastq.gz
    seqstats assembly.fasta --filter-id chrM --additional-percentile 90
    seqstats --config config.json --output stats.txt
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from seqstats_pkg.config_manager import Config, ConfigManager
from seqstats_pkg.collectors.fastx_collector import FastxStatisticsCollector
from seqstats_pkg.exceptions import ConfigurationError, StatisticsError
from seqstats_pkg.logger import setup_logging
from seqstats_pkg.report import StatisticsReport


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seqstats",
        description="Record count, total length, N50/N75 and homopolymer-compressed "
                    "statistics of a FASTA or FASTQ file (optionally gzip or bzip2 compressed).",
    )
    parser.add_argument(
        "input", nargs="?", type=Path,
        help="FASTA or FASTQ file",
    )
    parser.add_argument(
        "--config", type=Path,
        help="JSON config file (alternative to INPUT)",
    )
    parser.add_argument(
        "--filter-id", dest="filter_ids", action="append", default=[], metavar="ID",
        help="Exclude records with this id (repeatable)",
    )
    parser.add_argument(
        "--additional-percentile", dest="additional_percentiles", action="append",
        type=int, default=[], metavar="P",
        help="Also report NP for this percentile in [0, 100] (repeatable)",
    )
    parser.add_argument(
        "-o", "--output", type=Path,
        help="Write the report to this file instead of stdout",
    )
    parser.add_argument(
        "--log-file", type=Path,
        help="Also write a DEBUG level log to this file",
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v", "--verbose", action="store_true",
        help="Verbose logging",
    )
    verbosity.add_argument(
        "-q", "--quiet", action="store_true",
        help="Only log warnings and errors",
    )
    return parser


def load_config(args: argparse.Namespace) -> Config:
    """Build the run config from --config or from INPUT plus options."""
    if args.config and args.input:
        raise ConfigurationError("Give either INPUT or --config, not both")

    if args.config:
        config = ConfigManager.load(args.config)
        # Command line values extend the config file
        if args.filter_ids or args.additional_percentiles:
            config = ConfigManager.from_input_path(
                config.input.filepath,
                filter_ids=config.filter_ids + args.filter_ids,
                additional_percentiles=config.additional_percentiles + args.additional_percentiles,
                output_dir=config.output_dir,
                report_filename=config.report_filename,
                options=config.options,
            )
        return config

    if not args.input:
        raise ConfigurationError("No input file given (use INPUT or --config)")

    return ConfigManager.from_input_path(
        args.input,
        filter_ids=args.filter_ids,
        additional_percentiles=args.additional_percentiles,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        console_level = 'DEBUG'
    elif args.quiet:
        console_level = 'WARNING'
    else:
        console_level = 'INFO'
    logger = setup_logging(console_level=console_level, log_file=args.log_file)

    try:
        # Step 1: configuration
        config = load_config(args)

        # Step 2: collector settings
        settings = FastxStatisticsCollector.Settings()
        settings = settings.update(
            filter_ids=config.filter_ids,
            additional_percentiles=config.additional_percentiles,
            **config.options
        )

        # Step 3: statistics and report
        result = FastxStatisticsCollector(config.input, settings).run()

        report = StatisticsReport(args.output or config.report_path)
        report.write(result)
        report_path = report.flush()
        if report_path is not None:
            logger.info(f"Report written to {report_path}")

    except (StatisticsError, ValueError) as e:
        # ValueError comes from invalid collector settings, e.g. the config "options" block
        print(f"✗ Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
