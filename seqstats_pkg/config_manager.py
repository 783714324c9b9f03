"""Configuration loading for statistics runs.

A run is described either by a JSON config file (``ConfigManager.load``) or
directly by an input path and options (``ConfigManager.from_input_path``).
Both produce a ``Config`` holding an ``InputConfig`` for the sequence file.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from seqstats_pkg.exceptions import ConfigurationError
from seqstats_pkg.logger import get_logger
from seqstats_pkg.utils.formats import CodingType, SequenceFormat
from seqstats_pkg.utils.file_handler import (
    check_input_file,
    detect_compression_type,
    detect_file_format,
    parse_config_file_value,
)
from seqstats_pkg.utils.path_utils import resolve_filepath
from seqstats_pkg.utils.sequence_stats import validate_percentiles

__all__ = [
    'InputConfig',
    'Config',
    'ConfigManager',
]

KNOWN_KEYS = {
    'input',
    'filter_ids',
    'additional_percentiles',
    'output_dir',
    'report_filename',
    'options',
}

KNOWN_OPTIONS = {'progress_interval'}


@dataclass
class InputConfig:
    """Sequence file to summarise, with detected compression and format."""
    filename: str
    filepath: Path
    coding_type: CodingType
    detected_format: SequenceFormat


@dataclass
class Config:
    """Complete description of one statistics run."""
    input: InputConfig
    filter_ids: List[str] = field(default_factory=list)
    additional_percentiles: List[int] = field(default_factory=list)
    output_dir: Optional[Path] = None
    report_filename: Optional[str] = None
    options: Dict[str, Any] = field(default_factory=dict)

    @property
    def report_path(self) -> Optional[Path]:
        """Report file inside output_dir, or None to print the report."""
        if not self.report_filename:
            return None
        base = self.output_dir if self.output_dir is not None else Path.cwd()
        return Path(base) / self.report_filename


class ConfigManager:
    """Builds Config objects from JSON files or command line values."""

    @staticmethod
    def load(config_path: Union[str, Path]) -> Config:
        """
        Load a JSON config file.

        Paths in the config are resolved relative to the config file's
        directory and may not escape it.

        Raises:
            ConfigurationError: Unreadable JSON, unknown keys, bad values
            PercentileError: Invalid additional percentiles
            InputFileError: The input file does not exist
        """
        logger = get_logger()
        config_path = Path(config_path)

        if not config_path.is_file():
            raise ConfigurationError(f"Config file not found: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in config file {config_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read config file {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file must contain a JSON object, got {type(data).__name__}"
            )

        unknown = set(data) - KNOWN_KEYS
        if unknown:
            raise ConfigurationError(
                f"Unknown config key(s): {', '.join(sorted(unknown))}. "
                f"Allowed keys: {', '.join(sorted(KNOWN_KEYS))}"
            )

        if 'input' not in data:
            raise ConfigurationError("Config file must define 'input'")

        config_dir = config_path.resolve().parent

        try:
            filename, _ = parse_config_file_value(data['input'], 'input')
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
        input_path = resolve_filepath(config_dir, filename)

        output_dir = None
        if data.get('output_dir') is not None:
            output_dir = resolve_filepath(config_dir, data['output_dir'])

        logger.debug(f"Loaded config file: {config_path}")

        return ConfigManager.from_input_path(
            input_path,
            filter_ids=ConfigManager._string_list(data.get('filter_ids', []), 'filter_ids'),
            additional_percentiles=ConfigManager._list(
                data.get('additional_percentiles', []), 'additional_percentiles'
            ),
            output_dir=output_dir,
            report_filename=data.get('report_filename'),
            options=data.get('options', {}),
        )

    @staticmethod
    def from_input_path(
        input_path: Union[str, Path],
        filter_ids: Iterable[str] = (),
        additional_percentiles: Iterable[int] = (),
        output_dir: Optional[Union[str, Path]] = None,
        report_filename: Optional[str] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Config:
        """Build a Config for a sequence file, detecting compression and format."""
        logger = get_logger()

        # Reject bad percentiles before touching the input
        percentiles = validate_percentiles(additional_percentiles)

        options = dict(options or {})
        unknown_options = set(options) - KNOWN_OPTIONS
        if unknown_options:
            raise ConfigurationError(
                f"Unknown option(s): {', '.join(sorted(unknown_options))}. "
                f"Allowed options: {', '.join(sorted(KNOWN_OPTIONS))}"
            )

        if report_filename is not None and (
            not isinstance(report_filename, str) or not report_filename.strip()
        ):
            raise ConfigurationError("report_filename must be a non-empty string")

        input_path = check_input_file(input_path)
        coding_type = detect_compression_type(input_path)
        detected_format = detect_file_format(input_path, coding_type)

        logger.debug(
            f"Input {input_path.name}: format={detected_format.value}, compression={coding_type.value}"
        )

        input_config = InputConfig(
            filename=input_path.name,
            filepath=input_path,
            coding_type=coding_type,
            detected_format=detected_format,
        )

        return Config(
            input=input_config,
            filter_ids=list(filter_ids),
            additional_percentiles=percentiles,
            output_dir=Path(output_dir) if output_dir is not None else None,
            report_filename=report_filename,
            options=options,
        )

    @staticmethod
    def _list(value: Any, field_name: str) -> list:
        if not isinstance(value, list):
            raise ConfigurationError(f"'{field_name}' must be a list, got {type(value).__name__}")
        return value

    @staticmethod
    def _string_list(value: Any, field_name: str) -> List[str]:
        values = ConfigManager._list(value, field_name)
        for item in values:
            if not isinstance(item, str):
                raise ConfigurationError(
                    f"'{field_name}' entries must be strings, got {type(item).__name__}"
                )
        return values
