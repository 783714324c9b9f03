"""Tests for configuration loading."""

import gzip
import json
import pytest
import tempfile
from pathlib import Path

from seqstats_pkg.config_manager import ConfigManager
from seqstats_pkg.exceptions import ConfigurationError, InputFileError, PercentileError
from seqstats_pkg.utils.formats import CodingType, SequenceFormat


class TestConfigManagerLoad:
    """Test ConfigManager.load with JSON config files."""

    @pytest.fixture
    def temp_dir(self):
        """Create a temporary directory for test files."""
        with tempfile.TemporaryDirectory() as tmpdir:
            yield Path(tmpdir).resolve()

    @pytest.fixture
    def reads_file(self, temp_dir):
        reads = temp_dir / "reads.fastq.gz"
        with gzip.open(reads, "wt") as f:
            f.write("@r1\nACGT\n+\nIIII\n")
        return reads

    def write_config(self, temp_dir, data):
        config_path = temp_dir / "config.json"
        config_path.write_text(json.dumps(data))
        return config_path

    def test_load_full_config(self, temp_dir, reads_file):
        config_path = self.write_config(temp_dir, {
            "input": {"filename": "reads.fastq.gz"},
            "filter_ids": ["r2"],
            "additional_percentiles": [90],
            "output_dir": "out",
            "report_filename": "stats.txt",
            "options": {"progress_interval": 10},
        })

        config = ConfigManager.load(config_path)

        assert config.input.filepath == reads_file
        assert config.input.coding_type == CodingType.GZIP
        assert config.input.detected_format == SequenceFormat.FASTQ
        assert config.filter_ids == ["r2"]
        assert config.additional_percentiles == [90]
        assert config.options == {"progress_interval": 10}
        assert config.report_path == temp_dir / "out" / "stats.txt"

    def test_load_input_as_string(self, temp_dir, reads_file):
        config = ConfigManager.load(self.write_config(temp_dir, {"input": "reads.fastq.gz"}))
        assert config.input.filename == "reads.fastq.gz"
        assert config.filter_ids == []
        assert config.report_path is None

    def test_missing_config_file(self, temp_dir):
        with pytest.raises(ConfigurationError, match="not found"):
            ConfigManager.load(temp_dir / "missing.json")

    def test_invalid_json(self, temp_dir):
        config_path = temp_dir / "config.json"
        config_path.write_text("{not json")
        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            ConfigManager.load(config_path)

    def test_top_level_must_be_object(self, temp_dir):
        with pytest.raises(ConfigurationError, match="JSON object"):
            ConfigManager.load(self.write_config(temp_dir, ["reads.fastq.gz"]))

    def test_unknown_key(self, temp_dir, reads_file):
        config_path = self.write_config(temp_dir, {"input": "reads.fastq.gz", "threads": 4})
        with pytest.raises(ConfigurationError, match="Unknown config key"):
            ConfigManager.load(config_path)

    def test_missing_input(self, temp_dir):
        with pytest.raises(ConfigurationError, match="must define 'input'"):
            ConfigManager.load(self.write_config(temp_dir, {"filter_ids": []}))

    def test_input_path_traversal(self, temp_dir):
        config_path = self.write_config(temp_dir, {"input": "../../etc/passwd"})
        with pytest.raises(ConfigurationError, match="Path traversal detected"):
            ConfigManager.load(config_path)

    def test_input_file_missing(self, temp_dir):
        with pytest.raises(InputFileError, match="not found"):
            ConfigManager.load(self.write_config(temp_dir, {"input": "absent.fasta"}))

    def test_input_dict_without_filename(self, temp_dir):
        with pytest.raises(ConfigurationError, match="'filename'"):
            ConfigManager.load(self.write_config(temp_dir, {"input": {"name": "reads.fastq.gz"}}))

    def test_filter_ids_must_be_strings(self, temp_dir, reads_file):
        config_path = self.write_config(temp_dir, {"input": "reads.fastq.gz", "filter_ids": [1]})
        with pytest.raises(ConfigurationError, match="must be strings"):
            ConfigManager.load(config_path)

    def test_percentiles_must_be_list(self, temp_dir, reads_file):
        config_path = self.write_config(
            temp_dir, {"input": "reads.fastq.gz", "additional_percentiles": 90}
        )
        with pytest.raises(ConfigurationError, match="must be a list"):
            ConfigManager.load(config_path)

    def test_bad_percentile(self, temp_dir, reads_file):
        config_path = self.write_config(
            temp_dir, {"input": "reads.fastq.gz", "additional_percentiles": [150]}
        )
        with pytest.raises(PercentileError):
            ConfigManager.load(config_path)

    def test_unknown_option(self, temp_dir, reads_file):
        config_path = self.write_config(
            temp_dir, {"input": "reads.fastq.gz", "options": {"threads": 2}}
        )
        with pytest.raises(ConfigurationError, match="Unknown option"):
            ConfigManager.load(config_path)


class TestConfigManagerFromInputPath:
    """Test ConfigManager.from_input_path."""

    @pytest.fixture
    def temp_dir(self):
        """Create a temporary directory for test files."""
        with tempfile.TemporaryDirectory() as tmpdir:
            yield Path(tmpdir)

    def test_plain_fasta(self, temp_dir):
        fasta = temp_dir / "assembly.fa"
        fasta.write_text(">chr1\nACGT\n")

        config = ConfigManager.from_input_path(fasta, filter_ids=("chr2",))

        assert config.input.coding_type == CodingType.NONE
        assert config.input.detected_format == SequenceFormat.FASTA
        assert config.filter_ids == ["chr2"]

    def test_percentiles_checked_before_input(self, temp_dir):
        with pytest.raises(PercentileError):
            ConfigManager.from_input_path(temp_dir / "missing.fasta", additional_percentiles=[50])

    def test_empty_report_filename(self, temp_dir):
        fasta = temp_dir / "assembly.fa"
        fasta.write_text(">chr1\nACGT\n")
        with pytest.raises(ConfigurationError, match="report_filename"):
            ConfigManager.from_input_path(fasta, report_filename="  ")
