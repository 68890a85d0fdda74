#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWeaver v0.1.0

Tests for the command-line interface.

Author: ContigWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import json
import logging

import pytest
import yaml
from click.testing import CliRunner

from contigweaver.cli import main
from contigweaver.version import __version__


@pytest.fixture
def runner():
    """Click test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers bound to the runner's captured streams."""
    before = list(logging.root.handlers)
    yield
    for handler in list(logging.root.handlers):
        if handler not in before:
            logging.root.removeHandler(handler)
            handler.close()
    for handler in before:
        if handler not in logging.root.handlers:
            logging.root.addHandler(handler)


@pytest.fixture
def fastq_file(temp_output_dir, simple_fastq):
    path = temp_output_dir / "reads.fastq"
    path.write_text(simple_fastq)
    return path


class TestCLIBasics:
    """Test top-level CLI behaviour."""

    def test_help(self, runner):
        result = runner.invoke(main, ['--help'])

        assert result.exit_code == 0
        assert "ContigWeaver" in result.output
        assert "assemble" in result.output

    def test_version_option(self, runner):
        result = runner.invoke(main, ['--version'])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_version_command(self, runner):
        result = runner.invoke(main, ['version'])

        assert result.exit_code == 0
        assert f"ContigWeaver v{__version__}" in result.output


class TestConfigCommands:
    """Test config init/validate/show."""

    def test_init_and_validate(self, runner, temp_output_dir):
        path = temp_output_dir / "cfg.yaml"

        result = runner.invoke(main, ['config', 'init', '-o', str(path), '-t', 'short_reads'])
        assert result.exit_code == 0
        assert path.exists()
        assert yaml.safe_load(path.read_text())['assembly']['kmer_size'] == 21

        result = runner.invoke(main, ['config', 'validate', str(path)])
        assert result.exit_code == 0
        assert "valid" in result.output

    def test_validate_rejects_bad_config(self, runner, temp_output_dir):
        path = temp_output_dir / "bad.yaml"
        path.write_text(yaml.dump({'assembly': {'kmer_size': 1}}))

        result = runner.invoke(main, ['config', 'validate', str(path)])

        assert result.exit_code == 1

    @pytest.mark.parametrize("command", ['validate', 'show'])
    @pytest.mark.parametrize("content", ["- a\n- b\n", "assembly: 5\n"])
    def test_malformed_config_reported(self, runner, temp_output_dir, command, content):
        path = temp_output_dir / "malformed.yaml"
        path.write_text(content)

        result = runner.invoke(main, ['config', command, str(path)])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "✗" in result.output

    def test_show_summary(self, runner, temp_output_dir):
        path = temp_output_dir / "cfg.yaml"
        runner.invoke(main, ['config', 'init', '-o', str(path)])

        result = runner.invoke(main, ['config', 'show', str(path)])

        assert result.exit_code == 0
        assert "K-mer size: 31" in result.output


class TestAssembleCommand:
    """Test the assemble command end to end."""

    def test_assemble_tiled_reads(self, runner, fastq_file, temp_output_dir):
        out_dir = temp_output_dir / "out"

        result = runner.invoke(main, ['assemble', '-i', str(fastq_file), '-k', '4', '-o', str(out_dir)])

        assert result.exit_code == 0, result.output
        contigs_path = out_dir / "contigs_N50_10.fasta"
        assert contigs_path.exists()
        assert contigs_path.read_text().splitlines() == [
            ">contig_1 length=10 k=4",
            "ACGTTGCAAT",
        ]
        with open(out_dir / "assembly_stats.json") as f:
            assert json.load(f)['n50'] == 10

    def test_config_file_supplies_k(self, runner, fastq_file, temp_output_dir):
        cfg = temp_output_dir / "cfg.yaml"
        out_dir = temp_output_dir / "from_config"
        cfg.write_text(yaml.dump({
            'assembly': {'kmer_size': 4},
            'output': {'directory': str(out_dir), 'write_stats': False},
        }))

        result = runner.invoke(main, ['assemble', '-i', str(fastq_file), '-c', str(cfg)])

        assert result.exit_code == 0, result.output
        assert (out_dir / "contigs_N50_10.fasta").exists()
        assert not (out_dir / "assembly_stats.json").exists()

    def test_invalid_k(self, runner, fastq_file, temp_output_dir):
        result = runner.invoke(
            main, ['assemble', '-i', str(fastq_file), '-k', '1', '-o', str(temp_output_dir)]
        )

        assert result.exit_code != 0

    def test_scalar_section_in_config(self, runner, fastq_file, temp_output_dir):
        cfg = temp_output_dir / "cfg.yaml"
        cfg.write_text("assembly: 5\n")

        result = runner.invoke(
            main, ['assemble', '-i', str(fastq_file), '-c', str(cfg), '-o', str(temp_output_dir)]
        )

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "✗ Invalid configuration" in result.output

    def test_cycle_produces_no_contigs(self, runner, temp_output_dir):
        reads = temp_output_dir / "cycle.fa"
        reads.write_text(">r1\nACGTAC\n>r2\nCGTACG\n")

        result = runner.invoke(
            main, ['assemble', '-i', str(reads), '-k', '3', '-o', str(temp_output_dir / "out")]
        )

        assert result.exit_code != 0
        assert not (temp_output_dir / "out" / "contigs_N50_-1.fasta").exists()

    def test_missing_input(self, runner, temp_output_dir):
        result = runner.invoke(main, ['assemble', '-i', str(temp_output_dir / "none.fq"), '-k', '4'])

        assert result.exit_code != 0


class TestStatsCommand:
    """Test the stats command."""

    def test_stats(self, runner, temp_output_dir):
        contigs = temp_output_dir / "contigs.fasta"
        contigs.write_text(">c1\nAAAA\n>c2\nGGCC\n>c3\nAT\n")
        out = temp_output_dir / "stats.json"

        result = runner.invoke(main, ['stats', str(contigs), '-o', str(out)])

        assert result.exit_code == 0
        assert "N50:          4" in result.output
        with open(out) as f:
            assert json.load(f)['total_length'] == 10

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
