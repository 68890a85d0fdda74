#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Command-line interface for ContigWeaver.

This module provides the main CLI entry point and all subcommands for
the ContigWeaver de Bruijn graph assembler.
"""

import sys
import click
from pathlib import Path
import yaml

from .version import __version__
from .config.parser import ConfigParser, ConfigValidationError
from .config.schema import load_config, save_config_template, validate_config
from .assembly_core.errors import AssemblyError
from .assembly_utils.assembly_stats import calculate_assembly_stats
from .io.io_core_module import read_sequences, read_contigs, write_contigs, export_assembly_stats
from .utils.pipeline import AssemblyPipeline, setup_logging


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.pass_context
def main(ctx, verbose, quiet):
    """
    ContigWeaver: De Bruijn Graph Genome Assembler

    Builds a de Bruijn graph from short reads, contracts non-branching
    chains, and resolves the simplified graph into contigs.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)
    ctx.obj['VERBOSE'] = verbose
    ctx.obj['QUIET'] = quiet


# ============================================================================
# Configuration Management Commands
# ============================================================================

@main.group()
def config():
    """Configuration management commands."""
    pass


@config.command('init')
@click.option('--output', '-o', type=click.Path(), default='contigweaver_config.yaml',
              help='Output configuration file path')
@click.option('--template', '-t',
              type=click.Choice(['default', 'debug', 'short_reads']),
              default='default', help='Configuration template type')
def config_init(output, template):
    """Generate a template configuration file with all available parameters."""
    click.echo(f"Generating {template} configuration template: {output}")

    try:
        save_config_template(Path(output), template=template)
    except OSError as e:
        click.echo(f"✗ Error creating configuration: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Configuration file created: {output}")


@config.command('validate')
@click.argument('config_file', type=click.Path(exists=True))
def config_validate(config_file):
    """Validate a configuration file."""
    click.echo(f"Validating configuration file: {config_file}")

    try:
        config = load_config(Path(config_file))
    except (yaml.YAMLError, ConfigValidationError) as e:
        click.echo(f"✗ Error reading configuration: {e}", err=True)
        sys.exit(1)

    errors = validate_config(config)
    if errors:
        click.echo("\n✗ Configuration validation failed:")
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)

    click.echo("✓ Configuration is valid")
    click.echo(f"  K-mer size: {config['assembly']['kmer_size']}")
    click.echo(f"  Input format: {config['input']['format']}")


@config.command('show')
@click.argument('config_file', type=click.Path(exists=True))
@click.option('--format', '-f', type=click.Choice(['yaml', 'summary']), default='summary',
              help='Output format')
def config_show(config_file, format):
    """Display configuration settings."""
    try:
        config = load_config(Path(config_file))
    except (yaml.YAMLError, ConfigValidationError) as e:
        click.echo(f"✗ Error reading configuration: {e}", err=True)
        sys.exit(1)

    errors = validate_config(config)
    if errors:
        for error in errors:
            click.echo(f"✗ {error}", err=True)
        sys.exit(1)

    if format == 'yaml':
        click.echo(yaml.dump(config, default_flow_style=False, sort_keys=False))
        return

    click.echo(f"Configuration from: {config_file}")
    click.echo("=" * 60)

    click.echo("\nAssembly:")
    click.echo(f"  K-mer size: {config['assembly']['kmer_size']}")
    click.echo(f"  Invariant checks: {config['assembly']['check_invariants']}")

    click.echo("\nInput:")
    click.echo(f"  Format: {config['input']['format']}")

    click.echo("\nOutput:")
    click.echo(f"  Directory: {config['output']['directory']}")
    click.echo(f"  Line width: {config['output']['line_width'] or 'unwrapped'}")
    click.echo(f"  Log level: {config['output']['logging']['level']}")


# ============================================================================
# Assembly Commands
# ============================================================================

@main.command()
@click.option('--input', '-i', 'reads_file', required=True, type=click.Path(exists=True),
              help='Input reads (FASTQ or FASTA, optionally gzipped)')
@click.option('--kmer-size', '-k', type=int, default=None,
              help='K-mer size (nodes are (k-1)-mers); overrides config')
@click.option('--output', '-o', type=click.Path(), default=None,
              help='Output directory; overrides config')
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True),
              help='YAML configuration file')
@click.option('--format', '-f', 'read_format',
              type=click.Choice(['auto', 'fastq', 'fasta']), default=None,
              help='Input format (default: detect from file)')
@click.option('--line-width', type=int, default=None,
              help='Wrap contig sequences at this many bases (0 = no wrapping)')
@click.option('--check-invariants/--no-check-invariants', default=None,
              help='Assert graph invariants after every simplification pass')
@click.pass_context
def assemble(ctx, reads_file, kmer_size, output, config_file, read_format,
             line_width, check_invariants):
    """
    Assemble reads into contigs.

    Writes contigs_N50_<n50>.fasta (and assembly_stats.json) into the
    output directory.
    """
    try:
        parser = ConfigParser(config_file)
        parser.merge_cli_overrides({
            'assembly.kmer_size': kmer_size,
            'assembly.check_invariants': check_invariants,
            'input.format': read_format,
            'output.directory': output,
            'output.line_width': line_width,
        })
        parser.validate()
    except ConfigValidationError as e:
        click.echo(f"✗ Invalid configuration: {e}", err=True)
        sys.exit(1)

    output_dir = Path(parser.get('output.directory'))
    log_level = parser.get('output.logging.level', 'INFO')
    if ctx.obj.get('VERBOSE'):
        log_level = 'DEBUG'
    elif ctx.obj.get('QUIET'):
        log_level = 'ERROR'
    log_file = parser.get('output.logging.log_file')
    setup_logging(log_level, output_dir / log_file if log_file else None)

    k = parser.get('assembly.kmer_size')
    quiet = ctx.obj.get('QUIET')

    if not quiet:
        click.echo(f"Assembling {reads_file} with k={k}")

    try:
        reads = list(read_sequences(reads_file, fmt=parser.get('input.format', 'auto')))
        pipeline = AssemblyPipeline(
            k,
            check_invariants=parser.get('assembly.check_invariants', False)
        )
        result = pipeline.run(reads)
    except (AssemblyError, FileNotFoundError, ValueError) as e:
        click.echo(f"✗ Assembly failed: {e}", err=True)
        sys.exit(1)

    if result.is_empty:
        click.echo(f"✗ No contigs produced from {len(reads)} reads (N50={result.n50})", err=True)
        sys.exit(1)

    contigs_path = write_contigs(
        result.contigs,
        output_dir,
        k=k,
        n50=result.n50,
        line_width=parser.get('output.line_width', 0),
    )
    if parser.get('output.write_stats', True):
        export_assembly_stats(result.to_dict(), output_dir / 'assembly_stats.json')

    if not quiet:
        click.echo(f"✓ {result.stats.num_contigs} contigs, "
                   f"{result.stats.total_length:,} bp, N50={result.n50}")
        click.echo(f"  Contigs: {contigs_path}")


@main.command()
@click.argument('contigs_file', type=click.Path(exists=True))
@click.option('--output', '-o', type=click.Path(),
              help='Write statistics to this JSON file')
def stats(contigs_file, output):
    """Compute N50 and related statistics for a contig FASTA file."""
    contigs = list(read_contigs(contigs_file))
    summary = calculate_assembly_stats(contigs)

    click.echo(f"Contigs:      {summary.num_contigs}")
    click.echo(f"Total length: {summary.total_length:,} bp")
    click.echo(f"Longest:      {summary.longest:,} bp")
    click.echo(f"N50:          {summary.n50}")
    click.echo(f"L50:          {summary.l50}")
    click.echo(f"N90:          {summary.n90}")
    click.echo(f"GC:           {summary.gc_content:.2f}%")

    if output:
        export_assembly_stats(summary.to_dict(), output)
        click.echo(f"Statistics written to {output}")


# ============================================================================
# Utility Commands
# ============================================================================

@main.command()
def version():
    """Show version information."""
    click.echo(f"ContigWeaver v{__version__}")
    click.echo("\nDependencies:")

    import Bio
    import numpy
    click.echo(f"  BioPython: {Bio.__version__}")
    click.echo(f"  NumPy: {numpy.__version__}")
    click.echo(f"  PyYAML: {yaml.__version__}")


if __name__ == '__main__':
    sys.exit(main())
