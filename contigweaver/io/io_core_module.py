#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Core I/O module for ContigWeaver.

Thin collaborators around the assembly engine:
- Read loading (FASTQ / FASTA, optionally gzipped) into plain sequence strings
- Contig FASTA output named after the assembly N50
- Assembly statistics export to JSON

Author: ContigWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

# =============================================================================
# SECTION 1: IMPORTS AND DEPENDENCIES
# =============================================================================

import gzip
import json
import logging
from pathlib import Path
from typing import Iterator, Iterable, TextIO, Union, Dict, Any

from Bio import SeqIO

logger = logging.getLogger(__name__)

FASTQ_SUFFIXES = ('.fq', '.fastq')
FASTA_SUFFIXES = ('.fa', '.fasta', '.fna', '.fas')


# =============================================================================
# SECTION 2: FILE HANDLING
# =============================================================================

def is_gzipped(filepath: Union[str, Path]) -> bool:
    """
    Check if file is gzip compressed.

    Args:
        filepath: Path to file

    Returns:
        True if file is gzipped
    """
    filepath = Path(filepath)
    return filepath.suffix in ('.gz', '.gzip')


def open_file(filepath: Union[str, Path], mode: str = 'r') -> TextIO:
    """
    Open file with automatic gzip detection.

    Args:
        filepath: Path to file
        mode: File mode ('r' or 'w')

    Returns:
        File handle
    """
    filepath = Path(filepath)

    if is_gzipped(filepath):
        if 'r' in mode:
            return gzip.open(filepath, 'rt')
        else:
            return gzip.open(filepath, 'wt')
    else:
        return open(filepath, mode)


def detect_format(filepath: Union[str, Path]) -> str:
    """
    Guess 'fastq' or 'fasta' from the file suffix (ignoring .gz).

    Falls back to sniffing the first character of the file.
    """
    filepath = Path(filepath)
    suffixes = [s.lower() for s in filepath.suffixes if s.lower() not in ('.gz', '.gzip')]
    if suffixes:
        if suffixes[-1] in FASTQ_SUFFIXES:
            return 'fastq'
        if suffixes[-1] in FASTA_SUFFIXES:
            return 'fasta'

    with open_file(filepath, 'r') as handle:
        first = handle.read(1)
    if first == '@':
        return 'fastq'
    if first == '>':
        return 'fasta'
    raise ValueError(f"Cannot determine sequence format of {filepath}")


# =============================================================================
# SECTION 3: READ INPUT
# =============================================================================

def read_sequences(
    filepath: Union[str, Path],
    fmt: str = 'auto'
) -> Iterator[str]:
    """
    Read a FASTQ or FASTA file and yield plain upper-case sequences.

    Quality lines and headers are discarded; the assembler only ever sees
    sequence strings.

    Args:
        filepath: Path to reads (can be gzipped)
        fmt: 'fastq', 'fasta' or 'auto'

    Yields:
        Sequence strings

    Raises:
        FileNotFoundError: the file does not exist
        ValueError: unknown format
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Reads file not found: {filepath}")

    if fmt == 'auto':
        fmt = detect_format(filepath)
    if fmt not in ('fastq', 'fasta'):
        raise ValueError(f"Unsupported read format: {fmt}")

    count = 0
    with open_file(filepath, 'r') as handle:
        for record in SeqIO.parse(handle, fmt):
            count += 1
            yield str(record.seq).upper()

    logger.info(f"Read {count} sequences from {filepath} ({fmt})")


# =============================================================================
# SECTION 4: CONTIG OUTPUT
# =============================================================================

def contig_filename(n50: int) -> str:
    """Output file name for an assembly with the given N50."""
    return f"contigs_N50_{n50}.fasta"


def write_contigs(
    contigs: Iterable[str],
    output_dir: Union[str, Path],
    k: int,
    n50: int,
    line_width: int = 0
) -> Path:
    """
    Write contigs to ``<output_dir>/contigs_N50_<n50>.fasta``.

    Each record header notes the k-mer size used to build the graph:
    ``>contig_<i> length=<len> k=<k>``.

    Args:
        contigs: Contig sequences in output order
        output_dir: Destination directory (created if missing)
        k: K-mer size used for the graph
        n50: Assembly N50, used to name the file
        line_width: Bases per line (0 = no wrapping)

    Returns:
        Path of the written file
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / contig_filename(n50)

    count = 0
    with open(output_path, 'w') as f:
        for i, sequence in enumerate(contigs, start=1):
            f.write(f">contig_{i} length={len(sequence)} k={k}\n")
            if line_width > 0:
                for start in range(0, len(sequence), line_width):
                    f.write(sequence[start:start + line_width] + "\n")
            else:
                f.write(sequence + "\n")
            count += 1

    logger.info(f"Wrote {count} contigs to {output_path}")
    return output_path


def read_contigs(filepath: Union[str, Path]) -> Iterator[str]:
    """Yield contig sequences from a FASTA file (used by the stats command)."""
    return read_sequences(filepath, fmt='fasta')


def export_assembly_stats(stats: Dict[str, Any], output_path: Union[str, Path]) -> Path:
    """
    Write assembly statistics to JSON.

    Args:
        stats: Statistics dictionary, either ``AssemblyStats.to_dict()`` or
            ``AssemblyResult.to_dict()`` (metrics under ``stats``)
        output_path: Path to output JSON file

    Returns:
        Path of the written file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w') as f:
        json.dump(stats, f, indent=2)

    # Assembly results nest the contig metrics under 'stats'
    metrics = stats.get('stats', stats)
    logger.info(f"Assembly statistics exported to {output_path}")
    logger.info(f"  Total length: {metrics.get('total_length', 0):,} bp")
    logger.info(f"  N50: {metrics.get('n50', -1):,} bp")
    return output_path

# ContigWeaver v0.1.0
# Any usage is subject to this software's license.
