"""
Read and contig I/O for ContigWeaver.

- io_core_module.py: FASTQ/FASTA read loading, contig FASTA output, stats JSON
"""

from .io_core_module import (
    is_gzipped,
    open_file,
    detect_format,
    read_sequences,
    read_contigs,
    contig_filename,
    write_contigs,
    export_assembly_stats,
)

__all__ = [
    "is_gzipped",
    "open_file",
    "detect_format",
    "read_sequences",
    "read_contigs",
    "contig_filename",
    "write_contigs",
    "export_assembly_stats",
]
