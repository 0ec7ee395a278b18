"""
Configuration modules for the compressibility scanner.

This package contains all configuration constants including:
- analysis: window, compression and output-format settings
"""

from .analysis import (
    VERSION,
    RECORD_SEPARATOR,
    FORWARD_STRAND,
    GZIP_HEADER_OVERHEAD,
    GZIP_TRAILER_SIZE,
    SCORING_COMPRESSION_LEVEL,
    OUTPUT_COMPRESSION_LEVEL,
    DEFAULT_WINDOW_LENGTH,
    COMPRESSED_OUTPUT_SUFFIX,
    FASTA_SUFFIXES,
    OUTPUT_COLUMNS,
    SCAN_CONFIG,
)

__all__ = [
    'VERSION',
    'RECORD_SEPARATOR',
    'FORWARD_STRAND',
    'GZIP_HEADER_OVERHEAD',
    'GZIP_TRAILER_SIZE',
    'SCORING_COMPRESSION_LEVEL',
    'OUTPUT_COMPRESSION_LEVEL',
    'DEFAULT_WINDOW_LENGTH',
    'COMPRESSED_OUTPUT_SUFFIX',
    'FASTA_SUFFIXES',
    'OUTPUT_COLUMNS',
    'SCAN_CONFIG',
]
