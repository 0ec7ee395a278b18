"""
Analysis configuration for the compressibility scanner.

This module contains scan parameters:
- FASTA record layout
- Window length defaults
- GZIP envelope sizes used by the ratio correction
- Compression levels for scoring and for compressed output
- Output table layout

GZIP ENVELOPE
-------------
A gzip member compressed in memory looks like:

    1F 8B 08 00 00 00 00 00 02 FF | <DEFLATE payload> | CRC32 (4) ISIZE (4)
    --------- header (10) --------                     ---- trailer (8) ---

The scorer measures the header plus the payload (the trailer is not part of
the measured stream) and subtracts GZIP_HEADER_OVERHEAD, so the ratio tracks
the payload rather than the constant envelope.
"""

VERSION = "0.1.1"

# ==================== FASTA LAYOUT ====================
RECORD_SEPARATOR = ">"
FORWARD_STRAND = "+"
FASTA_SUFFIXES = (".fa", ".fasta", ".fna")

# ==================== GZIP ENVELOPE ====================
GZIP_HEADER_OVERHEAD = 10   # bytes, fixed member header
GZIP_TRAILER_SIZE = 8       # bytes, CRC32 + ISIZE

# ==================== COMPRESSION LEVELS ====================
SCORING_COMPRESSION_LEVEL = 9   # maximum effort for the ratio
OUTPUT_COMPRESSION_LEVEL = 6    # zlib default, used for .gz output framing

# ==================== WINDOWING ====================
DEFAULT_WINDOW_LENGTH = 50   # bp

# ==================== OUTPUT TABLE ====================
COMPRESSED_OUTPUT_SUFFIX = ".gz"
OUTPUT_COLUMNS = ["Chromosome", "Start", "End", "Sequence", "Ratio", "Strand"]

SCAN_CONFIG = {
    'window_length': DEFAULT_WINDOW_LENGTH,
    'scoring_level': SCORING_COMPRESSION_LEVEL,
    'output_level': OUTPUT_COMPRESSION_LEVEL,
    'overhead': GZIP_HEADER_OVERHEAD,
    'overhead_policy': 'skip',        # 'skip' | 'abort'
    'low_complexity_threshold': 2.0,  # ratio at/above which a window counts as low complexity
}
