"""
Compressibility package: GZIP compressibility of fixed-length genome windows.

Contains modules for:
- Configuration (config/)
- Error types (errors.py)
- FASTA line events (fasta_stream.py)
- Window extraction (window_accumulator.py)
- GZIP ratio scoring (compressibility_scorer.py)
- Record output, plain or gzip framed (record_emitter.py)
- Single-pass scan driver (pipeline.py)
- Tabular summaries (summary.py) and plots (visualization.py)

Scan architecture:
- iter_fasta_events      – '>' headers and uppercased residue lines
- WindowAccumulator      – Non-overlapping windows, partial tails dropped
- CompressibilityScorer  – len / (gzip length − 10-byte header)
- RecordEmitter          – chrom, start, end, sequence, ratio, strand
- CompressibilityScanner – Wires the above, reports diagnostic events
"""

from .config import VERSION
from .errors import (
    CompressibilityError,
    CompressionOverheadError,
    FastaParseError,
    InvalidConfigurationError,
)
from .fasta_stream import FastaEvent, iter_fasta_events
from .window_accumulator import Window, WindowAccumulator
from .compressibility_scorer import CompressibilityScorer, ScoreResult
from .record_emitter import OutputFraming, RecordEmitter, format_record
from .pipeline import (
    ChromosomeStats,
    CompressibilityScanner,
    OverheadPolicy,
    ScanConfig,
    ScanSummary,
    logging_event_sink,
    scan_fasta,
)

__version__ = VERSION

__all__ = [
    'CompressibilityError',
    'CompressionOverheadError',
    'FastaParseError',
    'InvalidConfigurationError',
    'FastaEvent',
    'iter_fasta_events',
    'Window',
    'WindowAccumulator',
    'CompressibilityScorer',
    'ScoreResult',
    'OutputFraming',
    'RecordEmitter',
    'format_record',
    'ChromosomeStats',
    'CompressibilityScanner',
    'OverheadPolicy',
    'ScanConfig',
    'ScanSummary',
    'logging_event_sink',
    'scan_fasta',
]
