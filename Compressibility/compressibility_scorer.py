"""
┌──────────────────────────────────────────────────────────────────────────────┐
│ Compressibility Scorer - GZIP Ratio per Genome Window                        │
├──────────────────────────────────────────────────────────────────────────────┤
│ License: MIT | Version: 0.1.1                                                │
└──────────────────────────────────────────────────────────────────────────────┘

DESCRIPTION:
    Compresses a window's residues with gzip at maximum effort and reports

        ratio = uncompressed_length / (compressed_length - overhead)

    ``compressed_length`` is the gzip member without its CRC32/ISIZE trailer,
    i.e. the 10-byte header followed by the DEFLATE payload.  Subtracting the
    header leaves the payload size, so repetitive windows (poly-A, tandem
    repeats) score high and complex windows score low.

        AAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA  ->  high ratio
        GACTTGCAGTGGGGGGAACGTTAGCCATGCAATCGGTACTAGCATCAGTA  ->  low ratio

    The header timestamp is pinned to 0 so scores are reproducible.  The
    ratio is a single-precision float.

Scientific Basis:
    Compression-based complexity (Lempel-Ziv family) as a proxy for
    sequence entropy; low-complexity DNA compresses well.
"""

from __future__ import annotations

import gzip
import logging
from dataclasses import dataclass

import numpy as np

from .config import (
    GZIP_HEADER_OVERHEAD,
    GZIP_TRAILER_SIZE,
    SCORING_COMPRESSION_LEVEL,
)
from .errors import CompressionOverheadError, InvalidConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreResult:
    """
    Compressibility of one window.

    Attributes:
        uncompressed_length:       Residues in the window
        compressed_length:         gzip header + DEFLATE payload bytes
        compressed_payload_length: compressed_length minus the envelope overhead
        ratio:                     uncompressed / payload, float32 precision
    """
    uncompressed_length: int
    compressed_length: int
    compressed_payload_length: int
    ratio: float


def validate_compression_level(level) -> int:
    if isinstance(level, bool) or not isinstance(level, int) or not 0 <= level <= 9:
        raise InvalidConfigurationError(
            f"compression level must be an integer in 0..9, got {level!r}"
        )
    return level


def subtract_overhead(compressed_length: int, overhead: int) -> int:
    """
    Checked envelope correction.

    Raises:
        CompressionOverheadError: If the result would be zero or negative.
    """
    if compressed_length <= overhead:
        raise CompressionOverheadError(compressed_length, overhead)
    return compressed_length - overhead


def measured_gzip_length(data: bytes, level: int = SCORING_COMPRESSION_LEVEL) -> int:
    """Length of a deterministic gzip member of *data*, trailer excluded."""
    member = gzip.compress(data, compresslevel=level, mtime=0)
    return len(member) - GZIP_TRAILER_SIZE


class CompressibilityScorer:
    """
    Score windows by gzip compressibility.

    Usage::

        scorer = CompressibilityScorer()
        result = scorer.score("ACGTACGTACGT")
        result.ratio
    """

    def __init__(self, level: int = SCORING_COMPRESSION_LEVEL,
                 overhead: int = GZIP_HEADER_OVERHEAD):
        self.level = validate_compression_level(level)
        if isinstance(overhead, bool) or not isinstance(overhead, int) or overhead < 0:
            raise InvalidConfigurationError(
                f"envelope overhead must be a non-negative integer, got {overhead!r}"
            )
        self.overhead = overhead

    def score(self, sequence: str) -> ScoreResult:
        """
        Compute the compressibility of *sequence*.

        Args:
            sequence: Uppercased window residues.

        Returns:
            ScoreResult for the window.

        Raises:
            CompressionOverheadError: Measured length does not exceed the
                                      envelope overhead.
        """
        data = sequence.encode("utf-8")
        compressed_length = measured_gzip_length(data, self.level)
        payload = subtract_overhead(compressed_length, self.overhead)
        ratio = np.float32(len(data)) / np.float32(payload)
        return ScoreResult(
            uncompressed_length=len(data),
            compressed_length=compressed_length,
            compressed_payload_length=payload,
            ratio=float(ratio),
        )
