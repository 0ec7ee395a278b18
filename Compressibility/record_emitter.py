"""
┌──────────────────────────────────────────────────────────────────────────────┐
│ Record Emitter - Tab-Separated Window Records, Plain or GZIP Framed          │
├──────────────────────────────────────────────────────────────────────────────┤
│ License: MIT | Version: 0.1.1                                                │
└──────────────────────────────────────────────────────────────────────────────┘

DESCRIPTION:
    Writes one 6-column record per scored window:

        chr1    0    50    ACGT...    2.173913    +

    Two framings are supported, chosen by the caller:

        PLAIN       the record text, UTF-8 encoded
        COMPRESSED  every record wrapped in its own complete gzip member;
                    the sink ends up as a concatenation of members, which
                    ``gzip -dc`` / ``gzip.open`` read back as the PLAIN text

    The emitter never looks at file names.
"""

from __future__ import annotations

import enum
import gzip
import logging
from typing import BinaryIO

import numpy as np

from .compressibility_scorer import ScoreResult, validate_compression_level
from .config import FORWARD_STRAND, OUTPUT_COMPRESSION_LEVEL
from .window_accumulator import Window

logger = logging.getLogger(__name__)


class OutputFraming(enum.Enum):
    PLAIN = "plain"
    COMPRESSED = "compressed"


def format_ratio(ratio: float) -> str:
    """Shortest round-tripping float32 text, positional, no trailing '.0'."""
    return np.format_float_positional(np.float32(ratio), trim="-")


def format_record(window: Window, score: ScoreResult) -> str:
    """Render one newline-terminated, tab-separated output record."""
    return "\t".join((
        window.chromosome,
        str(window.start),
        str(window.end),
        window.sequence,
        format_ratio(score.ratio),
        FORWARD_STRAND,
    )) + "\n"


class RecordEmitter:
    """
    Serialise window records to a binary sink in emission order.

    Usage::

        with open("out.bed.gz", "wb") as fh:
            emitter = RecordEmitter(fh, OutputFraming.COMPRESSED)
            emitter.emit(window, score)
    """

    def __init__(self, sink: BinaryIO, framing: OutputFraming = OutputFraming.PLAIN,
                 level: int = OUTPUT_COMPRESSION_LEVEL):
        """
        Args:
            sink:    Writable binary stream; the emitter does not close it.
            framing: PLAIN text or one gzip member per record.
            level:   gzip level for COMPRESSED framing.
        """
        self.sink = sink
        self.framing = OutputFraming(framing)
        self.level = validate_compression_level(level)
        self.records_written = 0
        self.bytes_written = 0

    def encode(self, line: str) -> bytes:
        data = line.encode("utf-8")
        if self.framing is OutputFraming.COMPRESSED:
            return gzip.compress(data, compresslevel=self.level, mtime=0)
        return data

    def emit(self, window: Window, score: ScoreResult) -> int:
        """Format, frame and write one record; return the bytes written."""
        payload = self.encode(format_record(window, score))
        self.sink.write(payload)
        self.records_written += 1
        self.bytes_written += len(payload)
        return len(payload)

    def flush(self) -> None:
        self.sink.flush()
        logger.debug(
            f"RecordEmitter: {self.records_written:,} record(s), "
            f"{self.bytes_written:,} byte(s) written ({self.framing.value})"
        )
