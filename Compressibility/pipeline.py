"""
┌──────────────────────────────────────────────────────────────────────────────┐
│ Scan Pipeline - FASTA → Windows → GZIP Ratio → Region Table                  │
├──────────────────────────────────────────────────────────────────────────────┤
│ License: MIT | Version: 0.1.1                                                │
└──────────────────────────────────────────────────────────────────────────────┘

DESCRIPTION:
    Single-pass, single-threaded driver.  Each input line is parsed, its
    complete windows scored and written before the next line is read:

        iter_fasta_events ──► WindowAccumulator ──► CompressibilityScorer
                                                          │
                                                          ▼
                                                    RecordEmitter ──► sink

    Diagnostics go to an injected event sink, a callable taking an event
    name and a dict of fields.  ``logging_event_sink`` (the default) forwards
    them to this module's logger; tests pass a list-collecting callable.

EVENTS:
    scan_started     window_length, framing
    record_started   chromosome, line_number
    tail_discarded   chromosome, residues
    window_skipped   chromosome, start, end, reason
    scan_finished    chromosomes, windows, skipped, discarded

USAGE::

    config = ScanConfig(window_length=50, framing=OutputFraming.COMPRESSED)
    with open("hg38.fa") as fin, open("hg38.bed.gz", "wb") as fout:
        summary = scan_fasta(fin, fout, config)
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Callable, Dict, Iterable, List, Optional

from .compressibility_scorer import CompressibilityScorer, validate_compression_level
from .config import (
    DEFAULT_WINDOW_LENGTH,
    GZIP_HEADER_OVERHEAD,
    OUTPUT_COMPRESSION_LEVEL,
    SCORING_COMPRESSION_LEVEL,
)
from .errors import CompressionOverheadError
from .fasta_stream import iter_fasta_events
from .record_emitter import OutputFraming, RecordEmitter
from .window_accumulator import Window, WindowAccumulator, validate_window_length

logger = logging.getLogger(__name__)

EventSink = Callable[[str, Dict[str, Any]], None]

_EVENT_LEVELS = {
    "scan_started": logging.INFO,
    "record_started": logging.INFO,
    "tail_discarded": logging.DEBUG,
    "window_skipped": logging.WARNING,
    "scan_finished": logging.INFO,
}


def logging_event_sink(event: str, fields: Dict[str, Any]) -> None:
    """Default event sink: one log line per event."""
    level = _EVENT_LEVELS.get(event, logging.INFO)
    details = ", ".join(f"{key} = {value}" for key, value in fields.items())
    logger.log(level, f"{event}: {{ {details} }}")


class OverheadPolicy(enum.Enum):
    """What to do with a window whose compressed length fails the overhead check."""
    SKIP = "skip"
    ABORT = "abort"


@dataclass
class ScanConfig:
    window_length: int = DEFAULT_WINDOW_LENGTH
    framing: OutputFraming = OutputFraming.PLAIN
    overhead_policy: OverheadPolicy = OverheadPolicy.SKIP
    scoring_level: int = SCORING_COMPRESSION_LEVEL
    output_level: int = OUTPUT_COMPRESSION_LEVEL
    overhead: int = GZIP_HEADER_OVERHEAD

    def __post_init__(self):
        validate_window_length(self.window_length)
        validate_compression_level(self.scoring_level)
        validate_compression_level(self.output_level)
        self.framing = OutputFraming(self.framing)
        self.overhead_policy = OverheadPolicy(self.overhead_policy)


@dataclass
class ChromosomeStats:
    """Running per-chromosome counters; no window text is retained."""
    chromosome: str
    windows: int = 0
    skipped: int = 0
    discarded_residues: int = 0
    min_ratio: Optional[float] = None
    max_ratio: Optional[float] = None
    ratio_sum: float = 0.0

    @property
    def mean_ratio(self) -> Optional[float]:
        if not self.windows:
            return None
        return self.ratio_sum / self.windows

    def add(self, ratio: float) -> None:
        self.windows += 1
        self.ratio_sum += ratio
        self.min_ratio = ratio if self.min_ratio is None else min(self.min_ratio, ratio)
        self.max_ratio = ratio if self.max_ratio is None else max(self.max_ratio, ratio)


@dataclass
class ScanSummary:
    chromosomes: List[ChromosomeStats] = field(default_factory=list)

    @property
    def windows_emitted(self) -> int:
        return sum(c.windows for c in self.chromosomes)

    @property
    def windows_skipped(self) -> int:
        return sum(c.skipped for c in self.chromosomes)

    @property
    def residues_discarded(self) -> int:
        return sum(c.discarded_residues for c in self.chromosomes)


class CompressibilityScanner:
    """
    Wire parser, accumulator, scorer and emitter for one scan.

    Usage::

        scanner = CompressibilityScanner(ScanConfig(window_length=4), sink)
        summary = scanner.run(lines)
    """

    def __init__(self, config: ScanConfig, sink: BinaryIO,
                 events: Optional[EventSink] = None):
        self.config = config
        self.events = events or logging_event_sink
        self.accumulator = WindowAccumulator(config.window_length)
        self.scorer = CompressibilityScorer(config.scoring_level, config.overhead)
        self.emitter = RecordEmitter(sink, config.framing, config.output_level)
        self.summary = ScanSummary()

    def _close_record(self, discarded: int) -> None:
        if not self.summary.chromosomes:
            return
        stats = self.summary.chromosomes[-1]
        stats.discarded_residues += discarded
        if discarded:
            self.events("tail_discarded", {
                "chromosome": stats.chromosome,
                "residues": discarded,
            })

    def _process(self, window: Window) -> None:
        stats = self.summary.chromosomes[-1]
        try:
            score = self.scorer.score(window.sequence)
        except CompressionOverheadError as exc:
            if self.config.overhead_policy is OverheadPolicy.ABORT:
                raise
            stats.skipped += 1
            self.events("window_skipped", {
                "chromosome": window.chromosome,
                "start": window.start,
                "end": window.end,
                "reason": str(exc),
            })
            return
        self.emitter.emit(window, score)
        stats.add(score.ratio)

    def run(self, lines: Iterable[str]) -> ScanSummary:
        """
        Scan *lines* to completion.

        Raises:
            FastaParseError:          Malformed input; records already
                                      written stay in the sink.
            CompressionOverheadError: Only with ``OverheadPolicy.ABORT``.
        """
        self.events("scan_started", {
            "window_length": self.config.window_length,
            "framing": self.config.framing.value,
        })

        for event in iter_fasta_events(lines):
            if event.is_header:
                self._close_record(self.accumulator.begin_record(event.chromosome))
                self.summary.chromosomes.append(ChromosomeStats(event.chromosome))
                self.events("record_started", {
                    "chromosome": event.chromosome,
                    "line_number": event.line_number,
                })
                continue
            for window in self.accumulator.append(event.residues):
                self._process(window)

        self._close_record(self.accumulator.finish())
        self.emitter.flush()

        self.events("scan_finished", {
            "chromosomes": len(self.summary.chromosomes),
            "windows": self.summary.windows_emitted,
            "skipped": self.summary.windows_skipped,
            "discarded": self.summary.residues_discarded,
        })
        return self.summary


def scan_fasta(lines: Iterable[str], sink: BinaryIO, config: ScanConfig,
               events: Optional[EventSink] = None) -> ScanSummary:
    """Run one compressibility scan of *lines* into *sink*."""
    return CompressibilityScanner(config, sink, events).run(lines)
