"""
┌──────────────────────────────────────────────────────────────────────────────┐
│ FASTA Stream Parser - Line-Oriented Header / Residue Events                  │
├──────────────────────────────────────────────────────────────────────────────┤
│ License: MIT | Version: 0.1.1                                                │
└──────────────────────────────────────────────────────────────────────────────┘

DESCRIPTION:
    Turns a line-oriented FASTA stream into a sequence of events, one per
    input line, without holding more than the current line in memory.

        >chr1            ->  FastaEvent(kind="header",   chromosome="chr1")
        acgtACGT         ->  FastaEvent(kind="sequence", residues="ACGTACGT")

    The header name is the text after '>' taken verbatim.  Residue lines are
    uppercased.  A zero-length line cannot be classified and raises
    FastaParseError, as do undecodable lines, a tab inside a header name
    (it would split the output column) and residues seen before the first
    header.

USAGE::

    with open("hg38.fa") as fh:
        for event in iter_fasta_events(fh):
            if event.is_header:
                start_record(event.chromosome)
            else:
                append(event.residues)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from .config import RECORD_SEPARATOR
from .errors import FastaParseError

logger = logging.getLogger(__name__)

HEADER = "header"
SEQUENCE = "sequence"


@dataclass(frozen=True)
class FastaEvent:
    """
    One classified input line.

    Attributes:
        kind:        ``"header"`` or ``"sequence"``
        chromosome:  Active chromosome name (the header's own name for headers)
        residues:    Uppercased residues; empty for headers
        line_number: 1-based line number in the input
    """
    kind: str
    chromosome: str
    residues: str = ""
    line_number: int = 0

    @property
    def is_header(self) -> bool:
        return self.kind == HEADER


def _strip_terminator(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def iter_fasta_events(lines: Iterable[str]) -> Iterator[FastaEvent]:
    """
    Classify FASTA lines into header and sequence events.

    Args:
        lines: Any iterable of text lines (an open file, ``io.StringIO``,
               a list); line terminators are optional.

    Yields:
        FastaEvent per input line, in input order.

    Raises:
        FastaParseError: On an undecodable or zero-length line, a tab in a
                         header name, or residues before the first header.
    """
    chromosome: Optional[str] = None
    line_number = 0
    source = iter(lines)

    while True:
        try:
            raw = next(source)
        except StopIteration:
            return
        except UnicodeDecodeError as exc:
            raise FastaParseError(f"unreadable line ({exc.reason})", line_number + 1) from exc
        line_number += 1

        line = _strip_terminator(raw)
        if not line:
            raise FastaParseError("empty line cannot be classified", line_number)

        if line[0] == RECORD_SEPARATOR:
            chromosome = line[1:]
            if "\t" in chromosome:
                raise FastaParseError("tab character in header name", line_number)
            logger.debug(f"FASTA header at line {line_number:,}: {chromosome!r}")
            yield FastaEvent(HEADER, chromosome, "", line_number)
            continue

        if chromosome is None:
            raise FastaParseError(
                "sequence data found before the first '>' header", line_number
            )
        yield FastaEvent(SEQUENCE, chromosome, line.upper(), line_number)
