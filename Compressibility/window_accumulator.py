"""
┌──────────────────────────────────────────────────────────────────────────────┐
│ Window Accumulator - Fixed-Length Non-Overlapping Genome Windows             │
├──────────────────────────────────────────────────────────────────────────────┤
│ License: MIT | Version: 0.1.1                                                │
└──────────────────────────────────────────────────────────────────────────────┘

DESCRIPTION:
    Buffers the residues of the active chromosome and cuts them into
    consecutive windows of exactly ``window_length`` residues.

    Example with window_length=4 and the lines "AAAAC" and "CCCGG":

        append("AAAAC")  ->  [chr1 #0 AAAA]            buffer "C"
        append("CCCGG")  ->  [chr1 #1 CCCC]            buffer "GG"
        begin_record(..) ->  discards "GG" (2 residues, no window)

    Windows are only ever extracted in ``append``.  Starting a new record or
    finishing the input discards the pending tail; a window shorter than
    ``window_length`` is never produced.

USAGE::

    acc = WindowAccumulator(window_length=50)
    acc.begin_record("chr1")
    for window in acc.append("ACGT..."):
        score(window.sequence, window.start, window.end)
    acc.finish()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from .errors import InvalidConfigurationError

logger = logging.getLogger(__name__)


def validate_window_length(window_length) -> int:
    """Return *window_length* if it is a positive int, else raise."""
    if isinstance(window_length, bool) or not isinstance(window_length, int):
        raise InvalidConfigurationError(
            f"window length must be an integer, got {window_length!r}"
        )
    if window_length <= 0:
        raise InvalidConfigurationError(
            f"window length must be positive, got {window_length}"
        )
    return window_length


@dataclass(frozen=True)
class Window:
    """
    A fixed-length slice of one chromosome.

    * ``chromosome`` – str, name from the most recent header
    * ``index``      – int, 0-based window number within the chromosome
    * ``sequence``   – str, uppercased residues, ``len == window_length``
    """
    chromosome: str
    index: int
    sequence: str

    @property
    def length(self) -> int:
        return len(self.sequence)

    @property
    def start(self) -> int:
        return self.index * self.length

    @property
    def end(self) -> int:
        return (self.index + 1) * self.length


class WindowAccumulator:
    """
    Per-chromosome residue buffer emitting non-overlapping windows.

    Usage::

        acc = WindowAccumulator(4)
        acc.begin_record("chr1")
        list(acc.append("AAAACCCC"))   # -> two windows
    """

    def __init__(self, window_length: int):
        """
        Args:
            window_length: Residues per window, positive integer.

        Raises:
            InvalidConfigurationError: If window_length is not a positive int.
        """
        self.window_length = validate_window_length(window_length)
        self.chromosome: Optional[str] = None
        self.window_index = 0
        self._buffer = ""
        # residues of _buffer before _offset already belong to emitted windows
        self._offset = 0

    @property
    def pending(self) -> int:
        """Number of buffered residues not yet part of a window."""
        return len(self._buffer) - self._offset

    def begin_record(self, chromosome: str) -> int:
        """
        Switch to a new chromosome.

        Returns:
            Number of residues discarded from the previous chromosome's tail.
        """
        discarded = self.discard()
        self.chromosome = chromosome
        self.window_index = 0
        return discarded

    def append(self, residues: str) -> Iterator[Window]:
        """
        Append residues and yield every complete window now available.

        Windows are produced lazily, so a whole chromosome on a single line
        never materialises as a list of windows.  Consume the iterator before
        the next ``append``.

        Returns:
            Iterator of windows in genome order; empty when fewer than
            ``window_length`` residues are buffered.
        """
        if self.chromosome is None:
            raise RuntimeError("append() called before begin_record()")

        self._trim()
        self._buffer += residues
        return self._extract()

    def _extract(self) -> Iterator[Window]:
        size = self.window_length
        while len(self._buffer) - self._offset >= size:
            start = self._offset
            window = Window(self.chromosome, self.window_index,
                            self._buffer[start:start + size])
            self._offset += size
            self.window_index += 1
            yield window
        self._trim()

    def _trim(self) -> None:
        if self._offset:
            self._buffer = self._buffer[self._offset:]
            self._offset = 0

    def discard(self) -> int:
        """Drop the pending partial window; return how many residues were dropped."""
        dropped = self.pending
        if dropped:
            logger.debug(
                f"WindowAccumulator: dropping {dropped} trailing residue(s) "
                f"of {self.chromosome!r}"
            )
        self._buffer = ""
        self._offset = 0
        return dropped

    def finish(self) -> int:
        """End of input: discard the pending tail of the last chromosome."""
        return self.discard()
