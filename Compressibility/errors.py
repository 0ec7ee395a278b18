"""
Exception hierarchy for the compressibility scanner.

All errors raised by the scanning core derive from ``CompressibilityError``
so callers (the CLI in particular) can report them uniformly.
"""

from typing import Optional


class CompressibilityError(Exception):
    """Base class for every scanner error."""


class FastaParseError(CompressibilityError):
    """Malformed FASTA input. Fatal for the scan."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class InvalidConfigurationError(CompressibilityError, ValueError):
    """Rejected configuration, raised before any input is read."""


class CompressionOverheadError(CompressibilityError):
    """
    Compressed length at or below the fixed envelope overhead.

    Raised per window instead of letting the overhead subtraction produce a
    zero or negative payload length.
    """

    def __init__(self, compressed_length: int, overhead: int):
        self.compressed_length = compressed_length
        self.overhead = overhead
        super().__init__(
            f"compressed length {compressed_length} does not exceed "
            f"envelope overhead {overhead}"
        )
