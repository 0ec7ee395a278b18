#!/usr/bin/env python3
"""
gzip_compressibility.py
=======================
Computes GZIP compressibility for genomic regions in every interval of
``--seqlen`` bp of a FASTA file.

Usage:
    python3 gzip_compressibility.py --inFile hg38.fa --outFile output.bed [--seqlen 50]
    python3 gzip_compressibility.py -i hg38.fa -o output.bed.gz -l 100 --summary chr_summary.tsv

An output name ending in '.gz' selects gzip framing (one gzip member per
record); without --outFile the table goes to stdout.  Logs go to stderr.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from Compressibility.config import (
    COMPRESSED_OUTPUT_SUFFIX,
    DEFAULT_WINDOW_LENGTH,
    FASTA_SUFFIXES,
    SCAN_CONFIG,
    VERSION,
)
from Compressibility.errors import CompressibilityError
from Compressibility.pipeline import OverheadPolicy, ScanConfig, scan_fasta
from Compressibility.record_emitter import OutputFraming
from Compressibility.summary import (
    chromosome_report,
    load_compressibility_table,
    low_complexity_regions,
)

logger = logging.getLogger("gzip_compressibility")

LOG_FORMAT = "[%(asctime)s %(levelname)s] %(message)s"

OUTPUT_HELP = """\
Output:
    The output has 6 columns:
        1) chromosome name;
        2) start coordinate (0-based);
        3) end coordinate (exclusive);
        4) sequence;
        5) GZIP compressibility (window length / compressed payload bytes);
        6) genome strand (always '+');
"""


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"--seqlen cannot be parsed: {text!r}")
    if value <= 0:
        raise argparse.ArgumentTypeError(f"--seqlen must be positive, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gzip-compressibility",
        description=(
            "Computes GZIP compressibility for genomic regions in every "
            "given interval (--seqlen)"
        ),
        epilog=OUTPUT_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('-i', '--inFile', required=True,
                        help='input file in FASTA format (.fa, .fasta, .fna)')
    parser.add_argument('-o', '--outFile', default=None,
                        help="output file; if omitted, write to STDOUT; "
                             "if ending with '.gz', will be GZ compressed")
    parser.add_argument('-l', '--seqlen', type=_positive_int,
                        default=DEFAULT_WINDOW_LENGTH,
                        help=f'length (bp) of the intervals (default: {DEFAULT_WINDOW_LENGTH})')
    parser.add_argument('--on-overhead-error', choices=[p.value for p in OverheadPolicy],
                        default=SCAN_CONFIG['overhead_policy'],
                        help='skip or abort on a window whose compressed size '
                             'does not exceed the gzip header')
    parser.add_argument('--summary', default=None,
                        help='write a per-chromosome summary TSV to this path '
                             '(median ratio and low-complexity counts need --outFile)')
    parser.add_argument('--regions', default=None,
                        help='write merged low-complexity regions (ratio >= --threshold) '
                             'as TSV (requires --outFile)')
    parser.add_argument('--plot', default=None,
                        help='write a compressibility profile PNG (requires --outFile)')
    parser.add_argument('--threshold', type=float,
                        default=SCAN_CONFIG['low_complexity_threshold'],
                        help='low-complexity ratio threshold for --summary, --regions and --plot')
    parser.add_argument('--log-level', default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='logging verbosity (stderr)')
    parser.add_argument('-v', '--version', action='version',
                        version=f'%(prog)s v{VERSION}')
    return parser


def validate_args(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    if not os.path.exists(args.inFile):
        parser.error(f"{args.inFile} does not exist!")
    if not args.inFile.lower().endswith(FASTA_SUFFIXES):
        parser.error(f"{args.inFile} does not seem to be a FASTA file!")
    if args.plot and not args.outFile:
        parser.error("--plot requires --outFile")
    if args.regions and not args.outFile:
        parser.error("--regions requires --outFile")


def output_framing(outfile: Optional[str]) -> OutputFraming:
    if outfile and outfile.lower().endswith(COMPRESSED_OUTPUT_SUFFIX):
        return OutputFraming.COMPRESSED
    return OutputFraming.PLAIN


def run(args: argparse.Namespace) -> int:
    config = ScanConfig(
        window_length=args.seqlen,
        framing=output_framing(args.outFile),
        overhead_policy=OverheadPolicy(args.on_overhead_error),
    )
    logger.info(
        f"{{ infile = {args.inFile}, outfile = {args.outFile or ''}, "
        f"seqlen = {config.window_length}, "
        f"gzout = {str(config.framing is OutputFraming.COMPRESSED).lower()}, "
        f"VERSION = {VERSION} }}"
    )

    logger.info("Start processing FASTA...")
    with open(args.inFile, "r", encoding="utf-8") as infh:
        if args.outFile:
            with open(args.outFile, "wb") as outfh:
                summary = scan_fasta(infh, outfh, config)
        else:
            summary = scan_fasta(infh, sys.stdout.buffer, config)

    table = None
    if args.outFile and (args.summary or args.regions or args.plot):
        table = load_compressibility_table(args.outFile)

    if args.summary:
        chromosome_report(summary, table, args.threshold).to_csv(
            args.summary, sep="\t", index=False)
        logger.info(f"Summary written to {args.summary}")

    if args.regions:
        regions = low_complexity_regions(table, args.threshold)
        regions.to_csv(args.regions, sep="\t", index=False)
        logger.info(f"{len(regions):,} low-complexity region(s) written to {args.regions}")

    if args.plot:
        from Compressibility.visualization import plot_compressibility_profile
        plot_compressibility_profile(table, args.plot, args.threshold)

    logger.info(
        f"All done! {summary.windows_emitted:,} window(s) from "
        f"{len(summary.chromosomes)} sequence(s)"
    )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format=LOG_FORMAT, stream=sys.stderr)
    validate_args(parser, args)

    try:
        return run(args)
    except CompressibilityError as exc:
        logger.error(f"{type(exc).__name__}: {exc}")
        return 1
    except OSError as exc:
        logger.error(f"I/O failure: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
