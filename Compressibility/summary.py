"""
Tabular summaries of compressibility scans (pandas).

- summary_to_dataframe():       per-chromosome counters from a ScanSummary
- load_compressibility_table(): read a scan output table (plain or gzip framed)
- summarize_table():            per-chromosome ratio statistics from a table
- low_complexity_regions():     merge adjacent high-ratio windows into regions
- chromosome_report():          scan counters joined with table statistics
"""

from __future__ import annotations

import csv
import os
import logging
from typing import Optional, Union

import numpy as np
import pandas as pd

from .config import OUTPUT_COLUMNS, SCAN_CONFIG
from .pipeline import ScanSummary

logger = logging.getLogger(__name__)

_GZIP_MAGIC = b"\x1f\x8b"

_SUMMARY_COLUMNS = [
    "Chromosome", "Windows", "Skipped", "Discarded_Residues",
    "Min_Ratio", "Mean_Ratio", "Max_Ratio",
]


def summary_to_dataframe(summary: ScanSummary) -> pd.DataFrame:
    """One row per chromosome, in input order."""
    rows = [
        {
            "Chromosome": c.chromosome,
            "Windows": c.windows,
            "Skipped": c.skipped,
            "Discarded_Residues": c.discarded_residues,
            "Min_Ratio": np.nan if c.min_ratio is None else c.min_ratio,
            "Mean_Ratio": np.nan if c.mean_ratio is None else c.mean_ratio,
            "Max_Ratio": np.nan if c.max_ratio is None else c.max_ratio,
        }
        for c in summary.chromosomes
    ]
    return pd.DataFrame(rows, columns=_SUMMARY_COLUMNS)


def load_compressibility_table(path: Union[str, os.PathLike]) -> pd.DataFrame:
    """
    Read a scanner output table into a DataFrame.

    gzip framing is recognised from the leading magic bytes, not the file
    name; pandas then decompresses the concatenated per-record members as
    one stream.  Fields are taken literally (no quoting), matching the
    writer, which never quotes.

    Args:
        path: Output table written by the scanner.

    Returns:
        DataFrame with columns Chromosome, Start, End, Sequence, Ratio, Strand.
    """
    with open(path, "rb") as fh:
        magic = fh.read(len(_GZIP_MAGIC))

    try:
        df = pd.read_csv(
            path,
            sep="\t",
            header=None,
            names=OUTPUT_COLUMNS,
            dtype={"Chromosome": str, "Start": np.int64, "End": np.int64,
                   "Sequence": str, "Ratio": np.float64, "Strand": str},
            keep_default_na=False,
            quoting=csv.QUOTE_NONE,
            compression="gzip" if magic == _GZIP_MAGIC else None,
        )
    except pd.errors.EmptyDataError:
        logger.warning(f"No windows in {path}")
        return pd.DataFrame(columns=OUTPUT_COLUMNS)

    logger.info(f"Loaded {len(df):,} window(s) from {path}")
    return df


def summarize_table(df: pd.DataFrame,
                    threshold: float = SCAN_CONFIG['low_complexity_threshold']) -> pd.DataFrame:
    """
    Per-chromosome ratio statistics.

    Returns:
        DataFrame indexed by position with columns Chromosome, Windows,
        Mean_Ratio, Median_Ratio, Min_Ratio, Max_Ratio, Low_Complexity_Windows.
    """
    if df.empty:
        return pd.DataFrame(columns=[
            "Chromosome", "Windows", "Mean_Ratio", "Median_Ratio",
            "Min_Ratio", "Max_Ratio", "Low_Complexity_Windows",
        ])

    grouped = df.groupby("Chromosome", sort=False)["Ratio"]
    out = grouped.agg(
        Windows="count",
        Mean_Ratio="mean",
        Median_Ratio="median",
        Min_Ratio="min",
        Max_Ratio="max",
    )
    out["Low_Complexity_Windows"] = (
        df.assign(_low=df["Ratio"] >= threshold)
          .groupby("Chromosome", sort=False)["_low"].sum()
          .astype(int)
    )
    return out.reset_index()


def low_complexity_regions(df: pd.DataFrame,
                           threshold: float = SCAN_CONFIG['low_complexity_threshold']) -> pd.DataFrame:
    """
    Windows with ``Ratio >= threshold``, with abutting windows of the same
    chromosome merged into one region.

    Returns:
        DataFrame with columns Chromosome, Start, End, Windows, Max_Ratio.
    """
    hits = df[df["Ratio"] >= threshold]
    columns = ["Chromosome", "Start", "End", "Windows", "Max_Ratio"]
    if hits.empty:
        return pd.DataFrame(columns=columns)

    regions = []
    current = None
    for row in hits.itertuples(index=False):
        if (current is not None and current["Chromosome"] == row.Chromosome
                and current["End"] == row.Start):
            current["End"] = row.End
            current["Windows"] += 1
            current["Max_Ratio"] = max(current["Max_Ratio"], row.Ratio)
            continue
        if current is not None:
            regions.append(current)
        current = {
            "Chromosome": row.Chromosome,
            "Start": row.Start,
            "End": row.End,
            "Windows": 1,
            "Max_Ratio": row.Ratio,
        }
    regions.append(current)
    return pd.DataFrame(regions, columns=columns)


def chromosome_report(summary: ScanSummary, table: Optional[pd.DataFrame] = None,
                      threshold: float = SCAN_CONFIG['low_complexity_threshold']) -> pd.DataFrame:
    """
    Scan counters per chromosome, extended with Median_Ratio and
    Low_Complexity_Windows when the written table is available.
    """
    report = summary_to_dataframe(summary)
    if table is None:
        return report

    stats = summarize_table(table, threshold)[
        ["Chromosome", "Median_Ratio", "Low_Complexity_Windows"]
    ]
    report = report.merge(stats, on="Chromosome", how="left")
    report["Low_Complexity_Windows"] = (
        report["Low_Complexity_Windows"].fillna(0).astype(int)
    )
    return report
