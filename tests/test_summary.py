"""
Tests for pandas summaries and profile plots of scan output.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import io

import pandas as pd
import pytest

from Compressibility.config import OUTPUT_COLUMNS
from Compressibility.pipeline import ScanConfig, scan_fasta
from Compressibility.record_emitter import OutputFraming
from Compressibility.summary import (
    chromosome_report,
    load_compressibility_table,
    low_complexity_regions,
    summarize_table,
    summary_to_dataframe,
)
from Compressibility.visualization import plot_compressibility_profile

FASTA = (
    ">chr1\n"
    + "A" * 60 + "\n"
    + "GACTTGCAGTGGGGGGAACGTTAGCCATGC\n"
    + ">chr2\n"
    + "ACGT" * 10 + "\n"
)


def _write_table(path, framing):
    with open(path, "wb") as fh:
        return scan_fasta(io.StringIO(FASTA), fh,
                          ScanConfig(window_length=20, framing=framing),
                          events=lambda *a: None)


@pytest.fixture(params=[OutputFraming.PLAIN, OutputFraming.COMPRESSED])
def table_path(request, tmp_path):
    path = tmp_path / "scan.bed"
    _write_table(path, request.param)
    return path


class TestLoadTable:

    def test_columns_and_rows(self, table_path):
        df = load_compressibility_table(table_path)
        assert list(df.columns) == OUTPUT_COLUMNS
        assert len(df) == 6
        assert df["Chromosome"].tolist() == ["chr1"] * 4 + ["chr2"] * 2
        assert (df["End"] - df["Start"]).eq(20).all()
        assert (df["Strand"] == "+").all()

    def test_gzip_detected_without_gz_suffix(self, tmp_path):
        path = tmp_path / "scan.tsv"
        _write_table(path, OutputFraming.COMPRESSED)
        assert path.read_bytes()[:2] == b"\x1f\x8b"
        df = load_compressibility_table(path)
        assert len(df) == 6

    def test_quote_characters_read_literally(self, tmp_path):
        path = tmp_path / "quoted.bed"
        path.write_text('"chr1\t0\t4\tACGT\t2\t+\nchr"2\t0\t4\tNNNN\t4\t+\n')
        df = load_compressibility_table(path)
        assert df["Chromosome"].tolist() == ['"chr1', 'chr"2']
        assert df["Ratio"].tolist() == [2.0, 4.0]

    def test_empty_table(self, tmp_path):
        path = tmp_path / "empty.bed"
        path.write_bytes(b"")
        df = load_compressibility_table(path)
        assert df.empty
        assert list(df.columns) == OUTPUT_COLUMNS


class TestSummaries:

    def test_scan_summary_frame(self, tmp_path):
        summary = _write_table(tmp_path / "scan.bed", OutputFraming.PLAIN)
        df = summary_to_dataframe(summary)
        assert df["Chromosome"].tolist() == ["chr1", "chr2"]
        assert df["Windows"].tolist() == [4, 2]
        assert df["Discarded_Residues"].tolist() == [10, 0]
        assert (df["Min_Ratio"] <= df["Max_Ratio"]).all()

    def test_summarize_table(self, table_path):
        df = load_compressibility_table(table_path)
        out = summarize_table(df, threshold=0.0)
        assert out["Chromosome"].tolist() == ["chr1", "chr2"]
        assert out["Windows"].tolist() == [4, 2]
        assert out["Low_Complexity_Windows"].tolist() == [4, 2]
        chr1 = out.iloc[0]
        assert chr1["Min_Ratio"] <= chr1["Median_Ratio"] <= chr1["Max_Ratio"]

    def test_summarize_empty(self):
        out = summarize_table(pd.DataFrame(columns=OUTPUT_COLUMNS))
        assert out.empty

    def test_report_without_table(self, tmp_path):
        summary = _write_table(tmp_path / "scan.bed", OutputFraming.PLAIN)
        report = chromosome_report(summary)
        assert list(report.columns) == list(summary_to_dataframe(summary).columns)

    def test_report_with_table(self, table_path, tmp_path):
        summary = _write_table(tmp_path / "again.bed", OutputFraming.PLAIN)
        report = chromosome_report(summary, load_compressibility_table(table_path),
                                   threshold=0.0)
        assert report["Chromosome"].tolist() == ["chr1", "chr2"]
        assert report["Windows"].tolist() == [4, 2]
        assert report["Low_Complexity_Windows"].tolist() == [4, 2]
        assert report["Median_Ratio"].notna().all()

    def test_report_keeps_chromosomes_without_windows(self):
        summary = scan_fasta(io.StringIO(">chr1\n" + "A" * 40 + "\n>short\nACGT\n"),
                             io.BytesIO(), ScanConfig(window_length=20),
                             events=lambda *a: None)
        table = pd.DataFrame({
            "Chromosome": ["chr1", "chr1"], "Start": [0, 20], "End": [20, 40],
            "Sequence": ["A" * 20] * 2, "Ratio": [5.0, 5.0], "Strand": ["+"] * 2,
        })
        report = chromosome_report(summary, table, threshold=2.0)
        assert report["Chromosome"].tolist() == ["chr1", "short"]
        assert report["Low_Complexity_Windows"].tolist() == [2, 0]
        assert pd.isna(report["Median_Ratio"].iloc[1])


class TestLowComplexityRegions:

    def _df(self):
        return pd.DataFrame({
            "Chromosome": ["chr1", "chr1", "chr1", "chr1", "chr2"],
            "Start": [0, 10, 20, 30, 0],
            "End": [10, 20, 30, 40, 10],
            "Sequence": ["A" * 10] * 5,
            "Ratio": [3.0, 2.5, 1.0, 4.0, 5.0],
            "Strand": ["+"] * 5,
        })

    def test_adjacent_windows_merged(self):
        regions = low_complexity_regions(self._df(), threshold=2.0)
        assert regions[["Chromosome", "Start", "End", "Windows"]].values.tolist() == [
            ["chr1", 0, 20, 2],
            ["chr1", 30, 40, 1],
            ["chr2", 0, 10, 1],
        ]
        assert regions["Max_Ratio"].tolist() == [3.0, 4.0, 5.0]

    def test_no_hits(self):
        regions = low_complexity_regions(self._df(), threshold=100.0)
        assert regions.empty


class TestProfilePlot:

    def test_plot_written(self, table_path, tmp_path):
        df = load_compressibility_table(table_path)
        out = plot_compressibility_profile(df, str(tmp_path / "profile.png"), threshold=2.0)
        assert os.path.getsize(out) > 0

    def test_plot_empty_table(self, tmp_path):
        out = plot_compressibility_profile(pd.DataFrame(columns=OUTPUT_COLUMNS),
                                           str(tmp_path / "empty.png"))
        assert os.path.exists(out)
