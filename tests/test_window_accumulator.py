"""Tests for fixed-length, non-overlapping window extraction.

Validates that:
1. Every window has exactly window_length residues.
2. Window indices start at 0 and increase by 1, resetting per record.
3. A long line yields several windows in one append.
4. Residues carry over between lines.
5. Partial tails are discarded at a new header and at end of input.
6. Non-positive window lengths are rejected.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from Compressibility.errors import InvalidConfigurationError
from Compressibility.window_accumulator import Window, WindowAccumulator


def _seq(length: int) -> str:
    return ("ACGT" * (length // 4 + 1))[:length]


class TestWindowLength:
    """Configuration checks happen at construction."""

    @pytest.mark.parametrize("bad", [0, -1, -50])
    def test_non_positive_rejected(self, bad):
        with pytest.raises(InvalidConfigurationError):
            WindowAccumulator(bad)

    @pytest.mark.parametrize("bad", [2.5, "4", None, True])
    def test_non_integer_rejected(self, bad):
        with pytest.raises(InvalidConfigurationError):
            WindowAccumulator(bad)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            WindowAccumulator(0)


class TestWindowExtraction:
    """append() extraction semantics."""

    def test_two_windows_from_one_line(self):
        acc = WindowAccumulator(4)
        acc.begin_record("chr1")
        windows = list(acc.append("AAAACCCC"))
        assert [w.sequence for w in windows] == ["AAAA", "CCCC"]
        assert [(w.start, w.end) for w in windows] == [(0, 4), (4, 8)]
        assert acc.pending == 0

    def test_short_append_yields_nothing(self):
        acc = WindowAccumulator(10)
        acc.begin_record("chr1")
        assert list(acc.append("ACGT")) == []
        assert acc.pending == 4

    def test_residues_carry_across_lines(self):
        acc = WindowAccumulator(4)
        acc.begin_record("chr1")
        first = list(acc.append("AAAAC"))
        second = list(acc.append("CCCGG"))
        assert [w.sequence for w in first] == ["AAAA"]
        assert [w.sequence for w in second] == ["CCCC"]
        assert second[0].index == 1
        assert acc.pending == 2

    def test_very_long_line_yields_many_windows(self):
        acc = WindowAccumulator(50)
        acc.begin_record("chr1")
        windows = list(acc.append(_seq(50 * 1_000 + 7)))
        assert len(windows) == 1_000
        assert [w.index for w in windows] == list(range(1_000))
        assert all(w.length == 50 for w in windows)
        assert all(w.end - w.start == 50 for w in windows)
        assert acc.pending == 7

    def test_windows_concatenate_to_input(self):
        acc = WindowAccumulator(7)
        acc.begin_record("chr1")
        seq = _seq(70)
        windows = []
        for i in range(0, 70, 9):
            windows.extend(acc.append(seq[i:i + 9]))
        assert "".join(w.sequence for w in windows) == seq

    def test_single_line_chromosome_is_extracted_lazily(self):
        acc = WindowAccumulator(50)
        acc.begin_record("chr1")
        windows = acc.append(_seq(50 * 10_000 + 3))
        assert not isinstance(windows, list)
        first = next(windows)
        assert (first.index, first.start, first.end) == (0, 0, 50)
        assert acc.window_index == 1
        assert acc.pending == 50 * 9_999 + 3
        assert sum(1 for _ in windows) == 9_999
        assert acc.pending == 3

    def test_tail_kept_after_lazy_extraction(self):
        acc = WindowAccumulator(4)
        acc.begin_record("chr1")
        assert [w.sequence for w in acc.append("AAAACCCCGG")] == ["AAAA", "CCCC"]
        assert [w.sequence for w in acc.append("TT")] == ["GGTT"]
        assert acc.window_index == 3
        assert acc.pending == 0

    def test_partially_consumed_append_keeps_state(self):
        acc = WindowAccumulator(4)
        acc.begin_record("chr1")
        windows = acc.append("AAAACCCCG")
        next(windows)
        rest = list(acc.append("GGG"))
        assert [(w.index, w.sequence) for w in rest] == [(1, "CCCC"), (2, "GGGG")]

    def test_append_before_record_is_a_bug(self):
        acc = WindowAccumulator(4)
        with pytest.raises(RuntimeError):
            acc.append("ACGT")


class TestRecordBoundaries:
    """Tails are dropped, never emitted as short windows."""

    def test_new_record_discards_tail_and_resets_index(self):
        acc = WindowAccumulator(4)
        acc.begin_record("chr1")
        list(acc.append("AAAAA"))
        discarded = acc.begin_record("chr2")
        assert discarded == 1
        assert acc.window_index == 0
        windows = list(acc.append("GGGG"))
        assert windows == [Window("chr2", 0, "GGGG")]
        assert (windows[0].start, windows[0].end) == (0, 4)

    def test_exact_multiple_leaves_nothing(self):
        acc = WindowAccumulator(5)
        acc.begin_record("chr1")
        windows = list(acc.append(_seq(25)))
        assert len(windows) == 5
        assert acc.finish() == 0

    def test_finish_discards_tail(self):
        acc = WindowAccumulator(5)
        acc.begin_record("chr1")
        list(acc.append(_seq(13)))
        assert acc.finish() == 3
        assert acc.pending == 0

    def test_first_record_discards_nothing(self):
        acc = WindowAccumulator(5)
        assert acc.begin_record("chr1") == 0
