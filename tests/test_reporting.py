"""Tests for input parsing, console traces and the summary file."""

import pytest

from pagesim.errors import ConfigurationError, InputUnavailable
from pagesim.frametable import EMPTY, Occupied
from pagesim.replacement import Policy, StepRecord, simulate, simulate_all
from pagesim.reporting import (format_step, format_summary, parse_input, print_comparison,
                               print_input, print_trace, read_input, write_summary)


class TestParseInput:
    """The input holds: frames n p1 .. pn."""

    def test_textbook_input(self) -> None:
        text = "3\n13\n7 0 1 2 0 3 0 4 2 3 0 3 2\n"
        frames, sequence = parse_input(text)
        assert frames == 3
        assert sequence == [7, 0, 1, 2, 0, 3, 0, 4, 2, 3, 0, 3, 2]

    def test_zero_references(self) -> None:
        assert parse_input("3 0") == (3, [])

    def test_ignores_trailing_tokens(self) -> None:
        assert parse_input("2 2 5 6 7 8") == (2, [5, 6])

    def test_frames_argument_replaces_header(self) -> None:
        assert parse_input("0 3 1 2 3", frames=2) == (2, [1, 2, 3])

    def test_frames_argument_is_validated(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_input("3 2 1 2", frames=0)

    def test_bad_frame_count_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_input("0 2 1 2")

    @pytest.mark.parametrize("text", ["", "3", "3 -1", "3 4 1 2", "3 x 1", "three 1 1"])
    def test_malformed(self, text) -> None:
        with pytest.raises(InputUnavailable):
            parse_input(text)


class TestReadInput:
    """Reading from disk."""

    def test_reads_file(self, tmp_path) -> None:
        path = tmp_path / "input.txt"
        path.write_text("4 5\n1 2 3 4 1\n")
        assert read_input(str(path)) == (4, [1, 2, 3, 4, 1])

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(InputUnavailable) as excinfo:
            read_input(str(tmp_path / "missing.txt"))
        assert isinstance(excinfo.value, OSError)
        assert "missing.txt" in str(excinfo.value)


class TestTraceOutput:
    """Per-step lines and totals."""

    def test_format_fault_step(self) -> None:
        record = StepRecord(step=1, page=7, frames=(Occupied(7), EMPTY, EMPTY), hit=False)
        assert format_step(record) == "Step  1: ref= 7 |  7  .  .   (FAULT)"

    def test_format_hit_step(self) -> None:
        record = StepRecord(step=12, page=3, frames=(Occupied(0), Occupied(2), Occupied(3)), hit=True)
        assert format_step(record) == "Step 12: ref= 3 |  0  2  3   (HIT)"

    def test_print_trace(self, capsys, textbook) -> None:
        print_trace(simulate("FIFO", *textbook))
        out = capsys.readouterr().out
        assert out.startswith("--- FIFO Simulation ---\n")
        assert "Step 13: ref= 2 |  0  2  3   (HIT)" in out
        assert "Total page faults (FIFO): 10" in out

    def test_print_trace_quiet(self, capsys, textbook) -> None:
        print_trace(simulate("OPT", *textbook), verbose=False)
        out = capsys.readouterr().out
        assert "Step" not in out
        assert "Total page faults (OPT): 7" in out

    def test_print_input(self, capsys) -> None:
        print_input(3, [7, 0, 1])
        out = capsys.readouterr().out
        assert "Frames              : 3" in out
        assert "References          : 3" in out
        assert "7  0  1" in out

    def test_print_comparison(self, capsys, textbook) -> None:
        print_comparison(simulate_all(*textbook))
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "=== Algorithm Comparison Summary ==="
        assert lines[3].split() == ["FIFO", "10", "3", "0.769"]
        assert lines[5].split() == ["LRU", "9", "4", "0.692"]


class TestSummary:
    """Summary file layout."""

    def test_format_summary(self, textbook) -> None:
        frames, sequence = textbook
        text = format_summary(frames, sequence, simulate_all(frames, sequence))
        assert text == (
            "Frames: 3\n"
            "References: 7 0 1 2 0 3 0 4 2 3 0 3 2 \n"
            "FIFO faults: 10\n"
            "OPT faults: 7\n"
            "LRU faults: 9\n"
            "CLOCK faults: 9\n"
        )

    def test_write_summary(self, tmp_path) -> None:
        path = tmp_path / "results.txt"
        results = simulate_all(2, [1, 2, 1], policies=[Policy.LRU])
        write_summary(str(path), 2, [1, 2, 1], results)
        assert path.read_text() == "Frames: 2\nReferences: 1 2 1 \nLRU faults: 2\n"
