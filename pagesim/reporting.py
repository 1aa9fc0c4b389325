"""
Input reading, console traces and the results summary file.

The input file holds whitespace-separated integers: the frame count,
the number of references n, then n page numbers.
"""

import sys
from typing import List, Mapping, Optional, Sequence, Tuple

from pagesim.errors import InputUnavailable
from pagesim.frametable import EMPTY, validate_frame_count
from pagesim.replacement import Policy, SimulationResult, StepRecord

DEFAULT_INPUT = "input.txt"
DEFAULT_SUMMARY = "results.txt"
EMPTY_MARK = " . "


def parse_input(text: str, source: str = "<input>",
                frames: Optional[int] = None) -> Tuple[int, List[int]]:
    """Parse 'frames n p1 .. pn' and return (frames, reference_string)

    A frames argument replaces the frame count given in the text.
    """
    tokens = text.split()
    if len(tokens) < 2:
        raise InputUnavailable(f"{source}: expected frame count and reference count")

    try:
        numbers = [int(token) for token in tokens]
    except ValueError as e:
        raise InputUnavailable(f"{source}: {e}") from e

    if frames is None:
        frames = numbers[0]
    frames = validate_frame_count(frames)
    n = numbers[1]
    if n < 0:
        raise InputUnavailable(f"{source}: reference count must not be negative, got {n}")
    if len(numbers) - 2 < n:
        raise InputUnavailable(f"{source}: expected {n} references, found {len(numbers) - 2}")

    return frames, numbers[2:2 + n]


def read_input(path: str = DEFAULT_INPUT, frames: Optional[int] = None) -> Tuple[int, List[int]]:
    """Read the frame count and reference string from a file"""
    try:
        with open(path) as f:
            text = f.read()
    except OSError as e:
        raise InputUnavailable(f"Cannot open {path}: {e.strerror or e}") from e
    return parse_input(text, source=path, frames=frames)


def format_step(record: StepRecord) -> str:
    cells = "".join(EMPTY_MARK if slot is EMPTY else f"{slot.page!s:>2} " for slot in record.frames)
    status = "  (HIT)" if record.hit else "  (FAULT)"
    return f"Step {record.step:2d}: ref={record.page!s:>2} | {cells}{status}"


def print_input(frames: int, reference_string: Sequence[int], out=None):
    """Print the input banner"""
    out = out or sys.stdout
    print("\n=== Input ===", file=out)
    print(f"{'Frames':<20}: {frames}", file=out)
    print(f"{'References':<20}: {len(reference_string)}", file=out)
    print(f"{'Reference string':<20}: " + "".join(f"{page!s:<3}" for page in reference_string), file=out)
    print("=" * 50 + "\n", file=out)


def print_trace(result: SimulationResult, verbose: bool = True, out=None):
    """Print every step of a run followed by its fault total"""
    out = out or sys.stdout
    print(f"--- {result.policy.value} Simulation ---", file=out)
    if verbose:
        for record in result.trace:
            print(format_step(record), file=out)
    print(f"Total page faults ({result.policy.value}): {result.fault_count}\n", file=out)


def print_comparison(results: Mapping[Policy, SimulationResult], out=None):
    """Summary table of all runs"""
    out = out or sys.stdout
    print("=== Algorithm Comparison Summary ===", file=out)
    print(f"{'Algorithm':<10} {'Page Faults':<12} {'Hits':<8} {'Fault Rate':<12}", file=out)
    print("-" * 44, file=out)
    for policy, result in results.items():
        print(f"{policy.value:<10} {result.fault_count:<12} {result.hit_count:<8} "
              f"{result.fault_rate:<12.3f}", file=out)


def format_summary(frames: int, reference_string: Sequence[int],
                   results: Mapping[Policy, SimulationResult]) -> str:
    lines = [f"Frames: {frames}",
             "References: " + "".join(f"{page} " for page in reference_string)]
    for policy, result in results.items():
        lines.append(f"{policy.value} faults: {result.fault_count}")
    return "\n".join(lines) + "\n"


def write_summary(path: str, frames: int, reference_string: Sequence[int],
                  results: Mapping[Policy, SimulationResult]):
    """Write frame count, references and per-policy fault counts to a file"""
    with open(path, "w") as f:
        f.write(format_summary(frames, reference_string, results))
