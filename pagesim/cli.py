"""Command line entry point: run the policies and report the results"""

import argparse
import random
import sys
from typing import List, Optional

from pagesim.analysis import find_belady_anomalies, generate_reference_string, plot_fault_curves
from pagesim.errors import ConfigurationError, SimulationError
from pagesim.frametable import validate_frame_count
from pagesim.reporting import (DEFAULT_INPUT, DEFAULT_SUMMARY, print_comparison, print_input,
                               print_trace, read_input, write_summary)
from pagesim.replacement import POLICY_ORDER, Policy, simulate_all

# Defaults for generated reference strings
RANDOM_FRAMES = 3
RANDOM_PAGE_RANGE = 8
LOCALITY_FACTOR = 0.6


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pagesim",
        description="Simulate FIFO, OPT, LRU and Clock page replacement over a reference string.")
    parser.add_argument('input', nargs='?', default=DEFAULT_INPUT,
                        help="file holding: frames n p1 .. pn (default: %(default)s)")
    parser.add_argument('-o', '--output', default=DEFAULT_SUMMARY,
                        help="summary file to write (default: %(default)s)")
    parser.add_argument('-f', '--frames', type=int,
                        help="override the frame count from the input")
    parser.add_argument('-a', '--policy', action='append', type=str.upper,
                        choices=[p.value for p in Policy] + ['OPTIMAL'],
                        help="run only this policy (repeatable)")
    parser.add_argument('-q', '--quiet', action='store_true',
                        help="print fault totals without per-step traces")
    parser.add_argument('--plot', metavar='PATH',
                        help="save a faults-vs-frames chart to PATH")
    parser.add_argument('--max-frames', type=int, default=7,
                        help="largest frame count for --plot and the anomaly check (default: %(default)s)")
    parser.add_argument('--random', type=int, metavar='N',
                        help="generate N references instead of reading the input file")
    parser.add_argument('--seed', type=int, help="seed for --random")
    return parser


def run(args: argparse.Namespace) -> int:
    if args.random is not None:
        if args.random < 0:
            raise ConfigurationError(f"--random must not be negative, got {args.random}")
        rng = random.Random(args.seed)
        frames = validate_frame_count(RANDOM_FRAMES if args.frames is None else args.frames)
        reference_string = generate_reference_string(args.random, RANDOM_PAGE_RANGE,
                                                     LOCALITY_FACTOR, rng)
    else:
        # The --frames override stands in for the file's frame count
        frames, reference_string = read_input(args.input, args.frames)
    policies = [Policy.parse(p) for p in args.policy] if args.policy else list(POLICY_ORDER)

    print_input(frames, reference_string)
    results = simulate_all(frames, reference_string, policies)
    for result in results.values():
        print_trace(result, verbose=not args.quiet)
    print_comparison(results)

    write_summary(args.output, frames, reference_string, results)
    print(f"\nResults written to {args.output}")

    if args.plot:
        max_frames = validate_frame_count(args.max_frames)
        anomalies = find_belady_anomalies(reference_string, max_frames)
        if anomalies:
            print(f"Belady's anomaly (FIFO) at frame counts: {anomalies}")
        plot_fault_curves(reference_string, max_frames, args.plot, policies)
        print(f"Page faults plotted and saved as '{args.plot}'.")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return run(args)
    except (SimulationError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
