"""
Fault-count analysis across frame counts: reference string generation,
fault curves, Belady's anomaly detection and plotting.
"""

import random
from typing import Iterable, List, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from pagesim.frametable import validate_frame_count
from pagesim.replacement import POLICY_ORDER, Policy, simulate

# Reference string that shows Belady's anomaly under FIFO (9 faults at 3 frames, 10 at 4)
BELADY_REFERENCE_STRING = (1, 2, 3, 4, 1, 2, 5, 1, 2, 3, 4, 5)


def generate_reference_string(length: int, page_range: int, locality_factor: float = 0.7,
                              rng: Optional[random.Random] = None) -> List[int]:
    """Generate a reference string with some locality of reference"""
    if length < 0:
        raise ValueError(f"length must not be negative, got {length}")
    if page_range < 1:
        raise ValueError(f"page_range must be at least 1, got {page_range}")
    rng = rng or random.Random()

    reference_string = []
    current_page = rng.randint(0, page_range - 1)

    for _ in range(length):
        if rng.random() < locality_factor:
            # Stay in locality (within +/-2 pages)
            offset = rng.choice([-2, -1, 0, 1, 2])
            current_page = max(0, min(page_range - 1, current_page + offset))
        else:
            # Jump to random page
            current_page = rng.randint(0, page_range - 1)
        reference_string.append(current_page)

    return reference_string


def fault_curve(policy, reference_string: Sequence, frame_counts: Iterable[int]) -> np.ndarray:
    """Fault count of one policy for each frame count"""
    reference_string = tuple(reference_string)
    return np.array([simulate(policy, validate_frame_count(f), reference_string).fault_count
                     for f in frame_counts], dtype=int)


def find_belady_anomalies(reference_string: Sequence, max_frames: int,
                          policy=Policy.FIFO) -> List[int]:
    """Frame counts f where f frames fault more often than f - 1 frames"""
    max_frames = validate_frame_count(max_frames)
    frame_range = np.arange(1, max_frames + 1)
    faults = fault_curve(policy, reference_string, frame_range)
    increases = np.flatnonzero(np.diff(faults) > 0)
    return [int(frame_range[i + 1]) for i in increases]


def plot_fault_curves(reference_string: Sequence, max_frames: int, path: str,
                      policies: Iterable = POLICY_ORDER) -> str:
    """Save a faults-vs-frames chart of each policy to path"""
    validate_frame_count(max_frames)
    frame_range = list(range(1, max_frames + 1))
    markers = ['o', 's', 'x', '^']

    fig, ax = plt.subplots()
    for i, policy in enumerate(policies):
        policy = Policy.parse(policy)
        faults = fault_curve(policy, reference_string, frame_range)
        ax.plot(frame_range, faults, label=policy.value, marker=markers[i % len(markers)])

    ax.set_xlabel('Number of Frames')
    ax.set_ylabel('Page Faults')
    ax.set_title('Page Faults vs Number of Frames')
    ax.legend()
    ax.grid(True)
    fig.savefig(path)
    plt.close(fig)
    return path
