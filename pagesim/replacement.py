"""
Page Replacement Engines
Implements FIFO, Optimal, LRU and Clock (second chance) replacement over a frame table
"""

from collections import deque
from collections.abc import Hashable
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from pagesim.errors import ConfigurationError
from pagesim.frametable import EMPTY, FrameTable, Slot, slot_page, validate_frame_count


class Policy(Enum):
    """Available page replacement algorithms"""
    FIFO = "FIFO"
    OPT = "OPT"
    LRU = "LRU"
    CLOCK = "CLOCK"

    @classmethod
    def parse(cls, value) -> "Policy":
        """Accept a Policy or its name (case-insensitive, OPTIMAL means OPT)"""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            name = value.strip().upper()
            if name == "OPTIMAL":
                name = "OPT"
            if name in cls.__members__:
                return cls[name]
        raise ConfigurationError(f"Algorithm '{value}' not found")


# Order in which simulate_all runs and reports the policies
POLICY_ORDER = (Policy.FIFO, Policy.OPT, Policy.LRU, Policy.CLOCK)


@dataclass(frozen=True)
class StepRecord:
    """Outcome of one reference"""
    step: int
    page: Hashable
    frames: Tuple[Slot, ...]
    hit: bool
    evicted: Optional[Hashable] = None

    @property
    def fault(self) -> bool:
        return not self.hit

    @property
    def pages(self) -> List[Optional[Hashable]]:
        """Frame contents with None marking empty slots"""
        return [slot_page(slot) for slot in self.frames]


@dataclass(frozen=True)
class SimulationResult:
    """Trace and fault count of one policy run"""
    policy: Policy
    frame_count: int
    trace: Tuple[StepRecord, ...]
    fault_count: int

    @property
    def hit_count(self) -> int:
        return len(self.trace) - self.fault_count

    @property
    def fault_rate(self) -> float:
        return self.fault_count / len(self.trace) if self.trace else 0.0


class PageReplacementAlgorithm:
    """Base class for page replacement algorithms"""

    policy: Policy

    def __init__(self, num_frames: int):
        self.table = FrameTable(num_frames)
        self.num_frames = self.table.num_frames
        self.page_faults = 0

    @property
    def frames(self) -> List[Optional[Hashable]]:
        return self.table.pages()

    def access_page(self, page: Hashable) -> Tuple[bool, Optional[Hashable]]:
        """
        Access a page, return (fault_occurred, evicted_page)
        """
        raise NotImplementedError


class FIFOPageReplacement(PageReplacementAlgorithm):
    """First-In-First-Out page replacement"""

    policy = Policy.FIFO

    def __init__(self, num_frames: int):
        super().__init__(num_frames)
        self.queue = deque()  # resident pages, oldest arrival first

    def access_page(self, page: Hashable) -> Tuple[bool, Optional[Hashable]]:
        # Check if page is already in memory
        if self.table.contains(page):
            return False, None

        # Page fault occurred
        self.page_faults += 1
        evicted_page = None

        frame_idx = self.table.first_empty_index()
        if frame_idx is None:
            # Replace oldest page
            victim = self.queue.popleft()
            frame_idx = self.table.index_of(victim)
            evicted_page = self.table.replace(frame_idx, page)
        else:
            self.table.replace(frame_idx, page)
        self.queue.append(page)

        return True, evicted_page


class OptimalPageReplacement(PageReplacementAlgorithm):
    """Optimal page replacement (requires future knowledge)"""

    policy = Policy.OPT

    def __init__(self, num_frames: int, reference_string: Sequence[Hashable]):
        super().__init__(num_frames)
        self.reference_string = tuple(reference_string)
        self.current_pos = 0

    def next_use(self, page: Hashable, position: int) -> Union[int, float]:
        """Index of the next reference to page after position, inf if none"""
        for j in range(position + 1, len(self.reference_string)):
            if self.reference_string[j] == page:
                return j
        return float('inf')

    def access_page(self, page: Hashable) -> Tuple[bool, Optional[Hashable]]:
        position = self.current_pos
        self.current_pos += 1

        if self.table.contains(page):
            return False, None

        self.page_faults += 1
        evicted_page = None

        frame_idx = self.table.first_empty_index()
        if frame_idx is None:
            # Find page that will be used farthest in the future
            farthest = -1
            for i in range(self.num_frames):
                next_use = self.next_use(self.table.page_at(i), position)
                if next_use == float('inf'):
                    frame_idx = i
                    break
                if next_use > farthest:
                    farthest = next_use
                    frame_idx = i
            evicted_page = self.table.replace(frame_idx, page)
        else:
            self.table.replace(frame_idx, page)

        return True, evicted_page


class LRUPageReplacement(PageReplacementAlgorithm):
    """Least Recently Used page replacement"""

    policy = Policy.LRU

    def __init__(self, num_frames: int):
        super().__init__(num_frames)
        self.last_used: Dict[Hashable, int] = {}
        self.current_time = 0

    def access_page(self, page: Hashable) -> Tuple[bool, Optional[Hashable]]:
        self.current_time += 1

        if self.table.contains(page):
            self.last_used[page] = self.current_time
            return False, None

        self.page_faults += 1
        evicted_page = None

        frame_idx = self.table.first_empty_index()
        if frame_idx is None:
            # Pages without a timestamp count as never used
            oldest_time = float('inf')
            for i in range(self.num_frames):
                used = self.last_used.get(self.table.page_at(i), 0)
                if used < oldest_time:
                    oldest_time = used
                    frame_idx = i
            evicted_page = self.table.replace(frame_idx, page)
            self.last_used.pop(evicted_page, None)
        else:
            self.table.replace(frame_idx, page)

        self.last_used[page] = self.current_time
        return True, evicted_page


class ClockPageReplacement(PageReplacementAlgorithm):
    """Clock (second chance) page replacement"""

    policy = Policy.CLOCK

    def __init__(self, num_frames: int):
        super().__init__(num_frames)
        self.use_bits = [0] * self.num_frames
        self.pointer = 0
        # Slots visited while resolving the most recent fault
        self.last_sweep = 0
        self.max_sweep = 0

    def _advance(self):
        self.pointer = (self.pointer + 1) % self.num_frames

    def access_page(self, page: Hashable) -> Tuple[bool, Optional[Hashable]]:
        frame_idx = self.table.index_of(page)
        if frame_idx is not None:
            self.use_bits[frame_idx] = 1
            return False, None

        self.page_faults += 1
        evicted_page = None
        self.last_sweep = 0

        while True:
            self.last_sweep += 1
            if self.table[self.pointer] is EMPTY or self.use_bits[self.pointer] == 0:
                evicted_page = self.table.replace(self.pointer, page)
                self.use_bits[self.pointer] = 1
                self._advance()
                break
            # Second chance
            self.use_bits[self.pointer] = 0
            self._advance()

        self.max_sweep = max(self.max_sweep, self.last_sweep)
        return True, evicted_page


def create_algorithm(policy, num_frames: int,
                     reference_string: Sequence[Hashable] = ()) -> PageReplacementAlgorithm:
    """Build a fresh engine; OPT needs the whole reference string up front"""
    policy = Policy.parse(policy)
    if policy is Policy.FIFO:
        return FIFOPageReplacement(num_frames)
    if policy is Policy.OPT:
        return OptimalPageReplacement(num_frames, reference_string)
    if policy is Policy.LRU:
        return LRUPageReplacement(num_frames)
    return ClockPageReplacement(num_frames)


def simulate(policy, frame_count: int, reference_sequence: Iterable[Hashable]) -> SimulationResult:
    """Run one policy over a reference sequence and collect the step trace"""
    policy = Policy.parse(policy)
    frame_count = validate_frame_count(frame_count)
    reference_string = tuple(reference_sequence)

    algorithm = create_algorithm(policy, frame_count, reference_string)
    trace = []
    for step, page in enumerate(reference_string, start=1):
        fault_occurred, evicted_page = algorithm.access_page(page)
        trace.append(StepRecord(step=step,
                                page=page,
                                frames=algorithm.table.snapshot(),
                                hit=not fault_occurred,
                                evicted=evicted_page))

    return SimulationResult(policy=policy,
                            frame_count=frame_count,
                            trace=tuple(trace),
                            fault_count=algorithm.page_faults)


def simulate_all(frame_count: int, reference_sequence: Iterable[Hashable],
                 policies: Iterable = POLICY_ORDER) -> Dict[Policy, SimulationResult]:
    """Run every policy on its own engine over the same sequence"""
    policies = [Policy.parse(p) for p in policies]
    frame_count = validate_frame_count(frame_count)
    reference_string = tuple(reference_sequence)
    return {policy: simulate(policy, frame_count, reference_string) for policy in policies}
