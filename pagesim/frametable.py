"""
Frame table shared by all page replacement engines.

A frame table is a fixed row of slots. Each slot is either EMPTY or
holds Occupied(page). Emptiness is its own state so that any page
identifier, including -1 or 0, can be resident.
"""

import operator
from collections.abc import Hashable
from typing import NamedTuple, Optional, Tuple, Union

from pagesim.errors import ConfigurationError


class _Empty:
    """Marker for a slot with no resident page"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "EMPTY"

    def __reduce__(self):
        return (_Empty, ())


EMPTY = _Empty()


class Occupied(NamedTuple):
    """Slot holding a resident page"""
    page: Hashable


Slot = Union[_Empty, Occupied]


def slot_page(slot: Slot) -> Optional[Hashable]:
    """Page held by a slot, None for an empty slot"""
    return None if slot is EMPTY else slot.page


def validate_frame_count(frame_count) -> int:
    """Reject anything that is not an integer >= 1, return it as a plain int"""
    if isinstance(frame_count, bool):
        raise ConfigurationError(f"frame count must be an integer, got {frame_count!r}")
    try:
        count = operator.index(frame_count)
    except TypeError:
        raise ConfigurationError(f"frame count must be an integer, got {frame_count!r}") from None
    if count < 1:
        raise ConfigurationError(f"frame count must be at least 1, got {count}")
    return count


class FrameTable:
    """Fixed-capacity ordered collection of frame slots"""

    def __init__(self, num_frames: int):
        self.num_frames = validate_frame_count(num_frames)
        self.slots = [EMPTY] * self.num_frames

    def __len__(self) -> int:
        return self.num_frames

    def __getitem__(self, index: int) -> Slot:
        return self.slots[index]

    def __repr__(self) -> str:
        return f"FrameTable({self.pages()})"

    def contains(self, page: Hashable) -> bool:
        return self.index_of(page) is not None

    def index_of(self, page: Hashable) -> Optional[int]:
        """Slot index holding page, or None if the page is not resident"""
        for i, slot in enumerate(self.slots):
            if slot is not EMPTY and slot.page == page:
                return i
        return None

    def first_empty_index(self) -> Optional[int]:
        for i, slot in enumerate(self.slots):
            if slot is EMPTY:
                return i
        return None

    def is_full(self) -> bool:
        return self.first_empty_index() is None

    def page_at(self, index: int) -> Optional[Hashable]:
        """Page stored in a slot, None for an empty slot"""
        return slot_page(self.slots[index])

    def replace(self, index: int, page: Hashable) -> Optional[Hashable]:
        """Put page into a slot and return the page it displaced (if any)"""
        previous = self.page_at(index)
        self.slots[index] = Occupied(page)
        return previous

    def resident_pages(self) -> frozenset:
        return frozenset(slot.page for slot in self.slots if slot is not EMPTY)

    def pages(self) -> list:
        """Slot contents as plain values, None for empty slots"""
        return [slot_page(slot) for slot in self.slots]

    def snapshot(self) -> Tuple[Slot, ...]:
        return tuple(self.slots)
