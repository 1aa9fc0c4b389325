"""
Page replacement simulator: FIFO, Optimal, LRU and Clock over a fixed number of frames.
"""

from pagesim.errors import ConfigurationError, InputUnavailable, SimulationError
from pagesim.frametable import EMPTY, FrameTable, Occupied
from pagesim.replacement import Policy, SimulationResult, StepRecord, simulate, simulate_all

__version__ = "0.1.0"
