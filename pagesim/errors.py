"""Exceptions raised by the page replacement simulator"""


class SimulationError(Exception):
    """Base class for simulator errors"""


class ConfigurationError(SimulationError, ValueError):
    """Invalid frame count or unknown policy, raised before any step runs"""


class InputUnavailable(SimulationError, OSError):
    """Input file is missing, unreadable or malformed"""
