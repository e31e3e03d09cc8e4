"""Wall and CPU time measurements of the processing steps."""

import time
from dataclasses import dataclass

__all__ = ["Time", "Stopwatch", "StopwatchManager"]


@dataclass
class Time:
    """Simple dataclass to hold time information.

    Attributes
    ----------
    wall : float
         Wall time in seconds
    cpu : float
         CPU time in seconds
    """

    wall: float = 0.0
    cpu: float = 0.0

    def __add__(self, other):
        return Time(self.wall + other.wall, self.cpu + other.cpu)

    def __sub__(self, other):
        return Time(self.wall - other.wall, self.cpu - other.cpu)

    @classmethod
    def current(cls):
        """Returns the current wall and CPU times."""
        return cls(time.time(), time.process_time())


class Stopwatch:
    """Accumulates the time spent between successive starts and stops."""

    def __init__(self):
        """Initialize a stopped watch with no recorded time."""
        self.begin = None
        self.total = Time()
        self.count = 0

    @property
    def running(self):
        """Whether the watch is currently running."""
        return self.begin is not None

    def start(self):
        """Starts the watch."""
        if self.running:
            raise ValueError("Cannot restart a watch that has not been stopped.")
        self.begin = Time.current()

    def stop(self):
        """Stops the watch and accumulates the elapsed time.

        Returns
        -------
        Time
            Time elapsed since the last start
        """
        if not self.running:
            raise ValueError("Cannot stop a watch that has not been started.")

        elapsed = Time.current() - self.begin
        self.total = self.total + elapsed
        self.count += 1
        self.begin = None

        return elapsed


class StopwatchManager:
    """Organizes a set of named stopwatches."""

    def __init__(self):
        self.watches = {}

    def __getitem__(self, key):
        return self.watches[key]

    def keys(self):
        """List of initialized stopwatch tags."""
        return self.watches.keys()

    def initialize(self, key):
        """Creates (or resets) a stopwatch.

        Parameters
        ----------
        key : str
            Stopwatch tag
        """
        self.watches[key] = Stopwatch()

    def start(self, key):
        """Starts a stopwatch."""
        self.watches[key].start()

    def stop(self, key):
        """Stops a stopwatch, returns the elapsed time."""
        return self.watches[key].stop()

    def total(self, key):
        """Returns the time accumulated by a stopwatch."""
        return self.watches[key].total
