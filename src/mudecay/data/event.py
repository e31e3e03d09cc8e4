"""Module with the detector readout data structures."""

from dataclasses import dataclass, field
from typing import List, Tuple

__all__ = ["TimeSample", "Event"]


@dataclass(frozen=True)
class TimeSample:
    """One merged time bin of a detector readout.

    Attributes
    ----------
    hit_mask : int
        Bitfield in which bit `i` is set if detector layer `i` fired
    hit_time : int
        Time of the readout in ns
    """

    hit_mask: int
    hit_time: int

    def fired(self, layer):
        """Whether a given layer registered a discharge in this sample.

        Parameters
        ----------
        layer : int
            Detector layer index

        Returns
        -------
        bool
            `True` if the layer bit is set in the hit mask
        """
        return bool(self.hit_mask & (1 << layer))

    def layers(self, num_layers):
        """List of layers which fired in this sample, top to bottom.

        Parameters
        ----------
        num_layers : int
            Number of detector layers

        Returns
        -------
        List[int]
            Fired layer indexes
        """
        return [l for l in range(num_layers) if self.fired(l)]


@dataclass(eq=False)
class Event:
    """Time-ordered sequence of time samples which make up one event.

    Attributes
    ----------
    samples : List[TimeSample]
        Time samples, ordered by readout time. There is at least one.
    index : int
        Position of the event in its input stream (0-based)
    """

    samples: List[TimeSample] = field(default_factory=list)
    index: int = -1

    def __post_init__(self):
        """Checks that the event is not empty."""
        if not len(self.samples):
            raise ValueError("An event must contain at least one time sample.")

    def __len__(self):
        """Number of time samples in the event."""
        return len(self.samples)

    def __iter__(self):
        """Iterates over the time samples."""
        return iter(self.samples)

    def __getitem__(self, idx):
        """Fetches one time sample."""
        return self.samples[idx]

    def __eq__(self, other):
        """Two events are equal if they hold the same samples."""
        if not isinstance(other, Event):
            return NotImplemented

        return self.samples == other.samples and self.index == other.index

    @property
    def num_samples(self):
        """Number of time samples in the event."""
        return len(self.samples)

    @property
    def first(self):
        """Time sample in which the incoming muon is observed."""
        return self.samples[0]

    def delay(self, idx):
        """Time elapsed between the first sample and a given sample.

        Parameters
        ----------
        idx : int
            Index of the time sample

        Returns
        -------
        int
            Delay in ns
        """
        return self.samples[idx].hit_time - self.samples[0].hit_time

    @classmethod
    def from_pairs(cls, pairs: List[Tuple[int, int]], index=-1):
        """Builds an event from a list of (hit_mask, hit_time) pairs.

        Parameters
        ----------
        pairs : List[Tuple[int, int]]
            List of (hit_mask, hit_time) pairs
        index : int, default -1
            Position of the event in its input stream

        Returns
        -------
        Event
            Event object
        """
        return cls([TimeSample(int(m), int(t)) for m, t in pairs], index)
