"""Module with the data structures produced by the event classifier."""

from dataclasses import dataclass, field
from typing import List

__all__ = ["EventFlags", "Match", "Classification"]


@dataclass
class EventFlags:
    """Set of independent category memberships of one event.

    Flags are only ever switched on while an event is classified.

    Attributes
    ----------
    decay_up : bool
        A decay product was registered in the muon stopping layer
    decay_down : bool
        A decay product was registered below the muon stopping layer
    afterpulse_simple : bool
        An afterpulse was found by the through-going muon heuristic
    afterpulse_improved : bool
        An afterpulse was found by the improved heuristic
    """

    decay_up: bool = False
    decay_down: bool = False
    afterpulse_simple: bool = False
    afterpulse_improved: bool = False

    @property
    def decay(self):
        """Whether any decay (upward or downward) was found."""
        return self.decay_up or self.decay_down

    @property
    def afterpulse(self):
        """Whether any afterpulse (either heuristic) was found."""
        return self.afterpulse_simple or self.afterpulse_improved

    def set(self, category):
        """Switches on one flag.

        Parameters
        ----------
        category : str
            Name of the flag to switch on
        """
        if category not in self.__dataclass_fields__:
            raise KeyError(f"Event flag not recognized: {category}.")

        setattr(self, category, True)

    def as_dict(self):
        """Returns the flags as a dictionary of integers (CSV-friendly)."""
        return {
            key: int(getattr(self, key)) for key in self.__dataclass_fields__
        }


@dataclass(frozen=True)
class Match:
    """One decay or afterpulse candidate found in a time sample.

    Attributes
    ----------
    category : str
        Name of the flag the match belongs to (e.g. 'decay_up')
    sample : int
        Index of the time sample in the event
    layer : int
        Detector layer of the match
    delay : int
        Delay of the time sample w.r.t. the first sample in ns
    """

    category: str
    sample: int
    layer: int
    delay: int


@dataclass
class Classification:
    """Outcome of the classification of one event.

    Attributes
    ----------
    last_muon_layer : int
        Deepest layer reached contiguously from the top by the incoming
        muon, -1 if there is no such track
    flags : EventFlags
        Category memberships accumulated over the time samples
    matches : List[Match]
        Ordered list of decay/afterpulse matches
    num_samples : int
        Number of time samples in the event
    """

    last_muon_layer: int = -1
    flags: EventFlags = field(default_factory=EventFlags)
    matches: List[Match] = field(default_factory=list)
    num_samples: int = 0

    def summary(self):
        """Flat dictionary summary of the classification (one CSV row)."""
        summary = {
            "num_samples": self.num_samples,
            "last_muon_layer": self.last_muon_layer,
            "num_matches": len(self.matches),
        }
        summary.update(**self.flags.as_dict())

        return summary
