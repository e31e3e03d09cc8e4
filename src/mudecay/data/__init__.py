"""Data structures shared by the reader, the classifier and the sinks.

- `TimeSample`: one merged detector readout (hit bitmask, hit time)
- `Event`: time-ordered sequence of time samples
- `EventFlags`: independent category memberships of one event
- `Match`: one decay or afterpulse identified in a time sample
- `Classification`: outcome of one classification pass
"""

from .classification import Classification, EventFlags, Match
from .event import Event, TimeSample
