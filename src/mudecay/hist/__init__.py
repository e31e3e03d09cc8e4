"""Histogram booking of the classifier observations.

- `histogram`: fixed-width one-dimensional histogram with error propagation
- `sink`: observation sinks (histograms, in-memory log, null)
"""

from .histogram import Histogram1D
from .sink import HistogramSink, NullSink, ObservationLog, ObservationSink

__all__ = [
    "Histogram1D",
    "HistogramSink",
    "NullSink",
    "ObservationLog",
    "ObservationSink",
]
