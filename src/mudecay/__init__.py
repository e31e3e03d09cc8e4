"""Data reduction of the muon lifetime experiment.

Reads the time-sampled hit patterns of a stack of scintillator layers,
classifies each event (incoming muon, upward/downward decay, afterpulses),
books the observations in histograms and fits the resulting decay time
spectra.

**Main modules:**
- `data`: event and classification data structures
- `classify`: penetration, decay and afterpulse searches
- `hist`: histograms and observation sinks
- `io`: event readers, histogram and CSV writers
- `fit`: lifetime, capture and precession fits
- `driver`: configuration-driven processing loop
"""

from .version import __version__

__all__ = ["__version__"]
