"""Event and histogram readers.

- `text`: plain-text event records, one (bin, mask, time) triple per line
- `hdf5`: loaders of the histogram files produced by the analysis
"""

from .hdf5 import read_config, read_histograms
from .text import TextEventReader

__all__ = ["TextEventReader", "read_config", "read_histograms"]
