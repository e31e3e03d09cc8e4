"""Output writers.

- `hdf5`: histogram file writer (and the matching loader)
- `csv`: row-by-row CSV log writer
"""

from .csv import CSVWriter
from .hdf5 import HDF5Writer

__all__ = ["CSVWriter", "HDF5Writer"]
