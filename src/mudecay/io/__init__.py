"""Input/output of the muon decay analysis.

- `read`: event record readers and histogram file loaders
- `write`: histogram file and CSV writers
- `factories`: construction of readers and writers from configuration
"""

from .errors import EmptyEventError, InputFormatError
from .factories import reader_factory, writer_factory
from .read import TextEventReader, read_config, read_histograms
from .write import CSVWriter, HDF5Writer

__all__ = [
    "CSVWriter",
    "EmptyEventError",
    "HDF5Writer",
    "InputFormatError",
    "TextEventReader",
    "read_config",
    "read_histograms",
    "reader_factory",
    "writer_factory",
]
