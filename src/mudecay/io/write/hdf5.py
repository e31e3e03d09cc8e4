"""Histogram file writer based on HDF5."""

import os

import h5py
import yaml

from mudecay.version import __version__

__all__ = ["HDF5Writer"]


class HDF5Writer:
    """Writes a set of histograms to an HDF5 file.

    The file contains:
    - An `info` dataset whose attributes store the package version and the
      YAML dump of the run configuration;
    - A `hists` group with one sub-group per histogram, holding the `counts`,
      `sumw2` and `edges` datasets and the `title`, `underflow`, `overflow`
      and `entries` attributes.

    Typical configuration should look like:

    .. code-block:: yaml

        io:
          writer:
            name: hdf5
            file_name: fp13.h5
    """

    name = "hdf5"
    aliases = ("h5",)

    def __init__(self, file_name="fp13.h5", overwrite=True):
        """Check the output file path.

        Parameters
        ----------
        file_name : str, default 'fp13.h5'
            Name of the output HDF5 file
        overwrite : bool, default True
            If `False`, refuse to replace an existing file
        """
        if not overwrite and os.path.isfile(file_name):
            raise FileExistsError(f"File with name {file_name} already exists.")

        self.file_name = file_name

    def __call__(self, hists, cfg=None):
        """Writes the histograms to file.

        Parameters
        ----------
        hists : Union[HistogramSink, Dict[str, Histogram1D]]
            Histograms to store (or a sink which booked them)
        cfg : dict, optional
            Configuration of the run which produced the histograms
        """
        if hasattr(hists, "histograms"):
            hists = hists.histograms()

        with h5py.File(self.file_name, "w") as out_file:
            # Store the environment parameters
            out_file.create_dataset("info", (0,), maxshape=(None,), dtype=None)
            out_file["info"].attrs["version"] = __version__
            if cfg is not None:
                out_file["info"].attrs["cfg"] = yaml.dump(cfg)

            # Store one group per histogram
            group = out_file.create_group("hists")
            for name, hist in hists.items():
                self.store(group, name, hist)

    @staticmethod
    def store(group, name, hist):
        """Stores a single histogram.

        Parameters
        ----------
        group : h5py.Group
            Parent group
        name : str
            Name of the histogram sub-group
        hist : Histogram1D
            Histogram to store
        """
        sub = group.create_group(name)
        sub.create_dataset("counts", data=hist.counts)
        sub.create_dataset("sumw2", data=hist.sumw2)
        sub.create_dataset("edges", data=hist.edges)
        sub.attrs["title"] = hist.title
        sub.attrs["underflow"] = hist.underflow
        sub.attrs["overflow"] = hist.overflow
        sub.attrs["entries"] = hist.entries
