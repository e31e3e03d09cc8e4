"""Loaders of the histogram files written by :class:`HDF5Writer`."""

import os

import h5py
import yaml

from mudecay.hist import Histogram1D

__all__ = ["read_histograms", "read_config"]


def read_histograms(file_name, names=None):
    """Loads the histograms stored in an HDF5 file.

    Parameters
    ----------
    file_name : str
        Path to the histogram file
    names : List[str], optional
        Names of the histograms to load. If not specified, load them all

    Returns
    -------
    Dict[str, Histogram1D]
        Dictionary which maps histogram names onto histograms
    """
    if not os.path.isfile(file_name):
        raise FileNotFoundError(f"Histogram file not found: {file_name}")

    hists = {}
    with h5py.File(file_name, "r") as in_file:
        group = in_file["hists"]
        for name in names if names is not None else group.keys():
            if name not in group:
                raise KeyError(f"No histogram named `{name}` in {file_name}.")

            sub = group[name]
            edges = sub["edges"][()]
            title = sub.attrs["title"]
            if isinstance(title, bytes):
                title = title.decode()

            hists[name] = Histogram1D.from_dict(
                {
                    "name": name,
                    "title": str(title),
                    "num_bins": len(edges) - 1,
                    "low": edges[0],
                    "high": edges[-1],
                    "counts": sub["counts"][()],
                    "sumw2": sub["sumw2"][()],
                    "underflow": sub.attrs["underflow"],
                    "overflow": sub.attrs["overflow"],
                    "entries": sub.attrs["entries"],
                }
            )

    return hists


def read_config(file_name):
    """Loads the run configuration stored in a histogram file.

    Parameters
    ----------
    file_name : str
        Path to the histogram file

    Returns
    -------
    dict
        Run configuration (empty if none was stored)
    """
    with h5py.File(file_name, "r") as in_file:
        cfg = in_file["info"].attrs.get("cfg")

    if cfg is None:
        return {}

    return yaml.safe_load(cfg)
