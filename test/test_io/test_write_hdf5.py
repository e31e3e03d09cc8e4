"""Test the histogram file writer and loaders."""

import os

import h5py
import numpy as np
import pytest

from mudecay.classify import EventClassifier
from mudecay.data import Event
from mudecay.hist import HistogramSink
from mudecay.io import HDF5Writer, read_config, read_histograms, writer_factory


@pytest.fixture(name="hdf5_output")
def fixture_hdf5_output(tmp_path):
    """Create a dummy output path for an HDF5 file.

    Parameters
    ----------
    tmp_path : str
       Generic pytest fixture used to handle temporary test files
    """
    return os.path.join(tmp_path, "dummy.h5")


@pytest.fixture(name="sink")
def fixture_sink():
    """Histogram sink filled with a couple of events."""
    sink = HistogramSink()
    classifier = EventClassifier()
    classifier(Event.from_pairs([(0b011111, 0), (0b010000, 5000)]), sink)
    classifier(Event.from_pairs([(0b000001, 0)]), sink)

    return sink


class TestHDF5Writer:
    """Test suite for the HDF5 histogram writer."""

    def test_write_read(self, hdf5_output, sink):
        """Histograms are loaded back identical to what was stored."""
        cfg = {"base": {"num_layers": 6}}
        writer = writer_factory({"name": "hdf5", "file_name": hdf5_output})
        writer(sink, cfg=cfg)

        hists = read_histograms(hdf5_output)
        for name, hist in sink.histograms().items():
            loaded = hists[name]
            np.testing.assert_array_equal(loaded.counts, hist.counts)
            np.testing.assert_array_equal(loaded.sumw2, hist.sumw2)
            np.testing.assert_allclose(loaded.edges, hist.edges)
            assert loaded.underflow == hist.underflow
            assert loaded.entries == hist.entries
            assert loaded.title == hist.title

        assert read_config(hdf5_output) == cfg

    def test_layout(self, hdf5_output, sink):
        """Checks the structure of the output file."""
        HDF5Writer(hdf5_output)(sink)
        with h5py.File(hdf5_output, "r") as in_file:
            assert "version" in in_file["info"].attrs
            group = in_file["hists"]["decay_up_delay_4"]
            assert group["counts"].shape == (125,)
            assert group["edges"].shape == (126,)

        assert read_config(hdf5_output) == {}

    def test_subset(self, hdf5_output, sink):
        """A subset of the histograms can be loaded."""
        HDF5Writer(hdf5_output)(sink)
        hists = read_histograms(hdf5_output, ["decay_up_delay_4"])
        assert list(hists) == ["decay_up_delay_4"]
        assert hists["decay_up_delay_4"].integral() == 1

        with pytest.raises(KeyError):
            read_histograms(hdf5_output, ["not_a_histogram"])

    def test_overwrite(self, hdf5_output, sink):
        """Existing files are replaced unless requested otherwise."""
        HDF5Writer(hdf5_output)(sink)
        HDF5Writer(hdf5_output)(sink)
        with pytest.raises(FileExistsError):
            HDF5Writer(hdf5_output, overwrite=False)

    def test_missing(self, tmp_path):
        """Loading a missing file fails."""
        with pytest.raises(FileNotFoundError):
            read_histograms(str(tmp_path / "missing.h5"))
