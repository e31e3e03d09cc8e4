"""Test the one-dimensional histogram."""

import numpy as np
import pytest

from mudecay.hist import Histogram1D


@pytest.fixture(name="hist")
def fixture_hist():
    """Histogram with 4 bins over [0, 4)."""
    return Histogram1D("h", 4, 0.0, 4.0, "Test histogram")


class TestHistogram1D:
    """Test suite for the histogram class."""

    def test_binning(self, hist):
        """Checks the edges and centers."""
        np.testing.assert_allclose(hist.edges, [0, 1, 2, 3, 4])
        np.testing.assert_allclose(hist.centers, [0.5, 1.5, 2.5, 3.5])
        assert hist.width == 1.0

    def test_fill(self, hist):
        """Values go to their bin, under- or overflow."""
        for x in (-1.0, 0.0, 0.99, 3.5, 4.0, 10.0):
            hist.fill(x)

        np.testing.assert_array_equal(hist.counts, [2, 0, 0, 1])
        assert hist.underflow == 1
        assert hist.overflow == 2
        assert hist.entries == 6
        assert hist.integral() == 3

    def test_weights(self, hist):
        """Errors are the square root of the sum of squared weights."""
        hist.fill(1.5, 2.0)
        hist.fill(1.5, 1.0)

        assert hist.counts[1] == 3.0
        assert hist.errors[1] == pytest.approx(np.sqrt(5.0))

    def test_layer_binning(self):
        """Layer histograms are centered on the layer index."""
        hist = Histogram1D("layers", 6, -0.5, 5.5)
        for layer in (-1, 0, 5, 5):
            hist.fill(layer)

        assert hist.underflow == 1
        np.testing.assert_array_equal(hist.counts, [1, 0, 0, 0, 0, 2])

    def test_add_scale(self, hist):
        """Scaled additions propagate the errors in quadrature."""
        other = hist.copy("other")
        hist.fill(0.5)
        other.fill(0.5)
        other.fill(0.5)

        hist.add(other, -0.5)
        assert hist.counts[0] == 0.0
        assert hist.sumw2[0] == pytest.approx(1.0 + 0.25 * 2.0)

        hist.scale(2.0)
        assert hist.sumw2[0] == pytest.approx(4.0 * 1.5)

    def test_divide(self, hist):
        """Bin by bin ratio with uncorrelated errors, zero where undefined."""
        num, den = hist.copy("num"), hist.copy("den")
        for _ in range(4):
            num.fill(0.5)
        for _ in range(2):
            den.fill(0.5)
        num.fill(1.5)

        ratio = num / den
        assert ratio.counts[0] == 2.0
        assert ratio.sumw2[0] == pytest.approx((4.0 * 4.0 + 2.0 * 16.0) / 16.0)
        assert ratio.counts[1] == 0.0
        assert ratio.sumw2[1] == 0.0

    def test_incompatible(self, hist):
        """Histograms with different binnings cannot be combined."""
        with pytest.raises(ValueError):
            hist.add(Histogram1D("other", 5, 0.0, 4.0))

    def test_copy(self, hist):
        """Copies are independent."""
        hist.fill(0.5)
        copy = hist.copy("copy", "Copy")
        copy.fill(0.5)

        assert hist.counts[0] == 1 and copy.counts[0] == 2
        assert copy.name == "copy" and copy.title == "Copy"

    def test_dict(self, hist):
        """Histograms can be rebuilt from their attributes."""
        hist.fill(2.5, 3.0)
        hist.fill(-2.0)
        other = Histogram1D.from_dict(hist.as_dict())

        np.testing.assert_array_equal(other.counts, hist.counts)
        np.testing.assert_array_equal(other.sumw2, hist.sumw2)
        assert other.underflow == 1.0
        assert other.entries == 2
        assert other.title == "Test histogram"

    @pytest.mark.parametrize("num_bins, low, high", [(0, 0, 1), (5, 1, 1), (5, 2, 1)])
    def test_invalid(self, num_bins, low, high):
        """Invalid binnings are rejected."""
        with pytest.raises(ValueError):
            Histogram1D("h", num_bins, low, high)
