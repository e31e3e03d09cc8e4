"""Test the combinations of the per-layer delay histograms."""

import numpy as np
import pytest

from mudecay.fit import (
    accumulate,
    asymmetry,
    asymmetry_histograms,
    combine_layers,
    lifetime_histograms,
    subtract_afterpulses,
)
from mudecay.hist import Histogram1D, HistogramSink
from mudecay.utils.enums import DelayCategory


@pytest.fixture(name="sink")
def fixture_sink():
    """Sink with a few decays and afterpulses in each layer."""
    sink = HistogramSink(num_layers=6, delay_bins=(10, 0, 1000))
    for layer in range(6):
        for _ in range(4):
            sink.record_delay(DelayCategory.DECAY_UP, layer, 150)
        for _ in range(2):
            sink.record_delay(DelayCategory.DECAY_DOWN, layer, 250)
        sink.record_delay(DelayCategory.AFTERPULSE_IMPROVED, layer, 150)

    return sink


def flat(name, value, num_bins=10):
    """Histogram with the same content in every bin."""
    hist = Histogram1D(name, num_bins, 0, 1000)
    hist.counts[:] = value
    hist.sumw2[:] = value

    return hist


class TestLayerSums:
    """Test suite for the afterpulse subtraction and the layer sums."""

    def test_subtract(self, sink):
        """Afterpulses are subtracted in the inner layers only."""
        hists = sink.histograms()
        up = [hists[f"decay_up_delay_{i}"] for i in range(6)]
        down = [hists[f"decay_down_delay_{i}"] for i in range(6)]
        after = [hists[f"afterpulse_improved_delay_{i}"] for i in range(6)]

        new_up, new_down = subtract_afterpulses(
            up, down, after, scale_up=[2.0] * 6, scale_down=[1.0] * 6
        )
        assert [h.counts[1] for h in new_up] == [4, 2, 2, 2, 2, 4]
        assert [h.counts[1] for h in new_down] == [0, -1, -1, -1, -1, 0]

        # Inputs are left untouched
        assert up[1].counts[1] == 4

    def test_no_scale(self, sink):
        """Without scale factors, nothing is subtracted."""
        hists = sink.histograms()
        up = [hists[f"decay_up_delay_{i}"] for i in range(6)]
        new_up, _ = subtract_afterpulses(up, up, up)
        for old, new in zip(up, new_up):
            np.testing.assert_array_equal(old.counts, new.counts)

    def test_bad_scales(self, sink):
        """One scale factor is needed per layer."""
        hists = sink.histograms()
        up = [hists[f"decay_up_delay_{i}"] for i in range(6)]
        with pytest.raises(ValueError):
            subtract_afterpulses(up, up, up, scale_up=[1.0, 1.0])
        with pytest.raises(ValueError):
            subtract_afterpulses(up, up[:5], up)

    def test_combine(self):
        """Layers are summed into a new histogram."""
        hists = [flat(f"h{i}", i) for i in range(4)]
        total = combine_layers(hists, [1, 3], "total", "Total")
        assert total.name == "total"
        assert total.title == "Total"
        np.testing.assert_array_equal(total.counts, np.full(10, 4.0))
        with pytest.raises(ValueError):
            combine_layers(hists, [], "total")

    def test_lifetime(self, sink):
        """Upward layers 1-4 and downward layers 2-4 are combined."""
        spectra = lifetime_histograms(
            sink.histograms(), scale_up=[1.0] * 6, scale_down=[0.0] * 6
        )
        assert set(spectra) == {"decay_up", "decay_down", "lifetime"}
        assert spectra["decay_up"].integral() == 4 * 3
        assert spectra["decay_down"].integral() == 3 * 2
        assert spectra["lifetime"].integral() == 18
        assert spectra["lifetime"].counts[1] == 12
        assert spectra["lifetime"].counts[2] == 6

    def test_accumulate(self):
        """Measurements of other groups are added bin by bin."""
        own = {"a": flat("a", 1.0), "b": flat("b", 2.0)}
        total = accumulate(own, {"a": flat("a", 3.0), "b": flat("b", 1.0)})
        assert total["a"].counts[0] == 4.0
        assert total["b"].counts[0] == 3.0
        assert own["a"].counts[0] == 1.0
        with pytest.raises(KeyError):
            accumulate(own, {"a": flat("a", 3.0)})


class TestAsymmetry:
    """Test suite for the field on/off asymmetries."""

    def test_asymmetry(self):
        """The field-off spectrum is normalized to the field-on one."""
        on = flat("on", 6.0)
        on.counts[0] = 8.0
        off = flat("off", 3.0)
        asym, total, diff = asymmetry(on, off, "asym")

        scale = on.integral() / off.integral()
        assert diff.counts[0] == pytest.approx(8.0 - 3.0 * scale)
        assert total.counts[0] == pytest.approx(8.0 + 3.0 * scale)
        assert asym.counts[0] == pytest.approx(diff.counts[0] / total.counts[0])
        assert asym.name == "asym"
        assert diff.integral() == pytest.approx(0.0)

    def test_empty(self):
        """An empty field-off spectrum cannot be normalized."""
        with pytest.raises(ValueError):
            asymmetry(flat("on", 1.0), flat("off", 0.0))

    def test_combined(self):
        """The downward asymmetry enters the combination with its sign."""
        off = {"decay_up": flat("up", 10.0), "decay_down": flat("down", 10.0)}
        on = {"decay_up": flat("up", 10.0), "decay_down": flat("down", 10.0)}
        on["decay_up"].counts[:5], on["decay_up"].counts[5:] = 12.0, 8.0
        on["decay_down"].counts[:5], on["decay_down"].counts[5:] = 8.0, 12.0

        asym = asymmetry_histograms(off, on)
        assert set(asym) == {"asymmetry_up", "asymmetry_down", "asymmetry"}
        assert asym["asymmetry_up"].counts[0] == pytest.approx(2.0 / 22.0)
        assert asym["asymmetry_down"].counts[0] == pytest.approx(-2.0 / 18.0)
        assert asym["asymmetry"].counts[0] == pytest.approx(-4.0 / 40.0)
