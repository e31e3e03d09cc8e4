"""Test the upward and downward decay locators."""

import pytest

from mudecay.classify import decay_locator_factory, find_upward_decay
from mudecay.classify.decay import AdjacentDownwardDecay, NoDownwardDecay
from mudecay.data import TimeSample


class TestUpwardDecay:
    """Test suite for the upward decay search."""

    def test_stopping_layer_fires(self):
        """The stopping layer firing again is an upward decay."""
        sample = TimeSample(0b010000, 5000)
        assert find_upward_decay(sample, 4, 6) == 4

    def test_stopping_layer_silent(self):
        """No upward decay when the stopping layer does not fire."""
        sample = TimeSample(0b100000, 5000)
        assert find_upward_decay(sample, 4, 6) is None

    def test_through_going(self):
        """A muon which reached the bottom layer did not stop in the stack."""
        sample = TimeSample(0b111111, 5000)
        assert find_upward_decay(sample, 5, 6) is None

    def test_no_muon(self):
        """No decay can be found without a tracked muon."""
        sample = TimeSample(0b111111, 5000)
        assert find_upward_decay(sample, -1, 6) is None

    def test_other_layers_ignored(self):
        """Hits in other layers do not prevent the upward decay match."""
        sample = TimeSample(0b001101, 5000)
        assert find_upward_decay(sample, 2, 6) == 2


class TestDownwardDecay:
    """Test suite for the downward decay strategies."""

    def test_none(self):
        """The default strategy never finds anything."""
        locator = NoDownwardDecay()
        assert locator(TimeSample(0b001000, 100), 2, 6) is None

    def test_adjacent(self):
        """A hit right below a silent stopping layer is a downward decay."""
        locator = AdjacentDownwardDecay()
        assert locator(TimeSample(0b001000, 100), 2, 6) == 3

    def test_adjacent_stopping_layer_fired(self):
        """A re-triggered stopping layer is an upward decay, not a downward one."""
        locator = AdjacentDownwardDecay()
        assert locator(TimeSample(0b001100, 100), 2, 6) is None

    def test_adjacent_gap(self):
        """Silent layers below the stopping layer are only allowed with a gap."""
        sample = TimeSample(0b010000, 100)
        assert AdjacentDownwardDecay()(sample, 2, 6) is None
        assert AdjacentDownwardDecay(max_gap=1)(sample, 2, 6) == 4

    def test_adjacent_bottom(self):
        """No downward decay out of the bottom layer."""
        locator = AdjacentDownwardDecay(max_gap=3)
        assert locator(TimeSample(0b000000, 100), 5, 6) is None

    def test_adjacent_no_muon(self):
        """No downward decay without a tracked muon."""
        locator = AdjacentDownwardDecay()
        assert locator(TimeSample(0b000010, 100), -1, 6) is None

    def test_negative_gap(self):
        """A negative gap makes no sense."""
        with pytest.raises(ValueError):
            AdjacentDownwardDecay(max_gap=-1)

    @pytest.mark.parametrize(
        "cfg, cls",
        [
            ("none", NoDownwardDecay),
            ("null", NoDownwardDecay),
            ("adjacent", AdjacentDownwardDecay),
            ({"name": "downward", "max_gap": 2}, AdjacentDownwardDecay),
        ],
    )
    def test_factory(self, cfg, cls):
        """Strategies can be built from their name or a configuration block."""
        locator = decay_locator_factory(cfg)
        assert isinstance(locator, cls)

    def test_factory_unknown(self):
        """Unknown strategy names are rejected."""
        with pytest.raises(ValueError):
            decay_locator_factory("sideways")
