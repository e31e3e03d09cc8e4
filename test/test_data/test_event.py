"""Test the event and classification data structures."""

import pytest

from mudecay.data import Classification, Event, EventFlags, TimeSample


class TestEvent:
    """Test suite for the event container."""

    def test_from_pairs(self):
        """Events can be built from (hit_mask, hit_time) pairs."""
        event = Event.from_pairs([(0b111, 10), (0b100, 2010)], index=3)

        assert event.num_samples == len(event) == 2
        assert event.index == 3
        assert event.first == TimeSample(0b111, 10)
        assert event[1].hit_time == 2010
        assert event.delay(1) == 2000

    def test_empty(self):
        """An event must hold at least one time sample."""
        with pytest.raises(ValueError):
            Event([])

    def test_equality(self):
        """Events are equal when their samples and index are."""
        pairs = [(1, 0), (2, 100)]
        assert Event.from_pairs(pairs) == Event.from_pairs(pairs)
        assert Event.from_pairs(pairs) != Event.from_pairs(pairs, index=1)

    def test_sample_layers(self):
        """Fired layers are listed top to bottom."""
        sample = TimeSample(0b101001, 0)
        assert sample.layers(6) == [0, 3, 5]
        assert sample.fired(3) and not sample.fired(4)


class TestEventFlags:
    """Test suite for the event category flags."""

    def test_derived(self):
        """Derived flags combine the independent ones."""
        flags = EventFlags()
        assert not flags.decay and not flags.afterpulse

        flags.set("decay_down")
        flags.set("afterpulse_improved")
        assert flags.decay and flags.afterpulse
        assert flags.as_dict() == {
            "decay_up": 0,
            "decay_down": 1,
            "afterpulse_simple": 0,
            "afterpulse_improved": 1,
        }

    def test_unknown(self):
        """Only known flags can be set."""
        with pytest.raises(KeyError):
            EventFlags().set("decay_sideways")

    def test_summary(self):
        """The classification summary is a flat dictionary."""
        result = Classification(last_muon_layer=4, num_samples=2)
        result.flags.set("decay_up")
        summary = result.summary()

        assert summary["last_muon_layer"] == 4
        assert summary["num_samples"] == 2
        assert summary["num_matches"] == 0
        assert summary["decay_up"] == 1
