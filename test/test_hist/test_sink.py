"""Test the observation sinks."""

import numpy as np
import pytest

from mudecay.classify import EventClassifier
from mudecay.data import Event
from mudecay.hist import HistogramSink, NullSink, ObservationLog
from mudecay.utils.enums import DelayCategory, LayerCategory, SampleCountCategory


class TestHistogramSink:
    """Test suite for the histogram sink."""

    def test_booking(self):
        """One histogram per category, and per layer for delays."""
        sink = HistogramSink(num_layers=4)
        hists = sink.histograms()

        assert len(hists) == len(LayerCategory) + len(SampleCountCategory) + 4 * len(
            DelayCategory
        )
        assert "decay_up_delay_3" in hists
        assert "incoming_muon_stop_layer" in hists
        assert hists["decay_up_delay_0"].num_bins == 125
        assert hists["decay_up_delay_0"].high == 50000
        assert hists["first_hit_time_0"].num_bins == 40
        assert hists["first_hit_time_0"].high == 200
        assert hists["samples_all_events"].num_bins == 40
        assert hists["hits_per_layer"].num_bins == 4

    def test_record(self):
        """Observations are booked in the matching histogram."""
        sink = HistogramSink()
        sink.record_layer_count(LayerCategory.INCOMING_MUON_STOP, -1)
        sink.record_layer_count(LayerCategory.INCOMING_MUON_STOP, 4)
        sink.record_delay(DelayCategory.DECAY_UP, 4, 5000)
        sink.record_sample_count(SampleCountCategory.ALL_EVENTS, 2)

        stop = sink.layer_hist(LayerCategory.INCOMING_MUON_STOP)
        assert stop.underflow == 1
        assert stop.counts[4] == 1
        assert sink.delay_hist(DelayCategory.DECAY_UP, 4).counts[12] == 1
        assert sink.sample_hist(SampleCountCategory.ALL_EVENTS).counts[4] == 1

    def test_record_layer_range(self):
        """Delays can only be booked for existing layers."""
        with pytest.raises(IndexError):
            HistogramSink(num_layers=6).record_delay(DelayCategory.DECAY_UP, 6, 100)

    def test_custom_binning(self):
        """The binning of the histograms is configurable."""
        sink = HistogramSink(delay_bins=(50, 0, 20000))
        assert sink.delay_hist(DelayCategory.DECAY_DOWN, 2).num_bins == 50

    def test_merge(self):
        """Partial sinks sum up to the sink filled with all events."""
        events = [
            Event.from_pairs([(0b011111, 0), (0b010000, 5000)]),
            Event.from_pairs([(0b111111, 0), (0b000001, 100)]),
            Event.from_pairs([(0b000111, 0), (0b000100, 1200), (0b000110, 3000)]),
        ]
        classifier = EventClassifier()

        full = HistogramSink()
        for event in events:
            classifier(event, full)

        part_a, part_b = HistogramSink(), HistogramSink()
        classifier(events[0], part_a)
        for event in events[1:]:
            classifier(event, part_b)

        merged = HistogramSink().merge(part_b).merge(part_a)
        full_hists = full.histograms()
        for name, hist in merged.histograms().items():
            np.testing.assert_array_equal(hist.counts, full_hists[name].counts)
            assert hist.underflow == full_hists[name].underflow

    def test_merge_mismatch(self):
        """Only compatible sinks can be merged."""
        with pytest.raises(ValueError):
            HistogramSink(num_layers=6).merge(HistogramSink(num_layers=5))
        with pytest.raises(TypeError):
            HistogramSink().merge(ObservationLog())


def test_observation_log_merge():
    """Logs are merged by concatenation."""
    log_a, log_b = ObservationLog(), ObservationLog()
    log_a.record_layer_count(LayerCategory.DECAY_UP, 2)
    log_b.record_delay(DelayCategory.DECAY_UP, 2, 300)

    log_a.merge(log_b)
    assert len(log_a) == 2
    assert [obs.value for obs in log_a] == [None, 300]


def test_null_sink():
    """The null sink accepts and drops everything."""
    sink = NullSink()
    sink.record_layer_count(LayerCategory.DECAY_UP, 2)
    sink.record_delay(DelayCategory.DECAY_UP, 2, 300)
    sink.record_sample_count(SampleCountCategory.ALL_EVENTS, 2)
    assert sink.merge(NullSink()) is sink
