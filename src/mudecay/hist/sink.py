"""Observation sinks which receive the output of the event classifier.

The classifier never decides how its observations are stored. It reports
them to an :class:`ObservationSink`, which can book them into histograms,
keep them in memory or ignore them altogether.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from mudecay.utils.enums import DelayCategory, LayerCategory, SampleCountCategory

from .histogram import Histogram1D

__all__ = ["ObservationSink", "NullSink", "ObservationLog", "HistogramSink"]


class ObservationSink(ABC):
    """Abstract interface of a classifier observation sink."""

    @abstractmethod
    def record_layer_count(self, category, layer):
        """Records one count in a layer.

        Parameters
        ----------
        category : LayerCategory
            Observation category
        layer : int
            Detector layer (-1 is a valid value for the muon stop layer)
        """
        raise NotImplementedError

    @abstractmethod
    def record_delay(self, category, layer, delay):
        """Records one time value for a layer.

        Parameters
        ----------
        category : DelayCategory
            Observation category
        layer : int
            Detector layer
        delay : int
            Time in ns
        """
        raise NotImplementedError

    @abstractmethod
    def record_sample_count(self, category, count):
        """Records the number of time samples of an event.

        Parameters
        ----------
        category : SampleCountCategory
            Observation category
        count : int
            Number of time samples
        """
        raise NotImplementedError

    def merge(self, other):
        """Adds the content of another sink of the same kind to this one."""
        raise NotImplementedError(
            f"Sinks of type {type(self).__name__} cannot be merged."
        )


class NullSink(ObservationSink):
    """Sink which drops every observation."""

    def record_layer_count(self, category, layer):
        pass

    def record_delay(self, category, layer, delay):
        pass

    def record_sample_count(self, category, count):
        pass

    def merge(self, other):
        return self


@dataclass(frozen=True)
class Observation:
    """Single observation reported by the classifier.

    Attributes
    ----------
    category : Enum
        Observation category
    layer : int, optional
        Detector layer, if the observation is layer-specific
    value : int, optional
        Delay or sample count, if the observation carries one
    """

    category: object
    layer: Optional[int] = None
    value: Optional[int] = None


class ObservationLog(ObservationSink):
    """Sink which keeps the ordered list of observations in memory."""

    def __init__(self):
        """Initialize an empty log."""
        self.observations = []

    def __len__(self):
        return len(self.observations)

    def __iter__(self):
        return iter(self.observations)

    def __eq__(self, other):
        if not isinstance(other, ObservationLog):
            return NotImplemented
        return self.observations == other.observations

    def clear(self):
        """Drops every observation."""
        self.observations = []

    def record_layer_count(self, category, layer):
        self.observations.append(Observation(category, layer))

    def record_delay(self, category, layer, delay):
        self.observations.append(Observation(category, layer, delay))

    def record_sample_count(self, category, count):
        self.observations.append(Observation(category, value=count))

    def select(self, category):
        """Returns the observations of one category.

        Parameters
        ----------
        category : Enum
            Observation category

        Returns
        -------
        List[Observation]
            Observations of that category, in the order they were recorded
        """
        return [obs for obs in self.observations if obs.category == category]

    def merge(self, other):
        """Appends the observations of another log.

        Parameters
        ----------
        other : ObservationLog
            Log to append

        Returns
        -------
        ObservationLog
            This log
        """
        self.observations.extend(other.observations)

        return self


class HistogramSink(ObservationSink):
    """Sink which books every observation into one-dimensional histograms.

    One histogram is booked per layer category (one bin per layer), one per
    sample count category, and one per (delay category, layer) pair. The
    histograms are named after the category value, with the layer index
    appended for delay histograms (e.g. `decay_up_delay_3`).

    Typical configuration should look like:

    .. code-block:: yaml

        hist:
          delay_bins: [125, 0, 50000]
          sample_bins: [40, 0, 20]
          first_hit_bins: [40, 0, 200]
    """

    # Human-readable titles of each category
    titles = {
        LayerCategory.HITS_PER_LAYER: "Hits per layer",
        LayerCategory.AFTERPULSE_SIMPLE: "Afterpulse layer",
        LayerCategory.DECAY_UP: "Upward decay layer",
        LayerCategory.DECAY_DOWN: "Downward decay layer",
        LayerCategory.AFTERPULSE_IMPROVED: "Improved afterpulse layer",
        LayerCategory.INCOMING_MUON_STOP: "Incoming muon stop layer",
        DelayCategory.FIRST_HIT_TIME: "First sample time",
        DelayCategory.AFTERPULSE_IMPROVED: "Improved afterpulse delay",
        DelayCategory.DECAY_UP: "Upward decay delay",
        DelayCategory.DECAY_DOWN: "Downward decay delay",
        DelayCategory.AFTERPULSE_SIMPLE: "Afterpulse delay",
        SampleCountCategory.ALL_EVENTS: "Number of samples, all events",
        SampleCountCategory.DECAY_EVENTS: "Number of samples, decay events",
    }

    def __init__(
        self,
        num_layers=6,
        delay_bins=(125, 0, 50000),
        sample_bins=(40, 0, 20),
        first_hit_bins=(40, 0, 200),
    ):
        """Book the histograms.

        Parameters
        ----------
        num_layers : int, default 6
            Number of detector layers
        delay_bins : Tuple[int, float, float], default (125, 0, 50000)
            Binning (number of bins, low, high) of the delay histograms in ns
        sample_bins : Tuple[int, float, float], default (40, 0, 20)
            Binning of the sample count histograms
        first_hit_bins : Tuple[int, float, float], default (40, 0, 200)
            Binning of the first sample time histograms in ns
        """
        self.num_layers = num_layers
        self.delay_bins = tuple(delay_bins)
        self.sample_bins = tuple(sample_bins)
        self.first_hit_bins = tuple(first_hit_bins)

        # Layer histograms: one bin per layer, centered on the layer index
        self.layer_hists = {}
        for category in LayerCategory:
            self.layer_hists[category] = Histogram1D(
                category.value,
                num_layers,
                -0.5,
                num_layers - 0.5,
                self.titles[category],
            )

        # Sample count histograms
        self.sample_hists = {}
        for category in SampleCountCategory:
            self.sample_hists[category] = Histogram1D(
                category.value, *self.sample_bins, self.titles[category]
            )

        # Delay histograms, one per layer
        self.delay_hists = {}
        for category in DelayCategory:
            bins = self.first_hit_bins
            if category != DelayCategory.FIRST_HIT_TIME:
                bins = self.delay_bins

            self.delay_hists[category] = []
            for layer in range(num_layers):
                self.delay_hists[category].append(
                    Histogram1D(
                        f"{category.value}_{layer}",
                        *bins,
                        f"{self.titles[category]}, layer {layer}",
                    )
                )

    def record_layer_count(self, category, layer):
        self.layer_hists[category].fill(layer)

    def record_delay(self, category, layer, delay):
        if not 0 <= layer < self.num_layers:
            raise IndexError(
                f"Layer {layer} is out of range for a {self.num_layers}-layer "
                "detector."
            )
        self.delay_hists[category][layer].fill(delay)

    def record_sample_count(self, category, count):
        self.sample_hists[category].fill(count)

    def layer_hist(self, category):
        """Returns the layer histogram of a category."""
        return self.layer_hists[category]

    def delay_hist(self, category, layer):
        """Returns the delay histogram of a category in one layer."""
        return self.delay_hists[category][layer]

    def sample_hist(self, category):
        """Returns the sample count histogram of a category."""
        return self.sample_hists[category]

    def histograms(self):
        """Returns every booked histogram, keyed by name.

        Returns
        -------
        Dict[str, Histogram1D]
            Dictionary of histograms
        """
        hists = {}
        for hist in self.sample_hists.values():
            hists[hist.name] = hist
        for hist in self.layer_hists.values():
            hists[hist.name] = hist
        for layer_list in self.delay_hists.values():
            for hist in layer_list:
                hists[hist.name] = hist

        return hists

    def merge(self, other):
        """Adds the histograms of another sink to this one.

        Merging is associative and commutative, so that partial sinks filled
        on disjoint subsets of events can be combined in any order.

        Parameters
        ----------
        other : HistogramSink
            Sink with the same binning

        Returns
        -------
        HistogramSink
            This sink
        """
        if not isinstance(other, HistogramSink):
            raise TypeError(
                f"Cannot merge a {type(other).__name__} into a HistogramSink."
            )
        if other.num_layers != self.num_layers:
            raise ValueError(
                f"Cannot merge a {other.num_layers}-layer sink into a "
                f"{self.num_layers}-layer sink."
            )

        others = other.histograms()
        for name, hist in self.histograms().items():
            hist.add(others[name])

        return self
