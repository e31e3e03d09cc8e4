"""Event classifier which drives the penetration, decay and afterpulse
searches over the time samples of one event."""

from mudecay.data import Classification, Match
from mudecay.hist.sink import NullSink
from mudecay.utils.enums import DelayCategory, LayerCategory, SampleCountCategory

from .afterpulse import find_afterpulse_simple
from .decay import find_upward_decay
from .factories import afterpulse_locator_factory, decay_locator_factory
from .penetration import determine_penetration

__all__ = ["EventClassifier"]

# Largest number of layers which keeps every bit test of a 32-bit signed mask
MAX_LAYERS = 31

# Observation categories associated with each event flag
CATEGORY_MAP = {
    "decay_up": (LayerCategory.DECAY_UP, DelayCategory.DECAY_UP),
    "decay_down": (LayerCategory.DECAY_DOWN, DelayCategory.DECAY_DOWN),
    "afterpulse_simple": (
        LayerCategory.AFTERPULSE_SIMPLE,
        DelayCategory.AFTERPULSE_SIMPLE,
    ),
    "afterpulse_improved": (
        LayerCategory.AFTERPULSE_IMPROVED,
        DelayCategory.AFTERPULSE_IMPROVED,
    ),
}


class EventClassifier:
    """Classifies events into muon stop, decay and afterpulse categories.

    For each event, the classifier:
    1. Records the number of time samples, the hits per layer and the time
       of the first sample in each layer which fired;
    2. Determines how far the incoming muon penetrated the stack in the
       first time sample (always recorded, -1 included);
    3. If a muon was tracked and there are later samples, looks for an
       upward decay, a downward decay and afterpulses (through-going and
       improved heuristics) in each sample delayed by at least `min_delay`;
    4. Records the number of time samples of the events with a decay.

    The classifier holds no state across events: classifying the same event
    twice produces the same observations.

    Typical configuration should look like:

    .. code-block:: yaml

        classify:
          decay_down: adjacent
          afterpulse_improved:
            name: isolated
            through_going_only: false
    """

    def __init__(
        self,
        num_layers=6,
        min_delay=55,
        decay_down="none",
        afterpulse_improved="none",
    ):
        """Initialize the classifier.

        Parameters
        ----------
        num_layers : int, default 6
            Number of detector layers
        min_delay : int, default 55
            Minimum delay (in ns) w.r.t. the first time sample for a sample
            to be searched for decays and afterpulses
        decay_down : Union[str, dict], default 'none'
            Downward decay locator configuration
        afterpulse_improved : Union[str, dict], default 'none'
            Improved afterpulse locator configuration
        """
        # Check that every layer can be bit-tested unambiguously
        if not 1 <= num_layers <= MAX_LAYERS:
            raise ValueError(
                f"The number of layers must be in [1, {MAX_LAYERS}], "
                f"got {num_layers}."
            )

        self.num_layers = num_layers
        self.min_delay = min_delay

        # Initialize the pluggable locators
        self.decay_down = decay_locator_factory(decay_down)
        self.afterpulse_improved = afterpulse_locator_factory(afterpulse_improved)

    def __call__(self, event, sink=None):
        """Classify one event.

        Parameters
        ----------
        event : Event
            Event to classify
        sink : ObservationSink, optional
            Sink which receives the observations

        Returns
        -------
        Classification
            Outcome of the classification
        """
        if sink is None:
            sink = NullSink()

        # Initialize the event-scoped state
        result = Classification(num_samples=event.num_samples)
        sink.record_sample_count(SampleCountCategory.ALL_EVENTS, event.num_samples)

        # Record the hits in each layer and the time of the first sample
        for sample in event:
            for layer in sample.layers(self.num_layers):
                sink.record_layer_count(LayerCategory.HITS_PER_LAYER, layer)

        first = event.first
        for layer in first.layers(self.num_layers):
            sink.record_delay(DelayCategory.FIRST_HIT_TIME, layer, first.hit_time)

        # Determine how far the incoming muon went
        result.last_muon_layer = determine_penetration(
            first.hit_mask, self.num_layers
        )
        sink.record_layer_count(
            LayerCategory.INCOMING_MUON_STOP, result.last_muon_layer
        )

        # Without a clean incoming track or a later sample, nothing to search
        if result.last_muon_layer < 0 or event.num_samples < 2:
            return result

        # Loop over the samples which follow the incoming muon
        for idx in range(1, event.num_samples):
            # Skip the samples which are too close to the incoming muon
            delay = event.delay(idx)
            if delay < self.min_delay:
                continue

            self.scan_sample(event[idx], idx, delay, result, sink)

        # Record the sample count of events with a decay
        if result.flags.decay:
            sink.record_sample_count(
                SampleCountCategory.DECAY_EVENTS, event.num_samples
            )

        return result

    def scan_sample(self, sample, idx, delay, result, sink):
        """Look for decays and afterpulses in one time sample.

        Parameters
        ----------
        sample : TimeSample
            Time sample to inspect
        idx : int
            Index of the sample in the event
        delay : int
            Delay of the sample w.r.t. the first sample in ns
        result : Classification
            Classification of the event, updated in place
        sink : ObservationSink
            Sink which receives the observations
        """
        last, num_layers = result.last_muon_layer, self.num_layers

        # Decays
        layer = find_upward_decay(sample, last, num_layers)
        if layer is not None:
            self.record("decay_up", idx, layer, delay, result, sink)

        layer = self.decay_down(sample, last, num_layers)
        if layer is not None:
            self.record("decay_down", idx, layer, delay, result, sink)

        # Afterpulses, as long as the locators find new ones
        layer = find_afterpulse_simple(sample, last, num_layers)
        while layer is not None:
            self.record("afterpulse_simple", idx, layer, delay, result, sink)
            layer = find_afterpulse_simple(sample, last, num_layers, layer)

        layer = self.afterpulse_improved(sample, last, num_layers)
        while layer is not None:
            self.record("afterpulse_improved", idx, layer, delay, result, sink)
            layer = self.afterpulse_improved(sample, last, num_layers, layer)

    @staticmethod
    def record(category, idx, layer, delay, result, sink):
        """Store one match in the classification and the sink.

        Parameters
        ----------
        category : str
            Name of the event flag the match belongs to
        idx : int
            Index of the time sample in the event
        layer : int
            Detector layer of the match
        delay : int
            Delay of the time sample in ns
        result : Classification
            Classification of the event, updated in place
        sink : ObservationSink
            Sink which receives the observations
        """
        result.flags.set(category)
        result.matches.append(Match(category, idx, layer, delay))

        layer_category, delay_category = CATEGORY_MAP[category]
        sink.record_layer_count(layer_category, layer)
        sink.record_delay(delay_category, layer, delay)
