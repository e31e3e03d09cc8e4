"""Module which contains enumerated variables shared across the project."""

from enum import Enum

__all__ = ["LayerCategory", "DelayCategory", "SampleCountCategory"]


class LayerCategory(Enum):
    """Enumerates the per-layer count observations."""

    HITS_PER_LAYER = "hits_per_layer"
    AFTERPULSE_SIMPLE = "afterpulse_simple_layer"
    DECAY_UP = "decay_up_layer"
    DECAY_DOWN = "decay_down_layer"
    AFTERPULSE_IMPROVED = "afterpulse_improved_layer"
    INCOMING_MUON_STOP = "incoming_muon_stop_layer"


class DelayCategory(Enum):
    """Enumerates the per-layer time observations."""

    FIRST_HIT_TIME = "first_hit_time"
    AFTERPULSE_IMPROVED = "afterpulse_improved_delay"
    DECAY_UP = "decay_up_delay"
    DECAY_DOWN = "decay_down_delay"
    AFTERPULSE_SIMPLE = "afterpulse_simple_delay"


class SampleCountCategory(Enum):
    """Enumerates the per-event sample count observations."""

    ALL_EVENTS = "samples_all_events"
    DECAY_EVENTS = "samples_decay_events"
