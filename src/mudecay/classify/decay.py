"""Locators of muon decay products.

A muon which stops in layer `s` and decays "upward" re-triggers the layer it
stopped in. A muon which decays "downward" sends its decay product into the
layers below `s`.
"""

from .base import DecayLocatorBase

__all__ = ["find_upward_decay", "NoDownwardDecay", "AdjacentDownwardDecay"]


def find_upward_decay(sample, last_muon_layer, num_layers):
    """Look for a decay product registered in the muon stopping layer.

    Parameters
    ----------
    sample : TimeSample
        Time sample to inspect
    last_muon_layer : int
        Deepest layer reached contiguously by the incoming muon
    num_layers : int
        Number of detector layers

    Returns
    -------
    Optional[int]
        Stopping layer if it fired in this sample, `None` otherwise
    """
    # A muon which reached the bottom layer went through the stack
    if last_muon_layer == num_layers - 1 or last_muon_layer < 0:
        return None

    if sample.fired(last_muon_layer):
        return last_muon_layer

    return None


class NoDownwardDecay(DecayLocatorBase):
    """Downward decay locator which never finds anything."""

    name = "none"
    aliases = ("null",)

    def locate(self, sample, last_muon_layer, num_layers):
        """Never finds a downward decay."""
        return None


class AdjacentDownwardDecay(DecayLocatorBase):
    """Finds decay products which continue downward past the stopping layer.

    The decay product must be registered in one of the layers right below
    the stopping layer while the stopping layer itself stays silent in the
    same sample. A re-triggered stopping layer is the upward signature, and
    a hit far below it is more likely an afterpulse of a deep layer.
    """

    name = "adjacent"
    aliases = ("downward",)

    def __init__(self, max_gap=0):
        """Initialize the locator.

        Parameters
        ----------
        max_gap : int, default 0
            Number of silent layers allowed between the stopping layer and
            the layer in which the decay product is registered
        """
        if max_gap < 0:
            raise ValueError(f"The `max_gap` must be positive, got {max_gap}.")

        self.max_gap = max_gap

    def locate(self, sample, last_muon_layer, num_layers):
        """Find the first layer below the stopping layer which fired.

        Parameters
        ----------
        sample : TimeSample
            Time sample to inspect
        last_muon_layer : int
            Deepest layer reached contiguously by the incoming muon
        num_layers : int
            Number of detector layers

        Returns
        -------
        Optional[int]
            Decay layer, if any
        """
        # Nothing below the bottom layer
        if last_muon_layer >= num_layers - 1:
            return None

        if sample.fired(last_muon_layer):
            return None

        last = min(last_muon_layer + 1 + self.max_gap, num_layers - 1)
        for layer in range(last_muon_layer + 1, last + 1):
            if sample.fired(layer):
                return layer

        return None
