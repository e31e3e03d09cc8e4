"""Locators of detector afterpulses.

Afterpulses are delayed discharges of a layer which already fired when the
incoming muon went through it. They are not decay products and must be
counted separately to correct the decay time spectra.
"""

from .base import AfterpulseLocatorBase

__all__ = ["find_afterpulse_simple", "NoAfterpulse", "IsolatedAfterpulse"]


def find_afterpulse_simple(sample, last_muon_layer, num_layers, cursor=None):
    """Look for afterpulses using through-going muons only.

    When the incoming muon went through every layer, no decay can be
    registered in the stack and any later hit is attributed to an
    afterpulse. The search starts right above the bottom layer and works
    its way up.

    Parameters
    ----------
    sample : TimeSample
        Time sample to inspect
    last_muon_layer : int
        Deepest layer reached contiguously by the incoming muon
    num_layers : int
        Number of detector layers
    cursor : int, optional
        Layer returned by the previous call on the same sample. If `None`,
        a fresh search is started.

    Returns
    -------
    Optional[int]
        Layer of the next afterpulse, if any
    """
    if last_muon_layer != num_layers - 1:
        return None

    start = num_layers - 1 if cursor is None else cursor
    for layer in range(start - 1, -1, -1):
        if sample.fired(layer):
            return layer

    return None


class NoAfterpulse(AfterpulseLocatorBase):
    """Afterpulse locator which never finds anything."""

    name = "none"
    aliases = ("null",)

    def locate(self, sample, last_muon_layer, num_layers, cursor):
        """Never finds an afterpulse."""
        return None


class IsolatedAfterpulse(AfterpulseLocatorBase):
    """Finds afterpulses as isolated hits in layers crossed by the muon.

    Compared to the through-going muon heuristic:
    - stopping muons are used as well (unless `through_going_only`). The
      candidate layers are the ones above the stopping layer, as the
      stopping layer itself carries the upward decay signature;
    - through-going muons also probe the bottom layer;
    - a candidate hit must be isolated, i.e. neither neighbouring layer fired
      in the same sample. A real particle crossing the stack, or a decay
      product leaving the stopping layer, fires adjacent layers.
    """

    name = "isolated"
    aliases = ("improved",)

    def __init__(self, through_going_only=False, require_isolation=True):
        """Initialize the locator.

        Parameters
        ----------
        through_going_only : bool, default False
            If `True`, only use muons which went through the whole stack
        require_isolation : bool, default True
            If `True`, the neighbouring layers must be silent
        """
        self.through_going_only = through_going_only
        self.require_isolation = require_isolation

    def locate(self, sample, last_muon_layer, num_layers, cursor):
        """Find the next isolated afterpulse above the cursor.

        Parameters
        ----------
        sample : TimeSample
            Time sample to inspect
        last_muon_layer : int
            Deepest layer reached contiguously by the incoming muon
        num_layers : int
            Number of detector layers
        cursor : int, optional
            Layer returned by the previous call on the same sample

        Returns
        -------
        Optional[int]
            Layer of the next afterpulse, if any
        """
        through_going = last_muon_layer == num_layers - 1
        if self.through_going_only and not through_going:
            return None

        top = last_muon_layer if through_going else last_muon_layer - 1
        start = top if cursor is None else min(top, cursor - 1)
        for layer in range(start, -1, -1):
            if sample.fired(layer) and self.isolated(sample, layer, num_layers):
                return layer

        return None

    def isolated(self, sample, layer, num_layers):
        """Checks that the layers adjacent to a hit are silent.

        Parameters
        ----------
        sample : TimeSample
            Time sample to inspect
        layer : int
            Layer of the hit
        num_layers : int
            Number of detector layers

        Returns
        -------
        bool
            `True` if the hit is isolated (or isolation is not required)
        """
        if not self.require_isolation:
            return True

        above = layer > 0 and sample.fired(layer - 1)
        below = layer < num_layers - 1 and sample.fired(layer + 1)

        return not above and not below
