"""Contains the base classes of all pluggable locator strategies.

The classifier always runs the reference upward decay and through-going
afterpulse searches. The downward decay and improved afterpulse searches are
delegated to strategy objects which can be swapped through the configuration.
"""

from abc import ABC, abstractmethod

__all__ = ["DecayLocatorBase", "AfterpulseLocatorBase"]


class LocatorBase(ABC):
    """Shared attributes of all locator strategies.

    Attributes
    ----------
    name : str
        Name of the strategy as defined in the configuration file
    aliases : Tuple[str]
        Alternative acceptable names for a strategy
    """

    # Name of the strategy (as specified in the configuration)
    name = None

    # Alternative allowed names of the strategy
    aliases = ()

    def __repr__(self):
        """Short representation of the strategy, used in logs."""
        return f"{self.__class__.__name__}(name={self.name!r})"


class DecayLocatorBase(LocatorBase):
    """Base class of the strategies which look for a decay in a time sample.

    A decay locator is called once per time sample and returns at most one
    decay layer.
    """

    def __call__(self, sample, last_muon_layer, num_layers):
        """Look for a decay product in one time sample.

        Parameters
        ----------
        sample : TimeSample
            Time sample to inspect (after the first one)
        last_muon_layer : int
            Deepest layer reached contiguously by the incoming muon
        num_layers : int
            Number of detector layers

        Returns
        -------
        Optional[int]
            Layer in which the decay product was registered, if any
        """
        # Without a tracked muon, there is no stopping point to decay from
        if last_muon_layer < 0:
            return None

        return self.locate(sample, last_muon_layer, num_layers)

    @abstractmethod
    def locate(self, sample, last_muon_layer, num_layers):
        """Place-holder method to be defined in each decay locator."""
        raise NotImplementedError("Must define the `locate` function.")


class AfterpulseLocatorBase(LocatorBase):
    """Base class of the strategies which look for afterpulses.

    An afterpulse locator is re-invocable: the caller passes `None` as a
    cursor to start a fresh search in a time sample, then the previously
    returned layer to find additional afterpulses in the same sample. Each
    call must return a layer strictly above (smaller than) the cursor, so
    that a "repeat until None" loop ends after at most `num_layers` calls.
    """

    def __call__(self, sample, last_muon_layer, num_layers, cursor=None):
        """Look for the next afterpulse in one time sample.

        Parameters
        ----------
        sample : TimeSample
            Time sample to inspect (after the first one)
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
        if last_muon_layer < 0 or cursor == 0:
            return None

        layer = self.locate(sample, last_muon_layer, num_layers, cursor)
        assert layer is None or cursor is None or layer < cursor, (
            f"Afterpulse locator `{self.name}` must progress upward in the "
            f"stack: returned layer {layer} after layer {cursor}."
        )

        return layer

    @abstractmethod
    def locate(self, sample, last_muon_layer, num_layers, cursor):
        """Place-holder method to be defined in each afterpulse locator."""
        raise NotImplementedError("Must define the `locate` function.")
