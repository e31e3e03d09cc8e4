"""Contains the event reader base class.

Event readers deliver the events of an input stream one at a time, as
:class:`mudecay.data.Event` objects, in the order they appear in the input.
"""

from abc import ABC, abstractmethod

from mudecay.utils.logger import logger as default_logger

__all__ = ["ReaderBase"]


class ReaderBase(ABC):
    """Parent reader class which provides common functions between all readers.

    This class provides these basic functions:
    1. Iteration protocol built on top of the `next_event` method which must
       be defined in the inheriting class;
    2. Method to skip a number of events at the start of the input;
    3. Context manager protocol which closes the underlying stream.

    Attributes
    ----------
    name : str
        Name of the reader, as requested in the configuration
    num_read : int
        Number of events delivered (or skipped) so far
    num_rejected : int
        Number of events rejected as malformed
    num_merged : int
        Number of samples merged into a preceding one
    """

    name = ""
    aliases = ()

    def __init__(self, logger=None):
        """Initialize the counters.

        Parameters
        ----------
        logger : logging.Logger, optional
            Logger used to report input problems. If not specified, the
            package logger is used
        """
        self.logger = logger if logger is not None else default_logger
        self.num_read = 0
        self.num_rejected = 0
        self.num_merged = 0

    def __iter__(self):
        """Iterates over the remaining events of the input."""
        while True:
            event = self.next_event()
            if event is None:
                return
            yield event

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    @abstractmethod
    def next_event(self):
        """Reads the next event of the input.

        Returns
        -------
        Event, optional
            Next event, or `None` at the end of the input
        """
        raise NotImplementedError

    def skip(self, num_events):
        """Skips a number of events.

        Parameters
        ----------
        num_events : int
            Number of events to skip

        Returns
        -------
        int
            Number of events actually skipped (fewer if the input ends)
        """
        if num_events < 0:
            raise ValueError(
                f"The number of events to skip must be positive, got {num_events}."
            )

        count = 0
        while count < num_events and self.next_event() is not None:
            count += 1

        return count

    def close(self):
        """Releases the input stream. Nothing to do by default."""
