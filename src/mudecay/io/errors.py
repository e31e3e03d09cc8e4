"""Exceptions raised while reading the detector event records."""

__all__ = ["InputFormatError", "EmptyEventError"]


class InputFormatError(ValueError):
    """Raised when a line of the input cannot be interpreted.

    These errors are recoverable: the reader logs them as warnings and moves
    on to the next line (or the next event).
    """


class EmptyEventError(ValueError):
    """Raised when the input stream fails before its end while an event is
    being read, leaving the event without its samples.

    This signals a corrupted input and aborts the run.
    """
