"""Simple module which define logging module style and returns it."""

import logging
import sys
import warnings

# Configure the formatting of the logger
logging.basicConfig(format="%(message)s", stream=sys.stdout)

# Capture warning messages and redirect them through the logger
logging.captureWarnings(True)

# Initialize logger
logger = logging.getLogger("mudecay")

# Configure the warnings package to only issue warnings once
warnings.simplefilter("once")

# Ordered list of verbosity levels, from most to least verbose
LEVELS = ("debug", "info", "warning", "error", "critical")


def shift_level(level, shift):
    """Moves a verbosity level up or down the list of known levels.

    Parameters
    ----------
    level : str
        Name of the starting verbosity level
    shift : int
        Number of steps to move by. Positive values make the output quieter,
        negative values make it more verbose.

    Returns
    -------
    str
        Name of the shifted verbosity level (clipped to the known range)
    """
    level = level.lower()
    if level not in LEVELS:
        raise ValueError(
            f"Verbosity level not recognized: {level}. Must be one of {LEVELS}."
        )

    index = min(max(LEVELS.index(level) + shift, 0), len(LEVELS) - 1)

    return LEVELS[index]
