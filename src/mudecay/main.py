"""Main function that calls the Driver class.

This is the module called when launching the `mudecay` command-line script.
"""

from .driver import Driver

__all__ = ["run"]


def run(cfg):
    """Execute the data reduction in a single process.

    Parameters
    ----------
    cfg : dict
        Full driver configuration

    Returns
    -------
    dict
        Summary of the run
    """
    driver = Driver(cfg)

    return driver.run()
