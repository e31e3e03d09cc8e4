"""Construct a locator strategy class from its name."""

from mudecay.utils.factory import instantiate, module_dict

from . import afterpulse, decay

DECAY_DICT = module_dict(decay)
AFTERPULSE_DICT = module_dict(afterpulse)

__all__ = ["decay_locator_factory", "afterpulse_locator_factory"]


def decay_locator_factory(cfg):
    """Instantiates a downward decay locator from a configuration block.

    Parameters
    ----------
    cfg : Union[str, dict]
        Name of the locator or locator configuration dictionary

    Returns
    -------
    DecayLocatorBase
        Initialized decay locator
    """
    return instantiate(DECAY_DICT, cfg)


def afterpulse_locator_factory(cfg):
    """Instantiates an improved afterpulse locator from a configuration block.

    Parameters
    ----------
    cfg : Union[str, dict]
        Name of the locator or locator configuration dictionary

    Returns
    -------
    AfterpulseLocatorBase
        Initialized afterpulse locator
    """
    return instantiate(AFTERPULSE_DICT, cfg)
