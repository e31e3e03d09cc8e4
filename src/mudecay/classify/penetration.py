"""Determination of how far the incoming muon penetrated the detector."""

__all__ = ["determine_penetration", "contiguous_mask"]


def contiguous_mask(depth):
    """Bit pattern of a track which fired every layer from 0 to `depth`.

    For a depth `n`, :math:`2^{n+1} - 1` has bits `0 .. n` set and every
    deeper bit clear.

    Parameters
    ----------
    depth : int
        Deepest layer of the track

    Returns
    -------
    int
        Hit mask of the contiguous track
    """
    return (1 << (depth + 1)) - 1


def determine_penetration(hit_mask, num_layers):
    """Finds the deepest layer reached contiguously from the top.

    The first time sample must fire exactly the layers `0 .. d`: a muon which
    skips a layer on entry is not considered a clean incoming track. Depths
    are tested from the bottom layer up to layer 1, so a mask which only
    fires the top layer yields -1.

    Parameters
    ----------
    hit_mask : int
        Hit mask of the first time sample of the event
    num_layers : int
        Number of detector layers

    Returns
    -------
    int
        Deepest contiguously penetrated layer, -1 if there is none
    """
    for depth in range(num_layers - 1, 0, -1):
        if hit_mask == contiguous_mask(depth):
            return depth

    return -1
