"""Combinations of the per-layer delay histograms into the fitted spectra.

The analysis output holds one delay histogram per layer for upward decays,
downward decays and afterpulses. Before fitting, the afterpulse spectra are
subtracted from the decay spectra, the layers are summed and, for the
precession measurement, runs with and without magnetic field are compared.
"""

import numpy as np

from mudecay.utils.enums import DelayCategory

__all__ = [
    "layer_histograms",
    "subtract_afterpulses",
    "combine_layers",
    "lifetime_histograms",
    "asymmetry",
    "asymmetry_histograms",
    "accumulate",
]

# Default layers summed into the upward and downward decay spectra
UP_LAYERS = (1, 2, 3, 4)
DOWN_LAYERS = (2, 3, 4)


def layer_histograms(hists, category, num_layers):
    """Fetches the per-layer delay histograms of one category.

    Parameters
    ----------
    hists : Dict[str, Histogram1D]
        Histograms, keyed by name
    category : DelayCategory
        Delay category
    num_layers : int
        Number of detector layers

    Returns
    -------
    List[Histogram1D]
        One histogram per layer
    """
    return [hists[f"{category.value}_{layer}"] for layer in range(num_layers)]


def subtract_afterpulses(up, down, afterpulse, scale_up=None, scale_down=None):
    """Subtracts the scaled afterpulse spectra from the decay spectra.

    The outermost layers are left untouched.

    Parameters
    ----------
    up : List[Histogram1D]
        Upward decay delay histograms, one per layer
    down : List[Histogram1D]
        Downward decay delay histograms, one per layer
    afterpulse : List[Histogram1D]
        Afterpulse delay histograms, one per layer
    scale_up : List[float], optional
        Per-layer afterpulse scale factors for upward decays (0 by default)
    scale_down : List[float], optional
        Per-layer afterpulse scale factors for downward decays (0 by default)

    Returns
    -------
    Tuple[List[Histogram1D], List[Histogram1D]]
        Corrected copies of the upward and downward decay histograms
    """
    num_layers = len(up)
    if len(down) != num_layers or len(afterpulse) != num_layers:
        raise ValueError("Expected one histogram per layer in each category.")

    scale_up = check_scales(scale_up, num_layers)
    scale_down = check_scales(scale_down, num_layers)

    up = [hist.copy() for hist in up]
    down = [hist.copy() for hist in down]
    for layer in range(1, num_layers - 1):
        up[layer].add(afterpulse[layer], -scale_up[layer])
        down[layer].add(afterpulse[layer], -scale_down[layer])

    return up, down


def check_scales(scales, num_layers):
    """Checks a list of per-layer scale factors (zeros if not provided)."""
    if scales is None:
        return np.zeros(num_layers)

    scales = np.asarray(scales, dtype=float)
    if len(scales) != num_layers:
        raise ValueError(
            f"Expected {num_layers} afterpulse scale factors, got {len(scales)}."
        )

    return scales


def combine_layers(hists, layers, name, title=""):
    """Sums the histograms of a subset of layers.

    Parameters
    ----------
    hists : List[Histogram1D]
        One histogram per layer
    layers : List[int]
        Layers to sum
    name : str
        Name of the combined histogram
    title : str, optional
        Title of the combined histogram

    Returns
    -------
    Histogram1D
        Sum of the selected histograms
    """
    if not len(layers):
        raise ValueError("At least one layer must be combined.")

    total = hists[layers[0]].copy(name, title)
    total.reset()
    for layer in layers:
        total.add(hists[layer])

    return total


def lifetime_histograms(
    hists,
    num_layers=6,
    up_layers=UP_LAYERS,
    down_layers=DOWN_LAYERS,
    scale_up=None,
    scale_down=None,
):
    """Builds the upward, downward and total decay time spectra.

    Parameters
    ----------
    hists : Dict[str, Histogram1D]
        Histograms of one analysis output, keyed by name
    num_layers : int, default 6
        Number of detector layers
    up_layers : List[int], default (1, 2, 3, 4)
        Layers summed into the upward decay spectrum
    down_layers : List[int], default (2, 3, 4)
        Layers summed into the downward decay spectrum
    scale_up : List[float], optional
        Per-layer afterpulse scale factors for upward decays
    scale_down : List[float], optional
        Per-layer afterpulse scale factors for downward decays

    Returns
    -------
    Dict[str, Histogram1D]
        `decay_up`, `decay_down` and `lifetime` spectra
    """
    up, down = subtract_afterpulses(
        layer_histograms(hists, DelayCategory.DECAY_UP, num_layers),
        layer_histograms(hists, DelayCategory.DECAY_DOWN, num_layers),
        layer_histograms(hists, DelayCategory.AFTERPULSE_IMPROVED, num_layers),
        scale_up,
        scale_down,
    )

    hist_up = combine_layers(up, up_layers, "decay_up", "Upward decays")
    hist_down = combine_layers(down, down_layers, "decay_down", "Downward decays")
    total = hist_up.copy("lifetime", "Muon lifetime").add(hist_down)

    return {"decay_up": hist_up, "decay_down": hist_down, "lifetime": total}


def asymmetry(field_on, field_off, name="asymmetry", title=""):
    """Computes the normalized difference of two decay spectra.

    The spectrum without magnetic field is first scaled to the integral of
    the spectrum with field (`s = integral(B) / integral(N)`).

    Parameters
    ----------
    field_on : Histogram1D
        Decay spectrum with magnetic field (B)
    field_off : Histogram1D
        Decay spectrum without magnetic field (N)
    name : str, default 'asymmetry'
        Name of the asymmetry histogram
    title : str, optional
        Title of the asymmetry histogram

    Returns
    -------
    Tuple[Histogram1D, Histogram1D, Histogram1D]
        Asymmetry `(B - s*N) / (B + s*N)`, sum `B + s*N` and difference
        `B - s*N`
    """
    norm = field_off.integral()
    if norm == 0:
        raise ValueError(
            f"Cannot normalize to `{field_off.name}`: its integral is zero."
        )
    scale = field_on.integral() / norm

    total = field_on.copy(f"{name}_sum").add(field_off, scale)
    diff = field_on.copy(f"{name}_diff").add(field_off, -scale)
    asym = (diff / total).copy(name, title)

    return asym, total, diff


def asymmetry_histograms(field_off, field_on):
    """Builds the upward, downward and combined asymmetry spectra.

    The combined asymmetry is `(diff_down - diff_up) / (sum_down + sum_up)`
    since the precession signal has opposite signs in both directions.

    Parameters
    ----------
    field_off : Dict[str, Histogram1D]
        `decay_up` and `decay_down` spectra without magnetic field
    field_on : Dict[str, Histogram1D]
        `decay_up` and `decay_down` spectra with magnetic field

    Returns
    -------
    Dict[str, Histogram1D]
        `asymmetry_up`, `asymmetry_down` and `asymmetry` spectra
    """
    asym_up, sum_up, diff_up = asymmetry(
        field_on["decay_up"],
        field_off["decay_up"],
        "asymmetry_up",
        "Asymmetry in upward decays",
    )
    asym_down, sum_down, diff_down = asymmetry(
        field_on["decay_down"],
        field_off["decay_down"],
        "asymmetry_down",
        "Asymmetry in downward decays",
    )

    diff = diff_down.copy("asymmetry_diff").add(diff_up, -1.0)
    total = sum_down.copy("asymmetry_sum").add(sum_up)
    asym = (diff / total).copy("asymmetry", "Asymmetry in decays")

    return {"asymmetry_up": asym_up, "asymmetry_down": asym_down, "asymmetry": asym}


def accumulate(own, *others):
    """Adds the histograms of other measurements to one's own.

    Parameters
    ----------
    own : Dict[str, Histogram1D]
        Histograms of this measurement
    *others : Dict[str, Histogram1D]
        Histograms of other measurements (same names and binnings)

    Returns
    -------
    Dict[str, Histogram1D]
        Summed copies of the histograms of this measurement
    """
    total = {name: hist.copy() for name, hist in own.items()}
    for other in others:
        for name, hist in total.items():
            if name not in other:
                raise KeyError(f"Histogram `{name}` missing from accumulated input.")
            hist.add(other[name])

    return total
