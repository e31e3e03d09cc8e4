#!/usr/bin/env python3
"""Command-line entry point of the decay time fits (`mudecay-fit`)."""

import argparse

from mudecay.fit import (
    accumulate,
    asymmetry_histograms,
    fit_histogram,
    lifetime_histograms,
)
from mudecay.io import CSVWriter, HDF5Writer, read_config, read_histograms
from mudecay.utils.logger import logger

# Names of the spectra stored by the asymmetry command
FIELD_OFF_KEYS = ("decay_up", "decay_down")
FIELD_ON_KEYS = ("decay_up_field", "decay_down_field")


def num_layers_of(file_name, default=6):
    """Number of detector layers used to produce a histogram file."""
    cfg = read_config(file_name)

    return cfg.get("base", {}).get("num_layers", default)


def spectra(file_name, scale_up=None, scale_down=None):
    """Loads a histogram file and builds its decay time spectra.

    Parameters
    ----------
    file_name : str
        Path to the histogram file
    scale_up : List[float], optional
        Per-layer afterpulse scale factors for upward decays
    scale_down : List[float], optional
        Per-layer afterpulse scale factors for downward decays

    Returns
    -------
    Dict[str, Histogram1D]
        `decay_up`, `decay_down` and `lifetime` spectra
    """
    return lifetime_histograms(
        read_histograms(file_name),
        num_layers=num_layers_of(file_name),
        scale_up=scale_up,
        scale_down=scale_down,
    )


def fit_all(hists, model, xmin, xmax, output=None, **fixed):
    """Fits a model to a set of histograms and reports the results.

    Parameters
    ----------
    hists : Dict[str, Histogram1D]
        Histograms to fit
    model : str
        Name of the fit model
    xmin : float
        Lower edge of the fit range in ns
    xmax : float
        Upper edge of the fit range in ns
    output : str, optional
        Path to a CSV file in which to store the fit results
    **fixed : dict, optional
        Parameter values to hold constant

    Returns
    -------
    List[FitResult]
        One fit result per histogram
    """
    writer = CSVWriter(output, overwrite=True) if output is not None else None
    results = []
    for hist in hists.values():
        logger.info("\n%s\nFIT: %s - %s\n%s", "*" * 72, model, hist.title, "*" * 72)
        result = fit_histogram(hist, model, xmin, xmax, **fixed)
        logger.info(str(result))
        results.append(result)
        if writer is not None:
            writer.append(result.as_dict())

    return results


def lifetime(args):
    """Fits the muon lifetime."""
    hists = spectra(args.file, args.scale_up, args.scale_down)
    if args.save is not None:
        HDF5Writer(args.save)(hists)

    return fit_all(hists, "lifetime", args.xmin, args.xmax, args.output)


def capture(args):
    """Fits the muon lifetime with nuclear capture of negative muons."""
    hists = spectra(args.file, args.scale_up, args.scale_down)
    if args.save is not None:
        HDF5Writer(args.save)(hists)

    return fit_all(hists, "capture", args.xmin, args.xmax, args.output, ratio=args.ratio)


def asymmetry(args):
    """Fits the spin precession signal in the up/down decay asymmetry."""
    off = spectra(args.file, args.scale_up, args.scale_down)
    on = spectra(args.field_file, args.scale_up_field, args.scale_down_field)
    decays = {
        "decay_up": off["decay_up"],
        "decay_down": off["decay_down"],
        "decay_up_field": on["decay_up"].copy("decay_up_field"),
        "decay_down_field": on["decay_down"].copy("decay_down_field"),
    }

    # Add the measurements of other groups, if provided
    if args.accumulate:
        others = [
            read_histograms(path, FIELD_OFF_KEYS + FIELD_ON_KEYS)
            for path in args.accumulate
        ]
        decays = accumulate(decays, *others)

    asym = asymmetry_histograms(
        {key: decays[key] for key in FIELD_OFF_KEYS},
        {key: decays[f"{key}_field"] for key in FIELD_OFF_KEYS},
    )
    if args.save is not None:
        HDF5Writer(args.save)({**decays, **asym})

    return fit_all(asym, "asymmetry", args.xmin, args.xmax, args.output)


def cli(argv=None):
    """Fit CLI entry point.

    Parameters
    ----------
    argv : List[str], optional
        Command-line arguments. If not specified, use `sys.argv`

    Returns
    -------
    int
        Exit code (0 on success, 1 on error)
    """
    parser = argparse.ArgumentParser(
        description="Fits of the decay time spectra produced by `mudecay`."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Options shared by every command
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("file", help="Histogram file (without magnetic field)")
    common.add_argument(
        "--xmin", type=float, default=300.0, help="Lower edge of the fit range in ns"
    )
    common.add_argument(
        "--xmax", type=float, default=20000.0, help="Upper edge of the fit range in ns"
    )
    common.add_argument("--output", help="CSV file in which to store the fit results")
    common.add_argument("--save", help="HDF5 file in which to store the spectra")
    common.add_argument(
        "--scale-up",
        type=float,
        nargs="+",
        help="Per-layer afterpulse scale factors for upward decays",
    )
    common.add_argument(
        "--scale-down",
        type=float,
        nargs="+",
        help="Per-layer afterpulse scale factors for downward decays",
    )

    sub = subparsers.add_parser("lifetime", parents=[common], help=lifetime.__doc__)
    sub.set_defaults(func=lifetime)

    sub = subparsers.add_parser("capture", parents=[common], help=capture.__doc__)
    sub.add_argument(
        "--ratio",
        type=float,
        default=1.275,
        help="Fixed ratio of positive to negative muons",
    )
    sub.set_defaults(func=capture)

    sub = subparsers.add_parser("asymmetry", parents=[common], help=asymmetry.__doc__)
    sub.add_argument("field_file", help="Histogram file with magnetic field")
    sub.add_argument(
        "--accumulate",
        nargs="+",
        help="Spectra files of other measurements to add before the fit",
    )
    sub.add_argument(
        "--scale-up-field",
        type=float,
        nargs="+",
        help="Per-layer afterpulse scale factors for upward decays with field",
    )
    sub.add_argument(
        "--scale-down-field",
        type=float,
        nargs="+",
        help="Per-layer afterpulse scale factors for downward decays with field",
    )
    sub.set_defaults(func=asymmetry)

    args = parser.parse_args(argv)
    logger.setLevel("INFO")

    try:
        args.func(args)

    except (OSError, KeyError, ValueError, RuntimeError) as err:
        logger.error("%s: %s", type(err).__name__, err)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(cli())
