#!/usr/bin/env python3
"""Command-line entry point of the data reduction (`mudecay`)."""

import argparse
from typing import List

from mudecay.config import ConfigError, apply_overrides, load_config_file
from mudecay.io import EmptyEventError
from mudecay.utils.logger import logger, shift_level
from mudecay.version import __version__

# Default input and output files
DEFAULT_INPUT = "fp13.txt"
DEFAULT_OUTPUT = "fp13.h5"


def main(
    config: str,
    source: str,
    output: str,
    n: int,
    nskip: int,
    verbosity_shift: int,
    config_overrides: List[str],
):
    """Main driver of the data reduction.

    Performs these basic functions:
    - Build the configuration from the file (if any) and the command line
    - Run the driver

    Parameters
    ----------
    config : str
        Path to the configuration file
    source : str
        Path to the input event file ('-' for stdin)
    output : str
        Path to the output histogram file
    n : int
        Maximum number of events to analyze
    nskip : int
        Number of events to skip
    verbosity_shift : int
        Number of steps by which to make the output quieter (positive) or
        more verbose (negative)
    config_overrides : List[str]
        List of config overrides in the form "key.path=value"

    Returns
    -------
    dict
        Summary of the run
    """
    # Load the configuration file, if provided
    cfg = load_config_file(config) if config is not None else {}
    for key in ("base", "io", "classify", "hist"):
        if cfg.get(key) is None:
            cfg[key] = {}

    # Normalize the IO blocks so that they can be updated
    for key, default in (("reader", "text"), ("writer", "hdf5")):
        block = cfg["io"].get(key)
        if block is None:
            cfg["io"][key] = {"name": default}
        elif isinstance(block, str):
            cfg["io"][key] = {"name": block}

    # Override the configuration with the command-line information
    reader, writer = cfg["io"]["reader"], cfg["io"]["writer"]
    if source is not None:
        reader["file_path"] = source
    reader.setdefault("file_path", DEFAULT_INPUT)
    if output is not None:
        writer["file_name"] = output
    writer.setdefault("file_name", DEFAULT_OUTPUT)

    if n is not None:
        cfg["base"]["n_event"] = n
    if nskip is not None:
        cfg["base"]["n_skip"] = nskip
    if verbosity_shift:
        verbosity = cfg["base"].get("verbosity", "info")
        cfg["base"]["verbosity"] = shift_level(verbosity, verbosity_shift)

    # Apply any generic config overrides from --set arguments
    if config_overrides:
        cfg = apply_overrides(cfg, config_overrides)

    logger.info("Input file:  %s", reader["file_path"])
    logger.info("Output file: %s", writer["file_name"])

    # Run the main function
    from mudecay.main import run

    return run(cfg)


def cli(argv=None):
    """Main CLI entry point.

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
        description="Muon decay data reduction: classifies the events of a "
        "raw hit file and stores the resulting histograms.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
If not specified, events are read from {DEFAULT_INPUT} and histograms are
written to {DEFAULT_OUTPUT}. If '-' is given as the input file, events are
read from stdin. The options -q and -v make the output more quiet or more
verbose and may be given more than once.

Examples:
  mudecay -i run.txt -o run.h5
  mudecay -i - -n 1000 < run.txt
  mudecay -c config.yaml --set classify.decay_down=adjacent
""",
    )

    parser.add_argument("--version", action="version", version=f"mudecay {__version__}")
    parser.add_argument("-c", "--config", help="Path to a YAML configuration file")
    parser.add_argument("-i", "--input", dest="source", help="Path to the input file")
    parser.add_argument("-o", "--output", help="Path to the output histogram file")
    parser.add_argument(
        "-n", "--max-events", type=int, help="Maximum number of events to analyze"
    )
    parser.add_argument(
        "-s", "--skip-events", type=int, help="Number of events to skip"
    )
    parser.add_argument(
        "-q", "--quiet", action="count", default=0, help="Less verbose output"
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="More verbose output"
    )
    parser.add_argument(
        "--set",
        action="append",
        dest="config_overrides",
        metavar="KEY=VALUE",
        help="Override any config parameter using dot notation "
        "(e.g., --set classify.min_delay=60). "
        "Can be used multiple times for multiple overrides.",
    )

    # Parse the arguments
    args = parser.parse_args(argv)

    # Run, turn fatal errors into an exit code
    try:
        main(
            config=args.config,
            source=args.source,
            output=args.output,
            n=args.max_events,
            nskip=args.skip_events,
            verbosity_shift=args.quiet - args.verbose,
            config_overrides=args.config_overrides,
        )

    except (ConfigError, EmptyEventError, OSError, KeyError, ValueError) as err:
        logger.error("%s: %s", type(err).__name__, err)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(cli())
