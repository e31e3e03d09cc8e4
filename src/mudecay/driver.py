"""Main driver of the muon decay data reduction.

Builds the event reader, the classifier, the histogram sink and the writers
from a configuration dictionary, then loops over the input events.
"""

import yaml

from .classify import EventClassifier
from .hist import HistogramSink
from .io import reader_factory, writer_factory
from .utils.logger import logger
from .utils.stopwatch import StopwatchManager
from .version import __version__

__all__ = ["Driver"]


class Driver:
    """Central data reduction driver.

    Processes the global configuration and runs the appropriate modules:
      1. Read the events from the input
      2. Classify each event, booking the observations in histograms
      3. Optionally log a one-line summary of each event
      4. Write the histograms to file

    It takes a configuration dictionary of the form:

    .. code-block:: yaml

        base:
          num_layers: 6
          verbosity: info
          n_skip: 0
          n_event: 100000
          log_step: 10000
        io:
          reader:
            name: text
            file_path: fp13.txt
            dead_time: 60
          writer:
            name: hdf5
            file_name: fp13.h5
          event_log:
            name: csv
            file_name: events.csv
        classify:
          min_delay: 55
          decay_down: adjacent
          afterpulse_improved: isolated
        hist:
          delay_bins: [125, 0, 50000]
    """

    def __init__(self, cfg):
        """Initializes the class attributes.

        Parameters
        ----------
        cfg : dict
            Global configuration dictionary
        """
        self.watch = StopwatchManager()
        self.watch.initialize("run")

        # Process the full configuration dictionary and store it
        base, io, classify, hist = self.process_config(**cfg)

        # Initialize the base driver configuration parameters
        self.initialize_base(**base)

        # Initialize the classifier and the histograms
        self.classifier = EventClassifier(num_layers=self.num_layers, **classify)
        self.sink = HistogramSink(num_layers=self.num_layers, **hist)

        # Initialize the input/output
        self.initialize_io(**io)

    def process_config(self, io=None, base=None, classify=None, hist=None):
        """Reads the configuration and dumps it to the logger.

        Parameters
        ----------
        io : dict, optional
            Input/output configuration dictionary
        base : dict, optional
            Base driver configuration dictionary
        classify : dict, optional
            Event classifier configuration dictionary
        hist : dict, optional
            Histogram binning configuration dictionary

        Returns
        -------
        Tuple[dict, dict, dict, dict]
            Processed configuration blocks
        """
        # Missing blocks are left to their defaults
        base = base if base is not None else {}
        io = io if io is not None else {}
        classify = classify if classify is not None else {}
        hist = hist if hist is not None else {}

        # Set the verbosity of the logger
        verbosity = base.get("verbosity", "info")
        logger.setLevel(verbosity.upper())

        # Rebuild the global configuration dictionary
        self.cfg = {"base": base, "io": io, "classify": classify, "hist": hist}

        # Log environment information and configuration
        logger.info("Release version: %s\n", __version__)
        logger.info(yaml.dump(self.cfg, default_flow_style=None, sort_keys=False))

        return base, io, classify, hist

    def initialize_base(
        self,
        num_layers=6,
        verbosity="info",
        n_skip=0,
        n_event=None,
        log_step=10000,
    ):
        """Initialize the base driver parameters.

        Parameters
        ----------
        num_layers : int, default 6
            Number of detector layers
        verbosity : str, default 'info'
            Verbosity level of the logger
        n_skip : int, default 0
            Number of events to skip at the start of the input
        n_event : int, optional
            Maximum number of events to analyze. If not specified, analyze
            the whole input
        log_step : int, default 10000
            Number of events read between two progress messages
        """
        if n_skip < 0:
            raise ValueError(f"`n_skip` must be positive, got {n_skip}.")
        if n_event is not None and n_event < 0:
            raise ValueError(f"`n_event` must be positive, got {n_event}.")
        if log_step < 1:
            raise ValueError(f"`log_step` must be strictly positive, got {log_step}.")

        self.num_layers = num_layers
        self.verbosity = verbosity
        self.n_skip = n_skip
        self.n_event = n_event
        self.log_step = log_step

        self.num_analyzed = 0
        self.flag_counts = {}

    def initialize_io(self, reader=None, writer=None, event_log=None):
        """Initializes the input/output tools.

        Parameters
        ----------
        reader : Union[str, dict], optional
            Event reader configuration (text file reader by default)
        writer : Union[str, dict], optional
            Histogram writer configuration (HDF5 writer by default)
        event_log : Union[str, dict], optional
            Per-event summary writer configuration
        """
        # The reader opens its input stream, build it last
        self.writer = writer_factory(writer if writer is not None else "hdf5")
        self.event_log = None
        if event_log is not None:
            self.event_log = writer_factory(event_log)

        self.reader = reader_factory(
            reader if reader is not None else "text", num_layers=self.num_layers
        )

    def run(self):
        """Loops over the input events, classifies them and writes the output.

        Returns
        -------
        dict
            Summary of the run
        """
        self.watch.start("run")
        try:
            # Skip the requested number of events
            if self.n_skip > 0:
                num_skipped = self.reader.skip(self.n_skip)
                logger.info("Skipped %d event(s).", num_skipped)

            # Loop over the remaining events
            while self.n_event is None or self.num_analyzed < self.n_event:
                if self.reader.num_read % self.log_step == 0:
                    logger.info(
                        "Event %8d, %8d analyzed.",
                        self.reader.num_read,
                        self.num_analyzed,
                    )

                event = self.reader.next_event()
                if event is None:
                    break

                self.process(event)

        finally:
            self.reader.close()

        # Store the histograms
        self.writer(self.sink, cfg=self.cfg)
        elapsed = self.watch.stop("run")

        # Log the summary
        summary = self.summary()
        logger.info(
            "Read %d event(s), analyzed %d (%d rejected, %d sample(s) merged).",
            summary["num_read"],
            summary["num_analyzed"],
            summary["num_rejected"],
            summary["num_merged"],
        )
        for key, count in self.flag_counts.items():
            logger.info("  %-20s: %d", key, count)
        logger.info(
            "Processing time: %.2f s wall, %.2f s CPU.", elapsed.wall, elapsed.cpu
        )

        return summary

    def process(self, event):
        """Classifies one event.

        Parameters
        ----------
        event : Event
            Event to classify

        Returns
        -------
        Classification
            Outcome of the classification
        """
        result = self.classifier(event, self.sink)
        self.num_analyzed += 1

        # Count the events in each category
        for key, value in result.flags.as_dict().items():
            self.flag_counts[key] = self.flag_counts.get(key, 0) + value

        if self.event_log is not None:
            self.event_log.append({"index": event.index, **result.summary()})

        return result

    def summary(self):
        """Dictionary of the run counters."""
        summary = {
            "num_read": self.reader.num_read,
            "num_analyzed": self.num_analyzed,
            "num_rejected": self.reader.num_rejected,
            "num_merged": self.reader.num_merged,
        }
        summary.update(self.flag_counts)

        return summary
