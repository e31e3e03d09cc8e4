"""Reader of the plain-text event records written by the data acquisition."""

import sys

from mudecay.data import Event
from mudecay.io.errors import EmptyEventError, InputFormatError

from .base import ReaderBase

__all__ = ["TextEventReader"]


class TextEventReader(ReaderBase):
    """Reads detector events from a text file.

    Each line of an event holds three whitespace-separated integers: the time
    bin number (1-based), the hit mask and the hit time in ns. A line which
    contains `###` terminates the event:

    .. code-block:: text

        ###
        1   7   50
        2   4   2370
        ###

    A separator which does not close any sample (leading separator, repeated
    separators) is ignored. The last event of the input does not need a
    closing separator.

    Samples which follow the previous sample by no more than `dead_time` are
    merged into it (bitwise OR of the hit masks, the later time is dropped).
    Events with hit mask bits outside of the detector layer range, and
    blocks none of whose lines can be parsed, are rejected.

    Typical configuration should look like:

    .. code-block:: yaml

        io:
          reader:
            name: text
            file_path: fp13.txt
            dead_time: 60
    """

    name = "text"
    aliases = ("txt",)

    separator = "###"

    def __init__(self, file_path="fp13.txt", num_layers=6, dead_time=60, logger=None):
        """Open the input stream.

        Parameters
        ----------
        file_path : str, default 'fp13.txt'
            Path to the input file. If '-', the events are read from stdin
        num_layers : int, default 6
            Number of detector layers
        dead_time : int, default 60
            Time separation (in ns) at or below which two samples are merged
        logger : logging.Logger, optional
            Logger used to report input problems
        """
        super().__init__(logger)

        self.file_path = file_path
        self.num_layers = num_layers
        self.dead_time = dead_time
        self.num_events = 0

        # Open the input stream (let an OSError propagate if it fails)
        if file_path == "-":
            self.stream = sys.stdin
            self.owns_stream = False
        else:
            self.stream = open(file_path, "r", encoding="utf-8")
            self.owns_stream = True

        self.line_number = 0

    def close(self):
        """Closes the input file (stdin is left open)."""
        if self.owns_stream and not self.stream.closed:
            self.stream.close()

    def next_event(self):
        """Reads the next valid event of the input.

        Returns
        -------
        Event, optional
            Next event, or `None` at the end of the input

        Raises
        ------
        EmptyEventError
            If the input stream fails before its end while an event is read
        """
        while True:
            pairs = self.read_block()
            if pairs is None:
                return None

            # Assign the position of the event in the input
            index = self.num_events
            self.num_events += 1

            # Drop blocks none of whose lines could be parsed
            if not pairs:
                self.logger.warning(
                    "Event %d ending at line %d of %s contains no valid time "
                    "sample. Event rejected.",
                    index,
                    self.line_number,
                    self.file_path,
                )
                self.num_rejected += 1
                continue

            # Reject events which fire layers the detector does not have
            try:
                self.check_masks(pairs, index)
            except InputFormatError as err:
                self.logger.warning("%s Event rejected.", err)
                self.num_rejected += 1
                continue

            self.num_read += 1

            return Event.from_pairs(pairs, index)

    def read_block(self):
        """Reads the lines of one event, up to its separator.

        Returns
        -------
        List[List[int]], optional
            List of merged (hit_mask, hit_time) pairs (empty if a separator
            closes a block of unparseable lines), `None` at the end of the
            input

        Raises
        ------
        EmptyEventError
            If the input stream cannot be decoded before its end
        """
        pairs, num_lines, merged = [], 0, 0
        event_id = self.num_events
        while True:
            try:
                line = self.stream.readline()
            except UnicodeDecodeError as err:
                raise EmptyEventError(
                    f"Event {event_id}: reading {self.file_path} failed after "
                    f"line {self.line_number}, before the end of the input."
                ) from err
            if not line:
                break

            self.line_number += 1

            # Separators close the event, unless nothing was read yet
            if self.separator in line:
                if pairs or num_lines:
                    return pairs
                continue

            # Blank lines (including DOS line endings) carry no information
            if not line.strip():
                continue

            num_lines += 1
            try:
                bin_id, hit_mask, hit_time = self.parse_line(line)
            except InputFormatError as err:
                self.logger.warning(
                    "Event %d, sample %d: %s Skipping.", event_id, len(pairs), err
                )
                continue

            # Check that the time increases, merge samples within the dead time
            pairs.append([hit_mask, hit_time])
            if len(pairs) > 1:
                delay = hit_time - pairs[-2][1]
                if delay <= 0:
                    self.logger.warning(
                        "Event %d: time does not increase strictly at bin %d "
                        "(delay %d, mask change %d).",
                        event_id,
                        len(pairs),
                        delay,
                        hit_mask ^ pairs[-2][0],
                    )
                if delay <= self.dead_time:
                    pairs[-2][0] |= hit_mask
                    pairs.pop()
                    merged += 1
                    self.num_merged += 1

            # Check that the bin numbering is consistent with what was read
            if bin_id != len(pairs) + merged:
                self.logger.warning(
                    "Event %d: inconsistent time bin numbering (bin %d "
                    "appears as %d in the input, %d merged).",
                    event_id,
                    len(pairs),
                    bin_id,
                    merged,
                )

        return pairs if pairs or num_lines else None

    @staticmethod
    def parse_line(line):
        """Parses one (bin, hit_mask, hit_time) line.

        Parameters
        ----------
        line : str
            Input line

        Returns
        -------
        Tuple[int, int, int]
            Bin number, hit mask and hit time

        Raises
        ------
        InputFormatError
            If the line does not start with three integers
        """
        tokens = line.split()
        if len(tokens) < 3:
            raise InputFormatError(
                f"Expected three integers, got {len(tokens)} field(s): "
                f"{line.strip()!r}."
            )

        try:
            return tuple(int(token) for token in tokens[:3])
        except ValueError as err:
            raise InputFormatError(
                f"Invalid integer in line {line.strip()!r}."
            ) from err

    def check_masks(self, pairs, index):
        """Checks that every hit mask fits in the detector layer range.

        Parameters
        ----------
        pairs : List[List[int]]
            List of (hit_mask, hit_time) pairs
        index : int
            Position of the event in the input

        Raises
        ------
        InputFormatError
            If a mask is negative or sets a bit at or above `num_layers`
        """
        for i, (hit_mask, _) in enumerate(pairs):
            if hit_mask < 0 or hit_mask >> self.num_layers:
                raise InputFormatError(
                    f"Event {index}, sample {i}: hit mask {hit_mask} sets "
                    f"bits outside of the {self.num_layers} detector layers."
                )
