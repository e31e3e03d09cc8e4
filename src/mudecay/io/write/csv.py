"""Module to write per-event summaries and fit results to CSV."""

import os

__all__ = ["CSVWriter"]


class CSVWriter:
    """Writes rows of scalars to a CSV file.

    The header is defined by the keys of the first row written. Every later
    row must provide the same keys (missing keys can be tolerated, in which
    case they are filled with -1).

    Typical configuration should look like:

    .. code-block:: yaml

        io:
          event_log:
            name: csv
            file_name: events.csv
    """

    name = "csv"

    def __init__(
        self, file_name="output.csv", overwrite=False, append=False, accept_missing=False
    ):
        """Prepare the output file.

        Parameters
        ----------
        file_name : str, default 'output.csv'
            Name of the output CSV file
        overwrite : bool, default False
            If `True`, overwrite the output file if it already exists
        append : bool, default False
            If `True`, add rows to an existing CSV file, reusing its header
        accept_missing : bool, default False
            If `True`, tolerate rows which miss some of the header keys
        """
        if append and not os.path.isfile(file_name):
            raise FileNotFoundError(
                f"Cannot append to {file_name}: the file does not exist."
            )
        if not append and not overwrite and os.path.isfile(file_name):
            raise FileExistsError(f"File with name {file_name} already exists.")

        self.file_name = file_name
        self.accept_missing = accept_missing
        self.keys = None
        self.num_rows = 0

        # Reuse the header of the existing file
        if append:
            with open(file_name, "r", encoding="utf-8") as in_file:
                self.keys = in_file.readline().strip().split(",")

    def __call__(self, row):
        """Alias of :meth:`append`."""
        self.append(row)

    def create(self, row):
        """Writes the header of the file from the keys of the first row.

        Parameters
        ----------
        row : dict
            First row to be stored
        """
        self.keys = list(row.keys())
        with open(self.file_name, "w", encoding="utf-8") as out_file:
            out_file.write(",".join(self.keys) + "\n")

    def append(self, row):
        """Appends one row to the file.

        Parameters
        ----------
        row : dict
            Dictionary which maps column names onto scalar values
        """
        if self.keys is None:
            self.create(row)

        elif list(row.keys()) != self.keys:
            # Unknown keys are never allowed, missing ones might be
            excess = self.array_diff(row.keys(), self.keys)
            if excess:
                raise KeyError(
                    "The row contains keys which are not in the CSV header: "
                    f"{sorted(excess)}"
                )

            missing = self.array_diff(self.keys, row.keys())
            if missing and not self.accept_missing:
                raise KeyError(
                    f"The row is missing keys of the CSV header: {sorted(missing)}"
                )

            row = {key: row.get(key, -1) for key in self.keys}

        with open(self.file_name, "a", encoding="utf-8") as out_file:
            out_file.write(",".join(str(row[key]) for key in self.keys) + "\n")

        self.num_rows += 1

    @staticmethod
    def array_diff(array_x, array_y):
        """Returns the elements of the first array missing from the second.

        Parameters
        ----------
        array_x : Iterable[str]
            First array of strings
        array_y : Iterable[str]
            Second array of strings

        Returns
        -------
        Set[str]
            Keys of `array_x` which do not appear in `array_y`
        """
        return set(array_x).difference(array_y)
