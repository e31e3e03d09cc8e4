"""One-dimensional histogram with per-bin error bookkeeping."""

import numpy as np

__all__ = ["Histogram1D"]


class Histogram1D:
    """Fixed-width one-dimensional histogram.

    Stores the sum of weights and the sum of squared weights of each bin, so
    that bin errors survive additions, scalings and divisions. Values below
    the lower edge go to the underflow, values at or above the upper edge go
    to the overflow.

    Attributes
    ----------
    name : str
        Name of the histogram (key in the output file)
    title : str
        Human-readable description
    counts : np.ndarray
        (B) Sum of weights in each bin
    sumw2 : np.ndarray
        (B) Sum of squared weights in each bin
    underflow : float
        Sum of weights below the lower edge
    overflow : float
        Sum of weights at or above the upper edge
    """

    def __init__(self, name, num_bins, low, high, title=""):
        """Initialize an empty histogram.

        Parameters
        ----------
        name : str
            Name of the histogram
        num_bins : int
            Number of bins
        low : float
            Lower edge of the first bin
        high : float
            Upper edge of the last bin
        title : str, optional
            Human-readable description
        """
        if num_bins < 1:
            raise ValueError(f"A histogram needs at least one bin, got {num_bins}.")
        if not high > low:
            raise ValueError(
                f"The upper edge ({high}) must be above the lower edge ({low})."
            )

        self.name = name
        self.title = title
        self.num_bins = int(num_bins)
        self.low = float(low)
        self.high = float(high)
        self.reset()

    def __repr__(self):
        """Short representation of the histogram."""
        return (
            f"Histogram1D(name={self.name!r}, num_bins={self.num_bins}, "
            f"low={self.low}, high={self.high}, entries={self.entries})"
        )

    def reset(self):
        """Empties the histogram."""
        self.counts = np.zeros(self.num_bins, dtype=np.float64)
        self.sumw2 = np.zeros(self.num_bins, dtype=np.float64)
        self.underflow = 0.0
        self.overflow = 0.0
        self.entries = 0

    @property
    def width(self):
        """Width of each bin."""
        return (self.high - self.low) / self.num_bins

    @property
    def edges(self):
        """(B+1) Bin edges."""
        return np.linspace(self.low, self.high, self.num_bins + 1)

    @property
    def centers(self):
        """(B) Bin centers."""
        edges = self.edges
        return 0.5 * (edges[1:] + edges[:-1])

    @property
    def errors(self):
        """(B) Bin errors, i.e. square root of the sum of squared weights."""
        return np.sqrt(self.sumw2)

    def find_bin(self, x):
        """Index of the bin a value falls in.

        Parameters
        ----------
        x : float
            Value

        Returns
        -------
        int
            Bin index, -1 for the underflow, `num_bins` for the overflow
        """
        if x < self.low:
            return -1
        if x >= self.high:
            return self.num_bins

        return min(int((x - self.low) / self.width), self.num_bins - 1)

    def fill(self, x, weight=1.0):
        """Adds one value to the histogram.

        Parameters
        ----------
        x : float
            Value
        weight : float, default 1.0
            Weight of the value
        """
        self.entries += 1
        idx = self.find_bin(x)
        if idx < 0:
            self.underflow += weight
        elif idx >= self.num_bins:
            self.overflow += weight
        else:
            self.counts[idx] += weight
            self.sumw2[idx] += weight**2

    def integral(self):
        """Sum of the weights in the bins (under/overflow excluded)."""
        return float(np.sum(self.counts))

    def copy(self, name=None, title=None):
        """Returns an independent copy of the histogram.

        Parameters
        ----------
        name : str, optional
            Name of the copy. If not specified, keep the same name
        title : str, optional
            Title of the copy. If not specified, keep the same title

        Returns
        -------
        Histogram1D
            Copy of the histogram
        """
        hist = Histogram1D(
            name or self.name,
            self.num_bins,
            self.low,
            self.high,
            self.title if title is None else title,
        )
        hist.counts = self.counts.copy()
        hist.sumw2 = self.sumw2.copy()
        hist.underflow = self.underflow
        hist.overflow = self.overflow
        hist.entries = self.entries

        return hist

    def check_compatible(self, other):
        """Checks that two histograms share the same binning.

        Parameters
        ----------
        other : Histogram1D
            Other histogram
        """
        if (self.num_bins, self.low, self.high) != (
            other.num_bins,
            other.low,
            other.high,
        ):
            raise ValueError(
                f"Histograms `{self.name}` and `{other.name}` do not share the "
                "same binning."
            )

    def add(self, other, scale=1.0):
        """Adds a scaled histogram to this one in place.

        Parameters
        ----------
        other : Histogram1D
            Histogram to add
        scale : float, default 1.0
            Factor applied to the other histogram (may be negative)

        Returns
        -------
        Histogram1D
            This histogram
        """
        self.check_compatible(other)
        self.counts += scale * other.counts
        self.sumw2 += scale**2 * other.sumw2
        self.underflow += scale * other.underflow
        self.overflow += scale * other.overflow
        self.entries += other.entries

        return self

    def scale(self, factor):
        """Scales the histogram in place.

        Parameters
        ----------
        factor : float
            Scaling factor

        Returns
        -------
        Histogram1D
            This histogram
        """
        self.counts *= factor
        self.sumw2 *= factor**2
        self.underflow *= factor
        self.overflow *= factor

        return self

    def divide(self, other):
        """Divides this histogram by another one, bin by bin, in place.

        Bins with an empty denominator are set to zero. The errors of both
        histograms are propagated as uncorrelated.

        Parameters
        ----------
        other : Histogram1D
            Denominator histogram

        Returns
        -------
        Histogram1D
            This histogram
        """
        self.check_compatible(other)
        num, den = self.counts, other.counts
        valid = den != 0

        ratio = np.zeros_like(num)
        sumw2 = np.zeros_like(num)
        ratio[valid] = num[valid] / den[valid]
        sumw2[valid] = (
            self.sumw2[valid] * den[valid] ** 2 + other.sumw2[valid] * num[valid] ** 2
        ) / den[valid] ** 4

        self.counts, self.sumw2 = ratio, sumw2
        self.underflow, self.overflow = 0.0, 0.0

        return self

    def __add__(self, other):
        """Sum of two histograms (new object)."""
        return self.copy().add(other)

    def __sub__(self, other):
        """Difference of two histograms (new object)."""
        return self.copy().add(other, -1.0)

    def __truediv__(self, other):
        """Ratio of two histograms (new object)."""
        return self.copy().divide(other)

    def as_dict(self):
        """Returns the histogram as a dictionary of plain attributes."""
        return {
            "name": self.name,
            "title": self.title,
            "num_bins": self.num_bins,
            "low": self.low,
            "high": self.high,
            "counts": self.counts.copy(),
            "sumw2": self.sumw2.copy(),
            "underflow": self.underflow,
            "overflow": self.overflow,
            "entries": self.entries,
        }

    @classmethod
    def from_dict(cls, data):
        """Builds a histogram from the output of :meth:`as_dict`.

        Parameters
        ----------
        data : dict
            Dictionary of histogram attributes

        Returns
        -------
        Histogram1D
            Histogram object
        """
        hist = cls(
            data["name"], data["num_bins"], data["low"], data["high"], data["title"]
        )
        hist.counts = np.asarray(data["counts"], dtype=np.float64).copy()
        hist.sumw2 = np.asarray(data["sumw2"], dtype=np.float64).copy()
        hist.underflow = float(data["underflow"])
        hist.overflow = float(data["overflow"])
        hist.entries = int(data["entries"])

        return hist
