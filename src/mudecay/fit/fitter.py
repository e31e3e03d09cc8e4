"""Least-squares fits of parametric models to histograms."""

from dataclasses import dataclass, field
from typing import Dict, List

import numpy as np
from scipy.optimize import curve_fit

from .models import get_model

__all__ = ["FitResult", "fit_histogram"]


@dataclass
class FitResult:
    """Outcome of a histogram fit.

    Attributes
    ----------
    model : str
        Name of the fitted model
    hist : str
        Name of the fitted histogram
    names : List[str]
        Names of the parameters
    values : np.ndarray
        Best-fit values of the parameters
    errors : np.ndarray
        Uncertainties of the parameters (0 for fixed parameters)
    chi2 : float
        Chi-square of the fit
    ndf : int
        Number of degrees of freedom
    xmin : float
        Lower edge of the fit range
    xmax : float
        Upper edge of the fit range
    fixed : Dict[str, float]
        Parameters held constant during the fit
    """

    model: str
    hist: str
    names: List[str]
    values: np.ndarray
    errors: np.ndarray
    chi2: float
    ndf: int
    xmin: float
    xmax: float
    fixed: Dict[str, float] = field(default_factory=dict)

    def __getitem__(self, name):
        """Returns the (value, error) pair of one parameter."""
        idx = self.names.index(name)
        return self.values[idx], self.errors[idx]

    @property
    def chi2_ndf(self):
        """Reduced chi-square."""
        return self.chi2 / self.ndf if self.ndf > 0 else np.inf

    def __str__(self):
        """Fit summary, one parameter per line."""
        lines = [
            f"Fit of `{self.hist}` with `{self.model}` in "
            f"[{self.xmin:g}, {self.xmax:g}] ns",
            f"  chi2 / ndf = {self.chi2:.2f} / {self.ndf}",
        ]
        for name, value, error in zip(self.names, self.values, self.errors):
            suffix = " (fixed)" if name in self.fixed else f" +/- {error:.4g}"
            lines.append(f"  {name:>10} = {value:.6g}{suffix}")

        return "\n".join(lines)

    def as_dict(self):
        """Flat dictionary of the fit outcome (one CSV row)."""
        row = {
            "model": self.model,
            "hist": self.hist,
            "xmin": self.xmin,
            "xmax": self.xmax,
        }
        for name, value, error in zip(self.names, self.values, self.errors):
            row[name] = value
            row[f"{name}_err"] = error
        row["chi2"] = self.chi2
        row["ndf"] = self.ndf

        return row


def fit_histogram(hist, model, xmin=300.0, xmax=20000.0, p0=None, **fixed):
    """Fits a model to the content of a histogram.

    Only the bins whose center lies within `[xmin, xmax]` and whose error is
    strictly positive enter the fit. The bin errors are used as absolute
    uncertainties of a least-squares fit bounded by the model limits.

    Parameters
    ----------
    hist : Histogram1D
        Histogram to fit
    model : Union[str, FitModel]
        Model (or model name) to fit
    xmin : float, default 300.
        Lower edge of the fit range in ns
    xmax : float, default 20000.
        Upper edge of the fit range in ns
    p0 : Dict[str, float], optional
        Starting values which override the model defaults
    **fixed : dict, optional
        Parameter values to hold constant (`None` releases a parameter the
        model fixes by default)

    Returns
    -------
    FitResult
        Outcome of the fit
    """
    model = get_model(model)
    if fixed:
        model = model.with_fixed(**fixed)

    # Select the bins to fit
    centers, counts, errors = hist.centers, hist.counts, hist.errors
    mask = (centers >= xmin) & (centers <= xmax) & (errors > 0)
    x, y, sigma = centers[mask], counts[mask], errors[mask]

    # Build the list of free parameters and their starting point
    names = list(model.param_names)
    free = [i for i, name in enumerate(names) if name not in model.fixed]
    start = list(model.p0)
    for key, value in (p0 or {}).items():
        start[names.index(key)] = value

    num_free = len(free)
    if len(x) <= num_free:
        raise ValueError(
            f"Cannot fit {num_free} free parameter(s) of `{model.name}` to "
            f"{len(x)} usable bin(s) of `{hist.name}` in [{xmin}, {xmax}]."
        )

    def function(t, *params):
        full = [model.fixed.get(name, 0.0) for name in names]
        for i, value in zip(free, params):
            full[i] = value
        return model(t, *full)

    lower = [model.bounds[i][0] for i in free]
    upper = [model.bounds[i][1] for i in free]
    popt, pcov = curve_fit(
        function,
        x,
        y,
        p0=[start[i] for i in free],
        sigma=sigma,
        absolute_sigma=True,
        bounds=(lower, upper),
    )

    # Assemble the complete parameter set
    values = np.array([model.fixed.get(name, 0.0) for name in names], dtype=float)
    errs = np.zeros(len(names))
    values[free] = popt
    errs[free] = np.sqrt(np.abs(np.diag(pcov)))

    residuals = (y - function(x, *popt)) / sigma
    chi2 = float(np.sum(residuals**2))

    return FitResult(
        model=model.name,
        hist=hist.name,
        names=names,
        values=values,
        errors=errs,
        chi2=chi2,
        ndf=len(x) - num_free,
        xmin=xmin,
        xmax=xmax,
        fixed=dict(model.fixed),
    )
