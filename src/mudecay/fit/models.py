"""Parametric models fitted to the decay time distributions."""

from dataclasses import dataclass, field
from typing import Callable, Dict, Tuple

import numpy as np

__all__ = ["FitModel", "LIFETIME", "CAPTURE", "ASYMMETRY", "MODEL_DICT", "get_model"]


def lifetime(t, bg, n_mu, tau):
    """Exponential decay on top of a flat background.

    Parameters
    ----------
    t : np.ndarray
        Decay times in ns
    bg : float
        Background level
    n_mu : float
        Normalization of the decay spectrum
    tau : float
        Muon lifetime in ns

    Returns
    -------
    np.ndarray
        Expected counts
    """
    return n_mu * np.exp(-t / tau) + bg


def capture(t, bg, n_mu_plus, tau, tau_c, ratio):
    """Decay spectrum of a mix of positive and negative muons.

    Negative muons can be captured by a nucleus, which shortens their
    apparent lifetime by the capture time `tau_c`.

    Parameters
    ----------
    t : np.ndarray
        Decay times in ns
    bg : float
        Background level
    n_mu_plus : float
        Normalization of the positive muon decay spectrum
    tau : float
        Free muon lifetime in ns
    tau_c : float
        Capture lifetime in ns
    ratio : float
        Ratio of positive to negative muons

    Returns
    -------
    np.ndarray
        Expected counts
    """
    return n_mu_plus * np.exp(-t / tau) * (np.exp(-t / tau_c) / ratio + 1.0) + bg


def asymmetry(t, bg, pa, omega, phi):
    """Spin precession signal in the up/down decay asymmetry.

    Parameters
    ----------
    t : np.ndarray
        Decay times in ns
    bg : float
        Constant offset
    pa : float
        Product of the muon polarization and the decay asymmetry
    omega : float
        Larmor frequency in rad/ns
    phi : float
        Phase at t = 0

    Returns
    -------
    np.ndarray
        Expected asymmetry
    """
    return bg + pa / 2.0 * np.cos(omega * t + phi)


@dataclass(frozen=True)
class FitModel:
    """Fit function along with its default starting point and limits.

    Attributes
    ----------
    name : str
        Name of the model
    function : Callable
        Function of the form `f(t, *params)`
    param_names : Tuple[str]
        Names of the parameters, in the order `function` takes them
    p0 : Tuple[float]
        Starting values of the parameters
    bounds : Tuple[Tuple[float, float]]
        (lower, upper) limits of each parameter
    fixed : Dict[str, float]
        Parameters held constant during the fit, with their value
    """

    name: str
    function: Callable
    param_names: Tuple[str, ...]
    p0: Tuple[float, ...]
    bounds: Tuple[Tuple[float, float], ...]
    fixed: Dict[str, float] = field(default_factory=dict)

    def __post_init__(self):
        """Checks the consistency of the parameter definitions."""
        num_params = len(self.param_names)
        if len(self.p0) != num_params or len(self.bounds) != num_params:
            raise ValueError(
                f"Model `{self.name}` must provide one starting value and one "
                "pair of limits per parameter."
            )
        for key in self.fixed:
            if key not in self.param_names:
                raise KeyError(f"Model `{self.name}` has no parameter `{key}`.")

    def __call__(self, t, *params):
        return self.function(t, *params)

    def with_fixed(self, **fixed):
        """Returns a copy of the model with a different set of fixed values.

        Parameters
        ----------
        **fixed : dict
            Parameter values to hold constant. A value of `None` releases
            a parameter which is fixed by default

        Returns
        -------
        FitModel
            Updated model
        """
        values = dict(self.fixed)
        for key, value in fixed.items():
            if value is None:
                values.pop(key, None)
            else:
                values[key] = value

        return FitModel(
            self.name, self.function, self.param_names, self.p0, self.bounds, values
        )


LIFETIME = FitModel(
    name="lifetime",
    function=lifetime,
    param_names=("bg", "n_mu", "tau"),
    p0=(10.0, 5000.0, 2000.0),
    bounds=((0.01, 1e5), (0.0, 1e5), (1000.0, 1e4)),
)

CAPTURE = FitModel(
    name="capture",
    function=capture,
    param_names=("bg", "n_mu_plus", "tau", "tau_c", "ratio"),
    p0=(10.0, 5000.0, 2000.0, 800.0, 1.4),
    bounds=((1e-5, 1e2), (0.0, 1e6), (1700.0, 2700.0), (100.0, 1500.0), (0.05, 20.0)),
    fixed={"ratio": 1.275},
)

ASYMMETRY = FitModel(
    name="asymmetry",
    function=asymmetry,
    param_names=("bg", "pa", "omega", "phi"),
    p0=(0.01, 0.05, 3.4e-3, 0.0),
    bounds=((-10.0, 10.0), (0.0, 1.0), (5e-4, 5e-2), (-np.pi, 2.0 * np.pi)),
)

MODEL_DICT = {model.name: model for model in (LIFETIME, CAPTURE, ASYMMETRY)}


def get_model(model):
    """Fetches a fit model by name.

    Parameters
    ----------
    model : Union[str, FitModel]
        Name of the model (or the model itself)

    Returns
    -------
    FitModel
        Fit model
    """
    if isinstance(model, FitModel):
        return model
    if model not in MODEL_DICT:
        raise ValueError(
            f"Fit model not recognized: {model}. "
            f"Must be one of {list(MODEL_DICT.keys())}."
        )

    return MODEL_DICT[model]
