"""Fits of the decay time spectra.

- `models`: lifetime, muon capture and spin precession models
- `fitter`: bounded least-squares fit of a model to a histogram
- `combine`: afterpulse subtraction, layer sums and asymmetries
"""

from .combine import (
    accumulate,
    asymmetry,
    asymmetry_histograms,
    combine_layers,
    lifetime_histograms,
    subtract_afterpulses,
)
from .fitter import FitResult, fit_histogram
from .models import ASYMMETRY, CAPTURE, LIFETIME, MODEL_DICT, FitModel, get_model
