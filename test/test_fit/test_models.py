"""Test the fit models."""

import numpy as np
import pytest

from mudecay.fit import ASYMMETRY, CAPTURE, LIFETIME, MODEL_DICT, FitModel, get_model


def test_lifetime():
    """Exponential decay on top of a flat background."""
    t = np.array([0.0, 2000.0])
    np.testing.assert_allclose(
        LIFETIME(t, 10.0, 100.0, 2000.0), [110.0, 10.0 + 100.0 / np.e]
    )


def test_capture():
    """Without capture (infinite capture time), a ratio r scales the decay."""
    values = CAPTURE(np.array([0.0]), 0.0, 100.0, 2000.0, 1e12, 4.0)
    np.testing.assert_allclose(values, [125.0])


def test_asymmetry():
    """Cosine oscillation around a constant."""
    values = ASYMMETRY(np.array([0.0, np.pi / 1e-3]), 0.1, 0.2, 1e-3, 0.0)
    np.testing.assert_allclose(values, [0.2, 0.0], atol=1e-12)


def test_defaults():
    """Starting values lie within the limits of every model."""
    for model in MODEL_DICT.values():
        for value, (low, high) in zip(model.p0, model.bounds):
            assert low <= value <= high
    assert CAPTURE.fixed == {"ratio": 1.275}


def test_with_fixed():
    """Fixed parameters can be changed or released."""
    model = CAPTURE.with_fixed(ratio=None, tau_c=900.0)
    assert model.fixed == {"tau_c": 900.0}
    assert CAPTURE.fixed == {"ratio": 1.275}


def test_get_model():
    """Models are fetched by name."""
    assert get_model("lifetime") is LIFETIME
    assert get_model(LIFETIME) is LIFETIME
    with pytest.raises(ValueError):
        get_model("exponential")


def test_invalid_model():
    """Models need consistent parameter definitions."""
    with pytest.raises(ValueError):
        FitModel("bad", np.exp, ("a", "b"), (1.0,), ((0, 1), (0, 1)))
    with pytest.raises(KeyError):
        FitModel("bad", np.exp, ("a",), (1.0,), ((0, 2),), fixed={"b": 1.0})
