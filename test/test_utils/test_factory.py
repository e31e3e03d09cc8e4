"""Tests for the class factory functions."""

import sys

import pytest

from mudecay.utils.factory import instantiate, module_dict


class Counter:
    """Dummy class to instantiate."""

    name = "counter"
    aliases = ("count",)

    def __init__(self, start=0, step=1):
        self.start = start
        self.step = step


class Broken:
    """Dummy class which fails to initialize."""

    def __init__(self):
        raise RuntimeError("broken")


def test_module_dict():
    """Classes are registered under their class name, name and aliases."""
    classes = module_dict(sys.modules[__name__])
    assert classes["Counter"] is Counter
    assert classes["counter"] is Counter
    assert classes["count"] is Counter
    assert classes["Broken"] is Broken
    assert "pytest" not in classes


def test_instantiate():
    """Classes are built from a name or a configuration block."""
    classes = {"counter": Counter, "broken": Broken}
    assert instantiate(classes, "counter").start == 0

    counter = instantiate(classes, {"name": "counter", "start": 3}, step=2)
    assert (counter.start, counter.step) == (3, 2)


def test_instantiate_errors():
    """Invalid configuration blocks are rejected."""
    classes = {"counter": Counter, "broken": Broken}
    with pytest.raises(KeyError):
        instantiate(classes, {"start": 3})
    with pytest.raises(ValueError):
        instantiate(classes, "unknown")
    with pytest.raises(KeyError):
        instantiate(classes, {"name": "counter", "step": 2}, step=3)
    with pytest.raises(RuntimeError):
        instantiate(classes, "broken")
