"""Pytest configuration and fixtures."""

import os

import pytest

from cuecard.acquisition import HAMLET, ROMEO_AND_JULIET
from cuecard.config import CueCardSettings, reset_settings, set_settings


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test",
    )
    config.addinivalue_line(
        "markers",
        "unit: mark test as unit test",
    )


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Run every test against default settings, ignoring the caller's env."""
    for var in [k for k in os.environ if k.startswith("CUECARD_")]:
        monkeypatch.delenv(var, raising=False)

    reset_settings()
    set_settings(CueCardSettings())

    yield

    reset_settings()


@pytest.fixture
def romeo_text():
    """The bundled Romeo and Juliet balcony sample."""
    return ROMEO_AND_JULIET


@pytest.fixture
def hamlet_text():
    """The bundled Hamlet sample."""
    return HAMLET


@pytest.fixture
def two_act_text():
    """A short script with an act marker in the middle."""
    return "\n".join(
        [
            "La Bottega",
            "ROMEO: Buongiorno.",
            "GIULIETTA: Buongiorno a voi.",
            "ATTO II",
            "ROMEO: Di nuovo qui?",
            "GIULIETTA: Sempre.",
        ]
    )
