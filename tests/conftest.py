"""Pytest configuration and fixtures for the test suite."""

import numpy as np
import pytest

from pymimicscore.audio import Waveform

from tests.fixtures import swelling_tone, tone


SAMPLE_RATE = 16000


@pytest.fixture
def voiced_waveform() -> Waveform:
    """One second of a swelling 220 Hz tone at 16 kHz."""
    return Waveform.from_array(swelling_tone(220.0, 1.0, SAMPLE_RATE), SAMPLE_RATE)


@pytest.fixture
def other_voiced_waveform() -> Waveform:
    """A shorter, higher performance at 16 kHz (0.8 s at 330 Hz)."""
    return Waveform.from_array(swelling_tone(330.0, 0.8, SAMPLE_RATE), SAMPLE_RATE)


@pytest.fixture
def noise_waveform() -> Waveform:
    """1.2 seconds of reproducible white noise."""
    rng = np.random.default_rng(1234)
    return Waveform.from_array(rng.normal(0.0, 0.3, int(1.2 * SAMPLE_RATE)), SAMPLE_RATE)


@pytest.fixture
def silent_waveform() -> Waveform:
    """One second of digital silence."""
    return Waveform.from_array(np.zeros(SAMPLE_RATE), SAMPLE_RATE)


@pytest.fixture
def tone_48k() -> Waveform:
    """One second of a full-scale 220 Hz tone at 48 kHz."""
    return Waveform.from_array(tone(220.0, 1.0, 48000), 48000)


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow"
    )
