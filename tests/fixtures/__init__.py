"""Synthetic signal generators shared by the test suite."""

import numpy as np
import soundfile as sf

from pymimicscore.audio import Waveform


def tone(
    freq: float = 220.0,
    duration: float = 1.0,
    sample_rate: int = 16000,
    amplitude: float = 1.0,
) -> np.ndarray:
    """Pure sine samples."""
    t = np.arange(int(round(sample_rate * duration))) / sample_rate
    return amplitude * np.sin(2 * np.pi * freq * t)


def swelling_tone(
    freq: float = 220.0,
    duration: float = 1.0,
    sample_rate: int = 16000,
) -> np.ndarray:
    """Voiced, harmonic-rich tone whose loudness rises and falls."""
    t = np.arange(int(round(sample_rate * duration))) / sample_rate
    envelope = 0.25 + 0.5 * np.sin(np.pi * t / duration)
    carrier = np.sin(2 * np.pi * freq * t) + 0.3 * np.sin(2 * np.pi * 2 * freq * t)
    return 0.7 * envelope * carrier


def tone_waveform(**kwargs) -> Waveform:
    sample_rate = kwargs.get("sample_rate", 16000)
    return Waveform.from_array(tone(**kwargs), sample_rate)


def write_wav(path, samples: np.ndarray, sample_rate: int = 16000) -> str:
    sf.write(str(path), samples, sample_rate, subtype="FLOAT")
    return str(path)
