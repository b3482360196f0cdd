from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import librosa
import numpy as np

from pymimicscore.analysis.constants import MAX_RECORDING_SECONDS, SILENCE_AMPLITUDE
from pymimicscore.exceptions import AudioLoadError, InvalidWaveformError


@dataclass(slots=True, frozen=True)
class Waveform:
    """Immutable single-channel recording handed to the similarity engine."""

    samples: np.ndarray
    sample_rate: int

    def __post_init__(self) -> None:
        try:
            rate = int(self.sample_rate)
        except (TypeError, ValueError) as e:
            raise InvalidWaveformError(f"Sample rate must be a positive integer, got {self.sample_rate!r}.") from e
        if rate != self.sample_rate or rate <= 0:
            raise InvalidWaveformError(f"Sample rate must be a positive integer, got {self.sample_rate!r}.")

        samples = np.array(self.samples, dtype=np.float64)
        if samples.ndim == 2:
            # Channel axis is the shorter one; analysis uses the first channel
            samples = samples[0].copy() if samples.shape[0] <= samples.shape[1] else samples[:, 0].copy()
        if samples.ndim != 1:
            raise InvalidWaveformError(f"Expected 1D or 2D sample data, got {samples.ndim} dimensions.")
        if not np.all(np.isfinite(samples)):
            raise InvalidWaveformError("Sample data contains NaN or infinite values.")

        samples.setflags(write=False)
        object.__setattr__(self, "samples", samples)
        object.__setattr__(self, "sample_rate", rate)

    @classmethod
    def from_array(cls, samples, sample_rate: int) -> Waveform:
        """Build a waveform from 1D samples or 2D multi-channel data.

        2D input may be (channels, samples), as returned by librosa, or
        (samples, channels), as returned by soundfile. The shorter axis is
        taken as the channel axis and only the first channel is kept.
        """
        return cls(samples=np.asarray(samples), sample_rate=sample_rate)

    @property
    def length(self) -> int:
        return int(self.samples.shape[0])

    @property
    def duration(self) -> float:
        return self.length / self.sample_rate

    @property
    def peak(self) -> float:
        return float(np.max(np.abs(self.samples))) if self.length else 0.0

    @property
    def is_silent(self) -> bool:
        return self.peak < SILENCE_AMPLITUDE

    def reversed(self) -> Waveform:
        """Mirror the recording in time: ``out[i] = in[length - 1 - i]``."""
        return Waveform(samples=self.samples[::-1], sample_rate=self.sample_rate)

    def truncated(self, n_samples: int) -> Waveform:
        if n_samples >= self.length:
            return self
        return Waveform(samples=self.samples[:max(0, n_samples)], sample_rate=self.sample_rate)

    def samples_to_seconds(self, samples: int) -> float:
        return float(librosa.samples_to_time(samples, sr=self.sample_rate))

    def seconds_to_samples(self, seconds: float) -> int:
        return int(librosa.time_to_samples(seconds, sr=self.sample_rate))


def load_waveform(filepath: str | Path, max_duration: float | None = MAX_RECORDING_SECONDS) -> Waveform:
    """Load an audio file at its native sample rate as a :class:`Waveform`.

    Multi-channel files keep only their first channel. Recordings longer than
    ``max_duration`` seconds are cut to the cap, mirroring the capture limit of
    the game.

    Args:
        filepath: Path to any format supported by librosa/soundfile.
        max_duration: Duration cap in seconds, or None to keep everything.

    Returns:
        The loaded waveform.

    Raises:
        AudioLoadError: If the file cannot be decoded or holds no samples.
    """
    path = Path(filepath)

    try:
        raw_audio, sr = librosa.load(path, sr=None, mono=False)
    except Exception as e:
        raise AudioLoadError(
            f"{path.name} could not be loaded. Invalid audio data or unsupported format."
        ) from e

    if raw_audio.size == 0:
        raise AudioLoadError(f'No audio data could be loaded from "{path}".')

    # librosa returns (channels, samples) for multi-channel files
    samples = raw_audio[0] if raw_audio.ndim == 2 else raw_audio
    waveform = Waveform(samples=samples, sample_rate=int(sr))

    if max_duration is not None and waveform.duration > max_duration:
        kept = waveform.seconds_to_samples(max_duration)
        logging.warning(
            f"{path.name} is {waveform.duration:.2f}s long; "
            f"only the first {waveform.samples_to_seconds(kept):.1f}s are scored."
        )
        waveform = waveform.truncated(kept)

    if waveform.is_silent:
        logging.warning(f"{path.name} is nearly silent (peak amplitude {waveform.peak:.4f}).")

    return waveform
