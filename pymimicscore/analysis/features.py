"""
Audio Descriptor Extraction Module.

Extracts the per-waveform descriptors compared by the similarity experts:
- Timbre: log band energies on a mel-spaced partition (MFCC-like)
- Pitch: autocorrelation pitch contour (0 Hz = unvoiced)
- Dynamics: short-time RMS envelope and total RMS energy
- Brightness: spectral centroid
- Duration

The timbre and centroid extractors read the first half of each time-domain
window directly as if it were a magnitude spectrum. This synthetic spectrum
is the scoring reference; ``spectrum="fft"`` swaps in a true magnitude
spectrum for experimentation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from numba import njit
from scipy.fft import rfft

from pymimicscore.analysis.constants import (
    CENTROID_FRAME_SIZE,
    ENVELOPE_HOP_SIZE,
    HOP_SIZE,
    LOG_FLOOR,
    N_BANDS,
    N_BINS,
    ONSET_BLOCK_SIZE,
    ONSET_MIN_ENERGY,
    ONSET_THRESHOLD,
    PITCH_MAX_HZ,
    PITCH_MIN_HZ,
    SPECTRUM_FFT,
    SPECTRUM_MODES,
    SPECTRUM_SYNTHETIC,
    UNVOICED,
    VOICING_THRESHOLD,
    WINDOW_SIZE,
)

if TYPE_CHECKING:
    from pymimicscore.audio import Waveform


@dataclass(slots=True, frozen=True)
class Features:
    """Immutable container for the descriptors of one waveform."""

    # Frame sequences
    timbre: np.ndarray           # (n_frames, 13) log band energies
    pitch: np.ndarray            # (n_frames,) Hz per frame, 0 = unvoiced
    envelope: np.ndarray         # (n_env_frames,) short-time RMS

    # Scalars
    spectral_centroid: float     # Mean synthetic-bin centroid (Hz)
    rms: float                   # Total RMS energy
    duration: float              # Seconds, of the untruncated recording

    sr: int
    n_samples: int

    @property
    def n_frames(self) -> int:
        return int(self.timbre.shape[0])

    @property
    def voiced_ratio(self) -> float:
        if self.pitch.size == 0:
            return 0.0
        return float(np.count_nonzero(self.pitch) / self.pitch.size)


def extract_features(
    waveform: Waveform,
    n_samples: int | None = None,
    spectrum: str = SPECTRUM_SYNTHETIC,
) -> Features:
    """
    Extract all descriptors of one waveform.

    Args:
        waveform: Recording to analyze
        n_samples: Analyze only the first ``n_samples`` samples (the pair-wise
            common length). Duration is always taken from the full recording.
        spectrum: "synthetic" (default) or "fft" magnitude source for the
            timbre and centroid extractors

    Returns:
        Features for this waveform
    """
    if spectrum not in SPECTRUM_MODES:
        raise ValueError(f"Unknown spectrum mode {spectrum!r}; expected one of {SPECTRUM_MODES}.")

    audio = waveform.samples
    if n_samples is not None:
        audio = audio[:max(0, n_samples)]
    audio = np.ascontiguousarray(audio, dtype=np.float64)
    sr = waveform.sample_rate

    timbre = extract_timbre(audio, sr, spectrum=spectrum)
    pitch = extract_pitch_contour(audio, sr)
    envelope = rms_envelope(audio)
    centroid = spectral_centroid(audio, sr, spectrum=spectrum)
    rms = total_rms(audio)

    logging.debug(
        f"Extracted {timbre.shape[0]} timbre/pitch frames, {envelope.size} envelope frames "
        f"from {audio.size} samples @ {sr} Hz"
    )

    return Features(
        timbre=timbre,
        pitch=pitch,
        envelope=envelope,
        spectral_centroid=centroid,
        rms=rms,
        duration=waveform.duration,
        sr=sr,
        n_samples=int(audio.size),
    )


# ============================================================================
# FRAMING
# ============================================================================


def frame_starts(n_samples: int, window: int = WINDOW_SIZE, hop: int = HOP_SIZE) -> np.ndarray:
    """Window start offsets; a window is only taken while ``start < n_samples - window``."""
    if n_samples <= window:
        return np.zeros(0, dtype=np.int64)
    return np.arange(0, n_samples - window, hop, dtype=np.int64)


def frame_signal(audio: np.ndarray, window: int = WINDOW_SIZE, hop: int = HOP_SIZE) -> np.ndarray:
    """Cut ``audio`` into a (n_frames, window) view of overlapping frames."""
    starts = frame_starts(audio.size, window, hop)
    if starts.size == 0:
        return np.zeros((0, window), dtype=np.float64)
    windows = np.lib.stride_tricks.sliding_window_view(audio, window)
    return windows[starts]


def _frame_magnitudes(frames: np.ndarray, spectrum: str) -> np.ndarray:
    """Per-frame magnitudes of the first ``N_BINS`` bins."""
    if spectrum == SPECTRUM_FFT:
        return np.abs(rfft(frames, axis=1))[:, :N_BINS]
    return np.abs(frames[:, :N_BINS])


# ============================================================================
# TIMBRE
# ============================================================================


def mel_band_edges(sr: int, n_bands: int = N_BANDS) -> np.ndarray:
    """Lower edges (Hz) of ``n_bands`` bands evenly spaced on the mel scale up to Nyquist."""
    mel_max = 2595.0 * np.log10(1.0 + sr / 2.0 / 700.0)
    mel = np.arange(n_bands, dtype=np.float64) / n_bands * mel_max
    return 700.0 * (10.0 ** (mel / 2595.0) - 1.0)


@njit(cache=True)
def _band_energies(magnitudes: np.ndarray, freqs: np.ndarray, edges: np.ndarray) -> np.ndarray:
    """Accumulate squared magnitudes into the band whose [low, high) edge holds each bin."""
    n_frames, n_bins = magnitudes.shape
    n_bands = edges.shape[0]
    energies = np.zeros((n_frames, n_bands), dtype=np.float64)

    for f in range(n_frames):
        for i in range(n_bins):
            freq = freqs[i]
            # The last edge has no upper neighbour, so the top band never fills
            for b in range(n_bands - 1):
                if freq >= edges[b] and freq < edges[b + 1]:
                    energies[f, b] += magnitudes[f, i] * magnitudes[f, i]
                    break

    return energies


def extract_timbre(audio: np.ndarray, sr: int, spectrum: str = SPECTRUM_SYNTHETIC) -> np.ndarray:
    """MFCC-like descriptor: ln band energy per frame, shape (n_frames, 13)."""
    frames = frame_signal(audio, WINDOW_SIZE, HOP_SIZE)
    if frames.shape[0] == 0:
        return np.zeros((0, N_BANDS), dtype=np.float64)

    magnitudes = np.ascontiguousarray(_frame_magnitudes(frames, spectrum))
    freqs = np.arange(N_BINS, dtype=np.float64) * sr / WINDOW_SIZE
    energies = _band_energies(magnitudes, freqs, mel_band_edges(sr))
    return np.log(energies + LOG_FLOOR)


# ============================================================================
# PITCH
# ============================================================================


@njit(cache=True, nogil=True)
def _autocorrelation_pitch(
    audio: np.ndarray,
    starts: np.ndarray,
    window: int,
    min_lag: int,
    max_lag: int,
    sr: float,
    threshold: float,
) -> np.ndarray:
    """Best-lag autocorrelation pitch per frame, 0 where the peak is below threshold."""
    contour = np.zeros(starts.shape[0], dtype=np.float64)
    lag_limit = min(max_lag, window // 2)

    for f in range(starts.shape[0]):
        pos = starts[f]
        max_corr = -np.inf
        best_lag = 0

        for lag in range(min_lag, lag_limit):
            corr = 0.0
            for i in range(window - lag):
                corr += audio[pos + i] * audio[pos + i + lag]
            if corr > max_corr:
                max_corr = corr
                best_lag = lag

        if max_corr > threshold and best_lag > 0:
            contour[f] = sr / best_lag

    return contour


def extract_pitch_contour(
    audio: np.ndarray,
    sr: int,
    min_freq: float = PITCH_MIN_HZ,
    max_freq: float = PITCH_MAX_HZ,
) -> np.ndarray:
    """Autocorrelation pitch contour in Hz, one value per 2048/512 frame."""
    starts = frame_starts(audio.size, WINDOW_SIZE, HOP_SIZE)
    if starts.size == 0:
        return np.zeros(0, dtype=np.float64)

    min_lag = int(np.floor(sr / max_freq))
    max_lag = int(np.floor(sr / min_freq))
    return _autocorrelation_pitch(
        np.ascontiguousarray(audio, dtype=np.float64),
        starts,
        WINDOW_SIZE,
        min_lag,
        max_lag,
        float(sr),
        VOICING_THRESHOLD,
    )


# ============================================================================
# DYNAMICS
# ============================================================================


def rms_envelope(audio: np.ndarray, window: int = WINDOW_SIZE, hop: int = ENVELOPE_HOP_SIZE) -> np.ndarray:
    """Short-time RMS over half-overlapping windows."""
    frames = frame_signal(audio, window, hop)
    if frames.shape[0] == 0:
        return np.zeros(0, dtype=np.float64)
    return np.sqrt(np.mean(frames ** 2, axis=1))


def total_rms(audio: np.ndarray) -> float:
    if audio.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(audio ** 2)))


# ============================================================================
# BRIGHTNESS
# ============================================================================


def spectral_centroid(audio: np.ndarray, sr: int, spectrum: str = SPECTRUM_SYNTHETIC) -> float:
    """
    Mean amplitude-weighted bin frequency over non-overlapping frames.

    Frames with no magnitude at all contribute 0 Hz but still count towards
    the mean.
    """
    n_frames = audio.size // CENTROID_FRAME_SIZE
    if n_frames == 0:
        return 0.0

    frames = audio[:n_frames * CENTROID_FRAME_SIZE].reshape(n_frames, CENTROID_FRAME_SIZE)
    magnitudes = _frame_magnitudes(frames, spectrum)
    freqs = np.arange(N_BINS, dtype=np.float64) * sr / CENTROID_FRAME_SIZE

    weighted = magnitudes @ freqs
    totals = magnitudes.sum(axis=1)
    centroids = np.divide(weighted, totals, out=np.zeros_like(weighted), where=totals > 0)
    return float(centroids.sum() / n_frames)


# ============================================================================
# ONSETS
# ============================================================================


def detect_onsets(
    audio: np.ndarray,
    threshold: float = ONSET_THRESHOLD,
    block_size: int = ONSET_BLOCK_SIZE,
) -> np.ndarray:
    """
    Sample offsets of blocks whose mean absolute amplitude jumps above the previous block.

    A block is an onset when its energy exceeds the previous block's by more
    than ``threshold`` (relative) and is above an absolute floor. This
    descriptor is not part of the fused similarity score.
    """
    starts = frame_starts(np.asarray(audio).size, block_size, block_size)
    if starts.size == 0:
        return np.zeros(0, dtype=np.int64)

    blocks = frame_signal(np.asarray(audio, dtype=np.float64), block_size, block_size)
    energy = np.mean(np.abs(blocks), axis=1)
    previous = np.concatenate(([0.0], energy[:-1]))
    is_onset = (energy > previous * (1.0 + threshold)) & (energy > ONSET_MIN_ENERGY)
    return starts[is_onset]
