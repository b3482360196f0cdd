"""
Analysis Constants - All thresholds and parameters.

Centralized configuration for the similarity engine so that both recordings
of a turn are always analyzed with identical parameters.
"""

from __future__ import annotations

# ============================================================================
# FRAMING
# ============================================================================

WINDOW_SIZE = 2048  # Samples per analysis window (all descriptors)
HOP_SIZE = 512  # Hop for timbre and pitch frames
ENVELOPE_HOP_SIZE = WINDOW_SIZE // 2  # Hop for the RMS envelope
CENTROID_FRAME_SIZE = WINDOW_SIZE  # Non-overlapping centroid frames

# Synthetic spectrum: only the first half of each window is read as bins
N_BINS = WINDOW_SIZE // 2

# ============================================================================
# TIMBRE
# ============================================================================

N_BANDS = 13  # Standard MFCC count
LOG_FLOOR = 1e-10  # Added before ln() so silent bands stay finite
COSINE_EPSILON = 1e-10

SPECTRUM_SYNTHETIC = "synthetic"
SPECTRUM_FFT = "fft"
SPECTRUM_MODES = (SPECTRUM_SYNTHETIC, SPECTRUM_FFT)

# ============================================================================
# PITCH
# ============================================================================

PITCH_MIN_HZ = 80.0
PITCH_MAX_HZ = 500.0
VOICING_THRESHOLD = 0.3  # Raw autocorrelation above which a frame is voiced
UNVOICED = 0.0
PITCH_NEUTRAL_SIMILARITY = 0.5  # No voiced frame on either side

# ============================================================================
# ENVELOPE / ENERGY / DURATION
# ============================================================================

ENVELOPE_STD_MIN = 1e-12  # Below this an envelope counts as constant
ENERGY_FLOOR = 0.001  # Denominator guard for the loudness ratio
CENTROID_FLOOR = 1.0  # Denominator guard for the brightness ratio (Hz)
DURATION_FLOOR = 1e-9  # Denominator guard when both buffers are empty

# ============================================================================
# ONSETS (reserved descriptor, not fused)
# ============================================================================

ONSET_BLOCK_SIZE = 512
ONSET_THRESHOLD = 0.1  # Relative energy rise that counts as an onset
ONSET_MIN_ENERGY = 0.01

# ============================================================================
# FUSION
# ============================================================================

WEIGHT_TIMBRE = 0.35
WEIGHT_PITCH = 0.25
WEIGHT_ENVELOPE = 0.15
WEIGHT_CENTROID = 0.10
WEIGHT_ENERGY = 0.10
WEIGHT_DURATION = 0.05

# Piecewise curve: raw (0.7, 1.0] -> (50, 100], (0.4, 0.7] -> (20, 50], [0, 0.4] -> [0, 20]
CURVE_HIGH_THRESHOLD = 0.7
CURVE_HIGH_BASE = 50.0
CURVE_HIGH_SLOPE = 166.667
CURVE_MID_THRESHOLD = 0.4
CURVE_MID_BASE = 20.0
CURVE_MID_SLOPE = 100.0
CURVE_LOW_SLOPE = 50.0

SCORE_MIN = 0
SCORE_MAX = 100

# "Participation" score returned whenever a comparison cannot be made
FALLBACK_SCORE = 30

# ============================================================================
# INPUT
# ============================================================================

MAX_RECORDING_SECONDS = 10.0
SILENCE_AMPLITUDE = 0.001  # Peak amplitude under which a buffer is reported as silent
