"""Scoring engine for the reverse mimicry game."""

__version__ = "1.0.0"

from pymimicscore.analysis import ScoreBreakdown, compare_waveforms, score_waveforms
from pymimicscore.audio import Waveform, load_waveform
from pymimicscore.core import TurnContext

__all__ = [
    "__version__",
    "ScoreBreakdown",
    "TurnContext",
    "Waveform",
    "compare_waveforms",
    "load_waveform",
    "score_waveforms",
]
