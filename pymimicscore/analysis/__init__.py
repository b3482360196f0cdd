"""
PyMimicScore Analysis Module - Mimicry Similarity Engine.

Architecture:
├── constants.py         - Framing, thresholds, weights and curve breakpoints
├── features.py          - Descriptor extraction (timbre, pitch, envelope, centroid, RMS)
├── scoring.py           - Piecewise score curve and breakdown record
├── main.py              - Comparison orchestration and fallback boundary
└── experts/             - 6-Expert ensemble for scoring
    ├── base.py          - Abstract expert interface, alignment helpers
    ├── timbre.py        - Band-energy timbre expert
    ├── melodic.py       - Pitch contour expert
    ├── energy_flow.py   - Envelope correlation expert
    ├── spectral.py      - Spectral centroid expert
    ├── dynamics.py      - Loudness expert
    ├── phrase.py        - Duration expert
    └── ensemble.py      - Fixed-weight expert ensemble
"""

# Descriptor extraction
from pymimicscore.analysis.features import (
    Features,
    extract_features,
    detect_onsets,
    HOP_SIZE,
    WINDOW_SIZE,
)

# Scoring
from pymimicscore.analysis.scoring import (
    ScoreBreakdown,
    adjust_score,
    final_score,
)

# Main entry points
from pymimicscore.analysis.main import (
    compare_waveforms,
    extract_pair,
    score_waveforms,
)

# Expert ensemble
from pymimicscore.analysis.experts import (
    Expert,
    ComparisonContext,
    TimbreExpert,
    MelodicExpert,
    EnergyFlowExpert,
    SpectralExpert,
    DynamicsExpert,
    PhraseExpert,
    ExpertEnsemble,
)


__all__ = [
    # Core
    'Features',
    'ScoreBreakdown',
    'extract_features',
    'extract_pair',
    'score_waveforms',
    'compare_waveforms',
    'adjust_score',
    'final_score',

    # Experts
    'Expert',
    'ComparisonContext',
    'TimbreExpert',
    'MelodicExpert',
    'EnergyFlowExpert',
    'SpectralExpert',
    'DynamicsExpert',
    'PhraseExpert',
    'ExpertEnsemble',

    # Reserved descriptor (not fused)
    'detect_onsets',

    # Constants
    'HOP_SIZE',
    'WINDOW_SIZE',
]
