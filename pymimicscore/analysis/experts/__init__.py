"""
Expert Ensemble for Mimicry Similarity.

6-Expert ensemble, one expert per descriptor:

- TimbreExpert: Band-energy (MFCC-like) cosine similarity
- MelodicExpert: Autocorrelation pitch contour match
- EnergyFlowExpert: RMS envelope correlation
- SpectralExpert: Spectral centroid (brightness) match
- DynamicsExpert: Overall loudness ratio
- PhraseExpert: Duration match
"""

from pymimicscore.analysis.experts.base import (
    ComparisonContext,
    Expert,
    align,
    aligned_indices,
    cosine_similarity,
    pearson_correlation,
)
from pymimicscore.analysis.experts.timbre import TimbreExpert
from pymimicscore.analysis.experts.melodic import MelodicExpert
from pymimicscore.analysis.experts.energy_flow import EnergyFlowExpert
from pymimicscore.analysis.experts.spectral import SpectralExpert
from pymimicscore.analysis.experts.dynamics import DynamicsExpert
from pymimicscore.analysis.experts.phrase import PhraseExpert
from pymimicscore.analysis.experts.ensemble import ExpertEnsemble

__all__ = [
    # Base
    'Expert',
    'ComparisonContext',
    'align',
    'aligned_indices',
    'cosine_similarity',
    'pearson_correlation',

    # Experts
    'TimbreExpert',
    'MelodicExpert',
    'EnergyFlowExpert',
    'SpectralExpert',
    'DynamicsExpert',
    'PhraseExpert',

    # Ensemble
    'ExpertEnsemble',
]
