from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path

from pymimicscore.analysis import ScoreBreakdown, compare_waveforms, score_waveforms
from pymimicscore.analysis.constants import MAX_RECORDING_SECONDS, SPECTRUM_SYNTHETIC
from pymimicscore.audio import Waveform, load_waveform
from pymimicscore.exceptions import MissingInputError


@dataclass(slots=True, frozen=True)
class TurnContext:
    """Buffers of one mimicry turn, passed explicitly to every step.

    Slots:
        reference: player 1's original (forward) recording.
        reference_reversed: the reference played backward to player 2.
        attempt: player 2's raw imitation of the reversed reference.
        attempt_forward: the imitation reversed back to forward orientation.

    Every step returns a new context; nothing is mutated in place.
    """

    reference: Waveform | None = None
    reference_reversed: Waveform | None = None
    attempt: Waveform | None = None
    attempt_forward: Waveform | None = None

    @classmethod
    def from_files(
        cls,
        reference_path: str | Path,
        attempt_path: str | Path,
        max_duration: float | None = MAX_RECORDING_SECONDS,
    ) -> TurnContext:
        """Load both recordings of a turn and prepare all derived slots."""
        return (
            cls()
            .with_reference(load_waveform(reference_path, max_duration=max_duration))
            .reverse_reference()
            .with_attempt(load_waveform(attempt_path, max_duration=max_duration))
            .reverse_attempt()
        )

    def with_reference(self, waveform: Waveform) -> TurnContext:
        return dataclasses.replace(self, reference=waveform, reference_reversed=None)

    def with_attempt(self, waveform: Waveform) -> TurnContext:
        return dataclasses.replace(self, attempt=waveform, attempt_forward=None)

    def with_attempt_forward(self, waveform: Waveform) -> TurnContext:
        """Use an imitation that is already in forward orientation."""
        return dataclasses.replace(self, attempt=None, attempt_forward=waveform)

    def reverse_reference(self) -> TurnContext:
        """Fill ``reference_reversed`` for playback to the mimicking player."""
        if self.reference is None:
            raise MissingInputError("No reference recording to reverse.")
        logging.info(f"Reversing reference ({self.reference.duration:.2f}s)")
        return dataclasses.replace(self, reference_reversed=self.reference.reversed())

    def reverse_attempt(self) -> TurnContext:
        """Fill ``attempt_forward``; this is the version compared to the reference."""
        if self.attempt is None:
            raise MissingInputError("No attempt recording to reverse.")
        logging.info(f"Reversing attempt back to forward ({self.attempt.duration:.2f}s)")
        return dataclasses.replace(self, attempt_forward=self.attempt.reversed())

    def breakdown(self, spectrum: str = SPECTRUM_SYNTHETIC, parallel: bool = False) -> ScoreBreakdown:
        """Full score breakdown; raises MissingInputError if a slot is empty."""
        return score_waveforms(self.reference, self.attempt_forward, spectrum=spectrum, parallel=parallel)

    def score(self, spectrum: str = SPECTRUM_SYNTHETIC, parallel: bool = False) -> int:
        """Similarity score for the turn, or the participation score if a slot is empty."""
        return compare_waveforms(self.reference, self.attempt_forward, spectrum=spectrum, parallel=parallel)

    def reset(self) -> TurnContext:
        return TurnContext()
