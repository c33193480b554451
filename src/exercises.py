"""Supported exercises and their rep-counting thresholds."""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from landmarks import PoseLandmark as L
from settings import (
    PUSHUP_MIN_CONFIDENCE, PUSHUP_DOWN_THRESHOLD,
    PUSHUP_UP_THRESHOLD, PUSHUP_MIN_REP_GAP_MS,
    SQUAT_MIN_CONFIDENCE, SQUAT_DOWN_THRESHOLD,
    SQUAT_UP_THRESHOLD, SQUAT_MIN_REP_GAP_MS,
)

JointTriple = Tuple[L, L, L]


class Exercise(Enum):
    PUSHUP = "pushup"
    SQUAT = "squat"

    @property
    def config(self) -> "ExerciseConfig":
        return EXERCISE_CONFIGS[self]

    @property
    def label(self) -> str:
        return "push-ups" if self is Exercise.PUSHUP else "squats"


@dataclass(frozen=True)
class ExerciseConfig:
    min_confidence: float
    down_threshold: float
    up_threshold: float
    min_rep_gap_ms: float
    # (left, right); each triple's middle point is the measured joint
    sides: Tuple[JointTriple, JointTriple]


EXERCISE_CONFIGS = {
    Exercise.PUSHUP: ExerciseConfig(
        min_confidence=PUSHUP_MIN_CONFIDENCE,
        down_threshold=PUSHUP_DOWN_THRESHOLD,
        up_threshold=PUSHUP_UP_THRESHOLD,
        min_rep_gap_ms=PUSHUP_MIN_REP_GAP_MS,
        sides=(
            (L.LEFT_SHOULDER, L.LEFT_ELBOW, L.LEFT_WRIST),
            (L.RIGHT_SHOULDER, L.RIGHT_ELBOW, L.RIGHT_WRIST),
        ),
    ),
    Exercise.SQUAT: ExerciseConfig(
        min_confidence=SQUAT_MIN_CONFIDENCE,
        down_threshold=SQUAT_DOWN_THRESHOLD,
        up_threshold=SQUAT_UP_THRESHOLD,
        min_rep_gap_ms=SQUAT_MIN_REP_GAP_MS,
        sides=(
            (L.LEFT_HIP, L.LEFT_KNEE, L.LEFT_ANKLE),
            (L.RIGHT_HIP, L.RIGHT_KNEE, L.RIGHT_ANKLE),
        ),
    ),
}

_missing = set(Exercise) - set(EXERCISE_CONFIGS)
if _missing:
    raise RuntimeError(f"No rep-counting config for: {sorted(e.value for e in _missing)}")


def get_config(exercise) -> ExerciseConfig:
    """Config for an ``Exercise`` or its string id ("pushup" | "squat").

    Unknown ids raise ValueError.
    """
    return Exercise(exercise).config
