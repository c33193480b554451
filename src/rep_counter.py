# Rep counter
# - Angle per side from a joint triple (elbow for push-ups, knee for squats)
# - Confidence gate: low-visibility frames drop back to calibration
# - Phase machine calibrating -> up/down, a rep is a down -> up edge
# - Debounce: min gap between two awarded reps
#
# Pure functions only: the caller keeps the returned state and passes it back
# with the next frame. Calls for one session must not overlap.

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import NamedTuple, Optional

from exercises import Exercise, ExerciseConfig
from geometry import average, joint_angle
from landmarks import PoseFrame
from settings import MIN_LANDMARK_VISIBILITY, TIMESTAMP_UNIT

logger = logging.getLogger(__name__)


class Phase(Enum):
    CALIBRATING = "calibrating"
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True)
class RepCounterState:
    reps: int = 0
    phase: Phase = Phase.CALIBRATING
    last_rep_timestamp_ms: Optional[float] = None  # None until the first rep


class FrameDebug(NamedTuple):
    angle: float
    confidence: float


class FrameEvaluation(NamedTuple):
    next_state: RepCounterState
    rep_awarded: bool
    debug: FrameDebug


NO_READING = FrameDebug(angle=0.0, confidence=0.0)

# Elapsed-time magnitudes used by the "auto" unit guess
_NANOSECOND_CUTOFF = 100_000
_SECOND_CUTOFF = 10
_UNIT_TO_MS = {"ms": 1.0, "s": 1000.0, "ns": 1e-6}


def create_rep_counter_state() -> RepCounterState:
    return RepCounterState()


def normalize_elapsed_ms(raw_elapsed, unit=TIMESTAMP_UNIT) -> float:
    """Convert a raw timestamp difference to milliseconds.

    With ``unit="auto"`` the unit is guessed from magnitude: above 100k is read
    as nanoseconds, below 10 as seconds, anything in between as milliseconds.
    Non-finite or non-positive input gives 0.
    """
    if unit != "auto" and unit not in _UNIT_TO_MS:
        raise ValueError(f"Unknown timestamp unit: {unit!r}")
    if not math.isfinite(raw_elapsed) or raw_elapsed <= 0:
        return 0.0
    if unit != "auto":
        return raw_elapsed * _UNIT_TO_MS[unit]
    if raw_elapsed > _NANOSECOND_CUTOFF:
        return raw_elapsed / 1_000_000
    if raw_elapsed < _SECOND_CUTOFF:
        return raw_elapsed * 1000
    return float(raw_elapsed)


def _side_reading(frame: PoseFrame, triple) -> Optional[FrameDebug]:
    points = [frame.get(index) for index in triple]
    for point in points:
        if point is None:
            return None
        if not math.isfinite(point.visibility) or point.visibility <= MIN_LANDMARK_VISIBILITY:
            return None
        # joint_angle maps bad coordinates to 0 deg, which would read as a full bend
        if not (math.isfinite(point.x) and math.isfinite(point.y)):
            return None

    return FrameDebug(angle=joint_angle(*points), confidence=average(p.visibility for p in points))


def read_frame(config: ExerciseConfig, frame: Optional[PoseFrame]) -> FrameDebug:
    """Combined joint angle and confidence over the usable sides of the body."""
    if frame is None:
        return NO_READING

    sides = [r for r in (_side_reading(frame, t) for t in config.sides) if r is not None]
    if not sides:
        return NO_READING
    return FrameDebug(
        angle=average(s.angle for s in sides),
        confidence=average(s.confidence for s in sides),
    )


def evaluate_frame(exercise, observation: Optional[PoseFrame],
                   previous: RepCounterState, timestamp_unit=TIMESTAMP_UNIT) -> FrameEvaluation:
    """Advance one session by one detector frame.

    ``observation`` is None when the detector found no body; that counts as a
    zero-confidence frame. Returns the next state, whether a rep was just
    awarded, and the angle/confidence reading for display.
    """
    exercise = Exercise(exercise)
    config = exercise.config
    debug = read_frame(config, observation)

    if debug.confidence < config.min_confidence:
        if previous.phase is not Phase.CALIBRATING:
            logger.debug("%s: confidence %.2f below %.2f, recalibrating",
                         exercise.value, debug.confidence, config.min_confidence)
        return FrameEvaluation(replace(previous, phase=Phase.CALIBRATING), False, debug)

    angle = debug.angle

    if previous.phase is Phase.CALIBRATING:
        phase = Phase.UP if angle >= config.up_threshold else Phase.DOWN
        logger.debug("%s: calibrated at %.1f deg -> %s", exercise.value, angle, phase.value)
        return FrameEvaluation(replace(previous, phase=phase), False, debug)

    if previous.phase is Phase.UP:
        if angle <= config.down_threshold:
            return FrameEvaluation(replace(previous, phase=Phase.DOWN), False, debug)
        return FrameEvaluation(previous, False, debug)

    # Phase.DOWN
    if angle < config.up_threshold:
        return FrameEvaluation(previous, False, debug)

    now = observation.timestamp_ms
    if previous.last_rep_timestamp_ms is not None:
        elapsed_ms = normalize_elapsed_ms(now - previous.last_rep_timestamp_ms, timestamp_unit)
        if elapsed_ms < config.min_rep_gap_ms:
            logger.debug("%s: rep ignored, %.0f ms since last (min %d)",
                         exercise.value, elapsed_ms, config.min_rep_gap_ms)
            return FrameEvaluation(replace(previous, phase=Phase.UP), False, debug)

    next_state = RepCounterState(reps=previous.reps + 1, phase=Phase.UP,
                                 last_rep_timestamp_ms=now)
    logger.debug("%s: rep %d at %s", exercise.value, next_state.reps, now)
    return FrameEvaluation(next_state, True, debug)
