"""One workout in front of the camera.

``LiveSession`` owns the rep counter state between frames, turns awarded reps
into tokens and finishes itself once the target is reached. It is the caller
the rep counter expects: feed it frames one at a time, never concurrently.
"""

import logging
import time
from datetime import datetime

from exercises import Exercise
from rep_counter import NO_READING, Phase, create_rep_counter_state, evaluate_frame, normalize_elapsed_ms
from session_logger import SessionSummary
from settings import (
    DEFAULT_TARGET_REPS, MIN_TARGET_REPS, MAX_TARGET_REPS,
    MAX_DISPLAY_FPS, TIMESTAMP_UNIT, TOKENS_PER_REP,
)

logger = logging.getLogger(__name__)


def clamp_target(target_reps):
    return max(MIN_TARGET_REPS, min(MAX_TARGET_REPS, int(target_reps)))


def fmt_time(ts):
    return datetime.fromtimestamp(ts).strftime("%Y-%m-%d %H:%M:%S")


class LiveSession:
    def __init__(self, exercise=Exercise.PUSHUP, target_reps=DEFAULT_TARGET_REPS,
                 wallet=None, timestamp_unit=TIMESTAMP_UNIT,
                 on_rep=None, on_target=None, clock=time.time):
        self.exercise = Exercise(exercise)
        self.target_reps = clamp_target(target_reps)
        self.wallet = wallet
        self.timestamp_unit = timestamp_unit
        self.on_rep = on_rep
        self.on_target = on_target
        self._clock = clock
        self.active = False
        self._reset()

    def _reset(self):
        self.state = create_rep_counter_state()
        self.finished = False
        self.reps = 0
        self.tokens_earned = 0
        self.fps = 0.0
        self.debug = NO_READING
        self.rep_times = []
        self.start_time = None
        self.end_time = None
        self._last_frame_ts = None
        self._last_rep_time = None

    @property
    def config(self):
        return self.exercise.config

    @property
    def phase(self) -> Phase:
        return self.state.phase

    def start(self):
        self._reset()
        self.start_time = self._clock()
        self.active = True
        logger.info("Session started: %s, target %d", self.exercise.value, self.target_reps)

    def finish(self):
        if not self.active:
            return
        self.active = False
        self.end_time = self._clock()
        logger.info("Session finished: %d %s, +%d tokens",
                    self.reps, self.exercise.label, self.tokens_earned)

    def on_pose_frame(self, frame):
        """Feed one detector result (None = no body found).

        Returns the rep counter's evaluation, or None before the session is active.
        """
        if not self.active:
            return None

        # no body in view still goes through the counter, which recalibrates
        evaluation = evaluate_frame(self.exercise, frame, self.state, self.timestamp_unit)
        self.state = evaluation.next_state
        self.debug = evaluation.debug
        if frame is None:
            return evaluation

        if self._last_frame_ts is not None:
            delta_ms = normalize_elapsed_ms(frame.timestamp_ms - self._last_frame_ts, self.timestamp_unit)
            self.fps = min(MAX_DISPLAY_FPS, 1000.0 / delta_ms) if delta_ms > 0 else 0.0
        self._last_frame_ts = frame.timestamp_ms

        if evaluation.rep_awarded and not self.finished:
            self._award()
        return evaluation

    def _award(self):
        self.reps += 1
        self.tokens_earned += TOKENS_PER_REP
        if self.wallet is not None:
            self.wallet.add_tokens(TOKENS_PER_REP)

        now = self._clock()
        if self._last_rep_time is not None:
            self.rep_times.append(now - self._last_rep_time)
        self._last_rep_time = now

        if self.on_rep:
            self.on_rep(self.reps)
        if self.reps >= self.target_reps:
            self.finished = True
            if self.on_target:
                self.on_target(self.reps)
            self.finish()

    @property
    def avg_sec_per_rep(self):
        return (sum(self.rep_times) / len(self.rep_times)) if self.rep_times else None

    def status_hint(self) -> str:
        if not self.active:
            if self.finished:
                return f"Done! {self.reps} {self.exercise.label}, +{self.tokens_earned} tokens."
            return "Place the phone in front of you and start the session."
        cfg = self.config
        if self.debug.confidence < cfg.min_confidence:
            return "Step back a little. Your whole body must be visible."
        if self.phase is Phase.CALIBRATING:
            return "Finding your starting position..."
        joint = "angle" if self.exercise is Exercise.PUSHUP else "knees"
        if self.phase is Phase.UP:
            return f"Go down ({joint} <= {cfg.down_threshold:.0f} deg)"
        return f"Come up ({joint} >= {cfg.up_threshold:.0f} deg)"

    def summary(self) -> SessionSummary:
        start = self.start_time if self.start_time is not None else self._clock()
        end = self.end_time if self.end_time is not None else self._clock()
        cfg = self.config
        return SessionSummary(
            exercise=self.exercise.value,
            start_time=fmt_time(start),
            end_time=fmt_time(end),
            duration_sec=end - start,
            target_reps=self.target_reps,
            total_reps=self.reps,
            tokens_earned=self.tokens_earned,
            avg_sec_per_rep=self.avg_sec_per_rep,
            params={
                "MIN_CONFIDENCE": cfg.min_confidence,
                "DOWN_THRESHOLD": cfg.down_threshold,
                "UP_THRESHOLD": cfg.up_threshold,
                "MIN_REP_GAP_MS": cfg.min_rep_gap_ms,
                "TOKENS_PER_REP": TOKENS_PER_REP,
                "TIMESTAMP_UNIT": self.timestamp_unit,
            },
        )
