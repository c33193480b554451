import pytest

from exercises import Exercise
from live_session import LiveSession, clamp_target
from rep_counter import Phase
from settings import TOKENS_PER_REP
from wallet import Wallet


class FakeClock:
    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now


def do_reps(session, make_frame, count, t0=0.0, clock=None, exercise="pushup"):
    """Up, then ``count`` down/up cycles 1 s apart."""
    t = t0
    session.on_pose_frame(make_frame(exercise, 170, 0.9, t=t))
    for _ in range(count):
        t += 500
        session.on_pose_frame(make_frame(exercise, 90, 0.9, t=t))
        t += 500
        if clock is not None:
            clock.now += 2.0
        session.on_pose_frame(make_frame(exercise, 170, 0.9, t=t))
    return t


def test_clamp_target():
    assert clamp_target(0) == 1
    assert clamp_target(250) == 100
    assert clamp_target("12") == 12


def test_frames_ignored_before_start(make_frame):
    session = LiveSession()
    assert session.on_pose_frame(make_frame("pushup", 170, 0.9)) is None
    assert session.phase is Phase.CALIBRATING


def test_reps_earn_tokens(make_frame):
    wallet = Wallet()
    session = LiveSession(Exercise.PUSHUP, 5, wallet=wallet)
    session.start()
    do_reps(session, make_frame, 3)
    assert session.reps == 3
    assert session.tokens_earned == 3 * TOKENS_PER_REP
    assert wallet.tokens == 30
    assert session.active
    assert not session.finished


def test_target_finishes_session(make_frame):
    reps_seen, targets_seen = [], []
    clock = FakeClock()
    session = LiveSession("squat", 2, on_rep=reps_seen.append, on_target=targets_seen.append, clock=clock)
    session.start()
    t = do_reps(session, make_frame, 2, clock=clock, exercise="squat")

    assert session.finished
    assert not session.active
    assert reps_seen == [1, 2]
    assert targets_seen == [2]

    # nothing counts after the session ended
    session.on_pose_frame(make_frame("squat", 90, 0.9, t=t + 500))
    session.on_pose_frame(make_frame("squat", 170, 0.9, t=t + 1000))
    assert session.reps == 2
    assert session.tokens_earned == 2 * TOKENS_PER_REP


def test_no_detection_clears_debug(make_frame):
    session = LiveSession()
    session.start()
    session.on_pose_frame(make_frame("pushup", 150, 0.9, t=0))
    assert session.debug.confidence > 0
    evaluation = session.on_pose_frame(None)
    assert not evaluation.rep_awarded
    assert (session.debug.angle, session.debug.confidence) == (0.0, 0.0)


def test_leaving_the_frame_while_down_recalibrates(make_frame):
    session = LiveSession(Exercise.PUSHUP)
    session.start()
    session.on_pose_frame(make_frame("pushup", 170, 0.9, t=0))
    session.on_pose_frame(make_frame("pushup", 90, 0.9, t=500))
    assert session.phase is Phase.DOWN

    session.on_pose_frame(None)
    assert session.phase is Phase.CALIBRATING

    # coming back already extended only calibrates, it is not a rep
    session.on_pose_frame(make_frame("pushup", 170, 0.9, t=1000))
    assert session.phase is Phase.UP
    assert session.reps == 0
    assert session.tokens_earned == 0


def test_fps_from_frame_timestamps(make_frame):
    session = LiveSession(timestamp_unit="ms")
    session.start()
    session.on_pose_frame(make_frame("pushup", 150, 0.9, t=1000))
    assert session.fps == 0.0
    session.on_pose_frame(make_frame("pushup", 150, 0.9, t=1040))
    assert session.fps == pytest.approx(25.0)
    session.on_pose_frame(make_frame("pushup", 150, 0.9, t=1041))
    assert session.fps == 120


def test_restart_resets_progress_but_not_wallet(make_frame):
    wallet = Wallet()
    session = LiveSession(wallet=wallet)
    session.start()
    do_reps(session, make_frame, 2)
    session.start()
    assert session.reps == 0
    assert session.tokens_earned == 0
    assert session.phase is Phase.CALIBRATING
    assert wallet.tokens == 20


def test_status_hints(make_frame):
    session = LiveSession(Exercise.PUSHUP)
    assert "start" in session.status_hint()

    session.start()
    session.on_pose_frame(make_frame("pushup", 170, 0.1, t=0))
    assert "visible" in session.status_hint()

    session.on_pose_frame(make_frame("pushup", 170, 0.9, t=40))
    assert session.status_hint() == "Go down (angle <= 112 deg)"

    session.on_pose_frame(make_frame("pushup", 90, 0.9, t=80))
    assert session.status_hint() == "Come up (angle >= 155 deg)"


def test_squat_hint_mentions_knees(make_frame):
    session = LiveSession(Exercise.SQUAT)
    session.start()
    session.on_pose_frame(make_frame("squat", 170, 0.9, t=0))
    assert session.status_hint() == "Go down (knees <= 108 deg)"


def test_summary(make_frame):
    clock = FakeClock()
    session = LiveSession(Exercise.PUSHUP, 10, clock=clock)
    session.start()
    do_reps(session, make_frame, 3, clock=clock)
    clock.now += 4.0
    session.finish()

    summary = session.summary()
    assert summary.exercise == "pushup"
    assert summary.total_reps == 3
    assert summary.target_reps == 10
    assert summary.tokens_earned == 30
    assert summary.duration_sec == pytest.approx(10.0)
    assert summary.avg_sec_per_rep == pytest.approx(2.0)
    assert summary.params["UP_THRESHOLD"] == 155


def test_avg_sec_per_rep_needs_two_reps(make_frame):
    session = LiveSession()
    session.start()
    do_reps(session, make_frame, 1)
    assert session.avg_sec_per_rep is None
