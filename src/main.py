# RepLock webcam counter
# - Count push-ups (elbow angle) or squats (knee angle) with MediaPipe Pose
# - Every rep earns tokens, tokens buy app time in the shop
# - Session ends on its own once the target is reached
# - Beep on rep and on target
# - Saves session summary (JSON + CSV)

import logging
import time

import cv2

from beeper import rep_feedback, target_feedback
from exercises import Exercise
from live_session import LiveSession, clamp_target
from pose_detector import PoseDetector
from session_logger import save_session
from settings import CAM_INDEX, DEFAULT_TARGET_REPS, TARGET_FPS
from wallet import CATALOG, Wallet

logger = logging.getLogger(__name__)

FONT = cv2.FONT_HERSHEY_SIMPLEX


def draw_hud(frame, session, wallet, show_debug):
    h, w = frame.shape[:2]
    cv2.rectangle(frame, (0, 0), (w, 70), (0, 0, 0), -1)
    cv2.putText(frame, f"{session.exercise.value.upper()}  Reps: {session.reps}/{session.target_reps}"
                       f"  |  Tokens: {wallet.tokens}",
                (10, 45), FONT, 0.9, (0, 255, 0), 3)
    cv2.putText(frame, session.status_hint(), (10, 70 + 25), FONT, 0.7, (255, 255, 255), 2)

    if show_debug:
        cv2.putText(frame, f"Phase: {session.phase.value}   FPS: {session.fps:.1f}   "
                           f"Conf: {session.debug.confidence * 100:.0f}%   Angle: {session.debug.angle:.0f} deg",
                    (10, 70 + 55), FONT, 0.6, (200, 200, 200), 2)
        cv2.putText(frame, "Controls: [q] quit  [r] restart  [x] exercise  [n/p] target -/+  [b] buy  [s] debug",
                    (10, h - 15), FONT, 0.6, (255, 255, 255), 2)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

    cap = cv2.VideoCapture(CAM_INDEX)
    if not cap.isOpened():
        raise SystemExit(f"Could not access webcam (index {CAM_INDEX}).")

    wallet = Wallet()
    session = LiveSession(
        Exercise.PUSHUP, DEFAULT_TARGET_REPS, wallet=wallet,
        timestamp_unit="ms",
        on_rep=lambda reps: rep_feedback(),
        on_target=lambda reps: target_feedback(),
    )
    session.start()

    frame_interval = 1.0 / TARGET_FPS
    last_processed = 0.0
    show_debug = True

    with PoseDetector() as detector:
        while True:
            ok, frame = cap.read()
            if not ok: break
            frame = cv2.flip(frame, 1)

            now = time.time()
            if session.active and now - last_processed >= frame_interval:
                last_processed = now
                session.on_pose_frame(detector.detect(frame, time.monotonic() * 1000.0))

            draw_hud(frame, session, wallet, show_debug)
            cv2.imshow("RepLock", frame)

            key = cv2.waitKey(1) & 0xFF
            if key == ord('q'):
                break
            elif key == ord('r'):
                session.start()
            elif key == ord('x'):
                session.finish()
                session.exercise = Exercise.SQUAT if session.exercise is Exercise.PUSHUP else Exercise.PUSHUP
                session.start()
            elif key == ord('n'):
                session.target_reps = clamp_target(session.target_reps - 1)
            elif key == ord('p'):
                session.target_reps = clamp_target(session.target_reps + 1)
            elif key == ord('b'):
                item = CATALOG[0]
                if not wallet.buy(item):
                    logger.info("Not enough tokens for %s (%d needed)", item.title, item.token_cost)
            elif key == ord('s'):
                show_debug = not show_debug

    cap.release(); cv2.destroyAllWindows()
    session.finish()

    summary = session.summary()
    path = save_session(summary)
    print(f"\nSession summary saved to {path}")
    print(summary)
    print(f"Wallet: {wallet.tokens} tokens, credits {wallet.time_credits}")


if __name__ == "__main__":
    main()
