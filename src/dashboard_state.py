"""State shared by the Streamlit page and its WebRTC video thread.

Streamlit re-executes the page script on every interaction, so anything that
must outlive a rerun (wallet, running session, detector) lives here, in an
imported module that is only loaded once per process.
"""

import logging
import threading

from live_session import LiveSession
from pose_detector import PoseDetector
from wallet import Wallet

logger = logging.getLogger(__name__)


class DashboardState:
    def __init__(self):
        self.lock = threading.Lock()
        self.wallet = Wallet()
        self.session = None
        self._detector = None

    def detector(self):
        """Lazy-init MediaPipe Pose (used inside the video callback)."""
        with self.lock:
            if self._detector is None:
                self._detector = PoseDetector()
            return self._detector

    def start_session(self, exercise, target_reps):
        with self.lock:
            self.session = LiveSession(exercise, target_reps, wallet=self.wallet, timestamp_unit="ms")
            self.session.start()
            return self.session

    def reset(self):
        """Forget the session and zero the wallet; the detector is kept."""
        with self.lock:
            self.session = None
            self.wallet.reset()
        logger.info("Dashboard progress reset")


STATE = DashboardState()
