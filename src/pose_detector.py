"""MediaPipe Pose wrapper that hands the rep counter plain ``PoseFrame`` values."""

import logging

import cv2
import mediapipe as mp

from geometry import average
from landmarks import Landmark, PoseFrame
from settings import MIN_DETECTION_CONFIDENCE, MIN_TRACKING_CONFIDENCE

logger = logging.getLogger(__name__)


def pose_frame_from_landmarks(raw_landmarks, timestamp_ms):
    """Build a ``PoseFrame`` from MediaPipe-style landmarks.

    Anything exposing x, y, z, visibility (and optionally presence) works.
    Overall confidence is the mean visibility; an empty list means no detection.
    """
    landmarks = [
        Landmark(
            x=float(lm.x), y=float(lm.y), z=float(lm.z),
            visibility=float(getattr(lm, "visibility", 0.0)),
            presence=float(getattr(lm, "presence", 0.0)),
        )
        for lm in raw_landmarks
    ]
    if not landmarks:
        return None
    return PoseFrame(
        landmarks=landmarks,
        confidence=average(lm.visibility for lm in landmarks),
        timestamp_ms=timestamp_ms,
    )


class PoseDetector:
    def __init__(self, min_detection_confidence=MIN_DETECTION_CONFIDENCE,
                 min_tracking_confidence=MIN_TRACKING_CONFIDENCE):
        self.pose = mp.solutions.pose.Pose(
            static_image_mode=False,
            model_complexity=1,
            enable_segmentation=False,
            min_detection_confidence=min_detection_confidence,
            min_tracking_confidence=min_tracking_confidence,
            smooth_landmarks=True,
        )
        logger.debug("MediaPipe Pose ready (detection %.2f, tracking %.2f)",
                     min_detection_confidence, min_tracking_confidence)

    def detect(self, bgr_frame, timestamp_ms):
        """Run the model on one BGR frame; None when no body is in view."""
        rgb = cv2.cvtColor(bgr_frame, cv2.COLOR_BGR2RGB)
        res = self.pose.process(rgb)
        if not res.pose_landmarks:
            return None
        return pose_frame_from_landmarks(res.pose_landmarks.landmark, timestamp_ms)

    def close(self):
        self.pose.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False
