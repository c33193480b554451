"""Pose landmark types shared with the external detector.

Positions follow the 33-point MediaPipe Pose numbering. Only shoulders, elbows,
wrists, hips, knees and ankles are read by the rep counter.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Sequence


class PoseLandmark(IntEnum):
    NOSE = 0
    LEFT_EYE_INNER = 1
    LEFT_EYE = 2
    LEFT_EYE_OUTER = 3
    RIGHT_EYE_INNER = 4
    RIGHT_EYE = 5
    RIGHT_EYE_OUTER = 6
    LEFT_EAR = 7
    RIGHT_EAR = 8
    MOUTH_LEFT = 9
    MOUTH_RIGHT = 10
    LEFT_SHOULDER = 11
    RIGHT_SHOULDER = 12
    LEFT_ELBOW = 13
    RIGHT_ELBOW = 14
    LEFT_WRIST = 15
    RIGHT_WRIST = 16
    LEFT_PINKY = 17
    RIGHT_PINKY = 18
    LEFT_INDEX = 19
    RIGHT_INDEX = 20
    LEFT_THUMB = 21
    RIGHT_THUMB = 22
    LEFT_HIP = 23
    RIGHT_HIP = 24
    LEFT_KNEE = 25
    RIGHT_KNEE = 26
    LEFT_ANKLE = 27
    RIGHT_ANKLE = 28
    LEFT_HEEL = 29
    RIGHT_HEEL = 30
    LEFT_FOOT_INDEX = 31
    RIGHT_FOOT_INDEX = 32


LANDMARK_COUNT = len(PoseLandmark)


@dataclass(frozen=True)
class Landmark:
    """One tracked body point; x/y are normalized to the frame, values are not clamped."""
    x: float
    y: float
    z: float = 0.0
    visibility: float = 0.0
    presence: float = 0.0


@dataclass(frozen=True)
class PoseFrame:
    """Everything the detector produced for one camera frame."""
    landmarks: Sequence[Optional[Landmark]]
    confidence: float
    timestamp_ms: float

    def get(self, index: PoseLandmark) -> Optional[Landmark]:
        """Landmark at ``index``, or None when the detector did not supply it."""
        if index < 0 or index >= len(self.landmarks):
            return None
        return self.landmarks[index]
