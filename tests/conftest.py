import math

import pytest

from exercises import Exercise
from landmarks import LANDMARK_COUNT, Landmark, PoseFrame


def _triple(angle_deg, visibility, vertex=(0.5, 0.5), arm=0.2):
    """Three landmarks whose angle at the middle one is ``angle_deg``."""
    bx, by = vertex
    rad = math.radians(angle_deg)
    a = Landmark(x=bx, y=by - arm, visibility=visibility, presence=visibility)
    b = Landmark(x=bx, y=by, visibility=visibility, presence=visibility)
    c = Landmark(x=bx + arm * math.sin(rad), y=by - arm * math.cos(rad),
                 visibility=visibility, presence=visibility)
    return a, b, c


def build_frame(exercise, angle=160.0, confidence=0.9, t=0.0,
                left=True, right=True, right_angle=None, right_confidence=None):
    landmarks = [Landmark(x=0.5, y=0.5, visibility=0.0) for _ in range(LANDMARK_COUNT)]
    left_triple, right_triple = Exercise(exercise).config.sides
    sides = []
    if left:
        sides.append((left_triple, angle, confidence))
    if right:
        sides.append((right_triple,
                      angle if right_angle is None else right_angle,
                      confidence if right_confidence is None else right_confidence))
    for indices, side_angle, side_conf in sides:
        for index, point in zip(indices, _triple(side_angle, side_conf)):
            landmarks[index] = point
    return PoseFrame(landmarks=landmarks, confidence=confidence, timestamp_ms=t)


@pytest.fixture
def make_frame():
    return build_frame
