from typing import Sequence

from gestures.base import GestureBase
from gestures.stand import StandGestureClassifier, matches_reference_gesture
from joint_records import RawJointRecord, canonicalize


def classify(records: Sequence[RawJointRecord]) -> bool:
    return matches_reference_gesture(canonicalize(records))


__all__ = [
    "GestureBase",
    "StandGestureClassifier",
    "canonicalize",
    "classify",
    "matches_reference_gesture",
]
