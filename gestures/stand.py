import logging
from typing import Dict, List, Tuple

from gestures.base import GestureBase
from geometry import strictly_increasing
from joint_records import CanonicalPoseTable, table_points
from pose_types import JointName

logger = logging.getLogger(__name__)

STAND_JOINTS: List[JointName] = [
    JointName.RIGHT_ANKLE,
    JointName.RIGHT_WRIST,
    JointName.RIGHT_ELBOW,
    JointName.LEFT_ANKLE,
    JointName.LEFT_SHOULDER,
    JointName.LEFT_WRIST,
    JointName.LEFT_ELBOW,
]


def matches_reference_gesture(table: CanonicalPoseTable) -> bool:
    """Check the stand gesture against a canonical table.

    Image origin is top-left, so a smaller y is higher up. A coordinate of
    exactly 0.0 on any anchor means the joint was not detected.
    """
    return _stand_pose(table_points(table, STAND_JOINTS))


def _stand_pose(points: Dict[JointName, Tuple[float, float]]) -> bool:
    right_ankle_x, _ = points[JointName.RIGHT_ANKLE]
    right_wrist_x, right_wrist_y = points[JointName.RIGHT_WRIST]
    right_elbow_x, right_elbow_y = points[JointName.RIGHT_ELBOW]
    left_ankle_x, _ = points[JointName.LEFT_ANKLE]
    left_shoulder_x, left_shoulder_y = points[JointName.LEFT_SHOULDER]
    left_wrist_x, left_wrist_y = points[JointName.LEFT_WRIST]
    left_elbow_x, left_elbow_y = points[JointName.LEFT_ELBOW]

    if 0.0 in (right_ankle_x, left_elbow_x, left_wrist_y, right_elbow_y):
        logger.debug("Anchor joint missing, skipping stand check")
        return False

    return (
        strictly_increasing(right_ankle_x, right_wrist_x, right_elbow_x)
        and strictly_increasing(left_elbow_x, left_wrist_x, left_shoulder_x, left_ankle_x)
        and strictly_increasing(left_wrist_y, left_shoulder_y, left_elbow_y)
        and strictly_increasing(right_elbow_y, right_wrist_y)
    )


class StandGestureClassifier(GestureBase):
    name = "stand"
    required_joints = STAND_JOINTS

    def matches(self, table: CanonicalPoseTable) -> bool:
        return _stand_pose(self.points(table))
