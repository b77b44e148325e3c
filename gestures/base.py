from typing import Dict, List, Sequence, Tuple

from joint_records import CanonicalPoseTable, RawJointRecord, canonicalize, records_from_pose, table_points
from pose_types import JointName, Pose


class GestureBase:
    name = "base"
    required_joints: List[JointName] = []

    def matches(self, table: CanonicalPoseTable) -> bool:
        raise NotImplementedError

    def points(self, table: CanonicalPoseTable) -> Dict[JointName, Tuple[float, float]]:
        return table_points(table, self.required_joints)

    def canonicalize(self, records: Sequence[RawJointRecord]) -> CanonicalPoseTable:
        return canonicalize(records)

    def classify(self, records: Sequence[RawJointRecord]) -> bool:
        return self.matches(self.canonicalize(records))

    def classify_pose(self, pose: Pose) -> bool:
        return self.classify(records_from_pose(pose))
