"""Loosely typed joint records exchanged with the upstream estimator.

A record is a ``[name, x, y]`` triple of strings. The classifier reads
records through a canonical table with one slot per joint name, while the
renderer works on typed :class:`Pose` objects; the helpers here convert
between the two at the boundary.
"""

import math
from typing import Any, Dict, List, Sequence, Tuple

from pose_types import CANONICAL_JOINT_ORDER, Joint, JointName, Pose

RawJointRecord = Sequence[Any]
CanonicalPoseTable = List[List[Any]]

EMPTY_SLOT = ("0", "0", "0")

_SLOT_INDEX = {name.value: idx for idx, name in enumerate(CANONICAL_JOINT_ORDER)}


class UnknownJointNameError(ValueError):
    def __init__(self, name: Any):
        super().__init__(f"Unknown joint name: {name!r}")
        self.name = name


def parse_coordinate(value: Any) -> float:
    # Unparsable values read as 0.0, the same as an absent joint. Padding and
    # digit separators are not part of the upstream number format.
    if isinstance(value, str) and (value != value.strip() or "_" in value):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def slot_index(name: Any) -> int:
    try:
        return _SLOT_INDEX[name]
    except (KeyError, TypeError):
        raise UnknownJointNameError(name) from None


def empty_table() -> CanonicalPoseTable:
    return [list(EMPTY_SLOT) for _ in CANONICAL_JOINT_ORDER]


def canonicalize(records: Sequence[RawJointRecord]) -> CanonicalPoseTable:
    """Place each record in the slot of its joint name.

    Raises UnknownJointNameError for a name outside the vocabulary. A name
    seen twice keeps the later record.
    """
    table = empty_table()
    for record in records:
        table[slot_index(_record_name(record))] = list(record)
    return table


def table_coordinate(table: CanonicalPoseTable, name: JointName, axis: int) -> float:
    record = table[CANONICAL_JOINT_ORDER.index(name)]
    if axis >= len(record):
        return 0.0
    return parse_coordinate(record[axis])


def records_from_pose(pose: Pose) -> List[List[str]]:
    return [
        [joint.name.value, repr(float(joint.x)), repr(float(joint.y))]
        for joint in pose.valid_joints()
    ]


def pose_from_records(records: Sequence[RawJointRecord]) -> Pose:
    joints = {}
    for record in records:
        name = CANONICAL_JOINT_ORDER[slot_index(_record_name(record))]
        x = parse_coordinate(record[1]) if len(record) > 1 else 0.0
        y = parse_coordinate(record[2]) if len(record) > 2 else 0.0
        # A joint at the origin, or off any finite canvas, is not detected.
        valid = math.isfinite(x) and math.isfinite(y) and not (x == 0.0 and y == 0.0)
        joints[name] = Joint(name, (x, y), valid)
    return Pose(joints)


def _record_name(record: RawJointRecord) -> Any:
    return record[0] if len(record) else None


def table_points(
    table: CanonicalPoseTable, names: Sequence[JointName]
) -> Dict[JointName, Tuple[float, float]]:
    return {name: (table_coordinate(table, name, 1), table_coordinate(table, name, 2)) for name in names}
