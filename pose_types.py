from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, Tuple


class JointName(Enum):
    RIGHT_KNEE = "rightKnee"
    RIGHT_ANKLE = "rightAnkle"
    RIGHT_SHOULDER = "rightShoulder"
    RIGHT_HIP = "rightHip"
    RIGHT_WRIST = "rightWrist"
    RIGHT_EAR = "rightEar"
    RIGHT_EYE = "rightEye"
    RIGHT_ELBOW = "rightElbow"
    LEFT_KNEE = "leftKnee"
    LEFT_ANKLE = "leftAnkle"
    LEFT_SHOULDER = "leftShoulder"
    LEFT_HIP = "leftHip"
    LEFT_WRIST = "leftWrist"
    LEFT_EAR = "leftEar"
    LEFT_EYE = "leftEye"
    LEFT_ELBOW = "leftElbow"
    NOSE = "nose"


# Slot order of the classifier's lookup table.
CANONICAL_JOINT_ORDER: Tuple[JointName, ...] = tuple(JointName)


@dataclass(frozen=True)
class Joint:
    name: JointName
    position: Tuple[float, float]
    is_valid: bool = True

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]


@dataclass(frozen=True)
class JointSegment:
    joint_a: JointName
    joint_b: JointName


JOINT_SEGMENTS: Tuple[JointSegment, ...] = (
    # Left side of the body.
    JointSegment(JointName.LEFT_HIP, JointName.LEFT_SHOULDER),
    JointSegment(JointName.LEFT_SHOULDER, JointName.LEFT_ELBOW),
    JointSegment(JointName.LEFT_ELBOW, JointName.LEFT_WRIST),
    JointSegment(JointName.LEFT_HIP, JointName.LEFT_KNEE),
    JointSegment(JointName.LEFT_KNEE, JointName.LEFT_ANKLE),
    # Right side of the body.
    JointSegment(JointName.RIGHT_HIP, JointName.RIGHT_SHOULDER),
    JointSegment(JointName.RIGHT_SHOULDER, JointName.RIGHT_ELBOW),
    JointSegment(JointName.RIGHT_ELBOW, JointName.RIGHT_WRIST),
    JointSegment(JointName.RIGHT_HIP, JointName.RIGHT_KNEE),
    JointSegment(JointName.RIGHT_KNEE, JointName.RIGHT_ANKLE),
    # Across the body.
    JointSegment(JointName.LEFT_SHOULDER, JointName.RIGHT_SHOULDER),
    JointSegment(JointName.LEFT_HIP, JointName.RIGHT_HIP),
)


@dataclass
class Pose:
    """Joints detected for one body in one frame.

    Every canonical name is present after construction; names the estimator
    did not report are filled with invalid joints at the origin.
    """

    joints: Dict[JointName, Joint] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.joints = dict(self.joints)
        for name in JointName:
            if name not in self.joints:
                self.joints[name] = Joint(name, (0.0, 0.0), False)

    def __getitem__(self, name: JointName) -> Joint:
        return self.joints[name]

    def __iter__(self) -> Iterator[Joint]:
        return iter(self.joints.values())

    def __len__(self) -> int:
        return len(self.joints)

    def valid_joints(self) -> Iterator[Joint]:
        return (joint for joint in self.joints.values() if joint.is_valid)
