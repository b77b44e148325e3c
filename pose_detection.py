import logging
from typing import Dict, List

import cv2
import mediapipe as mp

from pose_types import Joint, JointName, Pose

logger = logging.getLogger(__name__)

# Mediapipe landmark names for the joints the renderer and classifier use.
MEDIAPIPE_LANDMARKS: Dict[JointName, str] = {
    JointName.NOSE: "nose",
    JointName.LEFT_EYE: "left_eye",
    JointName.RIGHT_EYE: "right_eye",
    JointName.LEFT_EAR: "left_ear",
    JointName.RIGHT_EAR: "right_ear",
    JointName.LEFT_SHOULDER: "left_shoulder",
    JointName.RIGHT_SHOULDER: "right_shoulder",
    JointName.LEFT_ELBOW: "left_elbow",
    JointName.RIGHT_ELBOW: "right_elbow",
    JointName.LEFT_WRIST: "left_wrist",
    JointName.RIGHT_WRIST: "right_wrist",
    JointName.LEFT_HIP: "left_hip",
    JointName.RIGHT_HIP: "right_hip",
    JointName.LEFT_KNEE: "left_knee",
    JointName.RIGHT_KNEE: "right_knee",
    JointName.LEFT_ANKLE: "left_ankle",
    JointName.RIGHT_ANKLE: "right_ankle",
}


class PoseDetector:
    def __init__(
        self,
        static_image_mode: bool = False,
        min_detection_confidence: float = 0.5,
        min_tracking_confidence: float = 0.5,
        visibility_threshold: float = 0.5,
    ):
        self.visibility_threshold = visibility_threshold
        self._mp_pose = mp.solutions.pose
        self._pose = self._mp_pose.Pose(
            static_image_mode=static_image_mode,
            model_complexity=1,
            smooth_landmarks=True,
            min_detection_confidence=min_detection_confidence,
            min_tracking_confidence=min_tracking_confidence,
        )
        landmark_by_name = {lm.name.lower(): lm for lm in self._mp_pose.PoseLandmark}
        self._landmarks = {
            joint: landmark_by_name[name] for joint, name in MEDIAPIPE_LANDMARKS.items()
        }

    def process(self, frame_bgr) -> List[Pose]:
        """Detect the body in a BGR frame; positions are in pixels."""
        height, width = frame_bgr.shape[:2]
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        results = self._pose.process(frame_rgb)
        if results.pose_landmarks is None:
            return []

        joints: Dict[JointName, Joint] = {}
        for name, idx in self._landmarks.items():
            lm = results.pose_landmarks.landmark[idx]
            joints[name] = Joint(
                name,
                (lm.x * width, lm.y * height),
                lm.visibility >= self.visibility_threshold,
            )
        pose = Pose(joints)
        logger.debug("Detected pose with %d valid joints", sum(1 for _ in pose.valid_joints()))
        return [pose]

    def close(self) -> None:
        self._pose.close()
