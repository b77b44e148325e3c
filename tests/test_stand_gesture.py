import unittest

import gestures
from gestures import StandGestureClassifier, matches_reference_gesture
from joint_records import UnknownJointNameError, canonicalize, pose_from_records
from pose_types import JointName

STAND_RECORDS = [
    ["rightAnkle", "1", "9"],
    ["rightWrist", "3", "5"],
    ["rightElbow", "6", "2"],
    ["leftElbow", "1", "3"],
    ["leftWrist", "2", "1"],
    ["leftShoulder", "4", "2"],
    ["leftAnkle", "6", "9"],
]


def with_record(name, x, y):
    return [r for r in STAND_RECORDS if r[0] != name] + [[name, x, y]]


class StandGestureTests(unittest.TestCase):
    def setUp(self):
        self.classifier = StandGestureClassifier()

    def test_matching_pose(self):
        self.assertTrue(gestures.classify(STAND_RECORDS))
        self.assertTrue(self.classifier.classify(STAND_RECORDS))

    def test_extra_joints_do_not_matter(self):
        records = STAND_RECORDS + [["nose", "50", "50"], ["leftHip", "7", "7"]]
        self.assertTrue(gestures.classify(records))

    def test_right_elbow_not_above_wrist(self):
        self.assertFalse(gestures.classify(with_record("rightElbow", "6", "5")))
        self.assertFalse(gestures.classify(with_record("rightElbow", "6", "7")))

    def test_each_ordering_clause_is_required(self):
        self.assertFalse(gestures.classify(with_record("rightWrist", "7", "5")))
        self.assertFalse(gestures.classify(with_record("leftWrist", "5", "1")))
        self.assertFalse(gestures.classify(with_record("leftAnkle", "3", "9")))
        self.assertFalse(gestures.classify(with_record("leftShoulder", "4", "4")))

    def test_anchor_zero_forces_no_match(self):
        self.assertFalse(gestures.classify(with_record("rightAnkle", "0", "9")))
        self.assertFalse(gestures.classify(with_record("leftElbow", "0.0", "3")))
        self.assertFalse(gestures.classify(with_record("leftWrist", "2", "0")))
        self.assertFalse(gestures.classify(with_record("rightElbow", "6", "0")))

    def test_unparsable_anchor_reads_as_zero(self):
        self.assertFalse(gestures.classify(with_record("leftElbow", "abc", "3")))

    def test_missing_right_wrist(self):
        records = [r for r in STAND_RECORDS if r[0] != "rightWrist"]
        self.assertFalse(gestures.classify(records))

    def test_empty_table(self):
        self.assertFalse(matches_reference_gesture(canonicalize([])))

    def test_short_record_reads_as_zero(self):
        records = [r for r in STAND_RECORDS if r[0] != "leftWrist"] + [["leftWrist", "2"]]
        self.assertFalse(gestures.classify(records))

    def test_unknown_name_propagates(self):
        with self.assertRaises(UnknownJointNameError):
            self.classifier.classify(STAND_RECORDS + [["tail", "1", "1"]])

    def test_classify_pose(self):
        self.assertTrue(self.classifier.classify_pose(pose_from_records(STAND_RECORDS)))
        self.assertFalse(self.classifier.classify_pose(pose_from_records(STAND_RECORDS[1:])))

    def test_padded_or_separated_anchor_reads_as_zero(self):
        self.assertFalse(gestures.classify(with_record("leftElbow", " 1 ", "3")))
        self.assertFalse(gestures.classify(with_record("rightElbow", "6", "0_2")))

    def test_points_cover_required_joints(self):
        table = canonicalize(STAND_RECORDS)
        points = self.classifier.points(table)
        self.assertEqual(set(points), set(StandGestureClassifier.required_joints))
        self.assertEqual(points[JointName.LEFT_SHOULDER], (4.0, 2.0))

    def test_matches_agrees_with_module_function(self):
        for records in (STAND_RECORDS, with_record("rightElbow", "6", "5")):
            table = canonicalize(records)
            self.assertEqual(self.classifier.matches(table), matches_reference_gesture(table))
