import unittest

from joint_records import (
    UnknownJointNameError,
    canonicalize,
    parse_coordinate,
    pose_from_records,
    records_from_pose,
    table_points,
)
from pose_types import CANONICAL_JOINT_ORDER, Joint, JointName, Pose


class JointRecordsTests(unittest.TestCase):
    def test_parse_coordinate_falls_back_to_zero(self):
        self.assertEqual(parse_coordinate("12.5"), 12.5)
        self.assertEqual(parse_coordinate("abc"), 0.0)
        self.assertEqual(parse_coordinate(""), 0.0)
        self.assertEqual(parse_coordinate(None), 0.0)

    def test_parse_coordinate_rejects_padding_and_separators(self):
        self.assertEqual(parse_coordinate(" 3 "), 0.0)
        self.assertEqual(parse_coordinate("3\n"), 0.0)
        self.assertEqual(parse_coordinate("1_000"), 0.0)
        self.assertEqual(parse_coordinate("-2.5e1"), -25.0)
        self.assertEqual(parse_coordinate(4), 4.0)

    def test_canonicalize_places_records_by_name(self):
        table = canonicalize([["nose", "1", "2"], ["rightKnee", "3", "4"]])
        self.assertEqual(len(table), 17)
        self.assertEqual(table[0], ["rightKnee", "3", "4"])
        self.assertEqual(table[16], ["nose", "1", "2"])
        for slot in table[1:16]:
            self.assertEqual(slot, ["0", "0", "0"])

    def test_canonicalize_empty_input(self):
        self.assertEqual(canonicalize([]), [["0", "0", "0"]] * 17)

    def test_duplicate_name_keeps_last_record(self):
        table = canonicalize([["leftWrist", "1", "1"], ["leftWrist", "7", "8"]])
        self.assertEqual(table[12], ["leftWrist", "7", "8"])

    def test_unknown_name_raises(self):
        with self.assertRaises(UnknownJointNameError) as ctx:
            canonicalize([["nose", "1", "2"], ["tail", "3", "4"]])
        self.assertEqual(ctx.exception.name, "tail")
        self.assertIsInstance(ctx.exception, ValueError)

    def test_name_match_is_exact(self):
        with self.assertRaises(UnknownJointNameError):
            canonicalize([["Nose", "1", "2"]])
        with self.assertRaises(UnknownJointNameError):
            canonicalize([["left_wrist", "1", "2"]])

    def test_canonicalize_is_idempotent_on_full_table(self):
        records = [[name.value, str(i + 1), str(2 * i + 1)] for i, name in enumerate(reversed(CANONICAL_JOINT_ORDER))]
        table = canonicalize(records)
        self.assertEqual(canonicalize(table), table)

    def test_records_from_pose_skips_invalid_joints(self):
        pose = Pose({
            JointName.NOSE: Joint(JointName.NOSE, (10.0, 20.5)),
            JointName.LEFT_EYE: Joint(JointName.LEFT_EYE, (3.0, 4.0), False),
        })
        self.assertEqual(records_from_pose(pose), [["nose", "10.0", "20.5"]])

    def test_pose_from_records(self):
        pose = pose_from_records([["leftHip", "4", "5"], ["rightHip", "x", "y"]])
        self.assertEqual(pose[JointName.LEFT_HIP].position, (4.0, 5.0))
        self.assertTrue(pose[JointName.LEFT_HIP].is_valid)
        # Unparsable coordinates land on the origin, which reads as absent.
        self.assertFalse(pose[JointName.RIGHT_HIP].is_valid)
        self.assertFalse(pose[JointName.NOSE].is_valid)

    def test_pose_from_records_marks_non_finite_invalid(self):
        pose = pose_from_records([["leftHip", "nan", "10"], ["rightHip", "20", "inf"], ["nose", "1e12", "5"]])
        self.assertFalse(pose[JointName.LEFT_HIP].is_valid)
        self.assertFalse(pose[JointName.RIGHT_HIP].is_valid)
        # Finite but far away stays valid; the renderer decides what it can draw.
        self.assertTrue(pose[JointName.NOSE].is_valid)

    def test_table_points(self):
        table = canonicalize([["leftWrist", "2", "1"]])
        self.assertEqual(
            table_points(table, [JointName.LEFT_WRIST, JointName.NOSE]),
            {JointName.LEFT_WRIST: (2.0, 1.0), JointName.NOSE: (0.0, 0.0)},
        )
