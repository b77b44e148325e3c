import argparse
import logging
import sys
from typing import List, Optional, Tuple

import cv2
import numpy as np

from camera import FrameSource
from gestures import GestureBase, StandGestureClassifier
from overlay_trigger import fire_overlay_trigger
from photo_store import PhotoAlbum
from pose_detection import PoseDetector
from visualization import SkeletonRenderer, draw_caption, load_overlay

logger = logging.getLogger(__name__)


def process_frame(
    frame: np.ndarray,
    detector: PoseDetector,
    classifier: GestureBase,
    renderer: SkeletonRenderer,
) -> Tuple[np.ndarray, bool]:
    poses = detector.process(frame)
    matched = any(classifier.classify_pose(pose) for pose in poses)
    fire_overlay_trigger(matched)
    return renderer.render(poses, frame, draw_skeleton=not matched), matched


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Skeleton overlay camera with stand gesture detection.")
    parser.add_argument("--camera", type=int, default=0, help="Camera index.")
    parser.add_argument("--image", help="Process a single photo instead of the camera.")
    parser.add_argument("--output", default="output.png", help="Where --image writes its result.")
    parser.add_argument("--overlay", default="assets/overlay.png", help="Image shown when the gesture matches.")
    parser.add_argument("--album-dir", default="photos", help="Directory for saved gesture photos.")
    parser.add_argument(
        "--no-flip",
        dest="flip",
        action="store_false",
        help="Frames are already top-down (default for OpenCV sources).",
    )
    parser.add_argument("--flip", dest="flip", action="store_true", help="Flip bottom-up frame buffers.")
    parser.set_defaults(flip=False)
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser


def run_image(args, classifier: GestureBase, renderer: SkeletonRenderer) -> int:
    frame = cv2.imread(args.image)
    if frame is None:
        logger.error("Could not read image %s", args.image)
        return 1
    detector = PoseDetector(static_image_mode=True)
    try:
        image, matched = process_frame(frame, detector, classifier, renderer)
    finally:
        detector.close()
        renderer.flush(timeout=5.0)
    if not cv2.imwrite(args.output, image):
        logger.error("Could not write %s", args.output)
        return 1
    logger.info("Wrote %s (stand gesture: %s)", args.output, "yes" if matched else "no")
    return 0


def run_camera(args, classifier: GestureBase, renderer: SkeletonRenderer) -> int:
    window_name = "Stand Camera"
    source = FrameSource(camera_index=args.camera)
    if not source.open():
        logger.error("Could not open webcam.")
        return 1

    detector = PoseDetector()
    cv2.namedWindow(window_name, cv2.WINDOW_NORMAL)
    try:
        for frame, live in source.frames():
            if live:
                frame, matched = process_frame(frame, detector, classifier, renderer)
                draw_caption(frame, [f"Stand: {'YES' if matched else 'no'}", "Q quit"])
            cv2.imshow(window_name, frame)

            if cv2.waitKey(1) & 0xFF == ord("q"):
                break
            if cv2.getWindowProperty(window_name, cv2.WND_PROP_VISIBLE) < 1:
                break
    finally:
        source.close()
        detector.close()
        renderer.flush(timeout=5.0)
        cv2.destroyAllWindows()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    renderer = SkeletonRenderer(
        overlay_image=load_overlay(args.overlay),
        photo_store=PhotoAlbum(args.album_dir),
        flip_frame=args.flip,
    )
    classifier = StandGestureClassifier()
    if args.image:
        return run_image(args, classifier, renderer)
    return run_camera(args, classifier, renderer)


if __name__ == "__main__":
    sys.exit(main())
