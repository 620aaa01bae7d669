"""
Drawing utilities for pose estimation results

Provides:
- Draw person bounding box with confidence
- Draw pose skeleton and keypoints
- Draw every person of a PoseEstimationResult
- Color management

Results carry normalized coordinates; drawing scales them to the pixel
size of the image being drawn on. Images are RGB.
"""

import cv2
import numpy as np
from typing import Optional, Tuple

from ..core.constants import COCO_SKELETON_CONNECTIONS, PERSON_COLORS
from ..pose.types import PersonPose, PoseEstimationResult


def generate_person_color(index: int) -> Tuple[int, int, int]:
    """
    Generate a consistent color for the index-th person of a frame

    Args:
        index: Person index (0-based)

    Returns:
        (R, G, B) color tuple

    Example:
        >>> generate_person_color(0)
        (255, 0, 0)
    """
    return PERSON_COLORS[index % len(PERSON_COLORS)]


def draw_bbox(
    image: np.ndarray,
    person: PersonPose,
    color: Tuple[int, int, int],
    thickness: int = 2,
    text_scale: float = 0.5
) -> np.ndarray:
    """
    Draw a person's bounding box and confidence label in place

    Args:
        image: RGB image (H, W, 3)
        person: Detection with normalized coordinates
        color: (R, G, B) box color
        thickness: Box line thickness
        text_scale: Text font scale

    Returns:
        The same image with the box drawn
    """
    h, w = image.shape[:2]
    cx, cy = person.bbox_x * w, person.bbox_y * h
    bw, bh = person.bbox_width * w, person.bbox_height * h
    x1, y1 = int(cx - bw / 2), int(cy - bh / 2)
    x2, y2 = int(cx + bw / 2), int(cy + bh / 2)

    cv2.rectangle(image, (x1, y1), (x2, y2), color, thickness)

    label = f"{person.confidence:.2f}"
    font = cv2.FONT_HERSHEY_SIMPLEX
    (text_w, text_h), baseline = cv2.getTextSize(label, font, text_scale, 1)
    cv2.rectangle(image, (x1, y1 - text_h - baseline - 4), (x1 + text_w + 4, y1), color, -1)
    cv2.putText(
        image, label, (x1 + 2, y1 - baseline - 2),
        font, text_scale, (255, 255, 255), 1, cv2.LINE_AA
    )

    return image


def draw_skeleton(
    image: np.ndarray,
    person: PersonPose,
    color: Tuple[int, int, int],
    conf_threshold: float = 0.3,
    line_thickness: int = 2,
    point_radius: int = 4
) -> np.ndarray:
    """
    Draw pose skeleton in place

    Keypoints below conf_threshold and their limbs are skipped.

    Args:
        image: RGB image (H, W, 3)
        person: Detection with normalized coordinates
        color: (R, G, B) keypoint color
        conf_threshold: Minimum confidence for visualization
        line_thickness: Skeleton line thickness
        point_radius: Keypoint circle radius

    Returns:
        The same image with the skeleton drawn
    """
    h, w = image.shape[:2]
    # Brighter line color
    line_color = tuple(min(255, int(c * 1.3)) for c in color)

    points = [
        (int(kp.x * w), int(kp.y * h), kp.confidence)
        if kp.confidence >= conf_threshold else None
        for kp in person.keypoints
    ]

    for idx1, idx2 in COCO_SKELETON_CONNECTIONS:
        if points[idx1] is not None and points[idx2] is not None:
            cv2.line(image, points[idx1][:2], points[idx2][:2], line_color, line_thickness)

    for point in points:
        if point is not None:
            x, y, conf = point
            # Radius scales with confidence
            radius = max(1, int(point_radius * (0.5 + conf * 0.5)))
            cv2.circle(image, (x, y), radius, color, -1)
            cv2.circle(image, (x, y), radius, (255, 255, 255), 1)  # White border

    return image


def draw_person(
    image: np.ndarray,
    person: PersonPose,
    color: Optional[Tuple[int, int, int]] = None,
    conf_threshold: float = 0.3
) -> np.ndarray:
    """Draw one person's box and skeleton in place"""
    color = color if color is not None else generate_person_color(0)
    draw_bbox(image, person, color)
    draw_skeleton(image, person, color, conf_threshold)
    return image


def draw_result(
    image: np.ndarray,
    result: PoseEstimationResult,
    conf_threshold: float = 0.3
) -> np.ndarray:
    """
    Draw every detected person on a copy of the image

    Args:
        image: RGB image the result was computed on (any resolution with
            the same aspect ratio works)
        result: PoseEstimationResult
        conf_threshold: Keypoint confidence threshold

    Returns:
        New annotated image, the input is not modified

    Example:
        >>> result = estimator.estimate_pose(frame)
        >>> annotated = draw_result(frame, result)
    """
    canvas = np.ascontiguousarray(image).copy()
    for index, person in enumerate(result.persons):
        draw_person(canvas, person, generate_person_color(index), conf_threshold)
    return canvas
