"""
Keypoint utilities for pose estimation

Provides:
- Array <-> Keypoint conversion in COCO order
- Keypoint filtering by confidence
- Pose center computation
- Skeleton connectivity
- Image, bbox and torso-relative normalization
- Keypoint validation
"""

import numpy as np
from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Tuple

from ..core.constants import (
    COCO_KEYPOINT_NAMES,
    COCO_SKELETON_CONNECTIONS,
    NORMALIZATION_METHODS,
    NUM_KEYPOINTS,
    TORSO_KEYPOINTS,
)
from .types import Keypoint, PersonPose


def array_to_keypoints(
    arr: np.ndarray,
    keypoint_order: Sequence[str] = COCO_KEYPOINT_NAMES
) -> Tuple[Keypoint, ...]:
    """
    Convert an (N, 3) [x, y, conf] array into Keypoint objects

    Args:
        arr: Array of shape (N, 3)
        keypoint_order: Name for each row (default: COCO order)

    Returns:
        Tuple of Keypoint, one per row

    Raises:
        ValueError: If the row count does not match keypoint_order

    Example:
        >>> kps = array_to_keypoints(np.zeros((17, 3)))
        >>> kps[0].name
        'nose'
    """
    arr = np.asarray(arr)
    if arr.shape != (len(keypoint_order), 3):
        raise ValueError(
            f"Expected keypoint array of shape ({len(keypoint_order)}, 3), got {arr.shape}"
        )

    return tuple(
        Keypoint(x=float(x), y=float(y), confidence=float(conf), name=name)
        for name, (x, y, conf) in zip(keypoint_order, arr.tolist())
    )


def keypoints_to_array(person: PersonPose) -> np.ndarray:
    """
    Convert a person's keypoints to array format

    Returns:
        Array of shape (17, 3) with [x, y, conf] rows in COCO order
    """
    return np.array(
        [[kp.x, kp.y, kp.confidence] for kp in person.keypoints],
        dtype=np.float32
    ).reshape(NUM_KEYPOINTS, 3)


def filter_keypoints(
    person: PersonPose,
    conf_threshold: float = 0.3
) -> Dict[str, Keypoint]:
    """
    Keep keypoints at or above a confidence threshold

    Example:
        >>> visible = filter_keypoints(person, conf_threshold=0.5)
        >>> 'nose' in visible
    """
    return {
        kp.name: kp for kp in person.keypoints
        if kp.confidence >= conf_threshold
    }


def compute_pose_center(
    person: PersonPose,
    min_confidence: float = 0.3
) -> Optional[Tuple[float, float]]:
    """
    Compute the mean position of confident keypoints

    Returns:
        (center_x, center_y) or None if no keypoint passes min_confidence
    """
    kept = filter_keypoints(person, min_confidence)
    if not kept:
        return None

    coords = np.array([(kp.x, kp.y) for kp in kept.values()])
    center = coords.mean(axis=0)
    return (float(center[0]), float(center[1]))


def get_skeleton_connections() -> List[Tuple[int, int]]:
    """
    Get COCO skeleton connections as keypoint index pairs

    Example:
        >>> for idx1, idx2 in get_skeleton_connections():
        ...     print(COCO_KEYPOINT_NAMES[idx1], COCO_KEYPOINT_NAMES[idx2])
    """
    return list(COCO_SKELETON_CONNECTIONS)


def calculate_torso_center(person: PersonPose) -> Tuple[float, float]:
    """Midpoint of both shoulders and both hips"""
    torso = [person.get_keypoint(name) for name in TORSO_KEYPOINTS]
    return (
        sum(kp.x for kp in torso) / len(torso),
        sum(kp.y for kp in torso) / len(torso),
    )


def calculate_torso_scale(person: PersonPose) -> float:
    """Mean shoulder-to-hip distance of the left and right side"""
    left = person.get_keypoint('left_shoulder').distance_to(person.get_keypoint('left_hip'))
    right = person.get_keypoint('right_shoulder').distance_to(person.get_keypoint('right_hip'))
    return (left + right) / 2.0


def normalize_keypoints(
    person: PersonPose,
    method: str = 'image_bounds',
    reference_width: float = 1.0,
    reference_height: float = 1.0
) -> Tuple[Keypoint, ...]:
    """
    Express keypoints in a different reference frame

    Methods:
    - image_bounds: divide by reference_width / reference_height, e.g. to
      normalize a pixel-space pose (see PersonPose.to_pixel_coords)
    - bbox: relative to the person's own box, (0, 0) top-left and
      (1, 1) bottom-right
    - torso: centered on the torso, in units of torso length, which makes
      poses comparable across subject size and camera distance

    Args:
        person: Detected person
        method: One of NORMALIZATION_METHODS
        reference_width: Width divisor for image_bounds
        reference_height: Height divisor for image_bounds

    Returns:
        Tuple of 17 Keypoint in COCO order, confidences unchanged

    Raises:
        ValueError: Unknown method or zero-size reference (empty box,
            collapsed torso, zero reference dimension)

    Example:
        >>> rel = normalize_keypoints(person, method='torso')
        >>> rel[0].y < 0  # nose sits above the torso center
        True
    """
    if method not in NORMALIZATION_METHODS:
        raise ValueError(f"method must be one of {list(NORMALIZATION_METHODS)}, got {method!r}")

    if method == 'image_bounds':
        offset_x, offset_y = 0.0, 0.0
        scale_x, scale_y = reference_width, reference_height
    elif method == 'bbox':
        offset_x = person.bbox_x - person.bbox_width / 2.0
        offset_y = person.bbox_y - person.bbox_height / 2.0
        scale_x, scale_y = person.bbox_width, person.bbox_height
    else:
        offset_x, offset_y = calculate_torso_center(person)
        scale_x = scale_y = calculate_torso_scale(person)

    if scale_x <= 0 or scale_y <= 0:
        raise ValueError(f"Cannot normalize by a zero-size reference ({method})")

    return tuple(
        replace(kp, x=(kp.x - offset_x) / scale_x, y=(kp.y - offset_y) / scale_y)
        for kp in person.keypoints
    )


def validate_keypoints(
    person: PersonPose,
    min_confidence: float = 0.3
) -> List[bool]:
    """
    Flag usable keypoints of a normalized pose

    A keypoint is usable when its confidence is at least min_confidence
    and it lies inside the [0, 1] image extent.

    Returns:
        One flag per keypoint, COCO order
    """
    return [
        kp.confidence >= min_confidence and 0.0 <= kp.x <= 1.0 and 0.0 <= kp.y <= 1.0
        for kp in person.keypoints
    ]
