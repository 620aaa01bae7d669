"""
Decoder for the raw pose model output

Output layout is [1, 56, N], attribute-major and anchor-minor, exactly
as the YOLO-pose export produces it. For anchor j:

    output[0, 0:4, j]          cx, cy, w, h   (model pixels)
    output[0, 4, j]            person confidence
    output[0, 5+3k:8+3k, j]    x, y, conf of keypoint k (COCO order)

A [1, N, 56] tensor is rejected rather than guessed at, since reading it
with the wrong stride silently corrupts every coordinate.
"""

import numpy as np
from typing import List

from ..core.config import clamp_threshold
from ..core.constants import (
    CONFIDENCE_INDEX,
    DEFAULT_CONFIDENCE_THRESHOLD,
    KEYPOINT_OFFSET,
    NUM_ATTRIBUTES,
    NUM_KEYPOINTS,
    VALUES_PER_KEYPOINT,
)
from ..core.exceptions import OutputShapeError
from .keypoint_utils import array_to_keypoints
from .types import PersonPose


def validate_output_shape(output: np.ndarray) -> np.ndarray:
    """
    Check the model output matches the [1, 56, N] contract

    Returns:
        The output as a numpy array

    Raises:
        OutputShapeError: If the layout does not match
    """
    try:
        output = np.asarray(output, dtype=np.float32)
    except (TypeError, ValueError) as e:
        raise OutputShapeError(f"Model output is not a numeric tensor: {e}")

    if output.ndim != 3:
        raise OutputShapeError(
            f"Expected output of rank 3 [1, {NUM_ATTRIBUTES}, N], got shape {output.shape}"
        )
    if output.shape[0] != 1:
        raise OutputShapeError(f"Expected batch size 1, got shape {output.shape}")
    if output.shape[1] != NUM_ATTRIBUTES:
        raise OutputShapeError(
            f"Expected {NUM_ATTRIBUTES} attributes on axis 1, got shape {output.shape}"
        )
    return output


def decode_detections(
    output: np.ndarray,
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD
) -> List[PersonPose]:
    """
    Turn the raw output tensor into candidate detections

    Anchors with confidence < confidence_threshold are discarded. Survivors
    keep anchor order and stay in model-pixel space.

    Args:
        output: Raw model output of shape [1, 56, N]
        confidence_threshold: Minimum person confidence, clamped to [0, 1]

    Returns:
        List of PersonPose candidates in model-pixel coordinates

    Raises:
        OutputShapeError: If the output layout does not match

    Example:
        >>> candidates = decode_detections(raw_output, confidence_threshold=0.5)
    """
    output = validate_output_shape(output)
    confidence_threshold = clamp_threshold(confidence_threshold)

    # [56, N] -> [N, 56], one row per anchor
    rows = output[0].T
    survivors = np.flatnonzero(rows[:, CONFIDENCE_INDEX] >= confidence_threshold)

    candidates = []
    for anchor in survivors:
        row = rows[anchor]
        cx, cy, w, h, conf = (float(v) for v in row[:KEYPOINT_OFFSET])
        keypoints = array_to_keypoints(
            row[KEYPOINT_OFFSET:].reshape(NUM_KEYPOINTS, VALUES_PER_KEYPOINT)
        )
        candidates.append(PersonPose(
            bbox_x=cx,
            bbox_y=cy,
            bbox_width=w,
            bbox_height=h,
            confidence=conf,
            keypoints=keypoints,
        ))

    return candidates
