"""
Bounding box utilities for detection post-processing

Boxes coming out of the pose model are center-form (cx, cy, w, h).
Overlap is measured on corner form (x1, y1, x2, y2).

Provides:
- Center/corner format conversion
- Single and batch IoU computation on center-form boxes
- Normalized bbox clipping
"""

import numpy as np
from typing import Tuple

BoxXYWH = Tuple[float, float, float, float]
BoxXYXY = Tuple[float, float, float, float]


def xywh_to_xyxy(box: BoxXYWH) -> BoxXYXY:
    """
    Convert center-form box to corner form

    Args:
        box: (cx, cy, w, h)

    Returns:
        (x1, y1, x2, y2)

    Example:
        >>> xywh_to_xyxy((100, 100, 50, 50))
        (75.0, 75.0, 125.0, 125.0)
    """
    cx, cy, w, h = box
    return (cx - w / 2.0, cy - h / 2.0, cx + w / 2.0, cy + h / 2.0)


def xyxy_to_xywh(box: BoxXYXY) -> BoxXYWH:
    """
    Convert corner-form box to center form

    Inverse operation of xywh_to_xyxy()

    Args:
        box: (x1, y1, x2, y2)

    Returns:
        (cx, cy, w, h)
    """
    x1, y1, x2, y2 = box
    return ((x1 + x2) / 2.0, (y1 + y2) / 2.0, x2 - x1, y2 - y1)


def iou(box1: BoxXYWH, box2: BoxXYWH) -> float:
    """
    Compute Intersection over Union (IoU) between two center-form boxes

    Args:
        box1: (cx, cy, w, h)
        box2: (cx, cy, w, h)

    Returns:
        IoU score between 0 and 1, 0 when the union is empty

    Example:
        >>> iou((100, 100, 50, 50), (100, 100, 50, 50))
        1.0
        >>> iou((100, 100, 50, 50), (300, 300, 50, 50))
        0.0
    """
    ax1, ay1, ax2, ay2 = xywh_to_xyxy(box1)
    bx1, by1, bx2, by2 = xywh_to_xyxy(box2)

    # Intersection area
    inter_w = max(0.0, min(ax2, bx2) - max(ax1, bx1))
    inter_h = max(0.0, min(ay2, by2) - max(ay1, by1))
    inter_area = inter_w * inter_h

    # Union area
    area1 = box1[2] * box1[3]
    area2 = box2[2] * box2[3]
    union_area = area1 + area2 - inter_area

    if union_area <= 0:
        return 0.0

    return float(inter_area / union_area)


def iou_batch(boxes1: np.ndarray, boxes2: np.ndarray) -> np.ndarray:
    """
    Compute pairwise IoU between two sets of center-form boxes (vectorized)

    Same semantics as iou(), using numpy broadcasting instead of loops.

    Args:
        boxes1: Array of shape (N, 4) with [cx, cy, w, h]
        boxes2: Array of shape (M, 4) with [cx, cy, w, h]

    Returns:
        IoU matrix of shape (N, M), float64

    Example:
        >>> boxes1 = np.array([[100, 100, 50, 50]])
        >>> boxes2 = np.array([[100, 100, 50, 50], [300, 300, 50, 50]])
        >>> iou_batch(boxes1, boxes2)
        array([[1., 0.]])
    """
    boxes1 = np.asarray(boxes1, dtype=np.float64).reshape(-1, 4)
    boxes2 = np.asarray(boxes2, dtype=np.float64).reshape(-1, 4)

    # Reshape for broadcasting: (N, 1, 4) and (1, M, 4)
    b1 = np.expand_dims(boxes1, 1)
    b2 = np.expand_dims(boxes2, 0)

    half_w1, half_h1 = b1[..., 2] / 2.0, b1[..., 3] / 2.0
    half_w2, half_h2 = b2[..., 2] / 2.0, b2[..., 3] / 2.0

    # Intersection box
    xx1 = np.maximum(b1[..., 0] - half_w1, b2[..., 0] - half_w2)
    yy1 = np.maximum(b1[..., 1] - half_h1, b2[..., 1] - half_h2)
    xx2 = np.minimum(b1[..., 0] + half_w1, b2[..., 0] + half_w2)
    yy2 = np.minimum(b1[..., 1] + half_h1, b2[..., 1] + half_h2)

    w = np.maximum(0.0, xx2 - xx1)
    h = np.maximum(0.0, yy2 - yy1)
    inter = w * h

    union = b1[..., 2] * b1[..., 3] + b2[..., 2] * b2[..., 3] - inter

    # IoU (avoid division by zero)
    safe_union = np.where(union > 0, union, 1.0)
    return np.where(union > 0, inter / safe_union, 0.0)


def clip_unit(value: float) -> float:
    """
    Clip a normalized coordinate to [0, 1]

    NaN maps to 0.0 and infinities to the nearest bound, so non-finite
    model values never leave the pipeline.
    """
    return float(np.clip(np.nan_to_num(value, nan=0.0, posinf=1.0, neginf=0.0), 0.0, 1.0))


def clip_normalized_xywh(box: BoxXYWH) -> BoxXYWH:
    """
    Clip a normalized center-form box to the [0, 1] image extent

    The box is clipped on its corners and converted back, so the result
    always describes the visible part of the original box.

    Args:
        box: (cx, cy, w, h) in normalized coordinates

    Returns:
        Clipped (cx, cy, w, h)

    Example:
        >>> clip_normalized_xywh((0.0, 0.5, 0.4, 0.2))
        (0.1, 0.5, 0.2, 0.2)
    """
    x1, y1, x2, y2 = xywh_to_xyxy(box)
    x1, y1, x2, y2 = (clip_unit(v) for v in (x1, y1, x2, y2))
    return xyxy_to_xywh((x1, y1, x2, y2))


def get_bbox_area(box: BoxXYWH) -> float:
    """Get center-form bounding box area"""
    return float(box[2] * box[3])
