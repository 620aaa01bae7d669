"""
Greedy Non-Maximum Suppression for person detections

Works on any candidate exposing ``confidence`` and ``bbox_xywh``
(center-form box), which is what PersonPose provides.
"""

import numpy as np
from typing import List, Sequence, TypeVar

from ..core.config import clamp_threshold
from ..core.constants import DEFAULT_NMS_IOU_THRESHOLD
from .bbox_utils import iou_batch

T = TypeVar("T")


def non_max_suppression(
    candidates: Sequence[T],
    iou_threshold: float = DEFAULT_NMS_IOU_THRESHOLD
) -> List[T]:
    """
    Remove overlapping duplicate detections of the same person

    Candidates are sorted by confidence, highest first. Ties keep their
    input order (anchor order when fed straight from the decoder). The best
    remaining candidate is kept and every remaining candidate whose IoU
    with it is >= iou_threshold is dropped, until none remain.

    Args:
        candidates: Detections with ``confidence`` and ``bbox_xywh``
        iou_threshold: Suppression threshold, clamped to [0, 1]

    Returns:
        Kept detections, highest confidence first

    Example:
        >>> kept = non_max_suppression(candidates, iou_threshold=0.45)
        >>> len(kept) <= len(candidates)
        True
    """
    iou_threshold = clamp_threshold(iou_threshold)

    # sorted() is stable, so equal confidences keep anchor order
    remaining = sorted(candidates, key=lambda c: c.confidence, reverse=True)
    if not remaining:
        return []

    boxes = np.array([c.bbox_xywh for c in remaining], dtype=np.float64)
    order = np.arange(len(remaining))
    keep = []

    while order.size > 0:
        best = order[0]
        keep.append(remaining[best])

        rest = order[1:]
        if rest.size == 0:
            break

        overlaps = iou_batch(boxes[best], boxes[rest])[0]
        order = rest[overlaps < iou_threshold]

    return keep
