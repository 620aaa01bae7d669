"""
Detection module - bounding box geometry and suppression

Provides:
- Bounding box utilities (IoU, conversions, clipping)
- Greedy Non-Maximum Suppression
"""

from .bbox_utils import (
    iou,
    iou_batch,
    xywh_to_xyxy,
    xyxy_to_xywh,
    clip_normalized_xywh,
    clip_unit,
    get_bbox_area,
)

from .nms import non_max_suppression

__all__ = [
    # Bbox utilities
    "iou",
    "iou_batch",
    "xywh_to_xyxy",
    "xyxy_to_xywh",
    "clip_normalized_xywh",
    "clip_unit",
    "get_bbox_area",
    # Suppression
    "non_max_suppression",
]
