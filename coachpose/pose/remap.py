"""
Coordinate remapping from model space back to the original image

For every coordinate: undo letterbox, x' = (x - pad_x) / scale, then
normalize by the original image size. Box sizes are only divided by the
scale. Results are clipped into [0, 1], non-finite values included.
Confidences are untouched.
"""

from dataclasses import replace
from typing import Iterable, List, Tuple

from ..detection.bbox_utils import clip_normalized_xywh, clip_unit
from .types import LetterboxTransform, PersonPose


def remap_point(
    x: float,
    y: float,
    transform: LetterboxTransform,
    image_width: int,
    image_height: int
) -> Tuple[float, float]:
    """
    Map a model-space point to normalized original-image coordinates

    Not clipped, so it is the exact inverse of the letterbox transform.

    Example:
        >>> remap_point(320, 400, LetterboxTransform(0.5, 0, 160), 1280, 640)
        (0.5, 0.75)
    """
    scale, pad_x, pad_y = transform
    return (
        (x - pad_x) / scale / image_width,
        (y - pad_y) / scale / image_height,
    )


def remap_person(
    person: PersonPose,
    transform: LetterboxTransform,
    image_width: int,
    image_height: int
) -> PersonPose:
    """Remap one detection, clipping the box and keypoints to the image"""
    cx, cy = remap_point(person.bbox_x, person.bbox_y, transform, image_width, image_height)
    w = person.bbox_width / transform.scale / image_width
    h = person.bbox_height / transform.scale / image_height
    cx, cy, w, h = clip_normalized_xywh((cx, cy, w, h))

    keypoints = []
    for kp in person.keypoints:
        x, y = remap_point(kp.x, kp.y, transform, image_width, image_height)
        keypoints.append(replace(kp, x=clip_unit(x), y=clip_unit(y)))

    return replace(
        person,
        bbox_x=cx,
        bbox_y=cy,
        bbox_width=w,
        bbox_height=h,
        keypoints=tuple(keypoints),
    )


def remap_persons(
    persons: Iterable[PersonPose],
    transform: LetterboxTransform,
    image_width: int,
    image_height: int
) -> List[PersonPose]:
    """
    Remap all kept detections into normalized original-image space

    Args:
        persons: Detections in model-pixel space
        transform: LetterboxTransform from the same preprocessing call
        image_width: Original image width
        image_height: Original image height

    Returns:
        New PersonPose list, same order, coordinates in [0, 1]
    """
    return [
        remap_person(person, transform, image_width, image_height)
        for person in persons
    ]
