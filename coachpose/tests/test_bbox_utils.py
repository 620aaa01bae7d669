"""
Tests for center-form bounding box utilities
"""

import numpy as np
import pytest

from coachpose.detection.bbox_utils import (
    clip_normalized_xywh,
    clip_unit,
    get_bbox_area,
    iou,
    iou_batch,
    xywh_to_xyxy,
    xyxy_to_xywh,
)


def test_identical_boxes_have_iou_one():
    assert iou((100, 100, 50, 50), (100, 100, 50, 50)) == pytest.approx(1.0)


def test_disjoint_boxes_have_iou_zero():
    assert iou((100, 100, 50, 50), (300, 300, 50, 50)) == 0.0
    assert iou((100, 100, 50, 50), (200, 200, 50, 50)) == 0.0


def test_touching_boxes_have_iou_zero():
    # Edges meet at x=125
    assert iou((100, 100, 50, 50), (150, 100, 50, 50)) == 0.0


def test_partial_overlap():
    # Overlap is 30x30 = 900, union = 2500 + 2500 - 900 = 4100
    value = iou((100, 100, 50, 50), (120, 120, 50, 50))
    assert value == pytest.approx(900 / 4100)


def test_zero_area_boxes_have_iou_zero():
    assert iou((10, 10, 0, 0), (10, 10, 0, 0)) == 0.0


def test_iou_is_symmetric():
    a, b = (100, 100, 60, 40), (110, 95, 30, 70)
    assert iou(a, b) == pytest.approx(iou(b, a))


def test_iou_batch_matches_scalar_iou():
    boxes1 = np.array([[100, 100, 50, 50], [120, 120, 50, 50]])
    boxes2 = np.array([[100, 100, 50, 50], [300, 300, 50, 50], [110, 90, 20, 80]])
    matrix = iou_batch(boxes1, boxes2)

    assert matrix.shape == (2, 3)
    for i, b1 in enumerate(boxes1):
        for j, b2 in enumerate(boxes2):
            assert matrix[i, j] == pytest.approx(iou(tuple(b1), tuple(b2)))


def test_iou_batch_zero_union():
    matrix = iou_batch(np.zeros((1, 4)), np.zeros((2, 4)))
    assert np.all(matrix == 0.0)


def test_box_format_conversion():
    assert xywh_to_xyxy((100, 100, 50, 50)) == (75.0, 75.0, 125.0, 125.0)
    assert xyxy_to_xywh((75, 75, 125, 125)) == (100.0, 100.0, 50.0, 50.0)


def test_clip_normalized_box_inside_is_unchanged():
    box = (0.5, 0.5, 0.2, 0.4)
    assert clip_normalized_xywh(box) == pytest.approx(box)


def test_clip_normalized_box_crossing_edge():
    cx, cy, w, h = clip_normalized_xywh((0.0, 0.5, 0.4, 0.2))
    assert (cx, cy, w, h) == pytest.approx((0.1, 0.5, 0.2, 0.2))


def test_bbox_area():
    assert get_bbox_area((0, 0, 100, 50)) == 5000.0


@pytest.mark.parametrize("value, expected", [
    (0.25, 0.25),
    (-3.0, 0.0),
    (4.0, 1.0),
    (float("nan"), 0.0),
    (float("inf"), 1.0),
    (float("-inf"), 0.0),
])
def test_clip_unit(value, expected):
    assert clip_unit(value) == expected


def test_clip_normalized_box_with_non_finite_values():
    for box in [(float("nan"), 0.5, 0.2, 0.2), (0.5, 0.5, float("inf"), float("nan"))]:
        clipped = clip_normalized_xywh(box)
        assert all(np.isfinite(clipped))
        assert all(0.0 <= v <= 1.0 for v in clipped[:2])
