"""
Tests for decoding the raw [1, 56, N] model output
"""

import numpy as np
import pytest

from coachpose.core.constants import COCO_KEYPOINT_NAMES, NUM_KEYPOINTS
from coachpose.core.exceptions import OutputShapeError
from coachpose.pose.decoder import decode_detections
from coachpose.tests.helpers import build_output


def test_indexing_contract_on_hand_built_tensor():
    # Attribute-major: row a, column j holds attribute a of anchor j
    output = np.zeros((1, 56, 3), dtype=np.float32)
    output[0, :, 1] = np.arange(56, dtype=np.float32) / 100.0
    output[0, 4, 1] = 0.95

    candidates = decode_detections(output, 0.5)

    assert len(candidates) == 1
    person = candidates[0]
    assert person.bbox_xywh == pytest.approx((0.00, 0.01, 0.02, 0.03))
    assert person.confidence == pytest.approx(0.95)
    for k, kp in enumerate(person.keypoints):
        base = 5 + 3 * k
        assert kp.x == pytest.approx(base / 100.0)
        assert kp.y == pytest.approx((base + 1) / 100.0)
        assert kp.confidence == pytest.approx((base + 2) / 100.0)


def test_every_candidate_has_17_keypoints_in_coco_order():
    output = build_output([
        {'box': (100, 100, 50, 80), 'conf': 0.9},
        {'box': (300, 200, 60, 90), 'conf': 0.7},
    ])

    for threshold in (0.0, 0.5, 0.8):
        for person in decode_detections(output, threshold):
            assert len(person.keypoints) == NUM_KEYPOINTS
            assert tuple(kp.name for kp in person.keypoints) == COCO_KEYPOINT_NAMES


def test_confidence_filter_keeps_threshold_and_anchor_order():
    output = build_output([
        {'box': (10, 10, 5, 5), 'conf': 0.3, 'anchor': 0},
        {'box': (20, 20, 5, 5), 'conf': 0.5, 'anchor': 2},
        {'box': (30, 30, 5, 5), 'conf': 0.9, 'anchor': 5},
    ])

    candidates = decode_detections(output, 0.5)

    # conf == threshold is kept, result follows anchor order
    assert [c.bbox_x for c in candidates] == [20.0, 30.0]


def test_high_threshold_returns_no_candidates():
    output = build_output([
        {'box': (100, 100, 50, 50), 'conf': 0.8},
        {'box': (200, 200, 50, 50), 'conf': 0.6},
    ])

    assert decode_detections(output, 0.99) == []


def test_raising_threshold_never_adds_candidates():
    rng = np.random.default_rng(7)
    output = rng.uniform(0, 640, size=(1, 56, 200)).astype(np.float32)
    output[0, 4, :] = rng.uniform(0, 1, size=200)

    counts = [len(decode_detections(output, t)) for t in np.linspace(0, 1, 11)]

    assert counts == sorted(counts, reverse=True)


def test_threshold_is_clamped():
    output = build_output([{'box': (10, 10, 5, 5), 'conf': 1.0}])

    assert len(decode_detections(output, 2.0)) == 1
    assert len(decode_detections(output, -1.0)) == 8  # every anchor, even conf 0


def test_coordinates_stay_in_model_space():
    output = build_output([{'box': (320, 400, 64, 128), 'conf': 0.9}])

    person = decode_detections(output, 0.5)[0]

    assert person.bbox_xywh == (320.0, 400.0, 64.0, 128.0)
    assert person.keypoints[0].x == 320.0


@pytest.mark.parametrize("shape", [
    (56, 8400),        # missing batch dimension
    (2, 56, 8400),     # batch of two
    (1, 8400, 56),     # anchor-major layout
    (1, 57, 100),      # wrong attribute count
    (1, 56, 10, 1),    # extra dimension
])
def test_wrong_layout_raises_output_shape_error(shape):
    with pytest.raises(OutputShapeError):
        decode_detections(np.zeros(shape, dtype=np.float32))


def test_non_numeric_output_raises_output_shape_error():
    with pytest.raises(OutputShapeError):
        decode_detections("not a tensor")


def test_empty_anchor_axis_is_valid():
    assert decode_detections(np.zeros((1, 56, 0), dtype=np.float32)) == []
