"""
Tests for drawing pose results
"""

import numpy as np

from coachpose.pose.types import PoseEstimationResult
from coachpose.tests.helpers import make_person
from coachpose.visualization.drawer import draw_result, generate_person_color


def make_result(persons):
    return PoseEstimationResult(
        persons=persons, inference_time_ms=5, image_width=200, image_height=100,
    )


def test_draw_result_returns_annotated_copy():
    image = np.zeros((100, 200, 3), dtype=np.uint8)
    person = make_person((0.5, 0.5, 0.4, 0.6), 0.9, kpt_xy=(0.5, 0.5))

    annotated = draw_result(image, make_result([person]))

    assert annotated.shape == image.shape
    assert annotated is not image
    assert annotated.any()
    assert not image.any()


def test_low_confidence_keypoints_are_not_drawn():
    image = np.zeros((100, 200, 3), dtype=np.uint8)
    # Tiny box far from the keypoints, keypoints below the drawing threshold
    person = make_person((0.05, 0.05, 0.02, 0.02), 0.9, kpt_xy=(0.75, 0.75), kpt_conf=0.1)

    annotated = draw_result(image, make_result([person]), conf_threshold=0.3)

    assert not annotated[60:90, 130:170].any()


def test_empty_result_leaves_image_unchanged():
    image = np.full((100, 200, 3), 7, dtype=np.uint8)

    assert np.array_equal(draw_result(image, make_result([])), image)


def test_person_colors_cycle():
    assert generate_person_color(0) == generate_person_color(0)
    assert generate_person_color(0) != generate_person_color(1)
