"""
Tests for temporal keypoint smoothing
"""

import numpy as np
import pytest

from coachpose.core.config import SmoothingConfig
from coachpose.core.exceptions import ConfigError
from coachpose.pose.smoothing import KeypointSmoother, create_keypoint_filter
from coachpose.tests.helpers import make_person


def frame(x, conf=0.9, y=0.5):
    """Person whose keypoints all sit at (x, y)"""
    return make_person((0.5, 0.5, 0.2, 0.4), 0.8, kpt_xy=(x, y), kpt_conf=conf)


def test_moving_average_over_window():
    smoother = KeypointSmoother(SmoothingConfig(method="moving_average", window_size=3))

    outputs = smoother.smooth_sequence([frame(0.1), frame(0.2), frame(0.3), frame(0.6)])

    xs = [p.keypoints[0].x for p in outputs]
    # First frame has no history, the rest average the last three frames
    assert xs == pytest.approx([0.1, 0.15, 0.2, (0.2 + 0.3 + 0.6) / 3])


def test_moving_average_ignores_low_confidence_history():
    smoother = KeypointSmoother(SmoothingConfig(window_size=5, min_confidence=0.3))

    outputs = smoother.smooth_sequence([frame(0.1), frame(0.9, conf=0.1), frame(0.3)])

    assert outputs[-1].keypoints[0].x == pytest.approx(0.2)


def test_ema():
    smoother = KeypointSmoother(SmoothingConfig(method="ema", ema_alpha=0.5))

    outputs = smoother.smooth_sequence([frame(0.2), frame(0.4), frame(0.4)])

    assert [p.keypoints[5].x for p in outputs] == pytest.approx([0.2, 0.3, 0.35])


def test_kalman_first_frame_is_unchanged_and_updates_move_toward_measurement():
    smoother = KeypointSmoother(SmoothingConfig(method="kalman"))

    first = smoother.smooth(frame(0.2))
    second = smoother.smooth(frame(0.4))

    assert first.keypoints[0].x == pytest.approx(0.2)
    assert 0.2 < second.keypoints[0].x < 0.4
    assert second.keypoints[0].y == pytest.approx(0.5)


def test_kalman_reduces_jitter():
    rng = np.random.default_rng(1)
    noisy = 0.5 + rng.normal(0, 0.02, size=60)
    smoother = KeypointSmoother(SmoothingConfig(method="kalman"))

    smoothed = [p.keypoints[0].x for p in smoother.smooth_sequence(frame(x) for x in noisy)]

    assert np.std(smoothed[10:]) < np.std(noisy[10:])


def test_kalman_skips_low_confidence_keypoints():
    smoother = KeypointSmoother(SmoothingConfig(method="kalman", min_confidence=0.5))
    smoother.smooth(frame(0.2))

    out = smoother.smooth(frame(0.9, conf=0.1))

    # Passed through untouched, filter state not updated
    assert out.keypoints[0].x == 0.9
    assert smoother.smooth(frame(0.2)).keypoints[0].x == pytest.approx(0.2)


def test_filter_matches_scalar_kalman_update():
    q, r = 0.01, 0.1
    kf = create_keypoint_filter(0.2, 0.2, q, r)
    for z in (0.2, 0.4):
        kf.predict()
        kf.update(np.array([z, z]))

    # Scalar recurrence: p_pred = p + q, k = p_pred / (p_pred + r)
    x, p = 0.2, 1.0
    for z in (0.2, 0.4):
        p_pred = p + q
        k = p_pred / (p_pred + r)
        x, p = x + k * (z - x), (1 - k) * p_pred

    assert kf.x[0, 0] == pytest.approx(x)


def test_reset_forgets_state():
    for method in ("moving_average", "ema", "kalman"):
        smoother = KeypointSmoother(SmoothingConfig(method=method))
        smoother.smooth_sequence([frame(0.1), frame(0.2)])

        smoother.reset()

        assert len(smoother.history) == 0
        assert smoother.smooth(frame(0.7)).keypoints[0].x == pytest.approx(0.7)


def test_bbox_and_confidence_come_from_current_frame():
    smoother = KeypointSmoother()
    smoother.smooth(frame(0.1))
    current = make_person((0.6, 0.4, 0.1, 0.3), 0.55, kpt_xy=(0.2, 0.5), kpt_conf=0.7)

    out = smoother.smooth(current)

    assert out.bbox_xywh == current.bbox_xywh
    assert out.confidence == 0.55
    assert out.keypoints[0].confidence == 0.7


def test_history_is_bounded():
    smoother = KeypointSmoother(SmoothingConfig(window_size=4))

    smoother.smooth_sequence(frame(0.1) for _ in range(10))

    assert len(smoother.history) == 4


@pytest.mark.parametrize("kwargs", [
    {'method': 'median'},
    {'window_size': 0},
    {'ema_alpha': 0.0},
    {'process_noise': 0.0},
])
def test_invalid_smoothing_config(kwargs):
    with pytest.raises(ConfigError):
        SmoothingConfig(**kwargs)
