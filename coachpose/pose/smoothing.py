"""
Temporal smoothing of keypoints across video frames

Per-frame detections jitter by a few pixels even when the subject holds
still, which shows up as noise in joint angles and rep counting. A
KeypointSmoother follows ONE person through consecutive frames and
smooths each keypoint with one of:

- moving_average: mean of the valid positions in the last window_size frames
- ema: exponential moving average, new = alpha * current + (1 - alpha) * previous
- kalman: per-keypoint constant-position Kalman filter (filterpy)

Keypoints below min_confidence never update the smoothing state. The
smoother is stateful and not thread-safe; use one instance per tracked
person and call reset() between clips.
"""

import logging
from collections import deque
from dataclasses import replace
from typing import Deque, Iterable, List, Optional, Tuple

import numpy as np
from filterpy.kalman import KalmanFilter

from ..core.config import SmoothingConfig
from ..core.constants import MIN_HISTORY_FRAMES, NUM_KEYPOINTS
from .types import Keypoint, PersonPose

logger = logging.getLogger(__name__)


def create_keypoint_filter(
    x: float,
    y: float,
    process_noise: float,
    measurement_noise: float
) -> KalmanFilter:
    """
    Kalman filter for one keypoint, state [x, y]

    Position is modelled as constant with process noise, and both
    coordinates are observed directly.
    """
    kf = KalmanFilter(dim_x=2, dim_z=2)
    kf.F = np.eye(2)
    kf.H = np.eye(2)
    kf.P = np.eye(2)
    kf.Q = np.eye(2) * process_noise
    kf.R = np.eye(2) * measurement_noise
    kf.x = np.array([[x], [y]], dtype=np.float64)
    return kf


class KeypointSmoother:
    """
    Frame-to-frame keypoint smoother for one tracked person

    Example:
        >>> from coachpose.core.config import SmoothingConfig
        >>> smoother = KeypointSmoother(SmoothingConfig(method="kalman"))
        >>> for result in results:
        ...     if result.persons:
        ...         person = smoother.smooth(result.persons[0])
    """

    def __init__(self, config: Optional[SmoothingConfig] = None):
        """
        Args:
            config: SmoothingConfig (defaults if None)
        """
        self.config = config if config is not None else SmoothingConfig()
        self.history: Deque[PersonPose] = deque(
            maxlen=max(self.config.window_size, MIN_HISTORY_FRAMES)
        )
        self._ema_state: List[Optional[Tuple[float, float]]] = [None] * NUM_KEYPOINTS
        self._filters: List[Optional[KalmanFilter]] = [None] * NUM_KEYPOINTS

    def smooth(self, person: PersonPose) -> PersonPose:
        """
        Smooth the keypoints of the next frame

        Args:
            person: Detection of the tracked person in the current frame

        Returns:
            New PersonPose with smoothed keypoint positions; bbox and
            confidences are those of the current frame
        """
        self.history.append(person)

        if self.config.method == 'kalman':
            keypoints = self._smooth_kalman(person)
        elif self.config.method == 'ema':
            keypoints = self._smooth_ema(person)
        else:
            keypoints = self._smooth_moving_average(person)

        return replace(person, keypoints=tuple(keypoints))

    def smooth_sequence(self, persons: Iterable[PersonPose]) -> List[PersonPose]:
        """Smooth a whole track, frame by frame"""
        return [self.smooth(person) for person in persons]

    def reset(self) -> None:
        """Forget all history and filter state"""
        self.history.clear()
        self._ema_state = [None] * NUM_KEYPOINTS
        self._filters = [None] * NUM_KEYPOINTS
        logger.debug("Keypoint smoother reset")

    def _is_valid(self, kp: Keypoint) -> bool:
        return kp.is_valid(self.config.min_confidence)

    def _smooth_moving_average(self, person: PersonPose) -> List[Keypoint]:
        if len(self.history) < 2:
            return list(person.keypoints)

        window = list(self.history)[-self.config.window_size:]
        smoothed = []
        for idx, kp in enumerate(person.keypoints):
            valid = [frame.keypoints[idx] for frame in window if self._is_valid(frame.keypoints[idx])]
            if valid:
                kp = replace(
                    kp,
                    x=sum(v.x for v in valid) / len(valid),
                    y=sum(v.y for v in valid) / len(valid),
                )
            smoothed.append(kp)
        return smoothed

    def _smooth_ema(self, person: PersonPose) -> List[Keypoint]:
        alpha = self.config.ema_alpha
        smoothed = []
        for idx, kp in enumerate(person.keypoints):
            if not self._is_valid(kp):
                smoothed.append(kp)
                continue

            previous = self._ema_state[idx]
            if previous is None:
                state = (kp.x, kp.y)
            else:
                state = (
                    alpha * kp.x + (1.0 - alpha) * previous[0],
                    alpha * kp.y + (1.0 - alpha) * previous[1],
                )
            self._ema_state[idx] = state
            smoothed.append(replace(kp, x=state[0], y=state[1]))
        return smoothed

    def _smooth_kalman(self, person: PersonPose) -> List[Keypoint]:
        smoothed = []
        for idx, kp in enumerate(person.keypoints):
            if not self._is_valid(kp):
                smoothed.append(kp)
                continue

            kf = self._filters[idx]
            if kf is None:
                # First valid observation initializes the state
                kf = create_keypoint_filter(
                    kp.x, kp.y, self.config.process_noise, self.config.measurement_noise
                )
                self._filters[idx] = kf

            kf.predict()
            kf.update(np.array([kp.x, kp.y]))
            smoothed.append(replace(kp, x=float(kf.x[0, 0]), y=float(kf.x[1, 0])))
        return smoothed
