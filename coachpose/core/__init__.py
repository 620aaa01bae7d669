"""
Core module - Configuration, constants, and exceptions for the pose pipeline
"""

from .config import (
    PipelineConfig,
    PoseConfig,
    RuntimeConfig,
    SmoothingConfig,
    clamp_threshold,
)
from .constants import (
    COCO_KEYPOINT_NAMES,
    COCO_SKELETON_CONNECTIONS,
    NUM_KEYPOINTS,
    NUM_ATTRIBUTES,
    DEFAULT_INPUT_SIZE,
    LETTERBOX_FILL_VALUE,
)
from .exceptions import (
    CoachPoseException,
    PipelineError,
    InvalidImageError,
    ImageLoadError,
    ModelLoadError,
    InferenceError,
    OutputShapeError,
    ConfigError,
    handle_exception,
)

__all__ = [
    "PipelineConfig",
    "PoseConfig",
    "RuntimeConfig",
    "clamp_threshold",
    "COCO_KEYPOINT_NAMES",
    "COCO_SKELETON_CONNECTIONS",
    "NUM_KEYPOINTS",
    "NUM_ATTRIBUTES",
    "DEFAULT_INPUT_SIZE",
    "LETTERBOX_FILL_VALUE",
    "CoachPoseException",
    "PipelineError",
    "InvalidImageError",
    "ImageLoadError",
    "ModelLoadError",
    "InferenceError",
    "OutputShapeError",
    "ConfigError",
    "handle_exception",
]
