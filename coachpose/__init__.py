"""
CoachPose - multi-person pose estimation for exercise video analysis

A Python package for:
- Letterbox preprocessing of video frames
- ONNX YOLO-pose inference
- Detection decoding and Non-Maximum Suppression
- Keypoints normalized to the original frame
- Joint angles and result visualization
"""

__version__ = "0.1.0"
__author__ = "CoachPose Team"

# Core imports (no heavy dependencies)
from .core.config import PipelineConfig, PoseConfig, RuntimeConfig, SmoothingConfig
from .core.constants import (
    COCO_KEYPOINT_NAMES,
    COCO_SKELETON_CONNECTIONS,
    NUM_KEYPOINTS,
    NUM_ATTRIBUTES,
)
from .core.exceptions import (
    CoachPoseException,
    PipelineError,
    InvalidImageError,
    ImageLoadError,
    ModelLoadError,
    InferenceError,
    OutputShapeError,
    ConfigError,
)


# Lazy imports for modules with external dependencies
def __getattr__(name):
    """Lazy loading for modules with external dependencies"""
    if name in ("PoseEstimator", "OnnxModelRuntime", "ModelRuntime",
                "Keypoint", "PersonPose", "PoseEstimationResult",
                "LetterboxTransform", "JointAngle", "KeypointSmoother"):
        from . import pose
        return getattr(pose, name)
    elif name == "ImageLoader":
        from .io.data_loader import ImageLoader
        return ImageLoader
    elif name in ("iou", "iou_batch", "non_max_suppression"):
        from . import detection
        return getattr(detection, name)
    elif name == "draw_result":
        from .visualization.drawer import draw_result
        return draw_result
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    # Version
    "__version__",
    # Config
    "PipelineConfig",
    "PoseConfig",
    "RuntimeConfig",
    "SmoothingConfig",
    # Constants
    "COCO_KEYPOINT_NAMES",
    "COCO_SKELETON_CONNECTIONS",
    "NUM_KEYPOINTS",
    "NUM_ATTRIBUTES",
    # Exceptions
    "CoachPoseException",
    "PipelineError",
    "InvalidImageError",
    "ImageLoadError",
    "ModelLoadError",
    "InferenceError",
    "OutputShapeError",
    "ConfigError",
    # Pipeline
    "PoseEstimator",
    "OnnxModelRuntime",
    "ModelRuntime",
    "Keypoint",
    "PersonPose",
    "PoseEstimationResult",
    "LetterboxTransform",
    "JointAngle",
    "KeypointSmoother",
    # IO
    "ImageLoader",
    # Detection
    "iou",
    "iou_batch",
    "non_max_suppression",
    # Visualization
    "draw_result",
]
