"""
Pose estimation module - 2D keypoint detection

Provides:
- Letterbox preprocessing, output decoding and coordinate remapping
- ONNX model runtime
- PoseEstimator pipeline
- Keypoint utilities and joint angles
- Temporal keypoint smoothing
"""

from .types import (
    Keypoint,
    PersonPose,
    PoseEstimationResult,
    LetterboxTransform,
    JointAngle,
)
from .letterbox import preprocess, compute_letterbox, letterbox_rgb, to_rgb_array
from .decoder import decode_detections, validate_output_shape
from .remap import remap_persons, remap_person, remap_point
from .runtime import ModelRuntime, OnnxModelRuntime
from .estimator import PoseEstimator
from .keypoint_utils import (
    array_to_keypoints,
    keypoints_to_array,
    filter_keypoints,
    compute_pose_center,
    get_skeleton_connections,
    calculate_torso_center,
    calculate_torso_scale,
    normalize_keypoints,
    validate_keypoints,
)
from .smoothing import KeypointSmoother
from .joint_angles import calculate_joint_angle, calculate_joint_angles

__all__ = [
    # Types
    "Keypoint",
    "PersonPose",
    "PoseEstimationResult",
    "LetterboxTransform",
    "JointAngle",
    # Stages
    "preprocess",
    "compute_letterbox",
    "letterbox_rgb",
    "to_rgb_array",
    "decode_detections",
    "validate_output_shape",
    "remap_persons",
    "remap_person",
    "remap_point",
    # Runtime and pipeline
    "ModelRuntime",
    "OnnxModelRuntime",
    "PoseEstimator",
    # Keypoint utilities
    "array_to_keypoints",
    "keypoints_to_array",
    "filter_keypoints",
    "compute_pose_center",
    "get_skeleton_connections",
    "calculate_torso_center",
    "calculate_torso_scale",
    "normalize_keypoints",
    "validate_keypoints",
    "calculate_joint_angle",
    "calculate_joint_angles",
    # Temporal smoothing
    "KeypointSmoother",
]
