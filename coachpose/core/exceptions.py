"""
Custom exceptions for the pose estimation pipeline

Provides specific exception types for:
- Invalid or corrupt input images
- Model loading errors
- Inference errors
- Model output layout mismatches
- Configuration errors
"""

import logging

logger = logging.getLogger(__name__)


class CoachPoseException(Exception):
    """
    Base exception class for all pipeline exceptions

    All custom exceptions inherit from this class so callers can catch
    every pipeline failure with a single except clause.
    """
    pass


# Callers that model the pipeline boundary as Result<_, PipelineError>
PipelineError = CoachPoseException


class InvalidImageError(CoachPoseException):
    """
    Raised when an input image cannot be used for inference

    Reasons:
    - Zero width or zero height
    - Unsupported array shape, channel count or dtype
    - Undecodable image bytes

    Raised before any model work happens. Not retryable until the caller
    supplies a valid image.

    Example:
        >>> from coachpose.core.exceptions import InvalidImageError
        >>> try:
        ...     estimator.estimate_pose(np.zeros((0, 640, 3), dtype=np.uint8))
        ... except InvalidImageError as e:
        ...     print(f"Bad frame: {e}")
    """
    pass


class ImageLoadError(CoachPoseException):
    """
    Raised when an image file fails to load

    Reasons:
    - File does not exist
    - File format is corrupted or unsupported
    - Insufficient permissions
    """
    pass


class ModelLoadError(CoachPoseException):
    """
    Raised when the detection model fails to load

    Reasons:
    - Model file missing or unreadable
    - Model file malformed or incompatible with the runtime

    Fatal at construction time.

    Example:
        >>> from coachpose.core.exceptions import ModelLoadError
        >>> from coachpose.pose import OnnxModelRuntime
        >>> try:
        ...     runtime = OnnxModelRuntime("missing.onnx")
        ... except ModelLoadError as e:
        ...     print(f"Failed to load model: {e}")
    """
    pass


class InferenceError(CoachPoseException):
    """
    Raised when the model runtime fails while executing

    Fatal for the current call. The call is idempotent, so callers may
    retry it; the pipeline itself never retries.
    """
    pass


class OutputShapeError(CoachPoseException):
    """
    Raised when the model output does not match the expected [1, 56, N] layout

    Indicates a model/pipeline version mismatch. Not retryable without
    fixing the configuration.
    """
    pass


class ConfigError(CoachPoseException):
    """
    Raised when configuration is unusable

    Reasons:
    - Invalid YAML configuration file
    - Non-positive input size
    - Unknown graph optimization level
    """
    pass


def handle_exception(e: CoachPoseException, verbose: bool = True) -> str:
    """
    Format a pipeline exception as "[ErrorType] message"

    Args:
        e: The exception instance
        verbose: If True, also log the message at error level

    Returns:
        Formatted error message string
    """
    error_type = type(e).__name__
    formatted_msg = f"[{error_type}] {e}"

    if verbose:
        logger.error(formatted_msg)

    return formatted_msg
