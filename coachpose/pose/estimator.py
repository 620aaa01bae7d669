"""
Pose estimation pipeline

Composes the stateless stages into one call:

    image -> letterbox -> model runtime -> decode -> NMS -> remap -> result

The estimator holds only its config and runtime. Each estimate_pose call
keeps its intermediates local, so independent estimators with different
thresholds can run side by side, and one estimator can serve several
threads when its runtime allows concurrent runs.
"""

import logging
import time
from typing import Iterable, List, Optional

from tqdm import tqdm

from ..core.config import PipelineConfig, PoseConfig
from ..core.exceptions import CoachPoseException, InferenceError
from ..detection.nms import non_max_suppression
from .decoder import decode_detections
from .letterbox import RawImage, letterbox_rgb, to_rgb_array
from .remap import remap_persons
from .runtime import ModelRuntime, OnnxModelRuntime
from .types import PoseEstimationResult

logger = logging.getLogger(__name__)


class PoseEstimator:
    """
    Multi-person 2D pose estimator

    Example:
        >>> from coachpose.core.config import PipelineConfig
        >>> from coachpose.pose import PoseEstimator
        >>> estimator = PoseEstimator.from_config(PipelineConfig())
        >>> result = estimator.estimate_pose(frame)
        >>> for person in result.persons:
        ...     print(person.confidence, person.get_keypoint("left_knee"))
    """

    def __init__(self, runtime: ModelRuntime, config: Optional[PoseConfig] = None):
        """
        Args:
            runtime: Object executing the network via run(tensor)
            config: PoseConfig with input size and thresholds (defaults if None)
        """
        self.runtime = runtime
        self.config = config if config is not None else PoseConfig()

    @classmethod
    def from_config(cls, config: PipelineConfig) -> "PoseEstimator":
        """
        Load the ONNX runtime described by config and build an estimator

        Raises:
            ModelLoadError: If the model cannot be loaded
        """
        runtime = OnnxModelRuntime.from_config(config.runtime)
        return cls(runtime, config.pose)

    def estimate_pose(self, image: RawImage) -> PoseEstimationResult:
        """
        Detect every person and their 17 COCO keypoints in one image

        Args:
            image: RGB image, (H, W, 3) uint8 array or PIL image

        Returns:
            PoseEstimationResult with coordinates normalized to the original image

        Raises:
            InvalidImageError: Zero-area or unusable image, runtime not called
            InferenceError: Runtime execution failure
            OutputShapeError: Runtime output does not match [1, 56, N]
        """
        start_time = time.perf_counter()

        rgb = to_rgb_array(image)
        image_height, image_width = rgb.shape[:2]

        tensor, transform = letterbox_rgb(rgb, self.config.input_size)

        try:
            output = self.runtime.run(tensor)
        except CoachPoseException:
            raise
        except Exception as e:
            raise InferenceError(f"Model runtime failed: {e}") from e

        candidates = decode_detections(output, self.config.confidence_threshold)
        kept = non_max_suppression(candidates, self.config.nms_iou_threshold)
        persons = remap_persons(kept, transform, image_width, image_height)

        inference_time_ms = int((time.perf_counter() - start_time) * 1000)

        logger.debug(
            "Pose estimation on %dx%d image: %d candidates, %d persons, %d ms",
            image_width, image_height, len(candidates), len(persons), inference_time_ms,
        )

        return PoseEstimationResult(
            persons=tuple(persons),
            inference_time_ms=inference_time_ms,
            image_width=image_width,
            image_height=image_height,
        )

    def estimate_batch(
        self,
        images: Iterable[RawImage],
        show_progress: bool = True
    ) -> List[PoseEstimationResult]:
        """
        Estimate poses for a sequence of frames

        Frames are processed one at a time, in order. The first failure
        propagates; no partial list is returned.

        Args:
            images: Frames, e.g. decoded from one video
            show_progress: Show progress bar

        Returns:
            One PoseEstimationResult per frame
        """
        iterator = tqdm(images, desc="Estimating poses") if show_progress else images
        return [self.estimate_pose(image) for image in iterator]

    def get_pipeline_info(self) -> dict:
        """Current pipeline settings"""
        return {
            'input_size': self.config.input_size,
            'confidence_threshold': self.config.confidence_threshold,
            'nms_iou_threshold': self.config.nms_iou_threshold,
            'runtime': type(self.runtime).__name__,
        }
