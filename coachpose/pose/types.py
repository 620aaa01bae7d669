"""
Data model for pose estimation results

- Keypoint: one labeled body joint
- PersonPose: one detected person (center-form bbox + 17 COCO keypoints)
- PoseEstimationResult: everything detected in one image
- LetterboxTransform: scale/padding of one preprocessing call
- JointAngle: angle at a joint computed from three keypoints

All types are immutable.
"""

import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, NamedTuple, Optional, Tuple

from ..core.constants import COCO_KEYPOINT_NAMES, NUM_KEYPOINTS, VISIBLE_KEYPOINT_CONFIDENCE


@dataclass(frozen=True)
class Keypoint:
    """Single detected keypoint with position and confidence"""
    x: float
    y: float
    confidence: float
    name: str

    @property
    def visible(self) -> bool:
        """True when the keypoint confidence is above 0.5"""
        return self.confidence > VISIBLE_KEYPOINT_CONFIDENCE

    def is_valid(self, min_confidence: float) -> bool:
        """Check the keypoint has enough confidence and non-negative coordinates"""
        return self.confidence >= min_confidence and self.x >= 0 and self.y >= 0

    def distance_to(self, other: "Keypoint") -> float:
        """Euclidean distance to another keypoint"""
        return math.hypot(self.x - other.x, self.y - other.y)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict form with name, coordinates and confidence"""
        return {
            "name": self.name,
            "x": self.x,
            "y": self.y,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class PersonPose:
    """
    Detected person with bounding box and keypoints

    Bbox is center form. Coordinates are model-space pixels while inside
    the pipeline and normalized [0, 1] image space once returned.

    Raises:
        ValueError: If keypoints are not exactly the 17 COCO keypoints in order
    """
    bbox_x: float
    bbox_y: float
    bbox_width: float
    bbox_height: float
    confidence: float
    keypoints: Tuple[Keypoint, ...] = field(default_factory=tuple)

    def __post_init__(self):
        keypoints = tuple(self.keypoints)
        if len(keypoints) != NUM_KEYPOINTS:
            raise ValueError(
                f"PersonPose requires {NUM_KEYPOINTS} keypoints, got {len(keypoints)}"
            )
        names = tuple(kp.name for kp in keypoints)
        if names != COCO_KEYPOINT_NAMES:
            raise ValueError(f"Keypoints must follow COCO order, got {names}")
        object.__setattr__(self, "keypoints", keypoints)

    @property
    def bbox_xywh(self) -> Tuple[float, float, float, float]:
        """Center-form bbox (cx, cy, w, h)"""
        return (self.bbox_x, self.bbox_y, self.bbox_width, self.bbox_height)

    def get_keypoint(self, name: str) -> Optional[Keypoint]:
        """Get keypoint by COCO name"""
        try:
            return self.keypoints[COCO_KEYPOINT_NAMES.index(name)]
        except ValueError:
            return None

    def to_pixel_coords(self, img_width: int, img_height: int) -> "PersonPose":
        """
        Convert normalized coordinates to pixel coordinates

        Args:
            img_width: Original image width in pixels
            img_height: Original image height in pixels

        Returns:
            New PersonPose in pixel space

        Example:
            >>> pixel_pose = person.to_pixel_coords(1280, 720)
            >>> pixel_pose.get_keypoint("nose").x
        """
        return replace(
            self,
            bbox_x=self.bbox_x * img_width,
            bbox_y=self.bbox_y * img_height,
            bbox_width=self.bbox_width * img_width,
            bbox_height=self.bbox_height * img_height,
            keypoints=tuple(
                replace(kp, x=kp.x * img_width, y=kp.y * img_height)
                for kp in self.keypoints
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict form, keypoints as a list in COCO order"""
        return {
            "bbox_x": self.bbox_x,
            "bbox_y": self.bbox_y,
            "bbox_width": self.bbox_width,
            "bbox_height": self.bbox_height,
            "confidence": self.confidence,
            "keypoints": [kp.to_dict() for kp in self.keypoints],
        }


@dataclass(frozen=True)
class PoseEstimationResult:
    """Result of pose estimation on one image"""
    persons: Tuple[PersonPose, ...]
    inference_time_ms: int
    # Original (pre-letterbox) image dimensions
    image_width: int
    image_height: int

    def __post_init__(self):
        object.__setattr__(self, "persons", tuple(self.persons))

    @property
    def num_persons(self) -> int:
        return len(self.persons)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict form for JSON serialization by callers"""
        return {
            "persons": [p.to_dict() for p in self.persons],
            "inference_time_ms": self.inference_time_ms,
            "image_width": self.image_width,
            "image_height": self.image_height,
        }


class LetterboxTransform(NamedTuple):
    """Scale and left/top padding applied by one letterbox call"""
    scale: float
    pad_x: int
    pad_y: int


@dataclass(frozen=True)
class JointAngle:
    """Angle at a joint, confidence is the minimum of the three keypoints"""
    name: str
    angle_degrees: float
    angle_radians: float
    confidence: float
