"""
Joint angle analysis from 2D pose keypoints

Provides:
- Angle at a joint from three keypoints
- Hip, knee, shoulder and elbow angles for a detected person

Ankle angles need foot orientation, which COCO keypoints do not carry,
so they are not computed.
"""

import math
from typing import List, Optional, Tuple

from ..core.constants import JOINT_ANGLE_DEFINITIONS
from .types import JointAngle, Keypoint, PersonPose


def calculate_joint_angle(
    point_a: Keypoint,
    point_b: Keypoint,
    point_c: Keypoint
) -> Tuple[float, float]:
    """
    Calculate the angle at point_b formed by point_a and point_c

    Args:
        point_a: First point (e.g. hip)
        point_b: Joint point (e.g. knee)
        point_c: Third point (e.g. ankle)

    Returns:
        (angle_radians, angle_degrees)

    Raises:
        ValueError: If either vector has zero length

    Example:
        >>> rad, deg = calculate_joint_angle(hip, knee, ankle)
        >>> print(f"Knee flexion: {deg:.1f}")
    """
    ba_x, ba_y = point_a.x - point_b.x, point_a.y - point_b.y
    bc_x, bc_y = point_c.x - point_b.x, point_c.y - point_b.y

    mag_ba = math.hypot(ba_x, ba_y)
    mag_bc = math.hypot(bc_x, bc_y)
    if mag_ba == 0.0 or mag_bc == 0.0:
        raise ValueError("Cannot calculate angle with zero-length vectors")

    cos_angle = (ba_x * bc_x + ba_y * bc_y) / (mag_ba * mag_bc)
    angle_radians = math.acos(min(max(cos_angle, -1.0), 1.0))
    return angle_radians, math.degrees(angle_radians)


def calculate_joint_angles(
    person: PersonPose,
    min_confidence: float = 0.5,
    image_size: Optional[Tuple[int, int]] = None
) -> List[JointAngle]:
    """
    Calculate joint angles for hips, knees, shoulders and elbows

    A joint is skipped unless all three keypoints are valid at
    min_confidence. Normalized coordinates distort angles on non-square
    images, so pass image_size to measure in pixel space.

    Args:
        person: Detected person (normalized coordinates)
        min_confidence: Minimum keypoint confidence
        image_size: Optional (width, height) of the original image

    Returns:
        List of JointAngle, in JOINT_ANGLE_DEFINITIONS order
    """
    if image_size is not None:
        person = person.to_pixel_coords(*image_size)

    angles = []
    for name, name_a, name_b, name_c in JOINT_ANGLE_DEFINITIONS:
        kp_a = person.get_keypoint(name_a)
        kp_b = person.get_keypoint(name_b)
        kp_c = person.get_keypoint(name_c)

        if not all(kp.is_valid(min_confidence) for kp in (kp_a, kp_b, kp_c)):
            continue

        try:
            angle_rad, angle_deg = calculate_joint_angle(kp_a, kp_b, kp_c)
        except ValueError:
            # Coincident keypoints carry no direction
            continue

        angles.append(JointAngle(
            name=name,
            angle_degrees=angle_deg,
            angle_radians=angle_rad,
            confidence=min(kp_a.confidence, kp_b.confidence, kp_c.confidence),
        ))

    return angles
