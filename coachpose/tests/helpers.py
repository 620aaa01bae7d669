"""
Test helpers: synthetic model outputs, detections and a fake runtime
"""

import numpy as np

from coachpose.core.constants import NUM_ATTRIBUTES, NUM_KEYPOINTS
from coachpose.pose.keypoint_utils import array_to_keypoints
from coachpose.pose.types import PersonPose


def build_output(detections, num_anchors=8):
    """
    Build a [1, 56, num_anchors] tensor in the model's attribute-major layout

    Args:
        detections: List of dicts with 'box' (cx, cy, w, h), 'conf', and
            optional 'kpts' ((17, 3) array) and 'anchor' (slot index)
        num_anchors: Total anchor count; unused anchors have confidence 0
    """
    output = np.zeros((1, NUM_ATTRIBUTES, num_anchors), dtype=np.float32)
    for i, det in enumerate(detections):
        anchor = det.get('anchor', i)
        output[0, 0:4, anchor] = det['box']
        output[0, 4, anchor] = det['conf']
        kpts = det.get('kpts')
        if kpts is None:
            kpts = np.tile([det['box'][0], det['box'][1], 0.9], (NUM_KEYPOINTS, 1))
        output[0, 5:, anchor] = np.asarray(kpts, dtype=np.float32).reshape(-1)
    return output


def make_person(box, conf, kpt_xy=None, kpt_conf=0.9):
    """PersonPose with every keypoint at kpt_xy (defaults to the box center)"""
    x, y = kpt_xy if kpt_xy is not None else box[:2]
    kpts = array_to_keypoints(np.tile([x, y, kpt_conf], (NUM_KEYPOINTS, 1)))
    return PersonPose(
        bbox_x=box[0], bbox_y=box[1], bbox_width=box[2], bbox_height=box[3],
        confidence=conf, keypoints=kpts,
    )


class FakeRuntime:
    """Runtime returning a fixed output and recording its inputs"""

    def __init__(self, output=None, error=None):
        self.output = output
        self.error = error
        self.calls = []

    def run(self, tensor):
        self.calls.append(tensor)
        if self.error is not None:
            raise self.error
        return self.output
