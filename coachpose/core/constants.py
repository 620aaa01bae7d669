"""
Global constants for the pose estimation pipeline

Includes:
- COCO keypoint definitions
- Model tensor layout
- Letterbox defaults
- Color palettes
"""

# ===== COCO Keypoints (17 points) =====
COCO_KEYPOINT_NAMES = (
    'nose',             # 0
    'left_eye',         # 1
    'right_eye',        # 2
    'left_ear',         # 3
    'right_ear',        # 4
    'left_shoulder',    # 5
    'right_shoulder',   # 6
    'left_elbow',       # 7
    'right_elbow',      # 8
    'left_wrist',       # 9
    'right_wrist',      # 10
    'left_hip',         # 11
    'right_hip',        # 12
    'left_knee',        # 13
    'right_knee',       # 14
    'left_ankle',       # 15
    'right_ankle',      # 16
)

NUM_KEYPOINTS = len(COCO_KEYPOINT_NAMES)

# COCO Skeleton - connections between keypoints for visualization
COCO_SKELETON_CONNECTIONS = [
    # Face
    (0, 1), (0, 2), (1, 3), (2, 4),
    # Upper body
    (5, 6), (5, 7), (7, 9), (6, 8), (8, 10),
    # Torso
    (5, 11), (6, 12), (11, 12),
    # Lower body
    (11, 13), (13, 15), (12, 14), (14, 16),
]

# Joint angle definitions: (name, point_a, joint, point_c)
JOINT_ANGLE_DEFINITIONS = [
    ('left_hip', 'left_shoulder', 'left_hip', 'left_knee'),
    ('right_hip', 'right_shoulder', 'right_hip', 'right_knee'),
    ('left_knee', 'left_hip', 'left_knee', 'left_ankle'),
    ('right_knee', 'right_hip', 'right_knee', 'right_ankle'),
    ('left_shoulder', 'left_hip', 'left_shoulder', 'left_elbow'),
    ('right_shoulder', 'right_hip', 'right_shoulder', 'right_elbow'),
    ('left_elbow', 'left_shoulder', 'left_elbow', 'left_wrist'),
    ('right_elbow', 'right_shoulder', 'right_elbow', 'right_wrist'),
]

# ===== Model Output Layout =====
# Output tensor is [1, NUM_ATTRIBUTES, num_anchors], attribute-major.
# Attribute rows: cx, cy, w, h, conf, then (x, y, conf) per keypoint.
CONFIDENCE_INDEX = 4
KEYPOINT_OFFSET = 5
VALUES_PER_KEYPOINT = 3
NUM_ATTRIBUTES = KEYPOINT_OFFSET + NUM_KEYPOINTS * VALUES_PER_KEYPOINT  # 56


# ===== Letterbox =====
DEFAULT_INPUT_SIZE = 640
LETTERBOX_FILL_VALUE = 114
PIXEL_MAX_VALUE = 255.0

# ===== Thresholds =====
DEFAULT_CONFIDENCE_THRESHOLD = 0.5
DEFAULT_NMS_IOU_THRESHOLD = 0.45
VISIBLE_KEYPOINT_CONFIDENCE = 0.5
VALID_THRESHOLD_RANGE = (0.0, 1.0)

# ===== Runtime =====
DEFAULT_PROVIDERS = ['CPUExecutionProvider']
DEFAULT_INTRA_THREADS = 4
OPTIMIZATION_LEVELS = ('disable', 'basic', 'extended', 'all')

# ===== Temporal Smoothing =====
SMOOTHING_METHODS = ('moving_average', 'ema', 'kalman')
DEFAULT_SMOOTHING_WINDOW = 5
MIN_HISTORY_FRAMES = 3
DEFAULT_EMA_ALPHA = 0.3
DEFAULT_KALMAN_PROCESS_NOISE = 0.01
DEFAULT_KALMAN_MEASUREMENT_NOISE = 0.1
DEFAULT_SMOOTHING_MIN_CONFIDENCE = 0.3

# ===== Keypoint Normalization =====
NORMALIZATION_METHODS = ('image_bounds', 'bbox', 'torso')
TORSO_KEYPOINTS = ('left_shoulder', 'right_shoulder', 'left_hip', 'right_hip')

# ===== Color Palettes =====
# RGB format, images in this package are RGB

PERSON_COLORS = [
    (255, 0, 0),         # Red
    (0, 0, 255),         # Blue
    (0, 255, 0),         # Green
    (255, 255, 0),       # Yellow
    (255, 0, 255),       # Magenta
    (0, 255, 255),       # Cyan
    (255, 128, 0),       # Orange
    (128, 0, 255),       # Violet
    (0, 255, 128),       # Spring Green
    (255, 0, 128),       # Rose
]
