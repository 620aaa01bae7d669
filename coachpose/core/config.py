"""
Configuration management for the pose estimation pipeline

Central configuration system supporting:
- Dataclass-based configs
- YAML file loading
- Environment variable overrides
- Lenient threshold clamping
"""

import os
import yaml
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import List, Optional, Dict, Any

from .constants import (
    DEFAULT_CONFIDENCE_THRESHOLD,
    DEFAULT_EMA_ALPHA,
    DEFAULT_INPUT_SIZE,
    DEFAULT_INTRA_THREADS,
    DEFAULT_KALMAN_MEASUREMENT_NOISE,
    DEFAULT_KALMAN_PROCESS_NOISE,
    DEFAULT_NMS_IOU_THRESHOLD,
    DEFAULT_PROVIDERS,
    DEFAULT_SMOOTHING_MIN_CONFIDENCE,
    DEFAULT_SMOOTHING_WINDOW,
    OPTIMIZATION_LEVELS,
    SMOOTHING_METHODS,
    VALID_THRESHOLD_RANGE,
)
from .exceptions import ConfigError


def clamp_threshold(value: float) -> float:
    """Clamp a threshold into [0, 1]"""
    low, high = VALID_THRESHOLD_RANGE
    return float(min(max(float(value), low), high))


@dataclass
class PoseConfig:
    """Configuration for the inference pipeline stages"""
    input_size: int = DEFAULT_INPUT_SIZE
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD
    nms_iou_threshold: float = DEFAULT_NMS_IOU_THRESHOLD

    def __post_init__(self):
        """Validate configuration, clamping out-of-range thresholds"""
        self.input_size = int(self.input_size)
        if self.input_size <= 0:
            raise ConfigError(f"input_size must be positive, got {self.input_size}")
        self.confidence_threshold = clamp_threshold(self.confidence_threshold)
        self.nms_iou_threshold = clamp_threshold(self.nms_iou_threshold)


@dataclass
class RuntimeConfig:
    """Configuration for the ONNX model runtime session"""
    model_path: str = "models/pose_v1.onnx"
    providers: List[str] = field(default_factory=lambda: list(DEFAULT_PROVIDERS))
    intra_threads: int = DEFAULT_INTRA_THREADS
    optimization_level: str = "all"  # disable, basic, extended, all

    def __post_init__(self):
        """Validate configuration"""
        if self.optimization_level not in OPTIMIZATION_LEVELS:
            raise ConfigError(
                f"optimization_level must be one of {list(OPTIMIZATION_LEVELS)}"
            )
        if self.intra_threads < 0:
            raise ConfigError("intra_threads must be >= 0")


@dataclass
class SmoothingConfig:
    """Configuration for frame-to-frame keypoint smoothing"""
    method: str = "moving_average"  # moving_average, ema, kalman
    window_size: int = DEFAULT_SMOOTHING_WINDOW
    ema_alpha: float = DEFAULT_EMA_ALPHA
    process_noise: float = DEFAULT_KALMAN_PROCESS_NOISE
    measurement_noise: float = DEFAULT_KALMAN_MEASUREMENT_NOISE
    min_confidence: float = DEFAULT_SMOOTHING_MIN_CONFIDENCE

    def __post_init__(self):
        """Validate configuration"""
        if self.method not in SMOOTHING_METHODS:
            raise ConfigError(f"method must be one of {list(SMOOTHING_METHODS)}")
        if self.window_size < 1:
            raise ConfigError("window_size must be >= 1")
        if not 0.0 < self.ema_alpha <= 1.0:
            raise ConfigError("ema_alpha must be in (0, 1]")
        if self.process_noise <= 0 or self.measurement_noise <= 0:
            raise ConfigError("Kalman noise values must be positive")
        self.min_confidence = clamp_threshold(self.min_confidence)


@dataclass
class PipelineConfig:
    """Master configuration class combining all subconfigs"""
    pose: PoseConfig = field(default_factory=PoseConfig)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    smoothing: SmoothingConfig = field(default_factory=SmoothingConfig)

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "PipelineConfig":
        """
        Load configuration from YAML file

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            PipelineConfig instance

        Raises:
            FileNotFoundError: If YAML file not found
            ConfigError: If YAML format or keys are invalid
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        try:
            with open(yaml_path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML format in {yaml_path}: {e}")

        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping at the top of {yaml_path}")

        try:
            return cls(
                pose=PoseConfig(**(data.get('pose') or {})),
                runtime=RuntimeConfig(**(data.get('runtime') or {})),
                smoothing=SmoothingConfig(**(data.get('smoothing') or {})),
            )
        except TypeError as e:
            raise ConfigError(f"Unknown configuration key in {yaml_path}: {e}")

    @classmethod
    def from_env(cls, base_config: Optional["PipelineConfig"] = None) -> "PipelineConfig":
        """
        Create config from environment variables

        Supports environment variables:
        - COACHPOSE_MODEL_PATH
        - COACHPOSE_INPUT_SIZE
        - COACHPOSE_CONFIDENCE_THRESHOLD
        - COACHPOSE_NMS_IOU_THRESHOLD
        - COACHPOSE_PROVIDERS (comma separated)
        - COACHPOSE_INTRA_THREADS
        - COACHPOSE_SMOOTHING_METHOD

        Args:
            base_config: Base configuration to override (default: new config)

        Returns:
            PipelineConfig instance with environment overrides
        """
        config = cls() if base_config is None else base_config

        # Override pose config
        pose = config.pose
        if 'COACHPOSE_INPUT_SIZE' in os.environ:
            pose.input_size = int(os.environ['COACHPOSE_INPUT_SIZE'])
        if 'COACHPOSE_CONFIDENCE_THRESHOLD' in os.environ:
            pose.confidence_threshold = float(os.environ['COACHPOSE_CONFIDENCE_THRESHOLD'])
        if 'COACHPOSE_NMS_IOU_THRESHOLD' in os.environ:
            pose.nms_iou_threshold = float(os.environ['COACHPOSE_NMS_IOU_THRESHOLD'])
        # Re-run validation so env values are clamped like constructor values
        config.pose = PoseConfig(**asdict(pose))

        # Override runtime config
        runtime = config.runtime
        if 'COACHPOSE_MODEL_PATH' in os.environ:
            runtime.model_path = os.environ['COACHPOSE_MODEL_PATH']
        if 'COACHPOSE_PROVIDERS' in os.environ:
            runtime.providers = [
                p.strip() for p in os.environ['COACHPOSE_PROVIDERS'].split(',') if p.strip()
            ]
        if 'COACHPOSE_INTRA_THREADS' in os.environ:
            runtime.intra_threads = int(os.environ['COACHPOSE_INTRA_THREADS'])
        config.runtime = RuntimeConfig(**asdict(runtime))

        # Override smoothing config
        smoothing = config.smoothing
        if 'COACHPOSE_SMOOTHING_METHOD' in os.environ:
            smoothing.method = os.environ['COACHPOSE_SMOOTHING_METHOD']
        config.smoothing = SmoothingConfig(**asdict(smoothing))

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary"""
        return asdict(self)

    def to_yaml(self, yaml_path: str) -> None:
        """
        Save configuration to YAML file

        Args:
            yaml_path: Path to save YAML configuration
        """
        yaml_path = Path(yaml_path)
        yaml_path.parent.mkdir(parents=True, exist_ok=True)

        with open(yaml_path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def __str__(self) -> str:
        """String representation of config"""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)
