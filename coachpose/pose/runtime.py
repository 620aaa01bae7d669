"""
Model runtime for the pose detection network

The network is an opaque function with a fixed tensor contract:
    input  [1, 3, S, S] float32, RGB, [0, 1], channel-first
    output [1, 56, N] float32

OnnxModelRuntime drives an onnxruntime.InferenceSession built entirely
from caller-provided options; nothing is initialized process-wide.
ONNX Runtime allows concurrent run() calls on one session, so a single
instance may be shared by worker threads.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import onnxruntime

from ..core.config import RuntimeConfig
from ..core.constants import DEFAULT_INTRA_THREADS, DEFAULT_PROVIDERS
from ..core.exceptions import InferenceError, ModelLoadError

logger = logging.getLogger(__name__)

_OPTIMIZATION_LEVELS = {
    "disable": onnxruntime.GraphOptimizationLevel.ORT_DISABLE_ALL,
    "basic": onnxruntime.GraphOptimizationLevel.ORT_ENABLE_BASIC,
    "extended": onnxruntime.GraphOptimizationLevel.ORT_ENABLE_EXTENDED,
    "all": onnxruntime.GraphOptimizationLevel.ORT_ENABLE_ALL,
}


class ModelRuntime:
    """
    Base class for model runtimes

    Subclasses execute the network. The estimator only relies on run(),
    so any object with a compatible run() works as a runtime.
    """

    def run(self, tensor: np.ndarray) -> np.ndarray:
        """
        Execute the network

        Args:
            tensor: Input of shape [1, 3, S, S], float32

        Returns:
            Raw output of shape [1, 56, N], float32

        Raises:
            InferenceError: If execution fails
        """
        raise NotImplementedError("Subclasses must implement run method.")


class OnnxModelRuntime(ModelRuntime):
    """
    ONNX Runtime session wrapper

    Example:
        >>> from coachpose.pose.runtime import OnnxModelRuntime
        >>> runtime = OnnxModelRuntime("models/pose_v1.onnx")
        >>> output = runtime.run(tensor)
        >>> output.shape
        (1, 56, 8400)
    """

    def __init__(
        self,
        model_path: str,
        providers: Optional[List[str]] = None,
        intra_threads: int = DEFAULT_INTRA_THREADS,
        optimization_level: str = "all"
    ):
        """
        Load the model and create the inference session

        Args:
            model_path: Path to the ONNX model file
            providers: Execution providers passed through to ONNX Runtime
            intra_threads: Intra-op thread count (0 lets ONNX Runtime decide)
            optimization_level: disable, basic, extended or all

        Raises:
            ModelLoadError: If the file is missing, malformed or incompatible
        """
        self.model_path = str(model_path)
        self.providers = list(providers) if providers else list(DEFAULT_PROVIDERS)

        if optimization_level not in _OPTIMIZATION_LEVELS:
            raise ModelLoadError(f"Unknown graph optimization level '{optimization_level}'")

        if not Path(self.model_path).is_file():
            raise ModelLoadError(f"Model file not found: {self.model_path}")

        session_options = onnxruntime.SessionOptions()
        session_options.graph_optimization_level = _OPTIMIZATION_LEVELS[optimization_level]
        session_options.intra_op_num_threads = intra_threads

        try:
            self.session = onnxruntime.InferenceSession(
                self.model_path,
                sess_options=session_options,
                providers=self.providers
            )
        except Exception as e:
            raise ModelLoadError(f"Failed to load ONNX model '{self.model_path}': {e}") from e

        model_inputs = self.session.get_inputs()
        model_outputs = self.session.get_outputs()
        if not model_inputs or not model_outputs:
            raise ModelLoadError(f"Model '{self.model_path}' has no inputs or outputs")

        self.input_name = model_inputs[0].name
        self.input_shape = model_inputs[0].shape
        self.output_name = model_outputs[0].name
        self.output_shape = model_outputs[0].shape

        logger.info(
            "Loaded pose estimation model from %s (input %s %s, output %s %s)",
            self.model_path, self.input_name, self.input_shape,
            self.output_name, self.output_shape,
        )

    @classmethod
    def from_config(cls, config: RuntimeConfig) -> "OnnxModelRuntime":
        """Build a runtime from explicit RuntimeConfig"""
        return cls(
            config.model_path,
            providers=config.providers,
            intra_threads=config.intra_threads,
            optimization_level=config.optimization_level,
        )

    def run(self, tensor: np.ndarray) -> np.ndarray:
        try:
            outputs = self.session.run([self.output_name], {self.input_name: tensor})
        except Exception as e:
            raise InferenceError(f"Failed to run inference: {e}") from e

        return outputs[0]

    def get_model_info(self) -> Dict[str, Any]:
        """
        Get model information

        Returns:
            Dictionary with model metadata
        """
        return {
            'model_path': self.model_path,
            'providers': self.session.get_providers(),
            'input_name': self.input_name,
            'input_shape': self.input_shape,
            'output_name': self.output_name,
            'output_shape': self.output_shape,
        }
