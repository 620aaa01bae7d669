"""
Image loading utilities for feeding frames to the pipeline

Produces RGB uint8 arrays, the RawImage form PoseEstimator expects.
"""

import logging
from pathlib import Path
from typing import List

import cv2
import numpy as np
from tqdm import tqdm

from ..core.exceptions import ImageLoadError, InvalidImageError

logger = logging.getLogger(__name__)


def _convert_color(image: np.ndarray, color_space: str) -> np.ndarray:
    color_space = color_space.lower()
    if color_space == 'rgb':
        return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
    if color_space == 'bgr':
        return image
    raise ValueError(f"color_space must be 'rgb' or 'bgr', got {color_space!r}")


class ImageLoader:
    """
    Image loading with error handling

    Supports:
    - Single image loading from disk
    - Decoding encoded bytes (e.g. an uploaded JPEG)
    - Batch loading with progress
    """

    @staticmethod
    def load(image_path: str, color_space: str = 'rgb') -> np.ndarray:
        """
        Load a single image with error handling

        Args:
            image_path: Path to image file
            color_space: 'rgb' (default, pipeline input) or 'bgr'

        Returns:
            Image array (H, W, 3)

        Raises:
            ImageLoadError: If image cannot be loaded

        Example:
            >>> from coachpose.io import ImageLoader
            >>> img = ImageLoader.load("frame_001.jpg")
            >>> print(img.shape)
            (480, 640, 3)
        """
        path = Path(image_path)

        if not path.exists():
            raise ImageLoadError(f"Image file not found: {image_path}")

        image = cv2.imread(str(path), cv2.IMREAD_COLOR)

        if image is None:
            raise ImageLoadError(
                f"Failed to read image (corrupted or unsupported format): {image_path}"
            )

        return _convert_color(image, color_space)

    @staticmethod
    def decode(data: bytes, color_space: str = 'rgb') -> np.ndarray:
        """
        Decode an encoded image (JPEG, PNG, ...) from memory

        Args:
            data: Encoded image bytes
            color_space: 'rgb' (default) or 'bgr'

        Returns:
            Image array (H, W, 3)

        Raises:
            InvalidImageError: If the bytes cannot be decoded
        """
        if not data:
            raise InvalidImageError("Empty image data")

        buffer = np.frombuffer(data, dtype=np.uint8)
        image = cv2.imdecode(buffer, cv2.IMREAD_COLOR)

        if image is None:
            raise InvalidImageError("Failed to decode image data (corrupted or unsupported format)")

        return _convert_color(image, color_space)

    @staticmethod
    def load_batch(
        image_paths: List[str],
        color_space: str = 'rgb',
        show_progress: bool = True
    ) -> List[np.ndarray]:
        """
        Load multiple images with progress tracking

        Args:
            image_paths: List of image file paths
            color_space: 'rgb' or 'bgr'
            show_progress: Show progress bar

        Returns:
            List of image arrays, skipping failed images
        """
        images = []
        failed_count = 0

        iterator = tqdm(image_paths, desc="Loading images") if show_progress else image_paths

        for path in iterator:
            try:
                images.append(ImageLoader.load(path, color_space))
            except ImageLoadError as e:
                logger.warning("Skipping image: %s", e)
                failed_count += 1

        if failed_count > 0:
            logger.warning("Failed to load %d of %d images", failed_count, len(image_paths))

        return images

    @staticmethod
    def validate_format(image_path: str) -> bool:
        """
        Check if file has a supported image extension

        Args:
            image_path: Path to check

        Returns:
            True if valid image format
        """
        path = Path(image_path)
        valid_extensions = {'.jpg', '.jpeg', '.png', '.bmp', '.tiff', '.webp'}
        return path.suffix.lower() in valid_extensions
