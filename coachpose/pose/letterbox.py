"""
Letterbox preprocessing for the pose model

Resizes an arbitrary-size RGB image into a fixed S x S tensor while
preserving aspect ratio:

1. scale = min(S / width, S / height)
2. bilinear resize to (round(width * scale), round(height * scale))
3. paste at (pad_x, pad_y) on a gray (114) canvas
4. HWC uint8 -> NCHW float32 in [0, 1]

pad_x and pad_y are the left/top padding, (S - new) // 2. When the
leftover is odd the extra pixel goes to the right/bottom edge. The
coordinate remapper subtracts the same left/top padding, so forward and
inverse transforms agree.
"""

import cv2
import numpy as np
from PIL import Image
from typing import Tuple, Union

from ..core.constants import LETTERBOX_FILL_VALUE, PIXEL_MAX_VALUE
from ..core.exceptions import ConfigError, InvalidImageError
from .types import LetterboxTransform

RawImage = Union[np.ndarray, Image.Image]


def to_rgb_array(image: RawImage) -> np.ndarray:
    """
    Normalize a raw image into an (H, W, 3) uint8 RGB array

    Accepts:
    - (H, W, 3) uint8 RGB arrays (returned as is)
    - (H, W) grayscale and (H, W, 4) RGBA uint8 arrays
    - PIL images in any mode

    Raises:
        InvalidImageError: If the image cannot be interpreted
    """
    if image is None:
        raise InvalidImageError("Image is None")

    if isinstance(image, Image.Image):
        try:
            image = np.asarray(image.convert("RGB"))
        except (OSError, ValueError) as e:
            raise InvalidImageError(f"Cannot convert PIL image to RGB: {e}")

    if not isinstance(image, np.ndarray):
        raise InvalidImageError(
            f"Unsupported image type {type(image).__name__}, expected numpy array or PIL image"
        )

    if image.dtype != np.uint8:
        raise InvalidImageError(f"Unsupported image dtype {image.dtype}, expected uint8")

    if image.ndim == 2:
        if image.size == 0:
            return image.reshape(image.shape + (3,))
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGB)

    if image.ndim != 3 or image.shape[2] not in (1, 3, 4):
        raise InvalidImageError(f"Unsupported image shape {image.shape}")

    if image.shape[2] == 1:
        return np.repeat(image, 3, axis=2)
    if image.shape[2] == 4:
        return np.ascontiguousarray(image[:, :, :3])
    return image


def compute_letterbox(width: int, height: int, target_size: int) -> Tuple[int, int, LetterboxTransform]:
    """
    Compute letterbox geometry without touching pixels

    Args:
        width: Original image width
        height: Original image height
        target_size: Square model input size S

    Returns:
        (new_width, new_height, LetterboxTransform)

    Raises:
        InvalidImageError: If width or height is zero
        ConfigError: If target_size is not positive

    Example:
        >>> compute_letterbox(1280, 640, 640)
        (640, 320, LetterboxTransform(scale=0.5, pad_x=0, pad_y=160))
    """
    if target_size <= 0:
        raise ConfigError(f"target_size must be positive, got {target_size}")
    if width <= 0 or height <= 0:
        raise InvalidImageError(f"Image has zero area: {width}x{height}")

    scale = min(target_size / width, target_size / height)
    new_width = max(1, int(round(width * scale)))
    new_height = max(1, int(round(height * scale)))
    pad_x = (target_size - new_width) // 2
    pad_y = (target_size - new_height) // 2

    return new_width, new_height, LetterboxTransform(scale, pad_x, pad_y)


def preprocess(image: RawImage, target_size: int) -> Tuple[np.ndarray, LetterboxTransform]:
    """
    Letterbox an image into the model input tensor

    Args:
        image: RGB image, see to_rgb_array() for accepted forms
        target_size: Square model input size S

    Returns:
        (tensor, transform) where tensor is float32 [1, 3, S, S] in [0, 1]
        and transform holds (scale, pad_x, pad_y)

    Raises:
        InvalidImageError: If the image is zero-area or unusable

    Example:
        >>> tensor, (scale, pad_x, pad_y) = preprocess(frame, 640)
        >>> tensor.shape
        (1, 3, 640, 640)
    """
    return letterbox_rgb(to_rgb_array(image), target_size)


def letterbox_rgb(rgb: np.ndarray, target_size: int) -> Tuple[np.ndarray, LetterboxTransform]:
    """
    Letterbox an RGB array already checked by to_rgb_array()

    Same output as preprocess(), without re-validating the image.
    """
    height, width = rgb.shape[:2]
    new_width, new_height, transform = compute_letterbox(width, height, target_size)

    if (new_width, new_height) != (width, height):
        resized = cv2.resize(rgb, (new_width, new_height), interpolation=cv2.INTER_LINEAR)
    else:
        resized = rgb

    canvas = np.full((target_size, target_size, 3), LETTERBOX_FILL_VALUE, dtype=np.uint8)
    canvas[
        transform.pad_y:transform.pad_y + new_height,
        transform.pad_x:transform.pad_x + new_width,
    ] = resized

    # HWC -> CHW, normalize, add batch dimension
    tensor = np.transpose(canvas, (2, 0, 1)).astype(np.float32) / PIXEL_MAX_VALUE
    tensor = np.expand_dims(tensor, axis=0)

    return np.ascontiguousarray(tensor, dtype=np.float32), transform
