"""
Tests for image loading
"""

import cv2
import numpy as np
import pytest

from coachpose.core.exceptions import ImageLoadError, InvalidImageError
from coachpose.io.data_loader import ImageLoader


@pytest.fixture
def red_png(tmp_path):
    # BGR on disk
    image = np.zeros((24, 32, 3), dtype=np.uint8)
    image[..., 2] = 255
    path = tmp_path / "red.png"
    assert cv2.imwrite(str(path), image)
    return path


def test_load_returns_rgb(red_png):
    image = ImageLoader.load(str(red_png))

    assert image.shape == (24, 32, 3)
    assert image.dtype == np.uint8
    assert (image[..., 0] == 255).all()
    assert (image[..., 2] == 0).all()


def test_load_bgr(red_png):
    image = ImageLoader.load(str(red_png), color_space='bgr')

    assert (image[..., 2] == 255).all()


def test_load_missing_file(tmp_path):
    with pytest.raises(ImageLoadError, match="not found"):
        ImageLoader.load(str(tmp_path / "nope.jpg"))


def test_load_corrupt_file(tmp_path):
    path = tmp_path / "corrupt.jpg"
    path.write_bytes(b"\x00\x01garbage")

    with pytest.raises(ImageLoadError):
        ImageLoader.load(str(path))


def test_decode_png_bytes(red_png):
    image = ImageLoader.decode(red_png.read_bytes())

    assert image.shape == (24, 32, 3)
    assert (image[..., 0] == 255).all()


@pytest.mark.parametrize("data", [b"", b"not an image"])
def test_decode_rejects_bad_bytes(data):
    with pytest.raises(InvalidImageError):
        ImageLoader.decode(data)


def test_unknown_color_space(red_png):
    with pytest.raises(ValueError):
        ImageLoader.load(str(red_png), color_space='hsv')


def test_load_batch_skips_failures(red_png, tmp_path):
    paths = [str(red_png), str(tmp_path / "missing.png"), str(red_png)]

    images = ImageLoader.load_batch(paths, show_progress=False)

    assert len(images) == 2


def test_validate_format():
    assert ImageLoader.validate_format("frame.JPG")
    assert ImageLoader.validate_format("frame.png")
    assert not ImageLoader.validate_format("clip.mp4")
