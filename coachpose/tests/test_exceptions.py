"""
Tests for the exception hierarchy
"""

import logging

import pytest

from coachpose.core.exceptions import (
    CoachPoseException,
    ConfigError,
    ImageLoadError,
    InferenceError,
    InvalidImageError,
    ModelLoadError,
    OutputShapeError,
    PipelineError,
    handle_exception,
)


@pytest.mark.parametrize("error_cls", [
    ConfigError, ImageLoadError, InferenceError,
    InvalidImageError, ModelLoadError, OutputShapeError,
])
def test_all_errors_share_one_base(error_cls):
    assert issubclass(error_cls, CoachPoseException)
    assert issubclass(error_cls, PipelineError)


def test_handle_exception_formats_and_logs(caplog):
    with caplog.at_level(logging.ERROR, logger="coachpose.core.exceptions"):
        message = handle_exception(OutputShapeError("got [1, 8400, 56]"))

    assert message == "[OutputShapeError] got [1, 8400, 56]"
    assert message in caplog.text


def test_handle_exception_quiet(caplog):
    with caplog.at_level(logging.ERROR):
        handle_exception(ModelLoadError("missing"), verbose=False)

    assert caplog.text == ""
