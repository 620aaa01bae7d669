"""
Tests module - Unit and integration tests for the coachpose package

Provides:
- Core module tests (config, exceptions)
- Detection module tests (bbox utils, NMS)
- Pose module tests (letterbox, decoder, remap, estimator, runtime)
- IO and visualization tests
"""

__all__ = []
