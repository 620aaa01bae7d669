"""
IO module - Image loading utilities

Provides:
- Image loading from disk with error handling
- Decoding encoded image bytes
- Batch loading
"""

from .data_loader import ImageLoader

__all__ = [
    "ImageLoader",
]
