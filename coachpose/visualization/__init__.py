"""
Visualization module - Rendering pose estimation results

Provides:
- Bounding box drawing
- Skeleton visualization
- Color management
"""

from .drawer import (
    generate_person_color,
    draw_bbox,
    draw_skeleton,
    draw_person,
    draw_result,
)

__all__ = [
    # Color
    "generate_person_color",
    # Drawing
    "draw_bbox",
    "draw_skeleton",
    "draw_person",
    "draw_result",
]
