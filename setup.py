#!/usr/bin/env python
"""
Setup configuration for CoachPose package

Installation:
    pip install -e .

Installation with development dependencies:
    pip install -e ".[dev]"
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

setup(
    name="coachpose",
    version="0.1.0",
    description="Multi-person pose estimation pipeline for exercise video analysis",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="CoachPose Team",
    author_email="",
    license="MIT",
    python_requires=">=3.8",

    packages=find_packages(include=["coachpose*"]),

    # Core dependencies
    install_requires=[
        # Computer Vision
        "opencv-python>=4.5.0",
        "numpy>=1.21.0",
        "pillow>=8.0.0",

        # Inference
        "onnxruntime>=1.16.0",

        # Temporal smoothing
        "filterpy>=1.4.5",

        # Configuration
        "pyyaml>=5.4.0",

        # Progress bars
        "tqdm>=4.60.0",
    ],

    # Optional dependencies for development
    extras_require={
        "dev": [
            "pytest>=6.2.0",
            "pytest-cov>=2.12.0",
            "onnx>=1.14.0",
            "black>=21.0",
            "isort>=5.9.0",
            "flake8>=3.9.0",
            "mypy>=0.910",
        ],
        "gpu": [
            "onnxruntime-gpu>=1.16.0",
        ],
    },

    # Metadata
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
        "Topic :: Scientific/Engineering :: Image Recognition",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],

    keywords="pose-estimation YOLO ONNX keypoints exercise-analysis",
)
