#!/usr/bin/env python3
"""
Thai TTS Studio - Setup

Train custom Thai voices from a labelled dataset and synthesize speech.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README if it exists
readme_path = Path(__file__).parent / "README.md"
long_description = ""
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")

setup(
    name="thai-tts-studio",
    version="0.1.0",
    author="Thai TTS Studio",
    description="Voice training pipeline and speech synthesis studio for Thai text-to-speech",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.24.0",
        "soundfile>=0.12.1",
        "tqdm>=4.66.0",
        "gradio>=4.0.0",
    ],
    extras_require={
        "dev": ["pytest", "black", "flake8"],
    },
    entry_points={
        "console_scripts": [
            "thai_tts=thai_tts.cli:main",
            "thai_tts_ui=thai_tts.ui.run:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio :: Speech",
    ],
    keywords="tts text-to-speech thai voice training",
)
