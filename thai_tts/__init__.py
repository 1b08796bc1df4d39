"""
Thai TTS Studio

A demonstration text-to-speech service with a voice-training pipeline:
dataset preparation, a training loop with progress events, a registry of
trained voices and a placeholder synthesis engine.
"""

__version__ = "0.1.0"
__author__ = "Thai TTS Studio"

from thai_tts.config import Config
from thai_tts.core.pipeline import VoiceTrainingPipeline
from thai_tts.core.synthesis import SynthesisEngine
from thai_tts.models.registry import ModelRegistry
from thai_tts.training.events import EventKind

__all__ = [
    "Config",
    "VoiceTrainingPipeline",
    "SynthesisEngine",
    "ModelRegistry",
    "EventKind",
]
