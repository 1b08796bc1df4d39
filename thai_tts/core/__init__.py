"""
Core services for Thai TTS Studio.
"""

from thai_tts.core.pipeline import DatasetSummary, VoiceTrainingPipeline
from thai_tts.core.synthesis import SynthesisEngine, SynthesisResult

__all__ = [
    "DatasetSummary",
    "VoiceTrainingPipeline",
    "SynthesisEngine",
    "SynthesisResult",
]
