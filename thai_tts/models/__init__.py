"""
Trained model management for Thai TTS Studio.

- In-memory registry of trained voices
- JSON summaries and per-model directories on disk
"""

from thai_tts.models.model import ModelMetadata, TrainedModel, generate_model_id
from thai_tts.models.registry import ModelRegistry
from thai_tts.models.store import (
    load_model_summary,
    model_summary,
    save_trained_model,
    write_model_summary,
)

__all__ = [
    "ModelMetadata",
    "TrainedModel",
    "generate_model_id",
    "ModelRegistry",
    "load_model_summary",
    "model_summary",
    "save_trained_model",
    "write_model_summary",
]
