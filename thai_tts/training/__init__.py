"""
Training modules for Thai TTS Studio.

Provides:
- Manifest loading and audio path resolution
- Feature extraction (prosody labels, placeholder phonemes)
- Train/validation splitting
- Voice characteristics aggregation
- The epoch loop with progress events and cancellation
"""

from thai_tts.training.dataset import DatasetLoader, DatasetRecord, parse_manifest_line
from thai_tts.training.features import (
    CharacterPhonemizer,
    FeatureExtractor,
    ProcessedSample,
    parse_duration,
    parse_energy,
    parse_pitch,
)
from thai_tts.training.splitter import DatasetSplit, split_dataset
from thai_tts.training.characteristics import VoiceCharacteristics, aggregate_characteristics
from thai_tts.training.history import EpochResult, TrainingHistory, ValidationResult
from thai_tts.training.events import (
    EventBus,
    EventKind,
    PreprocessingProgress,
    TrainingComplete,
    TrainingFailed,
    TrainingProgress,
)
from thai_tts.training.trainer import (
    EpochRunner,
    PlaceholderEpochRunner,
    TrainingConfig,
    TrainingLoop,
    TrainingState,
)

__all__ = [
    # Dataset loading
    "DatasetLoader",
    "DatasetRecord",
    "parse_manifest_line",
    # Features
    "CharacterPhonemizer",
    "FeatureExtractor",
    "ProcessedSample",
    "parse_duration",
    "parse_energy",
    "parse_pitch",
    # Splitting
    "DatasetSplit",
    "split_dataset",
    # Characteristics
    "VoiceCharacteristics",
    "aggregate_characteristics",
    # History
    "EpochResult",
    "TrainingHistory",
    "ValidationResult",
    # Events
    "EventBus",
    "EventKind",
    "PreprocessingProgress",
    "TrainingComplete",
    "TrainingFailed",
    "TrainingProgress",
    # Training
    "EpochRunner",
    "PlaceholderEpochRunner",
    "TrainingConfig",
    "TrainingLoop",
    "TrainingState",
]
