"""
Feature extraction for training samples.

Maps manifest labels to numeric prosody features. No audio decoding
happens here; the audio file is only read to confirm it is usable.
"""

import logging
import math
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Tuple, Union
from dataclasses import dataclass, field

from thai_tts.exceptions import PreprocessError
from thai_tts.training.dataset import DatasetRecord

logger = logging.getLogger(__name__)

PITCH_HZ: Dict[str, float] = {
    "low": 100.0,
    "medium": 200.0,
    "high": 300.0,
    "warm": 180.0,
}
DEFAULT_PITCH_HZ = 200.0

ENERGY_LEVELS: Dict[str, float] = {
    "low": 0.3,
    "medium": 0.6,
    "high": 0.9,
}
DEFAULT_ENERGY = 0.6

DEFAULT_DURATION = 2.0
DEFAULT_EMOTION = "neutral"


def parse_pitch(pitch: Optional[str]) -> float:
    """Map a pitch label to Hz, 200 Hz for unknown or missing labels."""
    if not pitch:
        return DEFAULT_PITCH_HZ
    return PITCH_HZ.get(pitch.strip().lower(), DEFAULT_PITCH_HZ)


def parse_energy(energy: Optional[str]) -> float:
    """Map an energy label to 0-1, 0.6 for unknown or missing labels."""
    if not energy:
        return DEFAULT_ENERGY
    return ENERGY_LEVELS.get(energy.strip().lower(), DEFAULT_ENERGY)


def parse_duration(duration: Optional[str]) -> float:
    """Parse a duration in seconds, 2.0 when the field is not a finite positive number."""
    try:
        value = float(duration)
    except (TypeError, ValueError):
        return DEFAULT_DURATION
    if not math.isfinite(value) or value <= 0:
        return DEFAULT_DURATION
    return value


class Phonemizer(Protocol):
    """Text to ordered phoneme tokens."""

    def __call__(self, text: str) -> List[str]:
        ...


class CharacterPhonemizer:
    """
    One token per non-whitespace character.

    Stands in for a real Thai grapheme-to-phoneme model.
    """

    def __call__(self, text: str) -> List[str]:
        return [char for char in text if not char.isspace()]


@dataclass(frozen=True)
class ProcessedSample:
    """A training sample with numeric prosody features."""

    audio_path: Path
    text: str
    pitch: float
    energy: float
    duration: float
    emotion: str
    phonemes: Tuple[str, ...] = field(default_factory=tuple)
    audio_size: int = 0

    def to_dict(self) -> Dict[str, object]:
        return {
            "audio_path": str(self.audio_path),
            "text": self.text,
            "pitch": self.pitch,
            "energy": self.energy,
            "duration": self.duration,
            "emotion": self.emotion,
            "phonemes": list(self.phonemes),
        }


class FeatureExtractor:
    """Turn dataset records into ProcessedSamples."""

    def __init__(self, phonemizer: Optional[Phonemizer] = None):
        self.phonemizer = phonemizer or CharacterPhonemizer()

    def preprocess(self, audio_path: Union[str, Path], record: DatasetRecord) -> ProcessedSample:
        """
        Preprocess one record.

        Args:
            audio_path: Audio file for the record.
            record: The parsed manifest row.

        Returns:
            ProcessedSample built from the record's labels.

        Raises:
            PreprocessError: If the audio file cannot be read.
        """
        audio_path = Path(audio_path)
        logger.debug("Preprocessing: %s", audio_path)

        try:
            audio_bytes = audio_path.read_bytes()
        except OSError as e:
            raise PreprocessError(f"Failed to preprocess audio {audio_path}: {e}") from e

        return ProcessedSample(
            audio_path=audio_path,
            text=record.text,
            pitch=parse_pitch(record.pitch),
            energy=parse_energy(record.energy),
            duration=parse_duration(record.duration),
            emotion=record.emotion_label or DEFAULT_EMOTION,
            phonemes=tuple(self.phonemizer(record.text)),
            audio_size=len(audio_bytes),
        )
