"""
Voice characteristics aggregated over a training set.
"""

from collections import Counter
from typing import Any, Dict, Sequence
from dataclasses import dataclass, field

import numpy as np

from thai_tts.training.features import DEFAULT_EMOTION, ProcessedSample


@dataclass(frozen=True)
class VoiceCharacteristics:
    """Summary statistics describing a trained voice."""

    avg_pitch: float = 0.0
    avg_energy: float = 0.0
    avg_duration: float = 0.0
    emotion_distribution: Dict[str, float] = field(default_factory=dict)
    language: str = "th"
    sample_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "avgPitch": self.avg_pitch,
            "avgEnergy": self.avg_energy,
            "avgDuration": self.avg_duration,
            "emotionDistribution": dict(self.emotion_distribution),
            "language": self.language,
            "sampleCount": self.sample_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VoiceCharacteristics":
        return cls(
            avg_pitch=float(data.get("avgPitch", 0.0)),
            avg_energy=float(data.get("avgEnergy", 0.0)),
            avg_duration=float(data.get("avgDuration", 0.0)),
            emotion_distribution=dict(data.get("emotionDistribution", {})),
            language=data.get("language", "th"),
            sample_count=int(data.get("sampleCount", 0)),
        )


def emotion_distribution(samples: Sequence[ProcessedSample]) -> Dict[str, float]:
    """Fraction of samples per emotion label."""
    if not samples:
        return {}

    counts = Counter(sample.emotion or DEFAULT_EMOTION for sample in samples)
    total = len(samples)
    return {emotion: count / total for emotion, count in counts.items()}


def aggregate_characteristics(
    samples: Sequence[ProcessedSample],
    language: str = "th",
) -> VoiceCharacteristics:
    """
    Compute voice characteristics over a training set.

    Returns zeroed characteristics for an empty input.
    """
    if not samples:
        return VoiceCharacteristics(language=language)

    pitch = np.array([s.pitch for s in samples], dtype=np.float64)
    energy = np.array([s.energy for s in samples], dtype=np.float64)
    duration = np.array([s.duration for s in samples], dtype=np.float64)

    return VoiceCharacteristics(
        avg_pitch=float(pitch.mean()),
        avg_energy=float(energy.mean()),
        avg_duration=float(duration.mean()),
        emotion_distribution=emotion_distribution(samples),
        language=language,
        sample_count=len(samples),
    )
