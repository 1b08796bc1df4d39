"""
Trained voice model records.
"""

import hashlib
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, Optional
from dataclasses import dataclass

if TYPE_CHECKING:
    from thai_tts.training.characteristics import VoiceCharacteristics
    from thai_tts.training.history import TrainingHistory

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def generate_model_id(voice_name: str, timestamp: Optional[datetime] = None) -> str:
    """
    Build a model id of the form ``{voice_name}_{8 hex chars}``.

    The hash is the MD5 of the voice name joined with the base-36
    millisecond timestamp, so the same name and time give the same id.

    Examples:
        >>> generate_model_id("thai_voice", datetime(2024, 1, 1))[:11]
        'thai_voice_'
    """
    if timestamp is None:
        timestamp = datetime.now()
    millis = int(timestamp.timestamp() * 1000)
    digest = hashlib.md5((voice_name + _to_base36(millis)).encode("utf-8")).hexdigest()
    return f"{voice_name}_{digest[:8]}"


@dataclass(frozen=True)
class ModelMetadata:
    """Derived facts about a training run."""

    training_samples: int
    validation_samples: int
    epochs: int
    final_loss: Optional[float]
    validation_loss: Optional[float]
    batch_size: int = 0
    learning_rate: float = 0.0
    cancelled: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "trainingSamples": self.training_samples,
            "validationSamples": self.validation_samples,
            "epochs": self.epochs,
            "finalLoss": self.final_loss,
            "validationLoss": self.validation_loss,
            "batchSize": self.batch_size,
            "learningRate": self.learning_rate,
            "cancelled": self.cancelled,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModelMetadata":
        return cls(
            training_samples=int(data.get("trainingSamples", 0)),
            validation_samples=int(data.get("validationSamples", 0)),
            epochs=int(data.get("epochs", 0)),
            final_loss=data.get("finalLoss"),
            validation_loss=data.get("validationLoss"),
            batch_size=int(data.get("batchSize", 0)),
            learning_rate=float(data.get("learningRate", 0.0)),
            cancelled=bool(data.get("cancelled", False)),
        )


@dataclass(frozen=True)
class TrainedModel:
    """A completed training run, usable as a synthesis voice."""

    id: str
    name: str
    created_at: datetime
    training_history: "TrainingHistory"
    voice_characteristics: "VoiceCharacteristics"
    metadata: ModelMetadata

    def get_info(self) -> Dict[str, Any]:
        """Get model info as dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "type": "trained",
            "createdAt": self.created_at.isoformat(),
            "characteristics": self.voice_characteristics.to_dict(),
            "metadata": self.metadata.to_dict(),
        }
