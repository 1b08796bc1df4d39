"""
Per-run training history.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence
from dataclasses import dataclass, field

from thai_tts.exceptions import TrainingError


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a stored timestamp.

    Accepts ISO 8601 strings (a trailing "Z" included) and epoch
    milliseconds, the form older history files use.

    Raises:
        ValueError: If the value is neither.
    """
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"Invalid timestamp: {value!r}")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000)
    if isinstance(value, str):
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        return datetime.fromisoformat(value)
    raise ValueError(f"Invalid timestamp: {value!r}")


@dataclass(frozen=True)
class EpochResult:
    """Outcome of a single training epoch."""

    epoch: int
    loss: float
    accuracy: float
    learning_rate: float
    batch_size: int
    duration: float  # seconds

    def to_dict(self) -> Dict[str, Any]:
        return {
            "epoch": self.epoch,
            "loss": self.loss,
            "accuracy": self.accuracy,
            "learningRate": self.learning_rate,
            "batchSize": self.batch_size,
            "duration": round(self.duration * 1000),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EpochResult":
        return cls(
            epoch=int(data["epoch"]),
            loss=float(data["loss"]),
            accuracy=float(data["accuracy"]),
            learning_rate=float(data.get("learningRate", 0.0)),
            batch_size=int(data.get("batchSize", 0)),
            duration=float(data.get("duration", 0)) / 1000,
        )


@dataclass(frozen=True)
class ValidationResult:
    """Aggregate loss/accuracy over the validation set."""

    loss: float
    accuracy: float
    samples: int


@dataclass
class TrainingHistory:
    """
    Accumulates epoch results for one run.

    Becomes read-only once ``finalize`` is called.
    """

    voice_name: str
    epochs: Sequence[EpochResult] = field(default_factory=list)
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None
    final_loss: Optional[float] = None
    validation_loss: Optional[float] = None
    validation_accuracy: Optional[float] = None
    finalized: bool = False

    def record(self, result: EpochResult) -> None:
        if self.finalized:
            raise TrainingError("Training history is finalized")
        self.epochs.append(result)

    def finalize(self, validation: Optional[ValidationResult] = None) -> None:
        """Close the history: end time, final loss and validation metrics."""
        if self.finalized:
            raise TrainingError("Training history is already finalized")

        self.epochs = tuple(self.epochs)
        self.end_time = datetime.now()
        self.final_loss = self.epochs[-1].loss if self.epochs else None
        if validation is not None:
            self.validation_loss = validation.loss
            self.validation_accuracy = validation.accuracy
        self.finalized = True

    @property
    def epoch_count(self) -> int:
        return len(self.epochs)

    @property
    def training_time(self) -> float:
        """Wall-clock training time in seconds (0 until finalized)."""
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "voiceName": self.voice_name,
            "epochs": [e.to_dict() for e in self.epochs],
            "startTime": self.start_time.isoformat(),
            "endTime": self.end_time.isoformat() if self.end_time else None,
            "finalLoss": self.final_loss,
            "validationLoss": self.validation_loss,
            "validationAccuracy": self.validation_accuracy,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrainingHistory":
        epochs: List[EpochResult] = [EpochResult.from_dict(e) for e in data.get("epochs", [])]
        return cls(
            voice_name=data.get("voiceName", ""),
            epochs=tuple(epochs),
            start_time=parse_timestamp(data.get("startTime")) or datetime.now(),
            end_time=parse_timestamp(data.get("endTime")),
            final_loss=data.get("finalLoss"),
            validation_loss=data.get("validationLoss"),
            validation_accuracy=data.get("validationAccuracy"),
            finalized=True,
        )
