"""
Voice model trainer for Thai TTS Studio.

Handles:
- The epoch loop with progress notifications
- Cooperative cancellation at epoch boundaries
- Validation, voice characteristics and model registration

The per-epoch work is delegated to an EpochRunner. The default
PlaceholderEpochRunner produces a randomized, slowly decaying loss and
performs no real optimization.
"""

import logging
import math
import time
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional, Protocol, Sequence
from dataclasses import dataclass

import numpy as np

from thai_tts.exceptions import ConfigurationError, NoTrainingDataError, TrainingError
from thai_tts.models.model import ModelMetadata, TrainedModel, generate_model_id
from thai_tts.training.characteristics import aggregate_characteristics
from thai_tts.training.events import EventBus, TrainingComplete, TrainingFailed, TrainingProgress
from thai_tts.training.features import ProcessedSample
from thai_tts.training.history import EpochResult, TrainingHistory, ValidationResult

if TYPE_CHECKING:
    from thai_tts.models.registry import ModelRegistry

logger = logging.getLogger(__name__)


class TrainingState(Enum):
    """Lifecycle of a training run."""
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass
class TrainingConfig:
    """Configuration for training a voice model."""

    voice_name: str = "custom_voice"
    epochs: int = 100
    batch_size: int = 8
    learning_rate: float = 1e-4

    def __post_init__(self):
        if not self.voice_name:
            raise ConfigurationError("voice_name is required")
        if self.epochs < 1:
            raise ConfigurationError(f"epochs must be positive, got {self.epochs}")
        if self.batch_size < 1:
            raise ConfigurationError(f"batch_size must be positive, got {self.batch_size}")
        if self.learning_rate <= 0:
            raise ConfigurationError(f"learning_rate must be positive, got {self.learning_rate}")


class EpochRunner(Protocol):
    """Executes the work of one epoch and the final validation pass."""

    def run_epoch(
        self,
        epoch: int,
        training_set: Sequence[ProcessedSample],
        batch_size: int,
        learning_rate: float,
    ) -> EpochResult:
        ...

    def validate(self, validation_set: Sequence[ProcessedSample]) -> ValidationResult:
        ...


class PlaceholderEpochRunner:
    """
    Simulated training step.

    loss = 0.1 + U(0, 0.01) * exp(-0.01 * epoch)
    accuracy = 0.95 + U(0, 0.05) * exp(-0.01 * epoch)
    """

    def __init__(
        self,
        epoch_delay: float = 0.1,
        rng: Optional[np.random.Generator] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.epoch_delay = epoch_delay
        self.rng = rng if rng is not None else np.random.default_rng()
        self._sleep = sleep

    def run_epoch(
        self,
        epoch: int,
        training_set: Sequence[ProcessedSample],
        batch_size: int,
        learning_rate: float,
    ) -> EpochResult:
        started = time.monotonic()

        # Stand-in for real compute
        if self.epoch_delay > 0:
            self._sleep(self.epoch_delay)

        epoch_factor = math.exp(-epoch * 0.01)
        loss = 0.1 + self.rng.random() * 0.01 * epoch_factor
        accuracy = 0.95 + self.rng.random() * 0.05 * epoch_factor

        return EpochResult(
            epoch=epoch,
            loss=loss,
            accuracy=accuracy,
            learning_rate=learning_rate,
            batch_size=batch_size,
            duration=time.monotonic() - started,
        )

    def validate(self, validation_set: Sequence[ProcessedSample]) -> ValidationResult:
        return ValidationResult(
            loss=0.05 + self.rng.random() * 0.02,
            accuracy=0.92 + self.rng.random() * 0.03,
            samples=len(validation_set),
        )


class TrainingLoop:
    """
    Train voice models and register the results.

    One run at a time: ``train`` raises TrainingError if called while a run
    is in progress. ``stop_training`` may be called from an observer or
    another thread; it takes effect before the next epoch starts.
    """

    def __init__(
        self,
        registry: "ModelRegistry",
        events: Optional[EventBus] = None,
        runner: Optional[EpochRunner] = None,
        language: str = "th",
    ):
        """
        Initialize the trainer.

        Args:
            registry: Registry that receives completed models.
            events: Event bus for progress notifications.
            runner: Per-epoch step implementation.
            language: Language tag stored in voice characteristics.
        """
        self.registry = registry
        self.events = events or EventBus()
        self.runner = runner or PlaceholderEpochRunner()
        self.language = language
        self._state = TrainingState.IDLE
        self._stop_requested = False

    @property
    def state(self) -> TrainingState:
        return self._state

    @property
    def is_training(self) -> bool:
        return self._state is TrainingState.RUNNING

    def stop_training(self) -> bool:
        """
        Request the current run to stop at the next epoch boundary.

        Returns:
            True if a run was in progress.
        """
        if not self.is_training:
            return False
        logger.info("Stopping training...")
        self._stop_requested = True
        return True

    def train(
        self,
        training_set: Sequence[ProcessedSample],
        config: TrainingConfig,
        validation_set: Sequence[ProcessedSample] = (),
    ) -> TrainedModel:
        """
        Run the epoch loop and register the resulting model.

        Args:
            training_set: Samples to train on.
            config: Voice name and hyperparameters.
            validation_set: Samples for the final validation pass.

        Returns:
            The registered TrainedModel. A cancelled run still produces one
            from its partial history.

        Raises:
            NoTrainingDataError: If ``training_set`` is empty.
            TrainingError: If a run is already in progress or the run fails.
        """
        if not training_set:
            raise NoTrainingDataError("No training data loaded. Call prepare_dataset() first.")
        if self.is_training:
            raise TrainingError("A training run is already in progress")

        self._stop_requested = False
        self._state = TrainingState.RUNNING
        cancelled = False

        logger.info(
            "Training voice model: %s (epochs=%d, batch_size=%d, learning_rate=%g)",
            config.voice_name, config.epochs, config.batch_size, config.learning_rate,
        )

        try:
            history = TrainingHistory(voice_name=config.voice_name)

            for epoch in range(1, config.epochs + 1):
                if self._stop_requested:
                    logger.info("Training interrupted before epoch %d", epoch)
                    cancelled = True
                    break

                result = self.runner.run_epoch(
                    epoch, training_set, config.batch_size, config.learning_rate
                )
                history.record(result)

                logger.debug(
                    "Epoch %d/%d - Loss: %.6f - Accuracy: %.4f",
                    epoch, config.epochs, result.loss, result.accuracy,
                )
                self.events.emit(TrainingProgress(
                    epoch=epoch,
                    total_epochs=config.epochs,
                    loss=result.loss,
                    accuracy=result.accuracy,
                ))

            validation = self.runner.validate(validation_set)
            history.finalize(validation)

            created_at = datetime.now()
            model = TrainedModel(
                id=generate_model_id(config.voice_name, created_at),
                name=config.voice_name,
                created_at=created_at,
                training_history=history,
                voice_characteristics=aggregate_characteristics(training_set, self.language),
                metadata=ModelMetadata(
                    training_samples=len(training_set),
                    validation_samples=len(validation_set),
                    epochs=history.epoch_count,
                    final_loss=history.final_loss,
                    validation_loss=history.validation_loss,
                    batch_size=config.batch_size,
                    learning_rate=config.learning_rate,
                    cancelled=cancelled,
                ),
            )
            self.registry.register(model)

        except Exception as e:
            self._state = TrainingState.FAILED
            logger.exception("Voice training failed: %s", config.voice_name)
            error = e if isinstance(e, TrainingError) else TrainingError(f"Voice training failed: {e}")
            self.events.emit(TrainingFailed(error=error))
            if error is e:
                raise
            raise error from e
        except BaseException:
            self._state = TrainingState.FAILED
            logger.warning("Voice training interrupted: %s", config.voice_name)
            raise

        self._state = TrainingState.CANCELLED if cancelled else TrainingState.COMPLETED
        logger.info(
            "Voice training %s: %s (final loss %s, validation loss %.6f)",
            self._state.value,
            model.id,
            f"{history.final_loss:.6f}" if history.final_loss is not None else "n/a",
            history.validation_loss,
        )
        self.events.emit(TrainingComplete(model=model))
        return model
