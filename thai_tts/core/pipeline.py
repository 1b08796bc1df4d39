"""
Voice training pipeline for Thai TTS Studio.

Ties dataset loading, preprocessing, splitting, training and the model
registry together behind two entry points: ``prepare_dataset`` and
``train_voice``.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union
from dataclasses import dataclass

import numpy as np

from thai_tts.config import Config
from thai_tts.exceptions import PreprocessError
from thai_tts.models.model import TrainedModel
from thai_tts.models.registry import ModelRegistry
from thai_tts.training.dataset import DatasetLoader
from thai_tts.training.events import EventBus, EventKind, PreprocessingProgress
from thai_tts.training.features import FeatureExtractor, ProcessedSample
from thai_tts.training.splitter import DatasetSplit, split_dataset
from thai_tts.training.trainer import (
    EpochRunner,
    PlaceholderEpochRunner,
    TrainingConfig,
    TrainingLoop,
    TrainingState,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DatasetSummary:
    """Sizes of a prepared dataset."""

    training_samples: int
    validation_samples: int
    total_samples: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "trainingSamples": self.training_samples,
            "validationSamples": self.validation_samples,
            "totalSamples": self.total_samples,
        }


class VoiceTrainingPipeline:
    """
    Prepare datasets and train voices.

    Usage:
        pipeline = VoiceTrainingPipeline()
        pipeline.subscribe(EventKind.TRAINING_PROGRESS, print)

        pipeline.prepare_dataset("datasets/thai")
        model = pipeline.train_voice("thai_voice", epochs=75)

        pipeline.list_models()
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        registry: Optional[ModelRegistry] = None,
        events: Optional[EventBus] = None,
        runner: Optional[EpochRunner] = None,
        loader: Optional[DatasetLoader] = None,
        extractor: Optional[FeatureExtractor] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            config: Application configuration (training defaults are used).
            registry: Model registry; a new one is created if omitted.
            events: Event bus shared with the training loop.
            runner: Per-epoch step; defaults to PlaceholderEpochRunner.
            loader: Dataset loader.
            extractor: Feature extractor.
        """
        self.config = config or Config()
        self.registry = registry if registry is not None else ModelRegistry()
        self.events = events or EventBus()
        self.loader = loader or DatasetLoader()
        self.extractor = extractor or FeatureExtractor()

        defaults = self.config.training
        self._rng = np.random.default_rng(defaults.seed)
        if runner is None:
            runner = PlaceholderEpochRunner(epoch_delay=defaults.epoch_delay, rng=self._rng)

        self.trainer = TrainingLoop(
            registry=self.registry,
            events=self.events,
            runner=runner,
            language=defaults.language,
        )
        self._split: DatasetSplit[ProcessedSample] = DatasetSplit()

    # -- observers --------------------------------------------------------

    def subscribe(self, kind: EventKind, callback: Callable[[Any], None]) -> Callable[[], None]:
        """Register an observer; returns an unsubscribe function."""
        return self.events.subscribe(kind, callback)

    # -- dataset ----------------------------------------------------------

    @property
    def training_data(self) -> List[ProcessedSample]:
        return list(self._split.training)

    @property
    def validation_data(self) -> List[ProcessedSample]:
        return list(self._split.validation)

    def preprocess(self, dataset_path: Union[str, Path]) -> List[ProcessedSample]:
        """
        Load a dataset and preprocess every record.

        Records whose audio cannot be read are logged and skipped.

        Raises:
            DatasetLoadError: If the manifest cannot be read.
        """
        records = self.loader.load(dataset_path)
        total = len(records)

        samples = []
        for index, record in enumerate(records, start=1):
            try:
                sample = self.extractor.preprocess(record.full_path, record)
            except PreprocessError as e:
                logger.warning("Failed to preprocess %s: %s", record.file_name, e)
                continue

            samples.append(sample)
            self.events.emit(PreprocessingProgress(current=index, total=total))
            logger.debug("Preprocessed %d/%d: %s", index, total, record.file_name)

        return samples

    def prepare_dataset(self, dataset_path: Union[str, Path]) -> DatasetSummary:
        """
        Load, preprocess and split a dataset for the next ``train_voice`` call.

        Args:
            dataset_path: Directory holding metadata.csv and the audio files.

        Returns:
            DatasetSummary with training/validation/total sample counts.

        Raises:
            DatasetLoadError: If the manifest cannot be read.
        """
        logger.info("Preparing dataset for training: %s", dataset_path)
        samples = self.preprocess(dataset_path)

        self._split = split_dataset(
            samples,
            validation_fraction=self.config.training.validation_split,
            rng=self._rng,
        )

        summary = DatasetSummary(
            training_samples=len(self._split.training),
            validation_samples=len(self._split.validation),
            total_samples=len(samples),
        )
        logger.info(
            "Dataset preparation completed: %d training, %d validation",
            summary.training_samples,
            summary.validation_samples,
        )
        return summary

    # -- training ---------------------------------------------------------

    @property
    def state(self) -> TrainingState:
        return self.trainer.state

    def train_voice(
        self,
        voice_name: str = "custom_voice",
        epochs: Optional[int] = None,
        batch_size: Optional[int] = None,
        learning_rate: Optional[float] = None,
    ) -> TrainedModel:
        """
        Train a voice on the prepared dataset.

        Unset hyperparameters fall back to the configured training defaults.

        Raises:
            NoTrainingDataError: If no dataset has been prepared, or it had no
                training samples.
            TrainingError: If the run fails.
            ConfigurationError: If a hyperparameter is out of range.
        """
        defaults = self.config.training
        config = TrainingConfig(
            voice_name=voice_name,
            epochs=epochs if epochs is not None else defaults.epochs,
            batch_size=batch_size if batch_size is not None else defaults.batch_size,
            learning_rate=learning_rate if learning_rate is not None else defaults.learning_rate,
        )
        return self.trainer.train(self._split.training, config, self._split.validation)

    def stop_training(self) -> bool:
        """Ask the running training loop to stop after the current epoch."""
        return self.trainer.stop_training()

    # -- registry ---------------------------------------------------------

    def list_models(self) -> List[TrainedModel]:
        return self.registry.list_models()

    def get_model(self, model_id: str) -> Optional[TrainedModel]:
        return self.registry.get(model_id)

    def delete_model(self, model_id: str) -> bool:
        return self.registry.delete(model_id)
