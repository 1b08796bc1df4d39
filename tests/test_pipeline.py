"""End-to-end tests for the voice training pipeline."""

import re

import pytest

from thai_tts.core.pipeline import VoiceTrainingPipeline
from thai_tts.exceptions import DatasetLoadError, NoTrainingDataError, PreprocessError
from thai_tts.training.events import EventKind
from thai_tts.training.features import FeatureExtractor
from thai_tts.training.trainer import TrainingState


class FlakyExtractor(FeatureExtractor):
    """Fails on one named file."""

    def __init__(self, bad_name):
        super().__init__()
        self.bad_name = bad_name

    def preprocess(self, audio_path, record):
        if record.file_name == self.bad_name:
            raise PreprocessError(f"cannot read {audio_path}")
        return super().preprocess(audio_path, record)


def test_prepare_and_train(config, dataset_dir):
    pipeline = VoiceTrainingPipeline(config=config)
    preprocessed = []
    pipeline.subscribe(EventKind.PREPROCESSING_PROGRESS, preprocessed.append)

    summary = pipeline.prepare_dataset(dataset_dir)

    assert summary.total_samples == 5
    assert summary.training_samples == 4
    assert summary.validation_samples == 1
    assert [e.current for e in preprocessed] == [1, 2, 3, 4, 5]
    assert preprocessed[-1].progress == 100.0

    model = pipeline.train_voice("thai_voice", epochs=3, batch_size=4)

    assert re.fullmatch(r"thai_voice_[0-9a-f]{8}", model.id)
    assert model.metadata.epochs == 3
    assert model.metadata.training_samples == 4
    assert model.metadata.validation_samples == 1
    assert model.training_history.epoch_count == 3
    assert pipeline.state is TrainingState.COMPLETED
    assert pipeline.list_models() == [model]
    assert pipeline.get_model(model.id) is model


def test_train_uses_configured_defaults(config, dataset_dir):
    config.training.epochs = 2
    config.training.batch_size = 4
    pipeline = VoiceTrainingPipeline(config=config)
    pipeline.prepare_dataset(dataset_dir)

    model = pipeline.train_voice()

    assert model.name == "custom_voice"
    assert model.metadata.epochs == 2
    assert model.metadata.batch_size == 4
    assert model.metadata.learning_rate == config.training.learning_rate


def test_train_before_prepare(config):
    pipeline = VoiceTrainingPipeline(config=config)

    with pytest.raises(NoTrainingDataError):
        pipeline.train_voice("v", epochs=1)

    assert pipeline.list_models() == []


def test_prepare_missing_dataset(config, tmp_path):
    with pytest.raises(DatasetLoadError):
        VoiceTrainingPipeline(config=config).prepare_dataset(tmp_path / "missing")


def test_preprocess_failures_are_skipped(config, dataset_dir):
    pipeline = VoiceTrainingPipeline(config=config, extractor=FlakyExtractor("clip_003.wav"))

    summary = pipeline.prepare_dataset(dataset_dir)

    assert summary.total_samples == 4
    texts = [s.text for s in pipeline.training_data + pipeline.validation_data]
    assert "วันนี้อากาศดี" not in texts


def test_seeded_split_is_reproducible(config, dataset_dir):
    first = VoiceTrainingPipeline(config=config)
    second = VoiceTrainingPipeline(config=config)

    first.prepare_dataset(dataset_dir)
    second.prepare_dataset(dataset_dir)

    assert first.training_data == second.training_data
    assert first.validation_data == second.validation_data


def test_delete_model(config, dataset_dir):
    pipeline = VoiceTrainingPipeline(config=config)
    pipeline.prepare_dataset(dataset_dir)
    model = pipeline.train_voice("v", epochs=1)

    assert pipeline.delete_model(model.id) is True
    assert pipeline.get_model(model.id) is None
    assert pipeline.delete_model(model.id) is False


def test_stop_training_from_observer(config, dataset_dir):
    pipeline = VoiceTrainingPipeline(config=config)
    pipeline.prepare_dataset(dataset_dir)
    pipeline.subscribe(
        EventKind.TRAINING_PROGRESS,
        lambda event: event.epoch == 1 and pipeline.stop_training(),
    )

    model = pipeline.train_voice("v", epochs=5)

    assert model.training_history.epoch_count == 1
    assert pipeline.state is TrainingState.CANCELLED
    assert pipeline.get_model(model.id) is model
