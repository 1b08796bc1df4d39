"""Shared fixtures for the Thai TTS Studio test suite."""

import json
from pathlib import Path
from typing import List

import numpy as np
import pytest

from thai_tts.config import Config
from thai_tts.models.registry import ModelRegistry
from thai_tts.training.events import EventBus
from thai_tts.training.features import ProcessedSample
from thai_tts.training.trainer import PlaceholderEpochRunner, TrainingConfig, TrainingLoop

MANIFEST_ROWS = [
    "file_name,text,emotion_label,pitch,duration,energy",
    "clip_001.wav,สวัสดีครับ,neutral,medium,1.5,medium",
    "clip_002.wav,ขอบคุณมาก, ครับ,positive,warm,2.5,high",
    "clip_003.wav,วันนี้อากาศดี,positive,high,2.0,high",
    "clip_004.wav,ไม่เป็นไร,negative,low,1.2,low",
    "clip_005.wav,ลาก่อน,neutral,unknown,abc,",
    "clip_006.wav,broken,row",
]

AUDIO_FILES = ["clip_001.wav", "clip_002.wav", "clip_003.wav", "clip_004.wav", "clip_005.wav"]


def write_dataset(path: Path, rows: List[str], audio_files: List[str]) -> Path:
    """Write a manifest and dummy audio files into ``path``."""
    path.mkdir(parents=True, exist_ok=True)
    (path / "metadata.csv").write_text("\n".join(rows) + "\n", encoding="utf-8")
    for name in audio_files:
        (path / name).write_bytes(b"RIFF" + bytes(64))
    return path


def write_legacy_model(model_dir: Path, start_time=1714557600000) -> Path:
    """Model directory as written by the Node.js training script."""
    model_dir.mkdir(parents=True)
    (model_dir / "metadata.json").write_text(json.dumps({
        "id": "thai_voice_1a2b3c4d",
        "name": "thai_voice",
        "createdAt": "2024-05-01T10:00:05.123Z",
        "metadata": {
            "trainingSamples": 4,
            "validationSamples": 1,
            "epochs": 2,
            "finalLoss": 0.1032,
            "validationLoss": 0.061,
        },
        "voiceCharacteristics": {
            "avgPitch": 196.0,
            "avgEnergy": 0.66,
            "avgDuration": 1.84,
            "emotionDistribution": {"neutral": 0.5, "positive": 0.5},
            "language": "th",
        },
    }), encoding="utf-8")
    (model_dir / "training_history.json").write_text(json.dumps({
        "voiceName": "thai_voice",
        "epochs": [
            {"epoch": 1, "loss": 0.1051, "accuracy": 0.97, "learningRate": 0.0001, "batchSize": 8, "duration": 102},
            {"epoch": 2, "loss": 0.1032, "accuracy": 0.96, "learningRate": 0.0001, "batchSize": 8, "duration": 101},
        ],
        "startTime": start_time,
        "endTime": start_time + 5000 if isinstance(start_time, int) else None,
        "finalLoss": 0.1032,
        "validationLoss": 0.061,
    }), encoding="utf-8")
    return model_dir


@pytest.fixture
def dataset_dir(tmp_path: Path) -> Path:
    """Dataset with five valid rows and one malformed row."""
    return write_dataset(tmp_path / "dataset", MANIFEST_ROWS, AUDIO_FILES)


@pytest.fixture
def config(tmp_path: Path) -> Config:
    config = Config(app_dir=tmp_path / "app")
    config.training.epoch_delay = 0.0
    config.training.seed = 1234
    return config


@pytest.fixture
def runner() -> PlaceholderEpochRunner:
    return PlaceholderEpochRunner(epoch_delay=0.0, rng=np.random.default_rng(0))


@pytest.fixture
def registry() -> ModelRegistry:
    return ModelRegistry()


@pytest.fixture
def events() -> EventBus:
    return EventBus()


@pytest.fixture
def loop(registry, events, runner) -> TrainingLoop:
    return TrainingLoop(registry=registry, events=events, runner=runner)


@pytest.fixture
def samples(tmp_path: Path) -> List[ProcessedSample]:
    specs = [
        ("a.wav", 200.0, 0.6, 1.5, "neutral"),
        ("b.wav", 180.0, 0.9, 2.5, "positive"),
        ("c.wav", 300.0, 0.9, 2.0, "positive"),
        ("d.wav", 100.0, 0.3, 1.2, "negative"),
        ("e.wav", 200.0, 0.6, 2.0, "neutral"),
    ]
    return [
        ProcessedSample(
            audio_path=tmp_path / name,
            text="สวัสดี",
            pitch=pitch,
            energy=energy,
            duration=duration,
            emotion=emotion,
            phonemes=tuple("สวัสดี"),
        )
        for name, pitch, energy, duration, emotion in specs
    ]


@pytest.fixture
def trained_model(loop, samples):
    return loop.train(samples[:4], TrainingConfig(voice_name="thai_voice", epochs=3), samples[4:])
