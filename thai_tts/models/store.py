"""
On-disk persistence for trained models.

Handles:
- The JSON model summary (id, name, createdAt, metadata,
  voiceCharacteristics, trainingHistory totals)
- Per-model directories with metadata.json and training_history.json
- Loading either form back into a TrainedModel
"""

import json
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, Union

from thai_tts.exceptions import ModelNotFoundError
from thai_tts.models.model import ModelMetadata, TrainedModel
from thai_tts.training.characteristics import VoiceCharacteristics
from thai_tts.training.history import TrainingHistory, parse_timestamp

logger = logging.getLogger(__name__)


def model_summary(model: TrainedModel) -> Dict[str, Any]:
    """
    Summarize a model as a JSON-serializable dict.

    ``trainingHistory.trainingTime`` is in milliseconds.
    """
    history = model.training_history
    return {
        "id": model.id,
        "name": model.name,
        "createdAt": model.created_at.isoformat(),
        "metadata": model.metadata.to_dict(),
        "voiceCharacteristics": model.voice_characteristics.to_dict(),
        "trainingHistory": {
            "epochs": history.epoch_count,
            "finalLoss": history.final_loss,
            "validationLoss": history.validation_loss,
            "trainingTime": round(history.training_time * 1000),
        },
    }


def write_model_summary(model: TrainedModel, path: Union[str, Path]) -> Path:
    """Write the model summary JSON to ``path``."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(model_summary(model), f, indent=2, ensure_ascii=False)
    return path


def save_trained_model(model: TrainedModel, output_dir: Union[str, Path]) -> Path:
    """
    Save a model under ``output_dir/<model id>/``.

    Writes ``metadata.json`` (identity, metadata, characteristics) and
    ``training_history.json`` (every epoch).

    Returns:
        Path to the model directory.
    """
    model_dir = Path(output_dir) / model.id
    model_dir.mkdir(parents=True, exist_ok=True)

    metadata = {
        "id": model.id,
        "name": model.name,
        "createdAt": model.created_at.isoformat(),
        "metadata": model.metadata.to_dict(),
        "voiceCharacteristics": model.voice_characteristics.to_dict(),
    }
    with open(model_dir / "metadata.json", "w", encoding="utf-8") as f:
        json.dump(metadata, f, indent=2, ensure_ascii=False)

    with open(model_dir / "training_history.json", "w", encoding="utf-8") as f:
        json.dump(model.training_history.to_dict(), f, indent=2, ensure_ascii=False)

    logger.info("Saved trained model %s to %s", model.id, model_dir)
    return model_dir


def _history_from_summary(name: str, data: Dict[str, Any]) -> TrainingHistory:
    """Rebuild a finalized history from summary totals (no per-epoch rows)."""
    history = TrainingHistory(voice_name=name, epochs=(), finalized=True)
    history.final_loss = data.get("finalLoss")
    history.validation_loss = data.get("validationLoss")
    training_time = data.get("trainingTime")
    if training_time is not None:
        history.end_time = history.start_time + timedelta(milliseconds=training_time)
    return history


def model_from_dict(data: Dict[str, Any], history: Union[TrainingHistory, None] = None) -> TrainedModel:
    """Build a TrainedModel from a summary or metadata.json dict."""
    try:
        model_id = data["id"]
        name = data["name"]
    except KeyError as e:
        raise ModelNotFoundError(f"Model data is missing field {e}") from e

    if history is None:
        history = _history_from_summary(name, data.get("trainingHistory", {}))

    created_at = data.get("createdAt")
    return TrainedModel(
        id=model_id,
        name=name,
        created_at=parse_timestamp(created_at) or datetime.now(),
        training_history=history,
        voice_characteristics=VoiceCharacteristics.from_dict(data.get("voiceCharacteristics", {})),
        metadata=ModelMetadata.from_dict(data.get("metadata", {})),
    )


def load_model_summary(path: Union[str, Path]) -> TrainedModel:
    """
    Load a model from a summary JSON file or a saved model directory.

    Raises:
        ModelNotFoundError: If the file or directory is missing or unreadable.
    """
    path = Path(path)

    try:
        if path.is_dir():
            metadata_path = path / "metadata.json"
            history_path = path / "training_history.json"
            data = _read_json(metadata_path)
            history = TrainingHistory.from_dict(_read_json(history_path)) if history_path.exists() else None
            return model_from_dict(data, history)

        return model_from_dict(_read_json(path))
    except (AttributeError, KeyError, TypeError, ValueError, OverflowError, OSError) as e:
        raise ModelNotFoundError(f"Invalid model data in {path}: {e}") from e


def _read_json(path: Path) -> Dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ModelNotFoundError(f"Could not read model data from {path}: {e}") from e
