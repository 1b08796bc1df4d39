"""
In-memory registry of trained voice models.

Handles:
- Registering models at the end of a training run
- Lookup, listing and deletion by model id
- Re-registering models persisted by a previous process
"""

import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from thai_tts.models.model import TrainedModel
from thai_tts.models.store import load_model_summary

logger = logging.getLogger(__name__)


class ModelRegistry:
    """
    Map model ids to TrainedModels.

    Owned by a pipeline or an application object and passed to consumers;
    there is no module-level instance. Registration is a single dict insert,
    so readers never observe a partially built model.
    """

    def __init__(self):
        self._models: Dict[str, TrainedModel] = {}

    def register(self, model: TrainedModel) -> None:
        """Add a model, replacing any existing model with the same id."""
        if model.id in self._models:
            logger.debug("Replacing registered model %s", model.id)
        self._models[model.id] = model

    def get(self, model_id: str) -> Optional[TrainedModel]:
        """
        Get a model by id.

        Returns:
            TrainedModel or None if not found.
        """
        return self._models.get(model_id)

    def list_models(self) -> List[TrainedModel]:
        """List registered models in registration order."""
        return list(self._models.values())

    def delete(self, model_id: str) -> bool:
        """
        Remove a model.

        Returns:
            True if the model existed and was removed.
        """
        if self._models.pop(model_id, None) is None:
            return False
        logger.info("Deleted trained model: %s", model_id)
        return True

    def load_summary(self, path: Union[str, Path]) -> TrainedModel:
        """Load a persisted model (summary file or model directory) and register it."""
        model = load_model_summary(path)
        self.register(model)
        return model

    def __contains__(self, model_id: object) -> bool:
        return model_id in self._models

    def __len__(self) -> int:
        return len(self._models)

    def __iter__(self) -> Iterator[TrainedModel]:
        return iter(self.list_models())
