"""
Shared application objects for the web UI.
"""

import logging
from typing import Optional

from thai_tts.config import Config
from thai_tts.core.pipeline import VoiceTrainingPipeline
from thai_tts.core.synthesis import SynthesisEngine
from thai_tts.exceptions import ModelNotFoundError
from thai_tts.models.registry import ModelRegistry

logger = logging.getLogger(__name__)


class Studio:
    """
    One registry shared by the training pipeline and the synthesis engine,
    so a freshly trained voice shows up in the Generate tab.
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config.load()
        self.registry = ModelRegistry()
        self.pipeline = VoiceTrainingPipeline(config=self.config, registry=self.registry)
        self.engine = SynthesisEngine(registry=self.registry, config=self.config.synthesis)

    def load_saved_models(self) -> int:
        """Register every model saved under the trained models directory."""
        models_dir = self.config.trained_models_dir
        if not models_dir.exists():
            return 0

        count = 0
        for path in sorted(models_dir.iterdir()):
            if path.is_dir() and (path / "metadata.json").exists():
                try:
                    self.registry.load_summary(path)
                except ModelNotFoundError as e:
                    logger.warning("Skipping saved model %s: %s", path.name, e)
                    continue
                count += 1
        return count
