"""
Configuration and paths for Thai TTS Studio.
"""

from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional
import json

from thai_tts.exceptions import ConfigurationError


@dataclass
class TrainingDefaults:
    """Default hyperparameters for voice training runs."""
    epochs: int = 100
    batch_size: int = 8
    learning_rate: float = 1e-4
    validation_split: float = 0.2
    epoch_delay: float = 0.1  # Seconds of simulated compute per epoch
    language: str = "th"
    seed: Optional[int] = None  # None = unseeded split


@dataclass
class SynthesisConfig:
    """Synthesis settings."""
    model: str = "v1"  # v1 (standard) or v2 (ipa)
    sample_rate: int = 24000
    hop_length: int = 256
    n_feats: int = 80
    steps: int = 32
    cfg: float = 2.0
    speed: float = 1.0


@dataclass
class Config:
    """Main configuration for Thai TTS Studio."""

    # Base paths
    app_dir: Path = field(default_factory=lambda: Path.home() / "thai_tts_studio")

    # Sub-configurations
    training: TrainingDefaults = field(default_factory=TrainingDefaults)
    synthesis: SynthesisConfig = field(default_factory=SynthesisConfig)

    # Derived paths
    @property
    def trained_models_dir(self) -> Path:
        return self.app_dir / "trained_models"

    @property
    def output_dir(self) -> Path:
        return self.app_dir / "output"

    @property
    def settings_file(self) -> Path:
        return self.app_dir / "settings.json"

    def ensure_directories(self) -> None:
        """Create all required directories if they don't exist."""
        for directory in (self.app_dir, self.trained_models_dir, self.output_dir):
            directory.mkdir(parents=True, exist_ok=True)

    def validate(self) -> None:
        """Check value ranges, raising ConfigurationError on the first bad one."""
        if not 0.0 <= self.training.validation_split <= 1.0:
            raise ConfigurationError(
                f"validation_split must be within [0, 1], got {self.training.validation_split}"
            )
        if self.training.epochs < 1:
            raise ConfigurationError(f"epochs must be positive, got {self.training.epochs}")
        if self.training.batch_size < 1:
            raise ConfigurationError(f"batch_size must be positive, got {self.training.batch_size}")
        if self.training.epoch_delay < 0:
            raise ConfigurationError("epoch_delay cannot be negative")
        if self.synthesis.sample_rate <= 0:
            raise ConfigurationError("sample_rate must be positive")

    def save(self) -> None:
        """Save configuration to settings file."""
        self.ensure_directories()
        data = {
            "training": {
                "epochs": self.training.epochs,
                "batch_size": self.training.batch_size,
                "learning_rate": self.training.learning_rate,
                "validation_split": self.training.validation_split,
                "epoch_delay": self.training.epoch_delay,
                "language": self.training.language,
                "seed": self.training.seed,
            },
            "synthesis": {
                "model": self.synthesis.model,
                "sample_rate": self.synthesis.sample_rate,
                "hop_length": self.synthesis.hop_length,
                "n_feats": self.synthesis.n_feats,
                "steps": self.synthesis.steps,
                "cfg": self.synthesis.cfg,
                "speed": self.synthesis.speed,
            },
        }
        with open(self.settings_file, "w") as f:
            json.dump(data, f, indent=2)

    @classmethod
    def load(cls, settings_file: Optional[Path] = None, app_dir: Optional[Path] = None) -> "Config":
        """Load configuration from settings file."""
        config = cls() if app_dir is None else cls(app_dir=Path(app_dir))

        if settings_file is None:
            settings_file = config.settings_file

        if not Path(settings_file).exists():
            return config

        try:
            with open(settings_file) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Could not read settings from {settings_file}: {e}") from e

        if "training" in data:
            training = data["training"]
            config.training = TrainingDefaults(
                epochs=training.get("epochs", 100),
                batch_size=training.get("batch_size", 8),
                learning_rate=training.get("learning_rate", 1e-4),
                validation_split=training.get("validation_split", 0.2),
                epoch_delay=training.get("epoch_delay", 0.1),
                language=training.get("language", "th"),
                seed=training.get("seed"),
            )

        if "synthesis" in data:
            synthesis = data["synthesis"]
            config.synthesis = SynthesisConfig(
                model=synthesis.get("model", "v1"),
                sample_rate=synthesis.get("sample_rate", 24000),
                hop_length=synthesis.get("hop_length", 256),
                n_feats=synthesis.get("n_feats", 80),
                steps=synthesis.get("steps", 32),
                cfg=synthesis.get("cfg", 2.0),
                speed=synthesis.get("speed", 1.0),
            )

        config.validate()
        return config


# Default configuration instance
default_config = Config()
