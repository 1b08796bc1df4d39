"""
Synthesis engine for Thai TTS Studio.

Services synthesis and cloning requests for default voices and voices
trained by the pipeline. Audio is a placeholder tone shaped by the voice's
characteristics; no acoustic model is run.
"""

import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union
from dataclasses import dataclass

import numpy as np

from thai_tts.config import SynthesisConfig
from thai_tts.exceptions import ModelNotFoundError, SynthesisError
from thai_tts.models.registry import ModelRegistry
from thai_tts.utils.audio import save_audio, tone

logger = logging.getLogger(__name__)

DEFAULT_VOICES: List[Dict[str, str]] = [
    {"id": "default", "name": "Default Voice", "lang": "en", "gender": "neutral"},
    {"id": "male-1", "name": "Male Voice 1", "lang": "en", "gender": "male"},
    {"id": "female-1", "name": "Female Voice 1", "lang": "en", "gender": "female"},
    {"id": "thai-1", "name": "Thai Voice 1", "lang": "th", "gender": "neutral"},
]

MODEL_TYPES = {"v1": "standard", "v2": "ipa"}

SECONDS_PER_WORD = 0.2


@dataclass
class SynthesisResult:
    """Result of a synthesis or cloning request."""

    audio: np.ndarray
    sample_rate: int
    duration: float
    voice: str
    format: str = "wav"
    processing_time: float = 0.0
    voice_characteristics: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Describe the result without the audio samples."""
        return {
            "sampleRate": self.sample_rate,
            "duration": self.duration,
            "voice": self.voice,
            "format": self.format,
            "processingTime": round(self.processing_time * 1000),
            "voiceCharacteristics": self.voice_characteristics,
        }


@dataclass
class ModelInfo:
    name: str
    type: str
    steps: int
    cfg: float
    sample_rate: int
    loaded: bool = True


class SynthesisEngine:
    """
    Text-to-speech front for default and trained voices.

    Trained voices are read live from the ModelRegistry, so a model
    registered by the training pipeline is usable immediately.
    """

    def __init__(
        self,
        registry: Optional[ModelRegistry] = None,
        config: Optional[SynthesisConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.registry = registry if registry is not None else ModelRegistry()
        self.config = config or SynthesisConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.voices: Dict[str, Dict[str, str]] = {v["id"]: dict(v) for v in DEFAULT_VOICES}
        self.models: Dict[str, ModelInfo] = {}
        self.set_model(self.config.model)

    @property
    def sample_rate(self) -> int:
        return self.config.sample_rate

    # -- models -----------------------------------------------------------

    def load_model(self, name: str) -> ModelInfo:
        if name not in MODEL_TYPES:
            raise ModelNotFoundError(f"Unknown model: {name}")

        model = ModelInfo(
            name=name,
            type=MODEL_TYPES[name],
            steps=self.config.steps,
            cfg=self.config.cfg,
            sample_rate=self.config.sample_rate,
        )
        self.models[name] = model
        logger.info("Model %s loaded", name)
        return model

    def set_model(self, name: str) -> None:
        """Switch the active model, loading it on first use."""
        if name not in self.models:
            self.load_model(name)
        self.config.model = name

    def get_models(self) -> List[ModelInfo]:
        return list(self.models.values())

    # -- voices -----------------------------------------------------------

    def trained_voices(self) -> List[Dict[str, Any]]:
        return [model.get_info() for model in self.registry.list_models()]

    def list_voices(self) -> Dict[str, List[Dict[str, Any]]]:
        """Default and trained voices, plus both combined under ``all``."""
        default = list(self.voices.values())
        trained = self.trained_voices()
        return {"default": default, "trained": trained, "all": default + trained}

    def voice_ids(self) -> List[str]:
        return [voice["id"] for voice in self.list_voices()["all"]]

    # -- synthesis --------------------------------------------------------

    @staticmethod
    def estimate_duration(text: str, speed: float = 1.0) -> float:
        """Roughly 0.2 seconds per whitespace-separated word."""
        words = max(len(text.split()), 1)
        return words * SECONDS_PER_WORD / speed

    def synthesize(
        self,
        text: str,
        voice: str = "default",
        speed: Optional[float] = None,
        emotion: str = "neutral",
        reference_audio: Optional[Union[str, Path]] = None,
        reference_text: Optional[str] = None,
    ) -> SynthesisResult:
        """
        Synthesize speech from text.

        Reference audio plus reference text switch to voice cloning; a
        trained model id selects that trained voice.

        Raises:
            SynthesisError: If text is empty.
            ModelNotFoundError: If the voice is unknown.
        """
        if not text or not text.strip():
            raise SynthesisError("Text is required for synthesis")
        speed = speed or self.config.speed
        if speed <= 0:
            raise SynthesisError(f"Speed must be positive, got {speed}")

        logger.info("Synthesizing text: %r", text[:50])

        if reference_audio and reference_text:
            return self.clone_voice(reference_audio, reference_text, text, speed=speed)

        if voice in self.registry:
            return self.synthesize_with_trained_voice(text, voice, speed=speed, emotion=emotion)

        if voice not in self.voices:
            raise ModelNotFoundError(f"Voice not found: {voice}")

        started = time.monotonic()
        duration = self.estimate_duration(text, speed)
        audio = tone(duration, 440.0, self.sample_rate)

        return SynthesisResult(
            audio=audio,
            sample_rate=self.sample_rate,
            duration=duration,
            voice=voice,
            processing_time=time.monotonic() - started,
        )

    def synthesize_with_trained_voice(
        self,
        text: str,
        model_id: str,
        speed: Optional[float] = None,
        emotion: str = "neutral",
    ) -> SynthesisResult:
        """
        Synthesize with a trained voice's characteristics.

        Raises:
            ModelNotFoundError: If ``model_id`` is not registered.
        """
        model = self.registry.get(model_id)
        if model is None:
            raise ModelNotFoundError(f"Trained voice not found: {model_id}")

        speed = speed or self.config.speed
        if speed <= 0:
            raise SynthesisError(f"Speed must be positive, got {speed}")
        started = time.monotonic()
        characteristics = model.voice_characteristics
        duration = self.estimate_duration(text, speed)

        audio = tone(
            duration,
            characteristics.avg_pitch / 4,
            self.sample_rate,
            decay=characteristics.avg_energy,
            vibrato=0.1,
        )

        return SynthesisResult(
            audio=audio,
            sample_rate=self.sample_rate,
            duration=duration,
            voice=model_id,
            processing_time=time.monotonic() - started,
            voice_characteristics=characteristics.to_dict(),
        )

    def analyze_reference_audio(
        self, audio_path: Union[str, Path], reference_text: str
    ) -> Dict[str, Any]:
        """Placeholder reference analysis; randomized within fixed bounds."""
        logger.info("Analyzing reference audio: %s", audio_path)
        return {
            "pitch": 220 + self.rng.random() * 100,
            "tone": self.rng.random(),
            "speed": 0.9 + self.rng.random() * 0.2,
            "emotion": "neutral",
            "language": "en",
            "confidence": 0.95,
        }

    def clone_voice(
        self,
        reference_audio: Optional[Union[str, Path]],
        reference_text: Optional[str],
        target_text: Optional[str],
        speed: Optional[float] = None,
    ) -> SynthesisResult:
        """
        Synthesize ``target_text`` in the voice of a reference clip.

        Raises:
            SynthesisError: If any of the three inputs is missing or speed is
                not positive.
        """
        if not reference_audio or not reference_text or not target_text:
            raise SynthesisError("Reference audio, reference text, and target text are required")

        speed = speed or self.config.speed
        if speed <= 0:
            raise SynthesisError(f"Speed must be positive, got {speed}")
        started = time.monotonic()
        characteristics = self.analyze_reference_audio(reference_audio, reference_text)
        duration = self.estimate_duration(target_text, speed * characteristics["speed"])

        audio = tone(duration, characteristics["pitch"] / 4, self.sample_rate, decay=2.0)

        logger.info("Voice cloning completed")
        return SynthesisResult(
            audio=audio,
            sample_rate=self.sample_rate,
            duration=duration,
            voice="cloned",
            processing_time=time.monotonic() - started,
            voice_characteristics=characteristics,
        )

    def multi_speech(self, requests: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Run several requests, collecting per-request success or error.

        Each request is a dict of ``synthesize`` keyword arguments plus an
        optional ``id``. A request with ``reference_audio`` is cloned.
        """
        logger.info("Processing %d speech requests", len(requests))
        results = []

        for request in requests:
            request_id = request.get("id") or f"speech_{len(results)}"
            try:
                if request.get("reference_audio"):
                    result = self.clone_voice(
                        request.get("reference_audio"),
                        request.get("reference_text"),
                        request.get("text"),
                        speed=request.get("speed"),
                    )
                else:
                    result = self.synthesize(
                        request.get("text", ""),
                        voice=request.get("voice", "default"),
                        speed=request.get("speed"),
                        emotion=request.get("emotion", "neutral"),
                    )
                results.append({"id": request_id, "success": True, "result": result})
            except (SynthesisError, ModelNotFoundError) as e:
                results.append({"id": request_id, "success": False, "error": str(e)})

        return results

    def save_wav(self, result: SynthesisResult, path: Union[str, Path]) -> Path:
        """Write a result's audio to a WAV file."""
        return save_audio(path, result.audio, result.sample_rate)
