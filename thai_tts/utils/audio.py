"""
Audio utilities for Thai TTS Studio.

Tone generation for placeholder synthesis, WAV output and formatting.
"""

from pathlib import Path
from typing import Union

import numpy as np
import soundfile as sf

from thai_tts.exceptions import SynthesisError


def tone(
    duration: float,
    frequency: float,
    sample_rate: int = 24000,
    amplitude: float = 0.3,
    decay: float = 0.0,
    vibrato: float = 0.0,
) -> np.ndarray:
    """
    Generate a sine tone.

    Args:
        duration: Length in seconds.
        frequency: Base frequency in Hz.
        sample_rate: Output sample rate.
        amplitude: Peak amplitude.
        decay: Exponential envelope rate; 0 keeps a flat envelope.
        vibrato: Relative pitch wobble, applied as ``1 + vibrato * sin(0.5 t)``.

    Returns:
        float32 samples.
    """
    sample_count = max(int(duration * sample_rate), 0)
    t = np.arange(sample_count, dtype=np.float64) / sample_rate

    freq = frequency * (1 + vibrato * np.sin(t * 0.5)) if vibrato else frequency
    audio = np.sin(2 * np.pi * freq * t) * amplitude
    if decay:
        audio *= np.exp(-t * decay)

    return audio.astype(np.float32)


def save_audio(
    file_path: Union[str, Path],
    audio_data: np.ndarray,
    sample_rate: int = 24000,
    subtype: str = "PCM_16"
) -> Path:
    """
    Save audio data to a file.

    Args:
        file_path: Output file path.
        audio_data: Audio samples as numpy array.
        sample_rate: Sample rate.
        subtype: Audio subtype (PCM_16 for 16-bit WAV).

    Returns:
        The written path.

    Raises:
        SynthesisError: If the file cannot be written.
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    # Normalize to prevent clipping
    peak = np.max(np.abs(audio_data)) if len(audio_data) else 0.0
    if peak > 1.0:
        audio_data = audio_data / peak * 0.99

    try:
        sf.write(str(file_path), audio_data, sample_rate, subtype=subtype)
    except (OSError, RuntimeError, ValueError) as e:
        raise SynthesisError(f"Could not write audio to {file_path}: {e}") from e
    return file_path


def format_duration(seconds: float) -> str:
    """
    Format duration as HH:MM:SS or MM:SS.

    Args:
        seconds: Duration in seconds.

    Returns:
        Formatted string.
    """
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    else:
        return f"{minutes}:{secs:02d}"
