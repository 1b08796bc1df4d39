"""
Utility modules for Thai TTS Studio.
"""

from thai_tts.utils.audio import format_duration, save_audio, tone

__all__ = [
    "format_duration",
    "save_audio",
    "tone",
]
