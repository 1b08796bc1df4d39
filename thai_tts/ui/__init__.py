"""
UI modules for Thai TTS Studio.

Gradio-based web interface with:
- Generate tab: Text input, voice selection, cloning, preview
- Train tab: Dataset preparation, training with progress, stop
- Models tab: Trained voice inspection and removal
"""

from thai_tts.ui.gradio_app import create_app, launch
from thai_tts.ui.studio import Studio
from thai_tts.ui.tab_generate import create_generate_tab
from thai_tts.ui.tab_models import create_models_tab
from thai_tts.ui.tab_train import create_train_tab

__all__ = [
    "create_app",
    "launch",
    "Studio",
    "create_generate_tab",
    "create_models_tab",
    "create_train_tab",
]
