"""
Thai TTS Studio - Gradio Web Interface

Main application entry point for the web UI.
"""

import logging
from typing import Optional

import gradio as gr

from thai_tts.config import Config
from thai_tts.ui.studio import Studio
from thai_tts.ui.tab_generate import create_generate_tab
from thai_tts.ui.tab_models import create_models_tab
from thai_tts.ui.tab_train import create_train_tab

logger = logging.getLogger(__name__)


def create_app(studio: Optional[Studio] = None) -> gr.Blocks:
    """
    Create the main Gradio application.

    Args:
        studio: Shared application objects. Built from the saved
            settings when omitted.

    Returns:
        gr.Blocks: The Gradio application.
    """
    studio = studio or Studio()

    with gr.Blocks(
        title="Thai TTS Studio",
        theme=gr.themes.Soft(
            primary_hue="blue",
            secondary_hue="slate",
        ),
    ) as app:
        gr.Markdown(
            """
            # Thai TTS Studio
            Train custom voices and generate speech
            """
        )

        with gr.Tabs():
            with gr.Tab("Generate", id="generate"):
                create_generate_tab(studio)

            with gr.Tab("Train", id="train"):
                create_train_tab(studio)

            with gr.Tab("Models", id="models"):
                create_models_tab(studio)

    return app


def launch(
    share: bool = False,
    server_port: int = 7860,
    server_name: str = "127.0.0.1",
    debug: bool = False,
    config: Optional[Config] = None,
) -> None:
    """
    Launch the Gradio application.

    Args:
        share: Create a public link.
        server_port: Port to run on.
        server_name: Server hostname.
        debug: Enable debug mode.
        config: Application configuration (default: loaded from settings).
    """
    studio = Studio(config)
    studio.config.ensure_directories()
    loaded = studio.load_saved_models()
    logger.info("Loaded %d saved voice models", loaded)

    app = create_app(studio)
    app.launch(
        share=share,
        server_port=server_port,
        server_name=server_name,
        debug=debug,
        show_error=True,
        allowed_paths=[str(studio.config.output_dir)],
    )


if __name__ == "__main__":
    launch(debug=True)
