"""
Models Tab for Thai TTS Studio.

Provides UI for:
- Viewing trained voice models
- Inspecting model details
- Deleting models from the registry
"""

import gradio as gr
from typing import Any, Dict, List, Tuple

from thai_tts.models.store import model_summary
from thai_tts.ui.studio import Studio
from thai_tts.utils.audio import format_duration


def list_model_ids(studio: Studio) -> List[str]:
    return [model.id for model in studio.pipeline.list_models()]


def get_model_info(studio: Studio, model_id: str) -> Tuple[str, Dict[str, Any]]:
    """Get a markdown description and the JSON summary of a model."""
    if not model_id:
        return "Select a model to view details", {}

    model = studio.pipeline.get_model(model_id)
    if model is None:
        return "Model not found", {}

    characteristics = model.voice_characteristics
    history = model.training_history
    emotions = ", ".join(
        f"{emotion} {share:.0%}"
        for emotion, share in sorted(characteristics.emotion_distribution.items())
    )

    info = f"""
### {model.name}

**ID:** `{model.id}`
**Created:** {model.created_at.isoformat(timespec="seconds")}
**Language:** {characteristics.language}

**Training:** {model.metadata.epochs} epochs in {format_duration(history.training_time)}
**Samples:** {model.metadata.training_samples} training / {model.metadata.validation_samples} validation

**Average pitch:** {characteristics.avg_pitch:.1f} Hz
**Average energy:** {characteristics.avg_energy:.2f}
**Emotions:** {emotions or "n/a"}
"""
    if model.metadata.cancelled:
        info += "\n*Training was stopped early.*\n"

    return info, model_summary(model)


def delete_model(studio: Studio, model_id: str) -> Tuple[str, Any]:
    """Delete a model from the registry."""
    if not model_id:
        return "No model selected", gr.update(choices=list_model_ids(studio))

    if studio.pipeline.delete_model(model_id):
        message = f"Deleted: {model_id}"
    else:
        message = f"Model not found: {model_id}"
    return message, gr.update(choices=list_model_ids(studio), value=None)


def create_models_tab(studio: Studio) -> Dict[str, Any]:
    """
    Create the Models tab UI components.

    Returns:
        Dictionary of component references.
    """
    with gr.Row():
        with gr.Column(scale=1):
            model_dropdown = gr.Dropdown(
                choices=list_model_ids(studio),
                label="Trained Voices",
                interactive=True,
            )
            with gr.Row():
                refresh_btn = gr.Button("Refresh", size="sm")
                delete_btn = gr.Button("Delete", variant="stop", size="sm")
            action_status = gr.Markdown("")

        with gr.Column(scale=2):
            model_info = gr.Markdown("Select a model to view details")
            model_json = gr.JSON(label="Model Summary")

    refresh_btn.click(
        fn=lambda: gr.update(choices=list_model_ids(studio)),
        outputs=[model_dropdown],
    )

    model_dropdown.change(
        fn=lambda model_id: get_model_info(studio, model_id),
        inputs=[model_dropdown],
        outputs=[model_info, model_json],
    )

    delete_btn.click(
        fn=lambda model_id: delete_model(studio, model_id),
        inputs=[model_dropdown],
        outputs=[action_status, model_dropdown],
    )

    return {
        "model_dropdown": model_dropdown,
        "model_info": model_info,
        "model_json": model_json,
        "action_status": action_status,
    }
