"""
Train Tab for Thai TTS Studio.

Provides UI for:
- Preparing a dataset directory (metadata.csv + audio files)
- Starting and stopping a training run
"""

import gradio as gr
from typing import Any, Dict

from thai_tts.exceptions import ThaiTTSError
from thai_tts.models.store import save_trained_model
from thai_tts.training.events import EventKind
from thai_tts.ui.studio import Studio


def prepare_dataset(studio: Studio, dataset_path: str) -> str:
    """Load, preprocess and split a dataset."""
    if not dataset_path or not dataset_path.strip():
        return "**Error:** Please enter a dataset directory"

    try:
        info = studio.pipeline.prepare_dataset(dataset_path.strip())
    except ThaiTTSError as e:
        return f"**Could not load dataset:**\n\n{e}"

    return f"""
**Dataset prepared**

- Total samples: {info.total_samples}
- Training samples: {info.training_samples}
- Validation samples: {info.validation_samples}
"""


def run_training(
    studio: Studio,
    voice_name: str,
    epochs: float,
    batch_size: float,
    progress=gr.Progress()
) -> str:
    """Run the training process with progress updates."""
    voice_name = (voice_name or "").strip().replace(" ", "_")
    if not voice_name:
        return "**Error:** Please enter a voice model name"

    def on_epoch(event):
        progress(
            event.progress / 100,
            desc=f"Epoch {event.epoch}/{event.total_epochs} | Loss: {event.loss:.4f}",
        )

    unsubscribe = studio.pipeline.subscribe(EventKind.TRAINING_PROGRESS, on_epoch)
    try:
        model = studio.pipeline.train_voice(
            voice_name=voice_name,
            epochs=int(epochs),
            batch_size=int(batch_size),
        )
    except ThaiTTSError as e:
        return f"**Training failed:**\n\n{e}"
    finally:
        unsubscribe()

    model_dir = save_trained_model(model, studio.config.trained_models_dir)
    status = "stopped early" if model.metadata.cancelled else "complete"
    final_loss = model.training_history.final_loss

    return f"""
**Training {status}!**

- Voice Model: **{model.name}**
- Model ID: `{model.id}`
- Epochs: {model.metadata.epochs}
- Final Loss: {f"{final_loss:.4f}" if final_loss is not None else "n/a"}
- Validation Loss: {model.training_history.validation_loss:.4f}
- Saved to: `{model_dir}`

Your voice is now available in the **Models** and **Generate** tabs.
"""


def stop_training(studio: Studio) -> str:
    """Stop the current training process."""
    if studio.pipeline.stop_training():
        return "Stopping training after the current epoch..."
    return "No training in progress"


def create_train_tab(studio: Studio) -> Dict[str, Any]:
    """
    Create the Train tab UI components.

    Returns:
        Dictionary of component references.
    """
    components = {}
    defaults = studio.config.training

    with gr.Row():
        with gr.Column():
            gr.Markdown("### 1. Prepare Dataset")
            dataset_path = gr.Textbox(
                label="Dataset Directory",
                placeholder="/path/to/dataset (contains metadata.csv)",
            )
            prepare_btn = gr.Button("Prepare Dataset")
            dataset_status = gr.Markdown("")

            gr.Markdown("### 2. Train Voice")
            voice_name = gr.Textbox(
                label="Voice Model Name",
                placeholder="e.g., thai_voice",
            )
            epochs = gr.Slider(
                minimum=1,
                maximum=500,
                value=defaults.epochs,
                step=1,
                label="Epochs",
            )
            batch_size = gr.Slider(
                minimum=1,
                maximum=64,
                value=defaults.batch_size,
                step=1,
                label="Batch Size",
            )

            with gr.Row():
                train_btn = gr.Button("Start Training", variant="primary")
                stop_btn = gr.Button("Stop Training", variant="stop")

        with gr.Column():
            training_status = gr.Markdown(
                """
                **Status:** Ready

                Prepare a dataset, then start training.

                **Dataset format:** `metadata.csv` with a header row and
                `file_name,text,...,emotion_label,pitch,duration,energy` rows.
                """
            )

    prepare_btn.click(
        fn=lambda path: prepare_dataset(studio, path),
        inputs=[dataset_path],
        outputs=[dataset_status],
    )

    def start(name, n_epochs, n_batch, progress=gr.Progress()):
        return run_training(studio, name, n_epochs, n_batch, progress=progress)

    train_btn.click(
        fn=start,
        inputs=[voice_name, epochs, batch_size],
        outputs=[training_status],
    )

    stop_btn.click(
        fn=lambda: stop_training(studio),
        outputs=[training_status],
    )

    components.update({
        "dataset_path": dataset_path,
        "dataset_status": dataset_status,
        "voice_name": voice_name,
        "epochs": epochs,
        "batch_size": batch_size,
        "training_status": training_status,
        "train_btn": train_btn,
        "stop_btn": stop_btn,
    })
    return components
