"""
Generate Tab for Thai TTS Studio.

Text input, voice selection, optional reference clip for cloning, and
audio preview.
"""

import gradio as gr
import tempfile
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from thai_tts.exceptions import ThaiTTSError
from thai_tts.ui.studio import Studio


def voice_choices(studio: Studio) -> List[Tuple[str, str]]:
    """(label, id) pairs for the voice dropdown."""
    voices = studio.engine.list_voices()
    choices = [(v["name"], v["id"]) for v in voices["default"]]
    choices += [(f"{v['name']} ({v['id']})", v["id"]) for v in voices["trained"]]
    return choices


def generate_speech(
    studio: Studio,
    text: str,
    voice: str,
    speed: float,
    reference_audio: Optional[str],
    reference_text: str,
) -> Tuple[Optional[str], str]:
    """Synthesize text and return (wav path, status markdown)."""
    try:
        result = studio.engine.synthesize(
            text,
            voice=voice or "default",
            speed=speed,
            reference_audio=reference_audio,
            reference_text=reference_text or None,
        )
        output_path = Path(tempfile.gettempdir()) / f"thai_tts_{uuid.uuid4().hex[:8]}.wav"
        studio.engine.save_wav(result, output_path)
    except ThaiTTSError as e:
        return None, f"**Error:** {e}"

    status = f"Generated {result.duration:.2f}s of audio with **{result.voice}**"
    if result.voice_characteristics:
        pitch = result.voice_characteristics.get("avgPitch", result.voice_characteristics.get("pitch"))
        if pitch is not None:
            status += f" (pitch {pitch:.0f} Hz)"
    return str(output_path), status


def create_generate_tab(studio: Studio) -> Dict[str, Any]:
    """
    Create the Generate tab UI components.

    Returns:
        Dictionary of component references.
    """
    with gr.Row():
        with gr.Column(scale=2):
            text_input = gr.Textbox(
                label="Text to Synthesize",
                placeholder="Enter text here...",
                lines=4,
            )
            with gr.Accordion("Voice Cloning (optional)", open=False):
                reference_audio = gr.Audio(
                    label="Reference Audio",
                    type="filepath",
                )
                reference_text = gr.Textbox(
                    label="Reference Text",
                    placeholder="Enter the text spoken in the reference audio...",
                    lines=2,
                )

        with gr.Column(scale=1):
            voice_dropdown = gr.Dropdown(
                choices=voice_choices(studio),
                value="default",
                label="Voice",
            )
            refresh_btn = gr.Button("Refresh Voices", size="sm")
            speed = gr.Slider(
                minimum=0.5,
                maximum=2.0,
                value=studio.config.synthesis.speed,
                step=0.1,
                label="Speed",
            )
            generate_btn = gr.Button("Generate", variant="primary")

    audio_output = gr.Audio(label="Output", type="filepath")
    status = gr.Markdown("")

    refresh_btn.click(
        fn=lambda: gr.update(choices=voice_choices(studio)),
        outputs=[voice_dropdown],
    )

    generate_btn.click(
        fn=lambda *args: generate_speech(studio, *args),
        inputs=[text_input, voice_dropdown, speed, reference_audio, reference_text],
        outputs=[audio_output, status],
    )

    return {
        "text_input": text_input,
        "voice_dropdown": voice_dropdown,
        "speed": speed,
        "audio_output": audio_output,
        "status": status,
    }
