#!/usr/bin/env python3
"""
Thai TTS Studio - Command Line Interface

Train custom voices from a dataset directory, list voices, synthesize
text and launch the web UI.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from tqdm import tqdm

from thai_tts.config import Config
from thai_tts.exceptions import ThaiTTSError


def positive_int(value: str) -> int:
    """argparse type for integers >= 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def positive_float(value: str) -> float:
    """argparse type for floats > 0."""
    number = float(value)
    if not number > 0:
        raise argparse.ArgumentTypeError(f"must be a positive number, got {value}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="thai_tts",
        description="Thai TTS Studio - train voices and synthesize speech",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  # Train with default settings
  thai_tts train --dataset /path/to/dataset

  # Train with custom parameters
  thai_tts train --dataset /path/to/dataset --name my_voice --epochs 100 --batch-size 16

  # Save a model summary next to the trained model
  thai_tts train -d ./uploaded_files -n thai_voice -e 75 --summary trained_model_summary.json

  # Synthesize with a saved trained voice
  thai_tts synthesize "สวัสดีครับ" --model trained_models/thai_voice_1a2b3c4d -o hello.wav

  # List available voices
  thai_tts voices

  # Launch web UI
  thai_tts ui --port 8080
        """,
    )
    parser.add_argument(
        "--verbose", "-V",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--app-dir",
        type=str,
        default=None,
        help="Application directory holding settings.json (default: ~/thai_tts_studio)",
    )

    subparsers = parser.add_subparsers(dest="command")

    # train
    train = subparsers.add_parser("train", help="Train a voice from a dataset directory")
    train.add_argument(
        "--dataset", "-d",
        type=str,
        required=True,
        help="Path to dataset directory containing metadata.csv",
    )
    train.add_argument(
        "--name", "-n",
        type=str,
        default="trained_voice",
        help="Voice model name (default: trained_voice)",
    )
    train.add_argument(
        "--epochs", "-e",
        type=positive_int,
        default=None,
        help="Number of training epochs (default: from settings, 100)",
    )
    train.add_argument(
        "--batch-size", "-b",
        type=positive_int,
        default=None,
        help="Batch size (default: from settings, 8)",
    )
    train.add_argument(
        "--learning-rate", "-lr",
        type=positive_float,
        default=None,
        help="Learning rate (default: from settings, 0.0001)",
    )
    train.add_argument(
        "--output", "-o",
        type=str,
        default="./trained_models",
        help="Output directory for trained models (default: ./trained_models)",
    )
    train.add_argument(
        "--summary",
        type=str,
        default=None,
        help="Also write a JSON model summary to this file",
    )
    train.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for a reproducible train/validation split",
    )
    train.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress progress output",
    )

    # voices
    voices = subparsers.add_parser("voices", help="List available voices")
    voices.add_argument(
        "--model",
        type=str,
        action="append",
        default=[],
        help="Saved model directory or summary file to include (repeatable)",
    )

    # synthesize
    synth = subparsers.add_parser("synthesize", help="Synthesize text to a WAV file")
    synth.add_argument("text", type=str, help="Text to synthesize")
    synth.add_argument(
        "--voice", "-v",
        type=str,
        default=None,
        help="Voice id (default: default, or the loaded trained model)",
    )
    synth.add_argument(
        "--model",
        type=str,
        default=None,
        help="Saved model directory or summary file to synthesize with",
    )
    synth.add_argument(
        "--speed", "-s",
        type=positive_float,
        default=1.0,
        help="Speaking speed 0.5-2.0 (default: 1.0)",
    )
    synth.add_argument("--ref-audio", type=str, default=None, help="Reference audio for voice cloning")
    synth.add_argument("--ref-text", type=str, default=None, help="Transcript of the reference audio")
    synth.add_argument(
        "--output", "-o",
        type=str,
        default="output.wav",
        help="Output WAV path (default: output.wav)",
    )

    # ui
    ui = subparsers.add_parser("ui", help="Launch the web UI")
    ui.add_argument(
        "--port", "-p",
        type=int,
        default=7860,
        help="Port for web UI (default: 7860)",
    )
    ui.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)",
    )

    return parser


def load_config(args: argparse.Namespace) -> Config:
    if args.app_dir:
        return Config.load(app_dir=Path(args.app_dir))
    return Config.load()


def run_train(args: argparse.Namespace, config: Config) -> int:
    """Prepare a dataset, train a voice and save it."""
    from thai_tts.core.pipeline import VoiceTrainingPipeline
    from thai_tts.models.store import save_trained_model, write_model_summary
    from thai_tts.training.events import EventKind

    if args.seed is not None:
        config.training.seed = args.seed

    defaults = config.training
    epochs = args.epochs if args.epochs is not None else defaults.epochs
    batch_size = args.batch_size if args.batch_size is not None else defaults.batch_size
    learning_rate = args.learning_rate if args.learning_rate is not None else defaults.learning_rate

    pipeline = VoiceTrainingPipeline(config=config)

    bars = {}

    def on_preprocess(event):
        bar = bars.get("preprocess")
        if bar is None:
            bar = bars["preprocess"] = tqdm(total=event.total, desc="Preprocessing", unit="file")
        bar.n = event.current
        bar.refresh()

    def on_epoch(event):
        bar = bars.get("train")
        if bar is None:
            bar = bars["train"] = tqdm(total=event.total_epochs, desc="Training", unit="epoch")
        bar.set_postfix(loss=f"{event.loss:.6f}", acc=f"{event.accuracy:.4f}")
        bar.update(1)

    if not args.quiet:
        pipeline.subscribe(EventKind.PREPROCESSING_PROGRESS, on_preprocess)
        pipeline.subscribe(EventKind.TRAINING_PROGRESS, on_epoch)

        print("Starting voice training...")
        print(f"Dataset: {args.dataset}")
        print(f"Voice Name: {args.name}")
        print(f"Epochs: {epochs}")
        print(f"Batch Size: {batch_size}")
        print(f"Learning Rate: {learning_rate}")
        print()

    try:
        info = pipeline.prepare_dataset(args.dataset)
        if "preprocess" in bars:
            bars["preprocess"].close()
        if not args.quiet:
            print(f"Dataset prepared: {info.training_samples} training, {info.validation_samples} validation")

        model = pipeline.train_voice(
            voice_name=args.name,
            epochs=epochs,
            batch_size=batch_size,
            learning_rate=learning_rate,
        )
    except ThaiTTSError as e:
        print(f"\nError: {e}")
        return 1
    finally:
        for bar in bars.values():
            bar.close()

    model_dir = save_trained_model(model, args.output)
    if args.summary:
        write_model_summary(model, args.summary)

    if not args.quiet:
        history = model.training_history
        print("\n" + "=" * 50)
        print("TRAINING COMPLETE")
        print("=" * 50)
        print(f"Model ID: {model.id}")
        if history.final_loss is not None:
            print(f"Final Loss: {history.final_loss:.6f}")
        print(f"Validation Loss: {history.validation_loss:.6f}")
        print(f"Training Time: {history.training_time:.1f}s")
        print(f"Training Samples: {model.metadata.training_samples}")
        print(f"Validation Samples: {model.metadata.validation_samples}")
        print(f"\nModel saved to: {model_dir}")
        if args.summary:
            print(f"Model summary saved to: {args.summary}")

    return 0


def _engine_with_models(config: Config, model_paths: List[str]):
    from thai_tts.core.synthesis import SynthesisEngine
    from thai_tts.models.registry import ModelRegistry

    registry = ModelRegistry()
    loaded = [registry.load_summary(path) for path in model_paths]
    return SynthesisEngine(registry=registry, config=config.synthesis), loaded


def list_voices(args: argparse.Namespace, config: Config) -> int:
    """List available voices."""
    try:
        engine, _ = _engine_with_models(config, args.model)
    except ThaiTTSError as e:
        print(f"Error: {e}")
        return 1

    voices = engine.list_voices()

    print("\n" + "=" * 50)
    print("Available Voices")
    print("=" * 50)

    print("\nDefault voices:")
    print("-" * 40)
    for voice in voices["default"]:
        print(f"  • {voice['id']:<10} {voice['name']} ({voice['lang']})")

    print("\nTrained voices:")
    print("-" * 40)
    if voices["trained"]:
        for voice in voices["trained"]:
            print(f"  • {voice['id']} ({voice['name']}, created {voice['createdAt'][:10]})")
    else:
        print("  (No trained voices loaded)")
        print("  Pass --model <dir> to include a saved voice")
    return 0


def run_synthesize(args: argparse.Namespace, config: Config) -> int:
    """Synthesize text to a WAV file."""
    try:
        engine, loaded = _engine_with_models(config, [args.model] if args.model else [])
        voice = args.voice or (loaded[0].id if loaded else "default")
        result = engine.synthesize(
            args.text,
            voice=voice,
            speed=args.speed,
            reference_audio=args.ref_audio,
            reference_text=args.ref_text,
        )
        path = engine.save_wav(result, args.output)
    except ThaiTTSError as e:
        print(f"Error: {e}")
        return 1

    print(f"Synthesized {result.duration:.2f}s with voice '{result.voice}': {path}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 1

    try:
        config = load_config(args)
    except ThaiTTSError as e:
        print(f"Error: {e}")
        return 1

    if args.command == "train":
        return run_train(args, config)
    if args.command == "voices":
        return list_voices(args, config)
    if args.command == "synthesize":
        return run_synthesize(args, config)
    if args.command == "ui":
        from thai_tts.ui import launch
        print("Launching Thai TTS Studio Web UI...")
        launch(server_port=args.port, server_name=args.host, config=config)
        return 0

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
