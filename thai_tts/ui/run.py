#!/usr/bin/env python3
"""
Launch script for Thai TTS Studio UI.

Usage:
    python -m thai_tts.ui.run
    # or
    thai_tts_ui
"""

import argparse
import logging
from pathlib import Path

from thai_tts.config import Config


def main():
    parser = argparse.ArgumentParser(
        description="Launch Thai TTS Studio Web UI"
    )
    parser.add_argument(
        "--port", "-p",
        type=int,
        default=7860,
        help="Port to run on (default: 7860)"
    )
    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)"
    )
    parser.add_argument(
        "--share",
        action="store_true",
        help="Create a public link"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode"
    )
    parser.add_argument(
        "--app-dir",
        type=str,
        default=None,
        help="Application directory holding settings.json"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("=" * 50)
    print("Thai TTS Studio")
    print("=" * 50)
    print(f"Starting server on http://{args.host}:{args.port}")
    if args.share:
        print("Creating public link...")
    print()

    from thai_tts.ui import launch

    config = Config.load(app_dir=Path(args.app_dir)) if args.app_dir else Config.load()
    launch(
        server_port=args.port,
        server_name=args.host,
        share=args.share,
        debug=args.debug,
        config=config,
    )


if __name__ == "__main__":
    main()
