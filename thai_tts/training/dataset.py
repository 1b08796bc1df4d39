"""
Dataset loading for Thai TTS Studio.

Handles:
- Parsing the metadata.csv manifest (transcripts may contain commas)
- Resolving each row's audio file inside the dataset directory
- Dropping malformed rows and rows without audio
"""

import logging
import os
from pathlib import Path
from typing import List, Optional, Union
from dataclasses import dataclass, replace

from thai_tts.exceptions import DatasetLoadError

logger = logging.getLogger(__name__)

MANIFEST_NAME = "metadata.csv"

# file_name + text + the four trailing label columns
MIN_FIELDS = 6


@dataclass(frozen=True)
class DatasetRecord:
    """One manifest row with its resolved audio path."""

    file_name: str
    text: str
    emotion_label: str
    pitch: str
    duration: str
    energy: str
    full_path: Optional[Path] = None


def parse_manifest_line(line: str) -> Optional[DatasetRecord]:
    """
    Parse one manifest row.

    The last four fields are emotion label, pitch, duration and energy; the
    first field is the file name and everything in between is rejoined as
    the transcript.

    Args:
        line: A single line from the manifest (without the header).

    Returns:
        DatasetRecord without a resolved path, or None if the row is malformed.

    Examples:
        >>> parse_manifest_line("a.wav,hello, world,positive,warm,2.5,high").text
        'hello, world'
    """
    parts = line.rstrip("\r\n").split(",")
    if len(parts) < MIN_FIELDS:
        return None

    return DatasetRecord(
        file_name=parts[0].strip(),
        text=",".join(parts[1:-4]),
        emotion_label=parts[-4].strip(),
        pitch=parts[-3].strip(),
        duration=parts[-2].strip(),
        energy=parts[-1].strip(),
    )


class DatasetLoader:
    """
    Load training records from a dataset directory.

    The directory holds a ``metadata.csv`` manifest and the audio files it
    references.
    """

    def __init__(self, manifest_name: str = MANIFEST_NAME):
        self.manifest_name = manifest_name

    def resolve_audio_path(self, dataset_path: Path, file_name: str) -> Optional[Path]:
        """
        Find the audio file for a manifest entry.

        Tries ``dataset_path/basename(file_name)`` first, then
        ``dataset_path/file_name`` verbatim.
        """
        candidates = [
            dataset_path / os.path.basename(file_name),
            dataset_path / file_name,
        ]
        for candidate in candidates:
            if candidate.is_file():
                return candidate.resolve()

        logger.warning(
            "Audio file not found: %s (tried %s)",
            file_name,
            ", ".join(str(c) for c in candidates),
        )
        return None

    def load(self, dataset_path: Union[str, Path]) -> List[DatasetRecord]:
        """
        Load all valid records from a dataset directory.

        Args:
            dataset_path: Directory containing the manifest and audio files.

        Returns:
            Records whose audio file exists on disk, in manifest order.

        Raises:
            DatasetLoadError: If the manifest cannot be read.
        """
        dataset_path = Path(dataset_path)
        manifest_path = dataset_path / self.manifest_name
        logger.info("Loading dataset from: %s", dataset_path)

        try:
            content = manifest_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DatasetLoadError(f"Failed to load dataset: {manifest_path}: {e}") from e

        lines = [line for line in content.splitlines() if line.strip()]

        parsed = []
        for line_number, line in enumerate(lines[1:], start=2):
            record = parse_manifest_line(line)
            if record is None:
                logger.warning("Skipping malformed manifest row %d: %r", line_number, line)
                continue
            if not record.file_name or not record.text:
                logger.warning("Skipping manifest row %d with empty file name or text", line_number)
                continue
            parsed.append(record)

        records = []
        for record in parsed:
            audio_path = self.resolve_audio_path(dataset_path, record.file_name)
            if audio_path is not None:
                records.append(replace(record, full_path=audio_path))

        logger.info(
            "Loaded %d records from %s, %d with valid audio files",
            len(parsed),
            self.manifest_name,
            len(records),
        )
        return records
